"""Tests for XML entity escaping over bytes."""

import unittest

from xmlattrs import Attribute, EscapeError, escape, unescape


class TestEscape(unittest.TestCase):
    def test_nothing_to_escape_returns_input(self):
        raw = b"plain text"
        assert escape(raw) is raw

    def test_all_markup_characters(self):
        assert escape(b"<a href=\"x\">&'") == b"&lt;a href=&quot;x&quot;&gt;&amp;&apos;"

    def test_memoryview_input(self):
        assert escape(memoryview(b"a & b")) == b"a &amp; b"

    def test_already_escaped_text_is_escaped_again(self):
        assert escape(b"&amp;") == b"&amp;amp;"


class TestUnescape(unittest.TestCase):
    def test_no_entities_returns_input(self):
        raw = memoryview(b"no entities here")
        assert unescape(raw) is raw

    def test_named_entities(self):
        assert unescape(b"&lt;&gt;&amp;&apos;&quot;") == b"<>&'\""

    def test_numeric_entities(self):
        assert unescape(b"&#60;&#x3C;&#x3c;") == b"<<<"

    def test_numeric_entity_is_utf8(self):
        assert unescape(b"caf&#233;") == "café".encode("utf-8")
        assert unescape(b"&#x1F600;") == "\U0001f600".encode("utf-8")

    def test_text_around_entities(self):
        assert unescape(b"val &amp; more") == b"val & more"
        assert unescape(b"&amp;start and end&amp;") == b"&start and end&"

    def test_round_trip(self):
        for text in ("val & more", "<tag attr='1'>", '"quoted"', "", "a&b&c", "&amp;"):
            raw = text.encode("utf-8")
            assert unescape(escape(raw)) == raw


class TestUnescapeErrors(unittest.TestCase):
    def _error(self, raw):
        with self.assertRaises(EscapeError) as ctx:
            unescape(raw)
        return ctx.exception

    def test_unterminated(self):
        error = self._error(b"a &amp b")
        assert error.code == EscapeError.UNTERMINATED_ENTITY
        assert error.position == 2

    def test_unrecognized(self):
        error = self._error(b"x &nbsp; y")
        assert error.code == EscapeError.UNRECOGNIZED_ENTITY
        assert error.position == 2

    def test_empty_name(self):
        assert self._error(b"&;").code == EscapeError.UNRECOGNIZED_ENTITY

    def test_invalid_decimal(self):
        assert self._error(b"&#12a;").code == EscapeError.INVALID_DECIMAL
        assert self._error(b"&#;").code == EscapeError.INVALID_DECIMAL

    def test_invalid_hexadecimal(self):
        assert self._error(b"&#xZZ;").code == EscapeError.INVALID_HEXADECIMAL
        assert self._error(b"&#x;").code == EscapeError.INVALID_HEXADECIMAL

    def test_invalid_codepoints(self):
        for raw in (b"&#0;", b"&#xD800;", b"&#x110000;"):
            assert self._error(raw).code == EscapeError.INVALID_CODEPOINT

    def test_error_position_after_valid_entities(self):
        assert self._error(b"&lt;&lt;&bad;").position == 8

    def test_zero_padded_references(self):
        assert unescape(b"&#" + b"0" * 4400 + b"65;") == b"A"
        assert unescape(b"&#x" + b"0" * 4400 + b"41;") == b"A"
        assert unescape(b"&#00001114111;") == "\U0010ffff".encode("utf-8")

    def test_overlong_references(self):
        for raw in (b"&#" + b"9" * 4400 + b";", b"&#11141110;", b"&#x" + b"f" * 5000 + b";", b"&#x0110000;"):
            assert self._error(raw).code == EscapeError.INVALID_CODEPOINT

    def test_overlong_reference_in_attribute(self):
        attr = Attribute.from_bytes(b"a", b"x&#" + b"1" * 5000 + b";")
        with self.assertRaises(EscapeError) as ctx:
            attr.resolve_escapes()
        assert ctx.exception.position == 1
