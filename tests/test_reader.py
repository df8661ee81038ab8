"""Tests for the value decoder and encoding detection."""

import codecs
import unittest

from xmlattrs import Decoder, DecodingFault


class TestDecoder(unittest.TestCase):
    def test_default_is_utf8(self):
        assert Decoder().encoding == "utf-8"

    def test_encoding_name_is_normalized(self):
        assert Decoder(" UTF-8 ").encoding == "utf-8"

    def test_unknown_encoding(self):
        with self.assertRaises(LookupError):
            Decoder("no-such-encoding")

    def test_decode_utf8(self):
        assert Decoder().decode(b"caf\xc3\xa9") == "café"

    def test_decode_latin1(self):
        assert Decoder("latin-1").decode(b"caf\xe9") == "café"

    def test_decode_memoryview(self):
        assert Decoder().decode(memoryview(b"abc")[1:]) == "bc"

    def test_bom_is_discarded(self):
        assert Decoder().decode(codecs.BOM_UTF8 + b"x") == "x"

    def test_bom_can_be_kept(self):
        assert Decoder(discard_bom=False).decode(codecs.BOM_UTF8 + b"x") == "\ufeffx"

    def test_invalid_bytes(self):
        with self.assertRaises(DecodingFault) as ctx:
            Decoder().decode(b"ab\xff")
        assert ctx.exception.position == 2
        assert ctx.exception.encoding == "utf-8"

    def test_repr(self):
        assert repr(Decoder()) == "Decoder('utf-8')"


class TestDetection(unittest.TestCase):
    def test_utf16_bom(self):
        document = codecs.BOM_UTF16_LE + "<a/>".encode("utf-16-le")
        assert Decoder.detect(document).encoding == "utf-16-le"

    def test_utf32_bom_is_not_utf16(self):
        document = codecs.BOM_UTF32_LE + "<a/>".encode("utf-32-le")
        assert Decoder.detect(document).encoding == "utf-32-le"

    def test_utf8_bom(self):
        assert Decoder.detect(codecs.BOM_UTF8 + b"<a/>").encoding == "utf-8"

    def test_xml_declaration(self):
        document = b'<?xml version="1.0" encoding="ISO-8859-1"?><a b="caf\xe9"/>'
        decoder = Decoder.detect(document)
        assert decoder.encoding == "iso-8859-1"
        assert decoder.decode(b"caf\xe9") == "café"

    def test_single_quoted_declaration(self):
        document = b"<?xml version='1.0' encoding='windows-1252'?><a/>"
        assert Decoder.detect(document).encoding == "windows-1252"

    def test_empty_document(self):
        assert Decoder.detect(b"").encoding == "utf-8"

    def test_unknown_declared_encoding_falls_back_to_guess(self):
        document = b'<?xml version="1.0" encoding="bogus-enc"?><a b="1"/>'
        decoder = Decoder.detect(document)
        assert decoder.decode(document) == document.decode("ascii")

    def test_detect_passes_options(self):
        assert Decoder.detect(b"<a/>", discard_bom=False).discard_bom is False
