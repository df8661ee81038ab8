import unittest

from xmlattrs.smallset import QUOTES, WHITESPACE, SmallByteSet


class TestSmallByteSet(unittest.TestCase):
    def test_membership(self):
        assert ord(" ") in WHITESPACE
        assert ord("\n") in WHITESPACE
        assert ord("\f") not in WHITESPACE
        assert ord("'") in QUOTES
        assert ord("`") not in QUOTES

    def test_non_ascii_is_never_a_member(self):
        assert 0xA0 not in WHITESPACE

    def test_rejects_non_ascii_members(self):
        with self.assertRaises(ValueError):
            SmallByteSet(b"\xa0")
