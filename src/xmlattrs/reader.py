"""Text decoding for attribute values.

The decoder is the piece of a reader that knows which encoding the document
uses. It can be configured explicitly or detected from the document head:
byte-order mark first, then the XML declaration, then a chardet guess.
"""

from __future__ import annotations

import codecs
import re

import chardet

from .errors import DecodingFault

_SCAN_LIMIT = 4096

_XML_ENCODING_RE = re.compile(rb"""<\?xml[^>]+encoding\s*=\s*['"]([^'"]+)['"]""", re.IGNORECASE)

# Longest marks first so UTF-32 LE is not mistaken for UTF-16 LE
_BOMS = (
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)

DEFAULT_ENCODING = "utf-8"


def _normalize_encoding(name: bytes | str) -> str | None:
    """Return the lowercased name if Python knows the codec, else None."""
    try:
        if isinstance(name, bytes):
            name = name.decode("ascii")
        text = name.strip().lower()
        codecs.lookup(text)
    except (LookupError, UnicodeDecodeError, ValueError):
        return None
    return text


def detect_bom(data) -> str | None:
    head = bytes(data[:4])
    for bom, encoding in _BOMS:
        if head.startswith(bom):
            return encoding
    return None


def detect_declared_encoding(data) -> str | None:
    match = _XML_ENCODING_RE.search(bytes(data[:_SCAN_LIMIT]))
    if match is None:
        return None
    return _normalize_encoding(match.group(1))


class Decoder:
    __slots__ = ("discard_bom", "encoding")

    def __init__(self, encoding: str | None = None, *, discard_bom: bool = True):
        if encoding is None:
            encoding = DEFAULT_ENCODING
        normalized = _normalize_encoding(encoding)
        if normalized is None:
            raise LookupError(f"unknown encoding: {encoding}")
        self.encoding = normalized
        self.discard_bom = bool(discard_bom)

    @classmethod
    def detect(cls, document, **kwargs) -> Decoder:
        """Build a decoder for the encoding *document* appears to use."""
        encoding = detect_bom(document) or detect_declared_encoding(document)
        if encoding is None and document:
            guessed = chardet.detect(bytes(document[:_SCAN_LIMIT])).get("encoding")
            if guessed:
                encoding = _normalize_encoding(guessed)
        return cls(encoding, **kwargs)

    def decode(self, data) -> str:
        """Decode *data* to text.

        Raises:
            DecodingFault: *data* is not valid in this decoder's encoding
        """
        try:
            text = str(data, self.encoding)
        except UnicodeDecodeError as exc:
            raise DecodingFault(self.encoding, exc.start, exc.reason) from exc
        if self.discard_bom and text and text[0] == "\ufeff":
            text = text[1:]
        return text

    def __repr__(self):
        return f"Decoder({self.encoding!r})"
