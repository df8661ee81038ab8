"""Iterator over the key/value pairs of a start tag's attribute list.

The scanner works on the bytes that follow the element name, up to but not
including the tag's closing '>'. Keys and values come back as memoryview
slices of that buffer; nothing is copied until a value is unescaped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .errors import DuplicateAttributeName, MissingEqualsAfterName, NameContainsQuote, UnquotedValue
from .escape import escape, unescape
from .smallset import QUOTES, WHITESPACE

logger = logging.getLogger(__name__)

_SPACE = re.escape(WHITESPACE.members)
_WHITESPACE_PATTERN = re.compile(b"[" + _SPACE + b"]")
_NON_WHITESPACE_PATTERN = re.compile(b"[^" + _SPACE + b"]")
_NAME_TERMINATOR_PATTERN = re.compile(b"[=" + _SPACE + b"]")
_QUOTE_PATTERN = re.compile(b"['\"]")
_EQUALS_PATTERN = re.compile(b"=")
_CLOSING_QUOTE_PATTERNS = {code: re.compile(re.escape(bytes((code,)))) for code in QUOTES.members}


@dataclass(frozen=True, slots=True)
class Attribute:
    """A key/value pair of an xml attribute.

    `value` holds the raw bytes, possibly containing escape sequences. It is
    either a memoryview into the scanned buffer (borrowed) or bytes owned by
    the attribute; equality only looks at the content.
    """

    key: bytes | memoryview
    value: bytes | memoryview

    @classmethod
    def from_bytes(cls, key, value) -> Attribute:
        """Wrap raw bytes as-is. Neither key nor value is transformed."""
        return cls(key, value)

    @classmethod
    def from_text(cls, key: str, value: str) -> Attribute:
        """Build an attribute from text. The key is kept, the value is escaped."""
        return cls(key.encode("utf-8"), escape(value.encode("utf-8")))

    @property
    def borrowed(self) -> bool:
        return isinstance(self.value, memoryview)

    def resolve_escapes(self):
        """Return the value with entity references resolved.

        The returned object is `value` itself when there was nothing to
        resolve.

        Raises:
            EscapeError: the value holds a malformed entity reference
        """
        return unescape(self.value)

    def decode_text(self, decoder) -> str:
        """Unescape then decode the value with *decoder*.

        Raises:
            EscapeError: the value holds a malformed entity reference
            DecodingFault: the unescaped bytes are invalid in the decoder's encoding
        """
        return decoder.decode(self.resolve_escapes())

    def __repr__(self):
        return f"Attribute({bytes(self.key)!r}, {bytes(self.value)!r})"


class ScannerOpts:
    __slots__ = ("check_duplicates", "debug")

    def __init__(self, check_duplicates=True, debug=False):
        self.check_duplicates = bool(check_duplicates)
        self.debug = bool(debug)


class Attributes:
    """Forward-only scanner yielding one `Attribute` per `next()` call.

    Malformed input raises a `ScanError` subclass; the scanner is then done
    and every later call raises StopIteration. Running out of bytes in the
    middle of an attribute is a plain end of iteration, so callers must check
    separately that the tag was closed.
    """

    SCANNING = 0
    DONE = 1

    __slots__ = ("bytes", "consumed", "opts", "position", "state")

    def __init__(self, buf, position=0, opts=None):
        view = memoryview(buf)
        if not 0 <= position <= len(view):
            raise ValueError(f"position {position} is outside a buffer of {len(view)} bytes")
        self.bytes = view
        self.position = position
        # Private copy, set_uniqueness_check only affects this scanner
        opts = opts or ScannerOpts()
        self.opts = ScannerOpts(opts.check_duplicates, opts.debug)
        self.state = self.SCANNING
        # Name ranges already emitted, only filled when checking duplicates
        self.consumed = []

    @property
    def exhausted(self):
        return self.state == self.DONE

    def set_uniqueness_check(self, enabled):
        self.opts.check_duplicates = bool(enabled)
        return self

    def __iter__(self):
        return self

    def _stop(self):
        self.position = len(self.bytes)
        self.state = self.DONE
        return StopIteration()

    def _fail(self, err):
        self.state = self.DONE
        logger.debug("attribute scan stopped: %s", err)
        return err

    def __next__(self) -> Attribute:
        if self.state == self.DONE:
            raise StopIteration

        buf = self.bytes
        length = len(buf)
        p = self.position
        if length <= p:
            raise self._stop()
        # The last byte closes the tag and is never attribute content
        last = length - 1

        # search first space, then first non space
        match = _WHITESPACE_PATTERN.search(buf, p, last)
        if match is None:
            raise self._stop()
        match = _NON_WHITESPACE_PATTERN.search(buf, match.end(), last)
        if match is None:
            raise self._stop()
        start_key = match.start()

        # key ends with either whitespace or =
        match = _NAME_TERMINATOR_PATTERN.search(buf, start_key + 1, last)
        if match is None:
            raise self._stop()
        end_key = match.start()

        check = self.opts.check_duplicates
        if check:
            match = _QUOTE_PATTERN.search(buf, start_key, end_key)
            if match is not None:
                raise self._fail(NameContainsQuote(match.start()))
            name = buf[start_key:end_key]
            for seen in self.consumed:
                if buf[seen.start : seen.stop] == name:
                    raise self._fail(DuplicateAttributeName(start_key, seen.start))
            self.consumed.append(range(start_key, end_key))

        match = _EQUALS_PATTERN.search(buf, end_key, last)
        if match is None:
            raise self._stop()
        eq = match.start()

        if check:
            match = _NON_WHITESPACE_PATTERN.search(buf, end_key, eq)
            if match is not None:
                raise self._fail(MissingEqualsAfterName(match.start()))

        # value starts with a quote
        match = _NON_WHITESPACE_PATTERN.search(buf, eq + 1, last)
        if match is None:
            raise self._stop()
        quote = buf[match.start()]
        if quote not in QUOTES:
            raise self._fail(UnquotedValue(match.start()))
        start_val = match.end()

        # value ends with the same quote, which may be the reserved last byte
        match = _CLOSING_QUOTE_PATTERNS[quote].search(buf, start_val)
        if match is None:
            raise self._stop()
        end_val = match.start()

        self.position = end_val + 1
        attr = Attribute(buf[start_key:end_key], buf[start_val:end_val])
        if self.opts.debug:
            logger.debug("attribute %r at %d..%d", attr, start_key, self.position)
        return attr

    def __repr__(self):
        done = " done" if self.exhausted else ""
        return f"<Attributes position={self.position} of {len(self.bytes)}{done}>"
