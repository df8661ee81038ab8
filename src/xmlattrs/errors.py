"""Errors raised while scanning attribute lists and resolving their values.

Scan errors carry absolute byte offsets into the buffer handed to the
scanner. Escape and decoding errors carry offsets relative to the value
being resolved, because an owned value no longer points into any buffer.
"""


class AttrError(ValueError):
    """Base class for every error raised by xmlattrs."""

    code = "attr-error"

    def __init__(self, position, message=None, code=None):
        if code is not None:
            self.code = code
        self.position = position
        self.message = message or self.code
        super().__init__(str(self))

    def _location(self):
        return f"at {self.position}"

    def __repr__(self):
        return f"{type(self).__name__}({self.code!r}, position={self.position})"

    def __str__(self):
        if self.message != self.code:
            return f"{self.code} {self._location()} - {self.message}"
        return f"{self.code} {self._location()}"

    def __eq__(self, other):
        if not isinstance(other, AttrError):
            return NotImplemented
        return type(self) is type(other) and self.code == other.code and self.position == other.position

    def __hash__(self):
        return hash((type(self), self.code, self.position))


class ScanError(AttrError):
    """Malformed attribute list. The scanner that raised it is exhausted."""


class NameContainsQuote(ScanError):
    code = "name-contains-quote"


class DuplicateAttributeName(ScanError):
    code = "duplicate-attribute-name"

    def __init__(self, position, first_position, message=None):
        self.first_position = first_position
        super().__init__(position, message)

    def _location(self):
        return f"at {self.position} (first seen at {self.first_position})"

    def __repr__(self):
        return (
            f"{type(self).__name__}({self.code!r}, position={self.position}, "
            f"first_position={self.first_position})"
        )

    def __eq__(self, other):
        result = super().__eq__(other)
        if result is not True:
            return result
        return self.first_position == other.first_position

    __hash__ = AttrError.__hash__


class MissingEqualsAfterName(ScanError):
    code = "missing-equals-after-name"


class UnquotedValue(ScanError):
    code = "unquoted-value"


class EscapeError(AttrError):
    """Malformed or unterminated entity reference inside a value."""

    UNTERMINATED_ENTITY = "unterminated-entity"
    UNRECOGNIZED_ENTITY = "unrecognized-entity"
    INVALID_DECIMAL = "invalid-decimal"
    INVALID_HEXADECIMAL = "invalid-hexadecimal"
    INVALID_CODEPOINT = "invalid-codepoint"

    code = "escape-error"


class DecodingFault(AttrError):
    """Byte sequence not valid in the decoder's encoding."""

    code = "decoding-fault"

    def __init__(self, encoding, position, message=None):
        self.encoding = encoding
        super().__init__(position, message)

    def _location(self):
        return f"at {self.position} ({self.encoding})"
