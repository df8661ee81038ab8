"""XML character reference escaping and unescaping over bytes.

Handles the five predefined XML entities (&lt; &gt; &amp; &apos; &quot;)
and numeric references (&#60; &#x3C;). Unlike HTML, XML has no legacy
semicolon-less forms, so anything else after '&' is an error.

Both functions hand back their input object untouched when there is
nothing to do, so a borrowed memoryview stays borrowed.
"""

import re

from .errors import EscapeError

# Keys are the entity names without '&' and ';'
NAMED_ENTITIES = {
    b"lt": b"<",
    b"gt": b">",
    b"amp": b"&",
    b"apos": b"'",
    b"quot": b'"',
}

ESCAPES = {
    ord("<"): b"&lt;",
    ord(">"): b"&gt;",
    ord("&"): b"&amp;",
    ord("'"): b"&apos;",
    ord('"'): b"&quot;",
}

_ESCAPE_PATTERN = re.compile(rb"[<>&'\"]")
_AMP_PATTERN = re.compile(rb"&")
_DECIMAL_PATTERN = re.compile(rb"[0-9]+")
_HEXADECIMAL_PATTERN = re.compile(rb"[0-9a-fA-F]+")


def escape(raw):
    """Escape markup-significant bytes in *raw*.

    Returns *raw* itself if it contains none of < > & ' ".
    """
    match = _ESCAPE_PATTERN.search(raw)
    if match is None:
        return raw

    result = bytearray()
    i = 0
    while match is not None:
        start = match.start()
        result += raw[i:start]
        result += ESCAPES[raw[start]]
        i = start + 1
        match = _ESCAPE_PATTERN.search(raw, i)
    result += raw[i:]
    return bytes(result)


def decode_numeric_entity(digits, is_hex=False, position=0):
    """Decode the digits of a numeric character reference to UTF-8 bytes.

    Args:
        digits: The numeric part (without &#, &#x or ;)
        is_hex: Whether this is hexadecimal (&#x) or decimal (&#)
        position: Offset of the '&' for error reporting

    Raises:
        EscapeError: digits are malformed or name a forbidden codepoint
    """
    if is_hex:
        if not _HEXADECIMAL_PATTERN.fullmatch(digits):
            raise EscapeError(
                position, f"invalid hexadecimal reference {digits!r}", EscapeError.INVALID_HEXADECIMAL
            )
        base, max_digits = 16, 6
    else:
        if not _DECIMAL_PATTERN.fullmatch(digits):
            raise EscapeError(position, f"invalid decimal reference {digits!r}", EscapeError.INVALID_DECIMAL)
        base, max_digits = 10, 7

    # Above 0x10FFFF once past the digit count of the largest codepoint
    significant = digits.lstrip(b"0")
    if len(significant) > max_digits:
        raise EscapeError(
            position, f"reference of {len(significant)} digits is out of range", EscapeError.INVALID_CODEPOINT
        )
    codepoint = int(significant or b"0", base)

    if codepoint == 0 or codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
        raise EscapeError(position, f"codepoint {codepoint:#x} is not allowed", EscapeError.INVALID_CODEPOINT)
    return chr(codepoint).encode("utf-8")


def unescape(raw):
    """Resolve every entity reference in *raw*.

    Returns *raw* itself when it contains no '&', otherwise new bytes.

    Raises:
        EscapeError: an '&' has no closing ';' or names an unknown entity
    """
    match = _AMP_PATTERN.search(raw)
    if match is None:
        return raw

    data = bytes(raw)
    length = len(data)
    result = bytearray()
    i = 0
    while i < length:
        next_amp = data.find(b"&", i)
        if next_amp == -1:
            result += data[i:]
            break
        result += data[i:next_amp]

        end = data.find(b";", next_amp + 1)
        if end == -1:
            raise EscapeError(next_amp, "entity reference is not terminated", EscapeError.UNTERMINATED_ENTITY)

        name = data[next_amp + 1 : end]
        if name.startswith(b"#x"):
            result += decode_numeric_entity(name[2:], is_hex=True, position=next_amp)
        elif name.startswith(b"#"):
            result += decode_numeric_entity(name[1:], position=next_amp)
        elif name in NAMED_ENTITIES:
            result += NAMED_ENTITIES[name]
        else:
            raise EscapeError(next_amp, f"unrecognized entity {name!r}", EscapeError.UNRECOGNIZED_ENTITY)
        i = end + 1

    return bytes(result)
