class SmallByteSet:
    __slots__ = ("_mask", "_members")

    def __init__(self, members):
        mask = 0
        for code in bytes(members):
            if code >= 128:
                raise ValueError("SmallByteSet only supports ASCII")
            mask |= 1 << code
        self._mask = mask
        self._members = bytes(members)

    def __contains__(self, code):
        if code >= 128:
            return False
        return (self._mask >> code) & 1 == 1

    def __repr__(self):
        return f"SmallByteSet({self._members!r})"

    @property
    def members(self):
        return self._members


WHITESPACE = SmallByteSet(b" \t\r\n")
QUOTES = SmallByteSet(b"'\"")
