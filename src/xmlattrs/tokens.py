from .attributes import Attribute, Attributes


def _choose_attr_quote(value):
    if b'"' in value and b"'" not in value:
        return b"'"
    return b'"'


class StartTag:
    """Content of a start tag: the element name followed by its attributes.

    `buf` is everything between '<' and '>'. A trailing '/' of an empty
    element is cut off and kept as `self_closing`, so pushed attributes land
    before it. The buffer is borrowed as given and only copied into an owned
    bytearray the first time an attribute is pushed. Pushing fails with
    BufferError while a scanner or a borrowed attribute still views an owned
    buffer.
    """

    __slots__ = ("buf", "name_len", "self_closing")

    def __init__(self, buf, name_len, self_closing=False):
        if not 0 <= name_len <= len(buf):
            raise ValueError(f"name length {name_len} is outside a buffer of {len(buf)} bytes")
        if len(buf) > name_len and buf[-1:] == b"/":
            buf = memoryview(buf)[:-1]
            self_closing = True
        self.buf = buf
        self.name_len = name_len
        self.self_closing = bool(self_closing)

    @classmethod
    def from_name(cls, name, self_closing=False):
        if isinstance(name, str):
            name = name.encode("utf-8")
        return cls(bytearray(name), len(name), self_closing)

    @property
    def name(self):
        return bytes(self.buf[: self.name_len])

    def attributes(self, opts=None):
        return Attributes(self.buf, self.name_len, opts)

    def push_attribute(self, attr):
        """Append an attribute as ` key="value"`.

        *attr* may be an `Attribute` or a `(key, value)` pair. Text pairs get
        their value escaped, byte pairs are written untouched.
        """
        if not isinstance(attr, Attribute):
            key, value = attr
            if isinstance(key, str):
                attr = Attribute.from_text(key, value)
            else:
                attr = Attribute.from_bytes(key, value)
        value = bytes(attr.value)
        quote = _choose_attr_quote(value)
        if quote in value:
            value = value.replace(b'"', b"&quot;")
        if not isinstance(self.buf, bytearray):
            self.buf = bytearray(self.buf)
        self.buf += b" " + bytes(attr.key) + b"=" + quote + value + quote

    def extend_attributes(self, attrs):
        for attr in attrs:
            self.push_attribute(attr)
        return self

    def with_attributes(self, attrs):
        """Return a new tag holding this tag's content plus *attrs*."""
        tag = StartTag(bytearray(self.buf), self.name_len, self.self_closing)
        return tag.extend_attributes(attrs)

    def __bytes__(self):
        if self.self_closing:
            return bytes(self.buf) + b"/"
        return bytes(self.buf)

    def __repr__(self):
        name = self.name.decode("utf-8", "replace")
        closing = " /" if self.self_closing else ""
        return f"<start:{name} {bytes(self.buf[self.name_len :])!r}{closing}>"
