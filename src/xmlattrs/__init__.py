from .attributes import Attribute, Attributes, ScannerOpts
from .errors import (
    AttrError,
    DecodingFault,
    DuplicateAttributeName,
    EscapeError,
    MissingEqualsAfterName,
    NameContainsQuote,
    ScanError,
    UnquotedValue,
)
from .escape import escape, unescape
from .reader import Decoder
from .tokens import StartTag

__all__ = [
    "AttrError",
    "Attribute",
    "Attributes",
    "DecodingFault",
    "Decoder",
    "DuplicateAttributeName",
    "EscapeError",
    "MissingEqualsAfterName",
    "NameContainsQuote",
    "ScanError",
    "ScannerOpts",
    "StartTag",
    "UnquotedValue",
    "escape",
    "unescape",
]
