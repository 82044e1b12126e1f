from .scanner import Scanner
from .keymap import (
    Key,
    KeymapError,
    LexError,
    Map,
    Mod,
    ParseError,
    ParseErrorKind,
    Parser,
    Token,
    TokenKind,
    lex,
    parse,
    parse_keymap,
    tokenize,
)

__all__ = [
    "Scanner",
    "Key",
    "KeymapError",
    "LexError",
    "Map",
    "Mod",
    "ParseError",
    "ParseErrorKind",
    "Parser",
    "Token",
    "TokenKind",
    "lex",
    "parse",
    "parse_keymap",
    "tokenize",
]
