import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, TypeVar, Union

from .scanner import Scanner

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Mod(Enum):
    CTRL = "ctrl"
    SHIFT = "shift"
    ALT = "alt"


class TokenKind(Enum):
    ID = "Id"
    MOD = "Mod"
    PHRASE = "Phrase"
    WHITESPACE = "Whitespace"
    NEWLINE = "Newline"


@dataclass(frozen=True)
class Token:
    """Lexed token; line and col point at its first character"""

    kind: TokenKind
    value: Union[str, Mod, None]
    line: int
    col: int


@dataclass(frozen=True)
class Key:
    name: str
    modifier: Optional[Mod] = None


@dataclass(frozen=True)
class Map:
    """`map <key> <command>` statement"""

    key: Key
    command: str


Program = List[Map]


class KeymapError(ValueError):
    """Base class for keymap lexing and parsing errors"""


class LexError(KeymapError):
    def __init__(self, line: int, col: int, cursor: int):
        self.line = line
        self.col = col
        self.cursor = cursor
        super().__init__(f"unexpected input at {line}:{col}")


class ParseErrorKind(Enum):
    EXPECTED = "expected"
    EXPECTED_ID = "expected identifier"
    EXPECTED_MOD = "expected modifier"
    REMAINING_TOKENS = "remaining tokens"


class ParseError(KeymapError):
    """Parse failure at a token position, or at end of input when line is None"""

    def __init__(
        self,
        kind: ParseErrorKind,
        line: Optional[int] = None,
        col: Optional[int] = None,
        expected: Optional[str] = None,
    ):
        self.kind = kind
        self.line = line
        self.col = col
        self.expected = expected
        super().__init__(self._describe())

    @classmethod
    def at(cls, token: Optional[Token], kind: ParseErrorKind, expected=None):
        if token is None:
            return cls(kind, expected=expected)
        return cls(kind, token.line, token.col, expected)

    def _describe(self) -> str:
        what = self.kind.value
        if self.expected:
            what = f"{what} {self.expected}"
        if self.line is None:
            return f"{what} at end of input"
        return f"{what} at {self.line}:{self.col}"


# Lexing rules: each returns a token, or None leaving the scanner untouched

MODIFIERS = {mod.value: mod for mod in Mod}
WHITESPACE = " \t"


def take_str(scanner: Scanner, phrase: str) -> bool:
    """Consume phrase if the input continues with it"""
    if not scanner.look_ahead(phrase):
        return False
    for _ in phrase:
        scanner.pop()
    return True


def lex_mod(scanner: Scanner, line: int, col: int) -> Optional[Token]:
    for name, mod in MODIFIERS.items():
        if take_str(scanner, name):
            return Token(TokenKind.MOD, mod, line, col)
    return None


def lex_newline(scanner: Scanner, line: int, col: int) -> Optional[Token]:
    if scanner.take("\n"):
        return Token(TokenKind.NEWLINE, None, line, col)
    return None


def lex_whitespace(scanner: Scanner, line: int, col: int) -> Optional[Token]:
    was_whitespace = False
    while scanner.pop_in(WHITESPACE) is not None:
        was_whitespace = True
    return Token(TokenKind.WHITESPACE, None, line, col) if was_whitespace else None


def lex_phrase(phrase: str) -> Callable[[Scanner, int, int], Optional[Token]]:
    def rule(scanner: Scanner, line: int, col: int) -> Optional[Token]:
        if take_str(scanner, phrase):
            return Token(TokenKind.PHRASE, phrase, line, col)
        return None

    return rule


def lex_id(scanner: Scanner, line: int, col: int) -> Optional[Token]:
    letters = []
    while True:
        letter = scanner.pop_in_range("a", "z") or scanner.pop_in_range("A", "Z")
        if letter is None:
            break
        letters.append(letter)

    if not letters:
        return None
    return Token(TokenKind.ID, "".join(letters), line, col)


# Order matters: keywords must be tried before the identifier rule swallows them
LEXERS = [
    lex_mod,
    lex_newline,
    lex_whitespace,
    lex_phrase("map"),
    lex_phrase("+"),
    lex_id,
]


def lex(scanner: Scanner) -> List[Token]:
    """Split the scanner's input into tokens, dropping whitespace"""
    tokens = []

    while not scanner.is_done():
        line, col = scanner.line, scanner.col
        for rule in LEXERS:
            token = rule(scanner, line, col)
            if token is not None:
                break
        else:
            logger.debug("lexing failed at %d:%d, tokens so far: %r", line, col, tokens)
            raise LexError(line, col, scanner.cursor())

        if token.kind is not TokenKind.WHITESPACE:
            tokens.append(token)

    return tokens


def tokenize(text: str) -> List[Token]:
    return lex(Scanner(text))


class Parser:
    """Cursor over lexed tokens with the same consume-0-or-1 contract as Scanner"""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self._cursor = 0

    def cursor(self) -> int:
        return self._cursor

    def peek(self) -> Optional[Token]:
        if self._cursor < len(self.tokens):
            return self.tokens[self._cursor]
        return None

    def is_done(self) -> bool:
        return self._cursor >= len(self.tokens)

    def pop(self) -> Optional[Token]:
        token = self.peek()
        if token is not None:
            self._cursor += 1
        return token

    def transform(self, cb: Callable[[Token], Optional[T]]) -> Optional[T]:
        token = self.peek()
        if token is None:
            return None

        output = cb(token)
        if output is not None:
            self.pop()
        return output

    def take_kind(self, kind: TokenKind, value=None) -> Optional[Token]:
        """Consume the next token if it has the given kind (and value, if given)"""
        return self.transform(
            lambda token: token
            if token.kind is kind and (value is None or token.value == value)
            else None
        )

    def expect(self, kind: TokenKind, value=None) -> Token:
        token = self.take_kind(kind, value)
        if token is None:
            expected = kind.value if value is None else f"{kind.value}({value!r})"
            raise ParseError.at(self.peek(), ParseErrorKind.EXPECTED, expected)
        return token

    def take_id(self) -> str:
        token = self.take_kind(TokenKind.ID)
        if token is None:
            raise ParseError.at(self.peek(), ParseErrorKind.EXPECTED_ID)
        return token.value

    def take_mod(self) -> Optional[Mod]:
        token = self.take_kind(TokenKind.MOD)
        return token.value if token is not None else None


def parse(parser: Parser) -> Program:
    """Parse a whole program; every token must be consumed"""
    program = parse_program(parser)

    if not parser.is_done():
        raise ParseError.at(parser.peek(), ParseErrorKind.REMAINING_TOKENS)
    return program


def parse_program(parser: Parser) -> Program:
    program = []

    while True:
        # Blank lines between statements are allowed
        while parser.take_kind(TokenKind.NEWLINE):
            pass
        if parser.is_done():
            break

        program.append(parse_statement(parser))

        token = parser.peek()
        if token is None:
            break
        if token.kind is not TokenKind.NEWLINE:
            raise ParseError.at(token, ParseErrorKind.EXPECTED, TokenKind.NEWLINE.value)

    return program


def parse_statement(parser: Parser) -> Map:
    return parse_map(parser)


def parse_map(parser: Parser) -> Map:
    parser.expect(TokenKind.PHRASE, "map")
    key = parse_key(parser)
    command = parser.take_id()
    return Map(key, command)


def parse_key(parser: Parser) -> Key:
    modifier = parser.take_mod()
    if modifier is not None:
        parser.expect(TokenKind.PHRASE, "+")

    return Key(parser.take_id(), modifier)


def parse_keymap(text: str) -> Program:
    """
    Parse keymap source into a list of mappings.

    Args:
        text: keymap source, one `map` statement per line

    Returns:
        List of Map statements in source order

    Raises:
        LexError: input contains a character no rule accepts
        ParseError: tokens do not form a valid program

    Examples:
        >>> parse_keymap("map ctrl+k up")
        [Map(key=Key(name='k', modifier=<Mod.CTRL: 'ctrl'>), command='up')]
    """
    return parse(Parser(tokenize(text)))
