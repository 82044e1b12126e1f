from typing import Callable, Container, Optional, TypeVar

T = TypeVar("T")


class Scanner:
    """Character cursor with lookahead and single-step conditional consumption.

    Every operation advances the cursor by exactly zero or one character, and
    a failed match never moves it, so callers can try one rule after another
    from the same position.
    """

    def __init__(self, text: str):
        self.text = text
        self._cursor = 0
        # Input starts at line 1, column 1
        self._line = 1
        self._col = 1

    def __repr__(self) -> str:
        return f"Scanner(cursor={self._cursor}, line={self._line}, col={self._col})"

    @property
    def line(self) -> int:
        return self._line

    @property
    def col(self) -> int:
        return self._col

    def cursor(self) -> int:
        """Current position in characters, useful for reporting errors"""
        return self._cursor

    def peek(self) -> str | None:
        """Look at the character under the cursor without consuming it"""
        if self._cursor < len(self.text):
            return self.text[self._cursor]
        return None

    def is_done(self) -> bool:
        """True once further progress is not possible"""
        return self._cursor >= len(self.text)

    def pop(self) -> str | None:
        """Consume and return the next character, if there is one"""
        char = self.peek()
        if char is None:
            return None

        if char == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        self._cursor += 1
        return char

    def take(self, target: str) -> bool:
        """Consume the next character if it equals target.

        Returns False and leaves the cursor unchanged otherwise.
        """
        if len(target) != 1:
            raise ValueError(f"take() expects a single character, got {target!r}")
        return self.transform(lambda char: True if char == target else None) is not None

    def transform(self, cb: Callable[[str], Optional[T]]) -> Optional[T]:
        """Invoke cb once on the next character.

        If cb returns anything other than None, the character is consumed and
        the value returned. Otherwise None is returned and the cursor stays put.
        """
        char = self.peek()
        if char is None:
            return None

        output = cb(char)
        if output is not None:
            self.pop()
        return output

    def pop_in_range(self, first: str, last: str) -> str | None:
        """Consume the next character if it falls within first..last inclusive"""
        return self.transform(lambda char: char if first <= char <= last else None)

    def pop_in(self, candidates: Container[str]) -> str | None:
        """Consume the next character if it is one of candidates"""
        return self.transform(lambda char: char if char in candidates else None)

    def look_ahead(self, pattern: str) -> bool:
        """Check if the remaining input starts with pattern"""
        return self.text.startswith(pattern, self._cursor)

    def remaining(self) -> str:
        """Get the unconsumed input"""
        return self.text[self._cursor :]
