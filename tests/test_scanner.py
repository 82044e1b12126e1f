import pytest
from char_scanner import Scanner


def parse_stars(scanner: Scanner) -> bool:
    """One or more '*' and nothing else"""
    if not scanner.take("*"):
        return False
    while scanner.take("*"):
        pass
    return scanner.is_done()


def parse_symbol(scanner: Scanner):
    """Map '$' to 1 and '#' to 2"""
    return scanner.transform(lambda char: {"$": 1, "#": 2}.get(char))


@pytest.mark.parametrize(
    "text,expected",
    [
        ("**", True),
        ("*", True),
        ("", False),  # Nothing to take
        ("--", False),
        ("*-", False),  # Leftover input
    ],
)
def test_star_run(text, expected):
    assert parse_stars(Scanner(text)) is expected


def test_transform_mapping():
    scanner = Scanner("#")
    assert parse_symbol(scanner) == 2
    assert scanner.cursor() == 1
    assert scanner.is_done()


def test_transform_no_match():
    scanner = Scanner("x")
    assert parse_symbol(scanner) is None
    assert scanner.cursor() == 0
    assert scanner.peek() == "x"


def test_empty_input():
    scanner = Scanner("")
    assert scanner.is_done()
    assert scanner.cursor() == 0
    assert scanner.peek() is None
    assert scanner.pop() is None
    assert scanner.take("a") is False
    assert scanner.transform(lambda char: char) is None
    assert scanner.remaining() == ""


def test_peek_does_not_advance():
    scanner = Scanner("ab")
    assert scanner.peek() == "a"
    assert scanner.peek() == "a"
    assert scanner.cursor() == 0


def test_pop_consumes_every_character():
    scanner = Scanner("ab")
    assert scanner.pop() == "a"
    assert scanner.pop() == "b"
    assert scanner.pop() is None
    assert scanner.cursor() == 2
    assert scanner.is_done()


def test_take_failure_leaves_cursor():
    scanner = Scanner("ab")
    assert not scanner.take("b")
    assert scanner.cursor() == 0
    assert scanner.peek() == "a"
    assert scanner.take("a")
    assert scanner.peek() == "b"


def test_take_rejects_multiple_characters():
    with pytest.raises(ValueError):
        Scanner("ab").take("ab")


def test_characters_are_code_points():
    scanner = Scanner("ধর্")
    assert scanner.pop() == "ধ"
    assert scanner.pop() == "র"
    assert scanner.pop() == "্"
    assert scanner.is_done()


def test_transform_falsy_value_is_present():
    scanner = Scanner("0")
    assert scanner.transform(lambda char: int(char)) == 0
    assert scanner.cursor() == 1


def test_transform_calls_back_at_most_once():
    calls = []

    def cb(char):
        calls.append(char)
        return None

    scanner = Scanner("a")
    scanner.transform(cb)
    assert calls == ["a"]

    calls.clear()
    scanner.pop()
    scanner.transform(cb)
    assert calls == []  # Not called once exhausted


def test_transform_generic_result():
    scanner = Scanner("ab")
    assert scanner.transform(lambda char: (char, ord(char))) == ("a", 97)
    assert scanner.transform(lambda char: [char]) == ["b"]


@pytest.mark.parametrize(
    "text,first,last,expected,cursor",
    [
        ("m", "a", "z", "m", 1),
        ("a", "a", "z", "a", 1),
        ("z", "a", "z", "z", 1),
        ("M", "a", "z", None, 0),
        ("", "a", "z", None, 0),
    ],
)
def test_pop_in_range(text, first, last, expected, cursor):
    scanner = Scanner(text)
    assert scanner.pop_in_range(first, last) == expected
    assert scanner.cursor() == cursor


def test_pop_in():
    scanner = Scanner(" \tx")
    assert scanner.pop_in(" \t") == " "
    assert scanner.pop_in({" ", "\t"}) == "\t"
    assert scanner.pop_in(" \t") is None
    assert scanner.cursor() == 2


def test_look_ahead_and_remaining():
    scanner = Scanner("map ctrl")
    assert scanner.look_ahead("map")
    assert not scanner.look_ahead("ctrl")
    assert scanner.cursor() == 0
    for _ in range(4):
        scanner.pop()
    assert scanner.look_ahead("ctrl")
    assert scanner.remaining() == "ctrl"
    assert not scanner.look_ahead("ctrl+")


def test_line_and_column_tracking():
    scanner = Scanner("ab\nc")
    assert (scanner.line, scanner.col) == (1, 1)
    scanner.pop()
    scanner.pop()
    assert (scanner.line, scanner.col) == (1, 3)
    assert scanner.take("\n")
    assert (scanner.line, scanner.col) == (2, 1)
    assert not scanner.take("x")
    assert (scanner.line, scanner.col) == (2, 1)
    scanner.pop()
    assert (scanner.line, scanner.col) == (2, 2)


def test_exhaustion_is_stable():
    scanner = Scanner("a")
    scanner.pop()
    for _ in range(3):
        assert scanner.is_done()
        assert scanner.peek() is None
        assert scanner.pop() is None
        assert scanner.transform(lambda char: char) is None
        assert scanner.cursor() == 1
