import pytest
from parsita import ParseError
from returns.result import Failure

from setmap import EmptyKeyError, SetMap, deparse_entry, load_entries, parse_entry, parse_key

key_strings = [
    ("{a}", frozenset({"a"})),
    ("{a, b}", frozenset({"a", "b"})),
    ("{b,a}", frozenset({"a", "b"})),
    ("{ a , b , a }", frozenset({"a", "b"})),
    ('{"hello world", x-1, 2.5}', frozenset({"hello world", "x-1", "2.5"})),
]


@pytest.mark.parametrize(("string", "key"), key_strings)
def test_parse_key(string, key):
    actual = parse_key(string).unwrap()
    assert actual == key


@pytest.mark.parametrize("string", ["", "a, b", "{a, b", "{a,,b}", "{a b}", "{a}}"])
def test_parse_bad_key(string):
    actual = parse_key(string)
    assert isinstance(actual, Failure)
    assert isinstance(actual.failure(), ParseError)


def test_parse_empty_key():
    actual = parse_key("{}")
    assert isinstance(actual, Failure)
    assert isinstance(actual.failure(), EmptyKeyError)


entry_strings = [
    ("{a, b} = 1", (frozenset({"a", "b"}), 1)),
    ("{a} = -12", (frozenset({"a"}), -12)),
    ("{a} = 2.5", (frozenset({"a"}), 2.5)),
    ("{a} = 1e3", (frozenset({"a"}), 1000.0)),
    ('{a} = "some text"', (frozenset({"a"}), "some text")),
    ("{a} = word", (frozenset({"a"}), "word")),
]


@pytest.mark.parametrize(("string", "entry"), entry_strings)
def test_parse_entry(string, entry):
    actual = parse_entry(string).unwrap()
    assert actual == entry


@pytest.mark.parametrize("string", ["{a} =", "{a} 1", "= 1", "{a} = 1 2"])
def test_parse_bad_entry(string):
    actual = parse_entry(string)
    assert isinstance(actual, Failure)


def test_parse_entry_with_empty_key():
    actual = parse_entry("{} = 1")
    assert isinstance(actual, Failure)
    assert isinstance(actual.failure(), EmptyKeyError)


def test_load_entries():
    lines = [
        "# prices",
        "{bread, butter} = 3",
        "",
        "{bread, jam} = 4",
        "  {butter, bread} = 5  ",
    ]

    actual = load_entries(lines).unwrap()

    assert actual == SetMap({("bread", "butter"): 5, ("bread", "jam"): 4})
    actual.check_consistency()


def test_load_entries_failure():
    actual = load_entries(["{a} = 1", "{a = 2"])
    assert isinstance(actual, Failure)


@pytest.mark.parametrize(
    ("key", "value", "string"),
    [
        (frozenset({"b", "a"}), 1, "{a, b} = 1"),
        (frozenset({"a"}), -2.5, "{a} = -2.5"),
        (frozenset({"hello world", "x"}), "text", '{"hello world", x} = "text"'),
        (frozenset({"a"}), "12", '{a} = "12"'),
    ],
)
def test_deparse_entry(key, value, string):
    assert deparse_entry(key, value) == string
    assert parse_entry(string).unwrap() == (key, value)
