__all__ = [
    "parse_key",
    "parse_entry",
    "load_entries",
    "deparse_element",
    "deparse_key",
    "deparse_value",
    "deparse_entry",
]

import re
from typing import Any, Iterable

from parsita import ParseError, ParserContext, reg, repsep
from returns import result

from ._exceptions import EmptyKeyError
from ._set_map import SetMap

bare_word_pattern = r"[A-Za-z0-9_.\-]+"


def make_key(elements: list[str]) -> frozenset[str]:
    if len(elements) == 0:
        raise EmptyKeyError()
    return frozenset(elements)


class EntryParsers(ParserContext, whitespace=r"[ \t]*"):
    bare_word = reg(bare_word_pattern)
    quoted_string = reg(r'"[^"]*"') > (lambda x: x[1:-1])

    element = quoted_string | bare_word
    key = "{" >> repsep(element, ",") << "}" > make_key

    floating_point = reg(r"[+-]?\d+((\.\d+([Ee][+-]?\d+)?)|((\.\d+)?[Ee][+-]?\d+))") > float
    integer = reg(r"[+-]?[0-9]+") > int
    value = floating_point | integer | quoted_string | bare_word

    entry = key & "=" >> value > tuple


def parse_key(string: str, /) -> result.Result[frozenset[str], ParseError | EmptyKeyError]:
    try:
        return EntryParsers.key.parse(string)
    except EmptyKeyError as e:
        return result.Failure(e)


def parse_entry(
    string: str, /
) -> result.Result[tuple[frozenset[str], Any], ParseError | EmptyKeyError]:
    try:
        return EntryParsers.entry.parse(string)
    except EmptyKeyError as e:
        return result.Failure(e)


def load_entries(
    lines: Iterable[str], /
) -> result.Result[SetMap[str, Any], ParseError | EmptyKeyError]:
    """Build a `SetMap` from lines of `{element, ...} = value`.

    Blank lines and lines starting with `#` are skipped. Later entries replace
    earlier entries with the same elements.
    """
    set_map = SetMap()
    for line in lines:
        stripped = line.strip()
        if stripped == "" or stripped.startswith("#"):
            continue

        match parse_entry(stripped):
            case result.Failure() as failure:
                return failure
            case result.Success((key, value)):
                set_map.upsert(key, value)
            case _:
                raise NotImplementedError()

    return result.Success(set_map)


def deparse_element(element: Any) -> str:
    text = str(element)
    if re.fullmatch(bare_word_pattern, text):
        return text
    else:
        return f'"{text}"'


def deparse_key(key: Iterable[Any]) -> str:
    return "{" + ", ".join(sorted(deparse_element(element) for element in key)) + "}"


def deparse_value(value: Any) -> str:
    # Quoting every string keeps values like "12" from reading back as numbers
    if isinstance(value, str):
        return f'"{value}"'
    else:
        return str(value)


def deparse_entry(key: Iterable[Any], value: Any) -> str:
    return f"{deparse_key(key)} = {deparse_value(value)}"
