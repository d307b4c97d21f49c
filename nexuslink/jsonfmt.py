"""A small JSON reader and writer.

Values are plain Python objects: ``None``, ``bool``, ``float``, ``str``,
``list`` and ``dict``. Parsed numbers are always floats. Within an object
the first occurrence of a repeated key wins.
"""

from __future__ import annotations

import math
import os
import re
from typing import Any, Iterator

__all__ = [
    "JsonParseError",
    "parse",
    "parse_file",
    "to_string",
    "write_file",
    "get_string",
    "get_number",
    "get_bool",
]

_WHITESPACE = " \t\n\v\f\r"

_STRING_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\", '"': '"'}

_OUTPUT_ESCAPES = str.maketrans(
    {'"': '\\"', "\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t"}
)

_NUMBER = re.compile(
    r"""
    [+-]?
    (?:
        (?P<hex>0[xX](?:[0-9a-fA-F]+(?:\.[0-9a-fA-F]*)?|\.[0-9a-fA-F]+)
            (?:[pP][+-]?[0-9]+)?)
      | (?P<dec>(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)
      | (?P<inf>[iI][nN][fF](?:[iI][nN][iI][tT][yY])?)
      | (?P<nan>[nN][aA][nN](?:\([0-9A-Za-z_]*\))?)
    )
    """,
    re.VERBOSE,
)

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class JsonParseError(ValueError):
    """Raised when text is not a JSON document this parser accepts."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at position {position}")
        self.position = position


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _fail(self, message: str) -> JsonParseError:
        return JsonParseError(message, self.pos)

    def skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

    def document(self) -> Any:
        value = self.value()
        self.skip_whitespace()
        if self.pos != len(self.text):
            raise self._fail("unexpected trailing content")
        return value

    def value(self) -> Any:
        self.skip_whitespace()
        char = self._peek()
        if char == "n":
            return self._literal("null", None)
        if char == "t":
            return self._literal("true", True)
        if char == "f":
            return self._literal("false", False)
        if char == '"':
            return self.string()
        if char == "[":
            return self.array()
        if char == "{":
            return self.object()
        if char == "-" or char.isdigit() and char.isascii():
            return self.number()
        raise self._fail("unexpected character" if char else "unexpected end of input")

    def _literal(self, word: str, result: Any) -> Any:
        if not self.text.startswith(word, self.pos):
            raise self._fail(f"expected {word!r}")
        self.pos += len(word)
        return result

    def string(self) -> str:
        if self._peek() != '"':
            raise self._fail("expected string")
        self.pos += 1
        chars: list[str] = []
        while True:
            char = self._peek()
            if not char:
                raise self._fail("unterminated string")
            if char == '"':
                self.pos += 1
                return "".join(chars)
            if char == "\\":
                self.pos += 1
                escaped = self._peek()
                if not escaped:
                    raise self._fail("unterminated string")
                chars.append(_STRING_ESCAPES.get(escaped, escaped))
            else:
                chars.append(char)
            self.pos += 1

    def number(self) -> float:
        match = _NUMBER.match(self.text, self.pos)
        if match is None:
            raise self._fail("invalid number")
        token = match.group(0)
        self.pos = match.end()
        if match.group("hex"):
            try:
                return float.fromhex(token)
            except OverflowError:
                return -math.inf if token.startswith("-") else math.inf
        if match.group("nan"):
            return math.nan
        return float(token)

    def array(self) -> list[Any]:
        self.pos += 1
        items: list[Any] = []
        self.skip_whitespace()
        if self._peek() == "]":
            self.pos += 1
            return items
        while True:
            items.append(self.value())
            self.skip_whitespace()
            char = self._peek()
            if char == "]":
                self.pos += 1
                return items
            if char != ",":
                raise self._fail("expected ',' or ']'")
            self.pos += 1

    def object(self) -> dict[str, Any]:
        self.pos += 1
        members: dict[str, Any] = {}
        self.skip_whitespace()
        if self._peek() == "}":
            self.pos += 1
            return members
        while True:
            self.skip_whitespace()
            key = self.string()
            self.skip_whitespace()
            if self._peek() != ":":
                raise self._fail("expected ':'")
            self.pos += 1
            members.setdefault(key, self.value())
            self.skip_whitespace()
            char = self._peek()
            if char == "}":
                self.pos += 1
                return members
            if char != ",":
                raise self._fail("expected ',' or '}'")
            self.pos += 1


def parse(text: str) -> Any:
    """Parse a JSON document held in a string."""
    return _Parser(text).document()


def parse_file(path: str | os.PathLike[str]) -> Any:
    """Read and parse a JSON document from a file."""
    with open(path, encoding="utf-8") as handle:
        return parse(handle.read())


def _format_number(number: float) -> str:
    number = float(number)
    if math.isfinite(number) and number.is_integer() and _INT_MIN <= number <= _INT_MAX:
        return str(int(number))
    return "%g" % number


def _emit(value: Any, indent: int, level: int) -> Iterator[str]:
    if value is None:
        yield "null"
    elif isinstance(value, bool):
        yield "true" if value else "false"
    elif isinstance(value, (int, float)):
        yield _format_number(value)
    elif isinstance(value, str):
        yield '"' + value.translate(_OUTPUT_ESCAPES) + '"'
    elif isinstance(value, (list, tuple)):
        yield from _emit_array(value, indent, level)
    elif isinstance(value, dict):
        yield from _emit_object(value, indent, level)
    else:
        raise TypeError(f"cannot encode {type(value).__name__} as JSON")


def _emit_array(items: list[Any] | tuple[Any, ...], indent: int, level: int) -> Iterator[str]:
    if indent and items:
        inner = level + indent
        yield "[\n"
        for position, item in enumerate(items):
            if position:
                yield ",\n"
            yield " " * inner
            yield from _emit(item, indent, inner)
        yield "\n" + " " * level + "]"
    else:
        yield "["
        for position, item in enumerate(items):
            if position:
                yield ","
            yield from _emit(item, 0, 0)
        yield "]"


def _check_key(key: Any) -> str:
    if not isinstance(key, str):
        raise TypeError(f"object keys must be str, not {type(key).__name__}")
    return key


def _emit_object(members: dict[str, Any], indent: int, level: int) -> Iterator[str]:
    if indent and members:
        inner = level + indent
        yield "{\n"
        for position, (key, item) in enumerate(members.items()):
            if position:
                yield ",\n"
            yield " " * inner + f'"{_check_key(key)}": '
            yield from _emit(item, indent, inner)
        yield "\n" + " " * level + "}"
    else:
        yield "{"
        for position, (key, item) in enumerate(members.items()):
            if position:
                yield ","
            yield f'"{_check_key(key)}":'
            yield from _emit(item, 0, 0)
        yield "}"


def to_string(value: Any, pretty: bool = False) -> str:
    """Serialise a value; ``pretty`` indents nested containers by two spaces.

    Object keys are written as they are, without escaping.
    """
    return "".join(_emit(value, 2 if pretty else 0, 0))


def write_file(value: Any, path: str | os.PathLike[str], pretty: bool = False) -> None:
    """Serialise a value into a file, replacing its contents."""
    text = to_string(value, pretty)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)


def get_string(obj: Any, key: str, default: str | None = None) -> str | None:
    """Return ``obj[key]`` if ``obj`` is an object and the member is a string."""
    if isinstance(obj, dict):
        found = obj.get(key)
        if isinstance(found, str):
            return found
    return default


def get_number(obj: Any, key: str, default: float = 0.0) -> float:
    """Return ``obj[key]`` if ``obj`` is an object and the member is a number."""
    if isinstance(obj, dict):
        found = obj.get(key)
        if isinstance(found, (int, float)) and not isinstance(found, bool):
            return float(found)
    return default


def get_bool(obj: Any, key: str, default: bool = False) -> bool:
    """Return ``obj[key]`` if ``obj`` is an object and the member is a boolean."""
    if isinstance(obj, dict):
        found = obj.get(key)
        if isinstance(found, bool):
            return found
    return default