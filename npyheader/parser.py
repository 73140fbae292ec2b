"""Recursive-descent parser for the literal sub-language used in NPY headers.

Grammar, with whitespace allowed between any two tokens::

    item    := integer | boolean | string | list | map
    integer := ['-'] digit+
    boolean := "True" | "False"
    string  := '"' not('"')* '"' | "'" not("'")* "'"
    list    := '[' (item (',' item)* ','?)? ']'
             | '(' (item (',' item)* ','?)? ')'
    map     := '{' (pair (',' pair)* ','?)? '}'
    pair    := string ':' item

Every ``_parse_*`` helper takes the input and an offset and returns the
parsed node together with the offset just past it. No state is kept between
calls.
"""
import logging

from numcodecs.compat import ensure_bytes

from npyheader.config import config, parse_max_depth
from npyheader.errors import ParseError, TruncatedInputError
from npyheader.value import Bool, Integer, List, Map, String, Value

from typing import Tuple

logger = logging.getLogger(__name__)

WHITESPACE = b" \t\r\n\x0b\x0c"
DIGITS = b"0123456789"

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_closing = {ord("["): ord("]"), ord("("): ord(")")}


def _skip_ws(data: bytes, pos: int) -> int:
    n = len(data)
    while pos < n and data[pos] in WHITESPACE:
        pos += 1
    return pos


def _peek(data: bytes, pos: int) -> int:
    if pos >= len(data):
        raise TruncatedInputError(pos, 1)
    return data[pos]


def _expect(data: bytes, pos: int, char: bytes) -> int:
    pos = _skip_ws(data, pos)
    if _peek(data, pos) != char[0]:
        raise ParseError(pos, "expected {!r}, found {!r}"
                         .format(char.decode(), chr(data[pos])))
    return pos + 1


def _parse_integer(data: bytes, pos: int) -> Tuple[Integer, int]:
    start = pos
    if data[pos] == ord("-"):
        pos += 1
    digits_start = pos
    n = len(data)
    while pos < n and data[pos] in DIGITS:
        pos += 1
    if pos == digits_start:
        if pos >= n:
            raise TruncatedInputError(pos, 1)
        raise ParseError(start, "malformed integer")
    value = int(data[start:pos])
    if not INT64_MIN <= value <= INT64_MAX:
        raise ParseError(start, "integer {} out of 64-bit range".format(value))
    return Integer(value), pos


def _parse_keyword(data: bytes, pos: int) -> Tuple[Bool, int]:
    remaining = data[pos:pos + 5]
    for word, value in ((b"True", True), (b"False", False)):
        if remaining.startswith(word):
            return Bool(value), pos + len(word)
        if remaining and word.startswith(remaining):
            raise TruncatedInputError(len(data), len(word) - len(remaining))
    raise ParseError(pos, "unknown token")


def _parse_string(data: bytes, pos: int) -> Tuple[String, int]:
    quote = data[pos]
    end = data.find(bytes([quote]), pos + 1)
    if end == -1:
        raise TruncatedInputError(len(data), 1)
    try:
        text = data[pos + 1:end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(pos + 1 + e.start, "invalid UTF-8 in string") from e
    return String(text), end + 1


def _parse_sequence(data, pos, close, parse_element, depth):
    """Parse comma-separated elements up to ``close``, allowing a trailing
    comma. ``pos`` points just past the opening delimiter."""
    elements = []
    pos = _skip_ws(data, pos)
    if _peek(data, pos) == close:
        return elements, pos + 1
    while True:
        element, pos = parse_element(data, pos, depth)
        elements.append(element)
        pos = _skip_ws(data, pos)
        c = _peek(data, pos)
        if c == close:
            return elements, pos + 1
        if c != ord(","):
            raise ParseError(pos, "expected ',' or {!r}, found {!r}"
                             .format(chr(close), chr(c)))
        pos = _skip_ws(data, pos + 1)
        if _peek(data, pos) == close:
            return elements, pos + 1


def _parse_list(data: bytes, pos: int, depth: int) -> Tuple[List, int]:
    close = _closing[data[pos]]
    items, pos = _parse_sequence(data, pos + 1, close, _parse_item, depth + 1)
    return List(items), pos


def _parse_pair(data, pos, depth):
    pos = _skip_ws(data, pos)
    if _peek(data, pos) not in (ord('"'), ord("'")):
        raise ParseError(pos, "map keys must be strings")
    key_pos = pos
    key, pos = _parse_string(data, pos)
    pos = _expect(data, pos, b":")
    value, pos = _parse_item(data, pos, depth)
    return (key_pos, key.text, value), pos


def _parse_map(data: bytes, pos: int, depth: int) -> Tuple[Map, int]:
    pairs, pos = _parse_sequence(data, pos + 1, ord("}"), _parse_pair, depth + 1)
    entries = {}
    for key_pos, key, value in pairs:
        if key in entries:
            raise ParseError(key_pos, "duplicate key {!r}".format(key))
        entries[key] = value
    return Map(entries), pos


def _parse_item(data: bytes, pos: int, depth: int = 0) -> Tuple[Value, int]:
    if depth > parse_max_depth(config.get("parser.max_depth")):
        raise ParseError(pos, "nesting too deep")
    pos = _skip_ws(data, pos)
    c = _peek(data, pos)
    if c == ord("-") or c in DIGITS:
        return _parse_integer(data, pos)
    if c in (ord('"'), ord("'")):
        return _parse_string(data, pos)
    if c in _closing:
        return _parse_list(data, pos, depth)
    if c == ord("{"):
        return _parse_map(data, pos, depth)
    return _parse_keyword(data, pos)


def parse_prefix(data, start: int = 0) -> Tuple[Value, int]:
    """Parse one item starting at ``start`` and return it together with the
    offset just past it. Anything after the item is left alone."""
    data = ensure_bytes(data)
    return _parse_item(data, start)


def parse_value(data, start: int = 0) -> Value:
    """Parse one item starting at ``start``, requiring that only whitespace
    follows it.

    Raises
    ------
    ParseError
        On any grammar violation or trailing input.
    TruncatedInputError
        If the input ends in the middle of an item.
    """
    data = ensure_bytes(data)
    value, end = _parse_item(data, start)
    end = _skip_ws(data, end)
    if end != len(data):
        raise ParseError(end, "unexpected trailing input")
    logger.debug("parsed %s from %d bytes", type(value).__name__, len(data) - start)
    return value


def loads(text) -> Value:
    """Parse a literal given as text."""
    if isinstance(text, str):
        text = text.encode("utf-8")
    return parse_value(text)
