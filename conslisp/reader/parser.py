"""
  Recursive-descent reader: tokens -> Pair trees.

    object := INTEGER | STRING | SYMBOL | open list
    list   := object list | close

- ( [ { open a list, ) ] } close it
- () -> NIL, (a b c) -> Pair(a, Pair(b, Pair(c, NIL)))
- integers -> int, strings -> str (text between the quotes, kept raw)
- everything else -> Symbol, lower-cased; #t #f #nil #error -> the sentinels

The reader never raises: a closing bracket where an object is expected reads
as NIL, and running out of tokens closes any open list. Callers check bracket
balance beforehand (see check_balance).
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from conslisp import SExpression
from conslisp.types.symbol import NIL, make_symbol
from conslisp.types.value import from_iterable, wrap_int64
from conslisp.reader.tokenizer import tokenize

OPENERS = frozenset("([{")
CLOSERS = frozenset(")]}")

_INTEGER_RE = re.compile(r"([+-]?)(?:0[xX]([0-9A-Fa-f]+)|([0-9]+))")


class Cursor:
    """Position in a token sequence, shared by the recursive parse calls."""

    __slots__ = ("tokens", "position")

    def __init__(self, tokens: Sequence[str], position: int = 0):
        self.tokens = tokens
        self.position = position

    def peek(self) -> Optional[str]:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def advance(self) -> Optional[str]:
        token = self.peek()
        if token is not None:
            self.position += 1
        return token

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.tokens)

    @property
    def remaining(self) -> list[str]:
        return list(self.tokens[self.position:])

    def __repr__(self) -> str:
        return f"Cursor({self.position}/{len(self.tokens)})"


def _is_integer_token(token: str) -> bool:
    if token[:1].isdigit():
        return True
    return len(token) > 1 and token[0] in "+-" and token[1].isdigit()


def parse_integer(token: str) -> int:
    """Read the leading integer of `token` (decimal, or hex after 0x)."""
    m = _INTEGER_RE.match(token)
    sign, hex_digits, dec_digits = m.groups()
    n = int(hex_digits, 16) if hex_digits else int(dec_digits)
    return wrap_int64(-n if sign == "-" else n)


def _string_literal(token: str) -> str:
    body = token[1:]
    if body.endswith('"'):
        body = body[:-1]
    return body


def classify(token: str) -> SExpression:
    """Turn one non-bracket token into an atom; an empty token is absent."""
    if not token:
        return None
    if _is_integer_token(token):
        return parse_integer(token)
    if token[0] == '"':
        return _string_literal(token)
    return make_symbol(token.lower())


def parse_object(cursor: Cursor) -> SExpression:
    token = cursor.advance()
    if token is None:
        return None
    if token in OPENERS:
        return _parse_list(cursor)
    if token in CLOSERS:
        # Unmatched close where an object belongs
        return NIL
    return classify(token)


def _parse_list(cursor: Cursor) -> SExpression:
    items = []
    while True:
        token = cursor.peek()
        if token is None:
            break
        if token in CLOSERS:
            cursor.advance()
            break
        items.append(parse_object(cursor))
    return from_iterable(items)


def parse(tokens: Sequence[str], cursor: Optional[Cursor] = None) -> tuple[SExpression, Cursor]:
    """Parse one object; returns it with the cursor left just past it.

    Tokens after the cursor are extraneous input for a single-line request.
    """
    if cursor is None:
        cursor = Cursor(tokens)
    return parse_object(cursor), cursor


def read(source: str, session=None) -> SExpression:
    """Tokenize and parse the first object in `source`."""
    expr, _ = parse(tokenize(source, session))
    return expr


def check_balance(tokens: Sequence[str]) -> int:
    """Opening minus closing brackets; zero when balanced."""
    depth = 0
    for token in tokens:
        if token in OPENERS:
            depth += 1
        elif token in CLOSERS:
            depth -= 1
    return depth
