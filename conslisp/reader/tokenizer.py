"""
  Lexer for conslisp source text.

- Single-character tokens: ( ) [ ] { } : * /
- Identifiers: letter or underscore, then letters, digits, underscores
- Hash identifiers: '#' followed by a letter (#t, #f, #nil, #error)
- Integers: optional sign, decimal digits or 0x-prefixed hex digits
- A lone + or - when not starting a number
- Relational operators: < > <= >=
- Strings: double-quoted, ending at the closing quote or end of line. A '
  inside a string copies the following character verbatim, so '" does not
  close the string.

Tokens are raw text; classification into values happens in the parser.
Unrecognized characters are reported and skipped.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, NamedTuple

logger = logging.getLogger(__name__)


TOKEN_RE = re.compile(
    r"(?P<bracket>[()\[\]{}:*/])"
    r"|(?P<integer>[+-]?(?:0[xX][0-9A-Fa-f]+|[0-9]+))"
    r"|(?P<sign>[+-])"
    r"|(?P<identifier>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<hash_identifier>\#[A-Za-z][A-Za-z0-9_]*)"
    r"|(?P<relational>[<>]=?)"
    r"|(?P<string>\"(?:'[^\n]?|[^\"'\n])*\"?)"
)


class Token(NamedTuple):
    kind: str
    text: str
    offset: int


def _skippable(ch: str) -> bool:
    return ch.isspace() or not ch.isprintable()


def iter_tokens(source: str) -> Iterator[Token]:
    """Token generator, including `unknown` tokens for unrecognized characters."""
    pos = 0
    n = len(source)
    while pos < n:
        ch = source[pos]
        if _skippable(ch):
            pos += 1
            continue
        m = TOKEN_RE.match(source, pos)
        if not m:
            yield Token("unknown", ch, pos)
            pos += 1
            continue
        yield Token(m.lastgroup, m.group(), pos)
        pos = m.end()


def tokenize(source: str, session=None) -> list[str]:
    """Split `source` into raw token strings, reporting unknown characters."""
    tokens: list[str] = []
    for tok in iter_tokens(source):
        if tok.kind == "unknown":
            message = f"unknown character '{tok.text}' ignored."
            if session is not None:
                session.report(message, logger)
            else:
                logger.warning(message)
            continue
        tokens.append(tok.text)
    return tokens


def is_terminated_string(token: str) -> bool:
    """True when a string token ends with a real (not '-escaped) closing quote."""
    i = 1
    while i < len(token):
        ch = token[i]
        if ch == "'":
            i += 2
            continue
        if ch == '"':
            return True
        i += 1
    return False
