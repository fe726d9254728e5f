from __future__ import annotations

"""
Lightweight indexer for conslisp files without evaluating code.

We run the real tokenizer over the buffer and record:
- definitions: (define name ...), marked "function" when the value is a lambda
- bracket balance
- unknown characters the tokenizer would skip
- unterminated string literals

Only enough structure is kept to power the language server features
(document symbols, completion, hover, diagnostics).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from conslisp.reader.parser import CLOSERS, OPENERS
from conslisp.reader.tokenizer import Token, is_terminated_string, iter_tokens
from conslisp.types.value import Primitive


BUILTIN_SIGNATURES: Dict[str, str] = {
    Primitive.ADD.value: "(+ n1 n2 ...) -> integer, #f if any operand is not an integer",
    Primitive.SUB.value: "(- n1 n2 ...) -> n1 - (n2 - ...)",
    Primitive.MUL.value: "(* n1 n2 ...) -> integer",
    Primitive.DIV.value: "(/ n1 n2 ...) -> truncating division, #f on division by zero",
    Primitive.GT.value: "(> n1 n2 ...) -> #t when strictly decreasing",
    Primitive.LT.value: "(< n1 n2 ...) -> #t when strictly increasing",
    Primitive.GE.value: "(>= n1 n2 ...) -> #t when non-increasing",
    Primitive.LE.value: "(<= n1 n2 ...) -> #t when non-decreasing",
    Primitive.EQ.value: "(eq n1 n2 ...) -> #t when all integers are equal",
    Primitive.NE.value: "(ne n1 n2 ...) -> #t when adjacent integers differ",
    Primitive.BEGIN.value: "(begin form ...) -> value of the last form",
    Primitive.IF.value: "(if test then else) -> else branch only when test is #f",
    Primitive.NOT.value: "(not x) -> #t when x is #f",
    Primitive.DEFINE.value: "(define name value) -> binds in the innermost scope",
    Primitive.SETQ.value: "(setq name value) -> updates an existing binding",
    Primitive.CAR.value: "(car pair) -> head of pair",
    Primitive.CDR.value: "(cdr pair) -> tail of pair",
    Primitive.CONS.value: "(cons head tail) -> new pair",
    Primitive.LIST.value: "(list x ...) -> list of evaluated elements",
    Primitive.LENGTH.value: "(length list) -> number of elements",
    Primitive.NULL.value: "(null x) -> #t when x is the empty list",
    Primitive.ATOM.value: "(atom x) -> #t when x is not a pair",
    Primitive.APPEND.value: "(append list ...) -> concatenation",
    "quote": "(quote datum) -> datum, unevaluated",
    "lambda": "(lambda (params) body ...) -> closure",
}


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int


@dataclass
class CharIssue:
    text: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    paren_balance: int = 0
    unknown_chars: List[CharIssue] = field(default_factory=list)
    unterminated_strings: List[CharIssue] = field(default_factory=list)


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _is_definition(tokens: List[Token], i: int) -> bool:
    return (
        i + 2 < len(tokens)
        and tokens[i + 1].kind == "identifier"
        and tokens[i + 1].text.lower() == "define"
        and tokens[i + 2].kind in ("identifier", "hash_identifier")
    )


def _definition_kind(tokens: List[Token], value_at: int) -> str:
    if (
        value_at + 1 < len(tokens)
        and tokens[value_at].text in OPENERS
        and tokens[value_at + 1].text.lower() == "lambda"
    ):
        return "function"
    return "var"


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = list(iter_tokens(text))

    for i, tok in enumerate(tokens):
        if tok.kind == "unknown":
            line, col = _position_from_offset(text, tok.offset)
            idx.unknown_chars.append(CharIssue(tok.text, line, col))
            continue
        if tok.kind == "string" and not is_terminated_string(tok.text):
            line, col = _position_from_offset(text, tok.offset)
            idx.unterminated_strings.append(CharIssue(tok.text, line, col))
            continue
        if tok.text in CLOSERS:
            idx.paren_balance -= 1
        elif tok.text in OPENERS:
            idx.paren_balance += 1
            if _is_definition(tokens, i):
                name_tok = tokens[i + 2]
                name = name_tok.text.lower()
                # First definition wins, matching where a reader would jump to
                if name not in idx.symbols:
                    line, col = _position_from_offset(text, name_tok.offset)
                    idx.symbols[name] = SymbolDef(name, _definition_kind(tokens, i + 3), line, col)

    return idx
