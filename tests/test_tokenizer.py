import logging

import pytest

from conslisp.reader.tokenizer import iter_tokens, tokenize, is_terminated_string
from conslisp.session import EvaluationSession


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", ["a"]),
        ("(a b c)", ["(", "a", "b", "c", ")"]),
        ("[x]{y}", ["[", "x", "]", "{", "y", "}"]),
        ("(* 2 3)", ["(", "*", "2", "3", ")"]),
        ("(/ 8 2)", ["(", "/", "8", "2", ")"]),
        ("a:b", ["a", ":", "b"]),
        ("foo_bar9 _x", ["foo_bar9", "_x"]),
        ("#t #f #nil #error", ["#t", "#f", "#nil", "#error"]),
        ("-12 +7 42", ["-12", "+7", "42"]),
        ("(+ 1 2)", ["(", "+", "1", "2", ")"]),
        ("(- x)", ["(", "-", "x", ")"]),
        ("0x1F 0XaB", ["0x1F", "0XaB"]),
        ("12abc", ["12", "abc"]),
        ("< > <= >=", ["<", ">", "<=", ">="]),
        ("(<=1 2)", ["(", "<=", "1", "2", ")"]),
        ('"hello world"', ['"hello world"']),
        ('("a" "b")', ["(", '"a"', '"b"', ")"]),
        ("  \t(a)\x01 ", ["(", "a", ")"]),
        ("(a\nb)", ["(", "a", "b", ")"]),
    ],
)
def test_tokenize(source, expected):
    assert tokenize(source) == expected


def test_apostrophe_in_string_protects_next_character():
    # '" does not close the string; both characters are kept verbatim
    assert tokenize("\"say '\"hi'\" now\" x") == ['"say \'"hi\'" now"', "x"]


def test_unterminated_string_stops_at_end_of_line():
    assert tokenize('"abc\n(x)') == ['"abc', "(", "x", ")"]


def test_unknown_characters_are_reported_and_skipped():
    session = EvaluationSession()
    tokens = tokenize("(a ? b = c)", session)
    assert tokens == ["(", "a", "b", "c", ")"]
    assert session.diagnostics == [
        "unknown character '?' ignored.",
        "unknown character '=' ignored.",
    ]


def test_unknown_character_without_session_is_logged(caplog):
    assert tokenize("a ; b") == ["a", "b"]
    assert "unknown character ';' ignored." in caplog.text


def test_unknown_character_with_session_logs_under_reader(caplog):
    caplog.set_level(logging.INFO, logger="conslisp.reader")
    session = EvaluationSession()
    tokenize("a @ b", session)
    records = [r for r in caplog.records if "unknown character" in r.getMessage()]
    assert [(r.name, r.levelname) for r in records] == [("conslisp.reader.tokenizer", "INFO")]
    assert session.diagnostics == ["unknown character '@' ignored."]


def test_hash_needs_a_letter():
    session = EvaluationSession()
    assert tokenize("#1", session) == ["1"]
    assert session.diagnostics == ["unknown character '#' ignored."]


def test_iter_tokens_kinds_and_offsets():
    toks = list(iter_tokens('(define x "s") ?'))
    assert [(t.kind, t.text, t.offset) for t in toks] == [
        ("bracket", "(", 0),
        ("identifier", "define", 1),
        ("identifier", "x", 8),
        ("string", '"s"', 10),
        ("bracket", ")", 13),
        ("unknown", "?", 15),
    ]


@pytest.mark.parametrize(
    "token,expected",
    [
        ('"abc"', True),
        ('""', True),
        ('"abc', False),
        ('"', False),
        ("\"a'\"", False),
        ("\"a'\"b\"", True),
    ],
)
def test_is_terminated_string(token, expected):
    assert is_terminated_string(token) is expected
