from __future__ import annotations

"""
Language server for conslisp source files, built on pygls.

Each open document is re-indexed on every change (see indexer.build_index)
and never evaluated. From that index the server answers:
- publishDiagnostics: bracket balance, skipped characters, open strings
- hover: primitive signatures, or where a name was defined
- completion: primitives plus the document's own definitions
- documentSymbol / definition: the `define` sites
"""

from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DefinitionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    Location,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)

from conslisp import __version__
from conslisp_lsp.indexer import BUILTIN_SIGNATURES, DocumentIndex, SymbolDef, build_index

SOURCE = "conslisp-ls"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class ConsLispLanguageServer(LanguageServer):
    CMD_NAME = "conslisp-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.documents: Dict[str, DocumentState] = {}

    def update_document(self, uri: str, text: str) -> DocumentState:
        state = DocumentState(text=text, index=build_index(text))
        self.documents[uri] = state
        return state

    def refresh(self, uri: str, text: str) -> None:
        state = self.update_document(uri, text)
        self.publish_diagnostics(uri, build_diagnostics(state.index))

    def word_at(self, uri: str, pos: Position) -> tuple[Optional[DocumentState], Optional[str]]:
        state = self.documents.get(uri)
        if state is None:
            return None, None
        return state, extract_word_at(state.text, pos)


ls = ConsLispLanguageServer()


@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(server: ConsLispLanguageServer, params: DidOpenTextDocumentParams):
    server.refresh(params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(server: ConsLispLanguageServer, params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    # Edits are already applied to the workspace copy
    server.refresh(uri, server.workspace.get_text_document(uri).source)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(server: ConsLispLanguageServer, params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    server.documents.pop(uri, None)
    server.publish_diagnostics(uri, [])


def _span(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def _diagnostic(span: Range, message: str, severity: DiagnosticSeverity) -> Diagnostic:
    return Diagnostic(range=span, message=message, severity=severity, source=SOURCE)


def build_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    """Translate the index's problems into LSP diagnostics, errors first."""
    diags: List[Diagnostic] = []
    if idx.paren_balance != 0:
        diags.append(_diagnostic(_span(0, 0), "Unbalanced parentheses.", DiagnosticSeverity.Error))
    diags.extend(
        _diagnostic(_span(c.line, c.col), f"unknown character '{c.text}' ignored.", DiagnosticSeverity.Warning)
        for c in idx.unknown_chars
    )
    diags.extend(
        _diagnostic(_span(s.line, s.col, len(s.text)), "Unterminated string literal", DiagnosticSeverity.Warning)
        for s in idx.unterminated_strings
    )
    return diags


def hover_text(state: DocumentState, word: str) -> Optional[str]:
    name = word.lower()
    signature = BUILTIN_SIGNATURES.get(name)
    if signature is not None:
        return signature
    sdef = state.index.symbols.get(name)
    if sdef is None:
        return None
    return f"{name}: {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(server: ConsLispLanguageServer, params: HoverParams) -> Optional[Hover]:
    state, word = server.word_at(params.text_document.uri, params.position)
    text = hover_text(state, word) if word else None
    if text is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=text))


def _is_function(sdef: SymbolDef) -> bool:
    return sdef.kind == "function"


def completion_items(state: Optional[DocumentState]) -> List[CompletionItem]:
    """Primitives first, then the names this document defines."""
    items = [
        CompletionItem(label=name, kind=CompletionItemKind.Function, detail=signature)
        for name, signature in BUILTIN_SIGNATURES.items()
    ]
    if state is not None:
        items.extend(
            CompletionItem(
                label=name,
                kind=CompletionItemKind.Function if _is_function(sdef) else CompletionItemKind.Variable,
            )
            for name, sdef in state.index.symbols.items()
        )
    return items


@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(server: ConsLispLanguageServer, params: CompletionParams) -> CompletionList:
    state = server.documents.get(params.text_document.uri)
    return CompletionList(is_incomplete=False, items=completion_items(state))


def document_symbols(state: DocumentState) -> List[DocumentSymbol]:
    result = []
    for name, sdef in state.index.symbols.items():
        span = _span(sdef.line, sdef.col, len(name))
        kind = SymbolKind.Function if _is_function(sdef) else SymbolKind.Variable
        result.append(DocumentSymbol(name=name, kind=kind, range=span, selection_range=span))
    return result


@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(
    server: ConsLispLanguageServer, params: DocumentSymbolParams
) -> Optional[List[DocumentSymbol]]:
    state = server.documents.get(params.text_document.uri)
    return document_symbols(state) if state else None


def definition_range(state: DocumentState, word: str) -> Optional[Range]:
    """Where `word` is first defined in the document, if anywhere."""
    name = word.lower()
    sdef = state.index.symbols.get(name)
    if sdef is None:
        return None
    return _span(sdef.line, sdef.col, len(name))


@ls.feature(TEXT_DOCUMENT_DEFINITION)
def on_definition(server: ConsLispLanguageServer, params: DefinitionParams) -> Optional[Location]:
    uri = params.text_document.uri
    state, word = server.word_at(uri, params.position)
    span = definition_range(state, word) if word else None
    return Location(uri=uri, range=span) if span else None


_WORD_BREAKS = frozenset(" \t\n\r()[]{}\"")


def extract_word_at(text: str, pos: Position) -> Optional[str]:
    """The identifier-ish run of characters around `pos`, or None."""
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in _WORD_BREAKS:
        start -= 1
    while end < len(line) and line[end] not in _WORD_BREAKS:
        end += 1
    return line[start:end] or None


def main() -> None:
    ls.start_io()


if __name__ == "__main__":
    main()
