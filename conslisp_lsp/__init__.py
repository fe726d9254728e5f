"""Editor support for conslisp.

`indexer` scans a buffer with the interpreter's own tokenizer and records
definitions and lexical problems. `server` exposes that index over the
Language Server Protocol (pygls). Buffers are never evaluated.
"""

__all__ = [
    "indexer",
    "server",
]
