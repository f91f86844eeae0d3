"""
SQL utilities - engine-agnostic helpers for SQL script handling.

Single source of truth for splitting an init file into executable statements
and for rendering a statement as a short single-line summary for logs and
error messages. No engine or dialect dependency.
"""

from enum import Enum

STATEMENT_TERMINATOR = ";"
ELLIPSIS = "..."


class LexMode(Enum):
    """Lexical mode of the statement scanner. Exactly one is active at a time."""

    NORMAL = "normal"
    IN_STRING = "in_string"
    IN_LINE_COMMENT = "in_line_comment"
    IN_BLOCK_COMMENT = "in_block_comment"


def _flush(current: list[str], statements: list[str]) -> None:
    """Append the trimmed accumulator to statements (if non-empty) and reset it."""
    statement = "".join(current).strip()
    if statement:
        statements.append(statement)
    current.clear()


def split_sql_statements(sql_text: str) -> list[str]:
    """Split SQL script into statements, ignoring terminators in strings and comments.

    Single left-to-right scan with one character of lookahead:

    - ``'...'`` string literals are kept verbatim; ``''`` inside a string is an
      escaped quote and does not close it.
    - ``-- ...`` line comments are removed up to (not including) the newline,
      which is kept so multi-line statements keep their layout.
    - ``/* ... */`` block comments are removed without inserting a space.
    - ``;`` outside strings and comments ends a statement.

    Unterminated strings and comments run to the end of the input; this never
    raises. Empty (all-whitespace) statements are not included.

    Args:
        sql_text: Raw SQL script content (e.g. from an init file).

    Returns:
        List of non-empty, trimmed statement strings, in order.
    """
    statements: list[str] = []
    current: list[str] = []
    mode = LexMode.NORMAL

    n = len(sql_text)
    i = 0
    while i < n:
        char = sql_text[i]
        nxt = sql_text[i + 1] if i + 1 < n else ""

        if mode is LexMode.IN_LINE_COMMENT:
            if char == "\n":
                current.append(char)
                mode = LexMode.NORMAL
            i += 1
            continue

        if mode is LexMode.IN_BLOCK_COMMENT:
            if char == "*" and nxt == "/":
                mode = LexMode.NORMAL
                i += 2
            else:
                i += 1
            continue

        if mode is LexMode.IN_STRING:
            current.append(char)
            if char == "'":
                if nxt == "'":
                    current.append(nxt)
                    i += 2
                    continue
                mode = LexMode.NORMAL
            i += 1
            continue

        # NORMAL
        if char == "'":
            mode = LexMode.IN_STRING
            current.append(char)
        elif char == "-" and nxt == "-":
            mode = LexMode.IN_LINE_COMMENT
            i += 1
        elif char == "/" and nxt == "*":
            mode = LexMode.IN_BLOCK_COMMENT
            i += 1
        elif char == STATEMENT_TERMINATOR:
            _flush(current, statements)
        else:
            current.append(char)
        i += 1

    _flush(current, statements)
    return statements


def truncate_statement(statement: str, max_len: int) -> str:
    """Render a statement on one line, cut to at most ``max_len`` characters.

    Whitespace runs (newlines included) collapse to single spaces. Longer
    results keep their first ``max_len - 3`` characters followed by ``...``.
    Callers must pass ``max_len >= 4``.
    """
    collapsed = " ".join(statement.split())
    if len(collapsed) <= max_len:
        return collapsed
    return collapsed[: max_len - len(ELLIPSIS)] + ELLIPSIS
