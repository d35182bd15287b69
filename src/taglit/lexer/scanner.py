"""Context-aware character scanner for JavaScript/TypeScript source.

Every consumer of source text (literal extraction, fold-end search,
interpolation discovery, block-comment membership) drives the same state
machine.  The machine keeps an explicit stack of context frames:

* ``NORMAL``: code (document top level, ``${...}`` bodies, ``{...}`` blocks)
* ``SINGLE_QUOTE`` / ``DOUBLE_QUOTE``: string literals inside code
* ``LITERAL``: template literal text
* ``BLOCK_COMMENT``: ``/* ... */`` inside code

A scan terminates when its root frame is popped (closing backtick of a
literal, closing brace of an interpolation) or when the caller's target
offset is reached.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum


class Context(StrEnum):
    NORMAL = "normal"
    SINGLE_QUOTE = "single_quote"
    DOUBLE_QUOTE = "double_quote"
    LITERAL = "literal"
    BLOCK_COMMENT = "block_comment"


_QUOTE_OPENERS: dict[str, Context] = {
    "'": Context.SINGLE_QUOTE,
    '"': Context.DOUBLE_QUOTE,
}
_QUOTE_CLOSERS: dict[Context, str] = {ctx: ch for ch, ctx in _QUOTE_OPENERS.items()}


@dataclass
class ScanState:
    """Mutable stack of context frames.

    ``closable`` is False for document-level scans: a stray ``}`` at the
    root is ignored instead of ending the scan.
    """

    frames: list[Context] = field(default_factory=lambda: [Context.NORMAL])
    closable: bool = True

    @classmethod
    def document(cls) -> ScanState:
        return cls(frames=[Context.NORMAL], closable=False)

    @classmethod
    def inside_literal(cls) -> ScanState:
        """State just past an opening backtick."""
        return cls(frames=[Context.LITERAL])

    @classmethod
    def inside_interpolation(cls) -> ScanState:
        """State just past a ``${``."""
        return cls(frames=[Context.NORMAL])

    @property
    def context(self) -> Context:
        return self.frames[-1] if self.frames else Context.NORMAL

    @property
    def closed(self) -> bool:
        return not self.frames

    @property
    def interpolation_depth(self) -> int:
        """Number of open code frames entered through ``${`` or ``{``."""
        depth = sum(1 for f in self.frames if f is Context.NORMAL)
        if not self.closable and self.frames and self.frames[0] is Context.NORMAL:
            depth -= 1
        return depth

    def push(self, ctx: Context) -> None:
        self.frames.append(ctx)

    def pop(self) -> None:
        self.frames.pop()


def step(text: str, i: int, state: ScanState) -> int:
    """Consume the unit starting at *i*, update *state*, return the next index.

    Escapes (``\\x``), ``${``, ``/*`` and ``*/`` are consumed as two-character
    units, so a backslash never escapes across two iterations.
    """
    ch = text[i]
    nxt = text[i + 1] if i + 1 < len(text) else ""
    ctx = state.context

    if ctx is Context.BLOCK_COMMENT:
        if ch == "*" and nxt == "/":
            state.pop()
            return i + 2
        return i + 1

    if ctx in _QUOTE_CLOSERS:
        if ch == "\\":
            return i + 2
        if ch == _QUOTE_CLOSERS[ctx]:
            state.pop()
        return i + 1

    if ctx is Context.LITERAL:
        if ch == "\\":
            return i + 2
        if ch == "`":
            state.pop()
        elif ch == "$" and nxt == "{":
            state.push(Context.NORMAL)
            return i + 2
        return i + 1

    # NORMAL (code)
    if ch in _QUOTE_OPENERS:
        state.push(_QUOTE_OPENERS[ch])
    elif ch == "`":
        state.push(Context.LITERAL)
    elif ch == "/" and nxt == "*":
        state.push(Context.BLOCK_COMMENT)
        return i + 2
    elif ch == "{":
        state.push(Context.NORMAL)
    elif ch == "}":
        if len(state.frames) > 1 or state.closable:
            state.pop()
    return i + 1


def walk(text: str, start: int, state: ScanState, end: int | None = None) -> Iterator[int]:
    """Advance through ``text[start:end]`` yielding the offset of each consumed unit.

    Stops early once the root frame of *state* has been popped; the last
    yielded offset is then the unit that closed it.
    """
    limit = len(text) if end is None else min(end, len(text))
    i = start
    while i < limit and not state.closed:
        nxt = step(text, i, state)
        yield i
        i = nxt


def _scan_to_close(text: str, start: int, state: ScanState, end: int | None) -> int | None:
    for offset in walk(text, start, state, end):
        if state.closed:
            return offset
    return None


def find_closing_backtick(text: str, start: int, end: int | None = None) -> int | None:
    """Offset of the backtick closing the literal whose content begins at *start*.

    Returns ``None`` when the literal is unterminated before *end*.
    """
    return _scan_to_close(text, start, ScanState.inside_literal(), end)


def find_interpolation_end(text: str, start: int, end: int | None = None) -> int | None:
    """Offset of the ``}`` closing an interpolation whose body begins at *start*."""
    return _scan_to_close(text, start, ScanState.inside_interpolation(), end)


def iter_interpolations(
    text: str, start: int = 0, end: int | None = None
) -> Iterator[tuple[int, int]]:
    """Yield ``(dollar_offset, brace_offset)`` for each top-level ``${...}``.

    ``text[start:end]`` is treated as literal content.  Unterminated
    interpolations are skipped.
    """
    limit = len(text) if end is None else min(end, len(text))
    i = start
    while i < limit:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "$" and i + 1 < limit and text[i + 1] == "{":
            close = find_interpolation_end(text, i + 2, limit)
            if close is None:
                i += 2
                continue
            yield i, close
            i = close + 1
            continue
        i += 1


class CommentTracker:
    """Answers "is this offset inside a block comment?" for one document.

    The document is scanned once, on the first query, into sorted comment
    intervals.  An offset is inside a comment when it lies after the ``/``
    of ``/*`` and at or before the ``*`` of the closing ``*/``; an
    unterminated comment runs to the end of the text.  Answers do not
    depend on the order of queries.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._starts: list[int] | None = None
        self._ends: list[int] = []

    def _scan(self) -> list[int]:
        text = self._text
        starts: list[int] = []
        ends: list[int] = []
        state = ScanState.document()
        i = 0
        n = len(text)
        while i < n:
            was_comment = state.context is Context.BLOCK_COMMENT
            nxt = step(text, i, state)
            in_comment = state.context is Context.BLOCK_COMMENT
            if in_comment and not was_comment:
                starts.append(i)
            elif was_comment and not in_comment:
                ends.append(i)
            i = nxt
        if len(ends) < len(starts):
            ends.append(n)
        self._ends = ends
        return starts

    def is_inside(self, offset: int) -> bool:
        if self._starts is None:
            self._starts = self._scan()
        offset = min(offset, len(self._text))
        idx = bisect_left(self._starts, offset) - 1
        return idx >= 0 and offset <= self._ends[idx]


def is_inside_block_comment(text: str, offset: int) -> bool:
    """True when *offset* falls inside a ``/* ... */`` comment in code."""
    return CommentTracker(text).is_inside(offset)
