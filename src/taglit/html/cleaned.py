"""Rewritten literal text that remembers where each piece came from."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True)
class _Piece:
    text: str
    clean_start: int
    source_start: int
    source_end: int
    verbatim: bool


class CleanedText:
    """Literal content after nested literals and interpolations were replaced.

    Offsets into :attr:`text` map back to document offsets: verbatim pieces
    map character by character, a replacement maps onto the whole span it
    stands in for.
    """

    def __init__(self, pieces: list[_Piece]) -> None:
        self._pieces = pieces
        self.text = "".join(p.text for p in pieces)
        self._starts = [p.clean_start for p in pieces]

    @classmethod
    def from_source(cls, source: str, start: int, end: int) -> CleanedText:
        return cls([_Piece(source[start:end], 0, start, end, True)])

    @classmethod
    def of(cls, text: str, base: int = 0) -> CleanedText:
        """Unmodified *text* whose first character sits at document offset *base*."""
        return cls([_Piece(text, 0, base, base + len(text), True)])

    def __str__(self) -> str:
        return self.text

    def to_source(self, offset: int, *, end: bool = False) -> int:
        """Map a cleaned offset to a document offset.

        With ``end=True`` the offset is treated as an exclusive end, so a
        span ending right after a replacement maps to the end of the
        replaced source.
        """
        if not self._pieces:
            return 0
        if end and offset > 0:
            piece = self._piece_at(offset - 1)
            if piece.verbatim:
                return piece.source_start + (offset - piece.clean_start)
            return piece.source_end
        piece = self._piece_at(offset)
        if piece.verbatim:
            return min(piece.source_start + (offset - piece.clean_start), piece.source_end)
        return piece.source_start

    def rewrite(self, edits: list[tuple[int, int, str]]) -> CleanedText:
        """Apply ``(start, end, replacement)`` edits given in cleaned offsets.

        Edits must be sorted and non-overlapping.
        """
        if not edits:
            return self
        pieces: list[_Piece] = []
        cursor = 0
        for start, end, replacement in edits:
            pieces.extend(self._slice(cursor, start))
            pieces.append(
                _Piece(
                    replacement,
                    0,
                    self.to_source(start),
                    self.to_source(end, end=True),
                    False,
                )
            )
            cursor = end
        pieces.extend(self._slice(cursor, len(self.text)))
        return CleanedText(_renumber(pieces))

    # -- internal ------------------------------------------------------------

    def _piece_at(self, offset: int) -> _Piece:
        idx = max(bisect_right(self._starts, offset) - 1, 0)
        return self._pieces[idx]

    def _slice(self, start: int, end: int) -> list[_Piece]:
        out: list[_Piece] = []
        if start >= end:
            return out
        for piece in self._pieces:
            p_start = piece.clean_start
            p_end = p_start + len(piece.text)
            lo = max(start, p_start)
            hi = min(end, p_end)
            if lo >= hi:
                continue
            text = piece.text[lo - p_start : hi - p_start]
            if piece.verbatim:
                shift = piece.source_start - p_start
                out.append(_Piece(text, 0, lo + shift, hi + shift, True))
            else:
                out.append(_Piece(text, 0, piece.source_start, piece.source_end, False))
        return out


def _renumber(pieces: list[_Piece]) -> list[_Piece]:
    out: list[_Piece] = []
    pos = 0
    for piece in pieces:
        out.append(_Piece(piece.text, pos, piece.source_start, piece.source_end, piece.verbatim))
        pos += len(piece.text)
    return out
