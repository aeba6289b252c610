"""Core enumerations for the position engine."""

from __future__ import annotations

from enum import IntEnum


class Side(IntEnum):
    """Which of the two piece arrays a slot belongs to."""

    MINE = 0
    THEIRS = 1

    def __str__(self) -> str:
        return self.name.lower()


class Role(IntEnum):
    """Piece roles; the slot index alone decides the role."""

    KING = 0
    QUEEN = 1
    ROOK = 2
    BISHOP = 3
    KNIGHT = 4
    PAWN = 5

    @classmethod
    def of_slot(cls, slot: int) -> Role:
        """Role of piece slot 0–15 (0=K, 1=Q, 2–3=R, 4–5=B, 6–7=N, 8–15=P)."""
        if slot >= 8:
            return cls.PAWN
        if slot >= 6:
            return cls.KNIGHT
        if slot >= 4:
            return cls.BISHOP
        if slot >= 2:
            return cls.ROOK
        if slot == 1:
            return cls.QUEEN
        return cls.KING

    @property
    def letter(self) -> str:
        return "KQRBNP"[self.value]


class AnalysisState(IntEnum):
    """Named analysis depths.

    The state selects a counter slot and decides whether candidate moves
    are probed for self-check.  Only ``0 <= state < 8`` probes.
    """

    CHECK_PROBE = -7
    BLACK = 0
    FULL = 4
    WHITE = 8
    POSITION = 12

    @staticmethod
    def probes_check(state: int) -> bool:
        """Whether moves generated at *state* are filtered for self-check."""
        return 0 <= state < 8
