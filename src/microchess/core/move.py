"""Move value objects: generated moves, history records, step results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from microchess.core.enums import Role, Side
from microchess.core.types import CAPTURED, NO_PIECE, Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """One generated move of an own piece."""

    from_sq: Square
    to_sq: Square
    piece: int

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"

    @property
    def role(self) -> Role:
        return Role.of_slot(self.piece)

    @property
    def hex(self) -> str:
        """Origin and destination as the original LED display shows them."""
        return f"{self.from_sq:02X} {self.to_sq:02X}"


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """Undo information pushed by :meth:`Position.apply_move`."""

    piece: int
    from_sq: Square
    to_sq: Square
    captured_piece: int = NO_PIECE
    captured_side: Side | None = None
    captured_sq: Square = CAPTURED
    direction: int = 0

    @property
    def is_capture(self) -> bool:
        return self.captured_piece != NO_PIECE


@dataclass(frozen=True, slots=True)
class StepResult:
    """Outcome of a single step, modelled on the N/V/C processor flags."""

    illegal: bool = False
    capture: bool = False
    in_check: bool = False

    @property
    def is_legal(self) -> bool:
        return not self.illegal and not self.in_check


ILLEGAL_STEP = StepResult(illegal=True)


class PieceLookup(NamedTuple):
    """Result of :meth:`Position.find_piece_at`."""

    piece: int
    found: bool
    is_own_side: bool


NOT_FOUND = PieceLookup(NO_PIECE, False, False)
