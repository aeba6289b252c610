"""Mobility/capture counters and the fixed-point position score."""

from __future__ import annotations

from dataclasses import dataclass, field

from microchess.core.enums import AnalysisState, Role
from microchess.core.tables import PIECE_VALUES
from microchess.core.types import NO_PIECE, to_byte

COUNTER_SLOTS = 16

_PHASE1_BASE = 0x80
_PHASE2_BASE = 0x40
_PHASE3_BASE = 0x90
_SCORE_MAX = 0xFF


def counter_slot(state: int) -> int | None:
    """Counter slot for *state*, or ``None`` when the state has no slot."""
    if -COUNTER_SLOTS <= state < COUNTER_SLOTS:
        return state % COUNTER_SLOTS
    return None


@dataclass(frozen=True, slots=True)
class Tally:
    """Counters of one analysis pass."""

    mobility: int = 0
    max_capture: int = 0
    capture_sum: int = 0
    best_piece: int = NO_PIECE


@dataclass(frozen=True, slots=True)
class EvaluationInputs:
    """Every byte the scoring formula reads.

    ``white`` and ``black`` are the passes for the side to move and its
    opponent; ``position`` is the pass over the position before the move.
    The capture-depth triples are only filled by a capture search.
    """

    white: Tally = field(default_factory=Tally)
    black: Tally = field(default_factory=Tally)
    position: Tally = field(default_factory=Tally)
    white_captures: tuple[int, int, int] = (0, 0, 0)
    black_captures: tuple[int, int, int] = (0, 0, 0)


class Counters:
    """Per-state counter arrays filled while moves are generated."""

    __slots__ = ("mobility", "max_capture", "capture_sum", "best_piece")

    def __init__(self) -> None:
        self.mobility = [0] * COUNTER_SLOTS
        self.max_capture = [0] * COUNTER_SLOTS
        self.capture_sum = [0] * COUNTER_SLOTS
        self.best_piece = [NO_PIECE] * COUNTER_SLOTS

    def clear(self) -> None:
        for slot in range(COUNTER_SLOTS):
            self.mobility[slot] = 0
            self.max_capture[slot] = 0
            self.capture_sum[slot] = 0
            self.best_piece[slot] = NO_PIECE

    def count(self, state: int, piece: int, captured: int = NO_PIECE) -> None:
        """Account one generated move of *piece* at *state*.

        *captured* is the opposing slot on the destination, if any.
        Queen moves count twice towards mobility.
        """
        slot = counter_slot(state)
        if slot is None:
            return

        if (
            state == AnalysisState.WHITE
            and piece != Role.KING
            and piece == self.best_piece[counter_slot(AnalysisState.BLACK)]
        ):
            return

        self.mobility[slot] = to_byte(self.mobility[slot] + 1)
        if piece == Role.QUEEN:
            self.mobility[slot] = to_byte(self.mobility[slot] + 1)

        if captured == NO_PIECE:
            return

        value = PIECE_VALUES[captured]
        if value >= self.max_capture[slot]:
            self.best_piece[slot] = captured
            self.max_capture[slot] = value
        self.capture_sum[slot] = to_byte(self.capture_sum[slot] + value)

    def tally(self, state: int) -> Tally:
        """Snapshot of the counters for *state* (zeros for unknown states)."""
        slot = counter_slot(state)
        if slot is None:
            return Tally()
        return Tally(
            mobility=self.mobility[slot],
            max_capture=self.max_capture[slot],
            capture_sum=self.capture_sum[slot],
            best_piece=self.best_piece[slot],
        )


def strategy(inputs: EvaluationInputs) -> int:
    """Score a position 0–255; higher favours the side to move.

    Three fixed-point phases weighted 1/4, 1/2 and 1.
    """
    w = inputs.white
    b = inputs.black
    p = inputs.position
    wcap0, wcap1, wcap2 = inputs.white_captures
    bcap0, bcap1, bcap2 = inputs.black_captures

    acc = _PHASE1_BASE
    acc += w.mobility + w.max_capture + w.capture_sum + wcap1 + wcap2
    acc -= p.max_capture + p.capture_sum + bcap0 + bcap1 + bcap2
    acc -= p.mobility + b.mobility
    if acc < 0:
        acc = 0
    acc >>= 1

    acc += _PHASE2_BASE + w.max_capture + w.capture_sum - b.max_capture
    acc >>= 1

    acc += _PHASE3_BASE + 4 * wcap0 + wcap1
    acc -= 2 * b.max_capture + 2 * b.capture_sum + bcap1

    return max(0, min(_SCORE_MAX, acc))
