"""Engine — the single owned context behind the public position API."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from microchess.core.enums import AnalysisState
from microchess.core.evaluation import Counters, EvaluationInputs, Tally, strategy
from microchess.core.move import Move, MoveRecord, PieceLookup, StepResult
from microchess.core.move_generator import MoveCallback, MoveGenerator
from microchess.core.position import SLOT_COUNT, Position
from microchess.core.tables import MOVE_OFFSETS, OPENING_LAYOUT
from microchess.core.types import NO_PIECE, Square, square_name

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class EngineOptions:
    """Construction-time settings for an :class:`Engine`."""

    layout: tuple[Square, ...] = OPENING_LAYOUT
    trace_probes: bool = False

    def __post_init__(self) -> None:
        if len(self.layout) != 2 * SLOT_COUNT:
            raise ValueError(
                f"Layout must hold {2 * SLOT_COUNT} squares, got {len(self.layout)}"
            )


class Engine:
    """Position, generator cursor and counters of one game.

    Every operation runs to completion on the caller's thread; an
    instance must not be shared between concurrent callers.
    """

    __slots__ = ("options", "position", "generator", "counters", "_last_inputs")

    def __init__(self, options: EngineOptions | None = None) -> None:
        self.options = options if options is not None else EngineOptions()
        self.position = Position(self.options.layout)
        self.generator = MoveGenerator(
            self.position, trace_probes=self.options.trace_probes
        )
        self.counters = Counters()
        self._last_inputs = EvaluationInputs()

    # ── Position model ───────────────────────────────────────────────────

    def setup(self) -> None:
        """Reset to the configured starting layout."""
        self.position.setup(self.options.layout)
        self.generator.piece = 0
        self.generator.direction = 0
        self.generator.square = self.position.mine[0]
        _LOGGER.debug("setup: layout loaded")

    def reverse(self) -> None:
        """Toggle perspective: swap arrays and mirror squares."""
        self.position.reverse()
        _LOGGER.debug("reverse: reversed=%s", self.position.reversed)

    def find_piece_at(self, sq: Square) -> PieceLookup:
        return self.position.find_piece_at(sq)

    @property
    def reversed(self) -> bool:
        return self.position.reversed

    # ── Move generation ──────────────────────────────────────────────────

    def step(
        self, origin: Square, direction: int, state: int = AnalysisState.FULL
    ) -> StepResult:
        """Evaluate one step from *origin* along *direction*.

        With no own piece on *origin* there is nothing to probe for
        self-check: only the illegal and capture flags are reported.
        """
        if not 0 <= direction < len(MOVE_OFFSETS):
            raise ValueError(f"Direction out of range: {direction}")
        gen = self.generator
        piece = self.position.own_piece_at(origin)
        if piece == NO_PIECE:
            return gen.step(origin, direction, state, probe=False)

        gen.piece = piece
        gen.direction = direction
        gen.square = origin
        return gen.step(origin, direction, state)

    def generate_moves(
        self, state: int = AnalysisState.FULL, callback: MoveCallback | None = None
    ) -> None:
        """Report every move of the side to move at *state* to *callback*."""
        self.generator.generate(state, callback)

    def list_moves(self, state: int = AnalysisState.FULL) -> list[Move]:
        """Generated moves sorted by origin, then destination."""
        moves = self.generator.generate_legal_moves(state)
        moves.sort(key=lambda m: (m.from_sq, m.to_sq))
        return moves

    def is_in_check(self) -> bool:
        return self.generator.is_in_check()

    # ── Apply / undo ─────────────────────────────────────────────────────

    def apply_move(self, piece: int, target: Square) -> MoveRecord:
        """Commit own *piece* to *target*, capturing any occupant."""
        gen = self.generator
        record = self.position.apply_move(piece, target, gen.direction)
        gen.piece = piece
        gen.square = target
        _LOGGER.debug(
            "apply: piece=%d %02X->%02X captured=%s",
            piece,
            record.from_sq,
            target,
            record.captured_piece if record.is_capture else None,
        )
        return record

    def undo_move(self) -> MoveRecord | None:
        """Roll back the most recent :meth:`apply_move`; no-op when none."""
        record = self.position.undo_move()
        if record is not None:
            gen = self.generator
            gen.piece = record.piece
            gen.square = record.to_sq
            gen.direction = record.direction
            _LOGGER.debug(
                "undo: piece=%d %02X<-%02X", record.piece, record.from_sq, record.to_sq
            )
        return record

    def play_move(self, origin: Square, target: Square) -> MoveRecord:
        """Apply the own piece standing on *origin* to *target*."""
        piece = self.position.own_piece_at(origin)
        if piece == NO_PIECE:
            raise ValueError(f"No own piece on {square_name(origin)}")
        return self.apply_move(piece, target)

    # ── Evaluation ───────────────────────────────────────────────────────

    def tally(self, state: int = AnalysisState.FULL) -> Tally:
        """Clear the counters, count every generated move at *state*."""
        position = self.position
        counters = self.counters

        def count(from_sq: Square, to_sq: Square, piece: int) -> None:
            counters.count(state, piece, position.their_piece_at(to_sq))

        counters.clear()
        self.generator.generate(state, count)
        return counters.tally(state)

    def evaluate(self, state: int = AnalysisState.FULL) -> int:
        """Score the position for the side to move, 0–255."""
        gen = self.generator
        saved = (gen.piece, gen.square, gen.direction)

        white = self.tally(state)
        self.position.reverse()
        black = self.tally(state)
        self.position.reverse()

        gen.piece, gen.square, gen.direction = saved

        inputs = EvaluationInputs(white=white, black=black)
        self._last_inputs = inputs
        score = strategy(inputs)
        _LOGGER.debug(
            "evaluate: state=%d white=%s black=%s score=%02X",
            state,
            white,
            black,
            score,
        )
        return score

    @property
    def last_inputs(self) -> EvaluationInputs:
        """Counters behind the most recent :meth:`evaluate`."""
        return self._last_inputs
