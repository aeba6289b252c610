"""Move generation: single-step evaluation, self-check probe, per-piece dispatch."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from microchess.core.enums import AnalysisState, Role, Side
from microchess.core.move import ILLEGAL_STEP, Move, MoveRecord, StepResult
from microchess.core.tables import (
    MOVE_OFFSETS,
    PAWN_FORWARD,
    PAWN_LEFT_CAPTURE,
    PAWN_RIGHT_CAPTURE,
)
from microchess.core.types import Square, is_on_board, offset_square

if TYPE_CHECKING:
    from microchess.core.position import Position

_LOGGER = logging.getLogger(__name__)

MoveCallback = Callable[[Square, Square, int], None]  # from, to, piece

_PAWN_DOUBLE_STEP_RANK = 0x20


class MoveGenerator:
    """Generates moves for ``position.mine`` one step at a time.

    The generator keeps a cursor (selected piece, working square,
    direction number) that :meth:`step` advances.  When the analysis
    state asks for it, :meth:`step` probes the candidate move by applying
    it, reversing, generating every reply and unwinding again; the
    position and the cursor are restored before it returns.
    """

    __slots__ = (
        "_pos",
        "piece",
        "square",
        "direction",
        "trace_probes",
        "_king_capturable",
    )

    def __init__(self, position: Position, *, trace_probes: bool = False) -> None:
        self._pos = position
        self.piece = 0
        self.square: Square = position.mine[0]
        self.direction = 0
        self.trace_probes = trace_probes
        self._king_capturable = False

    # -- Public API ---------------------------------------------------------

    def generate(self, state: int, callback: MoveCallback | None = None) -> None:
        """Run every own piece, slot 15 down to 0, reporting moves to *callback*.

        At ``AnalysisState.CHECK_PROBE`` nothing is reported; moves only
        latch whether one of them lands on the opposing king.
        """
        for piece in range(15, -1, -1):
            if self._pos.is_captured(piece):
                continue
            self.piece = piece
            self._reset()
            role = Role.of_slot(piece)

            if role == Role.PAWN:
                self._gen_pawn(state, callback)
            elif role == Role.KNIGHT:
                self._gen_stepping(16, 8, state, callback)
            elif role == Role.BISHOP:
                self._gen_sliding(8, 4, state, callback)
            elif role == Role.ROOK:
                self._gen_sliding(4, 0, state, callback)
            elif role == Role.QUEEN:
                self._gen_sliding(8, 0, state, callback)
            else:
                self._gen_stepping(8, 0, state, callback)

    def generate_legal_moves(self, state: int = AnalysisState.FULL) -> list[Move]:
        """Every move :meth:`generate` reports at *state*, in generation order."""
        moves: list[Move] = []

        def collect(from_sq: Square, to_sq: Square, piece: int) -> None:
            moves.append(Move(from_sq, to_sq, piece))

        self.generate(state, collect)
        return moves

    def step(
        self, origin: Square, direction: int, state: int, *, probe: bool = True
    ) -> StepResult:
        """Evaluate one step from *origin* along *direction* for the cursor piece.

        Leaves the working square on the target when it is on the board.
        With *probe* false the self-check probe is skipped at every state.
        """
        target = offset_square(origin, MOVE_OFFSETS[direction])
        if not is_on_board(target):
            return ILLEGAL_STEP

        self.square = target
        capture = False
        hit = self._pos.occupant_of(target)
        if hit is not None:
            if hit[0] == Side.MINE:
                return ILLEGAL_STEP
            capture = True

        if not probe or not AnalysisState.probes_check(state):
            return StepResult(capture=capture)

        return StepResult(capture=capture, in_check=self._probe_king_exposure())

    def is_in_check(self) -> bool:
        """Can the opposing side capture the own king right now?"""
        saved = (self.piece, self.square, self.direction)
        self._pos.reverse()
        exposed = self._scan_for_king_capture()
        self._pos.reverse()
        self.piece, self.square, self.direction = saved
        return exposed

    # -- Self-check probe ---------------------------------------------------

    def _probe_king_exposure(self) -> bool:
        pos = self._pos
        pos.apply_move(self.piece, self.square, self.direction)
        pos.reverse()
        exposed = self._scan_for_king_capture()
        record = pos.reverse_and_undo()
        if record is not None:
            self._restore(record)

        if self.trace_probes:
            _LOGGER.debug(
                "probe piece=%d to=%02X exposed=%s", self.piece, self.square, exposed
            )
        return exposed

    def _scan_for_king_capture(self) -> bool:
        self._king_capturable = False
        self.generate(AnalysisState.CHECK_PROBE)
        return self._king_capturable

    def _restore(self, record: MoveRecord) -> None:
        self.piece = record.piece
        self.square = record.to_sq
        self.direction = record.direction

    # -- Reporting ----------------------------------------------------------

    def _report(
        self, from_sq: Square, state: int, callback: MoveCallback | None
    ) -> None:
        if state == AnalysisState.CHECK_PROBE:
            if self.square == self._pos.theirs[Role.KING]:
                self._king_capturable = True
            return
        if callback is not None:
            callback(from_sq, self.square, self.piece)

    def _reset(self) -> None:
        self.square = self._pos.mine[self.piece]

    # -- Piece-specific generators (private) -------------------------------

    def _gen_stepping(
        self, first: int, stop: int, state: int, callback: MoveCallback | None
    ) -> None:
        from_sq = self.square
        self.direction = first
        while self.direction != stop:
            result = self.step(self.square, self.direction, state)
            if result.is_legal:
                self._report(from_sq, state, callback)
            self._reset()
            self.direction -= 1

    def _gen_sliding(
        self, first: int, stop: int, state: int, callback: MoveCallback | None
    ) -> None:
        from_sq = self.square
        self.direction = first
        while self.direction != stop:
            while True:
                result = self.step(self.square, self.direction, state)
                if result.illegal:
                    break
                if result.in_check:
                    if result.capture:
                        break
                    continue
                self._report(from_sq, state, callback)
                if result.capture:
                    break
            self._reset()
            self.direction -= 1

    def _gen_pawn(self, state: int, callback: MoveCallback | None) -> None:
        from_sq = self.square

        for direction in (PAWN_RIGHT_CAPTURE, PAWN_LEFT_CAPTURE):
            self.direction = direction
            result = self.step(self.square, direction, state)
            if result.capture and result.is_legal:
                self._report(from_sq, state, callback)
            self._reset()

        self.direction = PAWN_FORWARD
        while True:
            result = self.step(self.square, PAWN_FORWARD, state)
            if result.capture or not result.is_legal:
                break
            self._report(from_sq, state, callback)
            if (self.square & 0xF0) != _PAWN_DOUBLE_STEP_RANK:
                break
