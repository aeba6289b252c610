"""Position — two 16-slot piece arrays, perspective flag, move history."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from microchess.core.enums import Role, Side
from microchess.core.move import NOT_FOUND, MoveRecord, PieceLookup
from microchess.core.tables import OPENING_LAYOUT
from microchess.core.types import (
    CAPTURED,
    NO_PIECE,
    NO_SQUARE,
    Square,
    is_on_board,
    make_square,
    mirror_square,
)

_LOGGER = logging.getLogger(__name__)

SLOT_COUNT = 16
_LAYOUT_SIZE = 2 * SLOT_COUNT


class Position:
    """Piece-list position: ``mine[slot]`` / ``theirs[slot]`` hold squares.

    Move generation always works on ``mine``.  :meth:`reverse` swaps the
    arrays and mirrors every square so the other side becomes ``mine``.
    There is no occupancy index: a square is occupied when some slot holds
    it, and every lookup scans the slots.

    Supports :meth:`apply_move` / :meth:`undo_move` via an internal history
    stack.
    """

    __slots__ = ("mine", "theirs", "reversed", "_history")

    def __init__(self, layout: Sequence[Square] = OPENING_LAYOUT) -> None:
        self.mine: list[Square] = [NO_SQUARE] * SLOT_COUNT
        self.theirs: list[Square] = [NO_SQUARE] * SLOT_COUNT
        self.reversed = False
        self._history: list[MoveRecord] = []
        self.setup(layout)

    # ── Factories ────────────────────────────────────────────────────────

    @classmethod
    def initial(cls) -> Position:
        """Canonical opening position."""
        return cls(OPENING_LAYOUT)

    @classmethod
    def empty(cls) -> Position:
        """Every piece of both sides captured."""
        return cls((CAPTURED,) * _LAYOUT_SIZE)

    @classmethod
    def power_on(cls) -> Position:
        """Uninitialised memory as the original hardware starts up.

        All slots read ``0xFF`` except opposing pawn slot 8, which sits on
        a1 until the first setup.
        """
        layout = [NO_SQUARE] * _LAYOUT_SIZE
        layout[SLOT_COUNT + 8] = make_square(0, 0)
        return cls(layout)

    # ── Setup / perspective ──────────────────────────────────────────────

    def setup(self, layout: Sequence[Square] = OPENING_LAYOUT) -> None:
        """Load *layout* (own slots 0–15, then opposing slots 0–15)."""
        if len(layout) != _LAYOUT_SIZE:
            raise ValueError(
                f"Layout must hold {_LAYOUT_SIZE} squares, got {len(layout)}"
            )
        self.mine = [sq & 0xFF for sq in layout[:SLOT_COUNT]]
        self.theirs = [sq & 0xFF for sq in layout[SLOT_COUNT:]]
        self.reversed = False
        self._history.clear()

    def reverse(self) -> None:
        """Swap sides and mirror every square.  Applying it twice is a no-op."""
        mine = [mirror_square(sq) for sq in self.theirs]
        self.theirs = [mirror_square(sq) for sq in self.mine]
        self.mine = mine
        self.reversed = not self.reversed

    # ── Queries ──────────────────────────────────────────────────────────

    def occupants(self) -> Iterator[tuple[Side, int, Square]]:
        """All 32 slots in collision-scan order: theirs 15..0, then mine 15..0."""
        for slot in range(SLOT_COUNT - 1, -1, -1):
            yield Side.THEIRS, slot, self.theirs[slot]
        for slot in range(SLOT_COUNT - 1, -1, -1):
            yield Side.MINE, slot, self.mine[slot]

    def occupant_of(self, sq: Square) -> tuple[Side, int] | None:
        """The slot standing on *sq*, in collision-scan order, or ``None``."""
        for side, slot, occupied in self.occupants():
            if occupied == sq:
                return side, slot
        return None

    def find_piece_at(self, sq: Square) -> PieceLookup:
        """Which piece stands on *sq*; own side is searched first."""
        if not is_on_board(sq):
            return NOT_FOUND
        for slot, occupied in enumerate(self.mine):
            if occupied == sq:
                return PieceLookup(slot, True, True)
        for slot, occupied in enumerate(self.theirs):
            if occupied == sq:
                return PieceLookup(slot, True, False)
        return NOT_FOUND

    def own_piece_at(self, sq: Square) -> int:
        """Own slot on *sq*, or ``NO_PIECE``."""
        for slot, occupied in enumerate(self.mine):
            if occupied == sq:
                return slot
        return NO_PIECE

    def their_piece_at(self, sq: Square) -> int:
        """Opposing slot on *sq* (highest slot wins), or ``NO_PIECE``."""
        for slot in range(SLOT_COUNT - 1, -1, -1):
            if self.theirs[slot] == sq:
                return slot
        return NO_PIECE

    def side(self, side: Side) -> list[Square]:
        return self.mine if side == Side.MINE else self.theirs

    def king_square(self, side: Side = Side.MINE) -> Square:
        return self.side(side)[Role.KING]

    def is_captured(self, slot: int, side: Side = Side.MINE) -> bool:
        return not is_on_board(self.side(side)[slot])

    # ── Move operations ──────────────────────────────────────────────────

    def apply_move(self, piece: int, target: Square, direction: int = 0) -> MoveRecord:
        """Move own *piece* to *target*, capturing whatever stands there."""
        if not 0 <= piece < SLOT_COUNT:
            raise ValueError(f"Piece index out of range: {piece}")

        captured_side: Side | None = None
        captured_piece = NO_PIECE
        captured_sq = CAPTURED
        hit = self.occupant_of(target)
        if hit is not None:
            captured_side, captured_piece = hit
            squares = self.side(captured_side)
            captured_sq = squares[captured_piece]
            squares[captured_piece] = CAPTURED

        record = MoveRecord(
            piece=piece,
            from_sq=self.mine[piece],
            to_sq=target,
            captured_piece=captured_piece,
            captured_side=captured_side,
            captured_sq=captured_sq,
            direction=direction,
        )
        self._history.append(record)
        self.mine[piece] = target
        return record

    def undo_move(self) -> MoveRecord | None:
        """Pop the last :meth:`apply_move` and restore both pieces."""
        if not self._history:
            _LOGGER.warning("undo requested with an empty move history")
            return None

        record = self._history.pop()
        self.mine[record.piece] = record.from_sq
        if record.captured_side is not None:
            self.side(record.captured_side)[record.captured_piece] = (
                record.captured_sq
            )
        return record

    def reverse_and_undo(self) -> MoveRecord | None:
        """Reverse back, then undo: unwinds a probe that reversed after moving."""
        self.reverse()
        return self.undo_move()

    # ── Utilities ────────────────────────────────────────────────────────

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def depth(self) -> int:
        """Number of moves currently on the history stack."""
        return len(self._history)

    def layout(self) -> tuple[Square, ...]:
        """Current squares in :meth:`setup` order."""
        return tuple(self.mine) + tuple(self.theirs)

    def copy(self) -> Position:
        """Copy of the arrays and perspective flag, without history."""
        pos = Position(self.layout())
        pos.reversed = self.reversed
        return pos

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.mine == other.mine
            and self.theirs == other.theirs
            and self.reversed == other.reversed
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                piece, found, own = self.find_piece_at(make_square(file, rank))
                if not found:
                    row.append(".")
                    continue
                letter = Role.of_slot(piece).letter
                row.append(letter if own else letter.lower())
            rows.append(f"{rank}0 {' '.join(row)}")
        rows.append("   0 1 2 3 4 5 6 7")
        return "\n".join(rows)
