"""GameController — maps single-key commands onto the engine.

This is the seam where already-validated player requests enter the
core; reading keys from a terminal and drawing the board stay outside.
"""

from __future__ import annotations

import logging
from enum import IntEnum, auto

from microchess.core.engine import Engine
from microchess.core.move import MoveRecord
from microchess.core.position import SLOT_COUNT
from microchess.game.entry import Display, KeypadEntry

_LOGGER = logging.getLogger(__name__)

_SETUP_PATTERN = 0xCC
_REVERSE_PATTERN = 0xEE


class CommandOutcome(IntEnum):
    """What :meth:`GameController.handle` did with a key."""

    HANDLED = auto()
    UNKNOWN = auto()
    QUIT = auto()


class GameController:
    """Owns an :class:`Engine` and the keypad/display state in front of it."""

    __slots__ = ("_engine", "_entry")

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine if engine is not None else Engine()
        self._entry = KeypadEntry()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def entry(self) -> KeypadEntry:
        return self._entry

    @property
    def display(self) -> Display:
        return self._entry.display

    # ── Commands ─────────────────────────────────────────────────────────

    def handle(self, key: str) -> CommandOutcome:
        """Dispatch one command key (case-insensitive)."""
        key = key.strip().upper()
        if key == "Q":
            return CommandOutcome.QUIT
        if key == "C":
            self.setup()
        elif key == "E":
            self.reverse()
        elif key == "F":
            self.execute()
        elif len(key) == 1 and key in "01234567":
            self._entry.enter(self._engine.position, int(key))
        else:
            _LOGGER.warning("unknown command: %r", key)
            return CommandOutcome.UNKNOWN
        return CommandOutcome.HANDLED

    def setup(self) -> None:
        self._engine.setup()
        self._entry.digit_count = 0
        self.display.fill(_SETUP_PATTERN)

    def reverse(self) -> None:
        self._engine.reverse()
        self.display.fill(_REVERSE_PATTERN)

    def execute(self) -> MoveRecord | None:
        """Play the keyed-in move; ``None`` when no own piece is selected."""
        piece = self._entry.selected
        if not self._entry.is_complete:
            _LOGGER.warning(
                "execute: incomplete entry (%d of 4 digits)", self._entry.digit_count
            )
        if piece >= SLOT_COUNT:
            _LOGGER.info("execute: no own piece selected (DIS1=%02X)", piece)
            return None
        record = self._engine.apply_move(piece, self._entry.target)
        self._entry.clear()
        return record
