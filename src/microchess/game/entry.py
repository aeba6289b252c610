"""Keypad move entry and the three-byte LED display."""

from __future__ import annotations

from dataclasses import dataclass

from microchess.core.position import SLOT_COUNT, Position
from microchess.core.types import NO_PIECE, Square

_MAX_DIGIT = 7
_DIGITS_PER_MOVE = 4


@dataclass(slots=True)
class Display:
    """LED registers: selected piece, origin square, target square."""

    dis1: int = 0x00
    dis2: int = 0x00
    dis3: int = 0x00

    def fill(self, value: int) -> None:
        self.dis1 = self.dis2 = self.dis3 = value & 0xFF

    def __str__(self) -> str:
        return f"{self.dis1:02X} {self.dis2:02X} {self.dis3:02X}"


def slot_on(position: Position, sq: Square) -> int:
    """Index over all 32 slots (opposing as 16–31) standing on *sq*, or ``NO_PIECE``."""
    hit = position.occupant_of(sq)
    if hit is None:
        return NO_PIECE
    side, slot = hit
    return slot + SLOT_COUNT * int(side)


class KeypadEntry:
    """Builds a move from four rank/file digits, origin first."""

    __slots__ = ("display", "digit_count")

    def __init__(self, display: Display | None = None) -> None:
        self.display = display if display is not None else Display()
        self.digit_count = 0

    @property
    def origin(self) -> Square:
        return self.display.dis2

    @property
    def target(self) -> Square:
        return self.display.dis3

    @property
    def selected(self) -> int:
        return self.display.dis1

    @property
    def is_complete(self) -> bool:
        return self.digit_count >= _DIGITS_PER_MOVE

    def rotate_digit(self, digit: int) -> None:
        """Shift ``DIS2:DIS3`` left one nibble and OR *digit* into the bottom."""
        if not 0 <= digit <= _MAX_DIGIT:
            raise ValueError(f"Keypad digit out of range: {digit}")
        d = self.display
        pair = ((d.dis2 << 8) | d.dis3) << 4
        d.dis2 = (pair >> 8) & 0xFF
        d.dis3 = (pair & 0xFF) | digit
        self.digit_count = min(self.digit_count + 1, _DIGITS_PER_MOVE)

    def enter(self, position: Position, digit: int) -> None:
        """Rotate *digit* in and show the slot on the origin square."""
        self.rotate_digit(digit)
        self.display.dis1 = slot_on(position, self.display.dis2)

    def clear(self) -> None:
        self.display.dis1 = NO_PIECE
        self.digit_count = 0
