"""Square type alias and 0x88 coordinate helpers.

Board layout (0x88, rank in the high nibble, file in the low nibble):
    a1=0x00, b1=0x01, ..., h1=0x07
    a2=0x10, b2=0x11, ..., h2=0x17
    ...
    a8=0x70, b8=0x71, ..., h8=0x77

Every value is a byte.  Arithmetic that leaves the 8x8 grid sets bit 3
(file overflow) or bit 7 (rank overflow), so ``sq & 0x88`` is the whole
edge test.
"""

from __future__ import annotations

from typing import Final, TypeAlias

Square: TypeAlias = int  # 0x00–0xFF

BYTE_MASK: Final = 0xFF
OFF_BOARD_MASK: Final = 0x88
MIRROR: Final = 0x77

CAPTURED: Final[Square] = 0xCC  # slot whose piece was taken
NO_SQUARE: Final[Square] = 0xFF  # slot that never held a piece
NO_PIECE: Final = 0xFF


def to_byte(value: int) -> int:
    """Reduce *value* modulo 256, the way an 8-bit register would hold it."""
    return value & BYTE_MASK


def offset_square(sq: Square, offset: int) -> Square:
    """Add a signed *offset* to *sq* with 8-bit wraparound."""
    return (sq + offset) & BYTE_MASK


def mirror_square(sq: Square) -> Square:
    """Map *sq* to the other side's point of view (``0x77 - sq`` as a byte)."""
    return (MIRROR - sq) & BYTE_MASK


def is_on_board(sq: int) -> bool:
    """Whether *sq* names one of the 64 real squares."""
    return (sq & OFF_BOARD_MASK) == 0


def file_of(sq: Square) -> int:
    """File index 0–7 (a–h)."""
    return sq & 0x07


def rank_of(sq: Square) -> int:
    """Rank index 0–7 (1–8)."""
    return (sq >> 4) & 0x0F


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0–7) and rank (0–7)."""
    return (rank << 4) | file


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. 0x00 → 'a1', 0x77 → 'h8', off-board → '??'."""
    if not is_on_board(sq):
        return "??"
    return chr(ord("a") + file_of(sq)) + str(rank_of(sq) + 1)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → 0x34."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return make_square(ord(name[0]) - ord("a"), int(name[1]) - 1)


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = range(0x00, 0x08)
A2, B2, C2, D2, E2, F2, G2, H2 = range(0x10, 0x18)
A3, B3, C3, D3, E3, F3, G3, H3 = range(0x20, 0x28)
A4, B4, C4, D4, E4, F4, G4, H4 = range(0x30, 0x38)
A5, B5, C5, D5, E5, F5, G5, H5 = range(0x40, 0x48)
A6, B6, C6, D6, E6, F6, G6, H6 = range(0x50, 0x58)
A7, B7, C7, D7, E7, F7, G7, H7 = range(0x60, 0x68)
A8, B8, C8, D8, E8, F8, G8, H8 = range(0x70, 0x78)
