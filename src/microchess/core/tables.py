"""Constant tables: direction offsets, piece values, opening layout."""

from __future__ import annotations

from typing import Final

from microchess.core.types import Square

# Signed 0x88 offsets indexed by direction number.
#   1–4   orthogonal (rook: 4..1, pawn forward is 4)
#   5–8   diagonal (bishop: 8..5, pawn captures are 6 and 5)
#   9–16  knight jumps
#   0     null step
MOVE_OFFSETS: Final[tuple[int, ...]] = (
    0x00,
    -0x10,
    -0x01,
    +0x01,
    +0x10,
    +0x11,
    +0x0F,
    -0x11,
    -0x0F,
    -0x21,
    -0x1F,
    -0x12,
    -0x0E,
    +0x12,
    +0x0E,
    +0x1F,
    +0x21,
)

PAWN_RIGHT_CAPTURE: Final = 6
PAWN_LEFT_CAPTURE: Final = 5
PAWN_FORWARD: Final = 4

# Capture value of each slot: K, Q, R, R, B, B, N, N, then eight pawns.
PIECE_VALUES: Final[tuple[int, ...]] = (
    11,
    10,
    6,
    6,
    4,
    4,
    4,
    4,
    2,
    2,
    2,
    2,
    2,
    2,
    2,
    2,
)

# Own slots 0–15 followed by opposing slots 0–15.  Pawn slots alternate
# from the wings inwards (a, h, b, g, c, f, e, d).
OPENING_LAYOUT: Final[tuple[Square, ...]] = (
    0x03, 0x04, 0x00, 0x07, 0x02, 0x05, 0x01, 0x06,
    0x10, 0x17, 0x11, 0x16, 0x12, 0x15, 0x14, 0x13,
    0x73, 0x74, 0x70, 0x77, 0x72, 0x75, 0x71, 0x76,
    0x60, 0x67, 0x61, 0x66, 0x62, 0x65, 0x64, 0x63,
)  # fmt: skip
