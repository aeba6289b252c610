"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable, Mapping

import pytest

from microchess.core.engine import Engine, EngineOptions
from microchess.core.position import SLOT_COUNT
from microchess.core.types import CAPTURED, Square

EngineFactory = Callable[..., Engine]


def sparse_layout(
    mine: Mapping[int, Square], theirs: Mapping[int, Square] | None = None
) -> tuple[Square, ...]:
    """Layout with every slot captured except the ones given."""
    layout = [CAPTURED] * (2 * SLOT_COUNT)
    for slot, sq in mine.items():
        layout[slot] = sq
    for slot, sq in (theirs or {}).items():
        layout[SLOT_COUNT + slot] = sq
    return tuple(layout)


@pytest.fixture
def engine() -> Engine:
    """Engine on the opening position."""
    return Engine()


@pytest.fixture
def make_engine() -> EngineFactory:
    """Build an engine holding only the listed pieces.

    ``make_engine({0: 0x33}, {2: 0x70})`` puts an own king on d4 and an
    opposing rook on a8; every other slot is captured.
    """

    def factory(
        mine: Mapping[int, Square], theirs: Mapping[int, Square] | None = None
    ) -> Engine:
        return Engine(EngineOptions(layout=sparse_layout(mine, theirs)))

    return factory
