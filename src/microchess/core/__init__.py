"""Core domain layer — the position engine, with zero external dependencies.

Quick start::

    from microchess.core import AnalysisState, Engine

    engine = Engine()
    for move in engine.list_moves(AnalysisState.FULL):
        print(move)
    print(engine.evaluate())
"""

from microchess.core.engine import Engine, EngineOptions
from microchess.core.enums import AnalysisState, Role, Side
from microchess.core.evaluation import (
    Counters,
    EvaluationInputs,
    Tally,
    counter_slot,
    strategy,
)
from microchess.core.move import Move, MoveRecord, PieceLookup, StepResult
from microchess.core.move_generator import MoveCallback, MoveGenerator
from microchess.core.position import Position
from microchess.core.tables import MOVE_OFFSETS, OPENING_LAYOUT, PIECE_VALUES
from microchess.core.types import (
    CAPTURED,
    NO_PIECE,
    NO_SQUARE,
    Square,
    file_of,
    is_on_board,
    make_square,
    mirror_square,
    offset_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums
    "AnalysisState",
    "Role",
    "Side",
    # Types / helpers
    "CAPTURED",
    "NO_PIECE",
    "NO_SQUARE",
    "Square",
    "file_of",
    "is_on_board",
    "make_square",
    "mirror_square",
    "offset_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Tables
    "MOVE_OFFSETS",
    "OPENING_LAYOUT",
    "PIECE_VALUES",
    # Domain objects
    "Engine",
    "EngineOptions",
    "Move",
    "MoveCallback",
    "MoveGenerator",
    "MoveRecord",
    "PieceLookup",
    "Position",
    "StepResult",
    # Evaluation
    "Counters",
    "EvaluationInputs",
    "Tally",
    "counter_slot",
    "strategy",
]
