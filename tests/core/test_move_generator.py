"""Move-generator tests: piece patterns, self-check filtering, oracle."""

from __future__ import annotations

import chess
import pytest

from microchess.core.engine import Engine, EngineOptions
from microchess.core.enums import AnalysisState, Role
from microchess.core.position import SLOT_COUNT
from microchess.core.tables import MOVE_OFFSETS, PAWN_FORWARD
from microchess.core.types import CAPTURED, Square, is_on_board, offset_square

_FIRST_SLOT = {
    chess.KING: 0,
    chess.QUEEN: 1,
    chess.ROOK: 2,
    chess.BISHOP: 4,
    chess.KNIGHT: 6,
    chess.PAWN: 8,
}


def _to_0x88(square: chess.Square) -> Square:
    return (chess.square_rank(square) << 4) | chess.square_file(square)


def _layout_from_board(board: chess.Board) -> tuple[Square, ...]:
    """White pieces become own slots, black pieces opposing slots."""
    layout = [CAPTURED] * (2 * SLOT_COUNT)
    for offset, color in ((0, chess.WHITE), (SLOT_COUNT, chess.BLACK)):
        for piece_type, first in _FIRST_SLOT.items():
            for i, square in enumerate(sorted(board.pieces(piece_type, color))):
                layout[offset + first + i] = _to_0x88(square)
    return tuple(layout)


def _destinations(engine: Engine, state: int = AnalysisState.FULL) -> set[Square]:
    return {m.to_sq for m in engine.list_moves(state)}


# ── Piece patterns on an otherwise empty board ──────────────────────────────


class TestLonePieces:
    @pytest.mark.parametrize(
        ("square", "expected"), [(0x33, 8), (0x00, 3), (0x30, 5), (0x77, 3)]
    )
    def test_king(self, make_engine, square: int, expected: int) -> None:
        assert len(make_engine({0: square}).list_moves()) == expected

    def test_rook(self, make_engine) -> None:
        assert len(make_engine({2: 0x33}).list_moves()) == 14

    def test_bishop(self, make_engine) -> None:
        assert len(make_engine({4: 0x33}).list_moves()) == 13

    def test_queen(self, make_engine) -> None:
        assert len(make_engine({1: 0x33}).list_moves()) == 27

    def test_knight(self, make_engine) -> None:
        assert len(make_engine({6: 0x33}).list_moves()) == 8

    def test_knight_in_corner(self, make_engine) -> None:
        assert _destinations(make_engine({7: 0x00})) == {0x12, 0x21}

    def test_pawn_double_step(self, make_engine) -> None:
        assert _destinations(make_engine({8: 0x14})) == {0x24, 0x34}

    def test_pawn_single_step_past_third_rank(self, make_engine) -> None:
        assert _destinations(make_engine({8: 0x24})) == {0x34}

    def test_pawn_blocked(self, make_engine) -> None:
        assert make_engine({8: 0x14}, {8: 0x24}).list_moves() == []

    def test_pawn_double_step_blocked(self, make_engine) -> None:
        assert _destinations(make_engine({8: 0x14}, {8: 0x34})) == {0x24}

    def test_pawn_captures(self, make_engine) -> None:
        engine = make_engine({8: 0x34}, {8: 0x43, 9: 0x45})
        assert _destinations(engine) == {0x43, 0x44, 0x45}

    def test_pawn_does_not_capture_forward(self, make_engine) -> None:
        assert make_engine({8: 0x34}, {8: 0x44}).list_moves() == []

    def test_king_boxed_in_by_own_pieces(self, make_engine) -> None:
        engine = make_engine(
            {0: 0x00, 8: 0x01, 9: 0x10, 10: 0x11},
        )
        assert [m for m in engine.list_moves() if m.piece == 0] == []

    def test_slider_stops_at_capture(self, make_engine) -> None:
        engine = make_engine({2: 0x00}, {8: 0x20})
        dests = _destinations(engine)
        assert 0x20 in dests
        assert 0x30 not in dests

    def test_captured_pieces_are_skipped(self, make_engine) -> None:
        assert make_engine({}).list_moves() == []

    def test_opening_has_twenty_moves(self, engine: Engine) -> None:
        assert len(engine.list_moves()) == 20

    def test_opening_moves_sorted(self, engine: Engine) -> None:
        moves = engine.list_moves()
        assert str(moves[0]) == "b1a3"
        assert moves[0].role == Role.KNIGHT
        assert moves[0].hex == "01 20"


# ── Single steps ─────────────────────────────────────────────────────────────


class TestStep:
    def test_off_board_is_illegal(self, engine: Engine) -> None:
        result = engine.step(0x07, 3)  # h1 rook one file right
        assert result.illegal
        assert not result.is_legal

    def test_own_piece_is_illegal(self, engine: Engine) -> None:
        assert engine.step(0x07, PAWN_FORWARD).illegal

    def test_quiet_step_moves_working_square(self, engine: Engine) -> None:
        result = engine.step(0x14, PAWN_FORWARD)
        assert result.is_legal
        assert not result.capture
        assert engine.generator.square == 0x24

    def test_capture_flag(self, make_engine) -> None:
        engine = make_engine({2: 0x00}, {8: 0x10})
        result = engine.step(0x00, PAWN_FORWARD)
        assert result.capture
        assert result.is_legal

    def test_bad_direction_rejected(self, engine: Engine) -> None:
        with pytest.raises(ValueError):
            engine.step(0x14, 17)

    def test_empty_origin_reports_flags(self, engine: Engine) -> None:
        before = engine.position.copy()
        assert engine.step(0x20, 2).illegal  # a3, one file left
        assert engine.step(0x20, 1).illegal  # onto own a2 pawn
        quiet = engine.step(0x33, PAWN_FORWARD, AnalysisState.WHITE)
        assert quiet.is_legal
        assert not quiet.capture
        capture = engine.step(0x53, PAWN_FORWARD)
        assert capture.capture
        assert not capture.in_check
        assert engine.position == before
        assert engine.position.depth == 0

    def test_every_off_board_step_is_illegal(self, engine: Engine) -> None:
        for rank in range(8):
            for file in range(8):
                origin = (rank << 4) | file
                for direction, offset in enumerate(MOVE_OFFSETS):
                    if is_on_board(offset_square(origin, offset)):
                        continue
                    result = engine.step(origin, direction, AnalysisState.FULL)
                    assert result.illegal
                    assert not result.capture

    def test_apply_undo_every_opening_move(self, engine: Engine) -> None:
        before = engine.position.copy()
        for move in engine.list_moves():
            engine.apply_move(move.piece, move.to_sq)
            engine.undo_move()
            assert engine.position == before, f"Failed for {move}"
        assert engine.position.depth == 0


# ── Self-check filtering ────────────────────────────────────────────────────


def _pinned_pawn(make_engine) -> Engine:
    """Own king a1, own pawn b2, opposing bishop d4 pinning it."""
    return make_engine({0: 0x00, 8: 0x11}, {4: 0x33})


class TestSelfCheck:
    def test_pawn_pinned_by_bishop_on_g4(self, make_engine) -> None:
        engine = make_engine({0: 0x03, 8: 0x14}, {4: 0x36})
        assert engine.step(0x14, PAWN_FORWARD, AnalysisState.FULL).in_check
        assert not engine.step(0x14, PAWN_FORWARD, AnalysisState.WHITE).in_check

    @pytest.mark.parametrize("state", [0, AnalysisState.FULL, 7])
    def test_pinned_pawn_flagged(self, make_engine, state: int) -> None:
        result = _pinned_pawn(make_engine).step(0x11, PAWN_FORWARD, state)
        assert result.in_check
        assert not result.is_legal

    @pytest.mark.parametrize("state", [-1, AnalysisState.WHITE, AnalysisState.POSITION])
    def test_no_probe_outside_states_zero_to_seven(
        self, make_engine, state: int
    ) -> None:
        result = _pinned_pawn(make_engine).step(0x11, PAWN_FORWARD, state)
        assert not result.in_check
        assert result.is_legal

    def test_probe_leaves_position_untouched(self, make_engine) -> None:
        engine = _pinned_pawn(make_engine)
        before = engine.position.copy()
        engine.step(0x11, PAWN_FORWARD)
        assert engine.position == before
        assert engine.position.depth == 0
        assert engine.generator.piece == 8
        assert engine.generator.square == 0x21

    def test_pinned_pawn_not_generated(self, make_engine) -> None:
        engine = _pinned_pawn(make_engine)
        assert [m for m in engine.list_moves() if m.piece == 8] == []

    def test_unfiltered_state_reports_pinned_pawn(self, make_engine) -> None:
        engine = _pinned_pawn(make_engine)
        moves = engine.list_moves(AnalysisState.WHITE)
        assert [m.to_sq for m in moves if m.piece == 8] == [0x21, 0x31]

    def test_pinned_slider_capture_ends_ray_unreported(self, make_engine) -> None:
        # rook b2 pinned to king a1 by bishop d4; pawn b5 is takeable
        engine = make_engine({0: 0x00, 2: 0x11}, {4: 0x33, 8: 0x41})
        assert [m for m in engine.list_moves() if m.piece == 2] == []

        unfiltered = {
            m.to_sq for m in engine.list_moves(AnalysisState.WHITE) if m.piece == 2
        }
        assert {0x21, 0x31, 0x41} <= unfiltered  # up the b-file to the pawn
        assert 0x51 not in unfiltered
        assert unfiltered == {0x01, 0x21, 0x31, 0x41, 0x10} | set(range(0x12, 0x18))

    def test_king_cannot_step_into_attack(self, make_engine) -> None:
        engine = make_engine({0: 0x00}, {2: 0x17})  # opposing rook on h2
        assert _destinations(engine) == {0x01}

    def test_slider_may_block_check(self, make_engine) -> None:
        engine = make_engine({0: 0x00, 2: 0x37}, {2: 0x70})
        rook_moves = {m.to_sq for m in engine.list_moves() if m.piece == 2}
        assert rook_moves == {0x30}

    def test_is_in_check(self, make_engine) -> None:
        engine = make_engine({0: 0x00}, {2: 0x70})
        before = engine.position.copy()
        assert engine.is_in_check()
        assert engine.position == before

    def test_opening_not_in_check(self, engine: Engine) -> None:
        assert not engine.is_in_check()

    def test_probe_trace_logging(self, make_engine, caplog) -> None:
        engine = Engine(
            EngineOptions(
                layout=_pinned_pawn(make_engine).position.layout(),
                trace_probes=True,
            )
        )
        with caplog.at_level("DEBUG", logger="microchess.core.move_generator"):
            engine.step(0x11, PAWN_FORWARD)
        assert "exposed=True" in caplog.text


# ── Cross-check against python-chess ────────────────────────────────────────

_ORACLE_FENS = [
    chess.STARTING_FEN.replace("KQkq", "-"),
    "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w - - 2 3",
    "r3k2r/ppp2ppp/2n1bn2/3pp3/3PP3/2N1BN2/PPP2PPP/R3K2R w - - 0 8",
    "4k3/4r3/8/8/8/8/4N3/4K3 w - - 0 1",
    "4k3/8/8/8/8/8/3r4/4K3 w - - 0 1",
    "3qk3/8/8/1b6/8/8/3P4/4K2R w - - 0 1",
    "4k3/8/8/8/7q/8/5P2/4K1N1 w - - 0 1",
    "4k3/8/8/8/8/8/8/r3K3 w - - 0 1",
    "4k3/8/8/8/8/3n4/8/R3K3 w - - 0 1",
]


class TestAgainstPythonChess:
    @pytest.mark.parametrize("fen", _ORACLE_FENS)
    def test_same_move_set(self, fen: str) -> None:
        board = chess.Board(fen)
        engine = Engine(EngineOptions(layout=_layout_from_board(board)))

        expected = {
            (_to_0x88(m.from_square), _to_0x88(m.to_square))
            for m in board.legal_moves
        }
        actual = {(m.from_sq, m.to_sq) for m in engine.list_moves()}
        assert actual == expected

    @pytest.mark.parametrize("fen", _ORACLE_FENS)
    def test_check_status(self, fen: str) -> None:
        board = chess.Board(fen)
        engine = Engine(EngineOptions(layout=_layout_from_board(board)))
        assert engine.is_in_check() == board.is_check()
