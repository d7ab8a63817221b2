"""Tests for Rules: checkmate, stalemate, draw detection."""

import pytest

from chesslink.core.enums import Color, GameStatus
from chesslink.core.move_generator import MoveGenerator
from chesslink.core.notation import STARTING_FEN, position_from_fen
from chesslink.core.rules import Rules


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        assert not Rules.is_in_check(position_from_fen(STARTING_FEN))

    def test_fools_mate_in_check(self, replay) -> None:
        pos, _ = replay("f2f3", "e7e5", "g2g4", "d8h4")
        assert Rules.is_in_check(pos)


class TestCheckmate:
    def test_fools_mate(self, replay) -> None:
        pos, _ = replay("f2f3", "e7e5", "g2g4", "d8h4")
        assert Rules.game_status(pos) == GameStatus.CHECKMATE
        assert MoveGenerator(pos).generate_legal_moves() == []
        assert Rules.is_checkmate(pos)
        assert Rules.winner(pos) == Color.BLACK

    def test_back_rank_mate(self) -> None:
        # R on a8 checks black king d8; white king d6 covers all escapes
        pos = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 0 1")
        assert Rules.is_checkmate(pos)
        assert Rules.winner(pos) == Color.WHITE

    def test_not_checkmate_when_can_escape(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.winner(pos) is None


class TestStalemate:
    def test_king_trapped(self) -> None:
        # Black king on h8, white K on f6, white Q on g6
        pos = position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert Rules.game_status(pos) == GameStatus.STALEMATE
        assert Rules.winner(pos) is None

    def test_corner_king_against_queen(self) -> None:
        # White king a1, black king c2, black queen b3
        pos = position_from_fen("8/8/8/8/8/1q6/2k5/K7 w - - 0 1")
        assert Rules.is_stalemate(pos)
        assert not Rules.is_in_check(pos)

    def test_not_stalemate_when_has_moves(self) -> None:
        pos = position_from_fen("7k/8/5K2/8/8/8/8/8 b - - 0 1")
        assert not Rules.is_stalemate(pos)


class TestInsufficientMaterial:
    @pytest.mark.parametrize(
        "fen",
        [
            "8/8/4k3/8/8/4K3/8/8 w - - 0 1",  # K v K
            "8/8/4k3/8/8/4K3/3B4/8 w - - 0 1",  # K+B v K
            "8/8/4k3/8/8/4K3/3N4/8 w - - 0 1",  # K+N v K
            "8/8/4k3/8/8/4K3/8/n7 w - - 0 1",  # K v K+N
            "5b2/8/4k3/8/8/4K3/8/2B5 w - - 0 1",  # same-colour bishops
        ],
    )
    def test_draw(self, fen: str) -> None:
        pos = position_from_fen(fen)
        assert Rules.is_insufficient_material(pos)
        assert Rules.game_status(pos) == GameStatus.DRAW_INSUFFICIENT_MATERIAL

    @pytest.mark.parametrize(
        "fen",
        [
            "8/8/4k3/8/8/4K3/3R4/8 w - - 0 1",  # K+R v K
            "8/8/4k3/8/4P3/4K3/8/8 w - - 0 1",  # K+P v K
            "2b5/8/4k3/8/8/4K3/8/2B5 w - - 0 1",  # opposite-colour bishops
            "8/8/4k3/8/8/4K3/8/2B2B2 w - - 0 1",  # two bishops, one side
            "8/8/4k3/8/8/4K3/8/2N2N2 w - - 0 1",  # two knights, one side
        ],
    )
    def test_sufficient(self, fen: str) -> None:
        pos = position_from_fen(fen)
        assert not Rules.is_insufficient_material(pos)
        assert Rules.game_status(pos) == GameStatus.ONGOING

    def test_mate_beats_material_draw(self) -> None:
        pos = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 0 1")
        assert Rules.game_status(pos) != GameStatus.DRAW_INSUFFICIENT_MATERIAL


class TestFiftyMoveRule:
    def test_not_triggered_at_start(self) -> None:
        assert not Rules.is_fifty_move_rule(position_from_fen(STARTING_FEN))

    def test_triggered_at_100_halfmoves(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/4K2R/7r w - - 100 51")
        assert Rules.game_status(pos) == GameStatus.DRAW_FIFTY_MOVE

    def test_not_triggered_at_99(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/4K2R/7r w - - 99 50")
        assert Rules.game_status(pos) == GameStatus.ONGOING

    def test_mate_takes_precedence(self) -> None:
        pos = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 120 80")
        assert Rules.game_status(pos) == GameStatus.CHECKMATE


class TestGameStatus:
    def test_ongoing_at_start(self) -> None:
        assert Rules.game_status(position_from_fen(STARTING_FEN)) == GameStatus.ONGOING

    def test_status_flags(self) -> None:
        assert not GameStatus.ONGOING.is_over
        assert GameStatus.CHECKMATE.is_over
        assert not GameStatus.CHECKMATE.is_draw
        assert GameStatus.STALEMATE.is_draw
        assert str(GameStatus.DRAW_FIFTY_MOVE) == "draw_fifty_move"
