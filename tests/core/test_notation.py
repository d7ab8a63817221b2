"""Tests for FEN and SAN notation."""

import pytest

from chesslink.core.enums import CastlingRights, Color, PieceType
from chesslink.core.move import Move
from chesslink.core.move_generator import MoveGenerator
from chesslink.core.notation import (
    STARTING_FEN,
    move_to_san,
    moves_to_sans,
    parse_san,
    position_from_fen,
    position_to_fen,
    san_movetext,
)
from chesslink.core.piece import Piece
from chesslink.core.position import Position
from chesslink.core.types import A1, A3, A5, B1, B2, D2, E1, E2, E4, E8, G1, parse_square

CASTLING_FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"


class TestFen:
    def test_starting_matches_initial(self) -> None:
        assert position_from_fen(STARTING_FEN) == Position.initial()

    def test_initial_serialises_to_starting(self) -> None:
        assert position_to_fen(Position.initial()) == STARTING_FEN

    def test_kings(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_after_double_step(self) -> None:
        pos = Position.initial().apply_move(Move(E2, E4))
        assert position_to_fen(pos) == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )

    def test_partial_castling(self) -> None:
        pos = position_from_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w Kq - 0 1")
        assert pos.castling == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        )
        assert position_to_fen(pos).split()[2] == "Kq"

    def test_no_castling(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        assert pos.castling == CastlingRights.NONE
        assert position_to_fen(pos) == "4k3/8/8/8/8/8/8/4K3 w - - 0 1"

    def test_clocks_optional(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 b - -")
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1
        assert pos.side_to_move == Color.BLACK

    @pytest.mark.parametrize(
        "fen",
        [
            "8/8/8 w - - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkX - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KKkq - 0 1",
            "rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/ppppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e3 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 0",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1",
        ],
    )
    def test_invalid(self, fen: str) -> None:
        with pytest.raises(ValueError):
            position_from_fen(fen)


class TestMoveToSan:
    def test_pawn_push(self) -> None:
        assert move_to_san(Position.initial(), Move(E2, E4)) == "e4"

    def test_knight(self) -> None:
        assert move_to_san(Position.initial(), Move(G1, parse_square("f3"))) == "Nf3"

    def test_castling(self) -> None:
        pos = position_from_fen(CASTLING_FEN)
        assert move_to_san(pos, Move(E1, G1)) == "O-O"
        assert move_to_san(pos, Move(E1, parse_square("c1"))) == "O-O-O"

    def test_castling_with_check_has_no_suffix(self) -> None:
        pos = position_from_fen("5k2/8/8/8/8/8/8/4K2R w K - 0 1")
        after = pos.apply_move(Move(E1, G1))
        assert MoveGenerator(after).is_in_check()
        assert move_to_san(pos, Move(E1, G1)) == "O-O"

    def test_pawn_capture_and_en_passant(self, replay) -> None:
        pos, _ = replay("e2e4", "b8c6", "e4e5", "d7d5")
        assert move_to_san(pos, Move(parse_square("e5"), parse_square("d6"))) == "exd6"

    def test_piece_capture(self, replay) -> None:
        pos, _ = replay("g1f3", "e7e5")
        assert move_to_san(pos, Move(parse_square("f3"), parse_square("e5"))) == "Nxe5"

    def test_promotion_capture(self, replay) -> None:
        pos, _ = replay("a2a4", "b7b5", "a4b5", "a7a6", "b5a6", "c8b7", "a6b7", "b8c6")
        move = Move(parse_square("b7"), parse_square("a8"), PieceType.QUEEN)
        assert move_to_san(pos, move) == "bxa8=Q"
        under = Move(parse_square("b7"), parse_square("b8"), PieceType.KNIGHT)
        assert move_to_san(pos, under) == "b8=N"

    def test_check(self, replay) -> None:
        pos, _ = replay("e2e4", "f7f6")
        assert move_to_san(pos, Move(parse_square("d1"), parse_square("h5"))) == "Qh5+"

    def test_checkmate(self, replay) -> None:
        pos, _ = replay("f2f3", "e7e5", "g2g4")
        assert move_to_san(pos, Move(parse_square("d8"), parse_square("h4"))) == "Qh4#"

    def test_disambiguate_by_file(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/5N2/8/1N2K3 w - - 0 1")
        assert move_to_san(pos, Move(B1, D2)) == "Nbd2"
        assert move_to_san(pos, Move(parse_square("f3"), D2)) == "Nfd2"

    def test_disambiguate_by_rank(self) -> None:
        pos = position_from_fen("4k3/8/8/R7/8/8/8/R3K3 w - - 0 1")
        assert move_to_san(pos, Move(A1, A3)) == "R1a3"
        assert move_to_san(pos, Move(A5, A3)) == "R5a3"

    def test_disambiguate_by_square(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/Q7/8/Q1Q4K w - - 0 1")
        assert move_to_san(pos, Move(A1, B2)) == "Qa1b2"
        assert move_to_san(pos, Move(A3, B2)) == "Q3b2"
        assert move_to_san(pos, Move(parse_square("c1"), B2)) == "Qcb2"

    def test_pinned_rival_not_counted(self) -> None:
        # The e-file knight is pinned, so Nc3 needs no hint
        pos = position_from_fen("4r1k1/8/8/8/8/8/4N3/1N2K3 w - - 0 1")
        assert move_to_san(pos, Move(B1, parse_square("c3"))) == "Nc3"

    def test_empty_origin(self) -> None:
        with pytest.raises(ValueError):
            move_to_san(Position.initial(), Move(E4, parse_square("e5")))


class TestParseSan:
    def test_pawn_and_piece(self) -> None:
        pos = Position.initial()
        assert parse_san(pos, "e4") == Move(E2, E4)
        assert parse_san(pos, "Nf3") == Move(G1, parse_square("f3"))

    def test_castling(self) -> None:
        pos = position_from_fen(CASTLING_FEN)
        assert parse_san(pos, "O-O") == Move(E1, G1)
        assert parse_san(pos, "0-0-0") == Move(E1, parse_square("c1"))

    def test_promotion(self, replay) -> None:
        pos, _ = replay("a2a4", "b7b5", "a4b5", "a7a6", "b5a6", "c8b7", "a6b7", "b8c6")
        assert parse_san(pos, "bxa8=Q") == Move(
            parse_square("b7"), parse_square("a8"), PieceType.QUEEN
        )
        assert parse_san(pos, "b8N").promotion == PieceType.KNIGHT

    def test_disambiguated(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/5N2/8/1N2K3 w - - 0 1")
        assert parse_san(pos, "Nbd2") == Move(B1, D2)

    def test_suffixes_ignored(self, replay) -> None:
        pos, _ = replay("f2f3", "e7e5", "g2g4")
        assert parse_san(pos, "Qh4#") == Move(parse_square("d8"), parse_square("h4"))

    @pytest.mark.parametrize("san", ["Ke3", "Nd2", "e5", "O-O", "Zz9", "x"])
    def test_rejected(self, san: str) -> None:
        pos = position_from_fen("4k3/8/8/8/8/5N2/8/1N2K3 w - - 0 1")
        with pytest.raises(ValueError):
            parse_san(pos, san)


class TestMovetext:
    def test_fools_mate(self, replay) -> None:
        _, moves = replay("f2f3", "e7e5", "g2g4", "d8h4")
        assert san_movetext(moves) == "1. f3 e5 2. g4 Qh4#"

    def test_empty(self) -> None:
        assert san_movetext([]) == ""

    def test_black_to_move_start(self) -> None:
        start = position_from_fen("4k3/8/8/8/8/8/8/4K3 b - - 0 7")
        moves = [Move(E8, parse_square("d8")), Move(E1, parse_square("d1"))]
        assert san_movetext(moves, start) == "7... Kd8 8. Kd1"

    def test_illegal_move_rejected(self) -> None:
        with pytest.raises(ValueError):
            moves_to_sans([Move(E2, parse_square("e5"))])
