"""Position — complete game state (board + metadata) as an immutable snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field

from chesslink.core.board import Board
from chesslink.core.enums import CastlingRights, Color, PieceType
from chesslink.core.move import Move
from chesslink.core.piece import Piece
from chesslink.core.types import (
    A1,
    A8,
    H1,
    H8,
    Square,
    col_of,
    make_square,
    row_of,
    square_name,
)

# Home corner of each rook -> the right that dies when anything leaves or lands there.
ROOK_CORNERS: dict[Square, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
}

_KING_RIGHTS: dict[Color, CastlingRights] = {
    Color.WHITE: CastlingRights.WHITE_BOTH,
    Color.BLACK: CastlingRights.BLACK_BOTH,
}


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Positions are values.  :meth:`apply_move` returns the successor and leaves
    ``self`` untouched, so any position can be shared freely.  ``last_move`` is
    kept only so a renderer can highlight it; no rule depends on it.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    last_move: Move | None = None

    @classmethod
    def initial(cls) -> Position:
        """The standard starting position, white to move."""
        return cls()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> Position:
        """Return the position after *move*.

        No legality check is done here; validate with
        :meth:`MoveGenerator.is_legal <chesslink.core.move_generator.MoveGenerator.is_legal>`
        first.  An empty origin square means the caller skipped that step.
        """
        piece = self.board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {square_name(move.from_sq)}")

        board = self.board.copy()
        captured = board[move.to_sq]
        is_pawn = piece.piece_type == PieceType.PAWN

        # Relocate (with promotion)
        placed = piece if move.promotion is None else Piece(piece.color, move.promotion)
        board._put(move.from_sq, None)
        board._put(move.to_sq, placed)

        # En passant: the captured pawn sits beside the origin, not on the target
        if (
            is_pawn
            and move.to_sq == self.en_passant
            and col_of(move.from_sq) != col_of(move.to_sq)
        ):
            ep_capture_sq = make_square(row_of(move.from_sq), col_of(move.to_sq))
            captured = board[ep_capture_sq]
            board._put(ep_capture_sq, None)

        # Castling: a two-square king move drags the rook along
        if self.is_castling(move):
            row = row_of(move.from_sq)
            if col_of(move.to_sq) == 6:
                rook_from, rook_to = make_square(row, 7), make_square(row, 5)
            else:
                rook_from, rook_to = make_square(row, 0), make_square(row, 3)
            board._put(rook_to, board[rook_from])
            board._put(rook_from, None)

        castling = self.castling
        if piece.piece_type == PieceType.KING:
            castling &= ~_KING_RIGHTS[piece.color]
        for sq in (move.from_sq, move.to_sq):
            if sq in ROOK_CORNERS:
                castling &= ~ROOK_CORNERS[sq]

        en_passant: Square | None = None
        if is_pawn and abs(row_of(move.to_sq) - row_of(move.from_sq)) == 2:
            en_passant = make_square(
                (row_of(move.from_sq) + row_of(move.to_sq)) // 2,
                col_of(move.from_sq),
            )

        if is_pawn or captured is not None:
            halfmove_clock = 0
        else:
            halfmove_clock = self.halfmove_clock + 1

        fullmove_number = self.fullmove_number
        if self.side_to_move == Color.BLACK:
            fullmove_number += 1

        return Position(
            board=board,
            side_to_move=self.side_to_move.opposite,
            castling=castling,
            en_passant=en_passant,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
            last_move=move,
        )

    def is_capture(self, move: Move) -> bool:
        """Whether *move* takes a piece (en passant included)."""
        if self.board[move.to_sq] is not None:
            return True
        piece = self.board[move.from_sq]
        return (
            piece is not None
            and piece.piece_type == PieceType.PAWN
            and move.to_sq == self.en_passant
            and col_of(move.from_sq) != col_of(move.to_sq)
        )

    def is_castling(self, move: Move) -> bool:
        """Whether *move* is a two-square king move."""
        piece = self.board[move.from_sq]
        return (
            piece is not None
            and piece.piece_type == PieceType.KING
            and abs(col_of(move.to_sq) - col_of(move.from_sq)) == 2
        )


def initial_position() -> Position:
    """The standard starting position, white to move."""
    return Position.initial()
