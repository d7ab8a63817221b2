"""High-level chess rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesslink.core.enums import Color, GameStatus, PieceType
from chesslink.core.move_generator import MoveGenerator
from chesslink.core.types import square_parity

if TYPE_CHECKING:
    from chesslink.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Draw policy: the 50-move rule and insufficient material end the game at
    # once.  Repetition is not tracked.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return MoveGenerator(position).is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.game_status(position) == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return Rules.game_status(position) == GameStatus.STALEMATE

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-color bishops).

        Two bishops on opposite-colored squares are not counted as a draw.
        """
        board = position.board
        total = board.piece_count()

        # K vs K
        if total == 2:
            return True

        # K+minor vs K
        if total == 3:
            return any(
                board.has_piece(color, kind)
                for color in Color
                for kind in (PieceType.KNIGHT, PieceType.BISHOP)
            )

        # K+B vs K+B with same-colour bishops
        if total == 4:
            wb = board.pieces(Color.WHITE, PieceType.BISHOP)
            bb = board.pieces(Color.BLACK, PieceType.BISHOP)
            if len(wb) == 1 and len(bb) == 1:
                return square_parity(wb[0]) == square_parity(bb[0])

        return False

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= 100  # 100 half-moves = 50 full moves

    @staticmethod
    def game_status(position: Position) -> GameStatus:
        """Classify *position*; mate and stalemate take precedence over draws."""
        gen = MoveGenerator(position)
        if not gen.generate_legal_moves():
            if gen.is_in_check(position.side_to_move):
                return GameStatus.CHECKMATE
            return GameStatus.STALEMATE

        if Rules.is_fifty_move_rule(position):
            return GameStatus.DRAW_FIFTY_MOVE

        if Rules.is_insufficient_material(position):
            return GameStatus.DRAW_INSUFFICIENT_MATERIAL

        return GameStatus.ONGOING

    @staticmethod
    def winner(position: Position) -> Color | None:
        """The side that delivered mate, or ``None`` if nobody has won."""
        if Rules.game_status(position) == GameStatus.CHECKMATE:
            return position.side_to_move.opposite
        return None
