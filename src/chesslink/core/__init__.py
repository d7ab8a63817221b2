"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from chesslink.core import MoveGenerator, Rules, initial_position

    pos = initial_position()
    for move in MoveGenerator(pos).generate_legal_moves():
        print(move, Rules.game_status(pos.apply_move(move)))
"""

from chesslink.core.board import Board
from chesslink.core.enums import CastlingRights, Color, GameStatus, PieceType
from chesslink.core.move import PROMOTION_TYPES, Move
from chesslink.core.move_generator import (
    MoveGenerator,
    is_in_check,
    is_square_attacked,
)
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
from chesslink.core.position import Position, initial_position
from chesslink.core.rules import Rules
from chesslink.core.types import (
    Square,
    col_of,
    make_square,
    parse_square,
    row_of,
    square_name,
    to_coords,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameStatus",
    "PieceType",
    # Types / helpers
    "Square",
    "col_of",
    "make_square",
    "parse_square",
    "row_of",
    "square_name",
    "to_coords",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "PROMOTION_TYPES",
    "Piece",
    "Position",
    "Rules",
    "initial_position",
    "is_in_check",
    "is_square_attacked",
    # Notation
    "STARTING_FEN",
    "move_to_san",
    "moves_to_sans",
    "parse_san",
    "position_from_fen",
    "position_to_fen",
    "san_movetext",
]
