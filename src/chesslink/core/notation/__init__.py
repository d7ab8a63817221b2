"""Notation package: SAN and FEN parsing and serialization."""

from chesslink.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from chesslink.core.notation.san import (
    move_to_san,
    moves_to_sans,
    parse_san,
    san_movetext,
)

__all__ = [
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
    "move_to_san",
    "moves_to_sans",
    "parse_san",
    "san_movetext",
]
