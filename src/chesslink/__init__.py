"""Chess games shared as links.

:mod:`chesslink.core` holds the rules engine, :mod:`chesslink.codec` packs a
game's move list into a URL-safe token and replays it back.
"""

from chesslink.codec import append_move, create_game_url, decode, encode, parse_game_from_url
from chesslink.core import GameStatus, Move, Position, Rules, initial_position

__version__ = "0.1.0"

__all__ = [
    "GameStatus",
    "Move",
    "Position",
    "Rules",
    "append_move",
    "create_game_url",
    "decode",
    "encode",
    "initial_position",
    "parse_game_from_url",
]
