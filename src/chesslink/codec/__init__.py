"""Move codec: compact, URL-safe tokens for whole games.

Quick start::

    from chesslink.codec import decode, encode

    token = encode(moves)
    game = decode(token)
    board, played = game.position.board, game.moves
"""

from chesslink.codec.links import DEFAULT_PARAM, create_game_url, parse_game_from_url
from chesslink.codec.records import (
    PROMOTION_CODES,
    TokenError,
    bytes_to_records,
    moves_to_bytes,
    pack_move,
    unpack_move,
)
from chesslink.codec.token import (
    DecodedGame,
    DecodeFailure,
    DecodeResult,
    append_move,
    bytes_to_token,
    decode,
    encode,
    token_to_bytes,
    try_decode,
)

__all__ = [
    # Records
    "PROMOTION_CODES",
    "TokenError",
    "bytes_to_records",
    "moves_to_bytes",
    "pack_move",
    "unpack_move",
    # Tokens
    "DecodeFailure",
    "DecodeResult",
    "DecodedGame",
    "append_move",
    "bytes_to_token",
    "decode",
    "encode",
    "token_to_bytes",
    "try_decode",
    # Links
    "DEFAULT_PARAM",
    "create_game_url",
    "parse_game_from_url",
]
