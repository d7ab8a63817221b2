"""Fixed-width binary move records.

Each move is one big-endian 16-bit word::

    15      10 9        4 3      0
    +---------+----------+--------+
    |  from   |    to    | promo  |
    +---------+----------+--------+

``from`` and ``to`` are square indexes ``row * 8 + col`` (0-63).  ``promo`` is
0 for no promotion, then 1-4 for queen, rook, bishop, knight.  Records are
concatenated in play order with no separator and no length prefix.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable
from typing import Final

from chesslink.core.enums import PieceType
from chesslink.core.move import Move
from chesslink.core.types import is_valid_square

RECORD_SIZE: Final = 2

PROMOTION_CODES: Final[dict[PieceType, int]] = {
    PieceType.QUEEN: 1,
    PieceType.ROOK: 2,
    PieceType.BISHOP: 3,
    PieceType.KNIGHT: 4,
}
_PROMOTION_BY_CODE: Final[dict[int, PieceType]] = {
    code: kind for kind, code in PROMOTION_CODES.items()
}


class TokenError(ValueError):
    """A token, byte buffer or record that cannot be turned into moves."""


def pack_move(move: Move) -> int:
    """16-bit record for *move*."""
    if not (is_valid_square(move.from_sq) and is_valid_square(move.to_sq)):
        raise ValueError(f"Square index out of range in {move!r}")
    # Pawn/king "promotions" have no code and travel as 0.
    promo = PROMOTION_CODES.get(move.promotion, 0) if move.promotion is not None else 0
    return (move.from_sq << 10) | (move.to_sq << 4) | promo


def unpack_move(record: int) -> Move:
    """Inverse of :func:`pack_move`; unknown promotion codes raise TokenError."""
    from_sq = (record >> 10) & 0x3F
    to_sq = (record >> 4) & 0x3F
    code = record & 0xF
    if code == 0:
        return Move(from_sq, to_sq)
    try:
        return Move(from_sq, to_sq, _PROMOTION_BY_CODE[code])
    except KeyError:
        raise TokenError(f"Unknown promotion code {code} in record {record:#06x}") from None


def moves_to_bytes(moves: Iterable[Move]) -> bytes:
    records = [pack_move(m) for m in moves]
    return struct.pack(f">{len(records)}H", *records)


def bytes_to_records(data: bytes) -> list[int]:
    """Split *data* into 16-bit records; an odd byte count is malformed."""
    if len(data) % RECORD_SIZE:
        raise TokenError(f"Move buffer has odd length {len(data)}")
    return list(struct.unpack(f">{len(data) // RECORD_SIZE}H", data))
