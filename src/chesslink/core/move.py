"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from chesslink.core.enums import PieceType
from chesslink.core.piece import piece_letter, piece_type_from_letter
from chesslink.core.types import Square, parse_square, square_name

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class Move:
    """Intent to move a piece from one square to another.

    A move says nothing about whether it is legal; that is decided against a
    :class:`~chesslink.core.position.Position`.  Castling is a two-square king
    move and en passant is a diagonal pawn move onto the en-passant target,
    both recognised by the engine when the move is applied.
    """

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += piece_letter(self.promotion).lower()
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation, e.g. ``e7e8q``."""
        return str(self)

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Parse UCI long-algebraic notation."""
        text = text.strip()
        if len(text) not in (4, 5):
            raise ValueError(f"Invalid UCI move: {text!r}")
        from_sq = parse_square(text[0:2])
        to_sq = parse_square(text[2:4])
        promotion: PieceType | None = None
        if len(text) == 5:
            promotion = piece_type_from_letter(text[4])
            if promotion not in PROMOTION_TYPES:
                raise ValueError(f"Invalid promotion piece in {text!r}")
        return cls(from_sq, to_sq, promotion)
