"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesslink.core.enums import Color, PieceType

# Lowercase letter per kind; white pieces use the uppercase form (FEN/SAN).
_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_KINDS: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}

# Unicode figurines, white block first, both in PieceType order.
_FIGURINES = ("♙♘♗♖♕♔", "♟♞♝♜♛♚")


def piece_letter(piece_type: PieceType) -> str:
    """Uppercase letter for a piece kind, e.g. KNIGHT → 'N'."""
    return _LETTERS[piece_type].upper()


def piece_type_from_letter(letter: str) -> PieceType:
    """Inverse of :func:`piece_letter`; case-insensitive."""
    try:
        return _KINDS[letter.lower()]
    except KeyError:
        raise ValueError(f"Invalid piece letter: {letter!r}") from None


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable ``(color, kind)`` pair."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        if len(char) != 1 or char.lower() not in _KINDS:
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, _KINDS[char.lower()])

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _FIGURINES[int(self.color)][int(self.piece_type) - 1]
