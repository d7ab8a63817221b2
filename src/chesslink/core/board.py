"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from chesslink.core.enums import Color, PieceType
from chesslink.core.piece import Piece
from chesslink.core.types import Square, make_square, rank_number

_PIECE_TYPE_COUNT = 6
_COLOR_COUNT = 2

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """64-square piece placement with incremental piece indexes.

    Callers only read a board.  Writes go through :meth:`_put`, which is used
    by the factories below and by move application on a fresh copy, so a board
    reachable from a :class:`~chesslink.core.position.Position` never changes.
    """

    __slots__ = ("_squares", "_piece_bitboards", "_color_bitboards", "_king_squares")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color][piece_type-1] -> bitboard of occupied squares.
        self._piece_bitboards: list[list[int]] = [
            [0] * _PIECE_TYPE_COUNT for _ in range(_COLOR_COUNT)
        ]
        # [color] -> bitboard of all occupied squares for that color.
        self._color_bitboards: list[int] = [0] * _COLOR_COUNT
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None] * _COLOR_COUNT

    @staticmethod
    def _squares_from_bitboard(bitboard: int) -> list[Square]:
        squares: list[Square] = []
        while bitboard:
            lsb = bitboard & -bitboard
            squares.append(lsb.bit_length() - 1)
            bitboard ^= lsb
        return squares

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __iter__(self) -> Iterator[Piece | None]:
        return iter(self._squares)

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    def rows(self) -> tuple[tuple[Piece | None, ...], ...]:
        """The grid as 8 rows, rank 8 first, for renderers."""
        return tuple(tuple(self._squares[r * 8 : r * 8 + 8]) for r in range(8))

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return self._squares_from_bitboard(self.pieces_bitboard(color, piece_type))

    def pieces_bitboard(self, color: Color, piece_type: PieceType) -> int:
        """Bitboard of squares occupied by *color*'s *piece_type*."""
        return self._piece_bitboards[int(color)][int(piece_type) - 1]

    def has_piece(self, color: Color, piece_type: PieceType) -> bool:
        """Whether *color* has at least one piece of *piece_type*."""
        return bool(self.pieces_bitboard(color, piece_type))

    def all_pieces_bitboard(self, color: Color) -> int:
        """Bitboard of all squares occupied by *color*."""
        return self._color_bitboards[int(color)]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return self._squares_from_bitboard(self.all_pieces_bitboard(color))

    def piece_count(self) -> int:
        """Number of pieces of both colors on the board."""
        return (self._color_bitboards[0] | self._color_bitboards[1]).bit_count()

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[int(color)]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    # -- Copy / private mutation ---------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._piece_bitboards = [row.copy() for row in self._piece_bitboards]
        b._color_bitboards = self._color_bitboards.copy()
        b._king_squares = self._king_squares.copy()
        return b

    def _put(self, sq: Square, piece: Piece | None) -> None:
        old_piece = self._squares[sq]
        if old_piece == piece:
            return

        mask = 1 << sq

        if old_piece is not None:
            old_color_idx = int(old_piece.color)
            self._piece_bitboards[old_color_idx][int(old_piece.piece_type) - 1] &= ~mask
            self._color_bitboards[old_color_idx] &= ~mask
            if (
                old_piece.piece_type == PieceType.KING
                and self._king_squares[old_color_idx] == sq
            ):
                self._king_squares[old_color_idx] = None

        self._squares[sq] = piece

        if piece is None:
            return

        color_idx = int(piece.color)
        self._piece_bitboards[color_idx][int(piece.piece_type) - 1] |= mask
        self._color_bitboards[color_idx] |= mask
        if piece.piece_type == PieceType.KING:
            self._king_squares[color_idx] = sq

    # -- Factories ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position (black on rows 0-1, white on rows 6-7)."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b._put(make_square(0, col), Piece(Color.BLACK, pt))
            b._put(make_square(1, col), Piece(Color.BLACK, PieceType.PAWN))
            b._put(make_square(6, col), Piece(Color.WHITE, PieceType.PAWN))
            b._put(make_square(7, col), Piece(Color.WHITE, pt))
        return b

    @classmethod
    def from_pieces(cls, placement: Mapping[Square, Piece]) -> Board:
        """Board holding exactly the pieces in *placement*."""
        b = cls()
        for sq, piece in placement.items():
            if not 0 <= sq < 64:
                raise ValueError(f"Square index out of range: {sq}")
            b._put(sq, piece)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(tuple(self._squares))

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                sq = make_square(row, col)
                p = self[sq]
                cells.append(str(p) if p else ".")
            rows.append(f"{rank_number(make_square(row, 0))} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
