"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesslink.core.enums import CastlingRights, Color, PieceType
from chesslink.core.move import PROMOTION_TYPES, Move
from chesslink.core.types import E1, E8, Square, is_valid_square, make_square

if TYPE_CHECKING:
    from chesslink.core.board import Board
    from chesslink.core.position import Position


# Offsets are (d_row, d_col); row 0 is rank 8, so white pawns move to d_row -1.
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_PAWN_FORWARD: tuple[int, int] = (-1, 1)  # [color] -> d_row
_PAWN_START_ROW: tuple[int, int] = (6, 1)
_PAWN_PROMOTION_ROW: tuple[int, int] = (0, 7)
_KING_HOME: tuple[Square, Square] = (E1, E8)
_KINGSIDE: tuple[CastlingRights, CastlingRights] = (
    CastlingRights.WHITE_KINGSIDE,
    CastlingRights.BLACK_KINGSIDE,
)
_QUEENSIDE: tuple[CastlingRights, CastlingRights] = (
    CastlingRights.WHITE_QUEENSIDE,
    CastlingRights.BLACK_QUEENSIDE,
)
_COLOR_OPPOSITE: tuple[Color, Color] = (Color.BLACK, Color.WHITE)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        row = sq >> 3
        col = sq & 7
        moves: list[Square] = []
        for dr, dc in offsets:
            ar = row + dr
            ac = col + dc
            if 0 <= ar < 8 and 0 <= ac < 8:
                moves.append(make_square(ar, ac))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_attack_masks(targets: tuple[tuple[Square, ...], ...]) -> tuple[int, ...]:
    masks: list[int] = [0] * 64
    for sq in range(64):
        mask = 0
        for to_sq in targets[sq]:
            mask |= 1 << to_sq
        masks[sq] = mask
    return tuple(masks)


def _build_pawn_attacker_masks() -> tuple[tuple[int, ...], tuple[int, ...]]:
    """[color][sq] -> squares from which a pawn of *color* attacks *sq*."""
    per_color: list[tuple[int, ...]] = []
    for color in (Color.WHITE, Color.BLACK):
        # An attacking pawn stands one step "behind" the square it hits.
        behind = -_PAWN_FORWARD[int(color)]
        masks: list[int] = [0] * 64
        for sq in range(64):
            ar = (sq >> 3) + behind
            if not 0 <= ar < 8:
                continue
            col = sq & 7
            for ac in (col - 1, col + 1):
                if 0 <= ac < 8:
                    masks[sq] |= 1 << make_square(ar, ac)
        per_color.append(tuple(masks))
    return (per_color[0], per_color[1])


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        row = sq >> 3
        col = sq & 7
        square_rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            ar = row + dr
            ac = col + dc
            ray: list[Square] = []
            while 0 <= ar < 8 and 0 <= ac < 8:
                ray.append(make_square(ar, ac))
                ar += dr
                ac += dc
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_KNIGHT_ATTACK_MASKS = _build_attack_masks(_KNIGHT_TARGETS)
_KING_ATTACK_MASKS = _build_attack_masks(_KING_TARGETS)
_PAWN_ATTACKER_MASKS = _build_pawn_attacker_masks()

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


# -- Attack detection -------------------------------------------------------


def _ray_hits(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    kinds: tuple[PieceType, PieceType],
) -> bool:
    for ray in rays:
        for to_sq in ray:
            piece = board[to_sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in kinds:
                return True
            break
    return False


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Walks outward from *sq*: fixed offsets for pawns, knights and the king,
    rays for the sliders.  No move list of the attacker is built.
    """
    by_idx = int(by_color)

    if board.pieces_bitboard(by_color, PieceType.PAWN) & _PAWN_ATTACKER_MASKS[by_idx][sq]:
        return True

    if board.pieces_bitboard(by_color, PieceType.KNIGHT) & _KNIGHT_ATTACK_MASKS[sq]:
        return True

    if board.pieces_bitboard(by_color, PieceType.KING) & _KING_ATTACK_MASKS[sq]:
        return True

    queens = board.has_piece(by_color, PieceType.QUEEN)

    if (queens or board.has_piece(by_color, PieceType.BISHOP)) and _ray_hits(
        board, _BISHOP_RAYS[sq], by_color, (PieceType.BISHOP, PieceType.QUEEN)
    ):
        return True

    if (queens or board.has_piece(by_color, PieceType.ROOK)) and _ray_hits(
        board, _ROOK_RAYS[sq], by_color, (PieceType.ROOK, PieceType.QUEEN)
    ):
        return True

    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?

    Raises :class:`ValueError` if *color* has no king, which cannot happen for
    a position reached by legal moves from the start.
    """
    return is_square_attacked(board, board.king_square(color), _COLOR_OPPOSITE[int(color)])


class MoveGenerator:
    """Generates moves for the side to move of a :class:`Position`.

    Legality is decided by applying the candidate and asking whether the
    mover's king is attacked in the successor.  Positions are immutable, so
    the generator never has to restore anything.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        legal: list[Move] = []
        for sq in self._board.all_pieces(self._pos.side_to_move):
            legal.extend(self.legal_moves(sq))
        return legal

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        for sq in self._board.all_pieces(self._pos.side_to_move):
            moves.extend(self.pseudo_legal_moves(sq))
        return moves

    def legal_moves(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq*."""
        return [m for m in self.pseudo_legal_moves(sq) if self._keeps_king_safe(m)]

    def pseudo_legal_moves(self, sq: Square) -> list[Move]:
        """Pattern moves of the piece on *sq*, ignoring king safety.

        Empty when *sq* is empty or holds a piece of the side not to move.
        """
        piece = self._board[sq]
        color = self._pos.side_to_move
        if piece is None or piece.color != color:
            return []

        moves: list[Move] = []
        kind = piece.piece_type
        if kind == PieceType.PAWN:
            self._gen_pawn(sq, color, moves)
        elif kind == PieceType.KNIGHT:
            self._gen_knight(sq, color, moves)
        elif kind == PieceType.KING:
            self._gen_king(sq, color, moves)
        else:
            self._gen_sliding(sq, color, _SLIDER_RAYS[kind][sq], moves)
        return moves

    def is_legal(self, move: Move) -> bool:
        """Exact (from, to, promotion) match among pattern moves, king kept safe."""
        if not (is_valid_square(move.from_sq) and is_valid_square(move.to_sq)):
            return False
        if move not in self.pseudo_legal_moves(move.from_sq):
            return False
        return self._keeps_king_safe(move)

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color | None = None) -> bool:
        """Is *color*'s king (default: side to move) attacked?"""
        if color is None:
            color = self._pos.side_to_move
        return is_in_check(self._board, color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return is_square_attacked(self._board, sq, by_color)

    # -- Helpers -------------------------------------------------------------

    def _keeps_king_safe(self, move: Move) -> bool:
        after = self._pos.apply_move(move)
        return not is_in_check(after.board, self._pos.side_to_move)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        color_idx = int(color)
        row = sq >> 3
        col = sq & 7
        next_row = row + _PAWN_FORWARD[color_idx]
        if not 0 <= next_row < 8:
            return
        promotes = next_row == _PAWN_PROMOTION_ROW[color_idx]

        one_step = make_square(next_row, col)
        if board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, promotes, moves)
            if row == _PAWN_START_ROW[color_idx]:
                two_step = make_square(next_row + _PAWN_FORWARD[color_idx], col)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step))

        for cap_col in (col - 1, col + 1):
            if not 0 <= cap_col < 8:
                continue
            cap_sq = make_square(next_row, cap_col)
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, promotes, moves)
            elif cap_sq == self._pos.en_passant:
                moves.append(Move(sq, cap_sq))

    @staticmethod
    def _add_pawn_move(
        sq: Square, to_sq: Square, promotes: bool, moves: list[Move]
    ) -> None:
        if promotes:
            for pt in PROMOTION_TYPES:
                moves.append(Move(sq, to_sq, pt))
        else:
            moves.append(Move(sq, to_sq))

    def _gen_knight(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        for to_sq in _KNIGHT_TARGETS[sq]:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_king(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        for to_sq in _KING_TARGETS[sq]:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

        self._gen_castling(sq, color, moves)

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        color_idx = int(color)
        if king_sq != _KING_HOME[color_idx]:
            return
        castling = self._pos.castling
        if not castling & (_KINGSIDE[color_idx] | _QUEENSIDE[color_idx]):
            return
        if self.is_in_check(color):
            return

        opponent = _COLOR_OPPOSITE[color_idx]
        # King home is column 4 of its back row; rook corners are columns 0 and 7.
        if castling & _KINGSIDE[color_idx] and self._can_castle(
            king_sq, rook_sq=king_sq + 3, between=(1, 2), transit=(1, 2), opponent=opponent
        ):
            moves.append(Move(king_sq, king_sq + 2))

        if castling & _QUEENSIDE[color_idx] and self._can_castle(
            king_sq, rook_sq=king_sq - 4, between=(-1, -2, -3), transit=(-1, -2), opponent=opponent
        ):
            moves.append(Move(king_sq, king_sq - 2))

    def _can_castle(
        self,
        king_sq: Square,
        *,
        rook_sq: Square,
        between: tuple[int, ...],
        transit: tuple[int, ...],
        opponent: Color,
    ) -> bool:
        board = self._board
        rook = board[rook_sq]
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.color == opponent
        ):
            return False
        if any(not board.is_empty(king_sq + d) for d in between):
            return False
        return not any(
            is_square_attacked(board, king_sq + d, opponent) for d in transit
        )
