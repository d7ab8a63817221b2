"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

from collections.abc import Iterable

from chesslink.core.enums import Color, GameStatus, PieceType
from chesslink.core.move import Move
from chesslink.core.move_generator import MoveGenerator
from chesslink.core.piece import piece_letter, piece_type_from_letter
from chesslink.core.position import Position
from chesslink.core.rules import Rules
from chesslink.core.types import FILES, col_of, parse_square, rank_number, row_of, square_name


def move_to_san(position: Position, move: Move) -> str:
    """Convert a legal *move* to SAN given the *position* before the move."""
    board = position.board
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {square_name(move.from_sq)}")

    # Castling is written bare, without a check suffix
    if position.is_castling(move):
        return "O-O" if col_of(move.to_sq) > col_of(move.from_sq) else "O-O-O"

    san = ""
    is_capture = position.is_capture(move)

    if piece.piece_type == PieceType.PAWN:
        if is_capture:
            san += FILES[col_of(move.from_sq)]
    else:
        san += piece_letter(piece.piece_type)
        san += _disambiguation(position, move, piece.piece_type)

    if is_capture:
        san += "x"

    san += square_name(move.to_sq)

    if move.promotion is not None:
        san += "=" + piece_letter(move.promotion)

    # Check / checkmate suffix
    after = position.apply_move(move)
    if MoveGenerator(after).is_in_check(after.side_to_move):
        san += "#" if Rules.game_status(after) == GameStatus.CHECKMATE else "+"

    return san


def _disambiguation(position: Position, move: Move, piece_type: PieceType) -> str:
    """Shortest origin hint that singles *move* out among its rivals."""
    board = position.board
    rivals = [
        m
        for m in MoveGenerator(position).generate_legal_moves()
        if m.to_sq == move.to_sq
        and m.from_sq != move.from_sq
        and board[m.from_sq].piece_type == piece_type  # type: ignore[union-attr]
    ]
    if not rivals:
        return ""
    if not any(col_of(m.from_sq) == col_of(move.from_sq) for m in rivals):
        return FILES[col_of(move.from_sq)]
    if not any(row_of(m.from_sq) == row_of(move.from_sq) for m in rivals):
        return str(rank_number(move.from_sq))
    return square_name(move.from_sq)


def parse_san(position: Position, san: str) -> Move:
    """Parse a SAN string into a :class:`Move` given the current *position*."""
    legal = MoveGenerator(position).generate_legal_moves()

    clean = san.strip().rstrip("+#!?")

    # Castling
    if clean in ("O-O", "0-0", "O-O-O", "0-0-0"):
        kingside = len(clean) == 3
        for m in legal:
            if position.is_castling(m) and (col_of(m.to_sq) == 6) == kingside:
                return m
        raise ValueError(f"Illegal move: {san}")

    # Promotion ("e8=Q" or "e8Q")
    promotion: PieceType | None = None
    if len(clean) > 2 and clean[-1] in "QRBN":
        promotion = piece_type_from_letter(clean[-1])
        clean = clean[:-1].removesuffix("=")

    if len(clean) < 2:
        raise ValueError(f"Invalid SAN: {san!r}")

    # Destination (last two chars)
    to_sq = parse_square(clean[-2:])
    clean = clean[:-2].removesuffix("x")

    # Piece type
    if clean and clean[0] in "NBRQK":
        piece_type = piece_type_from_letter(clean[0])
        clean = clean[1:]
    else:
        piece_type = PieceType.PAWN

    # Disambiguation
    from_col: int | None = None
    from_row: int | None = None
    for ch in clean:
        if ch in FILES:
            from_col = FILES.index(ch)
        elif ch in "12345678":
            from_row = 8 - int(ch)
        else:
            raise ValueError(f"Invalid SAN: {san!r}")

    candidates: list[Move] = []
    for m in legal:
        p = position.board[m.from_sq]
        if p is None or p.piece_type != piece_type:
            continue
        if m.to_sq != to_sq or m.promotion != promotion:
            continue
        if from_col is not None and col_of(m.from_sq) != from_col:
            continue
        if from_row is not None and row_of(m.from_sq) != from_row:
            continue
        candidates.append(m)

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise ValueError(f"Illegal move: {san}")
    raise ValueError(f"Ambiguous move: {san} -> {[str(c) for c in candidates]}")


def moves_to_sans(moves: Iterable[Move], start: Position | None = None) -> list[str]:
    """SAN of each move, replayed from *start* (default: initial position)."""
    position = start if start is not None else Position.initial()
    sans: list[str] = []
    for move in moves:
        if not MoveGenerator(position).is_legal(move):
            raise ValueError(f"Illegal move at ply {len(sans) + 1}: {move}")
        sans.append(move_to_san(position, move))
        position = position.apply_move(move)
    return sans


def san_movetext(moves: Iterable[Move], start: Position | None = None) -> str:
    """Numbered movetext, e.g. ``1. e4 e5 2. Nf3``."""
    position = start if start is not None else Position.initial()
    number = position.fullmove_number
    black_first = position.side_to_move == Color.BLACK

    parts: list[str] = []
    for ply, san in enumerate(moves_to_sans(moves, position)):
        white_turn = (ply % 2 == 0) != black_first
        if white_turn:
            parts.append(f"{number}.")
        elif ply == 0:
            parts.append(f"{number}...")
        parts.append(san)
        if not white_turn:
            number += 1
    return " ".join(parts)
