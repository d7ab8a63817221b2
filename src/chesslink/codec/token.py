"""Shareable game tokens: move list <-> base64url text.

Decoding never trusts the token.  Records are replayed one by one from the
initial position and the first one that is not a legal move ends the game
there.  A token that cannot be read at all yields the initial position.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from chesslink.codec.records import (
    TokenError,
    bytes_to_records,
    moves_to_bytes,
    unpack_move,
)
from chesslink.core.enums import GameStatus
from chesslink.core.move import Move
from chesslink.core.move_generator import MoveGenerator
from chesslink.core.position import Position
from chesslink.core.rules import Rules

_LOGGER = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[A-Za-z0-9_-]*")


@dataclass(frozen=True, slots=True)
class DecodedGame:
    """Replayed game: the final position and every accepted move."""

    position: Position = field(default_factory=Position.initial)
    moves: tuple[Move, ...] = ()

    @property
    def status(self) -> GameStatus:
        return Rules.game_status(self.position)


@dataclass(frozen=True, slots=True)
class DecodeFailure:
    """The token could not be read as a move buffer at all."""

    reason: str


DecodeResult = DecodedGame | DecodeFailure


# -- Text layer ---------------------------------------------------------------


def bytes_to_token(data: bytes) -> str:
    """base64url (RFC 4648 §5) without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def token_to_bytes(token: str) -> bytes:
    """Inverse of :func:`bytes_to_token`; raises :class:`TokenError`.

    A token that already carries its one or two ``=`` pad characters (total
    length a multiple of 4) is accepted as well.
    """
    if len(token) % 4 == 0:
        token = token.removesuffix("=").removesuffix("=")
    if not _TOKEN_RE.fullmatch(token):
        raise TokenError(f"Token contains characters outside base64url: {token!r}")
    padded = token + "=" * (-len(token) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except binascii.Error as exc:
        raise TokenError(f"Token is not valid base64url: {exc}") from exc


# -- Public API ---------------------------------------------------------------


def encode(moves: Iterable[Move]) -> str:
    """Token for *moves*; the empty list gives the empty string."""
    return bytes_to_token(moves_to_bytes(moves))


def try_decode(token: str | None) -> DecodeResult:
    """Replay *token* from the initial position.

    Returns :class:`DecodeFailure` when the text or byte layer is malformed.
    Otherwise the result holds the longest legal prefix of the recorded moves.
    """
    if not token:
        return DecodedGame()

    try:
        records = bytes_to_records(token_to_bytes(token))
    except TokenError as exc:
        return DecodeFailure(str(exc))

    position = Position.initial()
    accepted: list[Move] = []
    for index, record in enumerate(records):
        try:
            move = unpack_move(record)
        except TokenError as exc:
            _LOGGER.warning("Stopping replay at record %d: %s", index, exc)
            break
        if not MoveGenerator(position).is_legal(move):
            _LOGGER.warning("Stopping replay at record %d: illegal move %s", index, move)
            break
        position = position.apply_move(move)
        accepted.append(move)

    _LOGGER.debug("Decoded %d of %d recorded moves", len(accepted), len(records))
    return DecodedGame(position, tuple(accepted))


def decode(token: str | None) -> DecodedGame:
    """Like :func:`try_decode`, with failures mapped to the initial position."""
    result = try_decode(token)
    if isinstance(result, DecodeFailure):
        _LOGGER.warning("Failed to decode game token: %s", result.reason)
        return DecodedGame()
    return result


def append_move(token: str | None, move: Move) -> str:
    """Token for the game in *token* followed by *move*.

    *move* is not checked here; an illegal one is dropped by the next decode.
    """
    return encode((*decode(token).moves, move))
