"""Share links carrying a game token in a query parameter."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from chesslink.codec.token import DecodedGame, decode, encode
from chesslink.core.move import Move

_LOGGER = logging.getLogger(__name__)

DEFAULT_PARAM = "g"


def create_game_url(base_url: str, moves: Iterable[Move], param: str = DEFAULT_PARAM) -> str:
    """Link to the game after *moves*; the bare *base_url* when there are none.

    Other query parameters of *base_url* are kept and an existing *param* is
    replaced.
    """
    token = encode(moves)
    if not token:
        return base_url
    parts = urlsplit(base_url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != param]
    query.append((param, token))
    return urlunsplit(parts._replace(query=urlencode(query)))


def parse_game_from_url(url: str, param: str = DEFAULT_PARAM) -> DecodedGame:
    """Decode the game carried by *url*; never raises."""
    try:
        query = urlsplit(url).query
    except ValueError as exc:
        _LOGGER.warning("Unparseable game URL %r: %s", url, exc)
        return DecodedGame()
    # A repeated parameter resolves to its first occurrence
    token = next((v for k, v in parse_qsl(query) if k == param), "")
    return decode(token)
