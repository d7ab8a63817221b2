"""Command-line access to the codec: build and inspect game tokens."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from chesslink.codec import DecodedGame, create_game_url, decode, encode, parse_game_from_url
from chesslink.config import LinkSettings
from chesslink.core import Move, MoveGenerator, Position, parse_san, position_to_fen, san_movetext

_LOGGER = logging.getLogger(__name__)


class MoveInputError(ValueError):
    """A move argument that is not legal in the current position."""


def parse_move(position: Position, text: str) -> Move:
    """Read *text* as UCI (``e2e4``) or SAN (``Nf3``) and check it is legal."""
    try:
        move = Move.from_uci(text)
    except ValueError:
        try:
            return parse_san(position, text)
        except ValueError as exc:
            raise MoveInputError(str(exc)) from exc
    if not MoveGenerator(position).is_legal(move):
        raise MoveInputError(f"Illegal move: {text}")
    return move


def play(texts: Sequence[str], start: Position | None = None) -> list[Move]:
    """Parse and play *texts* in order, starting at *start* (default: initial)."""
    position = start if start is not None else Position.initial()
    moves: list[Move] = []
    for text in texts:
        move = parse_move(position, text)
        moves.append(move)
        position = position.apply_move(move)
    return moves


def _print_game(game: DecodedGame) -> None:
    print(repr(game.position.board))
    print()
    print(position_to_fen(game.position))
    print(san_movetext(game.moves) or "(no moves)")
    print(f"Status: {game.status}")


def cmd_encode(args: argparse.Namespace) -> int:
    print(encode(play(args.moves)))
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    settings = LinkSettings.from_env()
    if "://" in args.token:
        game = parse_game_from_url(args.token, settings.query_param)
    else:
        game = decode(args.token)
    _print_game(game)
    return 0


def cmd_append(args: argparse.Namespace) -> int:
    game = decode(args.token)
    move = parse_move(game.position, args.move)
    print(encode((*game.moves, move)))
    return 0


def cmd_link(args: argparse.Namespace) -> int:
    settings = LinkSettings.from_env()
    base_url = args.base_url or settings.base_url
    print(create_game_url(base_url, play(args.moves), settings.query_param))
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="chesslink", description=__doc__)
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = ap.add_subparsers(dest="cmd", required=True)

    se = sub.add_parser("encode", help="Token for a sequence of moves")
    se.add_argument("moves", nargs="*", help="UCI or SAN moves from the start")
    se.set_defaults(fn=cmd_encode)

    sd = sub.add_parser("decode", help="Show the game held by a token or link")
    sd.add_argument("token")
    sd.set_defaults(fn=cmd_decode)

    sa = sub.add_parser("append", help="Token with one more move")
    sa.add_argument("token")
    sa.add_argument("move")
    sa.set_defaults(fn=cmd_append)

    sl = sub.add_parser("link", help="Share link for a sequence of moves")
    sl.add_argument("moves", nargs="*")
    sl.add_argument("--base-url", default=None)
    sl.set_defaults(fn=cmd_link)

    return ap


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return int(args.fn(args))
    except MoveInputError as exc:
        _LOGGER.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
