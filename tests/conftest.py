"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chesslink.core.move import Move
from chesslink.core.move_generator import MoveGenerator
from chesslink.core.position import Position

Replay = Callable[..., tuple[Position, list[Move]]]


def replay_uci(*ucis: str, start: Position | None = None) -> tuple[Position, list[Move]]:
    """Play UCI moves from *start*, asserting each one is legal."""
    position = start if start is not None else Position.initial()
    moves: list[Move] = []
    for uci in ucis:
        move = Move.from_uci(uci)
        assert MoveGenerator(position).is_legal(move), f"{uci} is illegal here"
        position = position.apply_move(move)
        moves.append(move)
    return position, moves


@pytest.fixture
def replay() -> Replay:
    """Helper that replays UCI moves from the initial position."""
    return replay_uci

