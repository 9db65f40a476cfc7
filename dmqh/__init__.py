"""Rule engine for the dmqh sliding-tile merge puzzle."""

from .engine import Game, Move
from .events import (
    GameEvents,
    MergeEvent,
    MoveEvent,
    ScoreEvent,
    SpawnEvent,
    StaticEvent,
)
from .randomness import SeededRandom, TileRandom

__all__ = [
    "Game",
    "GameEvents",
    "MergeEvent",
    "Move",
    "MoveEvent",
    "ScoreEvent",
    "SeededRandom",
    "SpawnEvent",
    "StaticEvent",
    "TileRandom",
]

__version__ = "0.1.0"
