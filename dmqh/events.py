"""Event records produced by the engine after each reset or accepted move."""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class StaticEvent:
    """A tile that kept its cell."""
    x: int
    y: int
    value: int


@dataclass(frozen=True)
class SpawnEvent:
    """A newly created tile."""
    x: int
    y: int
    value: int


@dataclass(frozen=True)
class MoveEvent:
    """A tile that slid from (x0, y0) to (x, y) without merging."""
    x0: int
    y0: int
    x: int
    y: int
    value: int


@dataclass(frozen=True)
class MergeEvent:
    """
    Two tiles of exponent ``value0`` from (x0, y0) and (x1, y1) that
    combined into one tile of exponent ``value`` at (x, y).
    """
    x0: int
    y0: int
    x1: int
    y1: int
    x: int
    y: int
    value0: int
    value: int

    @property
    def points(self) -> int:
        """Score credited for this merge (the eaten tile's displayed value)."""
        return 1 << self.value0


@dataclass(frozen=True)
class ScoreEvent:
    score: int
    difference: Optional[int] = None


@dataclass(frozen=True)
class GameEvents:
    """Everything that changed in one reset or move."""
    statics: Tuple[StaticEvent, ...] = ()
    spawns: Tuple[SpawnEvent, ...] = ()
    moves: Tuple[MoveEvent, ...] = ()
    merges: Tuple[MergeEvent, ...] = ()
    score: ScoreEvent = field(default_factory=lambda: ScoreEvent(0))
    game_over: bool = False

    @property
    def changed(self) -> bool:
        """Whether any existing tile translated or merged."""
        return bool(self.moves or self.merges)

    def summary(self) -> str:
        parts = [f"spawns={len(self.spawns)}", f"moves={len(self.moves)}",
                 f"merges={len(self.merges)}", f"score={self.score.score}"]
        if self.score.difference is not None:
            parts.append(f"(+{self.score.difference})")
        if self.game_over:
            parts.append("GAME OVER")
        return " ".join(parts)
