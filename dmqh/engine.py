"""
Grid engine for the dmqh sliding-tile puzzle.

The grid is a flat list of 16 exponents addressed ``4 * y + x``; 0 is an empty
cell and a value ``v`` is displayed as ``2 ** v``. Every reset and every move
that changes the grid produces a :class:`GameEvents` batch describing which
tiles stayed, slid, merged and spawned, so a front end can animate it without
diffing boards.
"""

import logging
from enum import IntEnum
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .events import (
    GameEvents,
    MergeEvent,
    MoveEvent,
    ScoreEvent,
    SpawnEvent,
    StaticEvent,
)
from .randomness import SeededRandom, TileRandom

logger = logging.getLogger(__name__)

EventListener = Callable[[GameEvents], None]
LineResult = Tuple[List[StaticEvent], List[MoveEvent], List[MergeEvent]]


class Move(IntEnum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


# Step from the target edge back into the grid, per direction
_STEPS = {
    Move.UP: (0, 1),
    Move.RIGHT: (-1, 0),
    Move.DOWN: (0, -1),
    Move.LEFT: (1, 0),
}


class Game:
    """
    4x4 merge puzzle engine with injectable spawn randomness.

    Args:
        seed: Seed for the default random source.
        rng: Random source to use instead of a seeded one.
        on_events: Called with every event batch the engine emits.

    Construction starts a game, so ``on_events`` receives the first batch
    immediately.

    Example:
        >>> game = Game(seed=42)
        >>> events = game.play(Move.LEFT)
        >>> print(game.score)
    """

    SIZE = 4
    FOUR_PROBABILITY = 0.05
    MAX_EXPONENT = 31

    def __init__(self, seed: Optional[int] = None, rng: Optional[TileRandom] = None,
                 on_events: Optional[EventListener] = None):
        self._setup(seed, rng, on_events)
        self.reset()

    @classmethod
    def from_grid(cls, rows: Sequence[Sequence[int]], score: int = 0,
                  seed: Optional[int] = None, rng: Optional[TileRandom] = None,
                  on_events: Optional[EventListener] = None) -> "Game":
        """
        Build a game around an existing 4x4 grid of exponents without spawning.

        Args:
            rows: Four rows of four exponents, ``rows[y][x]``.
            score: Score carried by the position.

        Raises:
            ValueError: if the grid is not 4x4 integers in [0, MAX_EXPONENT]
                or the score is negative.
        """
        cells = np.asarray(rows)
        if cells.shape != (cls.SIZE, cls.SIZE):
            raise ValueError(f"grid must be {cls.SIZE}x{cls.SIZE}, got shape {cells.shape}")
        if not np.issubdtype(cells.dtype, np.integer):
            raise ValueError(f"grid cells must be integers, got {cells.dtype}")
        if (cells < 0).any() or (cells > cls.MAX_EXPONENT).any():
            raise ValueError(f"grid cells must be in [0, {cls.MAX_EXPONENT}]")
        if score < 0:
            raise ValueError(f"score must be non-negative, got {score}")

        game = cls.__new__(cls)
        game._setup(seed, rng, on_events)
        game._grid = [int(v) for v in cells.ravel()]
        game._score = int(score)
        return game

    def _setup(self, seed: Optional[int], rng: Optional[TileRandom],
               on_events: Optional[EventListener]) -> None:
        self._rng: TileRandom = rng if rng is not None else SeededRandom(seed)
        self._on_events = on_events
        self._grid: List[int] = [0] * (self.SIZE * self.SIZE)
        self._score: int = 0

    def reset(self) -> GameEvents:
        """Clear the grid and score, then spawn two tiles."""
        self._grid = [0] * (self.SIZE * self.SIZE)
        self._score = 0

        spawns = (self._spawn(), self._spawn())
        return self._emit(GameEvents(
            spawns=spawns,
            score=ScoreEvent(0, None),
            game_over=False,
        ))

    def play(self, move: int) -> Optional[GameEvents]:
        """
        Slide every tile toward ``move``'s edge, merging equal neighbours.

        Args:
            move: A :class:`Move` (or its integer value).

        Returns:
            The event batch, or None if the move changes nothing. An
            ineffective move leaves grid and score untouched and notifies
            nobody.

        Raises:
            ValueError: if ``move`` is not a direction.
        """
        move = Move(move)
        statics, moves, merges = self._compact(self._grid, move)

        if not moves and not merges:
            logger.debug("Ignoring %s: nothing would move", move.name)
            return None

        grid = [0] * (self.SIZE * self.SIZE)
        for tile in [*statics, *moves, *merges]:
            assert self._at(grid, tile.x, tile.y) == 0, f"cell ({tile.x}, {tile.y}) written twice"
            self._put(grid, tile.x, tile.y, tile.value)
        self._grid = grid

        difference = sum(merge.points for merge in merges) if merges else None
        self._score += difference or 0

        spawns = (self._spawn(),)
        game_over = self.is_game_over()
        if game_over:
            logger.debug("Game over with score %d", self._score)

        return self._emit(GameEvents(
            statics=tuple(statics),
            spawns=spawns,
            moves=tuple(moves),
            merges=tuple(merges),
            score=ScoreEvent(self._score, difference),
            game_over=game_over,
        ))

    @property
    def score(self) -> int:
        return self._score

    def at(self, x: int, y: int) -> int:
        """Exponent at cell (x, y); 0 if empty."""
        return self._at(self._grid, x, y)

    def grid(self) -> List[int]:
        """Copy of the 16 exponents, row-major (``4 * y + x``)."""
        return self._grid.copy()

    def board_array(self) -> np.ndarray:
        """Exponents as a (4, 4) array indexed ``[y, x]``."""
        return np.array(self._grid, dtype=np.int32).reshape(self.SIZE, self.SIZE)

    def tiles(self) -> List[int]:
        """Displayed tile values, row-major; 0 for empty cells."""
        return [0 if v == 0 else 1 << v for v in self._grid]

    def max_tile(self) -> int:
        """Highest displayed tile value on the board."""
        highest = max(self._grid)
        return 0 if highest == 0 else 1 << highest

    def empty_count(self) -> int:
        return self._grid.count(0)

    def legal_moves(self) -> List[bool]:
        """Whether each direction would change the grid, indexed by :class:`Move`."""
        legal = []
        for move in Move:
            _, moves, merges = self._compact(self._grid, move)
            legal.append(bool(moves or merges))
        return legal

    def is_game_over(self) -> bool:
        """True iff the grid is full and no two adjacent cells are equal."""
        if 0 in self._grid:
            return False

        for y in range(self.SIZE):
            for x in range(self.SIZE):
                value = self.at(x, y)
                if x < self.SIZE - 1 and self.at(x + 1, y) == value:
                    return False
                if y < self.SIZE - 1 and self.at(x, y + 1) == value:
                    return False

        return True

    def _emit(self, events: GameEvents) -> GameEvents:
        if self._on_events is not None:
            self._on_events(events)
        return events

    def _spawn(self) -> SpawnEvent:
        """Place a 2 (95%) or 4 (5%) on a uniformly chosen empty cell."""
        value = 2 if self._rng.chance(self.FOUR_PROBABILITY) else 1

        cells = [(x, y) for x in range(self.SIZE) for y in range(self.SIZE)
                 if self.at(x, y) == 0]
        assert cells, "cannot spawn into a full grid"

        x, y = cells[self._rng.uniform_index(len(cells))]
        self._put(self._grid, x, y, value)
        return SpawnEvent(x, y, value)

    @classmethod
    def _put(cls, grid: List[int], x: int, y: int, value: int) -> None:
        assert 0 <= value <= cls.MAX_EXPONENT, f"exponent {value} out of range"
        grid[cls.SIZE * y + x] = value

    @classmethod
    def _at(cls, grid: List[int], x: int, y: int) -> int:
        return grid[cls.SIZE * y + x]

    @classmethod
    def _compact(cls, grid: List[int], move: Move) -> LineResult:
        """Compact all four lines of ``grid`` toward ``move`` without mutating it."""
        dx, dy = _STEPS[move]
        x00 = cls.SIZE - 1 if move == Move.RIGHT else 0
        y00 = cls.SIZE - 1 if move == Move.DOWN else 0
        # Lines are laid side by side along the axis perpendicular to the step
        dx0 = 1 - abs(dx)
        dy0 = 1 - abs(dy)

        statics: List[StaticEvent] = []
        moves: List[MoveEvent] = []
        merges: List[MergeEvent] = []
        for i in range(cls.SIZE):
            line_statics, line_moves, line_merges = cls._compact_line(
                grid, x00 + i * dx0, y00 + i * dy0, dx, dy)
            statics.extend(line_statics)
            moves.extend(line_moves)
            merges.extend(line_merges)

        return statics, moves, merges

    @classmethod
    def _compact_line(cls, grid: List[int], x0: int, y0: int, dx: int, dy: int) -> LineResult:
        """
        Compact one line that starts at the target edge (x0, y0) and steps by
        (dx, dy). Tiles are taken nearest-the-edge first, so a run of three
        equal tiles merges the two closest to the edge.
        """
        statics: List[StaticEvent] = []
        moves: List[MoveEvent] = []
        merges: List[MergeEvent] = []

        occupied = []
        for i in range(cls.SIZE):
            x = x0 + i * dx
            y = y0 + i * dy
            value = cls._at(grid, x, y)
            if value != 0:
                occupied.append((x, y, value))

        i = 0
        k = 0
        while i < len(occupied):
            xa, ya, value0 = occupied[i]
            x = x0 + k * dx
            y = y0 + k * dy

            if i + 1 < len(occupied) and occupied[i + 1][2] == value0:
                xb, yb, _ = occupied[i + 1]
                merges.append(MergeEvent(xa, ya, xb, yb, x, y, value0, value0 + 1))
                i += 2
            else:
                if (x, y) == (xa, ya):
                    statics.append(StaticEvent(x, y, value0))
                else:
                    moves.append(MoveEvent(xa, ya, x, y, value0))
                i += 1
            k += 1

        return statics, moves, merges

    def __repr__(self) -> str:
        return f"Game(score={self._score}, max_tile={self.max_tile()}, done={self.is_game_over()})"

    def __str__(self) -> str:
        lines = [f"Score: {self._score}"]
        lines.append("+------+------+------+------+")
        for y in range(self.SIZE):
            cells = []
            for x in range(self.SIZE):
                val = self.at(x, y)
                if val == 0:
                    cells.append("      ")
                else:
                    cells.append(f"{1 << val:^6}")
            lines.append("|" + "|".join(cells) + "|")
            lines.append("+------+------+------+------+")
        return "\n".join(lines)
