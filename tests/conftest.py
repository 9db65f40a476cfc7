from __future__ import annotations

import pytest


class ScriptedRandom:
    """Replays fixed spawn draws.

    The engine asks ``chance`` for the tile value first, then
    ``uniform_index`` for the cell. Once a script runs out the draws fall back
    to a 2 placed on the first empty cell (column-major).
    """

    def __init__(self, indices=(), fours=()) -> None:
        self.indices = list(indices)
        self.fours = list(fours)
        self.index_calls: list[int] = []

    def uniform_index(self, n: int) -> int:
        self.index_calls.append(n)
        index = self.indices.pop(0) if self.indices else 0
        assert 0 <= index < n
        return index

    def chance(self, probability: float) -> bool:
        assert 0.0 < probability < 1.0
        return self.fours.pop(0) if self.fours else False


@pytest.fixture()
def scripted_rng():
    return ScriptedRandom


@pytest.fixture()
def distinct_rows() -> list[list[int]]:
    # Full grid, every value unique, so no move is possible
    return [[1 + 4 * y + x for x in range(4)] for y in range(4)]
