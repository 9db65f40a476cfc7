from __future__ import annotations

import io

from dmqh import Game, Move
from dmqh.play import ConsoleFrontend, parse_command


def test_parse_command_maps_keys_to_directions() -> None:
    assert parse_command("w") is Move.UP
    assert parse_command(" D\n") is Move.RIGHT
    assert parse_command("down") is Move.DOWN
    assert parse_command("ArrowLeft") is Move.LEFT
    assert parse_command("x") is None


def test_frontend_runs_until_quit() -> None:
    out = io.StringIO()
    frontend = ConsoleFrontend(seed=1, out=out)

    score = frontend.run(io.StringIO("a\nd\nbogus\n\nq\nw\n"))

    text = out.getvalue()
    assert "Unknown command: 'bogus'" in text
    assert f"Final Score: {score}" in text
    assert score == frontend.game.score


def test_frontend_reports_blocked_move() -> None:
    out = io.StringIO()
    frontend = ConsoleFrontend(seed=1, out=out)
    rows = [[1, 2, 0, 0]] + [[0] * 4 for _ in range(3)]
    frontend.game = Game.from_grid(rows, on_events=frontend.on_events)

    frontend.handle("a")

    assert "Can't move left." in out.getvalue()


def test_frontend_stops_moves_after_game_over() -> None:
    out = io.StringIO()
    frontend = ConsoleFrontend(seed=1, out=out)
    rows = [
        [1, 2, 3, 4],
        [5, 6, 7, 8],
        [9, 10, 11, 12],
        [13, 14, 15, 0],
    ]
    frontend.game = Game.from_grid(rows, seed=0, on_events=frontend.on_events)

    frontend.handle("d")
    assert frontend.game_over
    assert "GAME OVER" in out.getvalue()

    before = frontend.game.grid()
    frontend.handle("a")
    assert "Game is over; r to restart." in out.getvalue()
    assert frontend.game.grid() == before

    frontend.handle("r")
    assert not frontend.game_over
    assert frontend.game.score == 0


def test_frontend_announces_new_games() -> None:
    out = io.StringIO()
    frontend = ConsoleFrontend(seed=3, out=out)
    assert out.getvalue().startswith("New game.")

    frontend.handle("r")

    assert out.getvalue().count("New game.") == 2
