"""
Text-mode front end for the dmqh engine.

Usage:
    dmqh-play --seed 42

Enter one command per line: w/a/s/d (or up/right/down/left) to move,
r to start over, q to quit.
"""

import argparse
import sys
from typing import Optional, TextIO

from .engine import Game, Move
from .events import GameEvents

KEY_BINDINGS = {
    'w': Move.UP,
    'up': Move.UP,
    'arrowup': Move.UP,
    'd': Move.RIGHT,
    'right': Move.RIGHT,
    'arrowright': Move.RIGHT,
    's': Move.DOWN,
    'down': Move.DOWN,
    'arrowdown': Move.DOWN,
    'a': Move.LEFT,
    'left': Move.LEFT,
    'arrowleft': Move.LEFT,
}

RESET_COMMANDS = {'r', 'reset', 'new'}
QUIT_COMMANDS = {'q', 'quit', 'exit'}


def parse_command(text: str) -> Optional[Move]:
    """Map a typed command to a direction, or None if it isn't one."""
    return KEY_BINDINGS.get(text.strip().lower())


class ConsoleFrontend:
    """Feeds typed commands to a :class:`Game` and prints what happened."""

    def __init__(self, seed: Optional[int] = None, out: Optional[TextIO] = None):
        self.out = out if out is not None else sys.stdout
        self.game_over = False
        self.game = Game(seed=seed, on_events=self.on_events)

    def on_events(self, events: GameEvents) -> None:
        self.game_over = events.game_over
        if not events.changed:
            print("New game.", file=self.out)
        print(events.summary(), file=self.out)

    def show(self) -> None:
        print(self.game, file=self.out)
        if self.game_over:
            print("GAME OVER! (r to restart, q to quit)", file=self.out)

    def handle(self, text: str) -> bool:
        """Process one command. Returns False when the user asks to quit."""
        command = text.strip().lower()
        if not command:
            return True
        if command in QUIT_COMMANDS:
            return False
        if command in RESET_COMMANDS:
            self.game.reset()
            self.show()
            return True

        move = parse_command(command)
        if move is None:
            print(f"Unknown command: {command!r}", file=self.out)
            return True
        if self.game_over:
            print("Game is over; r to restart.", file=self.out)
            return True

        if self.game.play(move) is None:
            print(f"Can't move {move.name.lower()}.", file=self.out)
        self.show()
        return True

    def run(self, lines: Optional[TextIO] = None) -> int:
        self.show()
        for line in (lines if lines is not None else sys.stdin):
            if not self.handle(line):
                break
        print(f"Final Score: {self.game.score}", file=self.out)
        return self.game.score


def main(argv=None):
    parser = argparse.ArgumentParser(description='Play dmqh in the terminal')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    args = parser.parse_args(argv)

    ConsoleFrontend(seed=args.seed).run()


if __name__ == "__main__":
    main()
