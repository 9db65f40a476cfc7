"""
Random-policy benchmark for the dmqh engine.

Plays a batch of seeded games choosing a uniformly random legal move each
step, and reports score and max-tile statistics.

Usage:
    dmqh-evaluate --episodes 1000 --seed 12345
"""

import argparse
import random
from collections import Counter
from typing import Dict, Optional

import numpy as np
from tqdm import tqdm

from .engine import Game, Move


def play_random_episode(seed: int, max_steps: int = 10000,
                        policy_rng: Optional[random.Random] = None) -> Dict:
    """
    Play one game with a random legal move each step.

    Returns:
        Dict with keys: score, max_tile, steps, merges
    """
    policy_rng = policy_rng or random.Random(seed)
    game = Game(seed=seed)
    steps = 0
    merges = 0

    while not game.is_game_over() and steps < max_steps:
        legal = [move for move, ok in zip(Move, game.legal_moves()) if ok]
        events = game.play(policy_rng.choice(legal))
        if events is None:
            break
        merges += len(events.merges)
        steps += 1

    return {
        'score': game.score,
        'max_tile': game.max_tile(),
        'steps': steps,
        'merges': merges,
    }


def evaluate_random(num_episodes: int = 100, seed: int = 0, max_steps: int = 10000,
                    verbose: bool = False, progress: bool = True) -> Dict:
    """
    Evaluate the random policy over ``num_episodes`` seeded games.

    Returns:
        Dict with evaluation statistics
    """
    scores = []
    max_tiles = []
    steps_list = []
    merges_list = []

    episodes = tqdm(range(num_episodes), desc="Evaluating", disable=not progress)
    for i in episodes:
        stats = play_random_episode(seed + i, max_steps=max_steps)
        scores.append(stats['score'])
        max_tiles.append(stats['max_tile'])
        steps_list.append(stats['steps'])
        merges_list.append(stats['merges'])

        if verbose:
            tqdm.write(f"Episode {i + 1}: Score={stats['score']}, "
                       f"MaxTile={stats['max_tile']}, Steps={stats['steps']}")

    low, median, high = np.percentile(scores, [25, 50, 75])

    return {
        'num_episodes': num_episodes,
        'scores': scores,
        'avg_score': float(np.mean(scores)),
        'std_score': float(np.std(scores)),
        'min_score': int(np.min(scores)),
        'max_score': int(np.max(scores)),
        'median_score': float(median),
        'p25_score': float(low),
        'p75_score': float(high),
        'avg_max_tile': float(np.mean(max_tiles)),
        'avg_steps': float(np.mean(steps_list)),
        'avg_merges': float(np.mean(merges_list)),
        'tile_distribution': dict(Counter(max_tiles)),
    }


def format_report(stats: Dict) -> str:
    """Render evaluation statistics as a plain-text table."""
    episodes = stats['num_episodes']
    lines = [
        f"Random policy over {episodes} games",
        "-" * 40,
        f"score       mean {stats['avg_score']:.1f} (sd {stats['std_score']:.1f})",
        f"            range {stats['min_score']}..{stats['max_score']}, "
        f"quartiles {stats['p25_score']:.0f} / {stats['median_score']:.0f} / {stats['p75_score']:.0f}",
        f"max tile    mean {stats['avg_max_tile']:.1f}",
        f"moves       mean {stats['avg_steps']:.1f}, merges mean {stats['avg_merges']:.1f}",
        "",
        "best tile reached:",
    ]
    for tile, count in sorted(stats['tile_distribution'].items()):
        lines.append(f"  {tile:6d}  {count:4d}  {count / episodes:6.1%}")
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Benchmark a random policy on the dmqh engine')
    parser.add_argument('--episodes', type=int, default=100, help='Number of games to play')
    parser.add_argument('--seed', type=int, default=12345, help='Seed of the first game')
    parser.add_argument('--max-steps', type=int, default=10000, help='Max moves per game')
    parser.add_argument('--verbose', action='store_true', help='Print each episode')
    parser.add_argument('--no-progress', action='store_true', help='Hide the progress bar')
    args = parser.parse_args(argv)

    if args.episodes < 1:
        parser.error('--episodes must be at least 1')

    print(f"Evaluating {args.episodes} random-policy games...")
    stats = evaluate_random(num_episodes=args.episodes, seed=args.seed,
                            max_steps=args.max_steps, verbose=args.verbose,
                            progress=not args.no_progress)

    print(format_report(stats))
    return stats


if __name__ == "__main__":
    main()
