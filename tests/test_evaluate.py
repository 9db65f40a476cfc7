from __future__ import annotations

from dmqh.evaluate import evaluate_random, format_report, main, play_random_episode


def test_random_episode_plays_to_the_end() -> None:
    stats = play_random_episode(seed=5)

    assert stats['steps'] > 0
    assert stats['score'] >= 0
    assert stats['max_tile'] >= 4
    assert stats['max_tile'] & (stats['max_tile'] - 1) == 0


def test_random_episode_is_reproducible() -> None:
    assert play_random_episode(seed=11) == play_random_episode(seed=11)


def test_random_episode_respects_step_limit() -> None:
    stats = play_random_episode(seed=2, max_steps=3)
    assert stats['steps'] == 3


def test_evaluate_random_statistics() -> None:
    stats = evaluate_random(num_episodes=5, seed=100, progress=False)

    assert stats['num_episodes'] == 5
    assert len(stats['scores']) == 5
    assert sum(stats['tile_distribution'].values()) == 5
    assert stats['min_score'] <= stats['median_score'] <= stats['max_score']
    assert stats['p25_score'] <= stats['p75_score']


def test_main_prints_report(capsys) -> None:
    stats = main(['--episodes', '2', '--seed', '1', '--no-progress'])

    out = capsys.readouterr().out
    assert "Random policy over 2 games" in out
    assert "best tile reached:" in out
    assert stats['num_episodes'] == 2


def test_random_episode_counts_merges_into_score() -> None:
    stats = play_random_episode(seed=8)

    # Every merge credits at least 2 points
    assert stats['merges'] > 0
    assert stats['score'] >= 2 * stats['merges']


def test_random_episode_stops_on_a_blocked_position(monkeypatch) -> None:
    from dmqh import Game

    monkeypatch.setattr(Game, "play", lambda self, move: None)

    stats = play_random_episode(seed=4)

    assert stats['steps'] == 0
    assert stats['merges'] == 0


def test_report_lists_every_tile_bucket() -> None:
    stats = evaluate_random(num_episodes=3, seed=40, progress=False)

    report = format_report(stats)

    for tile in stats['tile_distribution']:
        assert f"{tile:6d}" in report
    assert f"merges mean {stats['avg_merges']:.1f}" in report
