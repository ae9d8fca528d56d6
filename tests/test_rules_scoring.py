"""
Tests for spawn placement, difficulty ramp, termination and scoring.
"""

import pytest

from termrunner.runner_core.config_loader import load_config
from termrunner.runner_core.game import CoreGame
from termrunner.runner_core.rules import GameRules, TerminationResult
from termrunner.runner_core.scoring import ScoreTracker
from termrunner.runner_core.state_snapshot import SnapshotBuilder


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def rules(config):
    return GameRules(config)


@pytest.fixture
def scorer(config):
    return ScoreTracker(config)


class TestSpawnRules:
    """Test enemy placement."""

    def test_spawn_column(self, rules):
        """Enemies appear one column inside the right edge."""
        assert rules.spawn.spawn_x == 75.0

    def test_create_enemy(self, rules):
        """Velocity is the negated scroll speed."""
        enemy = rules.spawn.create_enemy(52.5)
        assert enemy.vx == -52.5
        assert enemy.baseline == 24.0
        assert enemy.sprite == rules.spawn.create_enemy(1.0).sprite

    def test_resized_screen(self, config):
        """Placement follows the real terminal size."""
        rules = GameRules(config.with_screen(120, 40))
        enemy = rules.spawn.create_enemy(40.0)
        assert enemy.x == 115.0
        assert enemy.baseline == 40.0


class TestDifficultyRules:
    """Test the scroll speed ramp."""

    def test_growth(self, rules):
        """Speed grows by 5% per second of dt."""
        assert rules.difficulty.accelerate(40.0, 1.0) == pytest.approx(42.0)
        assert rules.difficulty.accelerate(40.0, 0.0) == 40.0

    def test_never_decreases(self, rules):
        """Repeated growth is monotonic."""
        speed = rules.difficulty.initial_speed
        for _ in range(100):
            new_speed = rules.difficulty.accelerate(speed, 1 / 30)
            assert new_speed >= speed
            speed = new_speed


class TestTerminationRules:
    """Test collision termination."""

    def test_no_enemies(self, rules, config):
        """An empty field never ends the game."""
        game = CoreGame(config=config)
        assert rules.termination.check_collisions([], game.player) == TerminationResult.none()

    def test_any_collision(self, rules, config):
        """One colliding enemy is enough."""
        game = CoreGame(config=config)
        far = rules.spawn.create_enemy(40.0)
        near = rules.spawn.create_enemy(40.0)
        near.x = 1.0
        result = rules.termination.check_collisions([far, near], game.player)
        assert result.terminated
        assert result.reason == "collision"


class TestScoreTracker:
    """Test survival scoring."""

    def test_accrue(self, scorer):
        """Points are dt * 10."""
        assert scorer.accrue(0.5) == pytest.approx(5.0)
        scorer.accrue(0.27)
        assert scorer.score == pytest.approx(7.7)
        assert scorer.display_score == 7

    def test_freeze(self, scorer):
        """A frozen score never changes."""
        scorer.accrue(1.0)
        scorer.freeze()
        assert scorer.accrue(3.0) == 0.0
        assert scorer.score == pytest.approx(10.0)
        assert scorer.frozen

    def test_reset(self, scorer):
        """Reset unfreezes and zeroes."""
        scorer.accrue(1.0)
        scorer.freeze()
        scorer.reset()
        assert scorer.score == 0.0
        assert not scorer.frozen


class TestSnapshot:
    """Test observation packing."""

    def test_empty_field(self, config):
        """No enemies means an empty mask and full-width distance."""
        game = CoreGame(config=config)
        snapshot = SnapshotBuilder(config).build(game)
        assert snapshot.enemies_count == 0
        assert snapshot.enemy_mask.sum() == 0
        assert snapshot.nearest_enemy_distance == 80.0
        assert snapshot.grounded
        assert snapshot.height_above_floor == 0.0

    def test_nearest_enemy(self, config):
        """Distance is measured from the player's right edge."""
        game = CoreGame(config=config)
        game.spawn_enemy()
        near = game.spawn_enemy()
        near.x = 30.0
        snapshot = SnapshotBuilder(config).build(game)
        assert snapshot.nearest_enemy_distance == pytest.approx(26.0)
        assert snapshot.enemy_x[:2].tolist() == [75.0, 30.0]
        assert snapshot.enemy_mask[:3].tolist() == [1, 1, 0]

    def test_overflow_truncated(self, config):
        """Enemies past max_enemies are dropped from the arrays only."""
        game = CoreGame(config=config)
        for _ in range(config.env.max_enemies + 3):
            game.spawn_enemy()
        snapshot = SnapshotBuilder(config).build(game)
        assert snapshot.enemies_count == config.env.max_enemies + 3
        assert snapshot.enemy_mask.sum() == config.env.max_enemies
