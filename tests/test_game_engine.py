"""
Tests for the engine: ticks, spawning, collision, scoring, input and rendering.
"""

import pytest

from termrunner.runner_core.config_loader import load_config
from termrunner.runner_core.game import CoreGame
from termrunner.runner_core.messages import KeyPress, Quit, Spawn, Tick

DT = 1 / 30


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def game(config, clock):
    return CoreGame(config=config, clock=clock)


class TestInitialState:
    """Test a fresh engine."""

    def test_player_on_floor(self, game):
        """Player starts grounded on the last row."""
        assert game.floor_row == 23
        assert game.player.y == 23.0
        assert game.player.vy == 0.0
        assert game.player.is_grounded(game.floor_row)

    def test_world_defaults(self, game):
        """No enemies, zero score, initial speed, playing."""
        assert game.enemies == ()
        assert game.score == 0.0
        assert game.scroll_speed == 40.0
        assert not game.is_over

    def test_too_small_screen(self, config):
        """Startup aborts before any state exists."""
        with pytest.raises(ValueError):
            CoreGame(config=config.with_screen(5, 3))


class TestTick:
    """Test per-tick integration driven by the clock."""

    def test_dt_measured_from_clock(self, game, clock):
        """Tick uses wall-clock time since the previous tick."""
        clock.advance(0.25)
        result = game.tick()
        assert result.dt == pytest.approx(0.25)
        clock.advance(0.5)
        assert game.tick().dt == pytest.approx(0.5)

    def test_grounded_scenario(self, game, clock):
        """One second without jumping leaves the player on row 23."""
        clock.advance(1.0)
        game.tick()
        assert game.player.y == 23.0
        assert game.player.vy == 0.0

    def test_score_and_speed_after_one_second(self, game):
        """Score grows by 10/s and speed by 5%/s."""
        result = game.step(1.0)
        assert game.score == pytest.approx(10.0)
        assert result.delta_score == pytest.approx(10.0)
        assert game.scroll_speed == pytest.approx(42.0)

    def test_score_is_sum_of_ticks(self, game):
        """Score equals the sum of 10 * dt over all ticks."""
        dts = [0.1, 0.2, 0.05, DT, 0.0, 0.3]
        for dt in dts:
            game.step(dt)
        assert game.score == pytest.approx(10 * sum(dts))

    def test_speed_compounds(self, game):
        """Speed growth compounds tick by tick and never decreases."""
        speeds = [game.scroll_speed]
        for _ in range(30):
            game.step(DT)
            speeds.append(game.scroll_speed)
        assert speeds == sorted(speeds)
        assert game.scroll_speed == pytest.approx(40.0 * (1 + 0.05 * DT) ** 30)

    def test_tick_count(self, game):
        """Every step is counted."""
        for _ in range(3):
            game.step(DT)
        assert game.tick_count == 3


class TestSpawning:
    """Test enemy spawning and expiry."""

    def test_spawn_at_right_edge(self, game):
        """New enemy sits at width - enemy width - 1 moving left."""
        enemy = game.spawn_enemy()
        assert enemy.x == 75.0
        assert enemy.vx == -40.0
        assert game.enemies == (enemy,)

    def test_velocity_captured_at_spawn(self, game):
        """Enemies keep the speed they were spawned with."""
        first = game.spawn_enemy()
        game.step(1.0)
        second = game.spawn_enemy()
        game.step(0.1)
        assert first.vx == -40.0
        assert second.vx == pytest.approx(-42.0)

    def test_on_spawn_hook(self, config, clock):
        """Hook receives the running spawn count."""
        counts = []
        game = CoreGame(config=config, clock=clock, on_spawn=counts.append)
        game.spawn_enemy()
        game.spawn_enemy()
        assert counts == [1, 2]
        assert game.spawn_count == 2

    def test_enemy_removed_before_going_negative(self, game):
        """Enemy disappears the tick it would cross column 0."""
        game.spawn_enemy()
        for expected_x in (55.0, 35.0, 15.0):
            game.step(0.5)
            assert game.enemies[0].x == pytest.approx(expected_x)
        result = game.step(0.5)
        assert result.removed == 1
        assert game.enemies == ()
        assert not game.is_over

    def test_removal_keeps_survivor_order(self, game):
        """Compaction never skips a live enemy next to an expired one."""
        spawned = [game.spawn_enemy() for _ in range(5)]
        spawned[0].x = 0.5
        spawned[1].x = 60.0
        spawned[2].x = 0.2
        spawned[3].x = 1.0
        spawned[4].x = 50.0

        result = game.step(DT)

        assert result.removed == 3
        assert game.enemies == (spawned[1], spawned[4])
        assert spawned[1].x == pytest.approx(60.0 - 40.0 * DT)
        assert spawned[4].x == pytest.approx(50.0 - 40.0 * DT)
        assert not game.is_over

    def test_removed_enemy_not_rendered(self, game):
        """An expired enemy leaves no glyphs behind."""
        enemy = game.spawn_enemy()
        enemy.x = 1.0
        game.step(DT)
        assert "X" not in game.render()


class TestCollision:
    """Test the one-way transition to game over."""

    def test_collision_ends_game(self, game):
        """An enemy reaching the grounded player ends the game."""
        enemy = game.spawn_enemy()
        enemy.x = 5.0
        result = game.step(DT)
        assert result.collided
        assert result.terminated
        assert game.is_over
        assert game.termination_reason == "collision"

    def test_score_frozen_at_collision_tick(self, game):
        """No points are added on or after the colliding tick."""
        game.step(0.5)
        enemy = game.spawn_enemy()
        enemy.x = 5.0
        result = game.step(DT)
        assert result.delta_score == 0.0
        assert game.score == pytest.approx(5.0)
        for _ in range(10):
            game.step(DT)
        assert game.score == pytest.approx(5.0)
        assert game.is_over

    def test_jump_clears_enemy(self, game):
        """A well-timed jump carries the player over an enemy."""
        game.spawn_enemy()
        for i in range(90):
            if i == 30:
                assert game.request_jump()
            game.step(DT)
        assert not game.is_over
        assert game.enemies == ()
        assert game.player.is_grounded(game.floor_row)

    def test_no_jump_collides(self, game):
        """Standing still gets the player hit."""
        game.spawn_enemy()
        for _ in range(90):
            game.step(DT)
        assert game.is_over


class TestInput:
    """Test key handling and message dispatch."""

    def test_jump_only_when_grounded(self, game):
        """Air jumps are ignored and do not change the trajectory."""
        assert game.request_jump()
        assert game.player.vy == 20.0
        game.step(0.1)
        vy, y = game.player.vy, game.player.y
        assert not game.request_jump()
        assert game.player.vy == vy
        assert game.player.y == y

    def test_space_jumps(self, game):
        """Space requests a jump and does not quit."""
        assert game.handle_key(" ") is None
        assert game.player.vy == 20.0

    @pytest.mark.parametrize("code", ["q", "ctrl+c", "\x03"])
    def test_quit_keys(self, game, code):
        """q and the interrupt key produce a Quit effect."""
        assert game.handle_key(code) == Quit()

    def test_other_keys_ignored(self, game):
        """Unknown keys are no-ops."""
        assert game.handle_key("x") is None
        assert game.player.vy == 0.0

    def test_update_dispatch(self, game, clock):
        """Messages route to tick, spawn and key handling."""
        clock.advance(0.1)
        assert game.update(Tick()) is None
        assert game.tick_count == 1
        assert game.update(Spawn()) is None
        assert len(game.enemies) == 1
        assert game.update(KeyPress(" ")) is None
        assert game.player.vy == 20.0
        assert game.update(KeyPress("q")) == Quit()
        assert game.update(Quit()) == Quit()

    def test_update_rejects_unknown(self, game):
        """Only the four message kinds are accepted."""
        with pytest.raises(TypeError):
            game.update("tick")


class TestRender:
    """Test frame composition."""

    def test_frame_shape(self, game):
        """24 rows of 80 characters, each followed by a line break."""
        frame = game.render()
        assert frame.endswith("\n")
        rows = frame.split("\n")[:-1]
        assert len(rows) == 24
        assert all(len(row) == 80 for row in rows)

    def test_score_header(self, game):
        """Truncated score is overlaid on row 1."""
        game.step(0.37)
        rows = game.render().split("\n")
        assert rows[1].startswith("Score: 3 ")
        assert rows[0].strip() == ""

    def test_player_and_enemy_drawn(self, game):
        """Player at column 0 on the floor, enemy at the right edge."""
        game.spawn_enemy()
        rows = game.render().split("\n")
        for row in range(19, 24):
            assert rows[row].startswith("****")
        assert rows[23][75:79] == "XXXX"
        assert rows[22][75:79] == "XXXX"
        assert rows[21][75:79] == "    "

    def test_render_does_not_change_state(self, game):
        """Rendering twice yields the same frame and leaves state alone."""
        game.spawn_enemy()
        game.step(0.2)
        before = (game.score, game.player.y, game.enemies[0].x, game.tick_count)
        assert game.render() == game.render()
        assert (game.score, game.player.y, game.enemies[0].x, game.tick_count) == before

    def test_game_over_message(self, game):
        """Game over replaces the grid with the final score."""
        game.step(0.39)
        enemy = game.spawn_enemy()
        enemy.x = 2.0
        game.step(DT)
        assert game.render() == "Game Over :( Your score: 3.\nPress q to quit"


class TestReset:
    """Test restoring the initial state."""

    def test_reset(self, game, clock):
        """Reset clears enemies, score, speed and the game-over flag."""
        enemy = game.spawn_enemy()
        enemy.x = 2.0
        game.step(DT)
        assert game.is_over

        game.reset()
        assert not game.is_over
        assert game.enemies == ()
        assert game.score == 0.0
        assert game.scroll_speed == 40.0
        assert game.player.y == 23.0

        clock.advance(0.1)
        assert game.tick().dt == pytest.approx(0.1)

    def test_info(self, game):
        """Info mirrors the engine counters."""
        game.spawn_enemy()
        game.step(DT)
        info = game.get_info()
        assert info["ticks"] == 1
        assert info["spawns"] == 1
        assert info["enemy_count"] == 1
        assert info["game_over"] is False
