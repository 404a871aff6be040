"""
Tests for the game state machine and the frame-stepped game.
"""

import pytest

from dodge_weather.dodge_core.config_loader import load_config
from dodge_weather.dodge_core.entities import Enemy, Rect
from dodge_weather.dodge_core.game import CoreGame, FrameInput
from dodge_weather.dodge_core.state_machine import (
    Effect,
    GameEvent,
    GameState,
    GameStateMachine,
    transition,
)
from dodge_weather.dodge_core.weather import WeatherKind, WeatherState


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def weather():
    return WeatherState()


@pytest.fixture
def game(config, weather):
    return CoreGame(config=config, weather=weather, seed=42)


IDLE = FrameInput()


def park_enemies(game):
    """Freeze every enemy well above the screen so nothing can hit."""
    for enemy in game.world.enemies:
        enemy.rect.y = -300.0
        enemy.speed_y = 0.0


def drop_on_player(game):
    """Put a stationary enemy right on top of the player."""
    p = game.world.player.rect
    game.world.enemies[0] = Enemy(Rect(p.x + 5, p.y + 5, 10, 10), 0.0, WeatherKind.SUNNY)


class TestTransitionTable:
    """Every row of the table, plus no-ops."""

    @pytest.mark.parametrize("state,event,expected,effects", [
        (GameState.MENU, GameEvent.START, GameState.PLAYING, (Effect.RESET_RUN,)),
        (GameState.PLAYING, GameEvent.COLLISION, GameState.GAME_OVER, (Effect.RECORD_BEST,)),
        (GameState.GAME_OVER, GameEvent.RESTART, GameState.PLAYING, (Effect.RESET_RUN,)),
        (GameState.GAME_OVER, GameEvent.TO_MENU, GameState.MENU, ()),
    ])
    def test_rows(self, state, event, expected, effects):
        result = transition(state, event)
        assert result.state is expected
        assert result.effects == effects

    @pytest.mark.parametrize("state,event", [
        (GameState.MENU, GameEvent.RESTART),
        (GameState.MENU, GameEvent.TO_MENU),
        (GameState.MENU, GameEvent.COLLISION),
        (GameState.PLAYING, GameEvent.START),
        (GameState.PLAYING, GameEvent.RESTART),
        (GameState.PLAYING, GameEvent.TO_MENU),
        (GameState.GAME_OVER, GameEvent.START),
        (GameState.GAME_OVER, GameEvent.COLLISION),
    ])
    def test_unlisted_pairs_are_noops(self, state, event):
        result = transition(state, event)
        assert result.state is state
        assert result.effects == ()

    @pytest.mark.parametrize("event,kind", [
        (GameEvent.FORCE_SUNNY, WeatherKind.SUNNY),
        (GameEvent.FORCE_CLOUDY, WeatherKind.CLOUDY),
        (GameEvent.FORCE_RAINY, WeatherKind.RAINY),
    ])
    def test_debug_weather_only_while_playing(self, event, kind):
        playing = transition(GameState.PLAYING, event)
        assert playing.state is GameState.PLAYING
        assert playing.effects == (Effect.SET_WEATHER,)
        assert playing.weather is kind

        for state in (GameState.MENU, GameState.GAME_OVER):
            assert transition(state, event).effects == ()

    def test_machine_starts_at_menu(self):
        machine = GameStateMachine()
        assert machine.state is GameState.MENU
        machine.handle(GameEvent.START)
        assert machine.state is GameState.PLAYING
        machine.reset()
        assert machine.state is GameState.MENU


class TestCoreGameFlow:
    """Test the frame-stepped flow through all three states."""

    def test_initial_world_populated(self, game, config):
        """The menu already has a player and a full pool."""
        assert game.state is GameState.MENU
        assert game.world.player is not None
        assert game.world.enemy_count == config.enemies.count

    def test_menu_ignores_other_inputs(self, game):
        for frame in (IDLE, FrameInput(restart=True), FrameInput(to_menu=True),
                      FrameInput(left=True), FrameInput(force_rainy=True)):
            game.step(frame, 0.016)
            assert game.state is GameState.MENU
        assert game.weather.get_weather() is WeatherKind.SUNNY

    def test_start_resets_run(self, game, config):
        """Scenario: menu + start gives a fresh run above the screen."""
        result = game.step(FrameInput(start=True), 0.016)

        assert result.state is GameState.PLAYING
        assert game.score == 0.0
        assert game.world.enemy_count == config.enemies.count
        assert all(e.rect.y < 0 for e in game.world.enemies)
        assert game.world.player.rect.as_tuple() == (382.0, 380.0, 36.0, 36.0)

    def test_collision_ends_run_and_updates_best(self, game):
        """Scenario: best goes from 30 to 42 after a better run."""
        game.step(FrameInput(start=True), 0.0)
        park_enemies(game)
        game.step(IDLE, 0.51)
        drop_on_player(game)
        result = game.step(IDLE, 0.0)

        assert result.collided
        assert game.state is GameState.GAME_OVER
        assert game.best_score == 30

        game.step(FrameInput(restart=True), 0.0)
        assert game.state is GameState.PLAYING
        assert game.score == 0.0

        park_enemies(game)
        game.step(IDLE, 0.71)
        assert int(game.score) == 42
        drop_on_player(game)
        game.step(IDLE, 0.0)

        assert game.state is GameState.GAME_OVER
        assert game.best_score == 42

    def test_collision_in_same_frame(self, game):
        """A hit is reported in the frame it happens."""
        game.step(FrameInput(start=True), 0.0)
        park_enemies(game)
        drop_on_player(game)

        result = game.step(FrameInput(right=True), 0.001)
        assert result.collided
        assert result.state is GameState.GAME_OVER

    def test_best_never_decreases(self, game):
        game.step(FrameInput(start=True), 0.0)
        park_enemies(game)
        game.step(IDLE, 1.0)
        drop_on_player(game)
        game.step(IDLE, 0.0)
        assert game.best_score == 60

        game.step(FrameInput(restart=True), 0.0)
        park_enemies(game)
        game.step(IDLE, 0.1)
        drop_on_player(game)
        game.step(IDLE, 0.0)
        assert game.best_score == 60

    def test_to_menu_keeps_scores(self, game):
        """Scenario: game over -> menu does not touch score or best."""
        game.step(FrameInput(start=True), 0.0)
        park_enemies(game)
        game.step(IDLE, 0.75)
        drop_on_player(game)
        game.step(IDLE, 0.0)
        final = game.score

        game.step(FrameInput(to_menu=True), 0.016)
        assert game.state is GameState.MENU
        assert game.score == final
        assert game.best_score == 45

        game.step(FrameInput(start=True), 0.016)
        assert game.score == 0.0
        assert game.best_score == 45

    def test_restart_wins_over_menu(self, game):
        """Both pressed in the same frame: restart."""
        game.step(FrameInput(start=True), 0.0)
        park_enemies(game)
        drop_on_player(game)
        game.step(IDLE, 0.0)

        game.step(FrameInput(restart=True, to_menu=True), 0.016)
        assert game.state is GameState.PLAYING

    def test_score_monotonic_while_playing(self, game):
        game.step(FrameInput(start=True), 0.0)
        park_enemies(game)
        previous = game.score
        for i in range(200):
            game.step(FrameInput(left=i % 2 == 0, up=i % 3 == 0), 1 / 60)
            assert game.score >= previous
            previous = game.score

    def test_debug_weather_is_not_retroactive(self, game, weather):
        """Forcing weather mid-run only changes the next run."""
        game.step(FrameInput(start=True), 0.0)
        park_enemies(game)
        game.step(FrameInput(force_rainy=True), 0.016)

        assert weather.get_weather() is WeatherKind.RAINY
        assert all(e.kind is WeatherKind.SUNNY for e in game.world.enemies)

        drop_on_player(game)
        game.step(IDLE, 0.0)
        game.step(FrameInput(restart=True), 0.0)
        assert all(e.kind is WeatherKind.RAINY for e in game.world.enemies)

    def test_external_weather_before_first_frame(self, config):
        """Weather pushed before any frame applies to the first run."""
        weather = WeatherState()
        game = CoreGame(config=config, weather=weather, seed=1)
        weather.set_weather(1)

        game.step(FrameInput(start=True), 0.0)
        assert all(e.kind is WeatherKind.CLOUDY for e in game.world.enemies)

    def test_playing_bounds_hold(self, game, config):
        """Player stays on screen for every playing frame."""
        game.step(FrameInput(start=True), 0.0)
        for i in range(600):
            frame = FrameInput(
                left=(i // 40) % 2 == 0, right=(i // 40) % 2 == 1,
                up=(i // 25) % 2 == 0, down=(i // 25) % 2 == 1,
                restart=True
            )
            game.step(frame, 1 / 60)
            if game.state is GameState.PLAYING:
                rect = game.world.player.rect
                assert 0 <= rect.x <= config.screen.width - rect.width
                assert 0 <= rect.y <= config.screen.height - rect.height

    def test_negative_dt_rejected(self, game):
        with pytest.raises(ValueError):
            game.step(IDLE, -0.01)

    def test_render_data_shape(self, game):
        game.step(FrameInput(start=True), 0.0)
        data = game.get_render_data()

        assert data["state"] is GameState.PLAYING
        assert data["screen_width"] == 800
        assert data["screen_height"] == 450
        assert len(data["enemies"]) == game.world.enemy_count
        assert data["score"] == 0
