"""
Tests for configuration loading and validation.
"""

import os

import pytest
import yaml

from dodge_weather.dodge_core import config_loader
from dodge_weather.dodge_core.config_loader import load_config, reload_config, get_config
from dodge_weather.dodge_core.weather import WeatherKind


DEFAULT_PATH = os.path.join(os.path.dirname(config_loader.__file__), os.pardir, "game_config.yaml")


@pytest.fixture
def raw():
    with open(DEFAULT_PATH, "r") as f:
        return yaml.safe_load(f)


@pytest.fixture
def write_config(tmp_path):
    def _write(data):
        path = tmp_path / "game_config.yaml"
        path.write_text(yaml.safe_dump(data))
        return str(path)
    return _write


class TestDefaultConfig:
    """Test the shipped configuration."""

    def test_screen(self):
        config = load_config()
        assert (config.screen.width, config.screen.height) == (800, 450)

    def test_player(self):
        player = load_config().player
        assert (player.width, player.height, player.speed) == (36.0, 36.0, 260.0)

    def test_enemy_ranges(self):
        enemies = load_config().enemies
        assert enemies.count == 10

        rainy = enemies.ranges_for(WeatherKind.RAINY)
        assert rainy.width == (3, 6)
        assert rainy.height == (14, 24)
        assert rainy.speed_range == (220.0, 360.0)

        cloudy = enemies.ranges_for(WeatherKind.CLOUDY)
        assert cloudy.width == (40, 72)
        assert cloudy.height == (24, 40)
        assert cloudy.speed_range == (120.0, 180.0)

        sunny = enemies.ranges_for(WeatherKind.SUNNY)
        assert sunny.is_square
        assert sunny.width == (18, 30)
        assert sunny.speed_range == (160.0, 260.0)

    def test_recycle_and_scoring(self):
        config = load_config()
        assert config.recycle_threshold_y == 460.0
        assert config.recycle.y_range == (-200, -20)
        assert config.scoring.points_per_second == 60.0

    def test_cached_config(self):
        assert get_config() is get_config()
        assert reload_config() is get_config()


class TestValidation:
    """Test rejection of bad configurations."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_inverted_range(self, raw, write_config):
        raw["enemies"]["kinds"]["rainy"]["width"] = [6, 3]
        with pytest.raises(ValueError, match="inverted"):
            load_config(write_config(raw))

    def test_zero_enemies(self, raw, write_config):
        raw["enemies"]["count"] = 0
        with pytest.raises(ValueError, match="enemies.count"):
            load_config(write_config(raw))

    def test_missing_kind(self, raw, write_config):
        del raw["enemies"]["kinds"]["cloudy"]
        with pytest.raises(ValueError, match="cloudy"):
            load_config(write_config(raw))

    def test_player_larger_than_screen(self, raw, write_config):
        raw["player"]["width"] = 900
        with pytest.raises(ValueError, match="does not fit"):
            load_config(write_config(raw))

    def test_bad_range_length(self, raw, write_config):
        raw["recycle"]["y_range"] = [-200]
        with pytest.raises(ValueError):
            load_config(write_config(raw))

    def test_custom_values_load(self, raw, write_config):
        raw["enemies"]["count"] = 3
        raw["scoring"]["points_per_second"] = 10
        config = load_config(write_config(raw))
        assert config.enemies.count == 3
        assert config.scoring.points_per_second == 10.0
