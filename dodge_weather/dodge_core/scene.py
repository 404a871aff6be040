"""
Scene Description
=================

Turns CoreGame.get_render_data() into a flat list of draw commands.
No pygame here; renderers just walk the list.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from dodge_weather.dodge_core.state_machine import GameState
from dodge_weather.dodge_core.weather import WeatherKind

Color = Tuple[int, ...]

# Palette
RAYWHITE: Color = (245, 245, 245)
LIGHTGRAY: Color = (200, 200, 200)
GRAY: Color = (130, 130, 130)
PLAYER_COLOR: Color = (80, 200, 120)
RAIN_COLOR: Color = (70, 140, 255)
CLOUD_COLOR: Color = RAYWHITE
SUN_COLOR: Color = (250, 210, 60)
DIM_COLOR: Color = (0, 0, 0, 130)

BACKGROUNDS: Dict[WeatherKind, Color] = {
    WeatherKind.SUNNY: (20, 24, 34),    # Bluish
    WeatherKind.CLOUDY: (35, 35, 45),   # Dark grey
    WeatherKind.RAINY: (15, 18, 30),    # Deep blue
}

PLAYER_ROUNDNESS = 0.2

# Cloud puff geometry, relative to the enemy rectangle
CLOUD_CENTER_Y = 0.6
CLOUD_RADIUS = 0.55
CLOUD_SIDE_RADIUS = 0.85
CLOUD_SIDE_OFFSET = 0.9
CLOUD_SIDE_DROP = 2


@dataclass(frozen=True)
class DrawCommand:
    """
    One primitive to draw.

    shape is one of "clear", "rect", "rounded_rect", "circle", "text".
    Text with align="center" is centred on pos[0].
    """
    shape: str
    color: Color
    rect: Optional[Tuple[float, float, float, float]] = None
    pos: Optional[Tuple[int, int]] = None
    radius: int = 0
    roundness: float = 0.0
    text: str = ""
    size: int = 0
    align: str = "left"


def clear(color: Color) -> DrawCommand:
    return DrawCommand("clear", color)


def text(value: str, x: int, y: int, size: int, color: Color, align: str = "left") -> DrawCommand:
    return DrawCommand("text", color, pos=(int(x), int(y)), text=value, size=size, align=align)


def circle(cx: float, cy: float, radius: float, color: Color) -> DrawCommand:
    # Integer truncation matches how the shapes were tuned
    return DrawCommand("circle", color, pos=(int(cx), int(cy)), radius=int(radius))


def background_color(weather: WeatherKind) -> Color:
    return BACKGROUNDS.get(weather, BACKGROUNDS[WeatherKind.SUNNY])


def enemy_commands(enemy: Dict[str, Any]) -> List[DrawCommand]:
    """
    Shapes for one enemy.

    - Rain: the rectangle itself
    - Cloud: three overlapping circles inside the rectangle
    - Sun: the circle inscribed in the rectangle
    """
    x, y = enemy["x"], enemy["y"]
    w, h = enemy["width"], enemy["height"]
    kind = enemy["kind"]

    if kind == WeatherKind.RAINY:
        return [DrawCommand("rect", RAIN_COLOR, rect=(x, y, w, h))]

    if kind == WeatherKind.CLOUDY:
        cx = x + w * 0.5
        cy = y + h * CLOUD_CENTER_Y
        r1 = h * CLOUD_RADIUS
        r2 = r1 * CLOUD_SIDE_RADIUS
        offset = r1 * CLOUD_SIDE_OFFSET
        return [
            circle(cx, cy, r1, CLOUD_COLOR),
            circle(cx - offset, cy + CLOUD_SIDE_DROP, r2, CLOUD_COLOR),
            circle(cx + offset, cy + CLOUD_SIDE_DROP, r2, CLOUD_COLOR),
        ]

    r = w * 0.5
    return [circle(x + r, y + r, r, SUN_COLOR)]


def _playfield(render_data: Dict[str, Any]) -> List[DrawCommand]:
    commands = [DrawCommand(
        "rounded_rect", PLAYER_COLOR,
        rect=tuple(render_data["player"]), roundness=PLAYER_ROUNDNESS
    )]
    for enemy in render_data["enemies"]:
        commands.extend(enemy_commands(enemy))
    return commands


def _hud(render_data: Dict[str, Any]) -> List[DrawCommand]:
    weather = WeatherKind.from_raw(render_data["weather"])
    return [
        text(f"Score: {render_data['score']}", 10, 10, 22, RAYWHITE),
        text(f"London weather: {weather.display_name}", 10, 40, 20, RAYWHITE),
    ]


def _menu(render_data: Dict[str, Any]) -> List[DrawCommand]:
    mid = render_data["screen_width"] // 2
    return [
        text("DODGE THE WEATHER", mid, 90, 60, RAYWHITE, align="center"),
        text("Move with WASD or Arrow Keys", 220, 200, 20, GRAY),
        text("Avoid the falling blocks", 280, 230, 20, GRAY),
        text("Press SPACE to start", 280, 280, 24, LIGHTGRAY),
        text(f"Best: {render_data['best_score']}", 10, 10, 20, GRAY),
    ]


def _game_over(render_data: Dict[str, Any]) -> List[DrawCommand]:
    w = render_data["screen_width"]
    h = render_data["screen_height"]
    mid = w // 2
    return [
        DrawCommand("rect", DIM_COLOR, rect=(0, 0, w, h)),
        text("GAME OVER", mid, 120, 50, RAYWHITE, align="center"),
        text(f"Score: {render_data['score']}", mid - 80, 190, 30, LIGHTGRAY),
        text(f"Best:  {render_data['best_score']}", mid - 80, 225, 24, GRAY),
        text("Press R to Restart", mid - 120, 270, 22, RAYWHITE),
        text("Press ESC for Menu", mid - 120, 300, 20, GRAY),
    ]


def build_scene(render_data: Dict[str, Any]) -> List[DrawCommand]:
    """
    Describe a full frame.

    Args:
        render_data: Data from CoreGame.get_render_data().

    Returns:
        Draw commands in painting order.
    """
    state = render_data["state"]
    commands = [clear(background_color(render_data["weather"]))]

    if state is GameState.MENU:
        commands.extend(_menu(render_data))
    elif state is GameState.PLAYING:
        commands.extend(_playfield(render_data))
        commands.extend(_hud(render_data))
    elif state is GameState.GAME_OVER:
        # Frozen final frame under the dim
        commands.extend(_playfield(render_data))
        commands.extend(_game_over(render_data))

    return commands
