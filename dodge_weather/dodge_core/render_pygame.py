"""
Pygame Renderer
===============

Draws the scene description from scene.build_scene() with pygame.
Supports both display mode (human play) and headless RGB output.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from dodge_weather.dodge_core.config_loader import GameConfig, get_config
from dodge_weather.dodge_core.scene import DrawCommand, build_scene


class PygameRenderer:
    """
    Renderer using pygame.

    Supports:
    - Window output for the human frame pump
    - RGB array output for agents and tests
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config

        # Initialize pygame
        if not pygame.get_init():
            pygame.init()
        pygame.font.init()

        # Display surface (created on demand)
        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        # Fonts by pixel size
        self._fonts: Dict[int, pygame.font.Font] = {}

    def _font(self, size: int) -> "pygame.font.Font":
        font = self._fonts.get(size)
        if font is None:
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def render(self, render_data: Dict[str, Any]) -> np.ndarray:
        """
        Render to RGB array (for agent observation).

        Args:
            render_data: Data from CoreGame.get_render_data().

        Returns:
            (height, width, 3) uint8 array.
        """
        width = render_data["screen_width"]
        height = render_data["screen_height"]
        surface = pygame.Surface((width, height))
        self.draw(surface, build_scene(render_data))
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2)).astype(np.uint8)

    def render_to_screen(self, render_data: Dict[str, Any]) -> None:
        """
        Render to pygame window. Caller flips the display.

        Args:
            render_data: Data from CoreGame.get_render_data().
        """
        size = (render_data["screen_width"], render_data["screen_height"])
        if self._screen is None or self._screen_size != size:
            self._screen = pygame.display.set_mode(size)
            self._screen_size = size
            pygame.display.set_caption(self._config.display.title)

        self.draw(self._screen, build_scene(render_data))

    def draw(self, surface: "pygame.Surface", commands: List[DrawCommand]) -> None:
        """Paint draw commands onto a surface, in order."""
        for command in commands:
            shape = command.shape
            if shape == "clear":
                surface.fill(command.color[:3])
            elif shape == "rect":
                self._draw_rect(surface, command)
            elif shape == "rounded_rect":
                x, y, w, h = command.rect
                rect = pygame.Rect(int(x), int(y), int(w), int(h))
                radius = int(command.roundness * min(w, h) / 2)
                pygame.draw.rect(surface, command.color, rect, border_radius=radius)
            elif shape == "circle":
                pygame.draw.circle(surface, command.color, command.pos, command.radius)
            elif shape == "text":
                self._draw_text(surface, command)
            else:
                raise ValueError(f"Unknown draw command shape: {shape}")

    def _draw_rect(self, surface: "pygame.Surface", command: DrawCommand) -> None:
        x, y, w, h = command.rect
        rect = pygame.Rect(int(x), int(y), int(w), int(h))
        if len(command.color) == 4 and command.color[3] < 255:
            # Semi-transparent fill needs its own alpha surface
            overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
            overlay.fill(command.color)
            surface.blit(overlay, rect.topleft)
        else:
            pygame.draw.rect(surface, command.color[:3], rect)

    def _draw_text(self, surface: "pygame.Surface", command: DrawCommand) -> None:
        rendered = self._font(command.size).render(command.text, True, command.color[:3])
        x, y = command.pos
        if command.align == "center":
            x -= rendered.get_width() // 2
        surface.blit(rendered, (x, y))

    def close(self) -> None:
        """Clean up pygame resources."""
        self._fonts.clear()
        if self._screen is not None:
            self._screen = None
