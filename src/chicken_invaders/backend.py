"""
Rendering capability used by the game core, and its pygame implementation.
"""

from __future__ import annotations

from typing import Any, Protocol

import pygame

from chicken_invaders.constants import BACKGROUND_COLOR, TEXT_COLOR

Color = tuple[int, int, int]


class Renderer(Protocol):
    """
    Draw primitives the simulation needs. Coordinates are canvas pixels.
    """

    @property
    def size(self) -> tuple[int, int]: ...

    def clear(self) -> None: ...

    def draw_image(
        self,
        image: Any,
        x: float,
        y: float,
        width: float,
        height: float,
        opacity: float = 1.0,
    ) -> None: ...

    def draw_circle(
        self,
        color: Color,
        x: float,
        y: float,
        radius: float,
        opacity: float = 1.0,
    ) -> None: ...

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        size: int | None = None,
        color: Color = TEXT_COLOR,
        center: bool = False,
    ) -> None: ...

    def draw_overlay(self, color: Color, alpha: float) -> None: ...


class PygameBackend:
    """
    Renderer drawing onto a pygame surface.
    """

    def __init__(
        self,
        surface: pygame.Surface,
        background_color: Color = BACKGROUND_COLOR,
        font_size: int = 32,
    ):
        """
        :param surface: Target surface, usually the display surface.
        :type surface: pygame.Surface

        :param background_color: Fill colour used by ``clear``.
        :type background_color: tuple[int, int, int]

        :param font_size: Default text size.
        :type font_size: int
        """
        self._surface = surface
        self._background_color = background_color
        self._font_size = font_size
        self._fonts: dict[int, pygame.font.Font] = {}
        self._scaled: dict[tuple[int, int, int], pygame.Surface] = {}

    @property
    def size(self) -> tuple[int, int]:
        return self._surface.get_size()

    def clear(self):
        self._surface.fill(self._background_color)

    def _scale(self, image: pygame.Surface, width: int, height: int):
        key = (id(image), width, height)
        scaled = self._scaled.get(key)
        if scaled is None:
            scaled = pygame.transform.smoothscale(image, (width, height))
            self._scaled[key] = scaled
        return scaled

    def draw_image(self, image, x, y, width, height, opacity=1.0):
        if opacity <= 0:
            return
        w, h = max(1, int(width)), max(1, int(height))
        sprite = self._scale(image, w, h)
        if opacity < 1:
            sprite = sprite.copy()
            sprite.set_alpha(int(255 * opacity))
        self._surface.blit(sprite, (int(x), int(y)))

    def draw_circle(self, color, x, y, radius, opacity=1.0):
        if opacity <= 0:
            return
        r = max(1, round(radius))
        if opacity >= 1:
            pygame.draw.circle(self._surface, color, (int(x), int(y)), r)
            return
        dot = pygame.Surface((r * 2, r * 2), pygame.SRCALPHA)
        pygame.draw.circle(dot, (*color, int(255 * opacity)), (r, r), r)
        self._surface.blit(dot, (int(x) - r, int(y) - r))

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def draw_text(
        self, text, x, y, size=None, color=TEXT_COLOR, center=False
    ):
        label = self._font(size or self._font_size).render(text, True, color)
        rect = label.get_rect()
        if center:
            rect.center = (int(x), int(y))
        else:
            rect.topleft = (int(x), int(y))
        self._surface.blit(label, rect)

    def draw_overlay(self, color, alpha):
        veil = pygame.Surface(self._surface.get_size(), pygame.SRCALPHA)
        veil.fill((*color, int(255 * alpha)))
        self._surface.blit(veil, (0, 0))
