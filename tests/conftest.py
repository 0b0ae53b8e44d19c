from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest  # noqa: E402

from chicken_invaders.entities import Grid, Invader, Sprite, Vec2  # noqa: E402
from chicken_invaders.hud import ScoreDisplay  # noqa: E402
from chicken_invaders.scenes import ChickenInvadersScene  # noqa: E402
from chicken_invaders.settings import GameSettings  # noqa: E402

VIEWPORT = (1280, 720)


class RecordingRenderer:
    """Renderer double that records every draw call."""

    def __init__(self, size=VIEWPORT):
        self._size = size
        self.calls = []

    @property
    def size(self):
        return self._size

    def clear(self):
        self.calls.append(("clear",))

    def draw_image(self, image, x, y, width, height, opacity=1.0):
        self.calls.append(("image", image, x, y, width, height, opacity))

    def draw_circle(self, color, x, y, radius, opacity=1.0):
        self.calls.append(("circle", color, x, y, radius, opacity))

    def draw_text(self, text, x, y, size=None, color=None, center=False):
        self.calls.append(("text", text))

    def draw_overlay(self, color, alpha):
        self.calls.append(("overlay", color, alpha))

    def named(self, kind):
        return [call for call in self.calls if call[0] == kind]

    def texts(self):
        return [call[1] for call in self.named("text")]

    def reset(self):
        self.calls.clear()


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def player_sprite():
    return Sprite(image="jet", width=128, height=128)


@pytest.fixture
def invader_sprite():
    # 80x60 once scaled by the default invader scale of 0.1
    return Sprite(image="chicken", width=800, height=600)


@pytest.fixture
def score_display():
    return ScoreDisplay()


@pytest.fixture
def scene(player_sprite, invader_sprite, renderer, score_display):
    game = ChickenInvadersScene(
        player_sprite=player_sprite,
        invader_sprite=invader_sprite,
        viewport=VIEWPORT,
        settings=GameSettings.from_dict({"gameplay": {"seed": 7}}),
        score_display=score_display,
        renderer=renderer,
    )
    game.on_enter()
    return game


def make_grid(*positions, size=(80, 60), velocity=(8.0, 0.0)):
    """Grid holding one invader per given top-left position."""
    invaders = [
        Invader(position=Vec2(x, y), width=size[0], height=size[1])
        for x, y in positions
    ]
    return Grid(
        position=Vec2(10.0, 10.0),
        velocity=Vec2(*velocity),
        columns=max(1, len(invaders)),
        rows=1,
        width=max(1, len(invaders)) * 105,
        invaders=invaders,
    )
