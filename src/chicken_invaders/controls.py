"""
Keyboard bindings and the held-direction snapshot read by the frame loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import pygame


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class Action(str, Enum):
    FIRE = "fire"
    PAUSE = "pause"
    RESTART = "restart"


KEY_BINDINGS: dict[int, Direction] = {
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_a: Direction.LEFT,
    pygame.K_d: Direction.RIGHT,
    pygame.K_w: Direction.UP,
    pygame.K_s: Direction.DOWN,
}

# fire triggers on key release, like the browser version
KEYUP_ACTIONS: dict[int, Action] = {
    pygame.K_SPACE: Action.FIRE,
}

KEYDOWN_ACTIONS: dict[int, Action] = {
    pygame.K_p: Action.PAUSE,
    pygame.K_ESCAPE: Action.PAUSE,
    pygame.K_r: Action.RESTART,
    pygame.K_RETURN: Action.RESTART,
}


@dataclass
class InputState:
    """
    Directions currently held down.
    """

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False

    def press(self, direction: Direction) -> None:
        setattr(self, direction.value, True)

    def release(self, direction: Direction) -> None:
        setattr(self, direction.value, False)

    def clear(self) -> None:
        self.left = self.right = self.up = self.down = False


def handle_key_event(event, state: InputState) -> Action | None:
    """
    Update ``state`` from a pygame key event and return the one-shot action
    it triggers, if any.

    :param event: pygame KEYDOWN or KEYUP event.
    :param state: Held-direction snapshot to update.
    :type state: InputState

    :return: Action | None
    """
    if event.type == pygame.KEYDOWN:
        direction = KEY_BINDINGS.get(event.key)
        if direction is not None:
            state.press(direction)
            return None
        return KEYDOWN_ACTIONS.get(event.key)

    if event.type == pygame.KEYUP:
        direction = KEY_BINDINGS.get(event.key)
        if direction is not None:
            state.release(direction)
            return None
        return KEYUP_ACTIONS.get(event.key)

    return None
