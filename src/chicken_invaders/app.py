"""
Main application for Chicken Invaders using the pygame backend.
"""

from __future__ import annotations

import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

# pylint: disable=wrong-import-position
import pygame
from mini_arcade_core.utils import logger
from mini_arcade_core.utils.logging import configure_logging

from chicken_invaders.assets import ImageLoader
from chicken_invaders.backend import PygameBackend
from chicken_invaders.controls import Action, InputState, handle_key_event
from chicken_invaders.hud import ScoreDisplay
from chicken_invaders.scenes import ChickenInvadersScene
from chicken_invaders.settings import GameSettings
from chicken_invaders.timing import FixedTimestep

# pylint: enable=wrong-import-position


def set_screen(caption: str, width: int, height: int) -> pygame.Surface:
    """
    Set the screen

    :param caption: Caption of the screen
    :type caption: str

    :param width: Width of the screen
    :type width: int

    :param height: Height of the screen
    :type height: int

    :return: pygame.Surface
    """
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(caption)

    return screen


class ChickenInvaders:
    """
    Window, event pump and frame loop around a ChickenInvadersScene.
    """

    def __init__(self, settings: GameSettings):
        """
        :param settings: Resolved game settings
        :type settings: GameSettings
        """
        self.settings = settings
        self.scene: ChickenInvadersScene | None = None
        self.input = InputState()
        self.score_display = ScoreDisplay()
        self._carry_on = True

        pygame.init()
        self._clock = pygame.time.Clock()
        self._screen = self._set_screen()
        self._backend = PygameBackend(
            self._screen,
            background_color=settings.renderer.background_color,
            font_size=settings.renderer.font_size,
        )
        self._loader = ImageLoader()
        self._timestep = FixedTimestep(settings.gameplay.fps)

    def _set_screen(self) -> pygame.Surface:
        window = self.settings.window
        width, height = window.width, window.height
        if window.fit_to_display:
            info = pygame.display.Info()
            width, height = info.current_w, info.current_h
        logger.debug(f"Setting screen {width}x{height}")
        return set_screen(window.title, width, height)

    def _start(self):
        """Called by the image loader once every sprite is available."""
        self.scene = ChickenInvadersScene(
            player_sprite=self._loader.get("player"),
            invader_sprite=self._loader.get("invader"),
            viewport=self._backend.size,
            settings=self.settings,
            score_display=self.score_display,
            input_state=self.input,
            renderer=self._backend,
        )
        self.scene.on_enter()
        logger.debug("Scene ready")

    def handle_events(self):
        """
        Handle the events
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.debug("Quitting the game")
                self._carry_on = False
                continue

            action = handle_key_event(event, self.input)
            if action is None or self.scene is None:
                continue

            if action is Action.FIRE:
                self.scene.fire()
            elif action is Action.PAUSE:
                self.scene.toggle_pause()
            elif action is Action.RESTART:
                self.scene.restart()

    def run(self):
        """
        Run the game
        """
        logger.debug("Running the game")
        self._loader.load(self.settings.assets.sources(), self._start)

        fps = self.settings.gameplay.fps
        while self._carry_on:
            elapsed = self._clock.tick(fps)
            self.handle_events()
            if self.scene is None:
                continue

            for _ in range(self._timestep.steps(elapsed)):
                self.scene.tick(pygame.time.get_ticks())
            pygame.display.flip()

        pygame.quit()


def run(settings_data: dict | None = None):
    """
    Main entry point for Chicken Invaders.

    - Builds the settings from a plain dictionary.
    - Opens the window and paints or loads the sprites.
    - Starts the frame loop once every sprite has loaded.
    """
    # NOTE: Settings stay a dictionary so a yaml file or cli arguments can
    # feed them later.
    settings_data = settings_data or {
        "window": {
            "title": "Chicken Invaders (pygame)",
            "fit_to_display": False,
        },
        "renderer": {"background_color": (30, 30, 30)},
        "assets": {"player": None, "invader": None},
    }
    settings = GameSettings.from_dict(settings_data)
    configure_logging(settings.logging.level)

    logger.info("Starting Chicken Invaders...")
    logger.info(settings.to_dict())
    ChickenInvaders(settings).run()


if __name__ == "__main__":
    run()
