"""
Sprite loading. The game loop waits for ``ImageLoader.load`` to report that
every image is ready.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Mapping

import pygame
from mini_arcade_core.utils import find_assets_root, logger

from chicken_invaders.constants import PLAYER_SIZE
from chicken_invaders.entities import Sprite

# natural size of the painted chicken, scaled down by the invader scale
CHICKEN_SIZE = (800, 600)


def resolve_asset_path(source: str, anchor: str | Path = __file__) -> Path:
    """
    Resolve ``source`` against the working directory, then against the
    nearest ``assets`` directory above ``anchor``.

    :param source: Absolute or relative image path.
    :type source: str

    :param anchor: File the ``assets`` lookup walks upwards from.
    :type anchor: str | Path

    :raises FileNotFoundError: If the assets directory cannot be found.
    """
    path = Path(source)
    if path.is_absolute() or path.exists():
        return path
    return find_assets_root(str(anchor)) / path


def load_image(filename: str | Path) -> pygame.Surface:
    """
    Load an image

    :param filename: Name of the file
    :type filename: str | Path

    :raise SystemExit: If pygame cannot read the file

    :return: pygame.Surface
    """
    try:
        image = pygame.image.load(str(filename))
    except (pygame.error, FileNotFoundError) as message:
        logger.error(f"Failed to load image {filename}: {message}")
        raise SystemExit(message) from message

    if pygame.display.get_surface() is not None:
        image = image.convert_alpha()
    return image


def paint_jet(size: tuple[int, int] = PLAYER_SIZE) -> pygame.Surface:
    """Placeholder player sprite: a grey delta-wing jet."""
    w, h = size
    surface = pygame.Surface(size, pygame.SRCALPHA)
    hull = [(w // 2, 0), (w - 1, h - 1), (w // 2, int(h * 0.78)), (0, h - 1)]
    pygame.draw.polygon(surface, (170, 180, 195), hull)
    pygame.draw.polygon(surface, (90, 100, 120), hull, 3)
    pygame.draw.ellipse(
        surface,
        (80, 170, 255),
        (w // 2 - w // 12, h // 5, w // 6, h // 4),
    )
    return surface


def paint_chicken(size: tuple[int, int] = CHICKEN_SIZE) -> pygame.Surface:
    """Placeholder invader sprite: a round yellow chicken."""
    w, h = size
    surface = pygame.Surface(size, pygame.SRCALPHA)
    pygame.draw.ellipse(
        surface, (255, 214, 0), (w // 8, h // 5, w * 3 // 4, h * 4 // 5 - 1)
    )
    pygame.draw.polygon(
        surface,
        (220, 40, 40),
        [(w // 2 - w // 16, h // 5), (w // 2, 0), (w // 2 + w // 16, h // 5)],
    )
    pygame.draw.circle(surface, (20, 20, 20), (w * 2 // 5, h * 2 // 5), w // 25)
    pygame.draw.circle(surface, (20, 20, 20), (w * 3 // 5, h * 2 // 5), w // 25)
    pygame.draw.polygon(
        surface,
        (255, 140, 0),
        [
            (w // 2 - w // 20, h // 2),
            (w // 2 + w // 20, h // 2),
            (w // 2, h * 3 // 5),
        ],
    )
    return surface


PLACEHOLDERS: dict[str, Callable[[], pygame.Surface]] = {
    "player": paint_jet,
    "invader": paint_chicken,
}


class ImageLoader:
    """
    Loads a set of named images and signals once when all of them are in.
    """

    def __init__(
        self,
        loader: Callable[[Path], Any] | None = None,
        placeholders: Mapping[str, Callable[[], Any]] | None = None,
        measure: Callable[[Any], tuple[int, int]] | None = None,
    ):
        """
        :param loader: Reads an image file, ``load_image`` by default.
        :param placeholders: Painters used for sources given as ``None``.
        :param measure: Returns an image's pixel size.
        """
        self._loader = loader or load_image
        self._placeholders = dict(
            PLACEHOLDERS if placeholders is None else placeholders
        )
        self._measure = measure or (lambda image: image.get_size())
        self._sprites: dict[str, Sprite] = {}
        self._loaded = 0
        self._total = 0
        self._notified = False

    @property
    def ready(self) -> bool:
        return self._notified

    def load(
        self,
        sources: Mapping[str, str | None],
        on_ready: Callable[[], None],
    ) -> None:
        """
        Load every source and call ``on_ready`` once all are loaded.

        :param sources: Logical name to file path, or ``None`` for the
            built-in placeholder.
        :type sources: Mapping[str, str | None]

        :param on_ready: Completion callback, invoked exactly once.
        :type on_ready: Callable[[], None]

        :raise SystemExit: If an image file cannot be read
        :raise KeyError: If a ``None`` source has no placeholder painter
        """
        self._total = len(sources)
        self._loaded = 0
        for name, source in sources.items():
            if source is None:
                logger.debug(f"Painting placeholder sprite {name}")
                image = self._placeholders[name]()
            else:
                path = resolve_asset_path(source)
                logger.debug(f"Loading image {name} from {path}")
                image = self._loader(path)
            self._on_loaded(name, image, on_ready)

        if self._total == 0:
            self._notify(on_ready)

    def _on_loaded(self, name: str, image: Any, on_ready: Callable[[], None]):
        width, height = self._measure(image)
        self._sprites[name] = Sprite(image=image, width=width, height=height)
        self._loaded += 1
        if self._loaded == self._total:
            self._notify(on_ready)

    def _notify(self, on_ready: Callable[[], None]):
        if self._notified:
            return
        self._notified = True
        logger.info(f"Loaded {self._total} images")
        on_ready()

    def get(self, name: str) -> Sprite:
        return self._sprites[name]
