"""
Game settings, built from a plain dictionary.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any

from chicken_invaders.constants import (
    BACKGROUND_COLOR,
    EGG_INTERVAL,
    FPS,
    GAME_OVER_DELAY_MS,
    INVADER_POINTS,
    INVADER_SCALE,
    TITLE,
    WINDOW_SIZE,
)


@dataclass
class WindowSettings:
    width: int = WINDOW_SIZE[0]
    height: int = WINDOW_SIZE[1]
    title: str = TITLE
    # use the desktop size instead of width/height
    fit_to_display: bool = False


@dataclass
class RendererSettings:
    background_color: tuple[int, int, int] = BACKGROUND_COLOR
    font_size: int = 32


@dataclass
class AssetSettings:
    """
    Image sources by logical name. ``None`` paints a placeholder sprite.
    """

    player: str | None = None
    invader: str | None = None
    player_scale: float = 1.0
    invader_scale: float = INVADER_SCALE

    def sources(self) -> dict[str, str | None]:
        return {"player": self.player, "invader": self.invader}


@dataclass
class GameplaySettings:
    fps: int = FPS
    egg_interval: int = EGG_INTERVAL
    game_over_delay_ms: int = GAME_OVER_DELAY_MS
    invader_points: int = INVADER_POINTS
    seed: int | None = None


@dataclass
class LoggingSettings:
    level: str = "INFO"


def _section(cls, data: dict[str, Any] | None):
    data = dict(data or {})
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(
            f"Unknown {cls.__name__} keys: {', '.join(sorted(unknown))}"
        )
    if "background_color" in data:
        data["background_color"] = tuple(data["background_color"])
    return cls(**data)


@dataclass
class GameSettings:
    """
    All tunables of a game session.
    """

    window: WindowSettings = field(default_factory=WindowSettings)
    renderer: RendererSettings = field(default_factory=RendererSettings)
    assets: AssetSettings = field(default_factory=AssetSettings)
    gameplay: GameplaySettings = field(default_factory=GameplaySettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None = None) -> GameSettings:
        """
        Build settings from a nested dictionary.

        Missing sections and keys fall back to the defaults.

        :param data: Mapping of section name to section values.
        :type data: dict[str, Any] | None

        :raises ValueError: On unknown sections/keys or invalid values.

        :return: GameSettings
        :rtype: GameSettings
        """
        data = data or {}
        sections = {
            "window": WindowSettings,
            "renderer": RendererSettings,
            "assets": AssetSettings,
            "gameplay": GameplaySettings,
            "logging": LoggingSettings,
        }
        unknown = set(data) - set(sections)
        if unknown:
            raise ValueError(
                f"Unknown settings sections: {', '.join(sorted(unknown))}"
            )
        settings = cls(
            **{
                name: _section(section_cls, data.get(name))
                for name, section_cls in sections.items()
            }
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """
        :raises ValueError: If a value is out of range.
        """
        if self.window.width <= 0 or self.window.height <= 0:
            raise ValueError("Window size must be positive")
        if self.assets.player_scale <= 0 or self.assets.invader_scale <= 0:
            raise ValueError("Sprite scales must be positive")
        if self.gameplay.fps <= 0:
            raise ValueError("fps must be positive")
        if self.gameplay.egg_interval <= 0:
            raise ValueError("egg_interval must be positive")
        if self.gameplay.game_over_delay_ms < 0:
            raise ValueError("game_over_delay_ms must not be negative")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
