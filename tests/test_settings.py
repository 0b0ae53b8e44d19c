import pytest

from chicken_invaders.settings import GameSettings


def test_defaults():
    settings = GameSettings.from_dict()
    assert (settings.window.width, settings.window.height) == (1280, 720)
    assert settings.assets.invader_scale == 0.1
    assert settings.gameplay.egg_interval == 50
    assert settings.gameplay.game_over_delay_ms == 2000
    assert settings.gameplay.invader_points == 10
    assert settings.assets.sources() == {"player": None, "invader": None}


def test_partial_override_keeps_other_defaults():
    settings = GameSettings.from_dict(
        {
            "window": {"width": 800, "height": 600},
            "renderer": {"background_color": [10, 20, 30]},
            "gameplay": {"seed": 3},
        }
    )
    assert settings.window.width == 800
    assert settings.window.title == "Chicken Invaders"
    assert settings.renderer.background_color == (10, 20, 30)
    assert settings.gameplay.seed == 3
    assert settings.gameplay.fps == 60


def test_to_dict_feeds_from_dict():
    settings = GameSettings.from_dict({"assets": {"player": "jet.png"}})
    again = GameSettings.from_dict(settings.to_dict())
    assert again == settings


@pytest.mark.parametrize(
    "data",
    [
        {"audio": {"enable": False}},
        {"window": {"depth": 3}},
    ],
)
def test_unknown_keys_rejected(data):
    with pytest.raises(ValueError):
        GameSettings.from_dict(data)


@pytest.mark.parametrize(
    "data",
    [
        {"window": {"width": 0}},
        {"assets": {"invader_scale": 0}},
        {"gameplay": {"egg_interval": 0}},
        {"gameplay": {"fps": -1}},
        {"gameplay": {"game_over_delay_ms": -5}},
    ],
)
def test_invalid_values_rejected(data):
    with pytest.raises(ValueError):
        GameSettings.from_dict(data)
