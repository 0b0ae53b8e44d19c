"""
Game scenes.
"""

from chicken_invaders.scenes.chicken_invaders import (
    ChickenInvadersScene,
    ChickenInvadersWorld,
    GameStatus,
)

__all__ = ["ChickenInvadersScene", "ChickenInvadersWorld", "GameStatus"]
