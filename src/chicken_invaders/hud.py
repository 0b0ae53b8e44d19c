"""
Score display.
"""

from __future__ import annotations

from chicken_invaders.backend import Renderer
from chicken_invaders.constants import TEXT_COLOR


class ScoreDisplay:
    """
    Text sink for the current score, painted in the top-left corner.
    """

    def __init__(self, label: str = "Score", position=(16, 12)):
        self.label = label
        self.position = position
        self.text = "0"
        self.updates = 0

    def set_score_text(self, text: str) -> None:
        self.text = text
        self.updates += 1

    def draw(self, renderer: Renderer) -> None:
        x, y = self.position
        renderer.draw_text(f"{self.label}: {self.text}", x, y, color=TEXT_COLOR)
