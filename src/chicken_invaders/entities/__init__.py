"""
Chicken Invaders entities
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mini_arcade_core.spaces.d2.collision2d import RectCollider
from mini_arcade_core.spaces.geometry.bounds import Position2D, Size2D
from mini_arcade_core.spaces.math.vec2 import Vec2

from chicken_invaders.constants import (
    BULLET_COLOR,
    BULLET_RADIUS,
    BULLET_SPEED,
    EGG_COLOR,
    EGG_RADIUS,
    EGG_SPEED,
    GRID_COLUMNS,
    GRID_ORIGIN,
    GRID_ROWS,
    GRID_SPACING,
    GRID_SPEED,
    MUZZLE_OFFSET_Y,
    PARTICLE_COUNT,
    PARTICLE_FADE,
    PARTICLE_MAX_RADIUS,
    PLAYER_BOTTOM_MARGIN,
    PLAYER_SPEED,
)

if TYPE_CHECKING:
    from chicken_invaders.backend import Renderer

Color = tuple[int, int, int]


def _zero() -> Vec2:
    return Vec2(0.0, 0.0)


@dataclass(frozen=True)
class Sprite:
    """
    A loaded image handle together with its natural pixel size.
    """

    image: Any
    width: float
    height: float

    def scaled(self, scale: float) -> tuple[float, float]:
        return self.width * scale, self.height * scale


@dataclass
class Player:
    """
    Player jet, confined to the lower half of the viewport.
    """

    position: Vec2
    width: float
    height: float
    viewport: tuple[float, float]
    velocity: Vec2 = field(default_factory=_zero)
    speed: float = PLAYER_SPEED
    opacity: float = 1.0
    sprite: Sprite | None = None

    @classmethod
    def spawn(
        cls,
        sprite: Sprite,
        viewport: tuple[float, float],
        scale: float = 1.0,
        speed: float = PLAYER_SPEED,
    ) -> Player:
        """
        Create a player centred horizontally near the bottom edge.

        :param sprite: Jet sprite.
        :type sprite: Sprite

        :param viewport: Canvas width and height.
        :type viewport: tuple[float, float]

        :param scale: Sprite scale factor.
        :type scale: float

        :param speed: Movement delta per frame.
        :type speed: float

        :return: Player
        :rtype: Player
        """
        vw, vh = viewport
        width, height = sprite.scaled(scale)
        return cls(
            position=Vec2(
                vw / 2 - width / 2, vh - height - PLAYER_BOTTOM_MARGIN
            ),
            width=width,
            height=height,
            viewport=viewport,
            speed=speed,
            sprite=sprite,
        )

    @property
    def center(self) -> Vec2:
        return Vec2(
            self.position.x + self.width / 2,
            self.position.y + self.height / 2,
        )

    @property
    def muzzle(self) -> Vec2:
        """Where bullets leave the jet."""
        return Vec2(
            self.position.x + self.width / 2,
            self.position.y + MUZZLE_OFFSET_Y,
        )

    @property
    def collider(self) -> RectCollider:
        return RectCollider(
            Position2D(self.position.x, self.position.y),
            Size2D(self.width, self.height),
        )

    def draw(self, renderer: Renderer) -> None:
        if self.sprite is None:
            return
        x, y = self.position.to_tuple()
        renderer.draw_image(
            self.sprite.image, x, y, self.width, self.height, self.opacity
        )

    def update(
        self, renderer: Renderer | None = None, velocity: Vec2 | None = None
    ) -> None:
        """
        Draw, move by the player's own velocity, then clamp into the lower
        half of the viewport. The external velocity is ignored.
        """
        del velocity
        if renderer is not None:
            self.draw(renderer)

        self.position += self.velocity

        vw, vh = self.viewport
        self.position.x = max(0.0, min(vw - self.width, self.position.x))
        self.position.y = max(vh / 2, min(vh - self.height, self.position.y))


@dataclass
class Invader:
    """
    Invader entity. Its motion comes from the owning grid.
    """

    position: Vec2
    width: float
    height: float
    velocity: Vec2 = field(default_factory=_zero)
    sprite: Sprite | None = None

    @property
    def center(self) -> Vec2:
        return Vec2(
            self.position.x + self.width / 2,
            self.position.y + self.height / 2,
        )

    @property
    def egg_spawn_point(self) -> Vec2:
        # lower-centre
        return Vec2(
            self.position.x + self.width / 2, self.position.y + self.height
        )

    @property
    def collider(self) -> RectCollider:
        return RectCollider(
            Position2D(self.position.x, self.position.y),
            Size2D(self.width, self.height),
        )

    def draw(self, renderer: Renderer) -> None:
        if self.sprite is None:
            return
        x, y = self.position.to_tuple()
        renderer.draw_image(self.sprite.image, x, y, self.width, self.height)

    def update(
        self, renderer: Renderer | None = None, velocity: Vec2 | None = None
    ) -> None:
        """
        Draw, then move by ``velocity`` (the grid's shared velocity), or by
        the invader's own velocity when none is supplied.
        """
        if renderer is not None:
            self.draw(renderer)

        step = velocity if velocity is not None else self.velocity
        self.position += step


@dataclass
class Bullet:
    """
    Bullet entity, fired upwards by the player.
    """

    position: Vec2
    velocity: Vec2 = field(default_factory=lambda: Vec2(0.0, -BULLET_SPEED))
    radius: float = BULLET_RADIUS
    color: Color = BULLET_COLOR

    @property
    def off_screen(self) -> bool:
        return self.position.y + self.radius < 0

    def draw(self, renderer: Renderer) -> None:
        renderer.draw_circle(
            self.color, self.position.x, self.position.y, self.radius
        )

    def update(
        self, renderer: Renderer | None = None, velocity: Vec2 | None = None
    ) -> None:
        del velocity
        if renderer is not None:
            self.draw(renderer)
        self.position += self.velocity


@dataclass
class Egg:
    """
    Egg hazard, dropped by an invader.
    """

    position: Vec2
    velocity: Vec2 = field(default_factory=lambda: Vec2(0.0, EGG_SPEED))
    radius: float = EGG_RADIUS
    color: Color = EGG_COLOR

    @property
    def width(self) -> float:
        return self.radius * 2

    @property
    def height(self) -> float:
        return self.radius * 2

    def below(self, viewport_height: float) -> bool:
        """True once the whole egg has left the bottom of the viewport."""
        return self.position.y - self.radius > viewport_height

    def draw(self, renderer: Renderer) -> None:
        renderer.draw_circle(
            self.color, self.position.x, self.position.y, self.radius
        )

    def update(
        self, renderer: Renderer | None = None, velocity: Vec2 | None = None
    ) -> None:
        del velocity
        if renderer is not None:
            self.draw(renderer)
        self.position += self.velocity


@dataclass
class Particle:
    """
    Short lived explosion fragment.
    """

    position: Vec2
    velocity: Vec2
    radius: float
    color: Color
    opacity: float = 1.0
    fade: float = PARTICLE_FADE

    @property
    def exhausted(self) -> bool:
        return self.opacity <= 0

    def draw(self, renderer: Renderer) -> None:
        renderer.draw_circle(
            self.color,
            self.position.x,
            self.position.y,
            self.radius,
            max(0.0, self.opacity),
        )

    def update(
        self, renderer: Renderer | None = None, velocity: Vec2 | None = None
    ) -> None:
        del velocity
        if renderer is not None:
            self.draw(renderer)
        self.position += self.velocity
        self.opacity -= self.fade


def spawn_particles(
    particles: list[Particle],
    center: Vec2,
    color: Color,
    rng: random.Random,
    count: int = PARTICLE_COUNT,
) -> None:
    """
    Append a burst of ``count`` particles at ``center``.

    Each particle gets its own velocity with components in [-1, 1) and a
    radius in [0, PARTICLE_MAX_RADIUS).
    """
    for _ in range(count):
        particles.append(
            Particle(
                position=Vec2(center.x, center.y),
                velocity=Vec2(rng.random() * 2 - 1, rng.random() * 2 - 1),
                radius=rng.random() * PARTICLE_MAX_RADIUS,
                color=color,
            )
        )


@dataclass
class Grid:
    """
    Rectangular formation of invaders sharing one velocity.
    """

    position: Vec2
    velocity: Vec2
    columns: int
    rows: int
    width: float
    invaders: list[Invader] = field(default_factory=list)

    @classmethod
    def spawn(
        cls,
        rng: random.Random,
        invader_size: tuple[float, float],
        sprite: Sprite | None = None,
        speed: float = GRID_SPEED,
    ) -> Grid:
        """
        Build a grid with a random number of columns and rows.

        :param rng: Random source for the grid dimensions.
        :type rng: random.Random

        :param invader_size: Width and height of every invader.
        :type invader_size: tuple[float, float]

        :param sprite: Invader sprite.
        :type sprite: Sprite | None

        :param speed: Initial horizontal velocity.
        :type speed: float

        :return: Grid
        :rtype: Grid
        """
        columns = rng.randint(*GRID_COLUMNS)
        rows = rng.randint(*GRID_ROWS)
        spacing_x, spacing_y = GRID_SPACING
        origin_x, origin_y = GRID_ORIGIN
        inv_w, inv_h = invader_size

        grid = cls(
            position=Vec2(origin_x, origin_y),
            velocity=Vec2(speed, 0.0),
            columns=columns,
            rows=rows,
            width=columns * spacing_x,
        )
        for row in range(rows):
            for col in range(columns):
                grid.invaders.append(
                    Invader(
                        position=Vec2(
                            origin_x + col * spacing_x,
                            origin_y + row * spacing_y,
                        ),
                        width=inv_w,
                        height=inv_h,
                        sprite=sprite,
                    )
                )
        return grid

    @property
    def empty(self) -> bool:
        return not self.invaders

    def update(self, viewport_width: float) -> None:
        """
        Advance the anchor and bounce off either viewport edge.
        """
        self.position += self.velocity

        if (
            self.position.x + self.width >= viewport_width
            or self.position.x < 0
        ):
            self.velocity.x = -self.velocity.x

    def random_invader(self, rng: random.Random) -> Invader | None:
        if not self.invaders:
            return None
        return rng.choice(self.invaders)

    def draw(self, renderer: Renderer) -> None:
        for invader in self.invaders:
            invader.draw(renderer)
