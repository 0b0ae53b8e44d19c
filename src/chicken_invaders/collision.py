"""
Axis-aligned collision tests between round projectiles and rectangles.
"""

from __future__ import annotations

from mini_arcade_core.spaces.d2.collision2d import RectCollider
from mini_arcade_core.spaces.geometry.bounds import Position2D, Size2D

from chicken_invaders.entities import Bullet, Egg, Invader, Player, Vec2


def circle_collider(center: Vec2, radius: float) -> RectCollider:
    """Bounding box of a circle."""
    return RectCollider(
        Position2D(center.x - radius, center.y - radius),
        Size2D(radius * 2, radius * 2),
    )


def circle_overlaps_rect(
    center: Vec2,
    radius: float,
    position: Vec2,
    width: float,
    height: float,
) -> bool:
    """
    Check whether a circle's bounding box overlaps a rectangle.

    Edges touching count as an overlap.

    :param center: Circle centre.
    :type center: Vec2

    :param radius: Circle radius.
    :type radius: float

    :param position: Top-left corner of the rectangle.
    :type position: Vec2

    :param width: Rectangle width.
    :type width: float

    :param height: Rectangle height.
    :type height: float

    :return: True if both axes overlap.
    :rtype: bool
    """
    rect = RectCollider(
        Position2D(position.x, position.y), Size2D(width, height)
    )
    return circle_collider(center, radius).intersects(rect)


def bullet_hits_invader(bullet: Bullet, invader: Invader) -> bool:
    return circle_collider(bullet.position, bullet.radius).intersects(
        invader.collider
    )


def egg_hits_player(egg: Egg, player: Player) -> bool:
    return circle_collider(egg.position, egg.radius).intersects(
        player.collider
    )
