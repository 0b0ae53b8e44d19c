"""
Chicken Invaders Scene
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum

from mini_arcade_core.engine.commands import CommandQueue
from mini_arcade_core.runtime.input_frame import InputFrame
from mini_arcade_core.scenes.sim_scene import (
    BaseIntent,
    BaseTickContext,
    BaseWorld,
)
from mini_arcade_core.scenes.systems.phases import SystemPhase
from mini_arcade_core.scenes.systems.system_pipeline import SystemPipeline
from mini_arcade_core.spaces.math.vec2 import Vec2
from mini_arcade_core.utils import logger

from chicken_invaders.backend import Renderer
from chicken_invaders.collision import bullet_hits_invader, egg_hits_player
from chicken_invaders.constants import (
    EGG_INTERVAL,
    GAME_OVER_DELAY_MS,
    INVADER_PARTICLE_COLOR,
    INVADER_POINTS,
    INVADER_SCALE,
    OVERLAY_COLOR,
    PLAYER_PARTICLE_COLOR,
)
from chicken_invaders.controls import InputState
from chicken_invaders.entities import (
    Bullet,
    Egg,
    Grid,
    Particle,
    Player,
    Sprite,
    spawn_particles,
)
from chicken_invaders.hud import ScoreDisplay
from chicken_invaders.settings import GameSettings
from chicken_invaders.timing import DeferredCalls
from chicken_invaders.utils import remove_at


class GameStatus(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


@dataclass
class ChickenInvadersWorld(BaseWorld):
    """
    Everything one game session owns.
    """

    viewport: tuple[float, float]
    player: Player
    invader_sprite: Sprite
    rng: random.Random = field(default_factory=random.Random)
    invader_scale: float = INVADER_SCALE
    egg_interval: int = EGG_INTERVAL
    invader_points: int = INVADER_POINTS
    game_over_delay_ms: int = GAME_OVER_DELAY_MS

    grids: list[Grid] = field(default_factory=list)
    bullets: list[Bullet] = field(default_factory=list)
    eggs: list[Egg] = field(default_factory=list)
    particles: list[Particle] = field(default_factory=list)

    score: int = 0
    frames: int = 0
    status: GameStatus = GameStatus.RUNNING
    # False once the game-over delay has elapsed; the simulation then freezes
    active: bool = True
    session: int = 0

    @property
    def invader_size(self) -> tuple[float, float]:
        return self.invader_sprite.scaled(self.invader_scale)

    @property
    def advancing(self) -> bool:
        return self.active and self.status is not GameStatus.PAUSED

    def spawn_grid(self) -> Grid:
        grid = Grid.spawn(
            self.rng, self.invader_size, sprite=self.invader_sprite
        )
        self.grids.append(grid)
        logger.debug(f"Spawned {grid.columns}x{grid.rows} grid")
        return grid


@dataclass
class ChickenInvadersIntent(BaseIntent):
    """
    Chicken Invaders Intent
    """

    move_x: float = 0.0
    move_y: float = 0.0

    @classmethod
    def from_input(cls, held: InputState) -> ChickenInvadersIntent:
        # right wins over left, down over up
        move_x = 1.0 if held.right else -1.0 if held.left else 0.0
        move_y = 1.0 if held.down else -1.0 if held.up else 0.0
        return cls(move_x=move_x, move_y=move_y)


@dataclass(frozen=True)
class ScheduleDeactivation:
    """Ask the scene to end ``session`` after ``delay_ms``."""

    session: int
    delay_ms: float


@dataclass
class ChickenInvadersTickContext(
    BaseTickContext[ChickenInvadersWorld, ChickenInvadersIntent]
):
    """
    Chicken Invaders Tick Context
    """

    renderer: Renderer | None = None


def game_over(ctx: ChickenInvadersTickContext) -> None:
    w = ctx.world
    w.player.opacity = 0.0
    w.status = GameStatus.OVER
    ctx.commands.push(
        ScheduleDeactivation(session=w.session, delay_ms=w.game_over_delay_ms)
    )
    logger.debug(f"Game over, score {w.score}")


@dataclass
class PlayerInputSystem:
    """
    Turn the tick's intent into player velocity.
    """

    name: str = "chicken_invaders_input"
    phase: int = SystemPhase.INPUT
    order: int = 10

    def step(self, ctx: ChickenInvadersTickContext):
        player = ctx.world.player
        player.velocity.x = 0.0
        player.velocity.y = 0.0

        if ctx.world.status is not GameStatus.RUNNING or ctx.intent is None:
            return

        player.velocity.x = ctx.intent.move_x * player.speed
        player.velocity.y = ctx.intent.move_y * player.speed


@dataclass
class PlayerSystem:
    name: str = "chicken_invaders_player"
    order: int = 20

    def step(self, ctx: ChickenInvadersTickContext):
        ctx.world.player.update()


@dataclass
class ParticleSystem:
    """Advance particles, dropping the faded ones."""

    name: str = "chicken_invaders_particles"
    order: int = 30

    def step(self, ctx: ChickenInvadersTickContext):
        particles = ctx.world.particles
        for i in range(len(particles) - 1, -1, -1):
            particle = particles[i]
            if particle.exhausted:
                remove_at(particles, i)
            else:
                particle.update()


@dataclass
class GridSpawnSystem:
    name: str = "chicken_invaders_grid_spawn"
    order: int = 40

    def step(self, ctx: ChickenInvadersTickContext):
        if not ctx.world.grids:
            ctx.world.spawn_grid()


@dataclass
class GridSystem:
    """
    Move every grid, let it drop an egg, and resolve bullet hits:
    - grid anchor advances and bounces off the viewport edges
    - every ``egg_interval`` frames a random live invader drops an egg
    - an invader hit by a bullet is removed together with that bullet
    - a grid without invaders is removed on the same pass
    """

    name: str = "chicken_invaders_grids"
    order: int = 50

    def step(self, ctx: ChickenInvadersTickContext):
        w = ctx.world
        vw, _ = w.viewport

        for g in range(len(w.grids) - 1, -1, -1):
            grid = w.grids[g]

            # invaders follow the anchor's step, taken before any bounce
            step = Vec2(grid.velocity.x, grid.velocity.y)
            grid.update(vw)

            if w.frames % w.egg_interval == 0:
                shooter = grid.random_invader(w.rng)
                if shooter is not None:
                    w.eggs.append(Egg(position=shooter.egg_spawn_point))

            self._advance_invaders(ctx, grid, step)

            if grid.empty:
                remove_at(w.grids, g)
                logger.debug("Grid cleared")

    def _advance_invaders(self, ctx: ChickenInvadersTickContext, grid, step):
        w = ctx.world
        bullets = w.bullets

        for i in range(len(grid.invaders) - 1, -1, -1):
            invader = grid.invaders[i]
            invader.update(velocity=step)

            for j in range(len(bullets) - 1, -1, -1):
                if not bullet_hits_invader(bullets[j], invader):
                    continue

                remove_at(grid.invaders, i)
                remove_at(bullets, j)
                spawn_particles(
                    w.particles, invader.center, INVADER_PARTICLE_COLOR, w.rng
                )
                w.score += w.invader_points
                logger.debug(f"Hit! Score: {w.score}")
                # one bullet per invader; the others keep flying
                break


@dataclass
class BulletSystem:
    name: str = "chicken_invaders_bullets"
    order: int = 60

    def step(self, ctx: ChickenInvadersTickContext):
        bullets = ctx.world.bullets
        for i in range(len(bullets) - 1, -1, -1):
            bullet = bullets[i]
            if bullet.off_screen:
                remove_at(bullets, i)
            else:
                bullet.update()


@dataclass
class EggSystem:
    """
    Move eggs, drop the ones below the viewport, and end the game when one
    reaches the player.
    """

    name: str = "chicken_invaders_eggs"
    order: int = 70

    def step(self, ctx: ChickenInvadersTickContext):
        w = ctx.world
        _, vh = w.viewport
        eggs = w.eggs

        for i in range(len(eggs) - 1, -1, -1):
            egg = eggs[i]
            if egg.below(vh):
                remove_at(eggs, i)
                continue

            egg.update()

            if w.status is GameStatus.RUNNING and egg_hits_player(
                egg, w.player
            ):
                spawn_particles(
                    w.particles, w.player.center, PLAYER_PARTICLE_COLOR, w.rng
                )
                remove_at(eggs, i)
                game_over(ctx)


@dataclass
class FrameCounterSystem:
    name: str = "chicken_invaders_frames"
    order: int = 80

    def step(self, ctx: ChickenInvadersTickContext):
        ctx.world.frames += 1


@dataclass
class ChickenInvadersRenderSystem:
    """
    Render the Chicken Invaders world.
    """

    name: str = "chicken_invaders_render"
    phase: int = SystemPhase.RENDERING
    order: int = 0
    score_display: ScoreDisplay | None = None

    def step(self, ctx: ChickenInvadersTickContext):
        """Render the Chicken Invaders world."""
        r = ctx.renderer
        if r is None:
            return
        w = ctx.world

        r.clear()
        for grid in w.grids:
            grid.draw(r)
        for bullet in w.bullets:
            bullet.draw(r)
        for egg in w.eggs:
            egg.draw(r)
        for particle in w.particles:
            particle.draw(r)
        w.player.draw(r)

        if self.score_display is not None:
            self.score_display.draw(r)

        vw, vh = w.viewport
        if w.status is GameStatus.PAUSED:
            r.draw_overlay(OVERLAY_COLOR, 0.5)
            r.draw_text("Paused", vw / 2, vh / 2, size=64, center=True)
        elif not w.active:
            r.draw_overlay(OVERLAY_COLOR, 0.6)
            r.draw_text("Game Over", vw / 2, vh / 2 - 50, size=72, center=True)
            r.draw_text(f"Score: {w.score}", vw / 2, vh / 2 + 10, center=True)
            r.draw_text(
                "Press R to restart", vw / 2, vh / 2 + 50, center=True
            )


def default_systems() -> list:
    return [
        PlayerInputSystem(),
        PlayerSystem(),
        ParticleSystem(),
        GridSpawnSystem(),
        GridSystem(),
        BulletSystem(),
        EggSystem(),
        FrameCounterSystem(),
    ]


class ChickenInvadersScene:
    """
    Owns one world at a time and drives it one tick per call.

    Input handlers (``fire``, ``toggle_pause``, ``restart``) run between
    ticks.
    """

    world: ChickenInvadersWorld

    def __init__(
        self,
        player_sprite: Sprite,
        invader_sprite: Sprite,
        viewport: tuple[float, float],
        settings: GameSettings | None = None,
        score_display: ScoreDisplay | None = None,
        input_state: InputState | None = None,
        renderer: Renderer | None = None,
    ):
        """
        :param player_sprite: Jet sprite.
        :type player_sprite: Sprite

        :param invader_sprite: Chicken sprite.
        :type invader_sprite: Sprite

        :param viewport: Canvas width and height.
        :type viewport: tuple[float, float]

        :param settings: Game settings, defaults when omitted.
        :type settings: GameSettings | None

        :param score_display: Receives the score text on every change.
        :type score_display: ScoreDisplay | None

        :param input_state: Held directions, polled every tick.
        :type input_state: InputState | None

        :param renderer: Draw target; ``None`` runs headless.
        :type renderer: Renderer | None
        """
        self.settings = settings or GameSettings()
        self.score_display = score_display or ScoreDisplay()
        self.input = input_state or InputState()
        self.renderer = renderer
        self.timers = DeferredCalls()
        self.commands = CommandQueue()
        self.systems: SystemPipeline[ChickenInvadersTickContext] = (
            SystemPipeline()
        )
        self.systems.extend(default_systems())
        self.render_system = ChickenInvadersRenderSystem(
            score_display=self.score_display
        )

        self._player_sprite = player_sprite
        self._invader_sprite = invader_sprite
        self._viewport = viewport
        self._rng = random.Random(self.settings.gameplay.seed)
        self._session = 0
        self._shown_score: int | None = None
        self._now = 0.0
        self._dt = 1.0 / self.settings.gameplay.fps

    def on_enter(self):
        self.reset()

    def reset(self):
        """
        Start a fresh session: new player, one new grid, empty collections.
        """
        self._session += 1
        gameplay = self.settings.gameplay
        assets = self.settings.assets

        world = ChickenInvadersWorld(
            entities=[],
            viewport=self._viewport,
            player=Player.spawn(
                self._player_sprite, self._viewport, assets.player_scale
            ),
            invader_sprite=self._invader_sprite,
            rng=self._rng,
            invader_scale=assets.invader_scale,
            egg_interval=gameplay.egg_interval,
            invader_points=gameplay.invader_points,
            game_over_delay_ms=gameplay.game_over_delay_ms,
            session=self._session,
        )
        world.spawn_grid()
        self.world = world
        self.input.clear()
        self._publish_score(force=True)
        logger.debug(f"Session {self._session} started")

    @property
    def running(self) -> bool:
        return self.world.status is GameStatus.RUNNING

    def toggle_pause(self) -> GameStatus:
        """
        Flip between running and paused. Ignored once the game is over.
        """
        w = self.world
        if w.status is GameStatus.RUNNING:
            w.status = GameStatus.PAUSED
            logger.debug("Paused")
        elif w.status is GameStatus.PAUSED:
            w.status = GameStatus.RUNNING
            logger.debug("Resumed")
        return w.status

    def fire(self) -> Bullet | None:
        if not self.running:
            return None
        bullet = Bullet(position=self.world.player.muzzle)
        self.world.bullets.append(bullet)
        return bullet

    def restart(self) -> bool:
        """
        Reset the game if it is over.

        :return: True if a new session started.
        :rtype: bool
        """
        if self.world.status is not GameStatus.OVER:
            return False
        logger.debug("Restarting")
        self.reset()
        return True

    def tick(self, now: float | None = None):
        """
        Run one frame.

        :param now: Current time in milliseconds; used for deferred
            callbacks. Defaults to the last known time.
        :type now: float | None
        """
        if now is not None:
            self._now = now
        self.timers.run_due(self._now)

        ctx = ChickenInvadersTickContext(
            input_frame=InputFrame(frame_index=self.world.frames, dt=self._dt),
            dt=self._dt,
            world=self.world,
            commands=self.commands,
            intent=ChickenInvadersIntent.from_input(self.input),
            renderer=self.renderer,
        )
        self.render_system.step(ctx)

        if not self.world.advancing:
            return

        self.systems.step(ctx)
        for command in self.commands.drain():
            if isinstance(command, ScheduleDeactivation):
                self.timers.call_later(
                    self._now,
                    command.delay_ms,
                    self.deactivate,
                    command.session,
                )
        self._publish_score()

    def deactivate(self, session: int):
        """
        Deferred end of a game: stop advancing the simulation.

        Ignored when a new session started since the call was scheduled.
        """
        w = self.world
        if w.session != session or w.status is not GameStatus.OVER:
            logger.debug(f"Dropping stale deactivation for session {session}")
            return
        w.active = False
        logger.debug(f"Session {session} inactive, final score {w.score}")

    def _publish_score(self, force: bool = False):
        score = self.world.score
        if force or score != self._shown_score:
            self._shown_score = score
            self.score_display.set_score_text(str(score))
