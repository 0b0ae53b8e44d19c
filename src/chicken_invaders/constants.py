"""
Constants for the game.
"""

from __future__ import annotations

TITLE = "Chicken Invaders"

FPS = 60
WINDOW_SIZE = (1280, 720)
BACKGROUND_COLOR = (30, 30, 30)

# Player
PLAYER_SIZE = (128, 128)
PLAYER_SPEED = 15.0
PLAYER_BOTTOM_MARGIN = 20.0
MUZZLE_OFFSET_Y = 20.0

# Invader grid
INVADER_SCALE = 0.1
GRID_ORIGIN = (10.0, 10.0)
GRID_SPEED = 8.0
GRID_COLUMNS = (3, 7)
GRID_ROWS = (2, 4)
GRID_SPACING = (105.0, 80.0)

# Projectiles
BULLET_SPEED = 15.0
BULLET_RADIUS = 5.0
BULLET_COLOR = (240, 240, 240)
EGG_SPEED = 15.0
EGG_RADIUS = 5.0
EGG_COLOR = (40, 200, 70)
EGG_INTERVAL = 50

# Particles
PARTICLE_COUNT = 15
PARTICLE_FADE = 0.01
PARTICLE_MAX_RADIUS = 2.0
INVADER_PARTICLE_COLOR = (255, 214, 0)
PLAYER_PARTICLE_COLOR = (255, 255, 255)

# Scoring / state
INVADER_POINTS = 10
GAME_OVER_DELAY_MS = 2000

TEXT_COLOR = (235, 235, 235)
OVERLAY_COLOR = (0, 0, 0)
