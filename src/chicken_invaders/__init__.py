"""
Chicken Invaders: a Space-Invaders style arcade shooter.
"""

__version__ = "0.1.0"
