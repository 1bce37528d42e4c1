"""
Models package

One module per table:
- user.py
- genre.py
- platform.py
- game.py
"""

from .user import User
from .genre import Genre
from .platform import Platform
from .game import Game

__all__ = [
    "User",
    "Genre",
    "Platform",
    "Game",
]
