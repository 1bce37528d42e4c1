"""
GameShelf - REST backend for tracking games, genres and platforms.

Layout:

  gameshelf/models/: SQLAlchemy models (User, Genre, Platform, Game).
  gameshelf/repositories/: database queries per model.
  gameshelf/routes/: Flask blueprints under /api.
  gameshelf/query.py: list query specification (search, filters, sort, paging).
  gameshelf/schemas.py: request payload validation.
  gameshelf/sessions.py: server-side session store behind the session cookie.
"""

__version__ = "1.0.0"
