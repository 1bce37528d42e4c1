"""
Repository for Game database operations
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload
from gameshelf.db import db
from gameshelf.models.game import Game


class GameRepository:
    """Repository for Game database operations"""

    @staticmethod
    def _with_relations(query):
        return query.options(joinedload(Game.genre), joinedload(Game.platform))

    @staticmethod
    def get_by_id(id):
        """Get Game by ID with genre and platform loaded"""
        return db.session.get(Game, id, options=[joinedload(Game.genre), joinedload(Game.platform)])

    @staticmethod
    def get_paged(list_query):
        """Database-level pagination driven by a ListQuery"""
        query = list_query.apply(GameRepository._with_relations(Game.query))
        return query.paginate(page=list_query.page, per_page=list_query.limit, error_out=False, count=True)

    @staticmethod
    def count_by_genre(genre_id):
        """Count games referencing a genre"""
        return Game.query.filter(Game.genre_id == genre_id).count()

    @staticmethod
    def count_by_platform(platform_id):
        """Count games referencing a platform"""
        return Game.query.filter(Game.platform_id == platform_id).count()

    @staticmethod
    def create(**kwargs):
        """Create new Game record"""
        try:
            item = Game(**kwargs)
            db.session.add(item)
            db.session.commit()
            return GameRepository.get_by_id(item.id)
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def update(item, **kwargs):
        """Apply the given fields to a Game record"""
        try:
            for key, value in kwargs.items():
                if hasattr(item, key):
                    setattr(item, key, value)
            db.session.commit()
            # Relations may point at new rows after a genreId/platformId change
            db.session.expire(item)
            return GameRepository.get_by_id(item.id)
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def delete(item):
        """Delete Game record"""
        try:
            db.session.delete(item)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def count():
        """Count total Game records"""
        return Game.query.count()
