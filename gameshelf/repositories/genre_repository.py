"""
Repository for Genre database operations
"""

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from gameshelf.db import db
from gameshelf.models.game import Game
from gameshelf.models.genre import Genre


class GenreRepository:
    """Repository for Genre database operations"""

    @staticmethod
    def get_by_id(id, with_games=False):
        """Get Genre by ID, optionally loading its games and their platforms"""
        options = [selectinload(Genre.games).joinedload(Game.platform)] if with_games else []
        return db.session.get(Genre, id, options=options)

    @staticmethod
    def get_paged(list_query):
        """Database-level pagination driven by a ListQuery"""
        query = list_query.apply(Genre.query)
        return query.paginate(page=list_query.page, per_page=list_query.limit, error_out=False, count=True)

    @staticmethod
    def find_by_name(name, exclude_id=None):
        """Get Genre by name ignoring case"""
        query = Genre.query.filter(func.lower(Genre.name) == name.lower())
        if exclude_id is not None:
            query = query.filter(Genre.id != exclude_id)
        return query.first()

    @staticmethod
    def count_games(ids):
        """Map genre id -> number of games, for the given genre ids"""
        if not ids:
            return {}
        rows = (
            db.session.query(Game.genre_id, func.count(Game.id))
            .filter(Game.genre_id.in_(ids))
            .group_by(Game.genre_id)
            .all()
        )
        counts = {id: 0 for id in ids}
        counts.update({genre_id: count for genre_id, count in rows})
        return counts

    @staticmethod
    def create(**kwargs):
        """Create new Genre record"""
        try:
            item = Genre(**kwargs)
            db.session.add(item)
            db.session.commit()
            db.session.refresh(item)
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def update(item, **kwargs):
        """Apply the given fields to a Genre record"""
        try:
            for key, value in kwargs.items():
                if hasattr(item, key):
                    setattr(item, key, value)
            db.session.commit()
            db.session.refresh(item)
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def delete(item):
        """Delete Genre record"""
        try:
            db.session.delete(item)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def count():
        """Count total Genre records"""
        return Genre.query.count()
