"""
Repository for Platform database operations
"""

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from gameshelf.db import db
from gameshelf.models.game import Game
from gameshelf.models.platform import Platform


class PlatformRepository:
    """Repository for Platform database operations"""

    @staticmethod
    def get_by_id(id, with_games=False):
        """Get Platform by ID, optionally loading its games and their genres"""
        options = [selectinload(Platform.games).joinedload(Game.genre)] if with_games else []
        return db.session.get(Platform, id, options=options)

    @staticmethod
    def get_paged(list_query):
        """Database-level pagination driven by a ListQuery"""
        query = list_query.apply(Platform.query)
        return query.paginate(page=list_query.page, per_page=list_query.limit, error_out=False, count=True)

    @staticmethod
    def find_by_name(name, exclude_id=None):
        """Get Platform by name ignoring case"""
        query = Platform.query.filter(func.lower(Platform.name) == name.lower())
        if exclude_id is not None:
            query = query.filter(Platform.id != exclude_id)
        return query.first()

    @staticmethod
    def count_games(ids):
        """Map platform id -> number of games, for the given platform ids"""
        if not ids:
            return {}
        rows = (
            db.session.query(Game.platform_id, func.count(Game.id))
            .filter(Game.platform_id.in_(ids))
            .group_by(Game.platform_id)
            .all()
        )
        counts = {id: 0 for id in ids}
        counts.update({platform_id: count for platform_id, count in rows})
        return counts

    @staticmethod
    def create(**kwargs):
        """Create new Platform record"""
        try:
            item = Platform(**kwargs)
            db.session.add(item)
            db.session.commit()
            db.session.refresh(item)
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def update(item, **kwargs):
        """Apply the given fields to a Platform record"""
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
        """Delete Platform record"""
        try:
            db.session.delete(item)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def count():
        """Count total Platform records"""
        return Platform.query.count()
