"""
Repository for User database operations
"""

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from gameshelf.db import db
from gameshelf.models.user import User


class UserRepository:
    """Repository for User database operations"""

    @staticmethod
    def get_by_id(id):
        """Get User by ID"""
        return db.session.get(User, id)

    @staticmethod
    def get_by_login(login):
        """Get User whose username or email matches ``login``"""
        return User.query.filter(or_(User.username == login, User.email == login)).first()

    @staticmethod
    def exists_with(username, email):
        """Check whether the username or the email is already taken"""
        return User.query.filter(or_(User.username == username, User.email == email)).count() > 0

    @staticmethod
    def create(username, email, password):
        """Create new User record, hashing the password"""
        try:
            item = User(username=username, email=email)
            item.set_password(password)
            db.session.add(item)
            db.session.commit()
            db.session.refresh(item)
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def count():
        """Count total User records"""
        return User.query.count()
