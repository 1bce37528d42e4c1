"""
Model: User
"""

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from gameshelf.db import db, TimestampMixin
from gameshelf.utils import isoformat


class User(UserMixin, TimestampMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(30), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)

    def set_password(self, password):
        self.password = generate_password_hash(password, method="pbkdf2:sha256")

    def check_password(self, password):
        return check_password_hash(self.password, password)

    def session_projection(self):
        """Identity stored in the server-side session"""
        return {"id": self.id, "username": self.username, "email": self.email}

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
