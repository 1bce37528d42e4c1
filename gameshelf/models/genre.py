"""
Model: Genre
"""

from gameshelf.db import db, TimestampMixin
from gameshelf.utils import isoformat


class Genre(TimestampMixin, db.Model):
    __tablename__ = "genres"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False)
    description = db.Column(db.Text)

    games = db.relationship("Game", back_populates="genre", lazy="select", passive_deletes="all")

    def summary(self):
        return {"id": self.id, "name": self.name, "description": self.description}

    def to_dict(self, games=None, game_count=None):
        result = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if game_count is not None:
            result["gameCount"] = game_count
        if games is not None:
            result["games"] = games
        return result


# Names are unique ignoring case
db.Index("uq_genres_name_lower", db.func.lower(Genre.name), unique=True)
