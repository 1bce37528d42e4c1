"""
Model: Platform
"""

from gameshelf.db import db, TimestampMixin
from gameshelf.utils import isoformat


class Platform(TimestampMixin, db.Model):
    __tablename__ = "platforms"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False)
    manufacturer = db.Column(db.String(50))
    release_year = db.Column(db.Integer)

    games = db.relationship("Game", back_populates="platform", lazy="select", passive_deletes="all")

    def summary(self):
        return {
            "id": self.id,
            "name": self.name,
            "manufacturer": self.manufacturer,
            "releaseYear": self.release_year,
        }

    def to_dict(self, games=None, game_count=None):
        result = {
            "id": self.id,
            "name": self.name,
            "manufacturer": self.manufacturer,
            "releaseYear": self.release_year,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if game_count is not None:
            result["gameCount"] = game_count
        if games is not None:
            result["games"] = games
        return result


# Names are unique ignoring case
db.Index("uq_platforms_name_lower", db.func.lower(Platform.name), unique=True)
