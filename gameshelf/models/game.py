"""
Model: Game
"""

from gameshelf.db import db, TimestampMixin
from gameshelf.utils import isoformat


class Game(TimestampMixin, db.Model):
    __tablename__ = "games"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)
    rating = db.Column(db.Numeric(3, 1, asdecimal=False))
    release_date = db.Column(db.Date)
    developer = db.Column(db.String(100))
    publisher = db.Column(db.String(100))
    image_url = db.Column(db.String(2048))
    genre_id = db.Column(
        db.Integer, db.ForeignKey("genres.id", ondelete="RESTRICT", onupdate="CASCADE"), nullable=False, index=True
    )
    platform_id = db.Column(
        db.Integer, db.ForeignKey("platforms.id", ondelete="RESTRICT", onupdate="CASCADE"), nullable=False, index=True
    )

    genre = db.relationship("Genre", back_populates="games")
    platform = db.relationship("Platform", back_populates="games")

    __table_args__ = (db.Index("ix_games_rating", "rating"),)

    def to_dict(self, include_genre=True, include_platform=True):
        result = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "rating": self.rating,
            "releaseDate": isoformat(self.release_date),
            "developer": self.developer,
            "publisher": self.publisher,
            "imageUrl": self.image_url,
            "genreId": self.genre_id,
            "platformId": self.platform_id,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_genre:
            result["genre"] = self.genre.summary() if self.genre else None
        if include_platform:
            result["platform"] = self.platform.summary() if self.platform else None
        return result
