"""
Sample catalog created on first start.
"""

from sqlalchemy.exc import SQLAlchemyError
from datetime import date
import logging

from gameshelf.db import db
from gameshelf.models import Game, Genre, Platform, User
from gameshelf.repositories.game_repository import GameRepository
from gameshelf.repositories.genre_repository import GenreRepository
from gameshelf.repositories.platform_repository import PlatformRepository
from gameshelf.repositories.user_repository import UserRepository

logger = logging.getLogger("main")

ADMIN_USER = {"username": "admin", "email": "admin@games.com", "password": "admin123"}

SAMPLE_GENRES = [
    {"name": "Action", "description": "High-energy games with combat and challenges"},
    {"name": "Adventure", "description": "Story-driven exploration games"},
    {"name": "RPG", "description": "Role-playing games with character development"},
    {"name": "Strategy", "description": "Strategic thinking and planning games"},
    {"name": "Shooter", "description": "First or third-person shooting games"},
    {"name": "Sports", "description": "Athletic and competitive sports games"},
    {"name": "Racing", "description": "Vehicle racing and driving games"},
    {"name": "Puzzle", "description": "Logic and problem-solving games"},
    {"name": "Platform", "description": "Jump and run platform games"},
    {"name": "Fighting", "description": "Combat and martial arts games"},
]

SAMPLE_PLATFORMS = [
    {"name": "PlayStation 5", "manufacturer": "Sony", "release_year": 2020},
    {"name": "Xbox Series X", "manufacturer": "Microsoft", "release_year": 2020},
    {"name": "Nintendo Switch", "manufacturer": "Nintendo", "release_year": 2017},
    {"name": "PC", "manufacturer": "Various", "release_year": None},
    {"name": "PlayStation 4", "manufacturer": "Sony", "release_year": 2013},
    {"name": "Xbox One", "manufacturer": "Microsoft", "release_year": 2013},
    {"name": "Steam Deck", "manufacturer": "Valve", "release_year": 2022},
    {"name": "Mobile", "manufacturer": "Various", "release_year": None},
]

# (genre name, platform name, game fields)
SAMPLE_GAMES = [
    ("Adventure", "Nintendo Switch", {
        "name": "The Legend of Zelda: Breath of the Wild",
        "description": "Open-world adventure game set in Hyrule",
        "rating": 9.7,
        "release_date": date(2017, 3, 3),
        "developer": "Nintendo",
        "publisher": "Nintendo",
    }),
    ("RPG", "PC", {
        "name": "Cyberpunk 2077",
        "description": "Futuristic open-world RPG in Night City",
        "rating": 8.2,
        "release_date": date(2020, 12, 10),
        "developer": "CD Projekt Red",
        "publisher": "CD Projekt",
    }),
    ("Action", "PlayStation 5", {
        "name": "Spider-Man: Miles Morales",
        "description": "Superhero action-adventure game",
        "rating": 8.5,
        "release_date": date(2020, 11, 12),
        "developer": "Insomniac Games",
        "publisher": "Sony Interactive Entertainment",
    }),
]


def create_sample_data():
    """
    Fill an empty catalog with sample rows. Best effort: errors are logged and
    never stop the application from starting.
    """
    try:
        user_count = UserRepository.count()
        genre_count = GenreRepository.count()
        platform_count = PlatformRepository.count()

        if user_count > 0 and genre_count > 0 and platform_count > 0:
            logger.info("Sample data already exists, skipping creation...")
            return False

        logger.info("Creating sample data...")

        if user_count == 0:
            admin = User(username=ADMIN_USER["username"], email=ADMIN_USER["email"])
            admin.set_password(ADMIN_USER["password"])
            db.session.add(admin)
            logger.info(f"Admin user created: {ADMIN_USER['email']}")

        if genre_count == 0:
            db.session.add_all(Genre(**fields) for fields in SAMPLE_GENRES)
            logger.info("Sample genres created")

        if platform_count == 0:
            db.session.add_all(Platform(**fields) for fields in SAMPLE_PLATFORMS)
            logger.info("Sample platforms created")

        db.session.flush()

        if GameRepository.count() == 0:
            for genre_name, platform_name, fields in SAMPLE_GAMES:
                genre = Genre.query.filter_by(name=genre_name).first()
                platform = Platform.query.filter_by(name=platform_name).first()
                if genre is None or platform is None:
                    logger.warning(f"Skipping sample game {fields['name']}: missing genre or platform")
                    continue
                db.session.add(Game(genre_id=genre.id, platform_id=platform.id, **fields))
            logger.info("Sample games created")

        db.session.commit()
        logger.info("Sample data creation completed!")
        return True
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error creating sample data: {e}")
        return False
