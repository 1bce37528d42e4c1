from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from sqlalchemy import event, text
from sqlalchemy.engine import Engine
import logging

from gameshelf.utils import now_utc

# Retrieve main logger
logger = logging.getLogger("main")

db = SQLAlchemy()
migrate = Migrate()


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enforce foreign keys on SQLite connections"""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=now_utc, nullable=False)
    updated_at = db.Column(db.DateTime, default=now_utc, onupdate=now_utc, nullable=False)


def init_db(app):
    """Create missing tables for every registered model"""
    # Models must be imported so their tables are part of the metadata
    from gameshelf import models  # noqa: F401

    with app.app_context():
        db.create_all()
        logger.info(f"Database synchronized ({app.config['SQLALCHEMY_DATABASE_URI'].split('://')[0]})")


def ping_database():
    db.session.execute(text("SELECT 1"))
