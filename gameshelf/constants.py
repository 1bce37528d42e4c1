import os

CONFIG_DIR = os.environ.get('GAMESHELF_CONFIG_DIR', os.path.join(os.getcwd(), 'config'))
DB_FILE = os.path.join(CONFIG_DIR, 'gameshelf.db')
CONFIG_FILE = os.path.join(CONFIG_DIR, 'settings.yaml')
SECRET_KEY_FILE = os.path.join(CONFIG_DIR, '.secret_key')

GAMESHELF_DB = os.environ.get('DATABASE_URL', 'sqlite:///' + DB_FILE)

BUILD_VERSION = '1.0.0'
API_NAME = 'Games Management API'

# Top-level API prefixes, echoed by the catch-all 404 handler
API_ENDPOINTS = {
    'auth': '/api/auth',
    'games': '/api/games',
    'genres': '/api/genres',
    'platforms': '/api/platforms',
    'health': '/api/health',
}

SESSION_COOKIE_NAME = 'gameshelf.sid'

DEFAULT_SETTINGS = {
    "server": {
        "host": "0.0.0.0",
        "port": 3000,
        "environment": "development",
    },
    "session": {
        "backend": "memory",
        "lifetime_hours": 24,
        "cookie_name": SESSION_COOKIE_NAME,
        "redis_url": "redis://localhost:6379/0",
    },
    "pagination": {
        "max_limit": 100,
    },
    "cors": {
        "origins": [
            "http://localhost:5173",
            "http://localhost:3001",
        ],
    },
    "auth": {
        "login_rate_limit": "20 per minute",
    },
    "seed": {
        "sample_data": True,
    },
}

# Field bounds shared by models and payload schemas
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 6
NAME_MIN_LENGTH = 2
CATALOG_NAME_MAX_LENGTH = 50
GAME_NAME_MAX_LENGTH = 100
MANUFACTURER_MAX_LENGTH = 50
CREDIT_MAX_LENGTH = 100
MIN_RELEASE_YEAR = 1970
RELEASE_YEAR_LOOKAHEAD = 5
MIN_RATING = 0.0
MAX_RATING = 10.0

# Largest id/offset the database stores as a signed 64-bit integer
MAX_DB_INTEGER = 2 ** 63 - 1
