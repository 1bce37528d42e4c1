import logging
import math
import os
import re
from datetime import datetime, timezone

from gameshelf.constants import MAX_DB_INTEGER


# Custom logging formatter to support colors
class ColoredFormatter(logging.Formatter):
    # Define color codes
    COLORS = {
        'DEBUG': '\033[94m',   # Blue
        'INFO': '\033[92m',    # Green
        'WARNING': '\033[93m', # Yellow
        'ERROR': '\033[91m',   # Red
        'CRITICAL': '\033[95m' # Magenta
    }
    RESET = '\033[0m'  # Reset color

    def format(self, record):
        # Add color to the log level name
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        return super().format(record)


# Filter to remove date from http access logs
class FilterRemoveDateFromWerkzeugLogs(logging.Filter):
    # '192.168.0.102 - - [30/Jun/2024 01:14:03] "%s" %s %s' -> '192.168.0.102 - "%s" %s %s'
    pattern: re.Pattern = re.compile(r' - - \[.+?] "')

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self.pattern.sub(' - "', record.msg)
        return True


def get_or_create_secret_key():
    """
    Generate or load a persistent secret key for Flask sessions.
    The key is stored in CONFIG_DIR/.secret_key with restricted permissions.

    Returns:
        str: 64-character hex secret key
    """
    import secrets
    from gameshelf.constants import CONFIG_DIR, SECRET_KEY_FILE

    logger = logging.getLogger('main')

    env_key = os.environ.get('SECRET_KEY')
    if env_key:
        return env_key

    # Try to load existing key
    if os.path.exists(SECRET_KEY_FILE):
        try:
            with open(SECRET_KEY_FILE, 'r') as f:
                key = f.read().strip()
                if len(key) == 64:  # Validate key length
                    return key
                logger.warning("Invalid secret key found, generating new one")
        except OSError as e:
            logger.error(f"Error reading secret key: {e}")

    # Generate new key
    key = secrets.token_hex(32)  # 32 bytes = 64 hex chars

    try:
        os.makedirs(CONFIG_DIR, exist_ok=True)

        with open(SECRET_KEY_FILE, 'w') as f:
            f.write(key)

        # Set file permissions to 600 (owner read/write only)
        os.chmod(SECRET_KEY_FILE, 0o600)

        logger.info("Generated new secret key and saved to disk")
    except OSError as e:
        logger.error(f"Error saving secret key: {e}")
        logger.warning("Using non-persistent secret key")

    return key


def sanitize_sensitive_data(data, sensitive_keys=None):
    """
    Mask credentials in a request payload before logging it.
    """
    if sensitive_keys is None:
        sensitive_keys = ['password', 'secret', 'token', 'session']

    if isinstance(data, dict):
        sanitized = {}
        for k, v in data.items():
            if any(sens in str(k).lower() for sens in sensitive_keys):
                sanitized[k] = "***"
            elif isinstance(v, (dict, list)):
                sanitized[k] = sanitize_sensitive_data(v, sensitive_keys)
            else:
                sanitized[k] = v
        return sanitized

    if isinstance(data, list):
        return [sanitize_sensitive_data(item, sensitive_keys) for item in data]

    return data


def now_utc():
    """Returns current datetime in UTC (aware)"""
    return datetime.now(timezone.utc)


def isoformat(value):
    """Serialize a date/datetime column value, passing None through"""
    if value is None:
        return None
    return value.isoformat()


def fits_db_integer(value):
    """True when ``value`` can be bound as a signed 64-bit database integer"""
    return -MAX_DB_INTEGER - 1 <= value <= MAX_DB_INTEGER


def parse_positive_int(value, default):
    """Coerce a query-string value to a positive int, falling back to default"""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return min(parsed, MAX_DB_INTEGER) if parsed > 0 else default


def parse_optional_int(value):
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    return parsed if fits_db_integer(parsed) else None


def parse_optional_float(value):
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def is_truthy(value):
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')
