"""
API Response Utilities - Standardized error handling and responses
"""

from flask import jsonify
from functools import wraps
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging
import math

from gameshelf.db import db
from gameshelf.exceptions import ConflictException, GameShelfException, InternalException

logger = logging.getLogger(__name__)


# API Error Codes
class ErrorCode:
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    CONFLICT = "CONFLICT"
    DEPENDENCY_ERROR = "DEPENDENCY_ERROR"


def success_response(message=None, status_code=200, **payload):
    """
    Standard success response format for API endpoints
    """
    response = {}

    if message:
        response["message"] = message

    response.update(payload)

    return jsonify(response), status_code


def error_response(error_code=ErrorCode.INTERNAL_ERROR, message=None, status_code=400, **details):
    """
    Standard error response format for API endpoints
    """
    response = {"error": error_code}

    if message:
        response["message"] = message
    elif error_code == ErrorCode.NOT_FOUND:
        response["message"] = "Resource not found"
    elif error_code == ErrorCode.VALIDATION_ERROR:
        response["message"] = "Invalid request parameters"
    elif error_code == ErrorCode.INTERNAL_ERROR:
        response["message"] = "An unexpected error occurred"
    elif error_code == ErrorCode.AUTH_ERROR:
        response["message"] = "Authentication required"
    elif error_code == ErrorCode.CONFLICT:
        response["message"] = "Resource conflict"

    response.update(details)

    return jsonify(response), status_code


def _is_unique_violation(error):
    text = str(getattr(error, "orig", error)).lower()
    return "unique" in text or "duplicate" in text


def handle_api_errors(failure_message="An unexpected error occurred", conflict_message="Resource already exists"):
    """
    Decorator to standardize error handling for API endpoints.

    Domain exceptions become their JSON error body. Database errors roll the
    session back; a unique-constraint violation is reported as a conflict and
    anything else as an internal error carrying ``failure_message``.
    """

    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except GameShelfException as e:
                db.session.rollback()
                return jsonify(e.to_dict()), e.status_code
            except IntegrityError as e:
                db.session.rollback()
                if _is_unique_violation(e):
                    error = ConflictException(conflict_message)
                else:
                    logger.error(f"Integrity error in {f.__name__}: {e}")
                    error = InternalException(failure_message)
                return jsonify(error.to_dict()), error.status_code
            except SQLAlchemyError as e:
                db.session.rollback()
                logger.error(f"Database error in {f.__name__}: {e}", exc_info=True)
                error = InternalException(failure_message)
                return jsonify(error.to_dict()), error.status_code

        return wrapper

    return decorator


def paginated_response(key, items, total, page, limit, filters):
    """
    Standard paginated response format for list endpoints
    """
    response = {
        key: items,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit) if limit else 0,
        },
        "filters": filters,
    }

    return jsonify(response), 200
