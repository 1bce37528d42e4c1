"""
GameShelf - Custom Exceptions and Exception Handlers
"""
import structlog
from flask import jsonify, request
from werkzeug.exceptions import HTTPException, NotFound

from gameshelf.constants import API_ENDPOINTS

logger = structlog.get_logger('exceptions')


class GameShelfException(Exception):
    """Base exception for GameShelf"""
    status_code = 400

    def __init__(self, message: str, code: str = "GAMESHELF_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self):
        return {
            'error': self.code,
            'message': self.message
        }


class ValidationException(GameShelfException):
    """Malformed, missing or out-of-range input"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")
        logger.warning(f"Validation error: {message}")


class AuthenticationException(GameShelfException):
    """Missing or invalid credentials or session"""
    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="AUTH_ERROR")
        logger.warning(f"Authentication error: {message}")


class AlreadyAuthenticatedException(GameShelfException):
    """Guest-only route called with a live session"""
    status_code = 400

    def __init__(self, message: str = "User already logged in"):
        super().__init__(message, code="ALREADY_AUTHENTICATED")


class ConflictException(GameShelfException):
    """Unique constraint violation"""
    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")
        logger.warning(f"Conflict: {message}")


class NotFoundException(GameShelfException):
    """Unknown id"""
    status_code = 404

    def __init__(self, message: str):
        super().__init__(message, code="NOT_FOUND")


class DependencyException(GameShelfException):
    """Delete blocked by rows that still reference the target"""
    status_code = 400

    def __init__(self, message: str, games_count: int):
        self.games_count = games_count
        super().__init__(message, code="DEPENDENCY_ERROR")
        logger.warning(f"Dependency error: {message}")

    def to_dict(self):
        result = super().to_dict()
        result['gamesCount'] = self.games_count
        return result


class InternalException(GameShelfException):
    """Unexpected persistence or logic fault"""
    status_code = 500

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message, code="INTERNAL_ERROR")
        logger.error(f"Internal error: {message}")


def register_exception_handlers(app, expose_errors=True):
    """Register exception handlers with Flask app"""

    @app.errorhandler(GameShelfException)
    def handle_gameshelf_exception(e):
        """Handle GameShelf custom exceptions"""
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(NotFound)
    def handle_not_found(e):
        """Catch-all for unknown routes"""
        return jsonify({
            'error': 'NOT_FOUND',
            'message': f"Cannot {request.method} {request.path}",
            'availableEndpoints': list(API_ENDPOINTS.values())
        }), 404

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Handle HTTP exceptions"""
        return jsonify({
            'error': e.name.upper().replace(' ', '_'),
            'message': e.description
        }), e.code

    @app.errorhandler(Exception)
    def handle_generic_exception(e):
        """Handle all other exceptions"""
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return jsonify({
            'error': 'INTERNAL_ERROR',
            'message': str(e) if expose_errors else 'Something went wrong'
        }), 500
