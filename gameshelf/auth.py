from flask import Blueprint, current_app, request, session
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager, login_user, logout_user
import logging

from gameshelf.api_responses import success_response, handle_api_errors
from gameshelf.exceptions import (
    AuthenticationException,
    ConflictException,
    InternalException,
    NotFoundException,
    ValidationException,
)
from gameshelf.middleware.auth import SESSION_USER_KEY, guest_required, session_required, session_user
from gameshelf.repositories.user_repository import UserRepository
from gameshelf.schemas import LoginPayload, RegistrationPayload, validate_payload
from gameshelf.sessions import SessionStoreError
from gameshelf.settings import load_settings
from gameshelf.utils import sanitize_sensitive_data

# Retrieve main logger
logger = logging.getLogger("main")

INVALID_CREDENTIALS = "Invalid username or password"

auth_blueprint = Blueprint("auth", __name__, url_prefix="/api/auth")

login_manager = LoginManager()
limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")


@login_manager.user_loader
def load_user(user_id):
    """Load user for Flask-Login"""
    return UserRepository.get_by_id(int(user_id))


def auth_rate_limit():
    return load_settings()["auth"]["login_rate_limit"]


@auth_blueprint.route("/register", methods=["POST"])
@limiter.limit(auth_rate_limit)
@guest_required
@handle_api_errors("Failed to register user", "Username or email already taken")
def register():
    data = request.get_json(silent=True)
    try:
        payload = validate_payload(RegistrationPayload, data)
    except ValidationException:
        logger.info(f"Rejected registration: {sanitize_sensitive_data(data)}")
        raise

    if UserRepository.exists_with(payload["username"], payload["email"]):
        raise ConflictException("Username or email already taken")

    user = UserRepository.create(payload["username"], payload["email"], payload["password"])
    logger.info(f"Registered new user {user.username}")

    result = user.to_dict()
    result.pop("updatedAt")
    return success_response(message="User registered successfully", status_code=201, user=result)


@auth_blueprint.route("/login", methods=["POST"])
@limiter.limit(auth_rate_limit)
@guest_required
@handle_api_errors("Failed to login")
def login():
    payload = validate_payload(LoginPayload, request.get_json(silent=True))

    user = UserRepository.get_by_login(payload["username"])

    # Same answer for unknown user and wrong password
    if not user or not user.check_password(payload["password"]):
        logger.warning(f"Incorrect login for user {payload['username']}")
        raise AuthenticationException(INVALID_CREDENTIALS)

    try:
        current_app.session_interface.regenerate(session)
    except SessionStoreError as e:
        logger.error(f"Session store failure during login: {e}")
        raise InternalException("Failed to login")

    login_user(user)
    session.permanent = True
    session[SESSION_USER_KEY] = user.session_projection()

    logger.info(f"Successful login for user {user.username}")
    return success_response(message="Login successful", user=user.session_projection())


@auth_blueprint.route("/logout", methods=["POST"])
@session_required
def logout():
    username = session_user()["username"]
    logout_user()
    try:
        current_app.session_interface.destroy(session)
    except SessionStoreError as e:
        logger.error(f"Logout error: {e}")
        raise InternalException("Failed to logout")

    logger.info(f"User {username} logged out")
    return success_response(message="Logout successful")


@auth_blueprint.route("/me", methods=["GET"])
@session_required
@handle_api_errors("Failed to get user information")
def me():
    user = UserRepository.get_by_id(session_user()["id"])
    if user is None:
        raise NotFoundException("User session is invalid")
    return success_response(user=user.to_dict())


@auth_blueprint.route("/status", methods=["GET"])
def status():
    user = session_user()
    return success_response(isAuthenticated=user is not None, user=user)
