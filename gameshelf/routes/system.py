"""
System Routes - API info and health probes
"""

from flask import Blueprint
from sqlalchemy.exc import SQLAlchemyError
import logging

from gameshelf.api_responses import success_response, error_response, ErrorCode
from gameshelf.constants import API_ENDPOINTS, API_NAME, BUILD_VERSION
from gameshelf.db import ping_database
from gameshelf.utils import now_utc

logger = logging.getLogger("main")

system_bp = Blueprint("system", __name__)


@system_bp.route("/", methods=["GET"])
def api_info():
    return success_response(
        name=API_NAME,
        version=BUILD_VERSION,
        description="RESTful API for managing games, genres, and platforms",
        endpoints=API_ENDPOINTS,
    )


@system_bp.route("/api/health", methods=["GET"])
def health_check_api():
    """
    Liveness probe. Always 200 while the process serves requests; the database
    check is informational.
    """
    try:
        ping_database()
        database = "ok"
    except SQLAlchemyError as e:
        logger.error(f"Health check database error: {e}")
        database = "unavailable"

    return success_response(
        status="OK",
        message=f"{API_NAME} is running",
        timestamp=now_utc().isoformat(),
        database=database,
    )


@system_bp.route("/api/health/ready", methods=["GET"])
def health_ready_api():
    """
    Readiness probe - 503 until the database answers.
    """
    try:
        ping_database()
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        return error_response(ErrorCode.INTERNAL_ERROR, message="Database unavailable", status_code=503)
    return success_response(status="ready", timestamp=now_utc().isoformat())
