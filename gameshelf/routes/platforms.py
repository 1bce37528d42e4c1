"""
Platform Routes - list, fetch and mutate platforms
"""

from flask import Blueprint, request
import logging

from gameshelf.api_responses import success_response, handle_api_errors, paginated_response
from gameshelf.exceptions import ConflictException, DependencyException, NotFoundException
from gameshelf.middleware.auth import login_required
from gameshelf.models.platform import Platform
from gameshelf.query import FilterParam, ListQuery, ListQuerySpec, Operator
from gameshelf.repositories.game_repository import GameRepository
from gameshelf.repositories.platform_repository import PlatformRepository
from gameshelf.schemas import PlatformPayload, validate_payload
from gameshelf.settings import load_settings
from gameshelf.utils import fits_db_integer, is_truthy

logger = logging.getLogger("main")

platforms_bp = Blueprint("platforms", __name__, url_prefix="/api/platforms")

DUPLICATE_NAME = "A platform with this name already exists"

PLATFORM_LIST_SPEC = ListQuerySpec(
    model=Platform,
    search_columns=("name", "manufacturer"),
    sort_columns={
        "name": "name",
        "manufacturer": "manufacturer",
        "releaseYear": "release_year",
        "createdAt": "created_at",
    },
    default_limit=50,
    filters=(FilterParam("manufacturer", "manufacturer", Operator.CONTAINS),),
)


def _get_platform_or_404(platform_id, with_games=False):
    platform = None
    if fits_db_integer(platform_id):
        platform = PlatformRepository.get_by_id(platform_id, with_games=with_games)
    if platform is None:
        raise NotFoundException(f"Platform with ID {platform_id} not found")
    return platform


@platforms_bp.route("", methods=["GET"])
@handle_api_errors("Failed to fetch platforms")
def list_platforms():
    """List platforms, optionally with the number of games on each"""
    max_limit = load_settings()["pagination"]["max_limit"]
    list_query = ListQuery.from_args(PLATFORM_LIST_SPEC, request.args, max_limit=max_limit)
    include_game_count = is_truthy(request.args.get("includeGameCount"))

    page = PlatformRepository.get_paged(list_query)
    counts = PlatformRepository.count_games([p.id for p in page.items]) if include_game_count else {}

    filters = list_query.echo()
    filters["includeGameCount"] = include_game_count
    return paginated_response(
        "platforms",
        [p.to_dict(game_count=counts.get(p.id) if include_game_count else None) for p in page.items],
        total=page.total,
        page=list_query.page,
        limit=list_query.limit,
        filters=filters,
    )


@platforms_bp.route("/<int:platform_id>", methods=["GET"])
@handle_api_errors("Failed to fetch platform")
def get_platform(platform_id):
    include_games = is_truthy(request.args.get("includeGames"))
    platform = _get_platform_or_404(platform_id, with_games=include_games)

    games = None
    if include_games:
        games = [game.to_dict(include_platform=False) for game in platform.games]
    return success_response(platform=platform.to_dict(games=games))


@platforms_bp.route("", methods=["POST"])
@login_required
@handle_api_errors("Failed to create platform", DUPLICATE_NAME)
def create_platform():
    payload = validate_payload(PlatformPayload, request.get_json(silent=True))

    if PlatformRepository.find_by_name(payload["name"]):
        raise ConflictException(DUPLICATE_NAME)

    platform = PlatformRepository.create(**payload)
    logger.info(f"Platform {platform.id} ({platform.name}) created")
    return success_response(message="Platform created successfully", status_code=201, platform=platform.to_dict())


@platforms_bp.route("/<int:platform_id>", methods=["PUT"])
@login_required
@handle_api_errors("Failed to update platform", DUPLICATE_NAME)
def update_platform(platform_id):
    platform = _get_platform_or_404(platform_id)
    payload = validate_payload(PlatformPayload, request.get_json(silent=True), partial=True)

    if "name" in payload and PlatformRepository.find_by_name(payload["name"], exclude_id=platform.id):
        raise ConflictException("Another platform with this name already exists")

    platform = PlatformRepository.update(platform, **payload)
    logger.info(f"Platform {platform.id} updated: {', '.join(sorted(payload)) or 'no changes'}")
    return success_response(message="Platform updated successfully", platform=platform.to_dict())


@platforms_bp.route("/<int:platform_id>", methods=["DELETE"])
@login_required
@handle_api_errors("Failed to delete platform")
def delete_platform(platform_id):
    platform = _get_platform_or_404(platform_id)

    games_count = GameRepository.count_by_platform(platform.id)
    if games_count > 0:
        raise DependencyException(
            f"Cannot delete platform. {games_count} game(s) are using this platform.", games_count=games_count
        )

    deleted = {"id": platform.id, "name": platform.name}
    PlatformRepository.delete(platform)
    logger.info(f"Platform {deleted['id']} ({deleted['name']}) deleted")
    return success_response(message="Platform deleted successfully", deletedPlatform=deleted)
