"""
Game Routes - list, fetch and mutate games
"""

from flask import Blueprint, request
import logging

from gameshelf.api_responses import success_response, handle_api_errors, paginated_response
from gameshelf.exceptions import NotFoundException, ValidationException
from gameshelf.middleware.auth import login_required
from gameshelf.models.game import Game
from gameshelf.query import FilterParam, ListQuery, ListQuerySpec, Operator
from gameshelf.repositories.game_repository import GameRepository
from gameshelf.repositories.genre_repository import GenreRepository
from gameshelf.repositories.platform_repository import PlatformRepository
from gameshelf.schemas import GamePayload, validate_payload
from gameshelf.settings import load_settings
from gameshelf.utils import fits_db_integer, parse_optional_float, parse_optional_int

logger = logging.getLogger("main")

games_bp = Blueprint("games", __name__, url_prefix="/api/games")

GAME_LIST_SPEC = ListQuerySpec(
    model=Game,
    search_columns=("name", "description", "developer", "publisher"),
    sort_columns={
        "name": "name",
        "rating": "rating",
        "releaseDate": "release_date",
        "createdAt": "created_at",
    },
    default_limit=10,
    filters=(
        FilterParam("genreId", "genre_id", Operator.EQ, parse_optional_int),
        FilterParam("platformId", "platform_id", Operator.EQ, parse_optional_int),
        FilterParam("minRating", "rating", Operator.GTE, parse_optional_float),
        FilterParam("maxRating", "rating", Operator.LTE, parse_optional_float),
    ),
)


def _get_game_or_404(game_id):
    game = GameRepository.get_by_id(game_id) if fits_db_integer(game_id) else None
    if game is None:
        raise NotFoundException(f"Game with ID {game_id} not found")
    return game


def _check_references(payload):
    """Referenced genre and platform must exist"""
    if payload.get("genre_id") is not None and GenreRepository.get_by_id(payload["genre_id"]) is None:
        raise ValidationException("Invalid genre ID")
    if payload.get("platform_id") is not None and PlatformRepository.get_by_id(payload["platform_id"]) is None:
        raise ValidationException("Invalid platform ID")


@games_bp.route("", methods=["GET"])
@handle_api_errors("Failed to fetch games")
def list_games():
    """List games with search, filters, sorting and pagination"""
    max_limit = load_settings()["pagination"]["max_limit"]
    list_query = ListQuery.from_args(GAME_LIST_SPEC, request.args, max_limit=max_limit)
    page = GameRepository.get_paged(list_query)
    return paginated_response(
        "games",
        [game.to_dict() for game in page.items],
        total=page.total,
        page=list_query.page,
        limit=list_query.limit,
        filters=list_query.echo(),
    )


@games_bp.route("/<int:game_id>", methods=["GET"])
@handle_api_errors("Failed to fetch game")
def get_game(game_id):
    return success_response(game=_get_game_or_404(game_id).to_dict())


@games_bp.route("", methods=["POST"])
@login_required
@handle_api_errors("Failed to create game")
def create_game():
    payload = validate_payload(GamePayload, request.get_json(silent=True))
    _check_references(payload)

    game = GameRepository.create(**payload)
    logger.info(f"Game {game.id} ({game.name}) created")
    return success_response(message="Game created successfully", status_code=201, game=game.to_dict())


@games_bp.route("/<int:game_id>", methods=["PUT"])
@login_required
@handle_api_errors("Failed to update game")
def update_game(game_id):
    game = _get_game_or_404(game_id)
    payload = validate_payload(GamePayload, request.get_json(silent=True), partial=True)
    _check_references(payload)

    game = GameRepository.update(game, **payload)
    logger.info(f"Game {game.id} updated: {', '.join(sorted(payload)) or 'no changes'}")
    return success_response(message="Game updated successfully", game=game.to_dict())


@games_bp.route("/<int:game_id>", methods=["DELETE"])
@login_required
@handle_api_errors("Failed to delete game")
def delete_game(game_id):
    game = _get_game_or_404(game_id)
    deleted = {"id": game.id, "name": game.name}

    GameRepository.delete(game)
    logger.info(f"Game {deleted['id']} ({deleted['name']}) deleted")
    return success_response(message="Game deleted successfully", deletedGame=deleted)
