"""
Genre Routes - list, fetch and mutate genres
"""

from flask import Blueprint, request
import logging

from gameshelf.api_responses import success_response, handle_api_errors, paginated_response
from gameshelf.exceptions import ConflictException, DependencyException, NotFoundException
from gameshelf.middleware.auth import login_required
from gameshelf.models.genre import Genre
from gameshelf.query import ListQuery, ListQuerySpec
from gameshelf.repositories.game_repository import GameRepository
from gameshelf.repositories.genre_repository import GenreRepository
from gameshelf.schemas import GenrePayload, validate_payload
from gameshelf.settings import load_settings
from gameshelf.utils import fits_db_integer, is_truthy

logger = logging.getLogger("main")

genres_bp = Blueprint("genres", __name__, url_prefix="/api/genres")

DUPLICATE_NAME = "A genre with this name already exists"

GENRE_LIST_SPEC = ListQuerySpec(
    model=Genre,
    search_columns=("name", "description"),
    sort_columns={"name": "name", "createdAt": "created_at"},
    default_limit=50,
)


def _get_genre_or_404(genre_id, with_games=False):
    genre = None
    if fits_db_integer(genre_id):
        genre = GenreRepository.get_by_id(genre_id, with_games=with_games)
    if genre is None:
        raise NotFoundException(f"Genre with ID {genre_id} not found")
    return genre


@genres_bp.route("", methods=["GET"])
@handle_api_errors("Failed to fetch genres")
def list_genres():
    """List genres, optionally with the number of games in each"""
    max_limit = load_settings()["pagination"]["max_limit"]
    list_query = ListQuery.from_args(GENRE_LIST_SPEC, request.args, max_limit=max_limit)
    include_game_count = is_truthy(request.args.get("includeGameCount"))

    page = GenreRepository.get_paged(list_query)
    counts = GenreRepository.count_games([g.id for g in page.items]) if include_game_count else {}

    filters = list_query.echo()
    filters["includeGameCount"] = include_game_count
    return paginated_response(
        "genres",
        [g.to_dict(game_count=counts.get(g.id) if include_game_count else None) for g in page.items],
        total=page.total,
        page=list_query.page,
        limit=list_query.limit,
        filters=filters,
    )


@genres_bp.route("/<int:genre_id>", methods=["GET"])
@handle_api_errors("Failed to fetch genre")
def get_genre(genre_id):
    include_games = is_truthy(request.args.get("includeGames"))
    genre = _get_genre_or_404(genre_id, with_games=include_games)

    games = None
    if include_games:
        games = [game.to_dict(include_genre=False) for game in genre.games]
    return success_response(genre=genre.to_dict(games=games))


@genres_bp.route("", methods=["POST"])
@login_required
@handle_api_errors("Failed to create genre", DUPLICATE_NAME)
def create_genre():
    payload = validate_payload(GenrePayload, request.get_json(silent=True))

    if GenreRepository.find_by_name(payload["name"]):
        raise ConflictException(DUPLICATE_NAME)

    genre = GenreRepository.create(**payload)
    logger.info(f"Genre {genre.id} ({genre.name}) created")
    return success_response(message="Genre created successfully", status_code=201, genre=genre.to_dict())


@genres_bp.route("/<int:genre_id>", methods=["PUT"])
@login_required
@handle_api_errors("Failed to update genre", DUPLICATE_NAME)
def update_genre(genre_id):
    genre = _get_genre_or_404(genre_id)
    payload = validate_payload(GenrePayload, request.get_json(silent=True), partial=True)

    if "name" in payload and GenreRepository.find_by_name(payload["name"], exclude_id=genre.id):
        raise ConflictException("Another genre with this name already exists")

    genre = GenreRepository.update(genre, **payload)
    logger.info(f"Genre {genre.id} updated: {', '.join(sorted(payload)) or 'no changes'}")
    return success_response(message="Genre updated successfully", genre=genre.to_dict())


@genres_bp.route("/<int:genre_id>", methods=["DELETE"])
@login_required
@handle_api_errors("Failed to delete genre")
def delete_genre(genre_id):
    genre = _get_genre_or_404(genre_id)

    games_count = GameRepository.count_by_genre(genre.id)
    if games_count > 0:
        raise DependencyException(
            f"Cannot delete genre. {games_count} game(s) are using this genre.", games_count=games_count
        )

    deleted = {"id": genre.id, "name": genre.name}
    GenreRepository.delete(genre)
    logger.info(f"Genre {deleted['id']} ({deleted['name']}) deleted")
    return success_response(message="Genre deleted successfully", deletedGenre=deleted)
