"""
Repositories package

Each repository encapsulates database operations for a model:
- user_repository.py
- genre_repository.py
- platform_repository.py
- game_repository.py

Usage:
    from gameshelf.repositories.game_repository import GameRepository
    game = GameRepository.get_by_id(1)
"""
