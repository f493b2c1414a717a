"""Service layer for publishing and listing movies."""

from __future__ import annotations

import logging
from typing import Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from movierama_api.models.movies import (
    MovieCreateRequest,
    MovieCreateResponse,
    MovieItem,
    MovieListResponse,
    MovieSort,
)
from movierama_api.models.reactions import ReactionKind
from movierama_api.services.errors import (
    ConcurrencyConflict,
    MovieAlreadyExists,
    MovieNotFound,
)
from movierama_api.services.repositories.movies_repo import MoviesRepo

logger = logging.getLogger(__name__)


class MoviesService:
    """Publish, read, list and recount movies."""

    def __init__(self, repo: MoviesRepo) -> None:
        self.repo = repo

    async def create_movie(
            self,
            user_id: str,
            data: MovieCreateRequest) -> MovieCreateResponse:
        """Publish a movie on behalf of ``user_id``."""
        try:
            movie_id = await self.repo.insert(
                title=data.title,
                description=data.description,
                published_by=user_id,
            )
        except DuplicateKeyError as error:
            raise MovieAlreadyExists() from error
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_movie_create_error: {error}') from error
        logger.info('movie_published', extra={'movie_id': movie_id})
        return MovieCreateResponse(movie_id=movie_id)

    async def get_movie(self, movie_id: str) -> MovieItem:
        try:
            movie = await self.repo.load(movie_id)
        except PyMongoError as error:
            raise RuntimeError(f'mongo_movie_get_error: {error}') from error
        if movie is None:
            raise MovieNotFound()
        return MovieItem.from_movie(movie)

    async def list_movies(
        self,
        limit: int = 20,
        offset: int = 0,
        sort: MovieSort = MovieSort.new,
        published_by: Optional[str] = None,
    ) -> MovieListResponse:
        """List movies with pagination, newest or most liked/hated first."""
        try:
            movies = await self.repo.list_movies(
                limit, offset, sort=sort, published_by=published_by)
            total = await self.repo.count_movies(published_by=published_by)
        except PyMongoError as error:
            raise RuntimeError(f'mongo_movie_list_error: {error}') from error
        return MovieListResponse(
            items=[MovieItem.from_movie(m) for m in movies],
            total=total,
        )

    async def recount_counters(self, movie_id: str) -> MovieItem:
        """Rebuild likes/hates from the reaction set to repair drift."""
        try:
            movie = await self.repo.load(movie_id)
            if movie is None:
                raise MovieNotFound()
            likes = movie.count(ReactionKind.like)
            hates = movie.count(ReactionKind.hate)
            saved = await self.repo.set_counters(
                movie_id, likes, hates, expected_version=movie.version)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_movie_recount_error: {error}') from error
        if not saved:
            raise ConcurrencyConflict(
                'Movie was modified concurrently, retry.')
        logger.info(
            'counters_recounted',
            extra={'movie_id': movie_id,
                   'likes_before': movie.likes, 'likes': likes,
                   'hates_before': movie.hates, 'hates': hates})
        return MovieItem.from_movie(
            movie.model_copy(update={'likes': likes, 'hates': hates}))
