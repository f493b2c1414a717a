"""In-memory movie store honouring the MoviesRepo contract."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from movierama_api.models.movies import Movie, MovieSort
from movierama_api.models.reactions import (
    ReactionKind,
    UserReaction,
    counter_delta,
)


class InMemoryMoviesRepo:
    def __init__(self) -> None:
        self.movies: Dict[str, Movie] = {}
        self.counter_calls: List[tuple] = []
        self.transactions: List[bool] = []
        # failure injection
        self.counter_error: Optional[Exception] = None
        self.save_error: Optional[Exception] = None
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    @asynccontextmanager
    async def transaction(self, enabled: bool = True):
        self.transactions.append(enabled)
        yield None

    async def insert(self, title: str, description: str,
                     published_by: str) -> str:
        if any(m.title == title for m in self.movies.values()):
            raise DuplicateKeyError("E11000 duplicate key: title")
        self._clock += timedelta(seconds=1)
        movie_id = str(ObjectId())
        self.movies[movie_id] = Movie(
            movie_id=movie_id,
            title=title,
            description=description,
            published_by=published_by,
            published_at=self._clock,
        )
        return movie_id

    async def load(self, movie_id: str, *, session=None) -> Optional[Movie]:
        movie = self.movies.get(movie_id)
        snapshot = None if movie is None else movie.model_copy(deep=True)
        # let concurrent callers interleave between read and write
        await asyncio.sleep(0)
        return snapshot

    async def list_movies(self, limit: int, offset: int,
                          sort: MovieSort = MovieSort.new,
                          published_by: Optional[str] = None) -> List[Movie]:
        items = [m for m in self.movies.values()
                 if published_by is None or m.published_by == published_by]
        if sort is MovieSort.likes:
            items.sort(key=lambda m: (m.likes, m.published_at), reverse=True)
        elif sort is MovieSort.hates:
            items.sort(key=lambda m: (m.hates, m.published_at), reverse=True)
        else:
            items.sort(key=lambda m: m.published_at, reverse=True)
        return [m.model_copy(update={"reactions": []})
                for m in items[offset:offset + limit]]

    async def count_movies(self, published_by: Optional[str] = None) -> int:
        return sum(1 for m in self.movies.values()
                   if published_by is None or m.published_by == published_by)

    async def save_reactions(self, movie_id: str,
                             reactions: List[UserReaction],
                             expected_version: int, *, session=None) -> bool:
        if self.save_error is not None:
            raise self.save_error
        movie = self.movies.get(movie_id)
        if movie is None or movie.version != expected_version:
            return False
        movie.reactions = [r.model_copy() for r in reactions]
        movie.version += 1
        return True

    async def adjust_counters(self, movie_id: str, like_delta: int = 0,
                              hate_delta: int = 0, *, session=None) -> bool:
        self.counter_calls.append((movie_id, like_delta, hate_delta))
        if self.counter_error is not None:
            raise self.counter_error
        movie = self.movies.get(movie_id)
        if movie is None:
            return False
        if movie.likes + like_delta < 0 or movie.hates + hate_delta < 0:
            return False
        movie.likes += like_delta
        movie.hates += hate_delta
        return True

    async def increment_counter(self, movie_id: str, kind: ReactionKind,
                                *, session=None) -> bool:
        like_delta, hate_delta = counter_delta(kind, 1)
        return await self.adjust_counters(movie_id, like_delta, hate_delta)

    async def decrement_counter(self, movie_id: str, kind: ReactionKind,
                                *, session=None) -> bool:
        like_delta, hate_delta = counter_delta(kind, -1)
        return await self.adjust_counters(movie_id, like_delta, hate_delta)

    async def set_counters(self, movie_id: str, likes: int, hates: int,
                           expected_version: int) -> bool:
        movie = self.movies.get(movie_id)
        if movie is None or movie.version != expected_version:
            return False
        movie.likes, movie.hates = likes, hates
        return True
