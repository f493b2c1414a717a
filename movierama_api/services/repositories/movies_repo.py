"""Mongo repository for movies, their reactions and counters."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClientSession, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from movierama_api.models.movies import Movie, MovieSort
from movierama_api.models.reactions import (
    ReactionKind,
    UserReaction,
    counter_delta,
)

SORTS = {
    MovieSort.new: [('published_at', DESCENDING), ('_id', DESCENDING)],
    MovieSort.likes: [('likes', DESCENDING), ('published_at', DESCENDING)],
    MovieSort.hates: [('hates', DESCENDING), ('published_at', DESCENDING)],
}


def to_object_id(movie_id: str) -> Optional[ObjectId]:
    """Parse a movie id; malformed ids simply match nothing."""
    try:
        return ObjectId(movie_id)
    except (InvalidId, TypeError):
        return None


def reaction_count_expr(kind: ReactionKind) -> Dict[str, Any]:
    """Aggregation expression counting the reactions of ``kind``."""
    return {'$size': {'$filter': {
        'input': {'$ifNull': ['$reactions', []]},
        'as': 'r',
        'cond': {'$eq': ['$$r.reaction', kind.value]},
    }}}


class MoviesRepo:
    """Movie store: versioned reaction writes and atomic counter updates."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.col = db['movies']

    @property
    def client(self):
        """Expose motor client to open transactions."""
        return self.col.database.client

    @staticmethod
    def _to_movie(doc: Dict[str, Any]) -> Movie:
        return Movie(
            movie_id=str(doc['_id']),
            title=doc['title'],
            description=doc['description'],
            published_by=doc['published_by'],
            published_at=doc['published_at'],
            likes=int(doc.get('likes', 0)),
            hates=int(doc.get('hates', 0)),
            reactions=[
                UserReaction(**item) for item in doc.get('reactions', [])
            ],
            version=int(doc.get('version', 0)),
        )

    async def ensure_indexes(self) -> None:
        """Create indexes: unique title, publisher listing, counter sorts."""
        await self.col.create_index(
            [('title', ASCENDING)], unique=True, name='movies_title')
        await self.col.create_index(
            [('published_by', ASCENDING), ('published_at', DESCENDING)],
            name='movies_publisher_published_desc',
        )
        await self.col.create_index(
            [('published_at', DESCENDING)], name='movies_published_desc')
        await self.col.create_index(
            [('likes', DESCENDING), ('published_at', DESCENDING)],
            name='movies_likes_desc',
        )
        await self.col.create_index(
            [('hates', DESCENDING), ('published_at', DESCENDING)],
            name='movies_hates_desc',
        )

    @asynccontextmanager
    async def transaction(
        self,
        enabled: bool = True,
    ) -> AsyncIterator[Optional[AsyncIOMotorClientSession]]:
        """Yield a session inside a transaction, or None when disabled."""
        if not enabled:
            yield None
            return
        async with await self.client.start_session() as session:
            async with session.start_transaction():
                yield session

    # ---------- MOVIES ----------

    async def insert(
        self,
        title: str,
        description: str,
        published_by: str,
    ) -> str:
        """Insert a new movie with zeroed counters; return its id."""
        doc = {
            'title': title,
            'description': description,
            'published_by': published_by,
            'published_at': datetime.now(timezone.utc),
            'likes': 0,
            'hates': 0,
            'reactions': [],
            'version': 0,
        }
        result = await self.col.insert_one(doc)
        return str(result.inserted_id)

    async def load(self, movie_id: str, *, session=None) -> Optional[Movie]:
        """Load a movie with its full reaction set."""
        oid = to_object_id(movie_id)
        if oid is None:
            return None
        doc = await self.col.find_one({'_id': oid}, session=session)
        return None if doc is None else self._to_movie(doc)

    async def list_movies(
        self,
        limit: int,
        offset: int,
        sort: MovieSort = MovieSort.new,
        published_by: Optional[str] = None,
    ) -> List[Movie]:
        """List movies without their reaction sets."""
        query = {} if published_by is None else {'published_by': published_by}
        cursor = (
            self.col.find(query, {'reactions': 0})
            .sort(SORTS[sort])
            .skip(offset)
            .limit(limit)
        )
        return [self._to_movie(doc) async for doc in cursor]

    async def count_movies(self, published_by: Optional[str] = None) -> int:
        query = {} if published_by is None else {'published_by': published_by}
        return await self.col.count_documents(query)

    # ---------- REACTIONS ----------

    async def save_reactions(
        self,
        movie_id: str,
        reactions: List[UserReaction],
        expected_version: int,
        *,
        session=None,
    ) -> bool:
        """Replace the reaction set if nobody wrote it since it was loaded."""
        oid = to_object_id(movie_id)
        if oid is None:
            return False
        result = await self.col.update_one(
            {'_id': oid, 'version': expected_version},
            {
                '$set': {
                    'reactions': [r.model_dump(mode='json')
                                  for r in reactions],
                },
                '$inc': {'version': 1},
            },
            session=session,
        )
        return result.matched_count == 1

    # ---------- COUNTERS ----------

    async def adjust_counters(
        self,
        movie_id: str,
        like_delta: int = 0,
        hate_delta: int = 0,
        *,
        session=None,
    ) -> bool:
        """Apply both counter deltas in one $inc.

        Returns False if the movie is gone or a decrement would take a
        counter below zero.
        """
        oid = to_object_id(movie_id)
        if oid is None:
            return False
        query: Dict[str, Any] = {'_id': oid}
        inc: Dict[str, int] = {}
        if like_delta:
            inc['likes'] = like_delta
            if like_delta < 0:
                query['likes'] = {'$gte': -like_delta}
        if hate_delta:
            inc['hates'] = hate_delta
            if hate_delta < 0:
                query['hates'] = {'$gte': -hate_delta}
        if not inc:
            return True
        result = await self.col.update_one(
            query, {'$inc': inc}, session=session)
        return result.matched_count == 1

    async def increment_counter(
        self,
        movie_id: str,
        kind: ReactionKind,
        *,
        session=None,
    ) -> bool:
        like_delta, hate_delta = counter_delta(kind, 1)
        return await self.adjust_counters(
            movie_id, like_delta, hate_delta, session=session)

    async def decrement_counter(
        self,
        movie_id: str,
        kind: ReactionKind,
        *,
        session=None,
    ) -> bool:
        like_delta, hate_delta = counter_delta(kind, -1)
        return await self.adjust_counters(
            movie_id, like_delta, hate_delta, session=session)

    async def set_counters(
        self,
        movie_id: str,
        likes: int,
        hates: int,
        expected_version: int,
    ) -> bool:
        """Overwrite both counters if the reaction set is still the one
        they were counted from."""
        oid = to_object_id(movie_id)
        if oid is None:
            return False
        result = await self.col.update_one(
            {'_id': oid, 'version': expected_version},
            {'$set': {'likes': likes, 'hates': hates}},
        )
        return result.matched_count == 1
