"""Service layer for user reactions (LIKE/HATE) on movies."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from pymongo.errors import PyMongoError

from movierama_api.models.movies import Movie
from movierama_api.models.reactions import ReactionKind
from movierama_api.services.errors import (
    ConcurrencyConflict,
    CounterAdjustmentFailed,
    MovieNotFound,
)
from movierama_api.services.reaction_rules import (
    ReactionChange,
    plan_add,
    plan_remove,
    plan_switch,
)
from movierama_api.services.repositories.movies_repo import MoviesRepo

logger = logging.getLogger(__name__)

TRANSIENT_TXN_LABEL = 'TransientTransactionError'


class ReactionsService:
    """Manage a user's reaction to a movie and keep its counters in sync.

    Per (movie, user) the reaction is NONE, LIKE or HATE. The reaction set
    is written first with an optimistic version check, then the counters
    move with an atomic ``$inc``. A failed counter update surfaces as
    ``CounterAdjustmentFailed``. With transactions enabled it also rolls
    back the reaction write; otherwise the reactions stay written and the
    drift is left to reconciliation.
    """

    def __init__(
            self,
            repo: MoviesRepo,
            use_transactions: bool = True) -> None:
        """Initialize service with a movie store."""
        self.repo = repo
        self.use_transactions = use_transactions

    # ---------- READ ----------

    async def get_reaction(
            self,
            movie_id: str,
            user_id: str) -> Optional[ReactionKind]:
        """Return the user's current reaction, or None."""
        try:
            movie = await self.repo.load(movie_id)
        except PyMongoError as error:
            raise RuntimeError(
                f'mongo_reaction_get_error: {error}') from error
        if movie is None:
            raise MovieNotFound()
        current = movie.reaction_of(user_id)
        return None if current is None else current.reaction

    # ---------- WRITE ----------

    async def add_reaction(
            self,
            movie_id: str,
            user_id: str,
            kind: ReactionKind) -> None:
        """NONE -> LIKED/HATED; one counter increment."""
        await self._apply(
            'reaction_added',
            movie_id,
            user_id,
            lambda movie: plan_add(movie, user_id, kind),
        )

    async def remove_reaction(self, movie_id: str, user_id: str) -> None:
        """LIKED/HATED -> NONE; one counter decrement."""
        await self._apply(
            'reaction_removed',
            movie_id,
            user_id,
            lambda movie: plan_remove(movie, user_id),
        )

    async def switch_reaction(self, movie_id: str, user_id: str) -> None:
        """LIKED <-> HATED; both counters move in a single update."""
        await self._apply(
            'reaction_switched',
            movie_id,
            user_id,
            lambda movie: plan_switch(movie, user_id),
        )

    # ---------- helpers ----------

    async def _apply(
            self,
            event: str,
            movie_id: str,
            user_id: str,
            plan: Callable[[Movie], ReactionChange]) -> None:
        """Load, plan, write reactions, then adjust counters."""
        try:
            async with self.repo.transaction(self.use_transactions) as session:
                movie = await self.repo.load(movie_id, session=session)
                if movie is None:
                    raise MovieNotFound()

                change = plan(movie)

                saved = await self.repo.save_reactions(
                    movie_id,
                    change.reactions,
                    expected_version=movie.version,
                    session=session,
                )
                if not saved:
                    logger.warning(
                        'reaction_conflict',
                        extra={'movie_id': movie_id, 'event': event})
                    raise ConcurrencyConflict(
                        'Movie was modified concurrently, retry.')

                await self._adjust_counters(movie_id, change, session)
        except PyMongoError as error:
            if error.has_error_label(TRANSIENT_TXN_LABEL):
                logger.warning(
                    'reaction_conflict',
                    extra={'movie_id': movie_id, 'event': event})
                raise ConcurrencyConflict(
                    'Movie was modified concurrently, retry.') from error
            raise RuntimeError(
                f'mongo_reaction_write_error: {error}') from error

        logger.info(
            event,
            extra={
                'movie_id': movie_id,
                'user_id': user_id,
                'old': change.old.value if change.old else None,
                'new': change.new.value if change.new else None,
            },
        )

    async def _adjust_counters(
            self,
            movie_id: str,
            change: ReactionChange,
            session) -> None:
        """Apply counter deltas; any failure here is reported, not retried."""
        extra = {
            'movie_id': movie_id,
            'like_delta': change.like_delta,
            'hate_delta': change.hate_delta,
        }
        try:
            if change.like_delta and change.hate_delta:
                adjusted = await self.repo.adjust_counters(
                    movie_id,
                    like_delta=change.like_delta,
                    hate_delta=change.hate_delta,
                    session=session,
                )
            elif change.new is not None:
                adjusted = await self.repo.increment_counter(
                    movie_id, change.new, session=session)
            else:
                adjusted = await self.repo.decrement_counter(
                    movie_id, change.old, session=session)
        except PyMongoError as error:
            if error.has_error_label(TRANSIENT_TXN_LABEL):
                raise
            logger.error('counter_adjustment_failed',
                         extra={**extra, 'err': str(error)})
            raise CounterAdjustmentFailed(
                f'Counters of movie {movie_id} were not updated.'
            ) from error

        if not adjusted:
            logger.error('counter_adjustment_failed', extra=extra)
            raise CounterAdjustmentFailed(
                f'Counters of movie {movie_id} were not updated.')
