"""Typed failures of the movie and reaction services.

Every error is a ``RuntimeError`` whose message starts with a stable
``code``, so the HTTP layer can map it the same way it maps the
text-coded ``RuntimeError``s raised for storage failures.
"""

from __future__ import annotations


class MovieramaError(RuntimeError):
    """Base class: ``code`` is the stable kind, ``detail`` the message."""

    code = 'movierama_error'

    def __init__(self, detail: str) -> None:
        super().__init__(f'{self.code}: {detail}')
        self.detail = detail


class NotFoundError(MovieramaError):
    code = 'not_found'


class MovieNotFound(NotFoundError):
    code = 'movie_not_found'

    def __init__(self, detail: str = 'Movie not found.') -> None:
        super().__init__(detail)


class ReactionNotFound(NotFoundError):
    """The user holds no reaction that could be removed or switched."""

    code = 'reaction_not_found'


class SelfReactionForbidden(MovieramaError):
    code = 'self_reaction_forbidden'


class DuplicateReaction(MovieramaError):
    code = 'duplicate_reaction'


class ConcurrencyConflict(MovieramaError):
    """A concurrent write changed the movie; the caller may retry."""

    code = 'concurrency_conflict'


class CounterAdjustmentFailed(MovieramaError):
    """The counter update after a reaction write failed.

    Inside a transaction the reaction write is rolled back with it.
    Without transactions the reaction write stays and the counters may
    have drifted until reconciliation recounts them.
    """

    code = 'counter_adjustment_failed'


class MovieAlreadyExists(MovieramaError):
    code = 'movie_already_exists'

    def __init__(self, detail: str = 'The Movie already exists') -> None:
        super().__init__(detail)
