"""Pure reaction transitions: NONE, LIKED and HATED per (movie, user).

Each planner validates against a loaded ``Movie`` and returns the new
reaction list plus the counter deltas to apply, or raises before anything
is written.
"""

from __future__ import annotations

from typing import List, NamedTuple

from movierama_api.models.movies import Movie
from movierama_api.models.reactions import (
    ReactionKind,
    UserReaction,
    counter_delta,
)
from movierama_api.services.errors import (
    DuplicateReaction,
    ReactionNotFound,
    SelfReactionForbidden,
)


class ReactionChange(NamedTuple):
    reactions: List[UserReaction]
    like_delta: int
    hate_delta: int
    old: ReactionKind | None
    new: ReactionKind | None


def plan_add(movie: Movie, user_id: str, kind: ReactionKind) -> ReactionChange:
    verb = kind.value.lower()
    if movie.published_by == user_id:
        raise SelfReactionForbidden(f'Cannot {verb} your own movie.')
    if movie.reaction_of(user_id) is not None:
        raise DuplicateReaction(
            f'Cannot {verb} a movie more than once.')

    reactions = [*movie.reactions, UserReaction(user_id=user_id,
                                                reaction=kind)]
    like_delta, hate_delta = counter_delta(kind, 1)
    return ReactionChange(reactions, like_delta, hate_delta, None, kind)


def plan_remove(movie: Movie, user_id: str) -> ReactionChange:
    current = movie.reaction_of(user_id)
    if current is None:
        raise ReactionNotFound('No reaction to remove')

    reactions = [r for r in movie.reactions if r.user_id != user_id]
    like_delta, hate_delta = counter_delta(current.reaction, -1)
    return ReactionChange(
        reactions, like_delta, hate_delta, current.reaction, None)


def plan_switch(movie: Movie, user_id: str) -> ReactionChange:
    current = movie.reaction_of(user_id)
    if current is None:
        raise ReactionNotFound('No reaction to change')

    new_kind = current.reaction.opposite
    reactions = [r for r in movie.reactions if r.user_id != user_id]
    reactions.append(UserReaction(user_id=user_id, reaction=new_kind))

    old_like, old_hate = counter_delta(current.reaction, -1)
    new_like, new_hate = counter_delta(new_kind, 1)
    return ReactionChange(
        reactions,
        old_like + new_like,
        old_hate + new_hate,
        current.reaction,
        new_kind,
    )
