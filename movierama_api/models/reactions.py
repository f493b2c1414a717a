from __future__ import annotations
from enum import Enum
from pydantic import BaseModel


class ReactionKind(str, Enum):
    like = "LIKE"
    hate = "HATE"

    @property
    def opposite(self) -> ReactionKind:
        return ReactionKind.hate if self is ReactionKind.like \
            else ReactionKind.like


class UserReaction(BaseModel):
    user_id: str
    reaction: ReactionKind


class ReactionRequest(BaseModel):
    reaction: ReactionKind


class ReactionStateResponse(BaseModel):
    movie_id: str
    user_id: str
    reaction: ReactionKind | None = None  # None = no reaction yet


def counter_delta(kind: ReactionKind, step: int) -> tuple[int, int]:
    """Map a +1/-1 step on ``kind`` to (like_delta, hate_delta)."""
    if kind is ReactionKind.like:
        return step, 0
    return 0, step
