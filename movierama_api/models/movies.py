from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from movierama_api.models.reactions import ReactionKind, UserReaction

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 400


class Movie(BaseModel):
    """A published movie with its reactions and denormalized counters."""

    movie_id: str
    title: str
    description: str
    published_by: str
    published_at: datetime
    likes: int = 0
    hates: int = 0
    reactions: List[UserReaction] = Field(default_factory=list)
    version: int = 0

    def reaction_of(self, user_id: str) -> Optional[UserReaction]:
        for item in self.reactions:
            if item.user_id == user_id:
                return item
        return None

    def count(self, kind: ReactionKind) -> int:
        return sum(1 for item in self.reactions if item.reaction is kind)


class MovieSort(str, Enum):
    new = "new"
    likes = "likes"
    hates = "hates"


class MovieCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(min_length=1, max_length=DESCRIPTION_MAX_LENGTH)


class MovieCreateResponse(BaseModel):
    movie_id: str


class MovieItem(BaseModel):
    movie_id: str
    title: str
    description: str
    published_by: str
    published_at: datetime
    likes: int
    hates: int

    @classmethod
    def from_movie(cls, movie: Movie) -> MovieItem:
        return cls(**movie.model_dump(exclude={"reactions", "version"}))


class MovieListResponse(BaseModel):
    items: List[MovieItem]
    total: int
