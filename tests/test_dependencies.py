import pytest
from fastapi import HTTPException
from movierama_api.dependencies import (
    get_movies_service,
    get_reactions_service,
    user_id_header,
)
from movierama_api.core.config import settings
from movierama_api.services.movies_service import MoviesService
from movierama_api.services.reactions_service import ReactionsService


@pytest.mark.parametrize("value", ["", "   ", "x" * 129])
def test_user_id_header_invalid_returns_422(value):
    with pytest.raises(HTTPException) as e:
        user_id_header(value)
    assert e.value.status_code == 422


def test_user_id_header_is_stripped():
    assert user_id_header("  alice ") == "alice"


async def test_services_share_the_repo(repo, monkeypatch):
    monkeypatch.setattr(settings, "mongo_use_transactions", False)

    movies = await get_movies_service(repo)
    reactions = await get_reactions_service(repo)

    assert isinstance(movies, MoviesService)
    assert isinstance(reactions, ReactionsService)
    assert movies.repo is reactions.repo is repo
    assert reactions.use_transactions is False
