import os
import pytest
from httpx import AsyncClient, ASGITransport

from movierama_api.core.config import settings
from movierama_api.dependencies import get_movies_repo
from movierama_api.main import app
from movierama_api.services.movies_service import MoviesService
from movierama_api.services.reactions_service import ReactionsService
from tests.fakes import InMemoryMoviesRepo


@pytest.fixture(scope="session", autouse=True)
def test_env():
    os.environ["SENTRY_DSN"] = ""  # no Sentry in tests
    settings.sentry_dsn = ""


@pytest.fixture
def repo() -> InMemoryMoviesRepo:
    return InMemoryMoviesRepo()


@pytest.fixture
def reactions(repo) -> ReactionsService:
    return ReactionsService(repo)


@pytest.fixture
def movies(repo) -> MoviesService:
    return MoviesService(repo)


@pytest.fixture
async def client(repo):
    app.dependency_overrides[get_movies_repo] = lambda: repo
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport,
                           base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
