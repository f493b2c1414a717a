import uuid
from typing import Dict
from httpx import AsyncClient

MOVIES = "/api/v1/movies"


def new_user() -> str:
    return str(uuid.uuid4())


def uid_header(user_id: str) -> Dict[str, str]:
    return {"X-User-Id": user_id}


async def publish(client: AsyncClient, user_id: str,
                  title: str | None = None) -> str:
    r = await client.post(
        MOVIES,
        json={"title": title or f"Movie {uuid.uuid4()}",
              "description": "worth watching"},
        headers=uid_header(user_id),
    )
    assert r.status_code == 201
    return r.json()["movie_id"]


async def read_movie(client: AsyncClient, movie_id: str) -> dict:
    r = await client.get(f"{MOVIES}/{movie_id}")
    assert r.status_code == 200
    return r.json()


def assert_counters_consistent(movie) -> None:
    """likes/hates match the reaction set; one reaction per user."""
    kinds = [r.reaction.value for r in movie.reactions]
    assert movie.likes == kinds.count("LIKE")
    assert movie.hates == kinds.count("HATE")
    users = [r.user_id for r in movie.reactions]
    assert len(users) == len(set(users))
    assert movie.published_by not in users
