"""Reaction endpoints: status codes and counter effects."""

from __future__ import annotations

from pymongo.errors import PyMongoError

from tests.helpers import MOVIES, new_user, publish, read_movie, uid_header


async def react(client, movie_id, user, value):
    return await client.put(
        f"{MOVIES}/{movie_id}/reaction",
        json={"reaction": value},
        headers=uid_header(user),
    )


async def test_reaction_initially_none(client):
    movie = await publish(client, new_user())
    user = new_user()

    r = await client.get(f"{MOVIES}/{movie}/reaction",
                         headers=uid_header(user))
    assert r.status_code == 200
    assert r.json() == {"movie_id": movie, "user_id": user, "reaction": None}


async def test_like_switch_remove_flow(client):
    movie, user = await publish(client, new_user()), new_user()

    r = await react(client, movie, user, "LIKE")
    assert r.status_code == 204
    m = await read_movie(client, movie)
    assert (m["likes"], m["hates"]) == (1, 0)

    r = await client.patch(f"{MOVIES}/{movie}/reaction",
                           headers=uid_header(user))
    assert r.status_code == 204
    m = await read_movie(client, movie)
    assert (m["likes"], m["hates"]) == (0, 1)

    r = await client.get(f"{MOVIES}/{movie}/reaction",
                         headers=uid_header(user))
    assert r.json()["reaction"] == "HATE"

    r = await client.delete(f"{MOVIES}/{movie}/reaction",
                            headers=uid_header(user))
    assert r.status_code == 204
    m = await read_movie(client, movie)
    assert (m["likes"], m["hates"]) == (0, 0)


async def test_second_reaction_returns_409(client):
    movie, user = await publish(client, new_user()), new_user()
    await react(client, movie, user, "LIKE")

    r = await react(client, movie, user, "HATE")
    assert r.status_code == 409
    assert r.json()["detail"] == "duplicate_reaction"
    m = await read_movie(client, movie)
    assert (m["likes"], m["hates"]) == (1, 0)


async def test_own_movie_reaction_returns_403(client):
    publisher = new_user()
    movie = await publish(client, publisher)

    r = await react(client, movie, publisher, "LIKE")
    assert r.status_code == 403
    assert r.json()["detail"] == "self_reaction_forbidden"


async def test_remove_without_reaction_returns_404(client):
    movie = await publish(client, new_user())

    r = await client.delete(f"{MOVIES}/{movie}/reaction",
                            headers=uid_header(new_user()))
    assert r.status_code == 404
    assert r.json()["detail"] == "reaction_not_found"


async def test_switch_without_reaction_returns_404(client):
    movie = await publish(client, new_user())

    r = await client.patch(f"{MOVIES}/{movie}/reaction",
                           headers=uid_header(new_user()))
    assert r.status_code == 404
    assert r.json()["detail"] == "reaction_not_found"


async def test_reaction_on_unknown_movie_returns_404(client):
    r = await react(client, "not-an-object-id", new_user(), "LIKE")
    assert r.status_code == 404
    assert r.json()["detail"] == "movie_not_found"


async def test_invalid_reaction_value_returns_422(client):
    movie = await publish(client, new_user())
    r = await react(client, movie, new_user(), "MEH")
    assert r.status_code == 422


async def test_counter_failure_returns_500_with_distinct_detail(client, repo):
    movie = await publish(client, new_user())
    repo.counter_error = PyMongoError("socket timeout")

    r = await react(client, movie, new_user(), "LIKE")
    assert r.status_code == 500
    assert r.json()["detail"] == "counter_adjustment_failed"


async def test_missing_user_header_returns_422(client):
    movie = await publish(client, new_user())
    r = await client.put(f"{MOVIES}/{movie}/reaction",
                         json={"reaction": "LIKE"})
    assert r.status_code == 422
