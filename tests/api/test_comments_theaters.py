"""Comment and theater endpoint tests against the in-memory database."""

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from mflix_api.api.deps.dependencies import get_database
from mflix_api.api.main import create_app

MOVIE_ID = "573a1390f29313caabcd4135"
COMMENT_ID = "5a9427648b0beebeb69579e7"


@pytest.fixture
def client(fake_db):
    app = create_app()
    app.dependency_overrides[get_database] = lambda: fake_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_create_comment_on_unknown_movie(client):
    response = client.post(
        f"/api/movies/{MOVIE_ID}/comments",
        json={"name": "Ned", "email": "ned@example.com", "text": "Winter is coming"},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["parent_id"] == MOVIE_ID
    assert set(data) >= {"id", "name", "email", "text", "parent_id", "date"}


def test_standalone_create_requires_email(client):
    response = client.post(
        "/api/comments", json={"name": "Ned", "text": "Hi", "movie_id": MOVIE_ID}
    )

    assert response.status_code == 400
    assert "email" in response.json()["message"]


def test_list_movie_comments_is_scoped(client):
    for text in ("a", "b"):
        client.post(f"/api/movies/{MOVIE_ID}/comments", json={"name": "N", "text": text})
    client.post(f"/api/movies/{ObjectId()}/comments", json={"name": "N", "text": "other"})

    response = client.get(f"/api/movies/{MOVIE_ID}/comments")

    assert response.status_code == 200
    assert response.json()["meta"]["totalItems"] == 2


def test_update_movie_comment_falls_back(client, fake_db):
    fake_db["comments"].documents.append(
        {"_id": COMMENT_ID, "name": "Ned", "text": "old", "movie_id": ObjectId(MOVIE_ID)}
    )

    response = client.put(
        f"/api/movies/{MOVIE_ID}/comments/{COMMENT_ID}", json={"text": "new", "movie_id": str(ObjectId())}
    )

    assert response.status_code == 200
    assert response.json()["data"]["text"] == "new"
    assert fake_db["comments"].documents[0]["movie_id"] == ObjectId(MOVIE_ID)


def test_delete_movie_comment_not_found(client):
    response = client.delete(f"/api/movies/{MOVIE_ID}/comments/{COMMENT_ID}")

    assert response.status_code == 404
    assert response.json()["error"] == "NotFound"


def test_comment_crud_by_own_id(client):
    created = client.post(
        "/api/comments",
        json={"name": "Ned", "email": "ned@example.com", "text": "Hi", "movie_id": MOVIE_ID},
    ).json()["data"]

    updated = client.put(f"/api/comments/{created['id']}", json={"text": "Edited"})
    fetched = client.get(f"/api/comments/{created['id']}")
    deleted = client.delete(f"/api/comments/{created['id']}")

    assert updated.status_code == 200
    assert fetched.json()["data"]["text"] == "Edited"
    assert deleted.json()["deletedCount"] == 1


def test_theater_update_with_invalid_id(client, fake_db):
    response = client.put("/api/theaters/abc", json={"name": "New"})

    assert response.status_code == 400
    assert response.json()["error"] == "InvalidIdentifier"
    assert fake_db.calls == []


def test_theater_lifecycle(client):
    created = client.post(
        "/api/theaters",
        json={
            "name": "Roxy",
            "address": {"street1": "1 Main St", "city": "Bloomington", "state": "MN", "zipcode": "55425"},
            "location": {"type": "Point", "coordinates": [-93.24, 44.85]},
        },
    )
    assert created.status_code == 201
    theater = created.json()["data"]
    assert theater["location"]["coordinates"] == [-93.24, 44.85]

    listed = client.get("/api/theaters", params={"search": "rox"})
    assert listed.json()["meta"]["totalItems"] == 1

    updated = client.put(f"/api/theaters/{theater['id']}", json={"name": "Roxy II"})
    assert updated.json()["data"]["name"] == "Roxy II"
    assert updated.json()["data"]["address"]["city"] == "Bloomington"

    deleted = client.delete(f"/api/theaters/{theater['id']}")
    assert deleted.status_code == 200
    assert client.get(f"/api/theaters/{theater['id']}").status_code == 404


def test_list_theaters_maps_nested_location(client, fake_db):
    fake_db["theaters"].documents.append(
        {
            "_id": ObjectId(),
            "theaterId": 1000,
            "location": {
                "address": {"street1": "340 W Market", "city": "Bloomington", "state": "MN", "zipcode": 55425},
                "geo": {"type": "Point", "coordinates": [-93.24565, 44.85466]},
            },
        }
    )

    response = client.get("/api/theaters")

    assert response.status_code == 200
    theater = response.json()["data"][0]
    assert theater["name"] is None
    assert theater["address"]["city"] == "Bloomington"
    assert theater["address"]["zipcode"] == "55425"
    assert theater["location"] == {"type": "Point", "coordinates": [-93.24565, 44.85466]}


def test_get_theater_with_incomplete_location(client, fake_db):
    theater_id = ObjectId()
    fake_db["theaters"].documents.append(
        {"_id": theater_id, "name": "Roxy", "location": {"coordinates": [-93.24, 44.85]}}
    )

    response = client.get(f"/api/theaters/{theater_id}")

    assert response.status_code == 200
    assert response.json()["data"]["location"] is None


def test_comment_response_shape(client, fake_db):
    fake_db["comments"].documents.append(
        {"_id": ObjectId(COMMENT_ID), "name": "Ned", "text": 42, "movie_id": ObjectId(MOVIE_ID)}
    )

    response = client.get(f"/api/comments/{COMMENT_ID}")

    assert response.status_code == 200
    assert set(response.json()["data"]) == {"id", "name", "email", "text", "parent_id", "date"}
    assert response.json()["data"]["text"] == "42"
