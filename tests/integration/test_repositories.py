"""
Test suite for the resource repositories against the in-memory database.

Tests create normalization, listing, protected-field handling, deletes and
bulk operations for movie_crud, comment_crud and theater_crud.

System role: Verification of the document persistence layer
"""

from datetime import datetime

import pytest
from bson import ObjectId

from mflix_api.boundary.db.CRUD.comment_crud import comment_crud
from mflix_api.boundary.db.CRUD.movie_crud import movie_crud, parse_year
from mflix_api.boundary.db.CRUD.theater_crud import theater_crud
from mflix_api.boundary.db.query_builder import QueryBuilder
from mflix_api.core.exceptions import InvalidIdentifierError, NotFoundError, ValidationError

MOVIE_ID = "573a1390f29313caabcd4135"


class TestMovieCreate:
    """Test suite for movie_crud.create()."""

    @pytest.mark.asyncio
    async def test_create_should_normalize_fields(self, fake_db) -> None:
        # Act
        created = await movie_crud.create(
            fake_db, {"title": "Heat", "year": "1995", "genres": "Crime"}
        )

        # Assert
        assert isinstance(created["_id"], ObjectId)
        assert created["year"] == 1995
        assert created["plot"] == ""
        assert created["genres"] == []
        assert created["cast"] == []
        assert isinstance(created["created_at"], datetime)

    @pytest.mark.asyncio
    async def test_create_without_title_should_not_touch_store(self, fake_db) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await movie_crud.create(fake_db, {"title": "", "year": 2001})

        assert exc_info.value.details["missing"] == ["title"]
        assert fake_db.calls == []

    @pytest.mark.parametrize("value,expected", [("1999", 1999), (2004, 2004), ("", None), ("n/a", None), ("1999-05", 1999)])
    def test_parse_year(self, value, expected) -> None:
        assert parse_year(value) == expected


class TestMovieList:
    """Test suite for movie_crud.list()."""

    @pytest.mark.asyncio
    async def test_list_should_return_page_and_total(self, fake_db, seeded_movies) -> None:
        descriptor = QueryBuilder("title", "title").build_list_query(page=2, limit=5)

        records, total = await movie_crud.list(fake_db, descriptor)

        assert total == 12
        assert [record["title"] for record in records] == [
            "Movie 06", "Movie 07", "Movie 08", "Movie 09", "Movie 10",
        ]

    @pytest.mark.asyncio
    async def test_list_should_apply_search_and_sort(self, fake_db, seeded_movies) -> None:
        descriptor = QueryBuilder("title", "title").build_list_query(
            search="movie 1", sort_field="year", sort_order="desc"
        )

        records, total = await movie_crud.list(fake_db, descriptor)

        assert total == 3
        assert [record["year"] for record in records] == [2002, 2001, 2000]


class TestUpdateAndDelete:
    """Test suite for update(), delete() and the bulk variants."""

    @pytest.mark.asyncio
    async def test_update_should_never_change_protected_fields(self, fake_db) -> None:
        # Arrange
        created = await movie_crud.create(fake_db, {"title": "Alien"})
        original_id = created["_id"]
        original_created_at = created["created_at"]

        # Act
        outcome = await movie_crud.update(
            fake_db,
            {"_id": original_id},
            {"_id": ObjectId(), "id": "x", "created_at": "yesterday", "title": "Aliens"},
        )

        # Assert
        assert outcome.matched_count == 1
        assert outcome.record["_id"] == original_id
        assert outcome.record["created_at"] == original_created_at
        assert outcome.record["title"] == "Aliens"
        assert "id" not in outcome.record
        assert isinstance(outcome.record["updated_at"], datetime)

    @pytest.mark.asyncio
    async def test_update_without_match_returns_zero_counts(self, fake_db) -> None:
        outcome = await movie_crud.update(fake_db, {"_id": ObjectId()}, {"title": "Nope"})

        assert outcome.matched_count == 0
        assert outcome.record is None

    @pytest.mark.asyncio
    async def test_delete_of_missing_record_returns_zero(self, fake_db) -> None:
        assert await movie_crud.delete(fake_db, {"_id": ObjectId()}) == 0

    @pytest.mark.asyncio
    async def test_get_of_missing_record_raises_not_found(self, fake_db) -> None:
        with pytest.raises(NotFoundError):
            await movie_crud.get(fake_db, {"_id": ObjectId()})

    @pytest.mark.asyncio
    async def test_bulk_update_strips_protected_fields(self, fake_db, seeded_movies) -> None:
        outcome = await movie_crud.bulk_update(
            fake_db, {}, {"_id": "clobber", "plot": "Rewritten"}
        )

        assert outcome.matched_count == 12
        assert outcome.modified_count == 12
        stored_ids = {document["_id"] for document in fake_db["movies"].documents}
        assert stored_ids == {movie["_id"] for movie in seeded_movies}

    @pytest.mark.asyncio
    async def test_bulk_delete_uses_caller_predicate(self, fake_db, seeded_movies) -> None:
        deleted = await movie_crud.bulk_delete(fake_db, {"year": 1991})

        assert deleted == 1
        assert len(fake_db["movies"].documents) == 11


class TestCommentRepository:
    @pytest.mark.asyncio
    async def test_create_stores_parent_as_object_id(self, fake_db) -> None:
        created = await comment_crud.create(
            fake_db, {"name": "Ned", "text": "Great", "movie_id": MOVIE_ID.upper()}
        )

        assert created["movie_id"] == ObjectId(MOVIE_ID)
        assert isinstance(created["date"], datetime)
        assert comment_crud.to_response(created)["parent_id"] == MOVIE_ID

    @pytest.mark.asyncio
    async def test_create_rejects_malformed_parent(self, fake_db) -> None:
        with pytest.raises(InvalidIdentifierError):
            await comment_crud.create(fake_db, {"name": "Ned", "text": "Hi", "movie_id": "abc"})

    @pytest.mark.asyncio
    async def test_update_never_moves_comment_to_other_movie(self, fake_db) -> None:
        created = await comment_crud.create(
            fake_db, {"name": "Ned", "text": "Great", "movie_id": MOVIE_ID}
        )

        outcome = await comment_crud.update(
            fake_db,
            {"_id": created["_id"]},
            {"movie_id": ObjectId(), "date": "now", "text": "Edited"},
        )

        assert outcome.record["movie_id"] == ObjectId(MOVIE_ID)
        assert outcome.record["date"] == created["date"]
        assert outcome.record["text"] == "Edited"


class TestTheaterRepository:
    @pytest.mark.asyncio
    async def test_create_applies_defaults(self, fake_db) -> None:
        created = await theater_crud.create(fake_db, {"name": "Roxy"})

        assert created["address"] == {}
        assert created["location"] is None
        assert theater_crud.to_response(created)["address"] == {
            "street1": None, "city": None, "state": None, "zipcode": None,
        }

    def test_to_response_maps_location(self) -> None:
        oid = ObjectId()
        document = {
            "_id": oid,
            "name": "Roxy",
            "address": {"street1": "1 Main St", "city": "Bloomington", "state": "MN", "zipcode": "55425"},
            "location": {"type": "Point", "coordinates": [-93.24, 44.85]},
        }

        response = theater_crud.to_response(document)

        assert response["id"] == str(oid)
        assert response["location"] == {"type": "Point", "coordinates": [-93.24, 44.85]}
        assert response["address"]["city"] == "Bloomington"
