"""
Tests for the SQLite database, flight source and repositories.
"""

import pandas as pd
import pytest

from src.flight_booking.adapters.sqlite.database import Database
from src.flight_booking.adapters.sqlite.flight_source import (
    SqliteFlightSource,
    frame_to_flights,
)
from src.flight_booking.adapters.sqlite.user_repository import SqliteUserRepository
from src.flight_booking.data.seed_data import CITIES, PUBLIC_FLIGHTS
from src.flight_booking.exceptions import StorageError, UserAlreadyExistsError
from src.flight_booking.schemas.user import User, UserRole


@pytest.fixture
def db(tmp_path):
    database = Database(str(tmp_path / "adapters.db"))
    yield database
    database.close()


@pytest.fixture
def seeded_db(db):
    db.seed_if_empty(PUBLIC_FLIGHTS, CITIES)
    return db


# -------------------------
# Database
# -------------------------


class TestDatabase:
    """Tests for table creation and seeding."""

    def test_tables_created(self, db):
        rows = db.fetch_all("SELECT name FROM sqlite_master WHERE type = 'table'")
        names = {row["name"] for row in rows}
        assert {"flights", "cities", "users", "bookings"} <= names

    def test_seed_only_when_empty(self, db):
        assert db.seed_if_empty(PUBLIC_FLIGHTS, CITIES) is True
        assert db.seed_if_empty(PUBLIC_FLIGHTS, CITIES) is False
        assert db.count("flights") == 3
        assert db.count("cities") == len(CITIES)

    def test_insert_flights_skips_existing_ids(self, seeded_db, make_flight):
        inserted = seeded_db.insert_flights([PUBLIC_FLIGHTS[0], make_flight(id="new")])
        assert inserted == 1
        assert seeded_db.count("flights") == 4

    def test_bad_sql_becomes_storage_error(self, db):
        with pytest.raises(StorageError):
            db.fetch_all("SELECT * FROM missing_table")
        with pytest.raises(StorageError):
            db.read_frame("SELECT * FROM missing_table")

    def test_read_frame_restores_row_factory(self, seeded_db):
        df = seeded_db.read_frame("SELECT id, price FROM flights ORDER BY rowid")
        assert list(df["id"]) == ["1", "2", "3"]
        assert seeded_db.fetch_one("SELECT id FROM flights")["id"] == "1"

    def test_reopen_keeps_data(self, tmp_path):
        path = str(tmp_path / "persist.db")
        first = Database(path)
        first.seed_if_empty(PUBLIC_FLIGHTS, CITIES)
        first.close()

        second = Database(path)
        assert second.count("flights") == 3
        second.close()


# -------------------------
# Flight source
# -------------------------


class TestSqliteFlightSource:
    """Tests for reading flights back out of SQLite."""

    def test_round_trips_demo_flights(self, seeded_db):
        flights = SqliteFlightSource(seeded_db).fetch_flights()
        assert flights == list(PUBLIC_FLIGHTS)

    def test_stop_locations_decoded(self, seeded_db):
        flight = SqliteFlightSource(seeded_db).get_flight("3")
        assert flight.stop_locations == ("HYD",)
        assert flight.stops == 1

    def test_route_filter(self, seeded_db):
        source = SqliteFlightSource(seeded_db)
        assert [f.id for f in source.fetch_flights(origin="DEL", destination="BLR")] == ["2"]
        assert source.fetch_flights(origin="BOM") == []

    def test_missing_flight(self, seeded_db):
        assert SqliteFlightSource(seeded_db).get_flight("404") is None

    def test_cities_in_seed_order(self, seeded_db):
        cities = SqliteFlightSource(seeded_db).get_cities()
        assert cities == list(CITIES)

    def test_availability(self, seeded_db):
        source = SqliteFlightSource(seeded_db)
        assert source.is_available
        assert source.name == "SQLite"
        seeded_db.close()
        assert not source.is_available

    def test_frame_to_flights_empty(self):
        assert frame_to_flights(pd.DataFrame()) == []


# -------------------------
# User repository
# -------------------------


class TestSqliteUserRepository:
    """Tests for user persistence."""

    @pytest.fixture
    def repo(self, db):
        return SqliteUserRepository(db)

    @pytest.fixture
    def user(self):
        return User(
            id="u1",
            email="asha@example.com",
            first_name="Asha",
            last_name="Rao",
            role=UserRole.USER,
            created_at="2024-03-09T10:30:00+00:00",
            updated_at="2024-03-09T10:30:00+00:00",
        )

    def test_create_and_get(self, repo, user):
        repo.create(user)
        assert repo.get_by_id("u1") == user
        assert repo.get_by_email("asha@example.com") == user
        assert repo.count() == 1

    def test_unique_email(self, repo, user):
        repo.create(user)
        with pytest.raises(UserAlreadyExistsError):
            repo.create(User(**{**user.__dict__, "id": "u2"}))

    def test_update_ignores_unknown_columns(self, repo, user):
        repo.create(user)
        updated = repo.update("u1", {"role": UserRole.ADMIN, "email": "changed@example.com"})
        assert updated.role is UserRole.ADMIN
        assert updated.email == "asha@example.com"

    def test_update_missing_returns_none(self, repo):
        assert repo.update("ghost", {"first_name": "X"}) is None

    def test_delete(self, repo, user):
        repo.create(user)
        assert repo.delete("u1") is True
        assert repo.delete("u1") is False
        assert repo.list_all() == []
