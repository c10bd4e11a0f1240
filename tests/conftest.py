from datetime import date

import pytest


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        self.conn.executed.append((sql, list(params) if params is not None else None))
        if self.conn.error is not None:
            raise self.conn.error

    def fetchone(self):
        return self.conn.rows[0] if self.conn.rows else None

    def fetchall(self):
        return list(self.conn.rows)


class FakeConnection:
    def __init__(self):
        self.rows = []
        self.error = None
        self.executed = []
        self.cursor_factories = []
        self.commits = 0
        self.rollbacks = 0

    def cursor(self, cursor_factory=None):
        self.cursor_factories.append(cursor_factory)
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


class FakePool:
    """Hands out one shared FakeConnection and tracks checkouts."""

    def __init__(self):
        self.conn = FakeConnection()
        self.checked_out = 0
        self.released = 0

    def getconn(self):
        self.checked_out += 1
        return self.conn

    def putconn(self, conn):
        assert conn is self.conn
        self.released += 1

    @property
    def last_sql(self):
        return self.conn.executed[-1][0]

    @property
    def last_params(self):
        return self.conn.executed[-1][1]


@pytest.fixture
def fake_pool():
    return FakePool()


def make_property_row(**overrides):
    row = {
        "id": 1,
        "owner_id": 7,
        "title": "Speed lamp",
        "description": "description",
        "thumbnail_photo_url": "https://images.example.com/thumb.jpg",
        "cover_photo_url": "https://images.example.com/cover.jpg",
        "cost_per_night": 9300,
        "street": "536 Namsub Highway",
        "city": "Sotboske",
        "province": "Quebec",
        "post_code": "28142",
        "country": "Canada",
        "parking_spaces": 3,
        "number_of_bathrooms": 1,
        "number_of_bedrooms": 4,
        "average_rating": None,
    }
    row.update(overrides)
    return row


def make_reservation_row(**overrides):
    row = make_property_row()
    row.update({
        "reservation_id": 40,
        "guest_id": 3,
        "start_date": date(2018, 9, 11),
        "end_date": date(2018, 9, 26),
    })
    row.update(overrides)
    return row
