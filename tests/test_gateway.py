import psycopg2
import pytest

from conftest import make_property_row
from db import connection
from db.errors import DatabaseConnectionError, ErrorKind, GatewayError, MalformedQueryError
from repositories.property_filters import PropertySearchOptions
from services.gateway import QueryGateway

BOB = {"id": 12, "name": "Bob", "email": "bob@example.com", "password": "secret"}


def test_add_user_then_lookup_by_id_round_trips(fake_pool):
    gateway = QueryGateway(fake_pool)
    fake_pool.conn.rows = [BOB]

    created = gateway.add_user({"name": "Bob", "email": "bob@example.com", "password": "secret"})
    fetched = gateway.get_user_with_id(created.id)

    assert fetched == created
    assert fake_pool.last_params == [12]
    assert fake_pool.checked_out == fake_pool.released == 2


def test_unknown_email_is_none(fake_pool):
    assert QueryGateway(fake_pool).get_user_with_email("ghost@example.com") is None


def test_get_all_properties_defaults(fake_pool):
    fake_pool.conn.rows = [make_property_row(id=1, cost_per_night=50), make_property_row(id=2, cost_per_night=150)]
    props = QueryGateway(fake_pool).get_all_properties()

    assert [p.cost_per_night for p in props] == [50, 150]
    assert fake_pool.last_params == [10]


def test_get_all_properties_price_range(fake_pool):
    QueryGateway(fake_pool).get_all_properties(
        PropertySearchOptions(minimum_price_per_night=100, maximum_price_per_night=200), limit=2
    )
    assert "cost_per_night >= %s AND properties.cost_per_night <= %s" in fake_pool.last_sql
    assert fake_pool.last_params == [100.0, 200.0, 2]


def test_get_all_reservations_uses_guest_and_limit(fake_pool):
    assert QueryGateway(fake_pool).get_all_reservations(3, limit=7) == []
    assert fake_pool.last_params == [3, 7]


def test_add_property_returns_stored_row(fake_pool):
    fake_pool.conn.rows = [make_property_row(id=31, title="Loft")]
    prop = QueryGateway(fake_pool).add_property(
        dict(make_property_row(), owner_id=7)
    )
    assert prop.id == 31
    assert prop.title == "Loft"


def test_errors_share_one_contract(fake_pool):
    gateway = QueryGateway(fake_pool)
    fake_pool.conn.error = psycopg2.OperationalError("could not connect to server")

    calls = [
        lambda: gateway.get_user_with_email("a@example.com"),
        lambda: gateway.get_user_with_id(1),
        lambda: gateway.add_user(BOB),
        lambda: gateway.get_all_reservations(1),
        lambda: gateway.get_all_properties({}),
        lambda: gateway.add_property(make_property_row()),
    ]
    for call in calls:
        with pytest.raises(GatewayError) as exc_info:
            call()
        assert exc_info.value.kind is ErrorKind.CONNECTION

    assert fake_pool.checked_out == fake_pool.released == len(calls)


def test_default_pool_required(monkeypatch):
    monkeypatch.setattr(connection, "_pool", None)
    with pytest.raises(DatabaseConnectionError):
        QueryGateway().get_user_with_id(1)


def test_property_search_with_plain_object_is_malformed(fake_pool):
    class Opts:
        city = "van"

    with pytest.raises(MalformedQueryError) as exc_info:
        QueryGateway(fake_pool).get_all_properties(Opts())
    assert exc_info.value.kind is ErrorKind.MALFORMED
    assert fake_pool.checked_out == 0
