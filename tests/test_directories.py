from __future__ import annotations

import json
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import redis

from customer_api.domain.entities.customer import Customer
from customer_api.domain.exceptions import ConflictError, NotFoundError
from customer_api.infrastructure.factories.directory_factory import DirectoryFactory
from customer_api.infrastructure.repositories.memory_customer_directory import InMemoryCustomerDirectory
from customer_api.infrastructure.repositories.redis_customer_directory import RedisCustomerDirectory


def make_customer(**overrides) -> Customer:
    fields = dict(
        name="Jane Doe",
        email="jane@example.com",
        annual_spend=Decimal("1500.00"),
        last_purchase_date=date(2025, 3, 1),
    )
    fields.update(overrides)
    return Customer(**fields)


# ───────────────────────── in-memory directory ───────────────────────── #

def test_memory_insert_assigns_unique_ids(directory):
    first = directory.insert(make_customer())
    second = directory.insert(make_customer(email="other@example.com"))

    assert first.id and second.id
    assert first.id != second.id


def test_memory_returns_copies(directory):
    stored = directory.insert(make_customer())

    fetched = directory.find_by_id(stored.id)
    fetched.name = "Changed"

    assert directory.find_by_id(stored.id).name == "Jane Doe"


def test_memory_duplicate_email_conflicts(directory):
    directory.insert(make_customer())
    with pytest.raises(ConflictError):
        directory.insert(make_customer(name="Other"))


def test_memory_update_unknown_id_is_not_found(directory):
    with pytest.raises(NotFoundError):
        directory.update(make_customer(id="missing"))


def test_memory_delete_and_exists(directory):
    stored = directory.insert(make_customer())
    assert directory.exists_by_id(stored.id)

    directory.delete_by_id(stored.id)

    assert not directory.exists_by_id(stored.id)
    assert directory.find_by_name("Jane Doe") is None
    assert directory.find_by_email("jane@example.com") is None


def test_memory_ping(directory):
    assert directory.ping() is True


# ───────────────────────── redis directory ───────────────────────── #

def stored_record(customer_id="c-1", seq=1, **overrides) -> str:
    record = {
        "id": customer_id,
        "name": "Jane Doe",
        "email": "jane@example.com",
        "annual_spend": "1500.00",
        "last_purchase_date": "2025-03-01",
        "seq": seq,
    }
    record.update(overrides)
    return json.dumps(record)


def run_transactions(redis_client, *pipes):
    """Make ``transaction`` call its function once per pipe, returning the last result."""
    watched = []

    def transaction(func, *watches, value_from_callable=False):
        watched.append(watches)
        result = None
        for pipe in pipes:
            result = func(pipe)
        return result if value_from_callable else []

    redis_client.transaction.side_effect = transaction
    return watched


@pytest.fixture
def redis_client():
    return MagicMock(spec=redis.Redis)


@pytest.fixture
def pipe():
    return MagicMock()


@pytest.fixture
def redis_directory(redis_client):
    return RedisCustomerDirectory(redis_client=redis_client)


def test_redis_insert_watches_email_and_writes_record(redis_client, redis_directory, pipe):
    watched = run_transactions(redis_client, pipe)
    pipe.get.return_value = None
    pipe.incr.return_value = 7

    stored = redis_directory.insert(make_customer())

    assert watched == [("customer:email:jane@example.com",)]
    pipe.multi.assert_called_once()
    pipe.set.assert_any_call("customer:email:jane@example.com", stored.id)
    record_key, payload = pipe.set.call_args_list[1].args
    assert record_key == f"customer:record:{stored.id}"
    assert json.loads(payload)["seq"] == 7
    pipe.zadd.assert_called_once_with("customer:name:Jane Doe", {stored.id: 7})


def test_redis_insert_duplicate_email_conflicts(redis_client, redis_directory, pipe):
    run_transactions(redis_client, pipe)
    pipe.get.return_value = "someone-else"

    with pytest.raises(ConflictError):
        redis_directory.insert(make_customer())

    pipe.multi.assert_not_called()
    pipe.set.assert_not_called()


def test_redis_insert_propagates_storage_errors(redis_client, redis_directory):
    redis_client.transaction.side_effect = redis.ConnectionError("down")

    with pytest.raises(redis.ConnectionError):
        redis_directory.insert(make_customer())


def test_redis_find_by_id_decodes_record(redis_client, redis_directory):
    redis_client.get.return_value = stored_record()

    customer = redis_directory.find_by_id("c-1")

    redis_client.get.assert_called_once_with("customer:record:c-1")
    assert customer.id == "c-1"
    assert customer.annual_spend == Decimal("1500.00")
    assert customer.last_purchase_date == date(2025, 3, 1)


def test_redis_find_by_id_missing(redis_client, redis_directory):
    redis_client.get.return_value = None
    assert redis_directory.find_by_id("missing") is None


@pytest.mark.parametrize("customer_id", ["seq", "email:jane@example.com", "name:Jane Doe"])
def test_redis_ids_cannot_address_index_keys(redis_client, redis_directory, customer_id):
    keys = {
        "customer:seq": "3",
        "customer:email:jane@example.com": "c-1",
        "customer:record:c-1": stored_record(),
    }
    redis_client.get.side_effect = keys.get
    redis_client.exists.side_effect = lambda key: int(key in keys)

    assert redis_directory.find_by_id(customer_id) is None
    assert redis_directory.exists_by_id(customer_id) is False
    redis_client.get.assert_called_once_with(f"customer:record:{customer_id}")


def test_redis_find_by_name_uses_first_in_insertion_order(redis_client, redis_directory):
    redis_client.zrange.return_value = ["c-1"]
    redis_client.get.return_value = stored_record()

    customer = redis_directory.find_by_name("Jane Doe")

    redis_client.zrange.assert_called_once_with("customer:name:Jane Doe", 0, 0)
    assert customer.id == "c-1"


def test_redis_find_by_email_missing(redis_client, redis_directory):
    redis_client.get.return_value = None
    assert redis_directory.find_by_email("nobody@example.com") is None


def test_redis_update_moves_email_and_name_indexes(redis_client, redis_directory, pipe):
    watched = run_transactions(redis_client, pipe)
    pipe.get.side_effect = [stored_record(seq=3), None]

    redis_directory.update(make_customer(id="c-1", name="Jane Smith", email="smith@example.com"))

    assert watched == [("customer:record:c-1", "customer:email:smith@example.com")]
    pipe.get.assert_any_call("customer:email:smith@example.com")
    pipe.multi.assert_called_once()
    pipe.set.assert_any_call("customer:email:smith@example.com", "c-1")
    pipe.delete.assert_called_once_with("customer:email:jane@example.com")
    pipe.zrem.assert_called_once_with("customer:name:Jane Doe", "c-1")
    pipe.zadd.assert_called_once_with("customer:name:Jane Smith", {"c-1": 3})


def test_redis_update_same_email_only_rewrites_record(redis_client, redis_directory, pipe):
    run_transactions(redis_client, pipe)
    pipe.get.return_value = stored_record()

    redis_directory.update(make_customer(id="c-1", annual_spend=Decimal("20000.00")))

    pipe.get.assert_called_once_with("customer:record:c-1")
    pipe.set.assert_called_once()
    assert pipe.set.call_args.args[0] == "customer:record:c-1"
    pipe.delete.assert_not_called()
    pipe.zadd.assert_not_called()


def test_redis_update_to_taken_email_conflicts(redis_client, redis_directory, pipe):
    run_transactions(redis_client, pipe)
    pipe.get.side_effect = [stored_record(), "c-2"]

    with pytest.raises(ConflictError):
        redis_directory.update(make_customer(id="c-1", email="taken@example.com"))

    pipe.multi.assert_not_called()


def test_redis_update_unknown_id_is_not_found(redis_client, redis_directory, pipe):
    run_transactions(redis_client, pipe)
    pipe.get.return_value = None

    with pytest.raises(NotFoundError):
        redis_directory.update(make_customer(id="missing"))

    pipe.multi.assert_not_called()


def test_redis_delete_removes_all_keys(redis_client, redis_directory, pipe):
    watched = run_transactions(redis_client, pipe)
    pipe.get.return_value = stored_record()

    redis_directory.delete_by_id("c-1")

    assert watched == [("customer:record:c-1",)]
    pipe.multi.assert_called_once()
    pipe.delete.assert_any_call("customer:record:c-1")
    pipe.delete.assert_any_call("customer:email:jane@example.com")
    pipe.zrem.assert_called_once_with("customer:name:Jane Doe", "c-1")


def test_redis_delete_retried_after_concurrent_update_drops_current_email(redis_client, redis_directory):
    # First attempt reads the record before a concurrent email change; the
    # watch fails and the retry must release the email written by the update.
    stale, fresh = MagicMock(), MagicMock()
    stale.get.return_value = stored_record()
    fresh.get.return_value = stored_record(email="b@example.com")
    run_transactions(redis_client, stale, fresh)

    redis_directory.delete_by_id("c-1")

    fresh.delete.assert_any_call("customer:email:b@example.com")
    fresh.delete.assert_any_call("customer:record:c-1")


def test_redis_delete_missing_record_writes_nothing(redis_client, redis_directory, pipe):
    run_transactions(redis_client, pipe)
    pipe.get.return_value = None

    redis_directory.delete_by_id("missing")

    pipe.multi.assert_not_called()
    pipe.delete.assert_not_called()


def test_redis_exists_and_ping(redis_client, redis_directory):
    redis_client.exists.return_value = 1
    assert redis_directory.exists_by_id("c-1") is True
    redis_client.exists.assert_called_once_with("customer:record:c-1")

    redis_client.ping.side_effect = redis.ConnectionError("down")
    assert redis_directory.ping() is False


# ───────────────────────── factory ───────────────────────── #

def test_factory_creates_memory_directory():
    assert isinstance(DirectoryFactory.create_customer_directory("memory"), InMemoryCustomerDirectory)


def test_factory_rejects_unknown_storage():
    with pytest.raises(ValueError):
        DirectoryFactory.create_customer_directory("cassandra")
