"""Customer directory backed by Redis (Repository Pattern)."""
import logging
import json
import uuid
from datetime import date
from decimal import Decimal
from typing import Optional, Dict, Any
import redis
from redis.client import Pipeline

from customer_api.domain.entities.customer import Customer
from customer_api.domain.exceptions import ConflictError, NotFoundError
from customer_api.domain.interfaces.customer_directory import ICustomerDirectory
from customer_api.infrastructure.redis_client import RedisClientFactory


class RedisCustomerDirectory(ICustomerDirectory):
    """
    Customer directory backed by Redis.

    Key layout:
        customer:record:{id}     JSON record
        customer:email:{email}   id owning the email
        customer:name:{name}     sorted set of ids scored by insertion sequence
        customer:seq             insertion sequence counter

    Records have their own sub-prefix so no identifier can address an index
    key. Every read-modify-write runs in a WATCH/MULTI transaction: insert
    watches the email key, update and delete watch the record key, so a
    concurrent writer makes the transaction retry against fresh state.
    """

    def __init__(self, redis_client: Optional[redis.Redis] = None, key_prefix: str = "customer:"):
        """
        Initialize the customer directory.

        Args:
            redis_client: Redis client instance (Dependency Injection)
            key_prefix: Prefix for every key this directory owns
        """
        self.redis = redis_client or RedisClientFactory.get_client()
        self._key_prefix = key_prefix
        self._logger = logging.getLogger(__name__)

    def _record_key(self, customer_id: str) -> str:
        return f"{self._key_prefix}record:{customer_id}"

    def _email_key(self, email: str) -> str:
        return f"{self._key_prefix}email:{email}"

    def _name_key(self, name: str) -> str:
        return f"{self._key_prefix}name:{name}"

    def _seq_key(self) -> str:
        return f"{self._key_prefix}seq"

    @staticmethod
    def _serialize(customer: Customer, seq: int) -> str:
        return json.dumps({
            "id": customer.id,
            "name": customer.name,
            "email": customer.email,
            "annual_spend": str(customer.annual_spend) if customer.annual_spend is not None else None,
            "last_purchase_date": customer.last_purchase_date.isoformat() if customer.last_purchase_date else None,
            "seq": seq,
        })

    @staticmethod
    def _deserialize(data: str) -> Dict[str, Any]:
        record = json.loads(data)
        spend = record.get("annual_spend")
        purchase = record.get("last_purchase_date")
        record["customer"] = Customer(
            id=record["id"],
            name=record["name"],
            email=record["email"],
            annual_spend=Decimal(spend) if spend is not None else None,
            last_purchase_date=date.fromisoformat(purchase) if purchase else None,
        )
        return record

    def insert(self, customer: Customer) -> Customer:
        customer_id = str(uuid.uuid4())
        email_key = self._email_key(customer.email)
        stored = Customer(
            id=customer_id,
            name=customer.name,
            email=customer.email,
            annual_spend=customer.annual_spend,
            last_purchase_date=customer.last_purchase_date,
        )

        def write(pipe: Pipeline) -> int:
            owner = pipe.get(email_key)
            if owner is not None:
                self._logger.info(f"Email {customer.email} already belongs to customer {owner}")
                raise ConflictError("email", customer.email)
            seq = pipe.incr(self._seq_key())
            pipe.multi()
            pipe.set(email_key, customer_id)
            pipe.set(self._record_key(customer_id), self._serialize(stored, seq))
            pipe.zadd(self._name_key(stored.name), {customer_id: seq})
            return seq

        try:
            seq = self.redis.transaction(write, email_key, value_from_callable=True)
        except redis.RedisError as e:
            self._logger.error(f"Failed to store customer {customer_id}: {e}")
            raise

        self._logger.debug(f"Stored customer {customer_id} (seq {seq})")
        return stored

    def find_by_id(self, customer_id: str) -> Optional[Customer]:
        data = self.redis.get(self._record_key(customer_id))
        if data is None:
            return None
        return self._deserialize(data)["customer"]

    def find_by_name(self, name: str) -> Optional[Customer]:
        ids = self.redis.zrange(self._name_key(name), 0, 0)
        if not ids:
            return None
        return self.find_by_id(ids[0])

    def find_by_email(self, email: str) -> Optional[Customer]:
        customer_id = self.redis.get(self._email_key(email))
        if customer_id is None:
            return None
        return self.find_by_id(customer_id)

    def update(self, customer: Customer) -> Customer:
        record_key = self._record_key(customer.id)
        new_email_key = self._email_key(customer.email)

        def write(pipe: Pipeline) -> None:
            data = pipe.get(record_key)
            if data is None:
                raise NotFoundError("id", customer.id)
            previous = self._deserialize(data)
            old = previous["customer"]
            seq = previous["seq"]

            email_changed = old.email != customer.email
            if email_changed:
                owner = pipe.get(new_email_key)
                if owner is not None and owner != customer.id:
                    self._logger.info(f"Email {customer.email} already belongs to customer {owner}")
                    raise ConflictError("email", customer.email)

            pipe.multi()
            pipe.set(record_key, self._serialize(customer, seq))
            if email_changed:
                pipe.delete(self._email_key(old.email))
                pipe.set(new_email_key, customer.id)
            if old.name != customer.name:
                pipe.zrem(self._name_key(old.name), customer.id)
                pipe.zadd(self._name_key(customer.name), {customer.id: seq})

        try:
            self.redis.transaction(write, record_key, new_email_key)
        except redis.RedisError as e:
            self._logger.error(f"Failed to update customer {customer.id}: {e}")
            raise

        self._logger.debug(f"Updated customer {customer.id}")
        return customer

    def exists_by_id(self, customer_id: str) -> bool:
        return bool(self.redis.exists(self._record_key(customer_id)))

    def delete_by_id(self, customer_id: str) -> None:
        record_key = self._record_key(customer_id)

        def write(pipe: Pipeline) -> bool:
            data = pipe.get(record_key)
            if data is None:
                return False
            old = self._deserialize(data)["customer"]
            pipe.multi()
            pipe.delete(record_key)
            pipe.delete(self._email_key(old.email))
            pipe.zrem(self._name_key(old.name), customer_id)
            return True

        deleted = self.redis.transaction(write, record_key, value_from_callable=True)
        if deleted:
            self._logger.debug(f"Deleted customer {customer_id}")
        else:
            self._logger.debug(f"No customer to delete for {customer_id}")

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except redis.RedisError as e:
            self._logger.error(f"Redis ping failed: {e}")
            return False
