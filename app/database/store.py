import logging
from typing import Any, Awaitable, Protocol, Sequence

from bson import ObjectId
from bson.errors import BSONError
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

PRODUCTS_COLLECTION = "products"

Record = dict[str, Any]
# Limit arrives untyped from the request; only the store interprets it.
LimitValue = str | int


# Driver and BSON encoding failures (over-range ints raise OverflowError)
DRIVER_ERRORS = (PyMongoError, BSONError, OverflowError)


class PersistenceError(Exception):
    """Raised when the product store cannot complete an operation."""


class ProductQuery(Protocol):
    def limit(self, n: LimitValue) -> Awaitable[Sequence[Record]]: ...


class ProductStore(Protocol):
    def create(self, record: Record) -> Awaitable[Record]: ...

    def find(self) -> ProductQuery: ...


def _serialize(doc: Record) -> Record:
    out = dict(doc)
    if isinstance(out.get("_id"), ObjectId):
        out["_id"] = str(out["_id"])
    return out


def _coerce_limit(n: LimitValue) -> int:
    """
    Turn the raw limit into the integer MongoDB expects.

    Strings such as "10" or " 5 " are accepted, 0 means no limit (MongoDB
    semantics) and negatives are handed to the driver as-is.
    """
    if isinstance(n, bool):
        raise PersistenceError(f"Invalid limit: {n!r}")
    if isinstance(n, int):
        return n
    try:
        return int(str(n).strip())
    except ValueError as e:
        raise PersistenceError(f"Invalid limit: {n!r}") from e


class MongoProductQuery:
    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def limit(self, n: LimitValue) -> list[Record]:
        count = _coerce_limit(n)
        try:
            cursor = self.collection.find().limit(count)
            docs = await cursor.to_list(None)
        except DRIVER_ERRORS as e:
            raise PersistenceError(f"Failed to fetch products: {e}") from e
        return [_serialize(doc) for doc in docs]


class MongoProductStore:
    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    @classmethod
    def from_database(cls, db) -> "MongoProductStore":
        return cls(db[PRODUCTS_COLLECTION])

    async def create(self, record: Record) -> Record:
        doc = dict(record)
        try:
            result = await self.collection.insert_one(doc)
        except DRIVER_ERRORS as e:
            raise PersistenceError(f"Failed to insert product: {e}") from e
        doc["_id"] = result.inserted_id
        logger.debug("Inserted product %s", result.inserted_id)
        return _serialize(doc)

    def find(self) -> MongoProductQuery:
        return MongoProductQuery(self.collection)
