import pytest


class FakeProductQuery:
    def __init__(self, store):
        self.store = store

    async def limit(self, n):
        self.store.limit_calls.append(n)
        if self.store.find_error is not None:
            raise self.store.find_error
        if self.store.pending is not None:
            return await self.store.pending
        return list(self.store.find_result)


class FakeProductStore:
    """In-memory stand-in for MongoProductStore that records every call."""

    def __init__(self, find_result=None):
        self.find_result = find_result or []
        self.create_result = None
        self.create_error = None
        self.find_error = None
        self.pending = None

        self.create_calls = []
        self.limit_calls = []
        self.find_calls = 0

    async def create(self, record):
        self.create_calls.append(record)
        if self.create_error is not None:
            raise self.create_error
        if self.create_result is not None:
            return self.create_result
        return {"_id": str(len(self.create_calls)), **record}

    def find(self):
        self.find_calls += 1
        return FakeProductQuery(self)


@pytest.fixture
def store():
    return FakeProductStore()
