import copy
from types import SimpleNamespace
import pytest
from bson import ObjectId
from microservices.storage_microservice import BroadcastChannel, LocalStore
from services.client_service import ClientRegistry


PROFILES = {
    "customer-1": {"uid": "customer-1", "email": "amina@example.com", "name": "Amina", "role": "customer"},
    "vendor-1": {"uid": "vendor-1", "email": "baraka@example.com", "name": "Baraka", "role": "vendor"},
    "admin-1": {"uid": "admin-1", "email": "admin@example.com", "name": "Admin", "role": "admin"},
}

PRODUCTS = [
    {"id": "a", "name": "Red Kitenge Dress", "description": "cotton", "price": 25000,
     "category": "clothing", "stock": 10, "rating": 4.5, "createdAt": "2024-01-01T00:00:00Z"},
    {"id": "b", "name": "Phone Charger", "description": "usb-c", "price": 15000,
     "category": "electronics", "stock": 3, "rating": 4.0, "createdAt": "2024-02-01T00:00:00Z"},
    {"id": "c", "name": "Red Mug", "description": "ceramic", "price": 5000,
     "category": "home", "stock": 0, "rating": 3.0, "createdAt": "2024-03-01T00:00:00Z"},
]


async def fake_fetch_profile(uid):
    return PROFILES.get(uid)


async def fake_catalog():
    return [dict(product) for product in PRODUCTS]


class FakeCursor:
    def __init__(self, documents):
        self.documents = documents

    def sort(self, key, direction=1):
        self.documents = sorted(self.documents, key=lambda document: document.get(key),
                                reverse=direction == -1)
        return self

    async def to_list(self, length):
        return self.documents[:length] if length else self.documents


class FakeCollection:
    """In memory stand in for the few motor calls the services make."""

    def __init__(self):
        self.documents = []
        self.fail = False

    def _check(self):
        if self.fail:
            raise ConnectionError("database down")

    @staticmethod
    def _matches(document, query):
        return all(document.get(key) == value for key, value in query.items())

    async def find_one(self, query, projection=None):
        self._check()
        for document in self.documents:
            if self._matches(document, query):
                return copy.deepcopy(document)
        return None

    def find(self, query=None):
        self._check()
        return FakeCursor([copy.deepcopy(document) for document in self.documents
                           if self._matches(document, query or {})])

    async def insert_one(self, document):
        self._check()
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def update_one(self, query, update, upsert=False):
        self._check()
        target = next((document for document in self.documents if self._matches(document, query)), None)
        if target is None:
            if not upsert:
                return SimpleNamespace(matched_count=0, modified_count=0)
            target = dict(query)
            self.documents.append(target)
            matched = 0
        else:
            matched = 1
        for path, value in update.get("$set", {}).items():
            *parents, leaf = path.split(".")
            node = target
            for parent in parents:
                node = node.setdefault(parent, {})
            node[leaf] = value
        for path in update.get("$unset", {}):
            *parents, leaf = path.split(".")
            node = target
            for parent in parents:
                node = node.get(parent, {})
            node.pop(leaf, None)
        return SimpleNamespace(matched_count=matched, modified_count=1)

    async def delete_one(self, query):
        self._check()
        for index, document in enumerate(self.documents):
            if self._matches(document, query):
                del self.documents[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


@pytest.fixture
def store_collection():
    return FakeCollection()


@pytest.fixture
def store(store_collection):
    return LocalStore(store_collection, "client-1")


@pytest.fixture
def channel():
    return BroadcastChannel()


@pytest.fixture
def registry(store_collection):
    return ClientRegistry(store_collection=store_collection, fetch_profile=fake_fetch_profile,
                          catalog_loader=fake_catalog)
