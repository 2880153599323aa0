import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional


logger = logging.getLogger(__name__)

CART_KEY = "marketplace_cart"
LANGUAGE_KEY = "marketplace_language"

# broadcast topics shared by every context of one client origin
CART_INVALIDATED = "cart-invalidated"
LANGUAGE_CHANGED = "language-changed"


class LocalStore:
    """Durable string key-value store for one client origin.

    Every value is a string, like browser local storage. The values live in
    one document keyed by the client id. Reads come from the copy loaded by
    ``load()``, writes update that copy and the document.
    """

    def __init__(self, collection, client_id: str):
        self.collection = collection
        self.client_id = client_id
        self._data: Dict[str, str] = {}

    async def load(self):
        try:
            document = await self.collection.find_one({"_id": self.client_id})
        except Exception as e:
            logger.error("Error reading client store %s: %s", self.client_id, e)
            return
        values = (document or {}).get("values") or {}
        if not isinstance(values, dict):
            logger.error("Client store %s is not an object, ignoring it", self.client_id)
            values = {}
        self._data = {str(key): value for key, value in values.items() if isinstance(value, str)}

    async def _update(self, update: dict):
        update.setdefault("$set", {})["updatedAt"] = datetime.now(timezone.utc)
        try:
            await self.collection.update_one({"_id": self.client_id}, update, upsert=True)
        except Exception as e:
            # the in memory copy stays the source of truth for this process
            logger.error("Error writing client store %s: %s", self.client_id, e)

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set_item(self, key: str, value: str):
        self._data[key] = value
        await self._update({"$set": {f"values.{key}": value}})

    async def remove_item(self, key: str):
        if self._data.pop(key, None) is not None:
            await self._update({"$unset": {f"values.{key}": ""}})

    def keys(self) -> List[str]:
        return list(self._data)


async def ensure_store_indexes(collection, ttl_days: int):
    # client documents nobody touched for ttl_days are removed by mongo
    await collection.create_index("updatedAt", expireAfterSeconds=ttl_days * 24 * 60 * 60)


class BroadcastChannel:
    """Topic based pub/sub between the contexts of one client origin."""

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = defaultdict(list)

    def subscribe(self, topic: str, callback: Callable) -> Callable[[], None]:
        self._subscribers[topic].append(callback)

        def unsubscribe():
            if callback in self._subscribers[topic]:
                self._subscribers[topic].remove(callback)
        return unsubscribe

    def publish(self, topic: str, payload=None):
        for callback in list(self._subscribers[topic]):
            try:
                callback(payload)
            except Exception:
                logger.exception("Subscriber failed on topic %s", topic)

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers[topic])


def storage_event(key: str, new_value: Optional[str]):
    return {"key": key, "new_value": new_value}
