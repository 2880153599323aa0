import json
import logging
from typing import Callable, Dict, List, Mapping, Optional
from microservices.storage_microservice import CART_INVALIDATED, CART_KEY, BroadcastChannel, LocalStore


logger = logging.getLogger(__name__)


class CartState:
    """The shopping cart of one client context.

    Items are kept in insertion order and mirrored into the local store
    after every change. Quantities stay at one or more, a change that
    would drop a line item to zero removes it. A cart-invalidated broadcast
    with an empty value (logout in this or another context) empties the
    cart without writing the store again.
    """

    def __init__(self, store: LocalStore, channel: BroadcastChannel, notify: Optional[Callable[[str], None]] = None):
        self.store = store
        self.channel = channel
        self.notify = notify or (lambda message: None)
        self.items: List[Dict] = self._restore()
        self.is_open = False
        self._unsubscribe = channel.subscribe(
            CART_INVALIDATED, self._on_invalidated)

    def _restore(self) -> List[Dict]:
        saved_cart = self.store.get_item(CART_KEY)
        if not saved_cart:
            return []
        try:
            items = json.loads(saved_cart)
        except ValueError as e:
            logger.error("Error parsing saved cart: %s", e)
            return []
        if not isinstance(items, list):
            logger.error("Saved cart is not a list, starting empty")
            return []
        return [item for item in items
                if isinstance(item, dict) and _number(item.get("quantity")) >= 1]

    async def _persist(self):
        await self.store.set_item(CART_KEY, json.dumps(self.items, default=str))

    def _on_invalidated(self, event):
        if event and event.get("key") != CART_KEY:
            return
        if event is None or not event.get("new_value"):
            self.items = []

    def _find(self, product_id: str) -> Optional[Dict]:
        for item in self.items:
            if item.get("id") == product_id:
                return item
        return None

    async def add_item(self, product: Mapping, quantity: int = 1):
        product_id = str(product.get("id") or product.get("_id") or "")
        existing_item = self._find(product_id)
        if existing_item:
            new_quantity = existing_item.get("quantity", 0) + quantity
            if new_quantity <= 0:
                await self.remove_item(product_id)
                return
            existing_item["quantity"] = new_quantity
            self.notify("Quantity updated in cart!")
        else:
            if quantity <= 0:
                return
            item = {key: value for key, value in product.items() if key != "_id"}
            item["id"] = product_id
            item.setdefault("name", "")
            item.setdefault("price", 0)
            item.setdefault("images", [])
            item["quantity"] = quantity
            self.items.append(item)
            self.notify("Added to cart!")
        await self._persist()

    async def remove_item(self, product_id: str):
        self.items = [item for item in self.items if item.get("id") != product_id]
        await self._persist()
        self.notify("Removed from cart")

    async def update_quantity(self, product_id: str, quantity: int):
        if quantity <= 0:
            await self.remove_item(product_id)
            return
        item = self._find(product_id)
        if item:
            item["quantity"] = quantity
        await self._persist()

    async def clear(self, message: str = "Cart cleared"):
        self.items = []
        await self._persist()
        if message:
            self.notify(message)

    def total_item_count(self) -> int:
        return sum(item.get("quantity", 0) for item in self.items)

    def total_price(self) -> float:
        return sum(_number(item.get("price")) * item.get("quantity", 0) for item in self.items)

    def open(self):
        self.is_open = True

    def close(self):
        self.is_open = False

    def snapshot(self) -> Dict:
        return {
            "items": self.items,
            "is_open": self.is_open,
            "total_items": self.total_item_count(),
            "total_price": self.total_price(),
        }

    def dispose(self):
        self._unsubscribe()


def _number(value) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0
