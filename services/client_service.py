import logging
from collections import OrderedDict
from typing import Dict, List
from config import MAX_CLIENT_ORIGINS, MAX_CONTEXTS_PER_ORIGIN
from microservices.storage_microservice import BroadcastChannel, LocalStore
from mongomanager import client_stores_collection
from services.cart_service import CartState
from services.catalog_service import CatalogView
from services.language_service import LanguageState
from services.products_service import get_products
from services.session_service import AuthStateStream, SessionState
from services.users_service import get_user_data


logger = logging.getLogger(__name__)

DEFAULT_CONTEXT = "main"


class Toasts:
    """Confirmation messages waiting to be shown to one context."""

    def __init__(self):
        self._messages: List[Dict] = []

    def push(self, message: str, level: str = "success"):
        self._messages.append({"level": level, "message": message})

    def drain(self) -> List[Dict]:
        messages, self._messages = self._messages, []
        return messages


class ClientOrigin:
    # everything one browser shares between its tabs
    def __init__(self, store: LocalStore):
        self.store = store
        self.channel = BroadcastChannel()
        self.auth_stream = AuthStateStream()
        self.contexts: "OrderedDict[str, ClientContext]" = OrderedDict()


class ClientContext:
    """State containers of one tab, built once and handed to the routes."""

    def __init__(self, origin: ClientOrigin, fetch_profile, catalog_loader):
        self.origin = origin
        self.toasts = Toasts()
        self.cart = CartState(origin.store, origin.channel, notify=self.toasts.push)
        self.language = LanguageState(origin.store, origin.channel)
        self.session = SessionState(origin.auth_stream, fetch_profile, origin.store, origin.channel)
        self.catalog = CatalogView(catalog_loader)

    @property
    def auth_stream(self) -> AuthStateStream:
        return self.origin.auth_stream

    def dispose(self):
        self.cart.dispose()
        self.language.dispose()
        self.session.dispose()


class ClientRegistry:
    """Live client state, least recently used first.

    Each origin keeps at most ``max_contexts`` tabs and the registry at most
    ``max_origins`` browsers. Past either limit the least recently used one
    is disposed. Its store document stays, so a returning browser gets its
    cart and language back.
    """

    def __init__(self, store_collection=client_stores_collection, fetch_profile=get_user_data,
                 catalog_loader=get_products, max_origins=MAX_CLIENT_ORIGINS,
                 max_contexts=MAX_CONTEXTS_PER_ORIGIN):
        self.store_collection = store_collection
        self.fetch_profile = fetch_profile
        self.catalog_loader = catalog_loader
        self.max_origins = max(max_origins, 1)
        self.max_contexts = max(max_contexts, 1)
        self._origins: "OrderedDict[str, ClientOrigin]" = OrderedDict()

    async def _origin(self, client_id: str) -> ClientOrigin:
        origin = self._origins.get(client_id)
        if origin is not None:
            self._origins.move_to_end(client_id)
            return origin
        store = LocalStore(self.store_collection, client_id)
        await store.load()
        # another request may have built it while the store was loading
        origin = self._origins.get(client_id)
        if origin is None:
            origin = ClientOrigin(store)
            self._origins[client_id] = origin
            while len(self._origins) > self.max_origins:
                self.drop(next(iter(self._origins)))
        return origin

    async def get(self, client_id: str, context_id: str = DEFAULT_CONTEXT) -> ClientContext:
        origin = await self._origin(client_id)
        context = origin.contexts.get(context_id)
        if context is not None:
            origin.contexts.move_to_end(context_id)
            return context
        context = ClientContext(origin, self.fetch_profile, self.catalog_loader)
        origin.contexts[context_id] = context
        while len(origin.contexts) > self.max_contexts:
            stale_id, stale = origin.contexts.popitem(last=False)
            stale.dispose()
            logger.info("Evicted context %s of client %s", stale_id, client_id)
        return context

    def drop(self, client_id: str, context_id: str = None):
        # unsubscribes the dropped contexts from their origin
        origin = self._origins.get(client_id)
        if origin is None:
            return
        context_ids = (context_id,) if context_id else tuple(origin.contexts)
        for key in context_ids:
            context = origin.contexts.pop(key, None)
            if context is not None:
                context.dispose()
        if not origin.contexts:
            self._origins.pop(client_id, None)

    def context_ids(self, client_id: str) -> List[str]:
        origin = self._origins.get(client_id)
        return list(origin.contexts) if origin else []

    def __len__(self):
        return len(self._origins)


registry = ClientRegistry()


def get_registry() -> ClientRegistry:
    return registry
