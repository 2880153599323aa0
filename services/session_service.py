import enum
import logging
from typing import Awaitable, Callable, Dict, List, Optional
from microservices.storage_microservice import CART_INVALIDATED, CART_KEY, BroadcastChannel, LocalStore, storage_event


logger = logging.getLogger(__name__)


class SessionStatus(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING_PROFILE = "authenticating_profile"
    AUTHENTICATED = "authenticated"
    ERROR = "error"


class AuthStateStream:
    """Current identity of one client origin and the listeners watching it."""

    def __init__(self):
        self.current: Optional[Dict] = None
        self._listeners: List[Callable[[Optional[Dict]], Awaitable[None]]] = []

    def subscribe(self, listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    async def emit(self, identity: Optional[Dict]):
        self.current = identity
        for listener in list(self._listeners):
            await listener(identity)

    async def sign_in(self, identity: Dict):
        await self.emit(identity)

    async def sign_out(self):
        await self.emit(None)


class SessionState:
    """Role aware session of one client context.

    Follows the identity stream, loads the profile of every signed in user
    and clears the cart whenever the session ends, so a cart never outlives
    the user it was built for.
    """

    def __init__(self, stream: AuthStateStream, fetch_profile: Callable[[str], Awaitable[Optional[Dict]]],
                 store: LocalStore, channel: BroadcastChannel):
        self.stream = stream
        self.fetch_profile = fetch_profile
        self.store = store
        self.channel = channel
        self.auth_user: Optional[Dict] = None
        self.profile: Optional[Dict] = None
        self.status = SessionStatus.UNAUTHENTICATED
        self._unsubscribe = stream.subscribe(self._on_identity)

    @property
    def is_vendor(self) -> bool:
        return self.profile is not None and self.profile.get("role") == "vendor"

    @property
    def is_admin(self) -> bool:
        return self.profile is not None and self.profile.get("role") == "admin"

    @property
    def loading(self) -> bool:
        return self.status == SessionStatus.AUTHENTICATING_PROFILE

    async def _on_identity(self, identity: Optional[Dict]):
        if identity is None:
            logger.info("No user authenticated, clearing session")
            await self._end_session()
            return
        uid = identity.get("uid")
        self.auth_user = identity
        self.profile = None
        self.status = SessionStatus.AUTHENTICATING_PROFILE
        try:
            profile = await self.fetch_profile(uid)
            if profile is None:
                raise LookupError(f"No profile for user {uid}")
        except Exception as e:
            logger.error("Error fetching user data for %s: %s", uid, e)
            if not self._is_current(uid):
                return
            self.status = SessionStatus.ERROR
            await self._force_sign_out()
            return
        if not self._is_current(uid):
            return
        self.profile = profile
        self.status = SessionStatus.AUTHENTICATED

    def _is_current(self, uid) -> bool:
        # false once a newer identity arrived while the profile was loading
        current = self.stream.current
        return current is not None and current.get("uid") == uid

    async def _force_sign_out(self):
        try:
            await self.stream.sign_out()
        except Exception:
            logger.exception("Sign out after profile failure failed")
        await self._end_session()

    async def _end_session(self):
        self.auth_user = None
        self.profile = None
        self.status = SessionStatus.UNAUTHENTICATED
        await self.clear_cart()

    async def clear_cart(self):
        await self.store.remove_item(CART_KEY)
        self.channel.publish(CART_INVALIDATED, storage_event(CART_KEY, None))

    async def logout(self):
        logger.info("Logging out user")
        try:
            await self.stream.sign_out()
        except Exception:
            logger.exception("Logout error")
        await self._end_session()

    def snapshot(self) -> Dict:
        profile = None
        if self.profile is not None:
            profile = {key: value for key, value in self.profile.items()
                       if key != "password"}
        return {
            "status": self.status.value,
            "user": self.auth_user,
            "profile": profile,
            "isVendor": self.is_vendor,
            "isAdmin": self.is_admin,
            "loading": self.loading,
        }

    def dispose(self):
        self._unsubscribe()
