"""
Session-gated page controller
"""
from contextlib import asynccontextmanager
from dataclasses import dataclass, asdict
from typing import List, Optional, Protocol

import structlog

from app.auth.session import AuthChangeEvent, Session, SessionContext, Subscription
from app.core.config import settings
from app.store.client import StoreClient

logger = structlog.get_logger()


class Navigator(Protocol):
    def navigate(self, route: str) -> None:
        ...


class RecordingNavigator:
    """Navigator that remembers where the page asked to go"""

    def __init__(self):
        self.history: List[str] = []

    @property
    def redirect_to(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def navigate(self, route: str) -> None:
        self.history.append(route)


@dataclass
class Notification:
    level: str  # success, error
    message: str


class Notifier:
    """Transient, dismissable notifications shown by a page"""

    def __init__(self):
        self.items: List[Notification] = []

    def success(self, message: str):
        self.items.append(Notification("success", message))

    def error(self, message: str):
        self.items.append(Notification("error", message))

    def dismiss(self, index: int):
        del self.items[index]

    def as_list(self) -> List[dict]:
        return [asdict(item) for item in self.items]


class Lifetime:
    """Cancellation token tied to one mount of a page"""

    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class PageController:
    """
    Base for pages that only render for a signed-in user.

    mount() subscribes to session changes and resolves the current session.
    Without one the page navigates to the auth route and loads nothing;
    with one it loads its data. Every later change either redirects (signed
    out) or reloads. Asynchronous results are applied only while the
    Lifetime captured at request time is still live.
    """

    name = "page"

    def __init__(
        self,
        context: SessionContext,
        store: StoreClient,
        navigator: Navigator,
        notifier: Optional[Notifier] = None,
    ):
        self.context = context
        self.store = store
        self.navigator = navigator
        self.notifier = notifier or Notifier()
        self.session: Optional[Session] = None
        self.lifetime = Lifetime()
        self._subscription: Optional[Subscription] = None

    @property
    def authenticated(self) -> bool:
        return self.session is not None

    async def mount(self):
        self.lifetime = Lifetime()
        lifetime = self.lifetime
        self._subscription = self.context.subscribe(self._on_session_change)

        session = await self.context.get_session()
        if lifetime.cancelled:
            return
        if session is None:
            self._redirect_to_auth()
            return
        self.session = session
        await self.load()

    async def unmount(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self.lifetime.cancel()

    @asynccontextmanager
    async def mounted(self):
        await self.mount()
        try:
            yield self
        finally:
            await self.unmount()

    async def load(self):
        raise NotImplementedError

    def is_stale(self, lifetime: Lifetime) -> bool:
        if lifetime.cancelled:
            logger.debug("stale_result_discarded", page=self.name)
            return True
        return False

    async def _on_session_change(self, event: AuthChangeEvent, session: Optional[Session]):
        self.session = session
        if session is None:
            self._redirect_to_auth()
            return
        await self.load()

    def _redirect_to_auth(self):
        logger.info("page_requires_session", page=self.name, redirect_to=settings.AUTH_ROUTE)
        self.navigator.navigate(settings.AUTH_ROUTE)
