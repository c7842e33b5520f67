"""
Session provider and the shared session context handed to pages

The provider is the auth service as seen by a client: it resolves the
current session from an access token and notifies subscribers whenever a
sign-in or sign-out changes it. SessionContext subscribes to a provider
once and fans changes out to every view that depends on it.
"""
import enum
import inspect
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, Union

from sqlalchemy.orm import sessionmaker
from starlette.concurrency import run_in_threadpool
import structlog

from app.auth.service import (
    authenticate_user,
    create_access_token,
    create_user,
    decode_access_token,
    update_user_last_login,
)
from app.core.database import SessionLocal
from app.core.exceptions import AuthenticationError, ValidationError

logger = structlog.get_logger()


class AuthChangeEvent(str, enum.Enum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


@dataclass(frozen=True)
class SessionUser:
    id: str
    email: str


@dataclass(frozen=True)
class Session:
    """An authenticated identity token plus its expiry"""

    access_token: str
    expires_at: datetime
    user: SessionUser

    @property
    def expired(self) -> bool:
        return self.expires_at <= datetime.now(timezone.utc)


SessionListener = Callable[[AuthChangeEvent, Optional[Session]], Union[None, Awaitable[None]]]


class Subscription:
    """Handle returned by a subscribe call; unsubscribing twice is harmless"""

    def __init__(self, listeners: List[SessionListener], callback: SessionListener):
        self._listeners = listeners
        self._callback = callback
        self.active = True

    def unsubscribe(self):
        if self.active and self._callback in self._listeners:
            self._listeners.remove(self._callback)
        self.active = False


async def _notify(listeners: List[SessionListener], event: AuthChangeEvent, session: Optional[Session]):
    # Copy: listeners may unsubscribe while being notified
    for callback in list(listeners):
        result = callback(event, session)
        if inspect.isawaitable(result):
            await result


class SessionProvider:
    """Auth service client holding at most one session"""

    def __init__(self, session_factory: sessionmaker = SessionLocal, access_token: Optional[str] = None):
        self.session_factory = session_factory
        self._access_token = access_token
        self._listeners: List[SessionListener] = []

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    async def get_session(self) -> Optional[Session]:
        """Resolve the current session; a missing, invalid or expired token gives None"""
        if not self._access_token:
            return None
        payload = decode_access_token(self._access_token)
        if payload is None:
            return None
        session = Session(
            access_token=self._access_token,
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            user=SessionUser(id=payload["sub"], email=payload.get("email", "")),
        )
        return None if session.expired else session

    def on_session_change(self, callback: SessionListener) -> Subscription:
        self._listeners.append(callback)
        return Subscription(self._listeners, callback)

    async def sign_up(self, email: str, password: str, full_name: str) -> Session:
        """Register a user (profile and default role included) and sign them in"""
        try:
            await run_in_threadpool(self._create_user, email, password, full_name)
        except ValueError as e:
            raise ValidationError(str(e))
        return await self.sign_in_with_password(email, password)

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        user_id, user_email = await run_in_threadpool(self._authenticate, email, password)
        token, _ = create_access_token({"sub": user_id, "email": user_email})
        self._access_token = token
        session = await self.get_session()
        logger.info("user_signed_in", user_id=user_id)
        await _notify(self._listeners, AuthChangeEvent.SIGNED_IN, session)
        return session

    async def sign_out(self):
        self._access_token = None
        logger.info("user_signed_out")
        await _notify(self._listeners, AuthChangeEvent.SIGNED_OUT, None)

    def _create_user(self, email, password, full_name):
        with self.session_factory() as db:
            create_user(db, email=email, password=password, full_name=full_name)

    def _authenticate(self, email, password):
        with self.session_factory() as db:
            user = authenticate_user(db, email, password)
            if user is None:
                logger.warning("failed_login_attempt", email=email)
                raise AuthenticationError("Invalid login credentials")
            if not user.is_active:
                raise AuthenticationError("User account is inactive")
            update_user_last_login(db, user)
            return user.id, user.email


class SessionContext:
    """
    Session state shared by every view of one client

    `init()` subscribes to the provider, `teardown()` unsubscribes it and
    drops all view listeners. Views read the session with `get_session()`
    and follow changes with `subscribe()`.
    """

    def __init__(self, provider: SessionProvider):
        self.provider = provider
        self.current: Optional[Session] = None
        self._listeners: List[SessionListener] = []
        self._subscription: Optional[Subscription] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.current.user.id if self.current else None

    async def init(self) -> Optional[Session]:
        if self._subscription is None:
            self._subscription = self.provider.on_session_change(self._relay)
        self.current = await self.provider.get_session()
        return self.current

    async def teardown(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._listeners.clear()

    async def get_session(self) -> Optional[Session]:
        self.current = await self.provider.get_session()
        return self.current

    def subscribe(self, listener: SessionListener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self._listeners, listener)

    async def _relay(self, event: AuthChangeEvent, session: Optional[Session]):
        self.current = session
        await _notify(self._listeners, event, session)
