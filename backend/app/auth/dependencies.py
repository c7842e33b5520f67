"""
Authentication dependencies for FastAPI routes
"""
from typing import AsyncGenerator, Optional
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import sessionmaker

from app.auth.session import Session, SessionContext, SessionProvider
from app.core.config import settings
from app.core.database import SessionLocal
from app.core.exceptions import AuthenticationError

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/auth/login", auto_error=False)


def get_session_factory() -> sessionmaker:
    """Session factory used by the store and the auth service"""
    return SessionLocal


def get_access_token(
    request: Request,
    bearer: Optional[str] = Depends(oauth2_scheme),
) -> Optional[str]:
    """Bearer token if sent, otherwise the session cookie"""
    return bearer or request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_session_provider(
    token: Optional[str] = Depends(get_access_token),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> SessionProvider:
    return SessionProvider(session_factory, token)


async def get_session_context(
    provider: SessionProvider = Depends(get_session_provider),
) -> AsyncGenerator[SessionContext, None]:
    """Session context for the lifetime of one request"""
    context = SessionContext(provider)
    await context.init()
    try:
        yield context
    finally:
        await context.teardown()


def require_session(context: SessionContext = Depends(get_session_context)) -> Session:
    """Reject requests without a live session"""
    if context.current is None:
        raise AuthenticationError("Not signed in")
    return context.current
