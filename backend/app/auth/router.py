"""
Authentication routes
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, Response
from app.auth.dependencies import get_session_provider, require_session
from app.auth.schemas import AuthScreen, LoginRequest, SignUpRequest, Token, UserResponse
from app.auth.session import Session, SessionProvider
from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.pages.dependencies import get_store
from app.store.client import StoreClient

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])
screen_router = APIRouter(tags=["Authentication"])


def session_response(session: Session, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Token body plus the session cookie browsers send back on page requests"""
    expires_in = max(int(session.expires_at.timestamp() - datetime.now(timezone.utc).timestamp()), 0)
    token = Token(access_token=session.access_token, expires_at=session.expires_at, expires_in=expires_in)
    response = JSONResponse(status_code=status_code, content=token.model_dump(mode="json"))
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        session.access_token,
        max_age=expires_in,
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
    )
    return response


@screen_router.get(settings.AUTH_ROUTE, response_model=AuthScreen)
async def auth_screen():
    """Where pages send visitors without a session"""
    return AuthScreen()


@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignUpRequest,
    provider: SessionProvider = Depends(get_session_provider),
):
    """Register a new user and sign them in"""
    session = await provider.sign_up(payload.email, payload.password, payload.full_name)
    return session_response(session, status.HTTP_201_CREATED)


@router.post("/login", response_model=Token)
async def login(
    credentials: LoginRequest,
    provider: SessionProvider = Depends(get_session_provider),
):
    """Authenticate and start a session"""
    session = await provider.sign_in_with_password(credentials.email, credentials.password)
    return session_response(session)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(provider: SessionProvider = Depends(get_session_provider)):
    """End the session and clear the cookie"""
    await provider.sign_out()
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/me", response_model=UserResponse)
async def me(
    session: Session = Depends(require_session),
    store: StoreClient = Depends(get_store),
):
    """Profile and roles of the signed-in user"""
    profiles = await store.table("profiles").select("id, email, full_name")
    profile = next((p for p in profiles.rows if p["id"] == session.user.id), None)
    if profile is None:
        raise NotFoundError("Profile", session.user.id)
    roles = await store.table("user_roles").select("user_id, role")
    return UserResponse(
        id=session.user.id,
        email=profile["email"],
        full_name=profile["full_name"],
        roles=sorted(r["role"] for r in roles.rows if r["user_id"] == session.user.id),
        expires_at=session.expires_at,
    )
