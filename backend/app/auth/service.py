"""
Authentication service layer
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple
from sqlalchemy.orm import Session
from jose import JWTError, jwt
from passlib.context import CryptContext
import structlog

from app.core.config import settings
from app.models.user import AppRole, Profile, User, UserRole

logger = structlog.get_logger()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password"""
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> Tuple[str, datetime]:
    """Create JWT access token, returning it with its expiry"""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire, "type": "access"})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt, expire


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode an access token; invalid or expired tokens give None"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != "access" or not payload.get("sub"):
        return None
    return payload


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by email"""
    return db.query(User).filter(User.email == email.lower()).first()


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """Authenticate user with email and password"""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def create_user(
    db: Session,
    email: str,
    password: str,
    full_name: str,
    role: Optional[str] = None,
) -> User:
    """Create a user together with their profile and role"""
    if get_user_by_email(db, email):
        raise ValueError(f"User with email {email} already exists")

    user = User(email=email.lower(), hashed_password=get_password_hash(password))
    db.add(user)
    db.flush()

    db.add(Profile(id=user.id, email=user.email, full_name=full_name))
    db.add(UserRole(user_id=user.id, role=AppRole(role or settings.DEFAULT_SIGNUP_ROLE)))

    db.commit()
    db.refresh(user)

    logger.info("user_created", user_id=user.id, email=user.email)
    return user


def update_user_last_login(db: Session, user: User):
    """Update user's last sign-in timestamp"""
    user.last_sign_in_at = datetime.now(timezone.utc)
    db.commit()
