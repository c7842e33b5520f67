"""
Authentication Pydantic schemas
"""
from typing import List
from pydantic import BaseModel, EmailStr, Field
from datetime import datetime


class Token(BaseModel):
    """Token response schema"""
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    expires_in: int


class SignUpRequest(BaseModel):
    """Sign-up request schema"""
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: str = Field(..., min_length=1, max_length=255)


class LoginRequest(BaseModel):
    """Login request schema"""
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    """Signed-in user schema"""
    id: str
    email: str
    full_name: str
    roles: List[str]
    expires_at: datetime


class AuthScreen(BaseModel):
    """Entry point unauthenticated visitors are redirected to"""
    message: str = "Sign in to continue"
    login_url: str = "/api/v1/auth/login"
    signup_url: str = "/api/v1/auth/signup"
