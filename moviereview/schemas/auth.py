# moviereview/schemas/auth.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from moviereview.schemas.base import CamelModel
from moviereview.schemas.user import UserOut


# ──────────────── Register ────────────────
class RegisterRequest(CamelModel):
    full_name: str
    email: str
    username: str
    password: str


class RegisterResponse(CamelModel):
    user: UserOut


# ──────────────── Login ────────────────
class LoginRequest(CamelModel):
    email: Optional[str] = None
    username: Optional[str] = None
    password: str


class TokenPair(CamelModel):
    access_token: str
    refresh_token: str


class LoginResponse(TokenPair):
    user: UserOut


# ──────────────── Token claims ────────────────
class TokenPayload(BaseModel):
    """Decoded claims of a verified token (the caller's identity)."""

    sub: str
    exp: int | datetime
    jti: str
    token_type: Optional[str] = None  # "access" | "refresh"
    iat: Optional[int | datetime] = None
    nbf: Optional[int | datetime] = None

    @property
    def user_id(self) -> int:
        return int(self.sub)
