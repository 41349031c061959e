from __future__ import annotations

from datetime import datetime
from typing import Optional

from moviereview.schemas.base import CamelModel


class UserPublic(CamelModel):
    """Author card shown next to a review."""

    id: int
    full_name: str
    username: str


class UserOut(UserPublic):
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CurrentUserResponse(CamelModel):
    user: UserOut
