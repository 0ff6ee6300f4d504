from __future__ import annotations

from pydantic import BaseModel, Field

from .auth.users import MockUser
from .trending.models import TrendingEntry


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, pattern=r".+@.+")
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    status: str
    user: MockUser | None = None


class QueryRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=500)
    term: str | None = Field(
        default=None, description="Trending name to credit instead of the raw query"
    )
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)


class TrendingResponse(BaseModel):
    entries: list[TrendingEntry]


class PendingOrderRequest(BaseModel):
    place_index: int = Field(..., ge=0)


class ConfirmOrderRequest(BaseModel):
    provider: str = Field(..., min_length=1)


class OrderLinkResponse(BaseModel):
    url: str
    phone: str
    message: str
