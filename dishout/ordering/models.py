from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PendingOrder(BaseModel):
    phone: str = Field(..., min_length=1)
    restaurant_title: str


class LeadRecord(BaseModel):
    """A completed order hand-off, sent to the tracking endpoint in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    dish_name: str
    restaurant_name: str
    restaurant_phone: str
    user_email: str | None = None
    timestamp: str
    dish_image_url: str | None = None


class OrderLink(BaseModel):
    url: str
    phone: str
    message: str
    lead: LeadRecord
