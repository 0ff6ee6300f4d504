from __future__ import annotations

from pydantic import BaseModel, Field


class TrendingEntry(BaseModel):
    id: str
    display_name: str = Field(..., min_length=1)
    query_text: str
    image_url: str
    popularity: int = Field(default=0, ge=0)
