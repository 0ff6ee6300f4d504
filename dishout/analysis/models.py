from __future__ import annotations

import base64
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class ImageAsset:
    data: bytes
    mime_type: str = "image/jpeg"

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64}"


class GeoCoordinate(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class WebSource(BaseModel):
    uri: str = ""
    title: str = ""


class MapsSource(BaseModel):
    uri: str = ""
    title: str = ""
    phone_number: str | None = None
    review_snippets: list[str] = Field(default_factory=list)


class GroundingChunk(BaseModel):
    web: WebSource | None = None
    maps: MapsSource | None = None


class PlaceRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    map_uri: str
    phone_number: str | None = None
    review_snippet: str | None = None


class DishAnalysisResult(BaseModel):
    dish_name: str
    description: str
    places: list[PlaceRecord] = Field(default_factory=list)
    raw_text: str


class AppState(str, Enum):
    idle = "idle"
    analyzing = "analyzing"
    results = "results"
    error = "error"


@dataclass(frozen=True)
class ModelRequest:
    """Exactly one of ``image`` or ``query`` is set."""

    image: ImageAsset | None = None
    query: str | None = None
    location: GeoCoordinate | None = None

    def __post_init__(self) -> None:
        if (self.image is None) == (self.query is None):
            raise ValueError("ModelRequest needs exactly one of image or query")


@dataclass(frozen=True)
class GroundedAnswer:
    text: str
    chunks: list[GroundingChunk]
