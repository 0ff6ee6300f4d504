from __future__ import annotations

import logging

from pydantic import BaseModel

from ..errors import AnalysisInProgress
from ..ordering.models import PendingOrder
from .models import AppState, DishAnalysisResult, GeoCoordinate, ImageAsset

logger = logging.getLogger(__name__)


class SessionView(BaseModel):
    state: AppState
    result: DishAnalysisResult | None = None
    error_message: str | None = None
    has_preview: bool = False
    uploaded_image_url: str | None = None
    pending_order: PendingOrder | None = None


class AnalysisSession:
    """
    State machine for one client session.

    Captures are accepted from idle, results and error, never while
    analyzing. Each capture and each reset bumps ``generation``; a
    completion or failure carrying an older token is discarded, so a late
    response can never overwrite newer state.
    """

    def __init__(self) -> None:
        self.state = AppState.idle
        self.result: DishAnalysisResult | None = None
        self.error_message: str | None = None
        self.preview: ImageAsset | None = None
        self.uploaded_image_url: str | None = None
        self.location: GeoCoordinate | None = None
        self.pending_order: PendingOrder | None = None
        self.generation = 0

    def begin(self) -> int:
        if self.state is AppState.analyzing:
            raise AnalysisInProgress()
        self.generation += 1
        self.state = AppState.analyzing
        self.result = None
        self.error_message = None
        self.preview = None
        self.uploaded_image_url = None
        self.pending_order = None
        return self.generation

    def is_current(self, token: int) -> bool:
        return token == self.generation and self.state is AppState.analyzing

    def attach_preview(self, token: int, image: ImageAsset) -> None:
        if self.is_current(token):
            self.preview = image

    def attach_upload(self, token: int, url: str | None) -> None:
        # The upload may finish after the results arrive, so only the generation matters.
        if token == self.generation and url:
            self.uploaded_image_url = url

    def complete(self, token: int, result: DishAnalysisResult) -> bool:
        if not self.is_current(token):
            logger.info("Discarding stale analysis result (token %d, current %d)", token, self.generation)
            return False
        self.result = result
        self.error_message = None
        self.state = AppState.results
        return True

    def fail(self, token: int, message: str) -> bool:
        if not self.is_current(token):
            logger.info("Discarding stale analysis error (token %d, current %d)", token, self.generation)
            return False
        self.result = None
        self.error_message = message
        self.state = AppState.error
        return True

    def reset(self) -> None:
        self.generation += 1
        self.state = AppState.idle
        self.result = None
        self.error_message = None
        self.preview = None
        self.uploaded_image_url = None
        self.location = None
        self.pending_order = None

    def snapshot(self) -> SessionView:
        return SessionView(
            state=self.state,
            result=self.result,
            error_message=self.error_message,
            has_preview=self.preview is not None,
            uploaded_image_url=self.uploaded_image_url,
            pending_order=self.pending_order,
        )
