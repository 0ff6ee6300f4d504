from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol

from ..errors import AnalysisFailed, ConversionError
from ..integrations.background import fire_and_forget
from ..integrations.endpoints import DishOutApi, get_api_client
from ..llm.groq_client import GroqPlacesModel
from ..trending.store import TrendingStore, get_trending_store
from .config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from .imaging import normalize_image
from .location import LocationProvider, acquire_location
from .models import (
    DishAnalysisResult,
    GeoCoordinate,
    GroundedAnswer,
    ImageAsset,
    ModelRequest,
)
from .places import PhoneExtractor, extract_phone_after_title, parse_places, split_answer
from .session import AnalysisSession

logger = logging.getLogger(__name__)

_orchestrator: "DishAnalysisOrchestrator | None" = None


class GroundedModel(Protocol):
    async def generate(self, request: ModelRequest) -> GroundedAnswer: ...


class DishAnalysisOrchestrator:
    def __init__(
        self,
        model: GroundedModel,
        trending: TrendingStore | None = None,
        api: DishOutApi | None = None,
        config: AnalysisConfig = DEFAULT_ANALYSIS_CONFIG,
        extractor: PhoneExtractor = extract_phone_after_title,
    ) -> None:
        self.model = model
        self.trending = trending
        self.api = api
        self.config = config
        self.extractor = extractor

    async def analyze_image(
        self,
        session: AnalysisSession,
        raw: bytes,
        location_provider: LocationProvider | None = None,
    ) -> DishAnalysisResult | None:
        token = session.begin()
        try:
            image = await asyncio.to_thread(normalize_image, raw, self.config.jpeg_quality)
        except ConversionError as exc:
            session.fail(token, exc.message)
            raise

        session.attach_preview(token, image)
        self._start_upload(session, token, image)

        return await self._run(
            session, token, location_provider,
            lambda location: ModelRequest(image=image, location=location),
            term=None,
        )

    async def analyze_query(
        self,
        session: AnalysisSession,
        text: str,
        location_provider: LocationProvider | None = None,
        term: str | None = None,
    ) -> DishAnalysisResult | None:
        query = text.strip()
        token = session.begin()
        return await self._run(
            session, token, location_provider,
            lambda location: ModelRequest(query=query, location=location),
            term=term or query,
        )

    def _start_upload(self, session: AnalysisSession, token: int, image: ImageAsset) -> None:
        if self.api is None:
            return

        async def upload() -> None:
            url = await self.api.upload_dish_image(image)
            session.attach_upload(token, url)

        fire_and_forget(upload(), name="upload-dish-image")

    async def _run(
        self,
        session: AnalysisSession,
        token: int,
        location_provider: LocationProvider | None,
        build_request: Callable[[GeoCoordinate | None], ModelRequest],
        term: str | None,
    ) -> DishAnalysisResult | None:
        location = await acquire_location(location_provider, self.config.location_timeout)
        if session.is_current(token):
            session.location = location

        try:
            answer = await self.model.generate(build_request(location))
        except AnalysisFailed:
            logger.error("Grounded model call failed", exc_info=True)
            session.fail(token, AnalysisFailed.user_message)
            raise
        except Exception as exc:
            logger.error("Grounded model call failed", exc_info=True)
            session.fail(token, AnalysisFailed.user_message)
            raise AnalysisFailed() from exc

        result = self.build_result(answer)
        # A fallback title is not a dish; only model text names one.
        if term is None and answer.text.strip():
            term = result.dish_name
        if term:
            await self._record_trending(term)

        if not session.complete(token, result):
            return None
        return result

    def build_result(self, answer: GroundedAnswer) -> DishAnalysisResult:
        text = answer.text if answer.text.strip() else self.config.fallback_answer
        dish_name, description = split_answer(text)
        return DishAnalysisResult(
            dish_name=dish_name,
            description=description,
            places=parse_places(text, answer.chunks, self.extractor),
            raw_text=text,
        )

    async def _record_trending(self, term: str) -> None:
        if self.trending is None:
            return
        try:
            await asyncio.to_thread(self.trending.record, term)
        except Exception:
            logger.warning("Failed to record trending term %r", term, exc_info=True)


def get_orchestrator() -> DishAnalysisOrchestrator:
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = DishAnalysisOrchestrator(
            model=GroqPlacesModel(),
            trending=get_trending_store(),
            api=get_api_client(),
        )
    return _orchestrator


async def close_orchestrator() -> None:
    """Release the production model's HTTP client, if one was created."""
    global _orchestrator
    if _orchestrator is not None and isinstance(_orchestrator.model, GroqPlacesModel):
        await _orchestrator.model.aclose()
    _orchestrator = None
