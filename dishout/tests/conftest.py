from __future__ import annotations

import io

import pytest
from PIL import Image

from dishout.analysis.models import GroundedAnswer, GroundingChunk, MapsSource, WebSource
from dishout.analysis.orchestrator import DishAnalysisOrchestrator, get_orchestrator
from dishout.app import app, clear_sessions
from dishout.auth.users import AuthService, get_auth_service
from dishout.ordering.bridge import OrderBridge, get_order_bridge
from dishout.storage.local import LocalStore
from dishout.trending.store import TrendingStore, get_trending_store

SAMPLE_TEXT = (
    "**Shawarma Deluxe**\n"
    "Tender marinated chicken wrapped with garlic toum and pickles.\n"
    "\n"
    "1. Place Alpha serves a legendary wrap. Phone: +971 4 123 4567, open late.\n"
    "2. Place Beta is loved for its crispy bread, no number listed."
)


def sample_chunks() -> list[GroundingChunk]:
    return [
        GroundingChunk(maps=MapsSource(
            uri="https://maps.google.com/?cid=1",
            title="Place Alpha",
            review_snippets=["Best shawarma in Deira."],
        )),
        GroundingChunk(maps=MapsSource(uri="https://maps.google.com/?cid=2", title="Place Beta")),
        GroundingChunk(web=WebSource(uri="https://example.com/blog", title="Top 10 wraps")),
    ]


class FakeModel:
    """Stands in for the grounded model; records every request it receives."""

    def __init__(self, answer: GroundedAnswer | None = None, error: Exception | None = None) -> None:
        self.answer = answer or GroundedAnswer(text=SAMPLE_TEXT, chunks=sample_chunks())
        self.error = error
        self.requests = []

    async def generate(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.answer


def image_bytes(fmt: str = "PNG", mode: str = "RGBA", size=(8, 8), color=(200, 40, 20, 255)) -> bytes:
    if mode == "RGB" and len(color) == 4:
        color = color[:3]
    img = Image.new(mode, size, color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def local_store(tmp_path) -> LocalStore:
    return LocalStore(tmp_path / "data")


@pytest.fixture
def trending_store(local_store) -> TrendingStore:
    return TrendingStore(local_store)


@pytest.fixture
def fake_model() -> FakeModel:
    return FakeModel()


@pytest.fixture
def orchestrator(fake_model, trending_store) -> DishAnalysisOrchestrator:
    return DishAnalysisOrchestrator(model=fake_model, trending=trending_store)


@pytest.fixture(autouse=True)
def isolated_app(local_store, trending_store, orchestrator):
    auth = AuthService(local_store)
    bridge = OrderBridge(api=None)
    app.dependency_overrides[get_auth_service] = lambda: auth
    app.dependency_overrides[get_trending_store] = lambda: trending_store
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_order_bridge] = lambda: bridge
    clear_sessions()
    yield
    app.dependency_overrides.clear()
    clear_sessions()
