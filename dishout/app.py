from __future__ import annotations

import logging
import os
import uuid
from collections import OrderedDict
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from starlette.middleware.sessions import SessionMiddleware

from .analysis.location import fixed_location
from .analysis.models import AppState
from .analysis.orchestrator import DishAnalysisOrchestrator, close_orchestrator, get_orchestrator
from .analysis.session import AnalysisSession, SessionView
from .auth.dependencies import require_user
from .auth.users import AuthService, MockUser, get_auth_service
from .errors import AnalysisFailed, AnalysisInProgress, ConversionError
from .logging_setup import configure_logging
from .ordering.bridge import OrderBridge, get_order_bridge
from .ordering.config import DEFAULT_ORDER_CONFIG
from .ordering.models import PendingOrder
from .ordering.phone import is_dialable, normalize_phone
from .ordering.providers import DELIVERY_PROVIDERS, is_known_provider, providers_for
from .schemas import (
    AuthResponse,
    ConfirmOrderRequest,
    LoginRequest,
    OrderLinkResponse,
    PendingOrderRequest,
    QueryRequest,
    TrendingResponse,
)
from .trending.models import TrendingEntry
from .trending.store import TrendingStore, get_trending_store

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_orchestrator()


app = FastAPI(title="DishOut API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "dishout-secret-change-in-production"),
)

# One state machine per browser session, keyed by the id kept in the cookie.
# Least recently used sessions are evicted past MAX_SESSIONS.
MAX_SESSIONS = int(os.environ.get("DISHOUT_MAX_SESSIONS", "1000"))
_sessions: "OrderedDict[str, AnalysisSession]" = OrderedDict()


def get_analysis_session(request: Request) -> AnalysisSession:
    """Return the caller's session, creating and registering one if needed."""
    session = find_analysis_session(request)
    if session is not None:
        return session
    sid = uuid.uuid4().hex
    request.session["sid"] = sid
    session = _sessions[sid] = AnalysisSession()
    while len(_sessions) > MAX_SESSIONS:
        _sessions.popitem(last=False)
    return session


def find_analysis_session(request: Request) -> AnalysisSession | None:
    """Lookup only; read routes never register a session."""
    sid = request.session.get("sid")
    if not sid or sid not in _sessions:
        return None
    _sessions.move_to_end(sid)
    return _sessions[sid]


def clear_sessions() -> None:
    _sessions.clear()


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/trending", response_model=TrendingResponse)
def trending(store: TrendingStore = Depends(get_trending_store)) -> TrendingResponse:
    return TrendingResponse(entries=store.list())


@app.get("/trending/{entry_id}", response_model=TrendingEntry)
def trending_entry(entry_id: str, store: TrendingStore = Depends(get_trending_store)) -> TrendingEntry:
    entry = store.get(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Unknown trending entry")
    return entry


@app.get("/delivery/providers")
def delivery_providers(region: str | None = None) -> dict:
    if region is None:
        return {"default_region": DEFAULT_ORDER_CONFIG.default_region, "regions": DELIVERY_PROVIDERS}
    try:
        return {"region": region, "providers": providers_for(region)}
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown region: {region}")


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login", response_model=AuthResponse)
def login(body: LoginRequest, auth: AuthService = Depends(get_auth_service)) -> AuthResponse:
    return AuthResponse(status="ok", user=auth.login(body.email, body.password))


@app.post("/auth/signup", response_model=AuthResponse)
def signup(body: LoginRequest, auth: AuthService = Depends(get_auth_service)) -> AuthResponse:
    return AuthResponse(status="ok", user=auth.signup(body.email, body.password))


@app.post("/auth/logout", response_model=AuthResponse)
def logout(request: Request, auth: AuthService = Depends(get_auth_service)) -> AuthResponse:
    auth.logout()
    _sessions.pop(request.session.get("sid", ""), None)
    request.session.clear()
    return AuthResponse(status="logged_out")


@app.get("/auth/me", response_model=MockUser)
def auth_me(user: MockUser = Depends(require_user)) -> MockUser:
    return user


# ── Analysis endpoints ───────────────────────────────────────────────────


@app.get("/session", response_model=SessionView)
def session_state(
    session: AnalysisSession | None = Depends(find_analysis_session),
) -> SessionView:
    return (session or AnalysisSession()).snapshot()


@app.post("/session/reset", response_model=SessionView)
def reset_session(
    session: AnalysisSession | None = Depends(find_analysis_session),
) -> SessionView:
    if session is None:
        return AnalysisSession().snapshot()
    session.reset()
    return session.snapshot()


@app.post("/analyze/image", response_model=SessionView)
async def analyze_image(
    file: UploadFile = File(...),
    latitude: float | None = Form(default=None),
    longitude: float | None = Form(default=None),
    user: MockUser = Depends(require_user),
    session: AnalysisSession = Depends(get_analysis_session),
    orchestrator: DishAnalysisOrchestrator = Depends(get_orchestrator),
) -> SessionView:
    raw = await file.read()
    try:
        await orchestrator.analyze_image(session, raw, fixed_location(latitude, longitude))
    except AnalysisInProgress as exc:
        raise HTTPException(status_code=409, detail=exc.message)
    except (ConversionError, AnalysisFailed) as exc:
        # Already reflected in the session's error state.
        logger.info("Image analysis ended in error: %s", exc.message)
    return session.snapshot()


@app.post("/analyze/query", response_model=SessionView)
async def analyze_query(
    body: QueryRequest,
    user: MockUser = Depends(require_user),
    session: AnalysisSession = Depends(get_analysis_session),
    orchestrator: DishAnalysisOrchestrator = Depends(get_orchestrator),
) -> SessionView:
    try:
        await orchestrator.analyze_query(
            session, body.query, fixed_location(body.latitude, body.longitude), term=body.term,
        )
    except AnalysisInProgress as exc:
        raise HTTPException(status_code=409, detail=exc.message)
    except AnalysisFailed as exc:
        logger.info("Query analysis ended in error: %s", exc.message)
    return session.snapshot()


# ── Order endpoints ──────────────────────────────────────────────────────


@app.post("/orders/pending", response_model=PendingOrder)
def start_order(
    body: PendingOrderRequest,
    user: MockUser = Depends(require_user),
    session: AnalysisSession | None = Depends(find_analysis_session),
) -> PendingOrder:
    if session is None or session.state is not AppState.results or session.result is None:
        raise HTTPException(status_code=400, detail="No analysis results to order from")
    places = session.result.places
    if body.place_index >= len(places):
        raise HTTPException(status_code=404, detail="Unknown place")

    place = places[body.place_index]
    if not place.phone_number or not is_dialable(normalize_phone(place.phone_number)):
        raise HTTPException(status_code=400, detail="Phone number not available")

    session.pending_order = PendingOrder(
        phone=place.phone_number,
        restaurant_title=place.title or DEFAULT_ORDER_CONFIG.unknown_restaurant,
    )
    return session.pending_order


@app.post("/orders/cancel", response_model=SessionView)
def cancel_order(
    session: AnalysisSession | None = Depends(find_analysis_session),
) -> SessionView:
    if session is None:
        return AnalysisSession().snapshot()
    session.pending_order = None
    return session.snapshot()


@app.post("/orders/confirm", response_model=OrderLinkResponse)
async def confirm_order(
    body: ConfirmOrderRequest,
    user: MockUser = Depends(require_user),
    session: AnalysisSession | None = Depends(find_analysis_session),
    bridge: OrderBridge = Depends(get_order_bridge),
) -> OrderLinkResponse:
    if session is None or session.pending_order is None:
        raise HTTPException(status_code=400, detail="No pending order")
    if not is_known_provider(body.provider):
        raise HTTPException(status_code=400, detail=f"Unknown delivery provider: {body.provider}")

    link = bridge.place(
        session.pending_order,
        body.provider,
        dish_name=session.result.dish_name if session.result else None,
        image_url=session.uploaded_image_url,
        user_email=user.email,
    )
    session.pending_order = None
    return OrderLinkResponse(url=link.url, phone=link.phone, message=link.message)
