from __future__ import annotations

import pytest

from dishout.analysis.models import AppState, DishAnalysisResult, ImageAsset
from dishout.analysis.session import AnalysisSession
from dishout.errors import AnalysisInProgress
from dishout.ordering.models import PendingOrder

RESULT = DishAnalysisResult(dish_name="Falafel", description="Crispy.", places=[], raw_text="Falafel\nCrispy.")


def test_starts_idle():
    session = AnalysisSession()
    view = session.snapshot()
    assert view.state is AppState.idle
    assert view.result is None
    assert view.error_message is None


def test_idle_to_results():
    session = AnalysisSession()
    token = session.begin()
    assert session.state is AppState.analyzing
    assert session.complete(token, RESULT)
    assert session.state is AppState.results
    assert session.result == RESULT


def test_idle_to_error():
    session = AnalysisSession()
    token = session.begin()
    assert session.fail(token, "nope")
    assert session.state is AppState.error
    assert session.error_message == "nope"
    assert session.result is None


def test_complete_without_begin_is_rejected():
    session = AnalysisSession()
    assert not session.complete(session.generation, RESULT)
    assert not session.fail(session.generation, "x")
    assert session.state is AppState.idle


def test_capture_rejected_while_analyzing():
    session = AnalysisSession()
    session.begin()
    with pytest.raises(AnalysisInProgress):
        session.begin()


@pytest.mark.parametrize("finish", ["complete", "fail"])
def test_capture_allowed_from_results_and_error(finish):
    session = AnalysisSession()
    token = session.begin()
    if finish == "complete":
        session.complete(token, RESULT)
    else:
        session.fail(token, "boom")
    second = session.begin()
    assert second == token + 1
    assert session.result is None
    assert session.error_message is None


def test_reset_clears_everything():
    session = AnalysisSession()
    token = session.begin()
    session.attach_preview(token, ImageAsset(data=b"jpeg"))
    session.attach_upload(token, "https://img.example/1.jpg")
    session.complete(token, RESULT)
    session.pending_order = PendingOrder(phone="+971501234567", restaurant_title="Place Alpha")

    session.reset()

    view = session.snapshot()
    assert view.state is AppState.idle
    assert view.result is None
    assert view.error_message is None
    assert not view.has_preview
    assert view.uploaded_image_url is None
    assert view.pending_order is None


def test_late_result_after_reset_is_discarded():
    session = AnalysisSession()
    token = session.begin()
    session.reset()
    assert not session.complete(token, RESULT)
    assert session.state is AppState.idle
    assert session.result is None


def test_late_result_from_previous_capture_is_discarded():
    session = AnalysisSession()
    old = session.begin()
    session.fail(old, "first failed")
    new = session.begin()
    assert not session.complete(old, RESULT)
    assert session.state is AppState.analyzing
    assert session.complete(new, RESULT)


def test_upload_arriving_after_results_is_attached():
    session = AnalysisSession()
    token = session.begin()
    session.complete(token, RESULT)
    session.attach_upload(token, "https://img.example/1.jpg")
    assert session.uploaded_image_url == "https://img.example/1.jpg"


def test_upload_from_stale_capture_is_ignored():
    session = AnalysisSession()
    token = session.begin()
    session.reset()
    session.attach_upload(token, "https://img.example/old.jpg")
    assert session.uploaded_image_url is None
