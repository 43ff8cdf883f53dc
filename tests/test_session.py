"""Tests for the analysis session state machine."""
from __future__ import annotations

from pathlib import Path

import pytest

from aidetector.core.session import AnalysisSession, SessionState, SessionStateError
from utils.validators import ValidationError


@pytest.fixture
def image(png_file) -> Path:
    return png_file()


def test_initial_state_is_idle() -> None:
    session = AnalysisSession()

    assert session.state is SessionState.IDLE
    assert not session.can_analyze
    assert not session.can_reset
    assert not session.result_visible
    assert session.path is None


def test_full_happy_path(image: Path) -> None:
    session = AnalysisSession()
    seen: list[SessionState] = []
    session.subscribe(lambda s: seen.append(s.state))

    session.load(image)
    assert session.can_analyze and session.can_reset

    path = session.begin_analysis()
    assert path == image
    assert session.busy
    assert not session.can_analyze
    assert not session.can_reset

    session.complete("result")
    assert session.result == "result"
    assert session.result_visible
    assert session.can_analyze

    assert seen == [SessionState.IMAGE_LOADED, SessionState.ANALYZING, SessionState.RESULT_SHOWN]


def test_failure_returns_to_image_loaded(image: Path) -> None:
    session = AnalysisSession()
    session.load(image)
    session.begin_analysis()

    session.fail(RuntimeError("decoder exploded"))

    assert session.state is SessionState.IMAGE_LOADED
    assert session.error == "decoder exploded"
    assert session.result is None
    assert session.can_analyze


def test_loading_new_image_hides_previous_result(image: Path, png_file) -> None:
    session = AnalysisSession()
    session.load(image)
    session.begin_analysis()
    session.complete(1)

    other = png_file(name="other.png")
    session.load(other)

    assert session.state is SessionState.IMAGE_LOADED
    assert session.result is None
    assert session.path == other


def test_reset_from_result(image: Path) -> None:
    session = AnalysisSession()
    session.load(image)
    session.begin_analysis()
    session.complete(1)

    session.reset()

    assert session.state is SessionState.IDLE
    assert session.path is None
    assert session.result is None


def test_load_none_resets(image: Path) -> None:
    session = AnalysisSession()
    session.load(image)
    session.load(None)
    assert session.state is SessionState.IDLE


@pytest.mark.parametrize("event", ["begin_analysis", "complete", "fail"])
def test_illegal_events_from_idle(event: str) -> None:
    session = AnalysisSession()
    args = () if event == "begin_analysis" else ("x",)
    with pytest.raises(SessionStateError):
        getattr(session, event)(*args)


def test_no_load_or_reset_while_analyzing(image: Path) -> None:
    session = AnalysisSession()
    session.load(image)
    session.begin_analysis()

    with pytest.raises(SessionStateError):
        session.load(image)
    with pytest.raises(SessionStateError):
        session.reset()


def test_load_rejects_unsupported_file(tmp_path: Path) -> None:
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"data")
    session = AnalysisSession()

    with pytest.raises(ValidationError):
        session.load(path)
    assert session.state is SessionState.IDLE


def test_unsubscribe_stops_notifications(image: Path) -> None:
    session = AnalysisSession()
    calls: list[SessionState] = []
    unsubscribe = session.subscribe(lambda s: calls.append(s.state))

    session.load(image)
    unsubscribe()
    session.reset()

    assert calls == [SessionState.IMAGE_LOADED]


def test_begin_analysis_without_path_raises() -> None:
    session = AnalysisSession()
    session._state = SessionState.IMAGE_LOADED

    with pytest.raises(SessionStateError):
        session.begin_analysis()
    assert session.state is SessionState.IMAGE_LOADED
