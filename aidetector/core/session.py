"""Analysis session state shared by the UI widgets."""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Callable, Generic, Optional, TypeVar

from utils.validators import ValidationError, validate_image_path


R = TypeVar("R")


class SessionState(str, Enum):
    IDLE = "idle"
    IMAGE_LOADED = "image_loaded"
    ANALYZING = "analyzing"
    RESULT_SHOWN = "result_shown"


class SessionStateError(RuntimeError):
    """Raised when an event is not allowed in the current state."""


Listener = Callable[["AnalysisSession"], None]


class AnalysisSession(Generic[R]):
    """Tracks one image through Idle -> ImageLoaded -> Analyzing -> ResultShown.

    Listeners are called synchronously after every transition.
    """

    def __init__(self) -> None:
        self._state = SessionState.IDLE
        self._path: Optional[Path] = None
        self._result: Optional[R] = None
        self._error: Optional[str] = None
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def result(self) -> Optional[R]:
        return self._result

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def busy(self) -> bool:
        return self._state is SessionState.ANALYZING

    @property
    def can_analyze(self) -> bool:
        return self._state in (SessionState.IMAGE_LOADED, SessionState.RESULT_SHOWN)

    @property
    def can_reset(self) -> bool:
        return self._state in (SessionState.IMAGE_LOADED, SessionState.RESULT_SHOWN)

    @property
    def result_visible(self) -> bool:
        return self._state is SessionState.RESULT_SHOWN

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that removes it again."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _require(self, event: str, *allowed: SessionState) -> None:
        if self._state not in allowed:
            raise SessionStateError(f"Cannot {event} while {self._state.value}")

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def load(self, path: Path | str | None) -> None:
        """Select an image. ``None`` behaves like :meth:`reset`."""

        self._require("load an image", SessionState.IDLE, SessionState.IMAGE_LOADED, SessionState.RESULT_SHOWN)
        if path is None:
            self.reset()
            return

        path = Path(path)
        check = validate_image_path(path)
        if not check.valid:
            raise ValidationError(f"{check.message}: {path}")

        self._path = path
        self._result = None
        self._error = None
        self._state = SessionState.IMAGE_LOADED
        self._notify()

    def reset(self) -> None:
        self._require("reset", SessionState.IDLE, SessionState.IMAGE_LOADED, SessionState.RESULT_SHOWN)
        self._path = None
        self._result = None
        self._error = None
        self._state = SessionState.IDLE
        self._notify()

    def begin_analysis(self) -> Path:
        """Enter Analyzing and return the image path to work on."""

        self._require("start analysis", SessionState.IMAGE_LOADED, SessionState.RESULT_SHOWN)
        if self._path is None:
            raise SessionStateError("Cannot start analysis without an image")
        self._result = None
        self._error = None
        self._state = SessionState.ANALYZING
        self._notify()
        return self._path

    def complete(self, result: R) -> None:
        self._require("complete analysis", SessionState.ANALYZING)
        self._result = result
        self._state = SessionState.RESULT_SHOWN
        self._notify()

    def fail(self, error: BaseException | str) -> None:
        self._require("fail analysis", SessionState.ANALYZING)
        self._error = str(error)
        self._state = SessionState.IMAGE_LOADED
        self._notify()
