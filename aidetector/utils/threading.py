"""Run an analysis on the Qt thread pool without blocking the window."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from PyQt6.QtCore import QObject, QRunnable, pyqtSignal, pyqtSlot


T = TypeVar("T")


class WorkerSignals(QObject):
    """Signals emitted by :class:`Worker`; delivered on the receiver's thread."""

    finished = pyqtSignal()
    result = pyqtSignal(object)
    error = pyqtSignal(Exception)
    discarded = pyqtSignal()


@dataclass
class WorkerConfig(Generic[T]):
    fn: Callable[..., T]
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)


class Worker(QRunnable):
    """QRunnable wrapper around one call of *fn*.

    The wrapped computation cannot be interrupted; :meth:`discard` only makes
    the worker drop the outcome (result or error) and emit ``discarded``.
    """

    def __init__(self, config: WorkerConfig[T]) -> None:
        super().__init__()
        self._config = config
        self.signals = WorkerSignals()
        self._discarded = False

    @pyqtSlot()
    def run(self) -> None:
        try:
            result = self._config.fn(*self._config.args, **self._config.kwargs)
        except Exception as exc:
            if self._discarded:
                self.signals.discarded.emit()
            else:
                self.signals.error.emit(exc)
        else:
            if self._discarded:
                self.signals.discarded.emit()
            else:
                self.signals.result.emit(result)
        finally:
            self.signals.finished.emit()

    def discard(self) -> None:
        self._discarded = True

    @property
    def is_discarded(self) -> bool:
        return self._discarded
