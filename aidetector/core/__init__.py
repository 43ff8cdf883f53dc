"""Front-end state shared by the UI layer."""

from .session import AnalysisSession, SessionState, SessionStateError

__all__ = ["AnalysisSession", "SessionState", "SessionStateError"]
