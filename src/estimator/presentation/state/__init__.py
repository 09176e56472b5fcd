"""Session state."""

from .session_manager import SessionManager, EstimatorState

__all__ = ["SessionManager", "EstimatorState"]
