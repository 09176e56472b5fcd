"""
Kiosk Estimator - SessionManager

Typed wrapper around a UI framework's session state for the estimate
builder. One EstimateController per session.
"""
from dataclasses import dataclass
from typing import Any, Callable

from estimator.application.controller import EstimateController


@dataclass
class EstimatorState:
    """State for the estimate builder."""

    controller: EstimateController
    estimate_id: str | None = None
    last_error: str | None = None


class SessionManager:
    """
    Typed wrapper around session_state.

    Provides type-safe access to the estimate builder's session state.
    """

    KEY = "estimator_state"

    def __init__(self, session_state: Any, controller_factory: Callable[[], EstimateController]):
        """
        Initialize SessionManager.

        Args:
            session_state: Mapping-like session store (e.g. st.session_state)
            controller_factory: Builds a fresh controller for a new session
        """
        self._state = session_state
        self._factory = controller_factory

    def get_state(self) -> EstimatorState:
        """Get estimator state, creating it on first access."""
        if self.KEY not in self._state:
            self._state[self.KEY] = EstimatorState(controller=self._factory())
        return self._state[self.KEY]

    def get_controller(self) -> EstimateController:
        """Get this session's controller."""
        return self.get_state().controller

    def get_estimate_id(self) -> str | None:
        """ID of the saved estimate being edited, if any."""
        return self.get_state().estimate_id

    def set_estimate_id(self, estimate_id: str | None) -> None:
        self.get_state().estimate_id = estimate_id

    def get_last_error(self) -> str | None:
        return self.get_state().last_error

    def set_last_error(self, message: str | None) -> None:
        """Remember the last user-facing error (validation, save failure)."""
        self.get_state().last_error = message

    def new_estimate(self) -> EstimateController:
        """Reset the session to an empty estimate."""
        state = self.get_state()
        state.controller.reset()
        state.estimate_id = None
        state.last_error = None
        return state.controller
