"""Head assembly state machine implementation."""

from enum import Enum, auto
from typing import ClassVar

import structlog


logger = structlog.get_logger()


class HeadState(Enum):
    """Head assembly states.

    State transitions (strictly sequential):
        START -> LEADING_FACET -> THEME_CSS -> ICON_CSS -> MIDDLE_FACET
        -> REGISTERED_RESOURCES -> VALIDATION_SCRIPTS -> LOCALE_SCRIPT
        -> SETTINGS_SCRIPT -> INIT_SCRIPT -> AWAITING_TRAILING_FACET
        -> TRAILING_FACET -> DONE
        Any non-terminal state -> FAILED: A fatal error aborted the render
    """

    START = auto()
    LEADING_FACET = auto()
    THEME_CSS = auto()
    ICON_CSS = auto()
    MIDDLE_FACET = auto()
    REGISTERED_RESOURCES = auto()
    VALIDATION_SCRIPTS = auto()
    LOCALE_SCRIPT = auto()
    SETTINGS_SCRIPT = auto()
    INIT_SCRIPT = auto()
    AWAITING_TRAILING_FACET = auto()
    TRAILING_FACET = auto()
    DONE = auto()
    FAILED = auto()


_SEQUENCE = (
    HeadState.START,
    HeadState.LEADING_FACET,
    HeadState.THEME_CSS,
    HeadState.ICON_CSS,
    HeadState.MIDDLE_FACET,
    HeadState.REGISTERED_RESOURCES,
    HeadState.VALIDATION_SCRIPTS,
    HeadState.LOCALE_SCRIPT,
    HeadState.SETTINGS_SCRIPT,
    HeadState.INIT_SCRIPT,
    HeadState.AWAITING_TRAILING_FACET,
    HeadState.TRAILING_FACET,
    HeadState.DONE,
)


class HeadStateError(Exception):
    """Raised when an invalid head state transition is attempted."""

    def __init__(self, from_state: HeadState, to_state: HeadState) -> None:
        """Initialize the error.

        Args:
            from_state: The current state.
            to_state: The attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid head state transition: {from_state.name} -> {to_state.name}"
        )


class HeadStateMachine:
    """State machine for one head render.

    Each state may only advance to the next one in the fixed sequence,
    or to FAILED. There is no way back.
    """

    VALID_TRANSITIONS: ClassVar[dict[HeadState, set[HeadState]]] = {
        current: {following, HeadState.FAILED}
        for current, following in zip(_SEQUENCE, _SEQUENCE[1:], strict=False)
    } | {
        HeadState.DONE: set(),  # Terminal state
        HeadState.FAILED: set(),  # Terminal state
    }

    def __init__(self, request_id: str) -> None:
        """Initialize the state machine in START state.

        Args:
            request_id: Request identifier for logging.
        """
        self._request_id = request_id
        self._state = HeadState.START
        self._log = logger.bind(request_id=request_id, component="head")

    @property
    def state(self) -> HeadState:
        """Get the current state."""
        return self._state

    @property
    def request_id(self) -> str:
        """Get the request ID."""
        return self._request_id

    def can_transition(self, to_state: HeadState) -> bool:
        """Check if a transition to the given state is valid.

        Args:
            to_state: The target state.

        Returns:
            True if the transition is valid, False otherwise.
        """
        return to_state in self.VALID_TRANSITIONS.get(self._state, set())

    def transition(self, to_state: HeadState) -> None:
        """Transition to a new state.

        Args:
            to_state: The target state.

        Raises:
            HeadStateError: If the transition is invalid.
        """
        if not self.can_transition(to_state):
            self._log.error(
                "invariant_violation",
                error_type="illegal_state_transition",
                from_state=self._state.name,
                to_state=to_state.name,
            )
            raise HeadStateError(self._state, to_state)

        old_state = self._state
        self._state = to_state
        self._log.debug(
            "head_state_transition",
            from_state=old_state.name,
            to_state=to_state.name,
        )

    def to_failed(self) -> None:
        """Transition to FAILED state."""
        self.transition(HeadState.FAILED)

    def is_terminal(self) -> bool:
        """Check if the current state is terminal."""
        return self._state in (HeadState.DONE, HeadState.FAILED)

    def is_awaiting_trailing_facet(self) -> bool:
        """Check if the opening part of the head is complete."""
        return self._state == HeadState.AWAITING_TRAILING_FACET

    def is_done(self) -> bool:
        """Check if the head was rendered completely."""
        return self._state == HeadState.DONE

    def is_failed(self) -> bool:
        """Check if the render was aborted."""
        return self._state == HeadState.FAILED
