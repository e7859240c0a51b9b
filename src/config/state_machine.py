"""Configuration state machine implementation."""

from enum import Enum, auto
from typing import ClassVar

import structlog

from src.config.constants import COMPONENT_CONFIG


logger = structlog.get_logger()


class ConfigState(Enum):
    """Head configuration loading states.

    State transitions:
        UNLOADED -> LOADING: Start reading the configuration file
        LOADING -> VALIDATED: File parsed and validated
        VALIDATED -> READY: Overrides applied, configuration frozen
        UNLOADED/LOADING/VALIDATED -> FAILED: Reading or validation failed
    """

    UNLOADED = auto()
    LOADING = auto()
    VALIDATED = auto()
    READY = auto()
    FAILED = auto()


class ConfigStateError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_state: ConfigState, to_state: ConfigState) -> None:
        """Initialize the error.

        Args:
            from_state: The current state.
            to_state: The attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid config state transition: {from_state.name} -> {to_state.name}"
        )


class ConfigStateMachine:
    """State machine for loading one head configuration.

    A loaded configuration is never reloaded in place; a new loader is
    created instead.
    """

    VALID_TRANSITIONS: ClassVar[dict[ConfigState, set[ConfigState]]] = {
        ConfigState.UNLOADED: {ConfigState.LOADING, ConfigState.FAILED},
        ConfigState.LOADING: {ConfigState.VALIDATED, ConfigState.FAILED},
        ConfigState.VALIDATED: {ConfigState.READY, ConfigState.FAILED},
        ConfigState.READY: set(),  # Terminal state
        ConfigState.FAILED: set(),  # Terminal state
    }

    def __init__(self, source: str | None = None) -> None:
        """Initialize the state machine in UNLOADED state.

        Args:
            source: Optional configuration source for logging.
        """
        self._state = ConfigState.UNLOADED
        self._log = logger.bind(component=COMPONENT_CONFIG, source=source)

    @property
    def state(self) -> ConfigState:
        """Get the current state."""
        return self._state

    def can_transition(self, to_state: ConfigState) -> bool:
        """Check if a transition to the given state is valid."""
        return to_state in self.VALID_TRANSITIONS.get(self._state, set())

    def transition(self, to_state: ConfigState) -> None:
        """Transition to a new state.

        Args:
            to_state: The target state.

        Raises:
            ConfigStateError: If the transition is invalid.
        """
        if not self.can_transition(to_state):
            raise ConfigStateError(self._state, to_state)
        self._log.debug(
            "config_state_transition",
            from_state=self._state.name,
            to_state=to_state.name,
        )
        self._state = to_state

    def is_terminal(self) -> bool:
        """Check if no more transitions are allowed."""
        return self._state in (ConfigState.READY, ConfigState.FAILED)

    def is_ready(self) -> bool:
        """Check if configuration is ready for use."""
        return self._state == ConfigState.READY

    def is_failed(self) -> bool:
        """Check if configuration loading has failed."""
        return self._state == ConfigState.FAILED
