"""Head configuration loader with validation and state machine."""

import hashlib
import time
from collections.abc import Mapping
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from src.config.constants import COMPONENT_CONFIG, HEAD_SECTION
from src.config.schemas.head import HeadConfig
from src.config.state_machine import ConfigState, ConfigStateMachine


logger = structlog.get_logger()


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[dict[str, str]], source: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details.
            source: File path or name of the configuration source.
        """
        self.errors = errors
        self.source = source
        super().__init__(f"Validation failed for {source}: {len(errors)} errors")


class ConfigLoader:
    """Loads and validates the head configuration.

    Implements a state machine for configuration loading:
    UNLOADED -> LOADING -> VALIDATED -> READY

    The file may hold the settings at top level or under a ``head`` key.
    Overrides (usually from the environment) are applied on top of the
    file before the configuration is frozen.
    """

    def __init__(self, source: str | None = None) -> None:
        """Initialize the loader.

        Args:
            source: Optional name of the configuration source for logging.
        """
        self._source = source or "<defaults>"
        self._state_machine = ConfigStateMachine(self._source)
        self._checksum: str | None = None
        self._validation_errors: list[dict[str, str]] = []
        self._validation_duration_ms: float = 0

    @property
    def state(self) -> ConfigState:
        """Get the current loader state."""
        return self._state_machine.state

    @property
    def checksum(self) -> str | None:
        """Get the SHA-256 checksum of the loaded file."""
        return self._checksum

    @property
    def validation_errors(self) -> list[dict[str, str]]:
        """Get validation errors if any."""
        return self._validation_errors.copy()

    @property
    def validation_duration_ms(self) -> float:
        """Get validation duration in milliseconds."""
        return self._validation_duration_ms

    def _load_yaml_file(self, file_path: Path) -> dict[str, object]:
        """Load a YAML file and compute its checksum.

        Raises:
            FileNotFoundError: If file does not exist.
            yaml.YAMLError: If YAML parsing fails.
        """
        content_bytes = file_path.read_bytes()
        self._checksum = hashlib.sha256(content_bytes).hexdigest()
        parsed = yaml.safe_load(content_bytes.decode("utf-8")) or {}
        if not isinstance(parsed, dict):
            msg = f"expected a mapping at top level, got {type(parsed).__name__}"
            raise yaml.YAMLError(msg)
        section = parsed.get(HEAD_SECTION, parsed)
        if not isinstance(section, dict):
            msg = f"expected a mapping under '{HEAD_SECTION}'"
            raise yaml.YAMLError(msg)
        return section

    def load(
        self,
        path: Path | None = None,
        overrides: Mapping[str, object] | None = None,
    ) -> HeadConfig:
        """Load and validate the head configuration.

        Args:
            path: Path to the YAML file; defaults only when omitted.
            overrides: Entries replacing the file's values.

        Returns:
            Validated, frozen HeadConfig.

        Raises:
            ConfigValidationError: If validation fails.
            ConfigStateError: If called in invalid state.
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
        """
        start_time = time.perf_counter()
        self._state_machine.transition(ConfigState.LOADING)

        log = logger.bind(component=COMPONENT_CONFIG, source=self._source)

        try:
            data: dict[str, object] = {}
            if path is not None:
                log.info("loading_config_file", file_path=str(path))
                data = self._load_yaml_file(path)
                log.info(
                    "config_file_loaded",
                    file_path=str(path),
                    file_sha256=self._checksum,
                )
            data.update(overrides or {})

            config = HeadConfig.model_validate(data)
            self._state_machine.transition(ConfigState.VALIDATED)

            self._validation_duration_ms = (time.perf_counter() - start_time) * 1000
            log.info(
                "config_validation_complete",
                validation_error_count=0,
                config_validation_duration_ms=round(self._validation_duration_ms, 2),
            )

            self._state_machine.transition(ConfigState.READY)
            log.info(
                "config_ready",
                theme=config.theme,
                project_stage=config.project_stage.value,
            )
            return config

        except ValidationError as e:
            self._handle_validation_error(e, log)
            raise ConfigValidationError(self._validation_errors, self._source) from e

        except FileNotFoundError as e:
            self._record_failure("file", str(e), "file_not_found", log)
            raise

        except yaml.YAMLError as e:
            self._record_failure("yaml", str(e), "yaml_parse_error", log)
            raise

    def _handle_validation_error(
        self,
        error: ValidationError,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        """Handle Pydantic validation error."""
        self._state_machine.transition(ConfigState.FAILED)

        for err in error.errors():
            self._validation_errors.append(
                {
                    "loc": ".".join(str(loc) for loc in err["loc"]),
                    "msg": err["msg"],
                    "type": err["type"],
                }
            )

        log.error(
            "config_validation_failed",
            validation_error_count=len(self._validation_errors),
            errors=self._validation_errors,
        )

    def _record_failure(
        self,
        loc: str,
        message: str,
        error_type: str,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        """Record a file or YAML error."""
        self._state_machine.transition(ConfigState.FAILED)
        self._validation_errors.append(
            {"loc": loc, "msg": message, "type": error_type}
        )
        log.error(f"config_{error_type}", error=message)

    def get_validation_summary(self) -> dict[str, object]:
        """Get a summary of the validation process.

        Returns:
            Dictionary with validation summary.
        """
        return {
            "source": self._source,
            "state": self._state_machine.state.name,
            "checksum": self._checksum,
            "validation_error_count": len(self._validation_errors),
            "validation_duration_ms": self._validation_duration_ms,
        }
