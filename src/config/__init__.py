"""Configuration loading and validation module."""

from src.config.loader import ConfigLoader, ConfigValidationError
from src.config.schemas import HeadConfig, ProjectStage, SameSitePolicy
from src.config.state_machine import ConfigState, ConfigStateError


__all__ = [
    "ConfigLoader",
    "ConfigState",
    "ConfigStateError",
    "ConfigValidationError",
    "HeadConfig",
    "ProjectStage",
    "SameSitePolicy",
]
