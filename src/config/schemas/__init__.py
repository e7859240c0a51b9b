"""Configuration schema definitions."""

from src.config.schemas.base import ProjectStage, SameSitePolicy
from src.config.schemas.head import HeadConfig


__all__ = [
    "HeadConfig",
    "ProjectStage",
    "SameSitePolicy",
]
