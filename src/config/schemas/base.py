"""Base schema types for configuration."""

from enum import Enum


class ProjectStage(str, Enum):
    """Deployment stage of the application.

    Anything other than PRODUCTION is exposed to the client runtime, and
    DEVELOPMENT additionally enables diagnostic warnings.
    """

    DEVELOPMENT = "Development"
    UNIT_TEST = "UnitTest"
    SYSTEM_TEST = "SystemTest"
    PRODUCTION = "Production"


class SameSitePolicy(str, Enum):
    """Known values of the cookie SameSite attribute."""

    STRICT = "Strict"
    LAX = "Lax"
    NONE = "None"
