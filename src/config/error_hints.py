"""Error hints for configuration validation errors.

Provides user-friendly hints with actionable remediation steps
for common validation errors.
"""

from typing import Final


# Mapping of error types to user-friendly hints
ERROR_HINTS: Final[dict[str, str]] = {
    "enum": "Check the allowed values in the documentation.",
    "bool_type": "This field must be true or false.",
    "bool_parsing": "This field must be true or false.",
    "string_type": "This field must be a text string.",
    "extra_forbidden": "Unknown setting. Check the spelling against the documented settings.",
    "value_error": "The combination of settings is not allowed.",
    "file_not_found": "The file does not exist. Check the file path.",
    "yaml_parse_error": "Invalid YAML syntax. Check for proper indentation and formatting.",
}

# Field-specific hints for more context
FIELD_HINTS: Final[dict[str, str]] = {
    "theme": "Use a theme name (e.g. 'saga-blue'), 'none', or an expression like '#{theme}'.",
    "cookies_same_site": "Must be one of: Strict, Lax, None.",
    "project_stage": "Must be one of: Development, UnitTest, SystemTest, Production.",
    "bean_validation": "Enable client_side_validation before bean_validation.",
}


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Get a user-friendly hint for a validation error.

    Args:
        error_type: The Pydantic error type (e.g., 'bool_parsing', 'enum').
        field_name: Optional field name for field-specific hints.

    Returns:
        A user-friendly hint string.
    """
    if field_name:
        # 'head.project_stage' -> 'project_stage'
        simple_field = field_name.split(".")[-1]
        if simple_field in FIELD_HINTS:
            return FIELD_HINTS[simple_field]

    return ERROR_HINTS.get(
        error_type, "Check the configuration documentation for valid values."
    )


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a validation error with optional hint.

    Args:
        location: The error location (e.g., 'project_stage').
        message: The original error message.
        error_type: The error type.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    base = f"{location}: {message}" if location else message
    if include_hint:
        hint = get_error_hint(error_type, location)
        return f"{base}\n    Hint: {hint}"
    return base
