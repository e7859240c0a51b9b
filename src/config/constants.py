"""Constants for the configuration module."""

# Log component names
COMPONENT_CONFIG = "config"
COMPONENT_CLI = "cli"

# Validation result value reported by the CLI
VALIDATION_PASSED = "PASSED"

# Top-level key of the head section in a configuration file
HEAD_SECTION = "head"
