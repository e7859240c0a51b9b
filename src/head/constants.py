"""Constants for the head assembler."""

from types import MappingProxyType
from typing import Final


# Resource library shipped by the framework
LIBRARY: Final = "primefaces"

# Theme resolution
DEFAULT_THEME: Final = "saga-blue"
THEME_NONE: Final = "none"
THEME_STYLESHEET: Final = "theme.css"
THEME_ALIASES: Final = MappingProxyType(
    {
        "saga": "saga-blue",
        "arya": "arya-blue",
        "vela": "vela-blue",
    }
)

# Framework resources emitted by the head
PRIMEICONS_CSS: Final = "primeicons/primeicons.css"
MOMENT_JS: Final = "moment/moment.js"
BEAN_VALIDATION_JS: Final = "validation/validation.bv.js"
LOCALE_JS_TEMPLATE: Final = "locales/locale-{language}.js"

# Client runtime globals
CLIENT_GLOBAL: Final = "PrimeFaces"
SETTINGS_OBJECT: Final = f"{CLIENT_GLOBAL}.settings"
INIT_FUNCTION: Final = "pfInit"

# Client window
INITIAL_REDIRECT_COOKIE_PREFIX: Final = "pf.initialredirect-"

# Facet names
FACET_FIRST: Final = "first"
FACET_MIDDLE: Final = "middle"
FACET_LAST: Final = "last"

# Log component names
COMPONENT_HEAD: Final = "head"
COMPONENT_EMITTER: Final = "head_emitter"
