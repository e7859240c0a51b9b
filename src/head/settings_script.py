"""Client-side settings script.

Builds the inline script that fills the client runtime's settings object
from configuration and request state. Values are embedded as JS literals:
strings are single-quoted without further escaping (the configuration
layer hands over sanitized values) and booleans are written bare.

Reading the client window's initial-redirect cookie expires it on the
response. That side effect lives in ``consume_initial_redirect`` so the
script builder itself stays pure.
"""

import re
from collections.abc import Callable, Mapping

import structlog

from src.config.schemas.base import ProjectStage
from src.config.schemas.head import HeadConfig
from src.head.constants import (
    CLIENT_GLOBAL,
    INITIAL_REDIRECT_COOKIE_PREFIX,
    SETTINGS_OBJECT,
)
from src.head.models import RequestState
from src.head.protocols import ResponseCookies


logger = structlog.get_logger()

_UNSAFE_WINDOW_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def js_string(value: object) -> str:
    """Format a value as a single-quoted JS string literal."""
    return f"'{value}'"


def js_bool(value: bool) -> str:
    """Format a value as a JS boolean literal."""
    return "true" if value else "false"


def secure_window_id(window_id: str) -> str:
    """Strip everything but word characters and dashes from a window id."""
    return _UNSAFE_WINDOW_ID_CHARS.sub("", window_id)


def initial_redirect_cookie_name(window_id: str) -> str:
    """Get the name of the initial-redirect marker cookie of a window."""
    return f"{INITIAL_REDIRECT_COOKIE_PREFIX}{window_id}"


def consume_initial_redirect(
    window_id: str,
    request_cookies: Mapping[str, str],
    response_cookies: ResponseCookies | None,
) -> bool:
    """Check for the initial-redirect marker and expire it.

    The marker is one-shot: once seen it is removed from the browser so
    following requests do not observe it again.

    Args:
        window_id: Raw client window id.
        request_cookies: Cookies sent with the request.
        response_cookies: Cookies of the outgoing response.

    Returns:
        True if this request follows the window's initial redirect.
    """
    name = initial_redirect_cookie_name(window_id)
    if name not in request_cookies:
        return False

    if response_cookies is not None:
        response_cookies.expire(name)
    logger.debug("initial_redirect_consumed", cookie=name)
    return True


def collect_client_settings(config: HeadConfig, request: RequestState) -> dict[str, str]:
    """Collect the client settings in emission order.

    Guarded settings are left out entirely when their guard is false.

    Args:
        config: Head configuration.
        request: Per-request values.

    Returns:
        Ordered mapping of setting name to JS literal text.
    """
    settings: dict[str, str] = {
        "locale": js_string(request.locale),
        "viewId": js_string(request.view_id),
        "contextPath": js_string(request.context_path),
        "cookiesSecure": js_bool(request.secure and config.cookies_secure),
    }
    if config.cookies_same_site is not None:
        settings["cookiesSameSite"] = js_string(config.cookies_same_site.value)

    settings["validateEmptyFields"] = js_bool(config.validate_empty_fields)
    settings["considerEmptyStringNull"] = js_bool(
        config.interpret_empty_string_as_null
    )

    if config.early_post_param_evaluation:
        settings["earlyPostParamEvaluation"] = js_bool(True)
    if config.partial_submit:
        settings["partialSubmit"] = js_bool(True)
    if config.project_stage != ProjectStage.PRODUCTION:
        settings["projectStage"] = js_string(config.project_stage.value)

    return settings


def build_settings_script(
    config: HeadConfig,
    request: RequestState,
    initial_redirect: bool = False,
    window_id_transform: Callable[[str], str] = secure_window_id,
) -> str:
    """Build the settings script body.

    The body is guarded by a check for the client global, so a page whose
    client runtime failed to load raises no reference error.

    Args:
        config: Head configuration.
        request: Per-request values.
        initial_redirect: Result of ``consume_initial_redirect``.
        window_id_transform: Securing transform applied to the window id.

    Returns:
        Script text.
    """
    parts = [f"if(window.{CLIENT_GLOBAL}){{"]
    parts.extend(
        f"{SETTINGS_OBJECT}.{name}={literal};"
        for name, literal in collect_client_settings(config, request).items()
    )

    window = request.client_window
    if window is not None and window.framework_managed:
        parts.append(
            f"{CLIENT_GLOBAL}.clientwindow.init("
            f"{js_string(window_id_transform(window.window_id))}, "
            f"{js_bool(initial_redirect)});"
        )

    parts.append("}")
    return "".join(parts)
