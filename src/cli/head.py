"""CLI commands for rendering and checking page heads."""

import logging
import sys
import uuid
from dataclasses import dataclass, field
from pathlib import Path

import click
import structlog
import yaml

from src.config.constants import COMPONENT_CLI, VALIDATION_PASSED
from src.config.error_hints import format_validation_error
from src.config.loader import ConfigLoader, ConfigValidationError
from src.config.schemas.head import HeadConfig
from src.head import (
    ClientWindowState,
    HeadComponent,
    HeadRenderContext,
    HeadRenderError,
    HtmlResponseWriter,
    ResourceComponent,
    ResourceType,
    render_head,
)
from src.head.resolvers import (
    CookieRecorder,
    LibraryResourceResolver,
    MappingExpressionEvaluator,
    StaticLocaleProvider,
)
from src.head.settings_script import initial_redirect_cookie_name
from src.observability.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
)
from src.settings.app import get_settings


logger = structlog.get_logger()

# Resources shipped with the framework library
DEFAULT_CATALOG: dict[str, list[str]] = {
    "primefaces": [
        "primefaces-saga-blue/theme.css",
        "primefaces-arya-blue/theme.css",
        "primefaces-vela-blue/theme.css",
        "primeicons/primeicons.css",
        "moment/moment.js",
        "validation/validation.bv.js",
        "locales/locale-de.js",
        "locales/locale-en.js",
        "locales/locale-es.js",
        "locales/locale-fr.js",
        "locales/locale-pt.js",
    ],
}


@dataclass
class RenderOptions:
    """Options for the render command."""

    config_path: Path | None
    catalog_path: Path | None
    view_id: str
    locale: str | None
    context_path: str
    secure: bool
    window_id: str | None
    initial_redirect: bool
    json_logs: bool
    verbose: bool
    variables: dict[str, str] = field(default_factory=dict)
    init_scripts: tuple[str, ...] = ()
    head_resources: tuple[str, ...] = ()


def _parse_pairs(values: tuple[str, ...], separator: str, option: str) -> list[tuple[str, str]]:
    pairs = []
    for value in values:
        left, sep, right = value.partition(separator)
        if not sep or not left or not right:
            msg = f"expected LEFT{separator}RIGHT, got {value!r}"
            raise click.BadParameter(msg, param_hint=option)
        pairs.append((left, right))
    return pairs


def _load_catalog(path: Path | None) -> tuple[dict[str, list[str]], dict[str, str]]:
    """Load a resource catalog file.

    The file maps library names to resource name lists, with an optional
    ``versions`` mapping of library name to version.

    Raises:
        yaml.YAMLError: If the file is not valid YAML or not shaped as above.
    """
    if path is None:
        return DEFAULT_CATALOG, {}

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        msg = f"expected a mapping at top level, got {type(data).__name__}"
        raise yaml.YAMLError(msg)

    raw_versions = data.pop("versions", None) or {}
    if not isinstance(raw_versions, dict):
        msg = "expected a mapping under 'versions'"
        raise yaml.YAMLError(msg)

    catalog: dict[str, list[str]] = {}
    for library, names in data.items():
        if not isinstance(names, list):
            msg = f"expected a list of resource names under {library!r}"
            raise yaml.YAMLError(msg)
        catalog[str(library)] = [str(name) for name in names]

    versions = {str(k): str(v) for k, v in raw_versions.items()}
    return catalog, versions


def _load_config(config_path: Path | None) -> HeadConfig:
    settings = get_settings()
    path = config_path or settings.config_path
    loader = ConfigLoader(source=str(path) if path else None)
    return loader.load(path, overrides=settings.config_overrides())


def _build_head_resources(values: tuple[str, ...]) -> list[ResourceComponent]:
    resources = []
    for library, name in _parse_pairs(values, ":", "--head-resource"):
        resource_type = ResourceType.CSS if name.endswith(".css") else ResourceType.JS
        resources.append(ResourceComponent(library, name, resource_type))
    return resources


def _execute_render(options: RenderOptions) -> None:
    request_id = uuid.uuid4().hex
    configure_logging(
        level=logging.DEBUG if options.verbose else logging.INFO,
        json_format=options.json_logs,
    )
    bind_request_context(request_id, options.view_id)
    log = logger.bind(component=COMPONENT_CLI, command="render")

    try:
        config = _load_config(options.config_path)
    except ConfigValidationError as e:
        for error in e.errors:
            click.echo(
                format_validation_error(error["loc"], error["msg"], error["type"]),
                err=True,
            )
        sys.exit(1)
    except (FileNotFoundError, yaml.YAMLError) as e:
        click.echo(f"Cannot load configuration: {e}", err=True)
        sys.exit(1)

    try:
        catalog, versions = _load_catalog(options.catalog_path)
    except yaml.YAMLError as e:
        click.echo(f"Cannot load resource catalog: {e}", err=True)
        sys.exit(1)

    cookies = CookieRecorder()
    request_cookies: dict[str, str] = {}
    client_window = None
    if options.window_id:
        client_window = ClientWindowState(options.window_id)
        if options.initial_redirect:
            request_cookies[initial_redirect_cookie_name(options.window_id)] = "true"

    writer = HtmlResponseWriter()
    context = HeadRenderContext(
        config=config,
        writer=writer,
        resolver=LibraryResourceResolver(catalog, options.context_path, versions),
        evaluator=MappingExpressionEvaluator(options.variables),
        locale_provider=StaticLocaleProvider(options.locale),
        view_id=options.view_id,
        context_path=options.context_path,
        secure=options.secure,
        request_cookies=request_cookies,
        response_cookies=cookies,
        client_window=client_window,
        head_resources=_build_head_resources(options.head_resources),
        request_id=request_id,
    )
    for script in options.init_scripts:
        context.init_scripts.add(script)

    try:
        render_head(context, HeadComponent(client_id="head"))
    except HeadRenderError as e:
        log.error("render_failed", **e.to_dict())
        # markup written before the failure stays in the response
        click.echo(writer.getvalue())
        click.echo(f"Head rendering failed: {e.message}", err=True)
        sys.exit(1)

    click.echo(writer.getvalue())
    for header in cookies.headers():
        click.echo(f"Set-Cookie: {header}", err=True)


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """Page head assembler CLI."""


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to the head configuration YAML file.",
)
@click.option(
    "--resources",
    "catalog_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a YAML catalog of available resources per library.",
)
@click.option("--view-id", default="/index.xhtml", help="Identifier of the view.")
@click.option("--locale", default="en_US", help="Current locale (e.g. en_US).")
@click.option("--context-path", default="", help="Request context path.")
@click.option("--secure", is_flag=True, help="Treat the request as secure.")
@click.option("--window-id", default=None, help="Client window id.")
@click.option(
    "--initial-redirect",
    is_flag=True,
    help="Send the initial-redirect cookie of the client window.",
)
@click.option(
    "--var",
    "variables",
    multiple=True,
    help="Expression variable as NAME=VALUE (repeatable).",
)
@click.option(
    "--init-script",
    "init_scripts",
    multiple=True,
    help="Init script fragment (repeatable, kept in order).",
)
@click.option(
    "--head-resource",
    "head_resources",
    multiple=True,
    help="Registered head resource as LIBRARY:NAME (repeatable).",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=None,
    help="Use JSON format for logs (default: from HEAD_JSON_LOGS, true).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def render(  # noqa: PLR0913
    config_path: Path | None,
    catalog_path: Path | None,
    view_id: str,
    locale: str,
    context_path: str,
    secure: bool,
    window_id: str | None,
    initial_redirect: bool,
    variables: tuple[str, ...],
    init_scripts: tuple[str, ...],
    head_resources: tuple[str, ...],
    json_logs: bool | None,
    verbose: bool,
) -> None:
    """Render the head of a page and print its markup."""
    options = RenderOptions(
        config_path=config_path,
        catalog_path=catalog_path,
        view_id=view_id,
        locale=locale,
        context_path=context_path,
        secure=secure,
        window_id=window_id,
        initial_redirect=initial_redirect,
        json_logs=get_settings().json_logs if json_logs is None else json_logs,
        verbose=verbose,
        variables=dict(_parse_pairs(variables, "=", "--var")),
        init_scripts=init_scripts,
        head_resources=head_resources,
    )
    try:
        _execute_render(options)
    finally:
        clear_request_context()


@cli.command()
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="Path to the head configuration YAML file.",
)
def validate(config_path: Path) -> None:
    """Validate a head configuration file."""
    configure_logging(level=logging.WARNING, json_format=False)

    loader = ConfigLoader(source=str(config_path))
    try:
        config = loader.load(config_path)
    except (ConfigValidationError, yaml.YAMLError):
        click.echo("Configuration validation failed:", err=True)
        for error in loader.validation_errors:
            formatted = format_validation_error(
                location=error["loc"],
                message=error["msg"],
                error_type=error.get("type", "unknown"),
                include_hint=True,
            )
            click.echo(f"  - {formatted}", err=True)
        sys.exit(1)

    click.echo(f"Configuration is valid! ({VALIDATION_PASSED})")
    click.echo(f"  Theme: {config.theme or '(default)'}")
    click.echo(f"  Project stage: {config.project_stage.value}")
    click.echo(f"  Checksum: {loader.checksum}")
