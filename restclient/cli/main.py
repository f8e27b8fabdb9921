"""CLI commands for issuing REST calls against one endpoint."""

import sys
import uuid
from dataclasses import dataclass, field

import click
from pydantic import ValidationError

from restclient.client import RestClient
from restclient.decode import read_text
from restclient.errors import RestError, RestHttpError
from restclient.models import Result
from restclient.observability.logging import (
    bind_request_context,
    clear_request_context,
    configure_from_settings,
    get_logger,
)
from restclient.settings import get_settings


logger = get_logger(__name__)


@dataclass
class CallOptions:
    """Options shared by the call commands."""

    name: str
    root: str
    headers: list[str] = field(default_factory=list)
    user: str | None = None
    password: str | None = None
    verbose: bool = False
    json_logs: bool | None = None


def _parse_header(raw: str) -> tuple[str, str]:
    """Split a ``Name: value`` option into name and value."""
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        msg = f"Invalid header {raw!r}, expected NAME:VALUE"
        raise click.BadParameter(msg, param_hint="--header")
    return name.strip(), value.strip()


def _build_client(options: CallOptions) -> RestClient:
    """Configure logging and build a client from CLI options and settings.

    Credentials given on the command line take precedence over
    ``RESTCLIENT_USERNAME``/``RESTCLIENT_PASSWORD``; either pair must be
    complete.

    Args:
        options: Parsed command options.

    Returns:
        Ready-to-use RestClient.

    Raises:
        click.BadParameter: If the root URL is not an absolute http(s) URL.
        click.UsageError: If only one of --user and --password is given.
    """
    settings = get_settings()
    configure_from_settings(
        settings, verbose=options.verbose, json_format=options.json_logs
    )

    try:
        client = RestClient(
            options.name,
            options.root,
            payload_log_length=settings.payload_log_length,
        )
    except ValidationError as e:
        msg = "; ".join(str(error["msg"]) for error in e.errors())
        raise click.BadParameter(msg, param_hint="--root") from e

    for raw in options.headers:
        client.set_header(*_parse_header(raw))

    if options.user is not None or options.password is not None:
        if options.user is None or options.password is None:
            msg = "--user and --password must be given together"
            raise click.UsageError(msg)
        client.set_basic_auth(options.user, options.password)
    elif settings.has_basic_auth:
        client.set_basic_auth(settings.username or "", settings.password or "")

    return client


def _emit(result: Result[str]) -> None:
    """Print a result body; nothing for an empty response."""
    if result.is_present:
        click.echo(result.get())


def _fail(error: RestError) -> None:
    """Report a failed call and exit with status 1."""
    logger.debug("cli_call_failed", **error.to_dict())
    click.echo(f"Error: {error.message} ({error.url})", err=True)
    if isinstance(error, RestHttpError) and error.detail_text:
        click.echo(error.detail_text, err=True)
    sys.exit(1)


def _common_options(fn):  # type: ignore[no-untyped-def]
    """Attach the endpoint and logging options shared by all commands."""
    decorators = [
        click.option(
            "--name",
            default="cli",
            show_default=True,
            help="Endpoint name used in logs and metrics.",
        ),
        click.option(
            "--root",
            required=True,
            help="Root URL of the endpoint, e.g. https://api.example.com.",
        ),
        click.option(
            "--header",
            "-H",
            "headers",
            multiple=True,
            help="Header to send, as NAME:VALUE. Repeatable.",
        ),
        click.option("--user", default=None, help="Basic-auth user name."),
        click.option("--password", default=None, help="Basic-auth password."),
        click.option("--verbose", "-v", is_flag=True, help="Enable debug logging."),
        click.option(
            "--json-logs/--no-json-logs",
            default=None,
            help="Use JSON format for logs (default from RESTCLIENT_LOG_JSON).",
        ),
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn


def _options(
    name: str,
    root: str,
    headers: tuple[str, ...],
    user: str | None,
    password: str | None,
    verbose: bool,
    json_logs: bool | None,
) -> CallOptions:
    return CallOptions(
        name=name,
        root=root,
        headers=list(headers),
        user=user,
        password=password,
        verbose=verbose,
        json_logs=json_logs,
    )


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """Issue REST calls against a single named endpoint."""


@cli.command()
@click.argument("path")
@_common_options
def get(  # noqa: PLR0913
    path: str,
    name: str,
    root: str,
    headers: tuple[str, ...],
    user: str | None,
    password: str | None,
    verbose: bool,
    json_logs: bool | None,
) -> None:
    """GET PATH from the endpoint and print the body."""
    options = _options(name, root, headers, user, password, verbose, json_logs)
    client = _build_client(options)
    bind_request_context(uuid.uuid4().hex)
    try:
        result = client.get(path, read_text)
    except RestError as e:
        _fail(e)
        return
    finally:
        clear_request_context()
    _emit(result)


@cli.command()
@click.argument("path")
@click.option("--data", "-d", required=True, help="Text body to POST.")
@_common_options
def post(  # noqa: PLR0913
    path: str,
    data: str,
    name: str,
    root: str,
    headers: tuple[str, ...],
    user: str | None,
    password: str | None,
    verbose: bool,
    json_logs: bool | None,
) -> None:
    """POST text to PATH on the endpoint and print the response body."""
    options = _options(name, root, headers, user, password, verbose, json_logs)
    client = _build_client(options)
    bind_request_context(uuid.uuid4().hex)
    try:
        result = client.post_text(path, data)
    except RestError as e:
        _fail(e)
        return
    finally:
        clear_request_context()
    _emit(result)


if __name__ == "__main__":
    cli()
