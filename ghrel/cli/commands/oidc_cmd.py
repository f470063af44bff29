from __future__ import annotations

import os

import typer

from ghrel.cli.commands._helpers import fail
from ghrel.cli.context import make_http_client, options_from, resolve_config
from ghrel.core.result import Err
from ghrel.hosting.oidc import REQUEST_TOKEN_ENV, REQUEST_URL_ENV, fetch_oidc_token
from ghrel.output.console import RichConsole


def oidc_token(
    ctx: typer.Context,
    audience: str | None = typer.Option(None, "--audience", help="Token audience"),
) -> None:
    """Print a GitHub Actions OIDC token for the current run."""
    options = options_from(ctx)
    config = resolve_config(options)
    console = RichConsole(verbose=options.verbose)

    result = fetch_oidc_token(
        make_http_client(config),
        request_token=os.environ.get(REQUEST_TOKEN_ENV),
        request_url=os.environ.get(REQUEST_URL_ENV),
        audience=audience,
    )
    if isinstance(result, Err):
        fail(console, result.error)

    typer.echo(result.value)
