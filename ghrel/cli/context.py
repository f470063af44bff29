from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from ghrel import __version__
from ghrel.core.config import Config, load_config
from ghrel.core.errors import ErrorCode
from ghrel.core.result import Err
from ghrel.hosting.client import HostingClient, authenticate
from ghrel.hosting.errors import AuthError
from ghrel.hosting.http import HttpClient, RealHttpClient
from ghrel.output.console import ConsoleProtocol, RichConsole

DEFAULT_CONFIG_NAME = "ghrel.toml"


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    config_path: Path | None = None
    token: str | None = None
    verbose: bool = False
    verify_token: bool = False


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    client: HostingClient
    console: ConsoleProtocol


def options_from(ctx: typer.Context) -> GlobalOptions:
    obj = ctx.obj
    return obj if isinstance(obj, GlobalOptions) else GlobalOptions()


def resolve_config(options: GlobalOptions) -> Config:
    """Load the explicit --config file, else ./ghrel.toml if present, else defaults."""
    path = options.config_path
    if path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_NAME
        if not candidate.is_file():
            return Config()
        path = candidate

    result = load_config(path)
    if isinstance(result, Err):
        typer.echo(f"error: {result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    return result.value


def make_http_client(config: Config) -> HttpClient:
    return RealHttpClient(timeout=config.github.timeout, user_agent=f"ghrel/{__version__}")


def build_context(options: GlobalOptions) -> CLIContext:
    config = resolve_config(options)
    console = RichConsole(verbose=options.verbose)

    token = options.token or os.environ.get(config.github.token_env)
    auth = authenticate(
        make_http_client(config), token, config.github, verify=options.verify_token
    )
    if isinstance(auth, Err):
        console.error(auth.error.pretty())
        code = ErrorCode.ENV_ERROR if isinstance(auth.error, AuthError) else ErrorCode.NETWORK_ERROR
        raise typer.Exit(code=int(code))

    return CLIContext(config=config, client=auth.value, console=console)
