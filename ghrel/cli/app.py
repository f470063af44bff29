from __future__ import annotations

from pathlib import Path

import typer

from ghrel import __version__
from ghrel.cli.commands.file_cmd import commit_file
from ghrel.cli.commands.oidc_cmd import oidc_token
from ghrel.cli.commands.release_cmd import auto, next_version, release
from ghrel.cli.context import GlobalOptions


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command("next-version")(next_version)
app.command()(release)
app.command()(auto)
app.command("commit-file")(commit_file)
app.command("oidc-token")(oidc_token)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    config: Path | None = typer.Option(
        None, "--config", dir_okay=False, help="Config file (default: ./ghrel.toml if present)"
    ),
    token: str | None = typer.Option(
        None, "--token", help="GitHub token (default: env var named by github.token_env)"
    ),
    verify_token: bool = typer.Option(
        False, "--verify-token", help="Check the token with GET /user before running."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug diagnostics."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    ctx.obj = GlobalOptions(
        config_path=config,
        token=token,
        verbose=verbose,
        verify_token=verify_token,
    )


def main() -> None:
    app()
