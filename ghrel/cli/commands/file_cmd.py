from __future__ import annotations

from pathlib import Path

import typer

from ghrel.cli.commands._helpers import exit_with, fail
from ghrel.cli.context import build_context, options_from
from ghrel.core.errors import ErrorCode
from ghrel.core.result import Err
from ghrel.release.model import Committer, FileUpsertRequest
from ghrel.release.upserter import upsert_file


def commit_file(
    ctx: typer.Context,
    owner: str = typer.Argument(..., help="Repository owner"),
    repo: str = typer.Argument(..., help="Repository name"),
    path: str = typer.Argument(..., help="Path of the file in the repository"),
    file: Path = typer.Option(
        ..., "--file", exists=True, dir_okay=False, readable=True, help="Local file to commit"
    ),
    message: str = typer.Option(..., "--message", "-m", help="Commit message"),
    committer_name: str = typer.Option(..., "--committer-name"),
    committer_email: str = typer.Option(..., "--committer-email"),
    branch: str | None = typer.Option(
        None, "--branch", help="Target branch (default branch if omitted)"
    ),
) -> None:
    """Create or update a single file and print the new commit SHA."""
    cli = build_context(options_from(ctx))

    try:
        content = file.read_bytes()
    except OSError as e:
        exit_with(cli.console, f"cannot read {file}: {e}", ErrorCode.IO_ERROR)

    result = upsert_file(
        cli.client,
        FileUpsertRequest(
            owner=owner,
            repo=repo,
            path=path,
            content=content,
            message=message,
            committer=Committer(name=committer_name, email=committer_email),
            branch=branch,
        ),
        console=cli.console,
    )
    if isinstance(result, Err):
        fail(cli.console, result.error)

    typer.echo(result.value)
