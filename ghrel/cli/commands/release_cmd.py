from __future__ import annotations

from pathlib import Path

import typer

from ghrel.cli.commands._helpers import fail
from ghrel.cli.context import build_context, options_from
from ghrel.core.result import Err
from ghrel.release.model import NoRelease, ReleaseRequest
from ghrel.release.pipeline import release_commit
from ghrel.release.publisher import publish
from ghrel.release.resolver import resolve_next_version


def next_version(
    ctx: typer.Context,
    owner: str = typer.Argument(..., help="Repository owner"),
    repo: str = typer.Argument(..., help="Repository name"),
    sha: str = typer.Argument(..., help="Commit SHA"),
) -> None:
    """Print the next version implied by the commit's pull request labels.

    Prints nothing (exit 0) when the commit is not release-eligible.
    """
    cli = build_context(options_from(ctx))

    result = resolve_next_version(
        cli.client, owner, repo, sha, labels=cli.config.labels, console=cli.console
    )
    if isinstance(result, Err):
        fail(cli.console, result.error)

    version = result.value
    if isinstance(version, NoRelease):
        cli.console.info(f"no release: {version.describe()}")
        return
    typer.echo(version.to_tag(cli.config.release.tag_prefix))


def release(
    ctx: typer.Context,
    owner: str = typer.Argument(..., help="Repository owner"),
    repo: str = typer.Argument(..., help="Repository name"),
    tag: str = typer.Argument(..., help="Tag to create"),
    sha: str = typer.Argument(..., help="Target commit SHA"),
    name: str | None = typer.Option(None, "--name", help="Release name (defaults to the tag)"),
    assets: Path | None = typer.Option(
        None,
        "--assets",
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory whose top-level files are uploaded as release assets",
    ),
) -> None:
    """Create a release and annotated tag, optionally uploading assets."""
    cli = build_context(options_from(ctx))

    result = publish(
        cli.client,
        ReleaseRequest(
            owner=owner, repo=repo, tag=tag, target_commit=sha, name=name, assets=assets
        ),
        tag_message=cli.config.release.tag_message,
        console=cli.console,
    )
    if isinstance(result, Err):
        fail(cli.console, result.error)

    published = result.value
    cli.console.success(f"released {published.tag} ({len(published.assets)} assets)")
    typer.echo(published.html_url or published.tag)


def auto(
    ctx: typer.Context,
    owner: str = typer.Argument(..., help="Repository owner"),
    repo: str = typer.Argument(..., help="Repository name"),
    sha: str = typer.Argument(..., help="Commit SHA"),
    assets: Path | None = typer.Option(
        None,
        "--assets",
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory whose top-level files are uploaded as release assets",
    ),
) -> None:
    """Resolve the next version and publish it when there is one."""
    cli = build_context(options_from(ctx))

    result = release_commit(
        cli.client, cli.config, owner, repo, sha, assets=assets, console=cli.console
    )
    if isinstance(result, Err):
        fail(cli.console, result.error)

    outcome = result.value
    if isinstance(outcome.version, NoRelease):
        cli.console.info(f"no release: {outcome.version.describe()}")
        return

    tag = outcome.version.to_tag(cli.config.release.tag_prefix)
    cli.console.success(f"released {tag}")
    typer.echo(tag)
