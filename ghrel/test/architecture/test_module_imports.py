from __future__ import annotations

import importlib
import pkgutil

import pytest
from typer.testing import CliRunner

import ghrel


def _modules() -> list[str]:
    return sorted(
        info.name
        for info in pkgutil.walk_packages(ghrel.__path__, prefix="ghrel.")
        if ".test" not in info.name
    )


@pytest.mark.parametrize("name", _modules())
def test_module_imports(name: str) -> None:
    importlib.import_module(name)


def test_cli_lists_every_command() -> None:
    from ghrel.cli.app import app

    result = CliRunner().invoke(app, ["--help"])

    assert result.exit_code == 0
    for command in ("next-version", "release", "auto", "commit-file", "oidc-token"):
        assert command in result.stdout
