from __future__ import annotations

import ast
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]


def _imported_modules(path: Path) -> list[tuple[str, int]]:
    tree = ast.parse(path.read_text(encoding="utf-8"))
    found: list[tuple[str, int]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            found.extend((alias.name, node.lineno) for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            found.append((node.module, node.lineno))
    return found


def _source_files() -> list[Path]:
    return [p for p in ROOT.rglob("*.py") if "test" not in p.relative_to(ROOT).parts]


def test_rich_is_only_imported_by_the_console() -> None:
    offenders = [
        f"{path.relative_to(ROOT)}:{line}: {module}"
        for path in _source_files()
        for module, line in _imported_modules(path)
        if (module == "rich" or module.startswith("rich."))
        and path.relative_to(ROOT).as_posix() != "output/console.py"
    ]
    assert not offenders, "Direct rich usage outside output/console.py:\n" + "\n".join(offenders)


def test_release_layer_does_not_import_the_cli() -> None:
    offenders = [
        f"{path.relative_to(ROOT)}:{line}: {module}"
        for path in (ROOT / "release").rglob("*.py")
        for module, line in _imported_modules(path)
        if module.startswith(("ghrel.cli", "typer"))
    ]
    assert not offenders, "\n".join(offenders)
