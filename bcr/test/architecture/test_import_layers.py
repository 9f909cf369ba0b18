from __future__ import annotations

import ast
from pathlib import Path

BCR_ROOT = Path(__file__).resolve().parents[2]


def _iter_python_files(base: Path) -> list[Path]:
    return [p for p in sorted(base.rglob("*.py")) if "__pycache__" not in p.parts]


def _imports(path: Path) -> list[tuple[str, int]]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    found: list[tuple[str, int]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            found.extend((alias.name, node.lineno) for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and not node.level:
            found.append((node.module, node.lineno))
    return found


def _matches_prefix(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(prefix + ".")


def _offenders(layer: str, forbidden: tuple[str, ...]) -> list[str]:
    out: list[str] = []
    for file_path in _iter_python_files(BCR_ROOT / layer):
        rel = file_path.relative_to(BCR_ROOT)
        for module, line in _imports(file_path):
            if any(_matches_prefix(module, prefix) for prefix in forbidden):
                out.append(f"{rel}:{line}: forbidden import '{module}'")
    return out


def test_core_is_independent_of_outer_layers() -> None:
    offenders = _offenders(
        "core", ("bcr.cli", "bcr.services", "bcr.tools", "bcr.output", "typer", "rich")
    )
    assert not offenders, "core dependency violations:\n" + "\n".join(offenders)


def test_services_do_not_import_cli_or_rich() -> None:
    offenders = _offenders("services", ("bcr.cli", "typer", "rich"))
    assert not offenders, "services dependency violations:\n" + "\n".join(offenders)


def test_only_output_imports_rich() -> None:
    offenders: list[str] = []
    for layer in ("core", "platform", "tools", "services", "cli"):
        offenders.extend(_offenders(layer, ("rich",)))
    assert not offenders, "rich used outside bcr.output:\n" + "\n".join(offenders)
