"""Architecture enforcement tests for the ingestion package layering.

The ``base`` package (decoders, aggregator, repair, results, errors) is the
inner layer. Provider packages, configuration and the service facade depend
on it, never the other way round.

Rules validated here:
1) Modules under ``summarizer_ingest/base`` must not import provider
   packages, ``summarizer_ingest.config`` or ``summarizer_ingest.service``.
   - The provider factory refers to provider modules by dotted-path strings
     and loads them lazily; only real import statements are checked.

These tests are static-file scans to avoid import-time side effects.
"""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Iterable, List

import pytest

_OUTER_PACKAGES = ("openai", "anthropic", "deepseek", "openrouter", "ollama", "service", "config")


def _iter_python_files(root: Path) -> Iterable[Path]:
    """Yield all Python source files under ``root``, skipping bytecode caches."""
    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts:
            continue
        yield path


def _resolve_relative(path: Path, package_root: Path, module: str | None, level: int) -> str:
    """Return the absolute dotted module targeted by a relative import."""
    parts = list(path.relative_to(package_root.parent).with_suffix("").parts)[:-1]
    base = parts[: len(parts) - (level - 1)] if level > 1 else parts
    return ".".join(base + ([module] if module else []))


def _imported_modules(path: Path, package_root: Path) -> List[str]:
    tree = ast.parse(path.read_text(encoding="utf-8", errors="replace"), filename=str(path))
    found: List[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            found.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                found.append(_resolve_relative(path, package_root, node.module, node.level))
            elif node.module:
                found.append(node.module)
    return found


def _is_outer(module: str) -> bool:
    parts = module.split(".")
    return len(parts) >= 2 and parts[0] == "summarizer_ingest" and parts[1] in _OUTER_PACKAGES


def test_base_does_not_import_outer_layers() -> None:
    """Fail with the offending files when ``base`` reaches outward."""
    package_root = Path(__file__).resolve().parent.parent / "summarizer_ingest"
    base_root = package_root / "base"
    if not base_root.is_dir():
        pytest.skip("summarizer_ingest/base not found; skipping boundary check")

    offenders: List[str] = []
    for py in _iter_python_files(base_root):
        offenders.extend(
            f"{py}: imports '{module}'" for module in _imported_modules(py, package_root) if _is_outer(module)
        )

    if offenders:
        pytest.fail("base must not import providers, config or service.\n" + "\n".join(offenders))


def test_relative_import_resolution() -> None:
    package_root = Path("/repo/summarizer_ingest")
    module_file = package_root / "base" / "streaming" / "aggregator.py"
    assert _resolve_relative(module_file, package_root, "session", 1) == "summarizer_ingest.base.streaming.session"  # nosec B101
    assert _resolve_relative(module_file, package_root, "config", 3) == "summarizer_ingest.config"  # nosec B101
