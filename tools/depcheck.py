from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

PACKAGE_ROOT = Path(__file__).resolve().parents[1] / "src" / "barpos"

# The domain (pricing, cart, order rules) stays pure Python. The application layer
# may use pydantic DTOs and prometheus counters, but never the web or storage stack.
LAYER_POLICIES: dict[str, frozenset[str]] = {
    "domain": frozenset(
        {
            "fastapi",
            "starlette",
            "pydantic",
            "sqlalchemy",
            "redis",
            "httpx",
            "requests",
            "opentelemetry",
            "prometheus_client",
            "barpos.api",
            "barpos.application",
            "barpos.infrastructure",
        }
    ),
    "application": frozenset(
        {
            "fastapi",
            "starlette",
            "sqlalchemy",
            "redis",
            "httpx",
            "requests",
            "barpos.api",
            "barpos.infrastructure",
        }
    ),
}


@dataclass(frozen=True)
class Violation:
    layer: str
    file_path: Path
    line: int
    module: str


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
        return
    if root.is_dir():
        yield from sorted(root.rglob("*.py"))


def _is_forbidden(module: str, forbidden: frozenset[str]) -> bool:
    return any(module == name or module.startswith(f"{name}.") for name in forbidden)


def _imported_modules(tree: ast.AST) -> Iterable[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            yield node.lineno, node.module


def scan_layer(layer: str, paths: Sequence[Path]) -> list[Violation]:
    forbidden = LAYER_POLICIES[layer]
    violations: list[Violation] = []
    for path in paths:
        for file_path in _python_files(path):
            tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
            violations.extend(
                Violation(layer=layer, file_path=file_path, line=line, module=module)
                for line, module in _imported_modules(tree)
                if _is_forbidden(module, forbidden)
            )
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Layering check for the barpos package: the domain must not import "
            "frameworks or outer layers, and the application layer must not import "
            "the web, database, or cache stack."
        )
    )
    parser.add_argument(
        "--layer",
        choices=sorted(LAYER_POLICIES),
        action="append",
        default=[],
        help="Layer policy to enforce (repeatable). Defaults to every layer.",
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Path to scan with the chosen --layer policy (repeatable). "
        "Defaults to src/barpos/<layer>.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    layers = args.layer or sorted(LAYER_POLICIES)
    if args.path and len(layers) != 1:
        print("depcheck: --path needs exactly one --layer")
        return 2

    violations: list[Violation] = []
    for layer in layers:
        paths = [Path(item) for item in args.path] or [PACKAGE_ROOT / layer]
        violations.extend(scan_layer(layer, paths))

    if not violations:
        print(f"depcheck passed ({', '.join(layers)})")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(f"[{violation.layer}] {violation.file_path}:{violation.line} -> {violation.module}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
