from __future__ import annotations

import subprocess
import sys
from pathlib import Path

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "tools" / "depcheck.py"


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, str(SCRIPT_PATH), *args],
        capture_output=True,
        text=True,
        check=False,
    )


def test_depcheck_fails_on_forbidden_domain_import(tmp_path: Path) -> None:
    violating_file = tmp_path / "tiers.py"
    violating_file.write_text("import sqlalchemy\n", encoding="utf-8")

    result = _run("--layer", "domain", "--path", str(tmp_path))

    assert result.returncode == 1
    assert f"[domain] {violating_file}:1 -> sqlalchemy" in result.stdout


def test_depcheck_flags_application_imports_from_domain(tmp_path: Path) -> None:
    violating_file = tmp_path / "cart.py"
    violating_file.write_text(
        "from barpos.application.use_cases.errors import EmptyOrderError\n",
        encoding="utf-8",
    )

    result = _run("--layer", "domain", "--path", str(violating_file))

    assert result.returncode == 1
    assert f"{violating_file}:1 -> barpos.application.use_cases.errors" in result.stdout


def test_application_layer_may_use_pydantic_but_not_the_store(tmp_path: Path) -> None:
    allowed = tmp_path / "requests.py"
    allowed.write_text("from pydantic import BaseModel\n", encoding="utf-8")
    assert _run("--layer", "application", "--path", str(allowed)).returncode == 0

    violating_file = tmp_path / "place_order.py"
    violating_file.write_text(
        "from pydantic import BaseModel\n"
        "from barpos.infrastructure.memory.store import InMemoryPosStore\n",
        encoding="utf-8",
    )
    result = _run("--layer", "application", "--path", str(violating_file))

    assert result.returncode == 1
    assert f"[application] {violating_file}:2 -> barpos.infrastructure.memory.store" in (
        result.stdout
    )
    assert "pydantic" not in result.stdout


def test_path_requires_a_single_layer(tmp_path: Path) -> None:
    result = _run("--path", str(tmp_path))

    assert result.returncode == 2


def test_depcheck_passes_on_the_barpos_package() -> None:
    result = _run()

    assert result.returncode == 0, result.stdout
    assert "depcheck passed (application, domain)" in result.stdout
