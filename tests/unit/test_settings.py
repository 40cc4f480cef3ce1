from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from barpos.infrastructure.settings import Settings


def test_display_timezone_defaults_to_tokyo(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DISPLAY_TIMEZONE", raising=False)

    settings = Settings.from_env()

    assert settings.display_timezone == "Asia/Tokyo"
    assert settings.display_tzinfo.key == "Asia/Tokyo"


def test_display_timezone_is_read_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DISPLAY_TIMEZONE", "UTC")

    assert Settings.from_env().display_tzinfo.key == "UTC"


@pytest.mark.parametrize("name", ["Mars/Base", ""])
def test_unknown_display_timezone_is_rejected(name: str) -> None:
    with pytest.raises(ValueError, match="DISPLAY_TIMEZONE"):
        Settings(display_timezone=name)


@pytest.mark.parametrize("remainders", ["1:700", "1:900,2:800", "1:700,2:1600"])
def test_remainder_tables_that_could_price_down_fail_at_startup(
    monkeypatch: pytest.MonkeyPatch, remainders: str
) -> None:
    monkeypatch.setenv("PRICING_REMAINDER_PRICES", remainders)

    with pytest.raises(ValueError):
        Settings.from_env()
