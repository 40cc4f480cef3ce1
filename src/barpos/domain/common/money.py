from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Currency:
    code: str
    symbol: str
    minor_digits: int

    def __post_init__(self) -> None:
        if len(self.code) != 3 or not self.code.isalpha() or not self.code.isupper():
            raise ValueError("currency must be a 3-letter uppercase code")
        if self.minor_digits < 0:
            raise ValueError("minor_digits must be >= 0")


CURRENCIES: dict[str, Currency] = {
    "JPY": Currency(code="JPY", symbol="¥", minor_digits=0),
    "USD": Currency(code="USD", symbol="$", minor_digits=2),
    "EUR": Currency(code="EUR", symbol="€", minor_digits=2),
}


def get_currency(code: str) -> Currency:
    try:
        return CURRENCIES[code.upper()]
    except KeyError:
        raise ValueError(f"unsupported currency: {code}") from None


def ensure_non_negative(amount: int, field_name: str) -> None:
    if amount < 0:
        raise ValueError(f"{field_name} must be >= 0")


def format_money(amount_minor: int, currency: Currency) -> str:
    """Render an integer minor-unit amount, e.g. 1500 JPY -> "¥1,500", 1250 USD -> "$12.50"."""
    sign = "-" if amount_minor < 0 else ""
    major, minor = divmod(abs(amount_minor), 10**currency.minor_digits)
    text = f"{major:,}"
    if currency.minor_digits:
        text = f"{text}.{minor:0{currency.minor_digits}d}"
    return f"{sign}{currency.symbol}{text}"
