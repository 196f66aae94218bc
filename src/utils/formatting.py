from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

NOT_COMPUTED = "n/a"


def format_quantity(value: Decimal) -> str:
    normalized = value.normalize()
    # Avoid scientific notation for whole quantities.
    if normalized == normalized.to_integral():
        return f"{normalized:.0f}"
    return format(normalized, "f")


def format_currency(value: Decimal | None) -> str:
    if value is None:
        return NOT_COMPUTED
    cents = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if cents == 0:
        cents = abs(cents)
    return f"{cents:,.2f}"
