from __future__ import annotations

from typing import Sequence

from domain.report import TaxReport

from .formatting import format_currency, format_quantity


def _render_table(headers: Sequence[str], rows: Sequence[Sequence[str]], *, left_columns: int = 1) -> list[str]:
    widths = [max(len(header), max((len(row[idx]) for row in rows), default=0)) for idx, header in enumerate(headers)]

    def line(cells: Sequence[str]) -> str:
        return " ".join(
            f"{cell:<{widths[idx]}}" if idx < left_columns else f"{cell:>{widths[idx]}}"
            for idx, cell in enumerate(cells)
        )

    header = line(headers)
    return [header, "-" * len(header), *(line(row) for row in rows)]


def render_disposals(report: TaxReport) -> None:
    print("Disposals (FIFO):")
    if not report.disposals:
        print("  (no disposals)")
        return

    rows = [
        (
            disposal.sell_date.isoformat(),
            disposal.asset,
            format_quantity(disposal.quantity),
            format_currency(disposal.proceeds),
            format_currency(disposal.cost_basis),
            format_currency(disposal.gain),
            str(disposal.holding_period_days),
        )
        for disposal in report.disposals
    ]
    headers = ("Date", "Asset", "Quantity", "Proceeds", "Cost basis", "Gain / loss", "Days held")
    print("\n".join(_render_table(headers, rows, left_columns=2)))


def render_open_lots(report: TaxReport) -> None:
    print("Open lots:")
    if not report.open_lots:
        print("  (empty)")
        return

    rows = [
        (lot.asset, lot.acquired_date.isoformat(), format_quantity(lot.quantity_remaining), format_currency(lot.unit_price))
        for lot in report.open_lots
    ]
    print("\n".join(_render_table(("Asset", "Acquired", "Remaining", "Unit price"), rows, left_columns=2)))


def render_tax_report(report: TaxReport, *, currency: str = "USD") -> None:
    print(f"Capital gains summary ({report.jurisdiction}, {currency}):")
    totals = [
        ("Total proceeds", report.total_proceeds),
        ("Total cost basis", report.total_cost_basis),
        ("Total gains", report.total_gains),
    ]
    if report.short_term_gains is not None:
        totals.append(("Short-term gains", report.short_term_gains))
    if report.long_term_gains is not None:
        totals.append(("Long-term gains", report.long_term_gains))
    totals.extend([("Taxable gains", report.taxable_gains), ("Estimated tax", report.estimated_tax)])

    label_width = max(len(label) for label, _ in totals)
    for label, value in totals:
        print(f"  {label:<{label_width}} {format_currency(value)}")

    render_disposals(report)
    render_open_lots(report)

    print("Notes:")
    for note in report.notes:
        print(f"  - {note}")
