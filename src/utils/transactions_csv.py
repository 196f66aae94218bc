from __future__ import annotations

import csv
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path

from pydantic import ValidationError

from domain.transactions import AssetId, Transaction, TransactionKind

REQUIRED_COLUMNS = {"date", "kind", "asset", "quantity", "unit_price"}


def load_transactions(csv_path: Path) -> list[Transaction]:
    """Load buy/sell transactions from a CSV file.

    Each row should contain: date,kind,asset,quantity,unit_price
    Dates are ISO formatted (YYYY-MM-DD); kind is BUY or SELL (any case).
    Rows keep their file order, which breaks ties between same-day trades.
    """

    with csv_path.open(newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            raise ValueError(f"Transactions CSV {csv_path} is empty or missing headers")

        missing = REQUIRED_COLUMNS - {name.strip() for name in reader.fieldnames}
        if missing:
            raise ValueError(f"Transactions CSV {csv_path} missing required columns: {', '.join(sorted(missing))}")

        transactions: list[Transaction] = []
        for line_no, raw_row in enumerate(reader, start=2):
            row = {key.strip(): (value or "").strip() for key, value in raw_row.items() if key is not None}
            try:
                transactions.append(
                    Transaction(
                        kind=TransactionKind(row["kind"].upper()),
                        asset=AssetId(row["asset"]),
                        quantity=_parse_decimal(row["quantity"]),
                        unit_price=_parse_decimal(row["unit_price"]),
                        date=date.fromisoformat(row["date"]),
                    )
                )
            except (ValueError, ValidationError) as err:
                raise ValueError(f"Transactions CSV {csv_path} line {line_no}: {err}") from err

    return transactions


def _parse_decimal(raw: str) -> Decimal:
    try:
        return Decimal(raw)
    except InvalidOperation as err:
        raise ValueError(f"Invalid decimal value {raw!r}") from err
