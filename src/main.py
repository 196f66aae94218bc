from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from config import LOG_LEVELS, config
from domain.engine import compute_tax_report
from domain.errors import EngineError, InsufficientLotsError
from utils.report_summary import render_tax_report
from utils.transactions_csv import load_transactions

logger = logging.getLogger(__name__)


def run(csv_path: Path, *, jurisdiction: str, currency: str) -> int:
    logger.info("Loading transactions from %s", csv_path)
    try:
        transactions = load_transactions(csv_path)
        report = compute_tax_report(transactions, jurisdiction)
    except InsufficientLotsError as err:
        print(f"Error: {err}")
        print("Check that every sell is preceded by buys covering its quantity.")
        return 1
    except (EngineError, ValueError, OSError) as err:
        print(f"Error: {err}")
        return 1

    render_tax_report(report, currency=currency)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    try:
        settings = config()
    except ValidationError as err:
        print(f"Error: invalid settings: {err}")
        return 1

    parser = argparse.ArgumentParser(description="Estimate capital gains tax from buy/sell transactions (FIFO).")
    parser.add_argument("--csv", type=Path, default=Path("data/transactions.csv"))
    parser.add_argument("--jurisdiction", default=str(settings.default_jurisdiction))
    parser.add_argument("--currency", default=settings.currency)
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=settings.log_level)
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    return run(args.csv, jurisdiction=args.jurisdiction, currency=args.currency)


if __name__ == "__main__":
    raise SystemExit(main())
