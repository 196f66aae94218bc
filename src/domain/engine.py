from __future__ import annotations

import logging
from typing import Iterable

from .errors import InvalidTransactionError
from .jurisdictions import Jurisdiction, apply_policy
from .matching import Disposal, OpenLot, match_asset
from .partition import partition_transactions
from .report import TaxReport, build_tax_report
from .transactions import Transaction, TransactionKind

logger = logging.getLogger(__name__)


def compute_tax_report(transactions: Iterable[Transaction], jurisdiction: Jurisdiction | str) -> TaxReport:
    """Run partitioning, FIFO matching, the jurisdiction policy and aggregation.

    Raises an ``EngineError`` subclass for invalid input, an unknown
    jurisdiction or a sell that cannot be covered by earlier buys.
    """
    selected = Jurisdiction.parse(jurisdiction)
    transactions = list(transactions)
    _check_preconditions(transactions)

    histories = partition_transactions(transactions)
    logger.info("Matching %d transactions across %d assets", len(transactions), len(histories))

    disposals: list[Disposal] = []
    open_lots: list[OpenLot] = []
    for history in histories.values():
        result = match_asset(history)
        disposals.extend(result.disposals)
        open_lots.extend(result.open_lots)

    disposals.sort(key=lambda disposal: disposal.sell_index)

    policy = apply_policy(selected, disposals)
    logger.info("Applied %s policy to %d disposals", selected, len(disposals))
    return build_tax_report(selected, disposals, policy, open_lots=open_lots)


def _check_preconditions(transactions: list[Transaction]) -> None:
    # Models built with model_construct() skip validation, so check again here.
    for position, transaction in enumerate(transactions):
        if not isinstance(transaction.kind, TransactionKind):
            raise InvalidTransactionError("Unknown transaction kind", transaction=transaction, position=position)
        if not transaction.asset:
            raise InvalidTransactionError("Empty asset symbol", transaction=transaction, position=position)
        if transaction.quantity <= 0:
            raise InvalidTransactionError("Quantity must be positive", transaction=transaction, position=position)
        if transaction.unit_price <= 0:
            raise InvalidTransactionError("Unit price must be positive", transaction=transaction, position=position)
        if transaction.date is None:
            raise InvalidTransactionError("Missing date", transaction=transaction, position=position)
