from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, NamedTuple

from .errors import InvalidTransactionError
from .transactions import AssetId, Transaction, TransactionKind


class SequencedTransaction(NamedTuple):
    """A transaction paired with its position in the caller's input list."""

    position: int
    transaction: Transaction


@dataclass
class AssetHistory:
    asset: AssetId
    buys: list[SequencedTransaction] = field(default_factory=list)
    sells: list[SequencedTransaction] = field(default_factory=list)


def partition_transactions(transactions: Iterable[Transaction]) -> dict[AssetId, AssetHistory]:
    """Group transactions per asset into date-ordered buy and sell sequences.

    Sorting is stable, so transactions sharing a date keep their input order.
    Assets appear in the mapping in order of first occurrence.
    """
    histories: dict[AssetId, AssetHistory] = {}
    for position, transaction in enumerate(transactions):
        history = histories.get(transaction.asset)
        if history is None:
            history = histories[transaction.asset] = AssetHistory(asset=transaction.asset)

        entry = SequencedTransaction(position, transaction)
        if transaction.kind == TransactionKind.BUY:
            history.buys.append(entry)
        elif transaction.kind == TransactionKind.SELL:
            history.sells.append(entry)
        else:
            raise InvalidTransactionError("Unknown transaction kind", transaction=transaction, position=position)

    for history in histories.values():
        history.buys.sort(key=lambda entry: entry.transaction.date)
        history.sells.sort(key=lambda entry: entry.transaction.date)

    return histories
