from __future__ import annotations

from decimal import Decimal
from random import Random

import pytest

from domain.errors import InvalidTransactionError
from domain.partition import partition_transactions
from domain.transactions import AssetId, Transaction, TransactionKind
from tests.helpers.transactions import DayGenerator, buy, day, make_transaction, sell


def test_groups_by_case_sensitive_asset() -> None:
    histories = partition_transactions(
        [
            buy("BTC", 1, 100, on=day(1)),
            buy("btc", 1, 100, on=day(1)),
            sell("BTC", 1, 110, on=day(2)),
        ]
    )

    assert list(histories) == ["BTC", "btc"]
    assert len(histories["BTC"].buys) == 1
    assert len(histories["BTC"].sells) == 1
    assert len(histories["btc"].buys) == 1
    assert histories["btc"].sells == []


def test_sorts_by_date_and_keeps_input_order_on_ties() -> None:
    transactions = [
        buy("ETH", 1, 30, on=day(3)),
        buy("ETH", 1, 11, on=day(1)),
        buy("ETH", 1, 12, on=day(1)),
        sell("ETH", 1, 50, on=day(7)),
        sell("ETH", 1, 40, on=day(4)),
    ]

    history = partition_transactions(transactions)["ETH"]

    assert [entry.position for entry in history.buys] == [1, 2, 0]
    assert [entry.transaction.unit_price for entry in history.buys] == [11, 12, 30]
    assert [entry.position for entry in history.sells] == [4, 3]


def test_no_transaction_is_dropped_or_duplicated() -> None:
    rng = Random(7)
    gen = DayGenerator(_rng=Random(7))
    transactions = [
        make_transaction(
            rng.choice([TransactionKind.BUY, TransactionKind.SELL]),
            rng.choice(["BTC", "ETH", "SOL"]),
            rng.randint(1, 10),
            rng.randint(1, 1000),
            on=gen(),
        )
        for _ in range(200)
    ]

    histories = partition_transactions(transactions)

    positions = sorted(entry.position for h in histories.values() for entry in (*h.buys, *h.sells))
    assert positions == list(range(len(transactions)))
    for history in histories.values():
        for entry in (*history.buys, *history.sells):
            assert transactions[entry.position] is entry.transaction
            assert entry.transaction.asset == history.asset


def test_empty_input() -> None:
    assert partition_transactions([]) == {}


def test_unknown_kind_is_rejected() -> None:
    transfer = Transaction.model_construct(
        kind="TRANSFER",
        asset=AssetId("BTC"),
        quantity=Decimal(1),
        unit_price=Decimal(10),
        date=day(2),
    )

    with pytest.raises(InvalidTransactionError) as exc_info:
        partition_transactions([buy("BTC", 1, 5, on=day(1)), transfer])

    assert exc_info.value.position == 1
