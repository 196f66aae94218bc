from __future__ import annotations

from decimal import Decimal

from .transactions import AssetId, Transaction


class EngineError(Exception):
    """Base class for every failure raised by the tax engine."""


class InvalidTransactionError(EngineError):
    def __init__(self, message: str, *, transaction: Transaction, position: int) -> None:
        super().__init__(f"{message} (transaction #{position}: {transaction.kind} {transaction.asset})")
        self.transaction = transaction
        self.position = position


class UnknownJurisdictionError(EngineError):
    def __init__(self, code: str) -> None:
        super().__init__(f"Unknown jurisdiction {code!r}")
        self.code = code


class InsufficientLotsError(EngineError):
    """A sell asks for more units than were bought and not yet sold before it."""

    def __init__(
        self,
        *,
        asset: AssetId,
        sell: Transaction,
        quantity_unmatched: Decimal,
    ) -> None:
        super().__init__(
            f"Not enough lots for asset={asset} sell@{sell.date.isoformat()} "
            f"requested={sell.quantity} unmatched={quantity_unmatched}"
        )
        self.asset = asset
        self.sell = sell
        self.quantity_requested = sell.quantity
        self.quantity_unmatched = quantity_unmatched
