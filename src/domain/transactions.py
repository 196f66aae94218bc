from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import NewType

from pydantic import BaseModel, ConfigDict, model_validator

AssetId = NewType("AssetId", str)


class TransactionKind(StrEnum):
    BUY = "BUY"
    SELL = "SELL"


class Transaction(BaseModel):
    """A single buy or sell of an asset.

    Prices are expressed in the user's stated currency; no conversion happens
    anywhere in the engine.
    """

    model_config = ConfigDict(frozen=True)

    kind: TransactionKind
    asset: AssetId
    quantity: Decimal
    unit_price: Decimal
    date: date

    @model_validator(mode="after")
    def _validate_fields(self) -> Transaction:
        if not self.asset:
            raise ValueError("Transaction.asset must be non-empty")
        if self.quantity <= 0:
            raise ValueError("Transaction.quantity must be > 0")
        if self.unit_price <= 0:
            raise ValueError("Transaction.unit_price must be > 0")
        return self

    @property
    def total_value(self) -> Decimal:
        return self.quantity * self.unit_price
