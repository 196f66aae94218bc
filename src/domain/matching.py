from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from pydantic import BaseModel, ConfigDict, model_validator

from .errors import InsufficientLotsError
from .partition import AssetHistory, SequencedTransaction
from .transactions import AssetId, Transaction

logger = logging.getLogger(__name__)


@dataclass
class _Lot:
    acquired_date: date
    unit_price: Decimal
    remaining_quantity: Decimal
    position: int


class Disposal(BaseModel):
    """Outcome of matching one sell against the lots it consumed."""

    model_config = ConfigDict(frozen=True)

    asset: AssetId
    sell_date: date
    sell_index: int
    quantity: Decimal
    proceeds: Decimal
    cost_basis: Decimal
    gain: Decimal
    holding_period_days: int

    @model_validator(mode="after")
    def _validate(self) -> Disposal:
        if self.quantity <= 0:
            raise ValueError("quantity must be > 0")
        if self.cost_basis < 0:
            raise ValueError("cost_basis must be >= 0")
        if self.gain != self.proceeds - self.cost_basis:
            raise ValueError("gain must equal proceeds - cost_basis")
        return self


class OpenLot(BaseModel):
    model_config = ConfigDict(frozen=True)

    asset: AssetId
    acquired_date: date
    quantity_remaining: Decimal
    unit_price: Decimal


class MatchResult(BaseModel):
    disposals: list[Disposal]
    open_lots: list[OpenLot]


def round_days(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


class FifoMatcher:
    """Match the sells of one asset against its buys, oldest lot first.

    A lot only becomes available to sells dated on or after its acquisition
    date. Lots acquired on the same day keep their input order.
    """

    def __init__(self, history: AssetHistory) -> None:
        self._history = history
        self._lots: deque[_Lot] = deque()

    @property
    def asset(self) -> AssetId:
        return self._history.asset

    def run(self) -> MatchResult:
        pending_buys = deque(self._history.buys)
        disposals: list[Disposal] = []

        for sell in self._history.sells:
            self._open_lots_until(pending_buys, sell.transaction.date)
            disposals.append(self._dispose(sell))

        # Buys dated after the last sell are still open inventory.
        self._open_lots_until(pending_buys, None)

        open_lots = [
            OpenLot(
                asset=self.asset,
                acquired_date=lot.acquired_date,
                quantity_remaining=lot.remaining_quantity,
                unit_price=lot.unit_price,
            )
            for lot in self._lots
        ]
        return MatchResult(disposals=disposals, open_lots=open_lots)

    def _open_lots_until(self, pending_buys: deque[SequencedTransaction], cutoff: date | None) -> None:
        while pending_buys and (cutoff is None or pending_buys[0].transaction.date <= cutoff):
            position, buy = pending_buys.popleft()
            self._lots.append(
                _Lot(
                    acquired_date=buy.date,
                    unit_price=buy.unit_price,
                    remaining_quantity=buy.quantity,
                    position=position,
                )
            )

    def _dispose(self, entry: SequencedTransaction) -> Disposal:
        sell = entry.transaction
        cost_basis = Decimal(0)
        weighted_days = Decimal(0)

        for lot, consumed in self._consume(sell):
            cost_basis += consumed * lot.unit_price
            weighted_days += consumed * (sell.date - lot.acquired_date).days

        proceeds = sell.quantity * sell.unit_price
        return Disposal(
            asset=self.asset,
            sell_date=sell.date,
            sell_index=entry.position,
            quantity=sell.quantity,
            proceeds=proceeds,
            cost_basis=cost_basis,
            gain=proceeds - cost_basis,
            holding_period_days=round_days(weighted_days / sell.quantity),
        )

    def _consume(self, sell: Transaction) -> Iterable[tuple[_Lot, Decimal]]:
        remaining = sell.quantity
        while remaining > 0:
            if not self._lots:
                logger.warning(
                    "Sell of %s %s on %s left %s unmatched", sell.quantity, self.asset, sell.date, remaining
                )
                raise InsufficientLotsError(asset=self.asset, sell=sell, quantity_unmatched=remaining)

            lot = self._lots[0]
            consumed = min(remaining, lot.remaining_quantity)
            lot.remaining_quantity -= consumed
            remaining -= consumed
            if lot.remaining_quantity == 0:
                self._lots.popleft()
            logger.debug(
                "Consumed %s %s from lot #%d acquired %s", consumed, self.asset, lot.position, lot.acquired_date
            )
            yield lot, consumed


def match_asset(history: AssetHistory) -> MatchResult:
    return FifoMatcher(history).run()
