from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from pydantic import BaseModel, ConfigDict

from .jurisdictions import Jurisdiction, PolicyResult
from .matching import Disposal, OpenLot

FIFO_NOTE = "Cost basis uses FIFO matching per asset; fees and currency conversion are not considered."


class TaxReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    jurisdiction: Jurisdiction
    total_proceeds: Decimal
    total_cost_basis: Decimal
    total_gains: Decimal
    taxable_gains: Decimal
    estimated_tax: Decimal | None
    short_term_gains: Decimal | None = None
    long_term_gains: Decimal | None = None
    notes: tuple[str, ...]
    disposals: tuple[Disposal, ...]
    open_lots: tuple[OpenLot, ...] = ()


def build_tax_report(
    jurisdiction: Jurisdiction,
    disposals: Sequence[Disposal],
    policy: PolicyResult,
    *,
    open_lots: Sequence[OpenLot] = (),
) -> TaxReport:
    """Combine the disposals and the policy outcome into the final report."""
    return TaxReport(
        jurisdiction=jurisdiction,
        total_proceeds=sum((d.proceeds for d in disposals), start=Decimal(0)),
        total_cost_basis=sum((d.cost_basis for d in disposals), start=Decimal(0)),
        total_gains=sum((d.gain for d in disposals), start=Decimal(0)),
        taxable_gains=policy.taxable_gains,
        estimated_tax=policy.estimated_tax,
        short_term_gains=policy.short_term_gains,
        long_term_gains=policy.long_term_gains,
        notes=(*policy.notes, FIFO_NOTE),
        disposals=tuple(disposals),
        open_lots=tuple(open_lots),
    )
