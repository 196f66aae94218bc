"""Hand-coded capital-gains policies per jurisdiction.

None of these implement real progressive brackets, annual allowances or loss
carry-forward. Each policy says so through at least one note on its result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum
from typing import Iterable, Sequence

from .errors import UnknownJurisdictionError
from .matching import Disposal

LONG_TERM_THRESHOLD_DAYS = 365

INDIA_FLAT_RATE = Decimal("0.30")
CANADA_INCLUSION_RATE = Decimal("0.5")
AUSTRALIA_CGT_DISCOUNT = Decimal("0.5")


class Jurisdiction(StrEnum):
    US = "US"
    IN = "IN"
    GB = "GB"
    CA = "CA"
    AU = "AU"
    DE = "DE"
    AE = "AE"

    @classmethod
    def parse(cls, code: str | Jurisdiction) -> Jurisdiction:
        if isinstance(code, Jurisdiction):
            return code
        try:
            return cls(code.strip().upper())
        except (ValueError, AttributeError) as err:
            raise UnknownJurisdictionError(str(code)) from err


@dataclass
class PolicyResult:
    taxable_gains: Decimal
    estimated_tax: Decimal | None
    notes: list[str] = field(default_factory=list)
    short_term_gains: Decimal | None = None
    long_term_gains: Decimal | None = None


def is_long_term(disposal: Disposal) -> bool:
    return disposal.holding_period_days > LONG_TERM_THRESHOLD_DAYS


def _sum_gains(disposals: Iterable[Disposal]) -> Decimal:
    return sum((disposal.gain for disposal in disposals), start=Decimal(0))


def apply_policy(jurisdiction: Jurisdiction, disposals: Sequence[Disposal]) -> PolicyResult:
    match jurisdiction:
        case Jurisdiction.US:
            return _united_states(disposals)
        case Jurisdiction.IN:
            return _india(disposals)
        case Jurisdiction.GB:
            return _united_kingdom(disposals)
        case Jurisdiction.CA:
            return _canada(disposals)
        case Jurisdiction.AU:
            return _australia(disposals)
        case Jurisdiction.DE:
            return _germany(disposals)
        case Jurisdiction.AE:
            return _united_arab_emirates(disposals)
    raise UnknownJurisdictionError(str(jurisdiction))


def _united_states(disposals: Sequence[Disposal]) -> PolicyResult:
    short_term = _sum_gains(d for d in disposals if not is_long_term(d))
    long_term = _sum_gains(d for d in disposals if is_long_term(d))
    return PolicyResult(
        taxable_gains=short_term + long_term,
        estimated_tax=None,
        short_term_gains=short_term,
        long_term_gains=long_term,
        notes=[
            "Long-term gains (held more than 365 days) are taxed at lower rates than short-term gains.",
            "Short-term gains are taxed as ordinary income; no tax is estimated because it depends on your bracket.",
        ],
    )


def _india(disposals: Sequence[Disposal]) -> PolicyResult:
    taxable = _sum_gains(disposals)
    return PolicyResult(
        taxable_gains=taxable,
        estimated_tax=max(taxable, Decimal(0)) * INDIA_FLAT_RATE,
        notes=[
            "Virtual digital assets are taxed at a flat 30% with no holding-period distinction.",
            "The 1% TDS on large transfers is not modeled.",
            "Losses are netted against gains here; the actual rules do not allow this set-off.",
        ],
    )


def _united_kingdom(disposals: Sequence[Disposal]) -> PolicyResult:
    return PolicyResult(
        taxable_gains=_sum_gains(disposals),
        estimated_tax=None,
        notes=[
            "NON-COMPLIANT APPROXIMATION: HMRC requires same-day, 30-day and Section 104 pooling "
            "(average cost); this figure uses FIFO instead.",
            "The annual exempt amount and your income tax band are not applied.",
        ],
    )


def _canada(disposals: Sequence[Disposal]) -> PolicyResult:
    return PolicyResult(
        taxable_gains=_sum_gains(disposals) * CANADA_INCLUSION_RATE,
        estimated_tax=None,
        notes=[
            "Only 50% of the net capital gain is included in taxable income.",
            "Tax is not estimated because it depends on your marginal rate.",
        ],
    )


def _australia(disposals: Sequence[Disposal]) -> PolicyResult:
    taxable = Decimal(0)
    for disposal in disposals:
        if disposal.gain > 0 and is_long_term(disposal):
            taxable += disposal.gain * AUSTRALIA_CGT_DISCOUNT
        else:
            taxable += disposal.gain
    return PolicyResult(
        taxable_gains=taxable,
        estimated_tax=None,
        notes=[
            "Gains on assets held more than 12 months receive the 50% CGT discount.",
            "The discount is applied per disposal before losses are netted; tax depends on your marginal rate.",
        ],
    )


def _germany(disposals: Sequence[Disposal]) -> PolicyResult:
    return PolicyResult(
        taxable_gains=_sum_gains(d for d in disposals if not is_long_term(d)),
        estimated_tax=None,
        notes=[
            "Private sales are tax-free after a holding period of more than one year.",
            "The annual exemption threshold for private sales is not applied.",
        ],
    )


def _united_arab_emirates(disposals: Sequence[Disposal]) -> PolicyResult:
    return PolicyResult(
        taxable_gains=Decimal(0),
        estimated_tax=Decimal(0),
        notes=["There is no capital-gains tax on crypto assets for individuals."],
    )
