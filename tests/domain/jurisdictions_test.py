from __future__ import annotations

from decimal import Decimal

import pytest

from domain.errors import UnknownJurisdictionError
from domain.jurisdictions import Jurisdiction, apply_policy
from domain.matching import Disposal
from tests.helpers.transactions import day


def make_disposal(gain: int | str, holding_period_days: int, *, cost_basis: int | str = 1000) -> Disposal:
    cost = Decimal(cost_basis)
    proceeds = cost + Decimal(gain)
    return Disposal(
        asset="BTC",
        sell_date=day(1),
        sell_index=0,
        quantity=Decimal(1),
        proceeds=proceeds,
        cost_basis=cost,
        gain=proceeds - cost,
        holding_period_days=holding_period_days,
    )


MIXED = [
    make_disposal(1000, 400),
    make_disposal(1000, 100),
    make_disposal(-300, 50),
    make_disposal(-200, 800),
]


@pytest.mark.parametrize("jurisdiction", list(Jurisdiction))
def test_every_jurisdiction_emits_notes(jurisdiction: Jurisdiction) -> None:
    assert apply_policy(jurisdiction, MIXED).notes
    assert apply_policy(jurisdiction, []).notes


def test_us_splits_short_and_long_term() -> None:
    result = apply_policy(Jurisdiction.US, MIXED)

    assert result.short_term_gains == Decimal(700)
    assert result.long_term_gains == Decimal(800)
    assert result.taxable_gains == Decimal(1500)
    assert result.estimated_tax is None


def test_us_boundary_of_one_year_is_short_term() -> None:
    result = apply_policy(Jurisdiction.US, [make_disposal(100, 365), make_disposal(10, 366)])

    assert result.short_term_gains == Decimal(100)
    assert result.long_term_gains == Decimal(10)


def test_india_flat_rate_on_positive_gains() -> None:
    result = apply_policy(Jurisdiction.IN, MIXED)

    assert result.taxable_gains == Decimal(1500)
    assert result.estimated_tax == Decimal(450)
    assert result.short_term_gains is None


def test_india_net_loss_has_no_tax() -> None:
    result = apply_policy(Jurisdiction.IN, [make_disposal(-500, 10)])

    assert result.taxable_gains == Decimal(-500)
    assert result.estimated_tax == Decimal(0)


def test_uk_is_labelled_non_compliant() -> None:
    result = apply_policy(Jurisdiction.GB, MIXED)

    assert result.taxable_gains == Decimal(1500)
    assert result.estimated_tax is None
    assert any("NON-COMPLIANT" in note for note in result.notes)


def test_canada_inclusion_rate() -> None:
    result = apply_policy(Jurisdiction.CA, MIXED)

    assert result.taxable_gains == Decimal(750)
    assert result.estimated_tax is None


def test_australia_discounts_long_held_gains() -> None:
    assert apply_policy(Jurisdiction.AU, [make_disposal(1000, 400)]).taxable_gains == Decimal(500)
    assert apply_policy(Jurisdiction.AU, [make_disposal(1000, 100)]).taxable_gains == Decimal(1000)


def test_australia_does_not_discount_losses() -> None:
    result = apply_policy(Jurisdiction.AU, MIXED)

    # 500 (discounted) + 1000 - 300 - 200
    assert result.taxable_gains == Decimal(1000)


def test_germany_excludes_holdings_over_one_year() -> None:
    result = apply_policy(Jurisdiction.DE, MIXED)

    assert result.taxable_gains == Decimal(700)
    assert result.estimated_tax is None


def test_uae_is_always_zero() -> None:
    result = apply_policy(Jurisdiction.AE, MIXED)

    assert result.taxable_gains == Decimal(0)
    assert result.estimated_tax == Decimal(0)


@pytest.mark.parametrize("code", ["us", " de ", "AE", Jurisdiction.CA])
def test_parse_accepts_known_codes(code: str) -> None:
    assert Jurisdiction.parse(code) in set(Jurisdiction)


@pytest.mark.parametrize("code", ["FR", "", "USA", None])
def test_parse_rejects_unknown_codes(code: str) -> None:
    with pytest.raises(UnknownJurisdictionError):
        Jurisdiction.parse(code)
