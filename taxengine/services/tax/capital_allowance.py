"""
Capital allowance computation.

Written-down values are never stored. Each call rebuilds an asset's history
from its cost and acquisition year: the initial allowance is claimed in the
acquisition year, then one annual allowance per later year until the cost
is fully relieved. Rebuilding costs O(years held) per asset.
"""

import logging
from decimal import Decimal
from typing import Iterable

from .config import DEFAULT_RULES, CapitalAllowanceRate, TaxRules
from .types import (
    AllowanceRestriction,
    CapitalAllowanceResult,
    CapitalAllowanceSummary,
    CapitalAsset,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _category_value(category) -> str:
    return getattr(category, "value", category)


def get_allowance_rates(category, rules: TaxRules = DEFAULT_RULES) -> CapitalAllowanceRate:
    """Rates for an asset category; unknown categories use the "other" rates."""
    category = _category_value(category)
    fallback = None
    for rate in rules.capital_allowance_rates:
        if rate.category == category:
            return rate
        if rate.category == "other":
            fallback = rate
    return fallback


def calculate_asset_allowance(
    asset: CapitalAsset,
    current_year: int,
    rules: TaxRules = DEFAULT_RULES,
) -> CapitalAllowanceResult:
    rates = get_allowance_rates(asset.category, rules)
    cost = Decimal(asset.cost)
    years_held = current_year - asset.year_acquired

    initial_allowance = ZERO
    annual_allowance = ZERO
    written_down_value = cost

    if years_held == 0:
        # Year of acquisition: initial allowance only
        initial_allowance = cost * rates.initial_rate
        written_down_value = cost - initial_allowance

    elif years_held > 0:
        initial_claimed = cost * rates.initial_rate
        yearly_allowance = (cost - initial_claimed) * rates.annual_rate
        written_down_value = cost - initial_claimed

        # Replay the annual allowances already claimed in the years between
        # acquisition and the current year
        for _ in range(1, years_held):
            if written_down_value - yearly_allowance > 0:
                written_down_value -= yearly_allowance
            else:
                written_down_value = ZERO
                break

        if written_down_value > 0:
            annual_allowance = min(yearly_allowance, written_down_value)

        written_down_value = max(ZERO, written_down_value - annual_allowance)

    return CapitalAllowanceResult(
        asset_id=asset.id,
        asset_description=asset.description,
        asset_category=_category_value(asset.category),
        cost=cost,
        initial_allowance=initial_allowance,
        annual_allowance=annual_allowance,
        total_allowance=initial_allowance + annual_allowance,
        written_down_value=written_down_value,
    )


def calculate_total_capital_allowances(
    assets: Iterable[CapitalAsset],
    current_year: int,
    rules: TaxRules = DEFAULT_RULES,
):
    """
    Returns:
        (breakdown, total_allowance) for every asset in `current_year`
    """
    breakdown = [
        calculate_asset_allowance(asset, current_year, rules) for asset in assets
    ]
    total_allowance = sum((r.total_allowance for r in breakdown), ZERO)
    return breakdown, total_allowance


def apply_capital_allowance_restriction(
    total_allowance: Decimal,
    assessable_profit: Decimal,
    rules: TaxRules = DEFAULT_RULES,
) -> AllowanceRestriction:
    """
    Restrict claimable allowances to 2/3 of assessable profit.

    Nothing can be claimed against a loss: the full allowance carries forward.
    """
    total_allowance = Decimal(total_allowance)
    assessable_profit = Decimal(assessable_profit)

    if assessable_profit <= 0:
        return AllowanceRestriction(
            allowed_amount=ZERO,
            restricted_amount=ZERO,
            carry_forward=total_allowance,
        )

    max_allowable = assessable_profit * rules.capital_allowance_restriction_rate
    allowed_amount = min(total_allowance, max_allowable)
    carry_forward = max(ZERO, total_allowance - allowed_amount)

    if carry_forward > 0:
        logger.debug(
            f"Capital allowance restricted to {allowed_amount} "
            f"({carry_forward} carried forward)"
        )

    return AllowanceRestriction(
        allowed_amount=allowed_amount,
        restricted_amount=total_allowance - allowed_amount,
        carry_forward=carry_forward,
    )


def compute_capital_allowances(
    assets: Iterable[CapitalAsset],
    assessable_profit: Decimal,
    current_year: int,
    rules: TaxRules = DEFAULT_RULES,
) -> CapitalAllowanceSummary:
    breakdown, total_allowance = calculate_total_capital_allowances(
        assets, current_year, rules
    )
    restriction = apply_capital_allowance_restriction(
        total_allowance, assessable_profit, rules
    )
    assessable_profit = Decimal(assessable_profit)

    return CapitalAllowanceSummary(
        asset_breakdown=breakdown,
        total_initial=sum((a.initial_allowance for a in breakdown), ZERO),
        total_annual=sum((a.annual_allowance for a in breakdown), ZERO),
        total_allowance=total_allowance,
        max_allowable_amount=(
            assessable_profit * rules.capital_allowance_restriction_rate
            if assessable_profit > 0 else ZERO
        ),
        allowable_amount=restriction.allowed_amount,
        carried_forward=restriction.carry_forward,
        is_restricted=restriction.carry_forward > 0,
    )
