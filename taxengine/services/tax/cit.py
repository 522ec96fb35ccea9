"""
Companies Income Tax for incorporated companies (Nigeria Revenue Service).

Accounting profit is adjusted for tax (add-backs, exempt income), capital
allowances are restricted against the resulting assessable profit, and the
turnover band's flat rate applies to what remains. Small companies pay 0%
but must still file.
"""

from decimal import Decimal
from typing import Tuple

from .capital_allowance import (
    apply_capital_allowance_restriction,
    calculate_total_capital_allowances,
)
from .config import DEFAULT_RULES, TaxRules
from .formatting import format_naira
from .pit_business import calculate_allowable_expenses, calculate_gross_business_income
from .turnover import determine_cit_band
from .types import BusinessTaxInput, CITAdjustments, CITResult

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def calculate_accounting_profit(
    gross_revenue: Decimal,
    cost_of_sales: Decimal,
    operating_expenses: Decimal,
) -> Decimal:
    return gross_revenue - cost_of_sales - operating_expenses


def apply_tax_adjustments(
    accounting_profit: Decimal,
    adjustments: CITAdjustments,
) -> Tuple[Decimal, Decimal, Decimal]:
    """
    Returns:
        (assessable_profit, add_backs, deductions)
    """
    add_backs = (
        adjustments.depreciation
        + adjustments.non_deductible_expenses
        + adjustments.provisions
        + adjustments.unapproved_donations
    )
    deductions = adjustments.exempt_income
    assessable_profit = accounting_profit + add_backs - deductions
    return assessable_profit, add_backs, deductions


def compute_cit(
    tax_input: BusinessTaxInput,
    rules: TaxRules = DEFAULT_RULES,
) -> CITResult:
    # Step 1: Turnover classification
    annual_turnover = (
        Decimal(tax_input.annual_turnover)
        if tax_input.annual_turnover is not None else ZERO
    )
    band = determine_cit_band(annual_turnover, rules)

    # Step 2: Revenue
    gross_revenue = calculate_gross_business_income(tax_input.business_income)

    # Step 3: Costs. Cost of sales is reported apart from other operating costs
    allowable_expenses, _ = calculate_allowable_expenses(tax_input.business_expenses)
    cost_of_sales = tax_input.business_expenses.cost_of_goods_sold
    operating_expenses = allowable_expenses - cost_of_sales

    # Step 4: Accounting profit
    accounting_profit = calculate_accounting_profit(
        gross_revenue, cost_of_sales, operating_expenses
    )

    # Step 5: Tax adjustments
    adjustments = tax_input.cit_adjustments or CITAdjustments()
    assessable_profit, _, _ = apply_tax_adjustments(accounting_profit, adjustments)

    # Step 6: Capital allowances restricted against assessable profit
    breakdown, raw_capital_allowances = calculate_total_capital_allowances(
        tax_input.capital_assets, tax_input.year, rules
    )
    restriction = apply_capital_allowance_restriction(
        raw_capital_allowances, assessable_profit, rules
    )

    # Step 7: Taxable profit
    taxable_profit = max(ZERO, assessable_profit - restriction.allowed_amount)

    # Step 8: Exemption (0% band)
    is_exempt = band.rate == 0
    exemption_reason = (
        f"Company qualifies as {band.label} with turnover of "
        f"{format_naira(annual_turnover)} (0% CIT rate)"
        if is_exempt else None
    )

    # Step 9: CIT
    cit_payable = ZERO if is_exempt else taxable_profit * band.rate

    # Step 10: Effective rate
    effective_rate = (
        cit_payable / gross_revenue * HUNDRED if gross_revenue > 0 else ZERO
    )

    return CITResult(
        annual_turnover=annual_turnover,
        turnover_category=band.category,
        cit_rate=band.rate * HUNDRED,
        gross_revenue=gross_revenue,
        cost_of_sales=cost_of_sales,
        operating_expenses=operating_expenses,
        accounting_profit=accounting_profit,
        add_back_depreciation=adjustments.depreciation,
        add_back_non_deductible=adjustments.non_deductible_expenses,
        add_back_provisions=adjustments.provisions,
        add_back_unapproved_donations=adjustments.unapproved_donations,
        deduct_capital_allowances=restriction.allowed_amount,
        deduct_exempt_income=adjustments.exempt_income,
        capital_allowances=restriction.allowed_amount,
        capital_allowance_restriction=restriction.restricted_amount,
        capital_allowance_carry_forward=restriction.carry_forward,
        capital_allowance_breakdown=breakdown,
        assessable_profit=assessable_profit,
        taxable_profit=taxable_profit,
        is_exempt=is_exempt,
        exemption_reason=exemption_reason,
        cit_payable=cit_payable,
        effective_rate=effective_rate,
        # Filing is required even at 0%
        filing_required=True,
    )
