"""
Personal Income Tax for sole proprietors and partnerships.

Business profit is taxed as the owner's personal income under the State
Internal Revenue Service, using the same brackets as individuals.
"""

from decimal import Decimal
from typing import Tuple

from .brackets import calculate_bracket_tax
from .capital_allowance import (
    apply_capital_allowance_restriction,
    calculate_total_capital_allowances,
)
from .config import DEFAULT_RULES, TaxRules
from .pit import check_exemption
from .reliefs import calculate_personal_reliefs
from .types import (
    BusinessExpenses,
    BusinessIncome,
    BusinessTaxInput,
    EntityType,
    PersonalReliefs,
    PITBusinessResult,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def calculate_gross_business_income(income: BusinessIncome) -> Decimal:
    return (
        income.sales_revenue
        + income.service_fees
        + income.commissions
        + income.digital_income
        + income.exchange_gains
        + income.other_receipts
    )


def calculate_allowable_expenses(expenses: BusinessExpenses) -> Tuple[Decimal, Decimal]:
    """
    Split expenses into (allowable, disallowed).

    Allowable expenses are wholly, exclusively, necessarily and reasonably
    incurred for the business. Disallowed ones are only reported.
    """
    allowable = (
        expenses.cost_of_goods_sold
        + expenses.rent_premises
        + expenses.utilities
        + expenses.transport
        + expenses.staff_salaries
        + expenses.repairs_maintenance
        + expenses.professional_fees
        + expenses.internet_software
        + expenses.marketing_advertising
        + expenses.other_allowable
    )
    disallowed = (
        expenses.personal_expenses
        + expenses.capital_expenditure
        + expenses.fines_penalties
        + expenses.non_business_donations
    )
    return allowable, disallowed


def compute_pit_business(
    tax_input: BusinessTaxInput,
    rules: TaxRules = DEFAULT_RULES,
) -> PITBusinessResult:
    entity_type = (
        EntityType.PARTNERSHIP.value
        if tax_input.entity_type == EntityType.PARTNERSHIP
        else EntityType.SOLE_PROPRIETORSHIP.value
    )

    # Step 1: Gross business income
    gross_business_income = calculate_gross_business_income(tax_input.business_income)

    # Step 2: Allowable expenses
    allowable_expenses, disallowed_expenses = calculate_allowable_expenses(
        tax_input.business_expenses
    )

    # Step 3: Capital allowances, restricted against profit before allowances
    breakdown, raw_capital_allowances = calculate_total_capital_allowances(
        tax_input.capital_assets, tax_input.year, rules
    )
    preliminary_adjusted_profit = gross_business_income - allowable_expenses
    restriction = apply_capital_allowance_restriction(
        raw_capital_allowances, preliminary_adjusted_profit, rules
    )

    # Step 4: Adjusted profit
    adjusted_profit = max(ZERO, preliminary_adjusted_profit - restriction.allowed_amount)

    # Step 5: Personal reliefs
    relief_breakdown = calculate_personal_reliefs(
        tax_input.personal_reliefs or PersonalReliefs(), rules
    )
    personal_reliefs = relief_breakdown.total

    # Step 6: Taxable income
    taxable_income = max(ZERO, adjusted_profit - personal_reliefs)

    # Step 7: Exemption
    is_exempt, exemption_reason = check_exemption(taxable_income, rules)

    # Step 8: Tax
    bracket_tax = calculate_bracket_tax(
        taxable_income, rules.pit_brackets, rules.pit_exempt_threshold
    )
    total_tax = ZERO if is_exempt else bracket_tax.total_tax

    # Step 9: Effective rate
    effective_rate = (
        total_tax / gross_business_income * HUNDRED
        if gross_business_income > 0 else ZERO
    )

    return PITBusinessResult(
        entity_type=entity_type,
        gross_business_income=gross_business_income,
        income_breakdown=tax_input.business_income,
        allowable_expenses=allowable_expenses,
        disallowed_expenses=disallowed_expenses,
        expense_breakdown=tax_input.business_expenses,
        capital_allowances=restriction.allowed_amount,
        capital_allowance_restriction=restriction.restricted_amount,
        capital_allowance_carry_forward=restriction.carry_forward,
        capital_allowance_breakdown=breakdown,
        adjusted_profit=adjusted_profit,
        personal_reliefs=personal_reliefs,
        relief_breakdown=relief_breakdown,
        taxable_income=taxable_income,
        is_exempt=is_exempt,
        exemption_reason=exemption_reason,
        tax_by_bracket=bracket_tax.tax_by_bracket,
        total_tax=total_tax,
        effective_rate=effective_rate,
    )
