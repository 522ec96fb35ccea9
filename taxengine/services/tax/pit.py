"""
Personal Income Tax for individuals (Nigeria Tax Act 2025, effective 2026).

Order of reductions:
    gross income
    - exempt income (gifts, pension benefits, employment compensation ≤ ₦50m)
    = taxable gross income
    - statutory deductions (pension, NHIS, NHF, housing loan interest,
      life insurance, rent relief)
    = taxable income -> progressive brackets
"""

from decimal import Decimal
from typing import Optional, Tuple

from .brackets import calculate_bracket_tax
from .config import DEFAULT_RULES, TaxRules
from .formatting import format_naira
from .reliefs import calculate_exempt_income, calculate_statutory_deductions
from .types import PITPersonalResult, StatutoryDeductions

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def check_exemption(
    taxable_income: Decimal,
    rules: TaxRules = DEFAULT_RULES,
) -> Tuple[bool, Optional[str]]:
    """Taxable income at or below ₦800,000 is fully exempt."""
    if taxable_income <= rules.pit_exempt_threshold:
        return True, (
            f"Annual taxable income ({format_naira(taxable_income)}) is at or below "
            f"the {format_naira(rules.pit_exempt_threshold)} threshold"
        )
    return False, None


def compute_personal_tax(
    gross_income: Decimal,
    deductions: Optional[StatutoryDeductions] = None,
    rules: TaxRules = DEFAULT_RULES,
) -> PITPersonalResult:
    gross_income = Decimal(gross_income)
    deductions = deductions or StatutoryDeductions()

    # Step 1: Exempt income
    exempt_income = calculate_exempt_income(deductions, rules)
    taxable_gross_income = max(ZERO, gross_income - exempt_income)

    # Step 2: Statutory deductions
    breakdown = calculate_statutory_deductions(deductions, rules)
    total_deductions = breakdown.total

    # Step 3: Taxable income
    taxable_income = max(ZERO, taxable_gross_income - total_deductions)

    # Step 4: Exemption
    is_exempt, exemption_reason = check_exemption(taxable_income, rules)

    # Step 5: Tax
    bracket_tax = calculate_bracket_tax(
        taxable_income, rules.pit_brackets, rules.pit_exempt_threshold
    )

    # Step 6: Effective rate
    effective_rate = (
        bracket_tax.total_tax / taxable_gross_income * HUNDRED
        if taxable_gross_income > 0 else ZERO
    )

    return PITPersonalResult(
        gross_income=gross_income,
        exempt_income=exempt_income,
        taxable_gross_income=taxable_gross_income,
        statutory_deductions=total_deductions,
        rent_relief=breakdown.rent_relief,
        total_deductions=total_deductions,
        deduction_breakdown=breakdown,
        taxable_income=taxable_income,
        is_exempt=is_exempt,
        exemption_reason=exemption_reason,
        tax_by_bracket=bracket_tax.tax_by_bracket,
        total_tax=bracket_tax.total_tax,
        effective_rate=effective_rate,
        net_tax_payable=ZERO if is_exempt else bracket_tax.total_tax,
    )
