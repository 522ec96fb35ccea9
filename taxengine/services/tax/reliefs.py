"""
Statutory deductions, personal reliefs and exempt income.

None of these look at income: they only reshape the deduction record so the
pipelines can subtract it. Exempt income comes off gross income first,
deductions come off what is left.
"""

from decimal import Decimal

from .config import DEFAULT_RULES, TaxRules
from .types import DeductionBreakdown, PersonalReliefs, StatutoryDeductions


def calculate_rent_relief(
    annual_rent_paid: Decimal,
    rules: TaxRules = DEFAULT_RULES,
) -> Decimal:
    """Rent relief: 20% of annual rent paid, capped at ₦500,000."""
    relief = Decimal(annual_rent_paid) * rules.rent_relief_rate
    return min(relief, rules.rent_relief_cap)


def calculate_statutory_deductions(
    deductions: StatutoryDeductions,
    rules: TaxRules = DEFAULT_RULES,
) -> DeductionBreakdown:
    return DeductionBreakdown(
        pension=deductions.pension_contribution,
        nhis=deductions.nhis_contribution,
        nhf=deductions.nhf_contribution,
        housing_loan_interest=deductions.housing_loan_interest,
        life_insurance=deductions.life_insurance_premium,
        rent_relief=calculate_rent_relief(deductions.annual_rent_paid, rules),
    )


def calculate_personal_reliefs(
    reliefs: PersonalReliefs,
    rules: TaxRules = DEFAULT_RULES,
) -> DeductionBreakdown:
    """Reliefs a sole proprietor or partner claims against adjusted profit."""
    return DeductionBreakdown(
        pension=reliefs.pension,
        nhis=reliefs.nhis,
        nhf=reliefs.nhf,
        housing_loan_interest=reliefs.housing_loan_interest,
        life_insurance=reliefs.life_insurance,
        rent_relief=calculate_rent_relief(reliefs.annual_rent_paid, rules),
    )


def calculate_exempt_employment_compensation(
    employment_compensation: Decimal,
    rules: TaxRules = DEFAULT_RULES,
) -> Decimal:
    return min(Decimal(employment_compensation), rules.employment_compensation_exempt_cap)


def calculate_exempt_income(
    deductions: StatutoryDeductions,
    rules: TaxRules = DEFAULT_RULES,
) -> Decimal:
    """
    Gifts and approved pension benefits are fully exempt. Compensation for
    loss of employment is exempt up to ₦50 million.
    """
    return (
        deductions.gifts_received
        + deductions.pension_benefits_received
        + calculate_exempt_employment_compensation(
            deductions.employment_compensation, rules
        )
    )
