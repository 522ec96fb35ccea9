"""
Smart deduction detection.

Scans expense descriptions, vendors and categories for payments that look
like deductible items (rent, life insurance, NHIS, pension, NHF) and
suggests what the taxpayer may be able to claim. Results are advisory and
never change a tax computation.
"""

from collections import OrderedDict
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Iterable, List, Optional

from .config import DEFAULT_RULES, TaxRules
from .formatting import format_naira
from .reliefs import calculate_exempt_employment_compensation, calculate_rent_relief
from .types import ExpenseRecord, StatutoryDeductions

ZERO = Decimal("0")

RENT_KEYWORDS = ("rent", "lease", "housing", "apartment", "accommodation", "tenancy")
INSURANCE_KEYWORDS = ("insurance", "life insurance", "premium", "policy", "annuity")
HEALTHCARE_KEYWORDS = ("health", "medical", "hospital", "nhis", "hmo", "health insurance")
PENSION_KEYWORDS = ("pension", "retirement", "pfa", "rsa", "pencom")
NHF_KEYWORDS = ("nhf", "housing fund", "national housing")

RENT_CATEGORIES = ("rent", "housing")

HIGH = "high"
MEDIUM = "medium"
LOW = "low"


@dataclass(frozen=True)
class DetectedDeduction:
    type: str
    category: str
    amount: Decimal
    description: str
    confidence: str
    suggestion: str
    action_required: bool = True
    document_required: bool = True


@dataclass(frozen=True)
class AutoExemption:
    type: str
    amount: Decimal
    description: str
    requirement: str
    is_applied: bool = True


@dataclass(frozen=True)
class SmartDeductionResult:
    total_potential_savings: Decimal
    detected_deductions: List[DetectedDeduction] = field(default_factory=list)
    auto_exemptions: List[AutoExemption] = field(default_factory=list)
    recommended_actions: List[str] = field(default_factory=list)
    tax_optimization_tips: List[str] = field(default_factory=list)


def _matches(text: str, keywords) -> bool:
    return any(k in text for k in keywords)


def _searchable(expense: ExpenseRecord) -> str:
    return f"{expense.description} {expense.vendor or ''}".lower()


def _is_rent(expense: ExpenseRecord) -> bool:
    return expense.category in RENT_CATEGORIES or _matches(_searchable(expense), RENT_KEYWORDS)


def _detect(expense: ExpenseRecord) -> List[DetectedDeduction]:
    combined = _searchable(expense)
    found = []

    if _is_rent(expense):
        found.append(DetectedDeduction(
            type="rent_relief",
            category="Rent Relief",
            amount=expense.amount,
            description=expense.description,
            confidence=HIGH if expense.category in RENT_CATEGORIES else MEDIUM,
            suggestion=(
                "Upload rent receipt or lease agreement to claim 20% rent relief "
                "(max ₦500,000)"
            ),
        ))

    if expense.category == "insurance" or _matches(combined, INSURANCE_KEYWORDS):
        is_life = "life" in combined or "annuity" in combined
        found.append(DetectedDeduction(
            type="life_insurance" if is_life else "general_insurance",
            category="Life Insurance Premium" if is_life else "Insurance",
            amount=expense.amount,
            description=expense.description,
            confidence=HIGH if is_life else MEDIUM,
            suggestion=(
                "Life insurance premiums are deductible. Upload premium receipt to claim."
                if is_life else
                "If this is a life insurance or annuity premium, it may be deductible."
            ),
        ))

    if expense.category == "healthcare" or _matches(combined, HEALTHCARE_KEYWORDS):
        # Only NHIS / HMO contributions qualify
        if "nhis" in combined or "hmo" in combined:
            found.append(DetectedDeduction(
                type="nhis_contribution",
                category="NHIS Contribution",
                amount=expense.amount,
                description=expense.description,
                confidence=HIGH,
                suggestion="NHIS contributions are fully deductible. Upload contribution statement.",
            ))

    if _matches(combined, PENSION_KEYWORDS):
        found.append(DetectedDeduction(
            type="pension_contribution",
            category="Pension Contribution",
            amount=expense.amount,
            description=expense.description,
            confidence=HIGH,
            suggestion="Pension contributions to registered PFAs are fully deductible.",
        ))

    if _matches(combined, NHF_KEYWORDS):
        found.append(DetectedDeduction(
            type="nhf_contribution",
            category="NHF Contribution",
            amount=expense.amount,
            description=expense.description,
            confidence=HIGH,
            suggestion="National Housing Fund contributions are tax-deductible.",
        ))

    return found


def detect_deductions_from_expenses(
    expenses: Iterable[ExpenseRecord],
    year: int,
) -> List[DetectedDeduction]:
    """Detections for `year`, one per deduction type with amounts summed."""
    detected = []
    for expense in expenses:
        if expense.date.year == year:
            detected.extend(_detect(expense))

    aggregated = OrderedDict()
    counts = {}
    for deduction in detected:
        counts[deduction.type] = counts.get(deduction.type, 0) + 1
        existing = aggregated.get(deduction.type)
        if existing is None:
            aggregated[deduction.type] = deduction
        else:
            aggregated[deduction.type] = replace(existing, amount=existing.amount + deduction.amount)

    result = []
    for deduction_type, deduction in aggregated.items():
        if counts[deduction_type] > 1:
            deduction = replace(
                deduction,
                description=f"{deduction.description} and {counts[deduction_type] - 1} more",
            )
        result.append(deduction)
    return result


def calculate_auto_exemptions(
    gross_income: Decimal,
    employment_compensation: Decimal = ZERO,
    gifts_received: Decimal = ZERO,
    pension_benefits: Decimal = ZERO,
    rules: TaxRules = DEFAULT_RULES,
) -> List[AutoExemption]:
    exemptions = []

    if gross_income <= rules.pit_exempt_threshold:
        exemptions.append(AutoExemption(
            type="income_threshold",
            amount=gross_income,
            description=f"Full tax exemption for income ≤ {format_naira(rules.pit_exempt_threshold)}",
            requirement="No documentation required - automatically applied",
        ))

    minimum_wage_annual = rules.minimum_wage_monthly * 12
    if 0 < gross_income <= minimum_wage_annual:
        exemptions.append(AutoExemption(
            type="minimum_wage",
            amount=gross_income,
            description="Minimum wage earners are effectively exempt",
            requirement="Employment records showing minimum wage earnings",
        ))

    if gifts_received > 0:
        exemptions.append(AutoExemption(
            type="gifts",
            amount=gifts_received,
            description="Gifts received are exempt from tax",
            requirement="Documentation of gift source may be required",
        ))

    if pension_benefits > 0:
        exemptions.append(AutoExemption(
            type="pension_benefits",
            amount=pension_benefits,
            description="Approved pension and retirement benefits are exempt",
            requirement="Pension payout documentation from PFA",
        ))

    if employment_compensation > 0:
        exemptions.append(AutoExemption(
            type="employment_compensation",
            amount=calculate_exempt_employment_compensation(employment_compensation, rules),
            description=(
                "Loss of employment compensation (up to "
                f"{format_naira(rules.employment_compensation_exempt_cap)} exempt)"
            ),
            requirement="Termination letter and compensation agreement",
        ))

    return exemptions


def calculate_potential_rent_relief(
    expenses: Iterable[ExpenseRecord],
    year: int,
    rules: TaxRules = DEFAULT_RULES,
) -> Decimal:
    total_rent = sum(
        (e.amount for e in expenses if e.date.year == year and _is_rent(e)),
        ZERO,
    )
    return calculate_rent_relief(total_rent, rules)


def generate_optimization_tips(
    gross_income: Decimal,
    detected_deductions: List[DetectedDeduction],
    rules: TaxRules = DEFAULT_RULES,
) -> List[str]:
    tips = []
    detected_types = {d.type for d in detected_deductions}
    threshold = rules.pit_exempt_threshold

    if threshold < gross_income <= threshold * Decimal("1.5"):
        tips.append(
            f"Your income is close to the {format_naira(threshold)} tax-free threshold. "
            "Maximizing deductions could reduce your taxable income below this level."
        )

    rent = next((d for d in detected_deductions if d.type == "rent_relief"), None)
    if rent is not None and rent.action_required:
        tips.append(
            f"You may be eligible for up to {format_naira(calculate_rent_relief(rent.amount, rules))} "
            "in rent relief. Upload rent documentation to claim."
        )

    if "pension_contribution" not in detected_types:
        tips.append(
            "Consider contributing to a registered Pension Fund (PFA). "
            "Pension contributions are fully tax-deductible."
        )

    if "nhis_contribution" not in detected_types:
        tips.append(
            "Enrolling in the National Health Insurance Scheme (NHIS) provides "
            "tax-deductible contributions."
        )

    if "life_insurance" not in detected_types:
        tips.append(
            "Life insurance and annuity premiums are tax-deductible. "
            "Consider a policy for both protection and tax benefits."
        )

    if gross_income >= Decimal("3000000"):
        tips.append(
            "Contributing to the National Housing Fund (NHF) is mandatory for some "
            "employees and provides tax deductions."
        )

    return tips


def analyze_smart_deductions(
    gross_income: Decimal,
    expenses: Iterable[ExpenseRecord],
    year: int,
    current_deductions: Optional[StatutoryDeductions] = None,
    rules: TaxRules = DEFAULT_RULES,
) -> SmartDeductionResult:
    gross_income = Decimal(gross_income)
    expenses = list(expenses)
    current = current_deductions or StatutoryDeductions()

    detected = detect_deductions_from_expenses(expenses, year)
    auto_exemptions = calculate_auto_exemptions(
        gross_income,
        current.employment_compensation,
        current.gifts_received,
        current.pension_benefits_received,
        rules,
    )

    potential_rent_relief = calculate_potential_rent_relief(expenses, year, rules)
    claimed_rent_relief = calculate_rent_relief(current.annual_rent_paid, rules)
    unclaimed_rent_relief = max(ZERO, potential_rent_relief - claimed_rent_relief)

    total_potential_savings = ZERO
    for deduction in detected:
        if not deduction.action_required:
            continue
        if deduction.type == "rent_relief":
            total_potential_savings += unclaimed_rent_relief
        else:
            total_potential_savings += deduction.amount

    recommended_actions = []
    if any(d.document_required and d.action_required for d in detected):
        recommended_actions.append("Upload supporting documents for detected deductions")
    if unclaimed_rent_relief > 0:
        recommended_actions.append(f"Claim {format_naira(unclaimed_rent_relief)} in rent relief")
    if any(
        d.type == "pension_contribution" and d.amount > current.pension_contribution
        for d in detected
    ):
        recommended_actions.append("Update pension contribution records")

    return SmartDeductionResult(
        total_potential_savings=total_potential_savings,
        detected_deductions=detected,
        auto_exemptions=auto_exemptions,
        recommended_actions=recommended_actions,
        tax_optimization_tips=generate_optimization_tips(gross_income, detected, rules),
    )
