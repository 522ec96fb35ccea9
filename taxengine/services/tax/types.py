"""
Input records and result types for the tax engine.

Inputs are plain frozen dataclasses assembled by the caller. Results carry
the full derivation chain and are tagged by `taxation_type` ("PIT"/"CIT")
and `entity_type`, so callers can narrow a BusinessTaxResult without
inspecting its fields.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple, Union

ZERO = Decimal("0")


class EntityType(str, Enum):
    INDIVIDUAL = "individual"
    SOLE_PROPRIETORSHIP = "sole_proprietorship"
    PARTNERSHIP = "partnership"
    LIMITED_COMPANY = "limited_company"


class TaxationType(str, Enum):
    PIT = "PIT"  # Personal Income Tax
    CIT = "CIT"  # Companies Income Tax


class TaxAuthority(str, Enum):
    SIRS = "SIRS"  # State Internal Revenue Service
    NRS = "NRS"  # Nigeria Revenue Service


class AssetCategory(str, Enum):
    PLANT_MACHINERY = "plant_machinery"
    MOTOR_VEHICLES = "motor_vehicles"
    FURNITURE_FITTINGS = "furniture_fittings"
    BUILDINGS = "buildings"
    COMPUTERS_EQUIPMENT = "computers_equipment"
    AGRICULTURAL_EQUIPMENT = "agricultural_equipment"
    OTHER = "other"


class RecipientType(str, Enum):
    CORPORATE = "corporate"
    INDIVIDUAL = "individual"
    NON_RESIDENT = "non_resident"


class VATTransactionType(str, Enum):
    OUTPUT = "output"
    INPUT = "input"


# =========================
# RECORDS
# =========================
@dataclass(frozen=True)
class IncomeRecord:
    date: date
    amount: Decimal
    category: str = "other"
    description: str = ""


@dataclass(frozen=True)
class ExpenseRecord:
    date: date
    amount: Decimal
    category: str = "other"
    description: str = ""
    vendor: str = ""


@dataclass(frozen=True)
class StatutoryDeductions:
    pension_contribution: Decimal = ZERO
    nhis_contribution: Decimal = ZERO
    nhf_contribution: Decimal = ZERO
    housing_loan_interest: Decimal = ZERO
    life_insurance_premium: Decimal = ZERO
    annual_rent_paid: Decimal = ZERO
    employment_compensation: Decimal = ZERO
    gifts_received: Decimal = ZERO
    pension_benefits_received: Decimal = ZERO


@dataclass(frozen=True)
class CapitalAsset:
    id: str
    description: str
    category: str
    cost: Decimal
    year_acquired: int


@dataclass(frozen=True)
class BusinessIncome:
    sales_revenue: Decimal = ZERO
    service_fees: Decimal = ZERO
    commissions: Decimal = ZERO
    digital_income: Decimal = ZERO
    exchange_gains: Decimal = ZERO
    other_receipts: Decimal = ZERO


@dataclass(frozen=True)
class BusinessExpenses:
    # Allowable: wholly, exclusively, necessarily and reasonably incurred
    cost_of_goods_sold: Decimal = ZERO
    rent_premises: Decimal = ZERO
    utilities: Decimal = ZERO
    transport: Decimal = ZERO
    staff_salaries: Decimal = ZERO
    repairs_maintenance: Decimal = ZERO
    professional_fees: Decimal = ZERO
    internet_software: Decimal = ZERO
    marketing_advertising: Decimal = ZERO
    other_allowable: Decimal = ZERO
    # Disallowed: tracked but never deducted
    personal_expenses: Decimal = ZERO
    capital_expenditure: Decimal = ZERO
    fines_penalties: Decimal = ZERO
    non_business_donations: Decimal = ZERO


@dataclass(frozen=True)
class PersonalReliefs:
    pension: Decimal = ZERO
    nhis: Decimal = ZERO
    nhf: Decimal = ZERO
    life_insurance: Decimal = ZERO
    housing_loan_interest: Decimal = ZERO
    annual_rent_paid: Decimal = ZERO


@dataclass(frozen=True)
class CITAdjustments:
    depreciation: Decimal = ZERO
    non_deductible_expenses: Decimal = ZERO
    provisions: Decimal = ZERO
    unapproved_donations: Decimal = ZERO
    exempt_income: Decimal = ZERO


@dataclass(frozen=True)
class BusinessTaxInput:
    entity_type: str
    year: int
    business_income: BusinessIncome = field(default_factory=BusinessIncome)
    business_expenses: BusinessExpenses = field(default_factory=BusinessExpenses)
    capital_assets: Tuple[CapitalAsset, ...] = ()
    annual_turnover: Optional[Decimal] = None
    personal_reliefs: Optional[PersonalReliefs] = None
    cit_adjustments: Optional[CITAdjustments] = None


# =========================
# BUILDING BLOCK RESULTS
# =========================
@dataclass(frozen=True)
class BracketTax:
    bracket: str
    income: Decimal
    rate: Decimal  # percentage form, e.g. 15 for 15%
    tax: Decimal


@dataclass(frozen=True)
class BracketTaxResult:
    total_tax: Decimal
    tax_by_bracket: List[BracketTax]


@dataclass(frozen=True)
class DeductionBreakdown:
    pension: Decimal
    nhis: Decimal
    nhf: Decimal
    housing_loan_interest: Decimal
    life_insurance: Decimal
    rent_relief: Decimal

    @property
    def total(self) -> Decimal:
        return (
            self.pension
            + self.nhis
            + self.nhf
            + self.housing_loan_interest
            + self.life_insurance
            + self.rent_relief
        )


@dataclass(frozen=True)
class CapitalAllowanceResult:
    asset_id: str
    asset_description: str
    asset_category: str
    cost: Decimal
    initial_allowance: Decimal
    annual_allowance: Decimal
    total_allowance: Decimal
    written_down_value: Decimal


@dataclass(frozen=True)
class AllowanceRestriction:
    allowed_amount: Decimal
    restricted_amount: Decimal
    carry_forward: Decimal


@dataclass(frozen=True)
class CapitalAllowanceSummary:
    asset_breakdown: List[CapitalAllowanceResult]
    total_initial: Decimal
    total_annual: Decimal
    total_allowance: Decimal
    max_allowable_amount: Decimal
    allowable_amount: Decimal
    carried_forward: Decimal
    is_restricted: bool


# =========================
# TAX RESULTS
# =========================
@dataclass(frozen=True)
class PITPersonalResult:
    gross_income: Decimal
    exempt_income: Decimal
    taxable_gross_income: Decimal
    statutory_deductions: Decimal
    rent_relief: Decimal
    total_deductions: Decimal
    deduction_breakdown: DeductionBreakdown
    taxable_income: Decimal
    is_exempt: bool
    exemption_reason: Optional[str]
    tax_by_bracket: List[BracketTax]
    total_tax: Decimal
    effective_rate: Decimal
    net_tax_payable: Decimal
    taxation_type: str = TaxationType.PIT.value
    entity_type: str = EntityType.INDIVIDUAL.value
    tax_authority: str = TaxAuthority.SIRS.value


@dataclass(frozen=True)
class PITBusinessResult:
    entity_type: str
    gross_business_income: Decimal
    income_breakdown: BusinessIncome
    allowable_expenses: Decimal
    disallowed_expenses: Decimal
    expense_breakdown: BusinessExpenses
    capital_allowances: Decimal
    capital_allowance_restriction: Decimal
    capital_allowance_carry_forward: Decimal
    capital_allowance_breakdown: List[CapitalAllowanceResult]
    adjusted_profit: Decimal
    personal_reliefs: Decimal
    relief_breakdown: DeductionBreakdown
    taxable_income: Decimal
    is_exempt: bool
    exemption_reason: Optional[str]
    tax_by_bracket: List[BracketTax]
    total_tax: Decimal
    effective_rate: Decimal
    taxation_type: str = TaxationType.PIT.value
    tax_authority: str = TaxAuthority.SIRS.value


@dataclass(frozen=True)
class CITResult:
    annual_turnover: Decimal
    turnover_category: str
    cit_rate: Decimal  # percentage form
    gross_revenue: Decimal
    cost_of_sales: Decimal
    operating_expenses: Decimal
    accounting_profit: Decimal
    add_back_depreciation: Decimal
    add_back_non_deductible: Decimal
    add_back_provisions: Decimal
    add_back_unapproved_donations: Decimal
    deduct_capital_allowances: Decimal
    deduct_exempt_income: Decimal
    capital_allowances: Decimal
    capital_allowance_restriction: Decimal
    capital_allowance_carry_forward: Decimal
    capital_allowance_breakdown: List[CapitalAllowanceResult]
    assessable_profit: Decimal
    taxable_profit: Decimal
    is_exempt: bool
    exemption_reason: Optional[str]
    cit_payable: Decimal
    effective_rate: Decimal
    filing_required: bool = True
    taxation_type: str = TaxationType.CIT.value
    entity_type: str = EntityType.LIMITED_COMPANY.value
    tax_authority: str = TaxAuthority.NRS.value


BusinessTaxResult = Union[PITBusinessResult, CITResult]
TaxComputationResult = Union[PITPersonalResult, PITBusinessResult, CITResult]
