"""
Tax configuration for Nigeria Tax Act 2025 (effective January 1, 2026).

Acts signed into law: June 26, 2025
Effective date: January 1, 2026

Covers:
- Individuals (PIT, State Internal Revenue Service)
- Sole proprietors / partnerships (business profit taxed as PIT)
- Incorporated companies (CIT, Nigeria Revenue Service)
- VAT and Withholding Tax rate tables

Key Legal Changes (2026):
- First ₦800,000 of annual taxable income is FULLY EXEMPT from PIT
- Progressive PIT regime with top marginal rate of 25%
- CRA is no longer used; rent relief is 20% of rent paid, capped at ₦500,000
- Small companies (turnover ≤ ₦25m) pay 0% CIT but must still file

Every table is immutable. A later tax year gets its own TaxRules instance
registered in TAX_RULES; existing years are never edited in place.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Tuple

INFINITY = Decimal("Infinity")


@dataclass(frozen=True)
class TaxBracket:
    min: Decimal
    max: Decimal
    rate: Decimal
    label: str


@dataclass(frozen=True)
class CITBand:
    min_turnover: Decimal
    max_turnover: Decimal
    rate: Decimal
    category: str
    label: str


@dataclass(frozen=True)
class CapitalAllowanceRate:
    category: str
    label: str
    initial_rate: Decimal
    annual_rate: Decimal


@dataclass(frozen=True)
class WHTRateConfig:
    type: str
    label: str
    corporate_rate: Decimal
    individual_rate: Decimal
    non_resident_rate: Decimal
    description: str


@dataclass(frozen=True)
class TaxRules:
    """Every rate, threshold and table needed for one tax year."""

    effective_year: int
    pit_exempt_threshold: Decimal
    pit_brackets: Tuple[TaxBracket, ...]
    rent_relief_rate: Decimal
    rent_relief_cap: Decimal
    employment_compensation_exempt_cap: Decimal
    cit_bands: Tuple[CITBand, ...]
    capital_allowance_restriction_rate: Decimal
    capital_allowance_rates: Tuple[CapitalAllowanceRate, ...]
    vat_rate: Decimal
    vat_exempt_categories: Tuple[str, ...]
    wht_rates: Tuple[WHTRateConfig, ...]
    wht_default_rate: Decimal
    minimum_wage_monthly: Decimal
    disclaimer: str


# =========================
# PIT EXEMPTION THRESHOLD
# =========================
PIT_EXEMPT_THRESHOLD = Decimal("800000")  # ₦800,000

# =========================
# RELIEFS & EXEMPTIONS
# =========================
RENT_RELIEF_RATE = Decimal("0.20")
RENT_RELIEF_CAP = Decimal("500000")
EMPLOYMENT_COMPENSATION_EXEMPT_CAP = Decimal("50000000")  # ₦50 million


# =========================
# PERSONAL INCOME TAX BRACKETS (2026)
# =========================
# Applied to TAXABLE income (after exemptions and reliefs). The first
# bracket is the zero-rate exemption band.
PIT_BRACKETS_2026 = (
    TaxBracket(Decimal("0"), Decimal("800000"), Decimal("0"), "First ₦800,000"),
    TaxBracket(Decimal("800000"), Decimal("3000000"), Decimal("0.15"), "₦800,001 – ₦3,000,000"),
    TaxBracket(Decimal("3000000"), Decimal("12000000"), Decimal("0.18"), "₦3,000,001 – ₦12,000,000"),
    TaxBracket(Decimal("12000000"), Decimal("25000000"), Decimal("0.21"), "₦12,000,001 – ₦25,000,000"),
    TaxBracket(Decimal("25000000"), Decimal("50000000"), Decimal("0.23"), "₦25,000,001 – ₦50,000,000"),
    TaxBracket(Decimal("50000000"), INFINITY, Decimal("0.25"), "Above ₦50,000,000"),
)


# =========================
# COMPANIES INCOME TAX BANDS (2026)
# =========================
SMALL_COMPANY_THRESHOLD = Decimal("25000000")
MEDIUM_COMPANY_THRESHOLD = Decimal("100000000")
UPPER_MEDIUM_THRESHOLD = Decimal("250000000")

CIT_BANDS_2026 = (
    CITBand(Decimal("0"), SMALL_COMPANY_THRESHOLD, Decimal("0"),
            "small", "Small Company (≤₦25M)"),
    CITBand(SMALL_COMPANY_THRESHOLD, MEDIUM_COMPANY_THRESHOLD, Decimal("0.20"),
            "medium", "Medium Company (₦25M – ₦100M)"),
    CITBand(MEDIUM_COMPANY_THRESHOLD, UPPER_MEDIUM_THRESHOLD, Decimal("0.30"),
            "upper-medium", "Upper-Medium (₦100M – ₦250M)"),
    CITBand(UPPER_MEDIUM_THRESHOLD, INFINITY, Decimal("0.30"),
            "large", "Large Company (>₦250M)"),
)


# =========================
# CAPITAL ALLOWANCES
# =========================
# Claims in a year are restricted to 2/3 of assessable profit
CAPITAL_ALLOWANCE_RESTRICTION_RATE = Decimal(2) / Decimal(3)

CAPITAL_ALLOWANCE_RATES_2026 = (
    CapitalAllowanceRate("plant_machinery", "Plant & Machinery",
                         Decimal("0.50"), Decimal("0.25")),
    CapitalAllowanceRate("motor_vehicles", "Motor Vehicles",
                         Decimal("0.50"), Decimal("0.25")),
    CapitalAllowanceRate("furniture_fittings", "Furniture & Fittings",
                         Decimal("0.25"), Decimal("0.20")),
    CapitalAllowanceRate("buildings", "Buildings",
                         Decimal("0.15"), Decimal("0.10")),
    CapitalAllowanceRate("computers_equipment", "Computers & IT Equipment",
                         Decimal("0.50"), Decimal("0.25")),
    CapitalAllowanceRate("agricultural_equipment", "Agricultural Equipment",
                         Decimal("0.95"), Decimal("0.00")),
    CapitalAllowanceRate("other", "Other Assets",
                         Decimal("0.25"), Decimal("0.20")),
)


# =========================
# VAT
# =========================
VAT_RATE = Decimal("0.075")  # 7.5%

VAT_EXEMPT_CATEGORIES = (
    "medical_pharmaceutical",
    "basic_food_items",
    "books_educational",
    "baby_products",
    "agricultural_inputs",
    "exports",
    "diplomatic_purchases",
    "humanitarian_goods",
)


# =========================
# WITHHOLDING TAX
# =========================
WHT_DEFAULT_RATE = Decimal("0.10")


def _wht(type_, label, corporate, individual, non_resident, description):
    return WHTRateConfig(
        type=type_,
        label=label,
        corporate_rate=Decimal(corporate),
        individual_rate=Decimal(individual),
        non_resident_rate=Decimal(non_resident),
        description=description,
    )


WHT_RATES_2026 = (
    _wht("dividends", "Dividends", "0.10", "0.10", "0.10",
         "Withholding on dividend payments"),
    _wht("interest", "Interest", "0.10", "0.10", "0.10",
         "Withholding on interest payments"),
    _wht("royalties", "Royalties", "0.10", "0.10", "0.10",
         "Withholding on royalty payments"),
    _wht("rent", "Rent", "0.10", "0.10", "0.10",
         "Withholding on rental payments"),
    _wht("commissions", "Commissions", "0.05", "0.05", "0.10",
         "Withholding on commission payments"),
    _wht("professionalFees", "Professional Fees", "0.10", "0.05", "0.10",
         "Withholding on professional service fees"),
    _wht("constructionContracts", "Construction Contracts", "0.05", "0.05", "0.05",
         "Withholding on construction contracts"),
    _wht("managementFees", "Management Fees", "0.10", "0.05", "0.10",
         "Withholding on management fees"),
    _wht("technicalFees", "Technical Fees", "0.10", "0.05", "0.10",
         "Withholding on technical service fees"),
    _wht("consultingFees", "Consulting Fees", "0.10", "0.05", "0.10",
         "Withholding on consulting fees"),
    _wht("directorsFees", "Directors' Fees", "0.10", "0.10", "0.10",
         "Withholding on directors' fees"),
    _wht("other", "Other Payments", "0.10", "0.05", "0.10",
         "Withholding on other qualifying payments"),
)


# =========================
# METADATA
# =========================
TAX_YEAR = 2026

MINIMUM_WAGE_MONTHLY = Decimal("70000")

TAX_DISCLAIMER = (
    "These are estimates only and do not constitute official tax filing with the "
    "Nigeria Revenue Service or any State Internal Revenue Service. Consult a "
    "licensed tax professional for accurate tax computation and filing."
)


RULES_2026 = TaxRules(
    effective_year=TAX_YEAR,
    pit_exempt_threshold=PIT_EXEMPT_THRESHOLD,
    pit_brackets=PIT_BRACKETS_2026,
    rent_relief_rate=RENT_RELIEF_RATE,
    rent_relief_cap=RENT_RELIEF_CAP,
    employment_compensation_exempt_cap=EMPLOYMENT_COMPENSATION_EXEMPT_CAP,
    cit_bands=CIT_BANDS_2026,
    capital_allowance_restriction_rate=CAPITAL_ALLOWANCE_RESTRICTION_RATE,
    capital_allowance_rates=CAPITAL_ALLOWANCE_RATES_2026,
    vat_rate=VAT_RATE,
    vat_exempt_categories=VAT_EXEMPT_CATEGORIES,
    wht_rates=WHT_RATES_2026,
    wht_default_rate=WHT_DEFAULT_RATE,
    minimum_wage_monthly=MINIMUM_WAGE_MONTHLY,
    disclaimer=TAX_DISCLAIMER,
)

# effective year -> rules
TAX_RULES: Dict[int, TaxRules] = {
    RULES_2026.effective_year: RULES_2026,
}

DEFAULT_RULES = RULES_2026


def get_tax_rules(year: int) -> TaxRules:
    """
    Return the rules in force for `year`.

    The latest rule set effective on or before the year wins. Years before
    the earliest registered rule set fall back to that earliest set.
    """
    effective = [y for y in sorted(TAX_RULES) if y <= year]
    if not effective:
        return TAX_RULES[min(TAX_RULES)]
    return TAX_RULES[effective[-1]]
