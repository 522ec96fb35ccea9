from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, Optional

from . import capital_allowance, engine, pit, smart_deductions, summary, vat, wht
from .brackets import calculate_bracket_tax
from .config import DEFAULT_RULES, TaxRules, get_tax_rules
from .types import BusinessTaxInput, CapitalAsset, ExpenseRecord, StatutoryDeductions


class NigeriaTaxCalculator2026:
    """
    Nigeria tax calculator (Tax Act 2025, effective 2026).

    Applies to:
    - Individuals and sole proprietors / partnerships (PIT)
    - Incorporated companies (CIT)
    - VAT and Withholding Tax returns

    Every method is a pure computation over its arguments and the rules the
    calculator was built with.
    """

    def __init__(self, vat_enabled: bool = False, rules: TaxRules = DEFAULT_RULES):
        self.vat_enabled = vat_enabled
        self.rules = rules

    @classmethod
    def for_year(cls, year: int, vat_enabled: bool = False):
        return cls(vat_enabled=vat_enabled, rules=get_tax_rules(year))

    # =========================
    # PERSONAL INCOME TAX
    # =========================
    def calculate_personal_income_tax(self, taxable_income: Decimal) -> Decimal:
        """
        PIT on an already-taxable amount, in Naira.

        Amounts at or below ₦800,000 pay nothing.
        """
        if taxable_income <= 0:
            return Decimal("0")

        return calculate_bracket_tax(
            Decimal(taxable_income),
            self.rules.pit_brackets,
            self.rules.pit_exempt_threshold,
        ).total_tax

    def compute_personal_tax(
        self,
        gross_income: Decimal,
        deductions: Optional[StatutoryDeductions] = None,
    ):
        return pit.compute_personal_tax(gross_income, deductions, self.rules)

    # =========================
    # BUSINESS TAX (PIT / CIT)
    # =========================
    def compute_business_tax(self, tax_input: BusinessTaxInput):
        return engine.compute_business_tax(tax_input, self.rules)

    def compute_capital_allowances(
        self,
        assets: Iterable[CapitalAsset],
        assessable_profit: Decimal,
        year: int,
    ):
        return capital_allowance.compute_capital_allowances(
            assets, assessable_profit, year, self.rules
        )

    # =========================
    # VAT
    # =========================
    def calculate_vat(self, revenue: Decimal) -> Decimal:
        if not self.vat_enabled or revenue <= 0:
            return Decimal("0")

        return vat.calculate_vat(revenue, rules=self.rules).vat_amount

    def compute_vat(self, vat_input: vat.VATComputationInput):
        return vat.compute_vat(vat_input, self.rules)

    # =========================
    # WHT
    # =========================
    def calculate_wht(self, gross_amount: Decimal, payment_type: str, recipient_type: str):
        return wht.calculate_wht(gross_amount, payment_type, recipient_type, self.rules)

    def compute_wht(self, wht_input: wht.WHTComputationInput):
        return wht.compute_wht(wht_input, self.rules)

    # =========================
    # ADVISORY
    # =========================
    def analyze_smart_deductions(
        self,
        gross_income: Decimal,
        expenses: Iterable[ExpenseRecord],
        year: int,
        current_deductions: Optional[StatutoryDeductions] = None,
    ):
        return smart_deductions.analyze_smart_deductions(
            gross_income, expenses, year, current_deductions, self.rules
        )

    def summarize(self, result) -> Dict:
        return summary.flatten_tax_result(result)

    # =========================
    # SUMMARY
    # =========================
    def calculate_tax_summary(
        self,
        total_revenue: Decimal,
        total_expenses: Decimal,
    ) -> Dict:
        """
        Quick PIT estimate for a sole proprietor from revenue and expense
        totals. Business profit is treated as personal income.
        """
        revenue = Decimal(total_revenue)
        expenses = Decimal(total_expenses)

        net_profit = max(Decimal("0.00"), revenue - expenses)

        pit_payable = self.calculate_personal_income_tax(net_profit)
        vat_payable = self.calculate_vat(revenue)

        effective_tax_rate = (
            pit_payable / net_profit * 100
            if net_profit > 0 else Decimal("0.00")
        )

        return {
            "total_revenue": revenue,
            "total_expenses": expenses,
            "net_profit": net_profit,
            "taxable_income": net_profit,
            "estimated_income_tax": pit_payable.quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            ),
            "effective_tax_rate": float(
                effective_tax_rate.quantize(Decimal("0.01"))
            ),
            "vat_payable": vat_payable,
            "tax_year": self.rules.effective_year,
            "calculation_method": (
                "Nigeria Tax Act 2025 – PIT for Sole Proprietors "
                f"(₦{self.rules.pit_exempt_threshold:,.0f} exemption applied)"
            ),
            "disclaimer": self.rules.disclaimer,
        }
