"""
Flat summaries of tax results.

Used to hand a computation to consumers that only need headline figures,
such as the tax advisor chat which receives the result as plain context.
"""

from decimal import Decimal
from typing import Dict

from .formatting import format_naira
from .types import CITResult, PITBusinessResult, PITPersonalResult, TaxationType


def flatten_tax_result(result) -> Dict:
    summary = {
        "taxation_type": result.taxation_type,
        "entity_type": result.entity_type,
        "tax_authority": result.tax_authority,
        "is_exempt": result.is_exempt,
        "exemption_reason": result.exemption_reason,
        "effective_rate": result.effective_rate,
    }

    if result.taxation_type == TaxationType.CIT:
        summary.update({
            "gross_income": result.gross_revenue,
            "taxable_amount": result.taxable_profit,
            "tax_payable": result.cit_payable,
            "turnover_category": result.turnover_category,
            "cit_rate": result.cit_rate,
            "capital_allowances": result.capital_allowances,
            "capital_allowance_carry_forward": result.capital_allowance_carry_forward,
            "filing_required": result.filing_required,
        })
        return summary

    if isinstance(result, PITBusinessResult):
        summary.update({
            "gross_income": result.gross_business_income,
            "taxable_amount": result.taxable_income,
            "tax_payable": result.total_tax,
            "allowable_expenses": result.allowable_expenses,
            "capital_allowances": result.capital_allowances,
            "personal_reliefs": result.personal_reliefs,
        })
    else:
        summary.update({
            "gross_income": result.gross_income,
            "taxable_amount": result.taxable_income,
            "tax_payable": result.net_tax_payable,
            "exempt_income": result.exempt_income,
            "total_deductions": result.total_deductions,
        })

    summary["tax_by_bracket"] = [
        {"bracket": b.bracket, "rate": b.rate, "tax": b.tax}
        for b in result.tax_by_bracket
    ]
    return summary


def format_financial_context(result, year: int) -> str:
    """Markdown block describing a computation for a text-generation prompt."""
    flat = flatten_tax_result(result)
    lines = [
        f"## Tax Computation for {year}",
        f"- **Taxation Type**: {flat['taxation_type']} ({flat['tax_authority']})",
        f"- **Gross Income**: {format_naira(flat['gross_income'])}",
        f"- **Taxable Amount**: {format_naira(flat['taxable_amount'])}",
        f"- **Tax Payable**: {format_naira(flat['tax_payable'])}",
        f"- **Effective Rate**: {Decimal(flat['effective_rate']):.1f}%",
    ]

    if flat["is_exempt"]:
        lines.append(f"- **Status**: TAX EXEMPT ({flat['exemption_reason']})")

    if isinstance(result, CITResult):
        lines.append(f"- **Turnover Category**: {flat['turnover_category']} ({flat['cit_rate']:.0f}%)")
    elif isinstance(result, (PITBusinessResult, PITPersonalResult)):
        taxed = [b for b in flat["tax_by_bracket"] if b["tax"] > 0]
        if taxed:
            lines.append("- **Tax by Bracket**:")
            for b in taxed:
                lines.append(f"  - {b['bracket']}: {format_naira(b['tax'])} ({b['rate']:.0f}%)")

    return "\n".join(lines)
