from decimal import Decimal
from typing import Optional, Sequence

from .config import DEFAULT_RULES, TaxBracket
from .types import BracketTax, BracketTaxResult

HUNDRED = Decimal("100")


def calculate_bracket_tax(
    taxable_amount: Decimal,
    brackets: Sequence[TaxBracket] = DEFAULT_RULES.pit_brackets,
    exempt_threshold: Optional[Decimal] = DEFAULT_RULES.pit_exempt_threshold,
) -> BracketTaxResult:
    """
    Apply a progressive rate table to a taxable amount.

    Args:
        taxable_amount: Non-negative amount in Naira
        brackets: Brackets in ascending order; the top one may have an
            infinite upper bound
        exempt_threshold: Amounts at or below this pay no tax at all

    Returns:
        BracketTaxResult with the per-bracket breakdown (rate in percent)
        and the total. Nothing is rounded.
    """
    taxable_amount = Decimal(taxable_amount)

    if exempt_threshold is not None and taxable_amount <= exempt_threshold:
        # Keep the full breakdown shape so exempt results display the same
        return BracketTaxResult(
            total_tax=Decimal("0"),
            tax_by_bracket=[
                BracketTax(
                    bracket=b.label,
                    income=Decimal("0"),
                    rate=b.rate * HUNDRED,
                    tax=Decimal("0"),
                )
                for b in brackets
            ],
        )

    tax_by_bracket = []
    total_tax = Decimal("0")
    remaining = taxable_amount

    for bracket in brackets:
        if bracket.max.is_infinite():
            bracket_size = remaining
        else:
            bracket_size = bracket.max - bracket.min

        income_in_bracket = min(max(Decimal("0"), remaining), bracket_size)
        tax_in_bracket = income_in_bracket * bracket.rate

        tax_by_bracket.append(BracketTax(
            bracket=bracket.label,
            income=income_in_bracket,
            rate=bracket.rate * HUNDRED,
            tax=tax_in_bracket,
        ))

        total_tax += tax_in_bracket
        remaining -= income_in_bracket

        if remaining <= 0:
            break

    return BracketTaxResult(total_tax=total_tax, tax_by_bracket=tax_by_bracket)
