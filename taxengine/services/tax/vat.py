"""
VAT computation at 7.5%.

Output VAT (collected on sales) is netted against input VAT (paid on
purchases). Exempt transactions are totalled but never carry VAT.
Returns are due by the 21st of the month after the period.
"""

import calendar
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Tuple

from .config import DEFAULT_RULES, TaxRules

ZERO = Decimal("0")
KOBO = Decimal("0.01")


@dataclass(frozen=True)
class VATTransaction:
    id: str
    description: str
    amount: Decimal
    vat_amount: Decimal
    transaction_type: str
    category: str
    is_exempt: bool
    date: date
    exempt_reason: Optional[str] = None


@dataclass(frozen=True)
class VATComputationInput:
    year: int
    month: Optional[int] = None  # None means an annual computation
    output_transactions: Tuple[VATTransaction, ...] = ()
    input_transactions: Tuple[VATTransaction, ...] = ()


@dataclass(frozen=True)
class VATCategoryTotal:
    category: str
    amount: Decimal
    vat: Decimal


@dataclass(frozen=True)
class VATAmounts:
    net_amount: Decimal
    vat_amount: Decimal
    gross_amount: Decimal


@dataclass(frozen=True)
class VATComputationResult:
    year: int
    month: Optional[int]
    period: str
    total_output_sales: Decimal
    exempt_output_sales: Decimal
    taxable_output_sales: Decimal
    output_vat: Decimal
    total_input_purchases: Decimal
    exempt_input_purchases: Decimal
    taxable_input_purchases: Decimal
    input_vat: Decimal
    net_vat_payable: Decimal
    is_refund_due: bool
    vat_rate: Decimal
    filing_deadline: date
    payment_deadline: date
    output_breakdown: List[VATCategoryTotal] = field(default_factory=list)
    input_breakdown: List[VATCategoryTotal] = field(default_factory=list)


def calculate_vat(
    amount: Decimal,
    vat_inclusive: bool = False,
    rules: TaxRules = DEFAULT_RULES,
) -> VATAmounts:
    """
    VAT on an amount, rounded to the kobo.

    With `vat_inclusive` the VAT is extracted from `amount`; otherwise it is
    added on top.
    """
    amount = Decimal(amount)
    if vat_inclusive:
        net_amount = amount / (1 + rules.vat_rate)
        vat_amount = amount - net_amount
        return VATAmounts(
            net_amount=net_amount.quantize(KOBO, rounding=ROUND_HALF_UP),
            vat_amount=vat_amount.quantize(KOBO, rounding=ROUND_HALF_UP),
            gross_amount=amount,
        )

    vat_amount = amount * rules.vat_rate
    return VATAmounts(
        net_amount=amount,
        vat_amount=vat_amount.quantize(KOBO, rounding=ROUND_HALF_UP),
        gross_amount=(amount + vat_amount).quantize(KOBO, rounding=ROUND_HALF_UP),
    )


def is_vat_exempt(category: str, rules: TaxRules = DEFAULT_RULES) -> bool:
    return category in rules.vat_exempt_categories


def get_vat_filing_deadline(year: int, month: int) -> date:
    """21st day of the month following the period."""
    if month == 12:
        return date(year + 1, 1, 21)
    return date(year, month + 1, 21)


def get_period_label(year: int, month: Optional[int] = None) -> str:
    if month:
        return f"{calendar.month_name[month]} {year}"
    return f"Annual {year}"


def _summarise(transactions: Iterable[VATTransaction]):
    total = ZERO
    exempt = ZERO
    vat = ZERO
    by_category = OrderedDict()

    for tx in transactions:
        total += tx.amount
        if tx.is_exempt:
            exempt += tx.amount
            continue

        vat += tx.vat_amount
        amount, category_vat = by_category.get(tx.category, (ZERO, ZERO))
        by_category[tx.category] = (amount + tx.amount, category_vat + tx.vat_amount)

    breakdown = [
        VATCategoryTotal(category=category, amount=amount, vat=category_vat)
        for category, (amount, category_vat) in by_category.items()
    ]
    return total, exempt, vat, breakdown


def compute_vat(
    vat_input: VATComputationInput,
    rules: TaxRules = DEFAULT_RULES,
) -> VATComputationResult:
    year, month = vat_input.year, vat_input.month

    total_output, exempt_output, output_vat, output_breakdown = _summarise(
        vat_input.output_transactions
    )
    total_input, exempt_input, input_vat, input_breakdown = _summarise(
        vat_input.input_transactions
    )

    net_vat = output_vat - input_vat

    if month:
        deadline = get_vat_filing_deadline(year, month)
    else:
        deadline = date(year + 1, 1, 31)

    return VATComputationResult(
        year=year,
        month=month,
        period=get_period_label(year, month),
        total_output_sales=total_output,
        exempt_output_sales=exempt_output,
        taxable_output_sales=total_output - exempt_output,
        output_vat=output_vat,
        total_input_purchases=total_input,
        exempt_input_purchases=exempt_input,
        taxable_input_purchases=total_input - exempt_input,
        input_vat=input_vat,
        net_vat_payable=abs(net_vat),
        is_refund_due=net_vat < 0,
        vat_rate=rules.vat_rate,
        filing_deadline=deadline,
        payment_deadline=deadline,
        output_breakdown=output_breakdown,
        input_breakdown=input_breakdown,
    )
