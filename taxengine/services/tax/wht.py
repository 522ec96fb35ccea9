"""
Withholding Tax (WHT).

WHT is deducted at source from a payment and remitted on the recipient's
behalf. The rate depends on the payment type and whether the recipient is
a company, an individual or a non-resident.
"""

import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Tuple

from .config import DEFAULT_RULES, TaxRules, WHTRateConfig
from .types import RecipientType
from .vat import get_period_label

ZERO = Decimal("0")
KOBO = Decimal("0.01")

REMITTANCE_PERIOD_DAYS = 21

RECIPIENT_LABELS = {
    RecipientType.CORPORATE.value: "Corporate Entities",
    RecipientType.INDIVIDUAL.value: "Individuals",
    RecipientType.NON_RESIDENT.value: "Non-Residents",
}


@dataclass(frozen=True)
class WHTCalculation:
    gross_amount: Decimal
    wht_rate: Decimal
    wht_amount: Decimal
    net_amount: Decimal


@dataclass(frozen=True)
class WHTTransaction:
    id: str
    payment_type: str
    recipient_type: str
    recipient_name: str
    gross_amount: Decimal
    wht_rate: Decimal
    wht_amount: Decimal
    net_amount: Decimal
    payment_date: date
    description: str = ""
    recipient_tin: Optional[str] = None


@dataclass(frozen=True)
class WHTComputationInput:
    year: int
    month: Optional[int] = None
    transactions: Tuple[WHTTransaction, ...] = ()


@dataclass(frozen=True)
class WHTGroupTotal:
    type: str
    label: str
    gross_amount: Decimal
    wht_amount: Decimal
    transaction_count: int


@dataclass(frozen=True)
class WHTComputationResult:
    year: int
    month: Optional[int]
    period: str
    total_gross_payments: Decimal
    total_wht_deducted: Decimal
    total_net_payments: Decimal
    remittance_deadline: date
    filing_deadline: date
    by_payment_type: List[WHTGroupTotal] = field(default_factory=list)
    by_recipient_type: List[WHTGroupTotal] = field(default_factory=list)
    transactions: List[WHTTransaction] = field(default_factory=list)


@dataclass(frozen=True)
class WHTCreditSummary:
    total_credit: Decimal
    by_type: List[Tuple[str, Decimal]]


def round2(value: Decimal) -> Decimal:
    return Decimal(value).quantize(KOBO, rounding=ROUND_HALF_UP)


def get_wht_rate_config(payment_type: str, rules: TaxRules = DEFAULT_RULES) -> Optional[WHTRateConfig]:
    for config in rules.wht_rates:
        if config.type == payment_type:
            return config
    return None


def get_wht_rate(
    payment_type: str,
    recipient_type: str,
    rules: TaxRules = DEFAULT_RULES,
) -> Decimal:
    """
    Look up the rate for a payment/recipient pair.

    Unknown payment types pay the flat default rate; unknown recipient types
    pay the corporate rate.
    """
    config = get_wht_rate_config(payment_type, rules)
    if config is None:
        return rules.wht_default_rate

    if recipient_type == RecipientType.INDIVIDUAL:
        return config.individual_rate
    if recipient_type == RecipientType.NON_RESIDENT:
        return config.non_resident_rate
    return config.corporate_rate


def calculate_wht(
    gross_amount: Decimal,
    payment_type: str,
    recipient_type: str,
    rules: TaxRules = DEFAULT_RULES,
) -> WHTCalculation:
    gross_amount = Decimal(gross_amount)
    wht_rate = get_wht_rate(payment_type, recipient_type, rules)
    wht_amount = round2(gross_amount * wht_rate)
    return WHTCalculation(
        gross_amount=gross_amount,
        wht_rate=wht_rate,
        wht_amount=wht_amount,
        net_amount=round2(gross_amount - wht_amount),
    )


def create_wht_transaction(
    payment_type: str,
    recipient_type: str,
    recipient_name: str,
    gross_amount: Decimal,
    payment_date: date,
    description: str = "",
    recipient_tin: Optional[str] = None,
    rules: TaxRules = DEFAULT_RULES,
) -> WHTTransaction:
    calculation = calculate_wht(gross_amount, payment_type, recipient_type, rules)
    return WHTTransaction(
        id=str(uuid.uuid4()),
        payment_type=getattr(payment_type, "value", payment_type),
        recipient_type=getattr(recipient_type, "value", recipient_type),
        recipient_name=recipient_name,
        gross_amount=calculation.gross_amount,
        wht_rate=calculation.wht_rate,
        wht_amount=calculation.wht_amount,
        net_amount=calculation.net_amount,
        payment_date=payment_date,
        description=description,
        recipient_tin=recipient_tin,
    )


def get_wht_remittance_deadline(deduction_date: date) -> date:
    """WHT must be remitted within 21 days of deduction."""
    return deduction_date + timedelta(days=REMITTANCE_PERIOD_DAYS)


def get_period_remittance_deadline(year: int, month: Optional[int] = None) -> date:
    """21st of the following month; 21 January of the next year for a full year."""
    if not month or month == 12:
        return date(year + 1, 1, 21)
    return date(year, month + 1, 21)


def _group(transactions, key):
    groups = OrderedDict()
    for tx in transactions:
        gross, wht, count = groups.get(key(tx), (ZERO, ZERO, 0))
        groups[key(tx)] = (gross + tx.gross_amount, wht + tx.wht_amount, count + 1)
    return groups


def compute_wht(
    wht_input: WHTComputationInput,
    rules: TaxRules = DEFAULT_RULES,
) -> WHTComputationResult:
    year, month = wht_input.year, wht_input.month
    transactions = list(wht_input.transactions)

    total_gross = sum((tx.gross_amount for tx in transactions), ZERO)
    total_wht = sum((tx.wht_amount for tx in transactions), ZERO)

    by_payment_type = []
    for payment_type, (gross, wht, count) in _group(transactions, lambda tx: tx.payment_type).items():
        config = get_wht_rate_config(payment_type, rules)
        by_payment_type.append(WHTGroupTotal(
            type=payment_type,
            label=config.label if config else payment_type,
            gross_amount=gross,
            wht_amount=wht,
            transaction_count=count,
        ))

    by_recipient_type = [
        WHTGroupTotal(
            type=recipient_type,
            label=RECIPIENT_LABELS.get(recipient_type, recipient_type),
            gross_amount=gross,
            wht_amount=wht,
            transaction_count=count,
        )
        for recipient_type, (gross, wht, count)
        in _group(transactions, lambda tx: tx.recipient_type).items()
    ]

    deadline = get_period_remittance_deadline(year, month)

    return WHTComputationResult(
        year=year,
        month=month,
        period=get_period_label(year, month),
        total_gross_payments=total_gross,
        total_wht_deducted=total_wht,
        total_net_payments=total_gross - total_wht,
        remittance_deadline=deadline,
        filing_deadline=deadline,
        by_payment_type=by_payment_type,
        by_recipient_type=by_recipient_type,
        transactions=transactions,
    )


def get_wht_credit_summary(transactions: Iterable[WHTTransaction]) -> WHTCreditSummary:
    """WHT suffered, available as a credit against the recipient's income tax."""
    total_credit = ZERO
    by_type = OrderedDict()
    for tx in transactions:
        total_credit += tx.wht_amount
        by_type[tx.payment_type] = by_type.get(tx.payment_type, ZERO) + tx.wht_amount

    return WHTCreditSummary(total_credit=total_credit, by_type=list(by_type.items()))
