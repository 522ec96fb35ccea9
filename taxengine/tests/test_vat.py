from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase

from taxengine.services.tax.vat import (
    VATComputationInput,
    VATTransaction,
    calculate_vat,
    compute_vat,
    get_period_label,
    get_vat_filing_deadline,
    is_vat_exempt,
)


def tx(tx_id, amount, category, transaction_type='output', exempt=False):
    amount = Decimal(amount)
    return VATTransaction(
        id=tx_id,
        description=f'{category} {tx_id}',
        amount=amount,
        vat_amount=Decimal('0') if exempt else calculate_vat(amount).vat_amount,
        transaction_type=transaction_type,
        category=category,
        is_exempt=exempt,
        date=date(2026, 3, 10),
    )


class CalculateVATTest(SimpleTestCase):

    def test_exclusive(self):
        amounts = calculate_vat(Decimal('1000'))
        self.assertEqual(amounts.net_amount, Decimal('1000'))
        self.assertEqual(amounts.vat_amount, Decimal('75.00'))
        self.assertEqual(amounts.gross_amount, Decimal('1075.00'))

    def test_inclusive(self):
        amounts = calculate_vat(Decimal('1075'), vat_inclusive=True)
        self.assertEqual(amounts.net_amount, Decimal('1000.00'))
        self.assertEqual(amounts.vat_amount, Decimal('75.00'))
        self.assertEqual(amounts.gross_amount, Decimal('1075'))

    def test_rounded_to_kobo(self):
        self.assertEqual(calculate_vat(Decimal('0.10')).vat_amount, Decimal('0.01'))
        self.assertEqual(calculate_vat(Decimal('333.33')).vat_amount, Decimal('25.00'))

    def test_exempt_categories(self):
        self.assertTrue(is_vat_exempt('basic_food_items'))
        self.assertTrue(is_vat_exempt('exports'))
        self.assertFalse(is_vat_exempt('professional_services'))


class VATDeadlineTest(SimpleTestCase):

    def test_twenty_first_of_next_month(self):
        self.assertEqual(get_vat_filing_deadline(2026, 3), date(2026, 4, 21))
        self.assertEqual(get_vat_filing_deadline(2026, 12), date(2027, 1, 21))

    def test_period_labels(self):
        self.assertEqual(get_period_label(2026, 3), 'March 2026')
        self.assertEqual(get_period_label(2026), 'Annual 2026')


class ComputeVATTest(SimpleTestCase):
    """VAT return for a period"""

    def setUp(self):
        self.outputs = (
            tx('s1', '600000', 'professional_services'),
            tx('s2', '400000', 'consulting'),
            tx('s3', '200000', 'basic_food_items', exempt=True),
        )
        self.inputs = (
            tx('p1', '400000', 'office_supplies', 'input'),
        )

    def test_monthly_return(self):
        result = compute_vat(VATComputationInput(
            year=2026, month=3,
            output_transactions=self.outputs,
            input_transactions=self.inputs,
        ))

        self.assertEqual(result.period, 'March 2026')
        self.assertEqual(result.total_output_sales, Decimal('1200000'))
        self.assertEqual(result.exempt_output_sales, Decimal('200000'))
        self.assertEqual(result.taxable_output_sales, Decimal('1000000'))
        self.assertEqual(result.output_vat, Decimal('75000'))
        self.assertEqual(result.input_vat, Decimal('30000'))
        self.assertEqual(result.net_vat_payable, Decimal('45000'))
        self.assertFalse(result.is_refund_due)
        self.assertEqual(result.vat_rate, Decimal('0.075'))
        self.assertEqual(result.filing_deadline, date(2026, 4, 21))
        self.assertEqual(result.payment_deadline, date(2026, 4, 21))

    def test_breakdown_excludes_exempt_transactions(self):
        result = compute_vat(VATComputationInput(
            year=2026, month=3, output_transactions=self.outputs,
        ))

        self.assertEqual(
            [(c.category, c.amount, c.vat) for c in result.output_breakdown],
            [
                ('professional_services', Decimal('600000'), Decimal('45000')),
                ('consulting', Decimal('400000'), Decimal('30000')),
            ]
        )
        self.assertEqual(result.input_breakdown, [])

    def test_refund_due(self):
        result = compute_vat(VATComputationInput(
            year=2026, month=12,
            output_transactions=(tx('s1', '100000', 'consulting'),),
            input_transactions=(tx('p1', '300000', 'equipment', 'input'),),
        ))

        self.assertTrue(result.is_refund_due)
        self.assertEqual(result.net_vat_payable, Decimal('15000'))
        self.assertEqual(result.filing_deadline, date(2027, 1, 21))

    def test_annual_return(self):
        result = compute_vat(VATComputationInput(year=2026))

        self.assertEqual(result.period, 'Annual 2026')
        self.assertEqual(result.net_vat_payable, 0)
        self.assertFalse(result.is_refund_due)
        self.assertEqual(result.filing_deadline, date(2027, 1, 31))
