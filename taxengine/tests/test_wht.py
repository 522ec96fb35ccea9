from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase

from taxengine.services.tax.wht import (
    WHTComputationInput,
    calculate_wht,
    compute_wht,
    create_wht_transaction,
    get_period_remittance_deadline,
    get_wht_credit_summary,
    get_wht_rate,
    get_wht_remittance_deadline,
    round2,
)


class WHTRateTest(SimpleTestCase):

    def test_rate_depends_on_recipient(self):
        self.assertEqual(get_wht_rate('professionalFees', 'corporate'), Decimal('0.10'))
        self.assertEqual(get_wht_rate('professionalFees', 'individual'), Decimal('0.05'))
        self.assertEqual(get_wht_rate('commissions', 'non_resident'), Decimal('0.10'))
        self.assertEqual(get_wht_rate('constructionContracts', 'corporate'), Decimal('0.05'))

    def test_unknown_payment_type_uses_default(self):
        self.assertEqual(get_wht_rate('lottery', 'individual'), Decimal('0.10'))

    def test_unknown_recipient_uses_corporate_rate(self):
        self.assertEqual(get_wht_rate('commissions', 'trust'), Decimal('0.05'))
        self.assertEqual(get_wht_rate('managementFees', 'trust'), Decimal('0.10'))


class CalculateWHTTest(SimpleTestCase):

    def test_professional_fees_to_individual(self):
        result = calculate_wht(Decimal('200000'), 'professionalFees', 'individual')

        self.assertEqual(result.wht_rate, Decimal('0.05'))
        self.assertEqual(result.wht_amount, Decimal('10000.00'))
        self.assertEqual(result.net_amount, Decimal('190000.00'))

    def test_rounded_half_up(self):
        result = calculate_wht(Decimal('333.33'), 'commissions', 'corporate')

        self.assertEqual(result.wht_amount, Decimal('16.67'))
        self.assertEqual(result.net_amount, Decimal('316.66'))
        self.assertEqual(round2(Decimal('0.125')), Decimal('0.13'))

    def test_net_plus_wht_is_gross(self):
        for amount in ('1', '99.99', '123456.78', '5000000'):
            result = calculate_wht(Decimal(amount), 'rent', 'individual')
            self.assertEqual(result.net_amount + result.wht_amount, Decimal(amount))


class WHTDeadlineTest(SimpleTestCase):

    def test_twenty_one_days_after_deduction(self):
        self.assertEqual(get_wht_remittance_deadline(date(2026, 3, 15)), date(2026, 4, 5))
        self.assertEqual(get_wht_remittance_deadline(date(2026, 12, 20)), date(2027, 1, 10))

    def test_period_deadline(self):
        self.assertEqual(get_period_remittance_deadline(2026, 3), date(2026, 4, 21))
        self.assertEqual(get_period_remittance_deadline(2026, 12), date(2027, 1, 21))
        self.assertEqual(get_period_remittance_deadline(2026), date(2027, 1, 21))


class ComputeWHTTest(SimpleTestCase):
    """WHT summary for a period"""

    def setUp(self):
        self.transactions = (
            create_wht_transaction(
                'professionalFees', 'individual', 'Ada Obi',
                Decimal('200000'), date(2026, 3, 2),
            ),
            create_wht_transaction(
                'rent', 'corporate', 'Lekki Properties Ltd',
                Decimal('1000000'), date(2026, 3, 5), recipient_tin='12345678-0001',
            ),
            create_wht_transaction(
                'professionalFees', 'corporate', 'Audit Partners Ltd',
                Decimal('500000'), date(2026, 3, 20),
            ),
        )

    def test_transactions_get_unique_ids(self):
        self.assertEqual(len({t.id for t in self.transactions}), 3)
        self.assertEqual(self.transactions[1].recipient_tin, '12345678-0001')

    def test_monthly_summary(self):
        result = compute_wht(WHTComputationInput(year=2026, month=3, transactions=self.transactions))

        self.assertEqual(result.period, 'March 2026')
        self.assertEqual(result.total_gross_payments, Decimal('1700000'))
        self.assertEqual(result.total_wht_deducted, Decimal('160000'))
        self.assertEqual(result.total_net_payments, Decimal('1540000'))
        self.assertEqual(result.remittance_deadline, date(2026, 4, 21))
        self.assertEqual(result.filing_deadline, date(2026, 4, 21))

        by_payment = {g.type: g for g in result.by_payment_type}
        self.assertEqual(by_payment['professionalFees'].label, 'Professional Fees')
        self.assertEqual(by_payment['professionalFees'].transaction_count, 2)
        self.assertEqual(by_payment['professionalFees'].wht_amount, Decimal('60000'))
        self.assertEqual(by_payment['rent'].gross_amount, Decimal('1000000'))

        by_recipient = {g.type: g for g in result.by_recipient_type}
        self.assertEqual(by_recipient['corporate'].label, 'Corporate Entities')
        self.assertEqual(by_recipient['corporate'].transaction_count, 2)
        self.assertEqual(by_recipient['individual'].wht_amount, Decimal('10000'))

    def test_group_totals_match_overall_totals(self):
        result = compute_wht(WHTComputationInput(year=2026, transactions=self.transactions))

        for groups in (result.by_payment_type, result.by_recipient_type):
            self.assertEqual(sum(g.wht_amount for g in groups), result.total_wht_deducted)
            self.assertEqual(sum(g.gross_amount for g in groups), result.total_gross_payments)
        self.assertEqual(result.period, 'Annual 2026')
        self.assertEqual(result.remittance_deadline, date(2027, 1, 21))

    def test_unknown_payment_type_label(self):
        transaction = create_wht_transaction(
            'sponsorship', 'corporate', 'Events Ltd', Decimal('100000'), date(2026, 5, 1),
        )
        result = compute_wht(WHTComputationInput(year=2026, month=5, transactions=(transaction,)))

        self.assertEqual(result.by_payment_type[0].label, 'sponsorship')
        self.assertEqual(result.total_wht_deducted, Decimal('10000.00'))

    def test_credit_summary(self):
        summary = get_wht_credit_summary(self.transactions)

        self.assertEqual(summary.total_credit, Decimal('160000'))
        self.assertEqual(
            summary.by_type,
            [('professionalFees', Decimal('60000')), ('rent', Decimal('100000'))]
        )
