from decimal import Decimal

from django.test import SimpleTestCase

from taxengine.services.tax.cit import compute_cit
from taxengine.services.tax.engine import (
    compute_business_tax,
    get_entity_type_label,
    get_tax_authority,
)
from taxengine.services.tax.exceptions import InvalidTurnoverError, TaxComputationError
from taxengine.services.tax.turnover import determine_cit_band
from taxengine.services.tax.types import (
    BusinessExpenses,
    BusinessIncome,
    BusinessTaxInput,
    CapitalAsset,
    CITAdjustments,
    PersonalReliefs,
)


class TurnoverBandTest(SimpleTestCase):

    def test_band_boundaries(self):
        cases = [
            ('0', 'small'),
            ('1', 'small'),
            ('25000000', 'small'),
            ('25000000.01', 'medium'),
            ('100000000', 'medium'),
            ('100000001', 'upper-medium'),
            ('250000000', 'upper-medium'),
            ('250000001', 'large'),
            ('9000000000', 'large'),
        ]
        for turnover, category in cases:
            self.assertEqual(determine_cit_band(Decimal(turnover)).category, category, turnover)

    def test_negative_turnover_rejected(self):
        with self.assertRaises(InvalidTurnoverError) as ctx:
            determine_cit_band(Decimal('-1'))

        self.assertEqual(ctx.exception.turnover, Decimal('-1'))
        self.assertIsInstance(ctx.exception, TaxComputationError)
        self.assertIsInstance(ctx.exception, ValueError)


class BusinessRoutingTest(SimpleTestCase):
    """Limited companies pay CIT; everyone else pays PIT"""

    def make_input(self, entity_type):
        return BusinessTaxInput(
            entity_type=entity_type,
            year=2026,
            business_income=BusinessIncome(sales_revenue=Decimal('5000000')),
            annual_turnover=Decimal('5000000'),
        )

    def test_routing(self):
        expected = {
            'sole_proprietorship': ('PIT', 'sole_proprietorship', 'SIRS'),
            'partnership': ('PIT', 'partnership', 'SIRS'),
            'individual': ('PIT', 'sole_proprietorship', 'SIRS'),
            'limited_company': ('CIT', 'limited_company', 'NRS'),
        }
        for entity_type, (taxation_type, result_entity, authority) in expected.items():
            result = compute_business_tax(self.make_input(entity_type))
            self.assertEqual(result.taxation_type, taxation_type)
            self.assertEqual(result.entity_type, result_entity)
            self.assertEqual(result.tax_authority, authority)
            self.assertEqual(get_tax_authority(entity_type), authority)

    def test_entity_labels(self):
        self.assertEqual(get_entity_type_label('limited_company'), 'Limited Company (Ltd)')
        self.assertEqual(get_entity_type_label('partnership'), 'Partnership')
        self.assertEqual(get_entity_type_label('cooperative'), 'Unknown')


class PITBusinessTest(SimpleTestCase):
    """Business profit of sole proprietors taxed as personal income"""

    def test_sole_proprietor(self):
        tax_input = BusinessTaxInput(
            entity_type='sole_proprietorship',
            year=2026,
            business_income=BusinessIncome(sales_revenue=Decimal('10000000')),
            business_expenses=BusinessExpenses(
                cost_of_goods_sold=Decimal('3000000'),
                rent_premises=Decimal('1000000'),
                personal_expenses=Decimal('500000'),
            ),
            capital_assets=(
                CapitalAsset('gen', 'Generator', 'plant_machinery', Decimal('2000000'), 2026),
            ),
            personal_reliefs=PersonalReliefs(
                pension=Decimal('200000'),
                annual_rent_paid=Decimal('1000000'),
            ),
        )
        result = compute_business_tax(tax_input)

        self.assertEqual(result.gross_business_income, Decimal('10000000'))
        self.assertEqual(result.allowable_expenses, Decimal('4000000'))
        self.assertEqual(result.disallowed_expenses, Decimal('500000'))
        self.assertEqual(result.capital_allowances, Decimal('1000000'))
        self.assertEqual(result.capital_allowance_carry_forward, 0)
        self.assertEqual(result.adjusted_profit, Decimal('5000000'))
        self.assertEqual(result.personal_reliefs, Decimal('400000'))
        self.assertEqual(result.relief_breakdown.rent_relief, Decimal('200000'))
        self.assertEqual(result.taxable_income, Decimal('4600000'))
        self.assertFalse(result.is_exempt)
        self.assertEqual(result.total_tax, Decimal('618000'))
        self.assertEqual(result.effective_rate, Decimal('6.18'))

    def test_loss_is_exempt_and_carries_allowances_forward(self):
        tax_input = BusinessTaxInput(
            entity_type='partnership',
            year=2026,
            business_income=BusinessIncome(sales_revenue=Decimal('1000000')),
            business_expenses=BusinessExpenses(cost_of_goods_sold=Decimal('2000000')),
            capital_assets=(
                CapitalAsset('van', 'Delivery van', 'motor_vehicles', Decimal('1000000'), 2026),
            ),
        )
        result = compute_business_tax(tax_input)

        self.assertEqual(result.capital_allowances, 0)
        self.assertEqual(result.capital_allowance_carry_forward, Decimal('500000'))
        self.assertEqual(result.adjusted_profit, 0)
        self.assertEqual(result.taxable_income, 0)
        self.assertTrue(result.is_exempt)
        self.assertEqual(result.total_tax, 0)

    def test_small_profit_is_exempt(self):
        tax_input = BusinessTaxInput(
            entity_type='sole_proprietorship',
            year=2026,
            business_income=BusinessIncome(
                service_fees=Decimal('600000'),
                digital_income=Decimal('300000'),
            ),
            personal_reliefs=PersonalReliefs(nhis=Decimal('100000')),
        )
        result = compute_business_tax(tax_input)

        self.assertEqual(result.gross_business_income, Decimal('900000'))
        self.assertEqual(result.taxable_income, Decimal('800000'))
        self.assertTrue(result.is_exempt)
        self.assertEqual(result.total_tax, 0)
        self.assertEqual(result.effective_rate, 0)


class CITTest(SimpleTestCase):
    """Companies Income Tax"""

    def test_small_company_pays_nothing_but_files(self):
        tax_input = BusinessTaxInput(
            entity_type='limited_company',
            year=2026,
            annual_turnover=Decimal('20000000'),
            business_income=BusinessIncome(sales_revenue=Decimal('20000000')),
            business_expenses=BusinessExpenses(
                cost_of_goods_sold=Decimal('8000000'),
                staff_salaries=Decimal('2000000'),
            ),
        )
        result = compute_cit(tax_input)

        self.assertEqual(result.turnover_category, 'small')
        self.assertEqual(result.cit_rate, 0)
        self.assertEqual(result.accounting_profit, Decimal('10000000'))
        self.assertEqual(result.taxable_profit, Decimal('10000000'))
        self.assertTrue(result.is_exempt)
        self.assertIn('Small Company', result.exemption_reason)
        self.assertIn('₦20,000,000', result.exemption_reason)
        self.assertEqual(result.cit_payable, 0)
        self.assertTrue(result.filing_required)

    def test_medium_company(self):
        tax_input = BusinessTaxInput(
            entity_type='limited_company',
            year=2026,
            annual_turnover=Decimal('50000000'),
            business_income=BusinessIncome(sales_revenue=Decimal('50000000')),
            business_expenses=BusinessExpenses(
                cost_of_goods_sold=Decimal('20000000'),
                staff_salaries=Decimal('10000000'),
                other_allowable=Decimal('5000000'),
            ),
            cit_adjustments=CITAdjustments(
                depreciation=Decimal('1000000'),
                provisions=Decimal('500000'),
                exempt_income=Decimal('1500000'),
            ),
        )
        result = compute_business_tax(tax_input)

        self.assertEqual(result.turnover_category, 'medium')
        self.assertEqual(result.cit_rate, 20)
        self.assertEqual(result.cost_of_sales, Decimal('20000000'))
        self.assertEqual(result.operating_expenses, Decimal('15000000'))
        self.assertEqual(result.accounting_profit, Decimal('15000000'))
        self.assertEqual(result.add_back_depreciation, Decimal('1000000'))
        self.assertEqual(result.deduct_exempt_income, Decimal('1500000'))
        self.assertEqual(result.assessable_profit, Decimal('15000000'))
        self.assertEqual(result.taxable_profit, Decimal('15000000'))
        self.assertFalse(result.is_exempt)
        self.assertIsNone(result.exemption_reason)
        self.assertEqual(result.cit_payable, Decimal('3000000'))
        self.assertEqual(result.effective_rate, 6)

    def test_capital_allowances_restricted_against_assessable_profit(self):
        tax_input = BusinessTaxInput(
            entity_type='limited_company',
            year=2026,
            annual_turnover=Decimal('150000000'),
            business_income=BusinessIncome(sales_revenue=Decimal('150000000')),
            business_expenses=BusinessExpenses(cost_of_goods_sold=Decimal('147000000')),
            capital_assets=(
                CapitalAsset('press', 'Printing press', 'plant_machinery', Decimal('10000000'), 2026),
            ),
        )
        result = compute_business_tax(tax_input)

        self.assertEqual(result.turnover_category, 'upper-medium')
        self.assertEqual(result.assessable_profit, Decimal('3000000'))
        self.assertAlmostEqual(result.capital_allowances, Decimal('2000000'), places=2)
        self.assertAlmostEqual(result.capital_allowance_carry_forward, Decimal('3000000'), places=2)
        self.assertAlmostEqual(result.taxable_profit, Decimal('1000000'), places=2)
        self.assertAlmostEqual(result.cit_payable, Decimal('300000'), places=2)

    def test_accounting_profit_is_revenue_less_allowable_expenses(self):
        """Splitting cost of sales from operating costs never changes profit"""
        expense_sets = [
            BusinessExpenses(),
            BusinessExpenses(cost_of_goods_sold=Decimal('4000000')),
            BusinessExpenses(utilities=Decimal('120000'), transport=Decimal('80000.50')),
            BusinessExpenses(
                cost_of_goods_sold=Decimal('9000000'),
                rent_premises=Decimal('2400000'),
                internet_software=Decimal('360000'),
                marketing_advertising=Decimal('750000'),
                fines_penalties=Decimal('50000'),
            ),
        ]
        for expenses in expense_sets:
            result = compute_cit(BusinessTaxInput(
                entity_type='limited_company',
                year=2026,
                annual_turnover=Decimal('30000000'),
                business_income=BusinessIncome(
                    sales_revenue=Decimal('25000000'),
                    exchange_gains=Decimal('5000000'),
                ),
                business_expenses=expenses,
            ))
            allowable = result.cost_of_sales + result.operating_expenses
            self.assertEqual(
                result.accounting_profit,
                result.gross_revenue - expenses.cost_of_goods_sold - (allowable - expenses.cost_of_goods_sold)
            )
            self.assertEqual(result.accounting_profit, Decimal('30000000') - allowable)

    def test_missing_turnover_uses_smallest_band(self):
        result = compute_cit(BusinessTaxInput(
            entity_type='limited_company',
            year=2026,
            business_income=BusinessIncome(sales_revenue=Decimal('90000000')),
        ))
        self.assertEqual(result.annual_turnover, 0)
        self.assertEqual(result.turnover_category, 'small')
        self.assertEqual(result.cit_payable, 0)

    def test_negative_turnover_raises(self):
        tax_input = BusinessTaxInput(
            entity_type='limited_company',
            year=2026,
            annual_turnover=Decimal('-500'),
        )
        with self.assertRaises(InvalidTurnoverError):
            compute_business_tax(tax_input)
