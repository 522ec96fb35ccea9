from decimal import Decimal

from django.test import SimpleTestCase

from taxengine.services.tax.capital_allowance import (
    apply_capital_allowance_restriction,
    calculate_asset_allowance,
    compute_capital_allowances,
    get_allowance_rates,
)
from taxengine.services.tax.types import CapitalAsset


def asset(cost, year_acquired, category='plant_machinery', asset_id='A1'):
    return CapitalAsset(
        id=asset_id,
        description='Test asset',
        category=category,
        cost=Decimal(cost),
        year_acquired=year_acquired,
    )


class AssetAllowanceTest(SimpleTestCase):
    """Per-asset allowance and written-down value"""

    def test_year_of_acquisition(self):
        result = calculate_asset_allowance(asset('1000000', 2023), 2023)

        self.assertEqual(result.initial_allowance, Decimal('500000'))
        self.assertEqual(result.annual_allowance, 0)
        self.assertEqual(result.total_allowance, Decimal('500000'))
        self.assertEqual(result.written_down_value, Decimal('500000'))

    def test_first_year_after_acquisition(self):
        result = calculate_asset_allowance(asset('1000000', 2023), 2024)

        self.assertEqual(result.initial_allowance, 0)
        self.assertEqual(result.annual_allowance, Decimal('125000'))
        self.assertEqual(result.written_down_value, Decimal('375000'))

    def test_asset_acquired_after_year(self):
        result = calculate_asset_allowance(asset('1000000', 2027), 2026)

        self.assertEqual(result.total_allowance, 0)
        self.assertEqual(result.written_down_value, Decimal('1000000'))

    def test_schedule_follows_previous_year(self):
        """Each year's closing value is the previous one less that year's allowance"""
        for category in ('plant_machinery', 'furniture_fittings', 'buildings', 'other'):
            item = asset('1234567.89', 2020, category)
            previous = calculate_asset_allowance(item, 2020)
            for year in range(2021, 2040):
                current = calculate_asset_allowance(item, year)
                self.assertEqual(
                    current.written_down_value,
                    previous.written_down_value - current.annual_allowance,
                    f"{category} {year}"
                )
                previous = current

    def test_cost_fully_relieved_and_never_negative(self):
        item = asset('1000000', 2023)
        claimed = Decimal('0')
        for year in range(2023, 2035):
            result = calculate_asset_allowance(item, year)
            self.assertGreaterEqual(result.written_down_value, 0)
            claimed += result.total_allowance

        self.assertEqual(claimed, Decimal('1000000'))
        self.assertEqual(calculate_asset_allowance(item, 2030).written_down_value, 0)

    def test_buildings_relieved_over_ten_years(self):
        item = asset('1000000', 2020, 'buildings')

        self.assertEqual(calculate_asset_allowance(item, 2020).initial_allowance, Decimal('150000'))
        self.assertEqual(calculate_asset_allowance(item, 2021).annual_allowance, Decimal('85000'))
        self.assertEqual(calculate_asset_allowance(item, 2030).annual_allowance, Decimal('85000'))
        self.assertEqual(calculate_asset_allowance(item, 2030).written_down_value, 0)
        self.assertEqual(calculate_asset_allowance(item, 2031).annual_allowance, 0)

    def test_agricultural_equipment_has_no_annual_allowance(self):
        item = asset('1000000', 2024, 'agricultural_equipment')

        self.assertEqual(calculate_asset_allowance(item, 2024).initial_allowance, Decimal('950000'))
        later = calculate_asset_allowance(item, 2026)
        self.assertEqual(later.annual_allowance, 0)
        self.assertEqual(later.written_down_value, Decimal('50000'))

    def test_unknown_category_uses_other_rates(self):
        rates = get_allowance_rates('spaceships')
        self.assertEqual(rates.category, 'other')

        result = calculate_asset_allowance(asset('400000', 2026, 'spaceships'), 2026)
        self.assertEqual(result.initial_allowance, Decimal('100000'))


class AllowanceRestrictionTest(SimpleTestCase):
    """Claims are limited to 2/3 of assessable profit"""

    def test_restricted_to_two_thirds(self):
        restriction = apply_capital_allowance_restriction(Decimal('900000'), Decimal('900000'))

        self.assertAlmostEqual(restriction.allowed_amount, Decimal('600000'), places=2)
        self.assertAlmostEqual(restriction.carry_forward, Decimal('300000'), places=2)
        self.assertAlmostEqual(restriction.restricted_amount, Decimal('300000'), places=2)

    def test_within_limit(self):
        restriction = apply_capital_allowance_restriction(Decimal('100000'), Decimal('900000'))

        self.assertEqual(restriction.allowed_amount, Decimal('100000'))
        self.assertEqual(restriction.carry_forward, 0)

    def test_loss_carries_everything_forward(self):
        for profit in (Decimal('0'), Decimal('-250000')):
            restriction = apply_capital_allowance_restriction(Decimal('500000'), profit)
            self.assertEqual(restriction.allowed_amount, 0)
            self.assertEqual(restriction.carry_forward, Decimal('500000'))

    def test_allowed_never_exceeds_limit(self):
        for total, profit in (('1', '1'), ('750000', '1000000'), ('10', '3'), ('5000000', '12345.67')):
            restriction = apply_capital_allowance_restriction(Decimal(total), Decimal(profit))
            self.assertLessEqual(restriction.allowed_amount, Decimal(profit) * 2 / 3)
            self.assertAlmostEqual(
                restriction.allowed_amount + restriction.carry_forward, Decimal(total), places=2
            )


class CapitalAllowanceSummaryTest(SimpleTestCase):

    def test_summary_totals(self):
        assets = [
            asset('2000000', 2026, 'computers_equipment', 'laptops'),
            asset('1000000', 2025, 'motor_vehicles', 'van'),
        ]
        summary = compute_capital_allowances(assets, Decimal('1500000'), 2026)

        self.assertEqual(len(summary.asset_breakdown), 2)
        self.assertEqual(summary.total_initial, Decimal('1000000'))
        self.assertEqual(summary.total_annual, Decimal('125000'))
        self.assertEqual(summary.total_allowance, Decimal('1125000'))
        self.assertAlmostEqual(summary.max_allowable_amount, Decimal('1000000'), places=2)
        self.assertAlmostEqual(summary.allowable_amount, Decimal('1000000'), places=2)
        self.assertAlmostEqual(summary.carried_forward, Decimal('125000'), places=2)
        self.assertTrue(summary.is_restricted)

    def test_no_assets(self):
        summary = compute_capital_allowances([], Decimal('1000000'), 2026)

        self.assertEqual(summary.total_allowance, 0)
        self.assertFalse(summary.is_restricted)
