from decimal import Decimal

from rest_framework import serializers
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema_field

from .services.tax import vat as vat_service
from .services.tax import wht as wht_service
from .services.tax.types import (
    AssetCategory,
    BusinessExpenses,
    BusinessIncome,
    BusinessTaxInput,
    CapitalAsset,
    CITAdjustments,
    EntityType,
    ExpenseRecord,
    PersonalReliefs,
    RecipientType,
    StatutoryDeductions,
    VATTransactionType,
)


def money_field(**kwargs):
    """Non-negative Naira amount, defaulting to zero when omitted."""
    options = {
        'max_digits': 15,
        'decimal_places': 2,
        'min_value': Decimal('0.00'),
        'default': Decimal('0.00'),
    }
    options.update(kwargs)
    return serializers.DecimalField(**options)


def amount_field(**kwargs):
    """Computed Naira amount in a result, always two decimal places."""
    return serializers.DecimalField(max_digits=20, decimal_places=2, **kwargs)


def rate_field(**kwargs):
    return serializers.DecimalField(max_digits=12, decimal_places=4, **kwargs)


# ======================================================
# Personal income tax
# ======================================================
class StatutoryDeductionsSerializer(serializers.Serializer):
    pension_contribution = money_field()
    nhis_contribution = money_field(help_text="National Health Insurance contribution")
    nhf_contribution = money_field(help_text="National Housing Fund contribution")
    housing_loan_interest = money_field()
    life_insurance_premium = money_field()
    annual_rent_paid = money_field(help_text="Rent paid in the year (20% relief, max ₦500,000)")
    employment_compensation = money_field(help_text="Compensation for loss of employment")
    gifts_received = money_field()
    pension_benefits_received = money_field()


class PersonalTaxInputSerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    gross_income = money_field(default=serializers.empty)
    deductions = StatutoryDeductionsSerializer(required=False)

    def create(self, validated_data):
        deductions = validated_data.get('deductions')
        return {
            'year': validated_data['year'],
            'gross_income': validated_data['gross_income'],
            'deductions': StatutoryDeductions(**deductions) if deductions else StatutoryDeductions(),
        }


# ======================================================
# Business tax (PIT / CIT)
# ======================================================
class BusinessIncomeSerializer(serializers.Serializer):
    sales_revenue = money_field()
    service_fees = money_field()
    commissions = money_field()
    digital_income = money_field()
    exchange_gains = money_field()
    other_receipts = money_field()


class BusinessExpensesSerializer(serializers.Serializer):
    cost_of_goods_sold = money_field()
    rent_premises = money_field()
    utilities = money_field()
    transport = money_field()
    staff_salaries = money_field()
    repairs_maintenance = money_field()
    professional_fees = money_field()
    internet_software = money_field()
    marketing_advertising = money_field()
    other_allowable = money_field()
    personal_expenses = money_field(help_text="Disallowed")
    capital_expenditure = money_field(help_text="Disallowed")
    fines_penalties = money_field(help_text="Disallowed")
    non_business_donations = money_field(help_text="Disallowed")


class CapitalAssetSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64)
    description = serializers.CharField(max_length=255, allow_blank=True, default='')
    category = serializers.ChoiceField(choices=[c.value for c in AssetCategory])
    cost = money_field(default=serializers.empty)
    year_acquired = serializers.IntegerField(min_value=1900, max_value=2100)


class PersonalReliefsSerializer(serializers.Serializer):
    pension = money_field()
    nhis = money_field()
    nhf = money_field()
    life_insurance = money_field()
    housing_loan_interest = money_field()
    annual_rent_paid = money_field()


class CITAdjustmentsSerializer(serializers.Serializer):
    depreciation = money_field()
    non_deductible_expenses = money_field()
    provisions = money_field()
    unapproved_donations = money_field()
    exempt_income = money_field()


class BusinessTaxInputSerializer(serializers.Serializer):
    entity_type = serializers.ChoiceField(choices=[
        EntityType.SOLE_PROPRIETORSHIP.value,
        EntityType.PARTNERSHIP.value,
        EntityType.LIMITED_COMPANY.value,
    ])
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    annual_turnover = serializers.DecimalField(
        max_digits=15, decimal_places=2,
        min_value=Decimal('0.00'),
        required=False, allow_null=True,
        help_text="Required for CIT band classification"
    )
    business_income = BusinessIncomeSerializer(required=False)
    business_expenses = BusinessExpensesSerializer(required=False)
    capital_assets = CapitalAssetSerializer(many=True, required=False)
    personal_reliefs = PersonalReliefsSerializer(required=False, allow_null=True)
    cit_adjustments = CITAdjustmentsSerializer(required=False, allow_null=True)

    def validate(self, data):
        assets = data.get('capital_assets', [])
        ids = [asset['id'] for asset in assets]
        if len(ids) != len(set(ids)):
            raise serializers.ValidationError({'capital_assets': 'Asset ids must be unique.'})
        return data

    def create(self, validated_data):
        reliefs = validated_data.get('personal_reliefs')
        adjustments = validated_data.get('cit_adjustments')
        return BusinessTaxInput(
            entity_type=validated_data['entity_type'],
            year=validated_data['year'],
            annual_turnover=validated_data.get('annual_turnover'),
            business_income=BusinessIncome(**validated_data.get('business_income', {})),
            business_expenses=BusinessExpenses(**validated_data.get('business_expenses', {})),
            capital_assets=tuple(
                CapitalAsset(**asset) for asset in validated_data.get('capital_assets', [])
            ),
            personal_reliefs=PersonalReliefs(**reliefs) if reliefs else None,
            cit_adjustments=CITAdjustments(**adjustments) if adjustments else None,
        )


class CapitalAllowanceInputSerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    assessable_profit = serializers.DecimalField(
        max_digits=15, decimal_places=2,
        help_text="May be negative for a loss year"
    )
    capital_assets = CapitalAssetSerializer(many=True)

    def create(self, validated_data):
        return {
            'year': validated_data['year'],
            'assessable_profit': validated_data['assessable_profit'],
            'assets': tuple(CapitalAsset(**a) for a in validated_data['capital_assets']),
        }


# ======================================================
# VAT
# ======================================================
class VATTransactionSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64)
    description = serializers.CharField(max_length=255, allow_blank=True, default='')
    amount = money_field(default=serializers.empty)
    vat_amount = money_field(
        required=False, default=serializers.empty,
        help_text="Defaults to 7.5% of amount for taxable transactions"
    )
    category = serializers.CharField(max_length=100, default='other_services')
    is_exempt = serializers.BooleanField(
        required=False, allow_null=True, default=None,
        help_text="Defaults to whether the category is VAT-exempt"
    )
    exempt_reason = serializers.CharField(max_length=255, required=False, allow_null=True)
    date = serializers.DateField()


class VATComputationInputSerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    month = serializers.IntegerField(min_value=1, max_value=12, required=False, allow_null=True)
    output_transactions = VATTransactionSerializer(many=True, required=False)
    input_transactions = VATTransactionSerializer(many=True, required=False)

    def _build(self, data, transaction_type):
        is_exempt = data.get('is_exempt')
        if is_exempt is None:
            is_exempt = vat_service.is_vat_exempt(data['category'])

        vat_amount = data.get('vat_amount')
        if vat_amount is None:
            vat_amount = (
                Decimal('0.00') if is_exempt
                else vat_service.calculate_vat(data['amount']).vat_amount
            )

        return vat_service.VATTransaction(
            id=data['id'],
            description=data['description'],
            amount=data['amount'],
            vat_amount=vat_amount,
            transaction_type=transaction_type,
            category=data['category'],
            is_exempt=is_exempt,
            date=data['date'],
            exempt_reason=data.get('exempt_reason'),
        )

    def create(self, validated_data):
        return vat_service.VATComputationInput(
            year=validated_data['year'],
            month=validated_data.get('month'),
            output_transactions=tuple(
                self._build(tx, VATTransactionType.OUTPUT.value)
                for tx in validated_data.get('output_transactions', [])
            ),
            input_transactions=tuple(
                self._build(tx, VATTransactionType.INPUT.value)
                for tx in validated_data.get('input_transactions', [])
            ),
        )


# ======================================================
# WHT
# ======================================================
class WHTCalculateInputSerializer(serializers.Serializer):
    payment_type = serializers.CharField(
        max_length=50,
        help_text="Unknown payment types are withheld at the default 10%"
    )
    recipient_type = serializers.ChoiceField(choices=[r.value for r in RecipientType])
    gross_amount = money_field(default=serializers.empty)


class WHTPaymentSerializer(WHTCalculateInputSerializer):
    recipient_name = serializers.CharField(max_length=255)
    recipient_tin = serializers.CharField(max_length=50, required=False, allow_null=True)
    payment_date = serializers.DateField()
    description = serializers.CharField(max_length=255, allow_blank=True, default='')


class WHTComputationInputSerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    month = serializers.IntegerField(min_value=1, max_value=12, required=False, allow_null=True)
    transactions = WHTPaymentSerializer(many=True)

    def create(self, validated_data):
        return wht_service.WHTComputationInput(
            year=validated_data['year'],
            month=validated_data.get('month'),
            transactions=tuple(
                wht_service.create_wht_transaction(
                    payment_type=tx['payment_type'],
                    recipient_type=tx['recipient_type'],
                    recipient_name=tx['recipient_name'],
                    gross_amount=tx['gross_amount'],
                    payment_date=tx['payment_date'],
                    description=tx['description'],
                    recipient_tin=tx.get('recipient_tin'),
                )
                for tx in validated_data['transactions']
            ),
        )


# ======================================================
# Smart deductions
# ======================================================
class ExpenseRecordSerializer(serializers.Serializer):
    date = serializers.DateField()
    amount = money_field(default=serializers.empty)
    category = serializers.CharField(max_length=100, default='other')
    description = serializers.CharField(max_length=255, allow_blank=True, default='')
    vendor = serializers.CharField(max_length=255, allow_blank=True, default='')


class SmartDeductionInputSerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    gross_income = money_field(default=serializers.empty)
    expenses = ExpenseRecordSerializer(many=True, required=False)
    current_deductions = StatutoryDeductionsSerializer(required=False)

    def create(self, validated_data):
        current = validated_data.get('current_deductions')
        return {
            'year': validated_data['year'],
            'gross_income': validated_data['gross_income'],
            'expenses': [ExpenseRecord(**e) for e in validated_data.get('expenses', [])],
            'current_deductions': StatutoryDeductions(**current) if current else None,
        }


class TaxSummaryInputSerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    total_revenue = money_field(default=serializers.empty)
    total_expenses = money_field()
    vat_enabled = serializers.BooleanField(default=False)


# ======================================================
# Result serializers
# ======================================================
class BracketTaxSerializer(serializers.Serializer):
    bracket = serializers.CharField()
    income = amount_field()
    rate = rate_field(help_text="Percentage, e.g. 15.0000")
    tax = amount_field()


class DeductionBreakdownSerializer(serializers.Serializer):
    pension = amount_field()
    nhis = amount_field()
    nhf = amount_field()
    housing_loan_interest = amount_field()
    life_insurance = amount_field()
    rent_relief = amount_field()
    total = amount_field()


class TaxResultSerializer(serializers.Serializer):
    taxation_type = serializers.CharField()
    entity_type = serializers.CharField()
    tax_authority = serializers.CharField()
    is_exempt = serializers.BooleanField()
    exemption_reason = serializers.CharField(allow_null=True)
    effective_rate = rate_field(help_text="Tax as a percentage of gross income")


class PITPersonalResultSerializer(TaxResultSerializer):
    gross_income = amount_field()
    exempt_income = amount_field()
    taxable_gross_income = amount_field()
    statutory_deductions = amount_field()
    rent_relief = amount_field()
    total_deductions = amount_field()
    deduction_breakdown = DeductionBreakdownSerializer()
    taxable_income = amount_field()
    tax_by_bracket = BracketTaxSerializer(many=True)
    total_tax = amount_field()
    net_tax_payable = amount_field()


class CapitalAllowanceResultSerializer(serializers.Serializer):
    asset_id = serializers.CharField()
    asset_description = serializers.CharField()
    asset_category = serializers.CharField()
    cost = amount_field()
    initial_allowance = amount_field()
    annual_allowance = amount_field()
    total_allowance = amount_field()
    written_down_value = amount_field()


class CapitalAllowanceSummarySerializer(serializers.Serializer):
    asset_breakdown = CapitalAllowanceResultSerializer(many=True)
    total_initial = amount_field()
    total_annual = amount_field()
    total_allowance = amount_field()
    max_allowable_amount = amount_field()
    allowable_amount = amount_field()
    carried_forward = amount_field()
    is_restricted = serializers.BooleanField()


class PITBusinessResultSerializer(TaxResultSerializer):
    gross_business_income = amount_field()
    income_breakdown = BusinessIncomeSerializer()
    allowable_expenses = amount_field()
    disallowed_expenses = amount_field()
    expense_breakdown = BusinessExpensesSerializer()
    capital_allowances = amount_field()
    capital_allowance_restriction = amount_field()
    capital_allowance_carry_forward = amount_field()
    capital_allowance_breakdown = CapitalAllowanceResultSerializer(many=True)
    adjusted_profit = amount_field()
    personal_reliefs = amount_field()
    relief_breakdown = DeductionBreakdownSerializer()
    taxable_income = amount_field()
    tax_by_bracket = BracketTaxSerializer(many=True)
    total_tax = amount_field()


class CITResultSerializer(TaxResultSerializer):
    annual_turnover = amount_field()
    turnover_category = serializers.CharField()
    cit_rate = rate_field()
    gross_revenue = amount_field()
    cost_of_sales = amount_field()
    operating_expenses = amount_field()
    accounting_profit = amount_field()
    add_back_depreciation = amount_field()
    add_back_non_deductible = amount_field()
    add_back_provisions = amount_field()
    add_back_unapproved_donations = amount_field()
    deduct_capital_allowances = amount_field()
    deduct_exempt_income = amount_field()
    capital_allowances = amount_field()
    capital_allowance_restriction = amount_field()
    capital_allowance_carry_forward = amount_field()
    capital_allowance_breakdown = CapitalAllowanceResultSerializer(many=True)
    assessable_profit = amount_field()
    taxable_profit = amount_field()
    cit_payable = amount_field()
    filing_required = serializers.BooleanField()


class VATCategoryTotalSerializer(serializers.Serializer):
    category = serializers.CharField()
    amount = amount_field()
    vat = amount_field()


class VATComputationResultSerializer(serializers.Serializer):
    year = serializers.IntegerField()
    month = serializers.IntegerField(allow_null=True)
    period = serializers.CharField()
    total_output_sales = amount_field()
    exempt_output_sales = amount_field()
    taxable_output_sales = amount_field()
    output_vat = amount_field()
    total_input_purchases = amount_field()
    exempt_input_purchases = amount_field()
    taxable_input_purchases = amount_field()
    input_vat = amount_field()
    net_vat_payable = amount_field()
    is_refund_due = serializers.BooleanField()
    output_breakdown = VATCategoryTotalSerializer(many=True)
    input_breakdown = VATCategoryTotalSerializer(many=True)
    vat_rate = rate_field()
    filing_deadline = serializers.DateField()
    payment_deadline = serializers.DateField()


class WHTCalculationSerializer(serializers.Serializer):
    gross_amount = amount_field()
    wht_rate = rate_field()
    wht_amount = amount_field()
    net_amount = amount_field()


class WHTTransactionSerializer(WHTCalculationSerializer):
    id = serializers.CharField()
    payment_type = serializers.CharField()
    recipient_type = serializers.CharField()
    recipient_name = serializers.CharField()
    recipient_tin = serializers.CharField(allow_null=True)
    payment_date = serializers.DateField()
    description = serializers.CharField()
    remittance_deadline = serializers.SerializerMethodField()

    @extend_schema_field(OpenApiTypes.DATE)
    def get_remittance_deadline(self, obj):
        return wht_service.get_wht_remittance_deadline(obj.payment_date).isoformat()


class WHTGroupTotalSerializer(serializers.Serializer):
    type = serializers.CharField()
    label = serializers.CharField()
    gross_amount = amount_field()
    wht_amount = amount_field()
    transaction_count = serializers.IntegerField()


class WHTComputationResultSerializer(serializers.Serializer):
    year = serializers.IntegerField()
    month = serializers.IntegerField(allow_null=True)
    period = serializers.CharField()
    total_gross_payments = amount_field()
    total_wht_deducted = amount_field()
    total_net_payments = amount_field()
    by_payment_type = WHTGroupTotalSerializer(many=True)
    by_recipient_type = WHTGroupTotalSerializer(many=True)
    transactions = WHTTransactionSerializer(many=True)
    remittance_deadline = serializers.DateField()
    filing_deadline = serializers.DateField()


class DetectedDeductionSerializer(serializers.Serializer):
    type = serializers.CharField()
    category = serializers.CharField()
    amount = amount_field()
    description = serializers.CharField()
    confidence = serializers.CharField()
    action_required = serializers.BooleanField()
    document_required = serializers.BooleanField()
    suggestion = serializers.CharField()


class AutoExemptionSerializer(serializers.Serializer):
    type = serializers.CharField()
    amount = amount_field()
    description = serializers.CharField()
    is_applied = serializers.BooleanField()
    requirement = serializers.CharField()


class SmartDeductionResultSerializer(serializers.Serializer):
    detected_deductions = DetectedDeductionSerializer(many=True)
    auto_exemptions = AutoExemptionSerializer(many=True)
    total_potential_savings = amount_field()
    recommended_actions = serializers.ListField(child=serializers.CharField())
    tax_optimization_tips = serializers.ListField(child=serializers.CharField())


class TaxSummarySerializer(serializers.Serializer):
    """
    Serializer for the quick sole-proprietor tax summary
    """
    total_revenue = amount_field(help_text="Total revenue in Naira")
    total_expenses = amount_field(help_text="Total expenses in Naira")
    net_profit = amount_field(help_text="Net profit (revenue - expenses) in Naira")
    taxable_income = amount_field(help_text="Income subject to tax in Naira")
    estimated_income_tax = amount_field(
        help_text="Estimated Personal Income Tax in Naira (Nigeria Tax Act 2025)"
    )
    effective_tax_rate = serializers.FloatField(
        help_text="Actual tax rate as percentage (0-100)"
    )
    vat_payable = amount_field(
        help_text="Value Added Tax payable in Naira (7.5% if VAT enabled)"
    )
    disclaimer = serializers.CharField(
        help_text="Legal disclaimer - not an official filing"
    )
    tax_year = serializers.IntegerField(help_text="Applicable tax year")
    calculation_method = serializers.CharField(help_text="Tax calculation approach used")
