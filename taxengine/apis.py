import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter, PolymorphicProxySerializer
from drf_spectacular.types import OpenApiTypes
from django.conf import settings

from .serializers import (
    BusinessTaxInputSerializer,
    CapitalAllowanceInputSerializer,
    CapitalAllowanceSummarySerializer,
    CITResultSerializer,
    PersonalTaxInputSerializer,
    PITBusinessResultSerializer,
    PITPersonalResultSerializer,
    SmartDeductionInputSerializer,
    SmartDeductionResultSerializer,
    TaxSummaryInputSerializer,
    TaxSummarySerializer,
    VATComputationInputSerializer,
    VATComputationResultSerializer,
    WHTCalculateInputSerializer,
    WHTCalculationSerializer,
    WHTComputationInputSerializer,
    WHTComputationResultSerializer,
)
from .services.tax.exceptions import TaxComputationError
from .services.tax.nigeria_2026 import NigeriaTaxCalculator2026
from .services.tax.types import TaxationType

# prepare logging handler for this file
logger = logging.getLogger(__name__)


def _plain(value):
    """Render a rule-table Decimal for JSON; unbounded limits become null."""
    if value.is_infinite():
        return None
    return str(value)


class TaxComputationView(APIView):
    """
    Base view for the tax computation endpoints.

    Every request carries the complete snapshot for one computation: the
    payload is validated by `input_serializer_class`, turned into engine
    input by the serializer's `save()`, and handed to `compute()`.
    Nothing is stored.
    """
    permission_classes = [AllowAny]
    input_serializer_class = None
    output_serializer_class = None

    def compute(self, calculator, data):
        raise NotImplementedError

    def get_output_serializer_class(self, result):
        return self.output_serializer_class

    def post(self, request):
        serializer = self.input_serializer_class(data=request.data)
        if not serializer.is_valid():
            logger.warning(f"{self.__class__.__name__}: rejected input {serializer.errors}")
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.save()
        calculator = NigeriaTaxCalculator2026.for_year(serializer.validated_data['year'])

        try:
            result = self.compute(calculator, data)
        except TaxComputationError as e:
            logger.warning(f"{self.__class__.__name__}: computation failed: {e}")
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        logger.info(f"{self.__class__.__name__}: computed for {serializer.validated_data['year']}")
        output = self.get_output_serializer_class(result)(result)
        return Response(output.data)


class TaxRulesView(APIView):
    """
    Rates, brackets and bands in force for a tax year.
    """
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Get tax rules for a year",
        description="PIT brackets, CIT bands, capital allowance rates, VAT and WHT rates.",
        parameters=[
            OpenApiParameter(
                name='year',
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
                description='Tax year (defaults to TAX_DEFAULT_YEAR)'
            ),
        ],
        responses={200: OpenApiTypes.OBJECT},
        tags=["Tax"]
    )
    def get(self, request):
        year_str = request.query_params.get('year')
        try:
            year = int(year_str) if year_str else settings.TAX_DEFAULT_YEAR
        except ValueError:
            return Response(
                {'error': 'Invalid year format. Use YYYY'},
                status=status.HTTP_400_BAD_REQUEST
            )

        rules = NigeriaTaxCalculator2026.for_year(year).rules
        return Response({
            'year': year,
            'effective_year': rules.effective_year,
            'pit_exempt_threshold': _plain(rules.pit_exempt_threshold),
            'pit_brackets': [
                {'label': b.label, 'min': _plain(b.min), 'max': _plain(b.max), 'rate': _plain(b.rate)}
                for b in rules.pit_brackets
            ],
            'rent_relief_rate': _plain(rules.rent_relief_rate),
            'rent_relief_cap': _plain(rules.rent_relief_cap),
            'employment_compensation_exempt_cap': _plain(rules.employment_compensation_exempt_cap),
            'cit_bands': [
                {
                    'category': b.category,
                    'label': b.label,
                    'min_turnover': _plain(b.min_turnover),
                    'max_turnover': _plain(b.max_turnover),
                    'rate': _plain(b.rate),
                }
                for b in rules.cit_bands
            ],
            'capital_allowance_rates': [
                {
                    'category': r.category,
                    'label': r.label,
                    'initial_rate': _plain(r.initial_rate),
                    'annual_rate': _plain(r.annual_rate),
                }
                for r in rules.capital_allowance_rates
            ],
            'vat_rate': _plain(rules.vat_rate),
            'wht_rates': [
                {
                    'type': w.type,
                    'label': w.label,
                    'corporate_rate': _plain(w.corporate_rate),
                    'individual_rate': _plain(w.individual_rate),
                    'non_resident_rate': _plain(w.non_resident_rate),
                }
                for w in rules.wht_rates
            ],
            'disclaimer': rules.disclaimer,
        })


class PersonalTaxView(TaxComputationView):
    """
    Personal Income Tax for an individual: exempt income, statutory
    deductions and the progressive 2026 brackets.
    """
    input_serializer_class = PersonalTaxInputSerializer
    output_serializer_class = PITPersonalResultSerializer

    @extend_schema(
        summary="Compute personal income tax",
        request=PersonalTaxInputSerializer,
        responses={200: PITPersonalResultSerializer},
        tags=["Tax"]
    )
    def post(self, request):
        return super().post(request)

    def compute(self, calculator, data):
        return calculator.compute_personal_tax(data['gross_income'], data['deductions'])


class BusinessTaxView(TaxComputationView):
    """
    Business tax routed by entity type: limited companies pay CIT, sole
    proprietors and partnerships pay PIT on business profit.
    """
    input_serializer_class = BusinessTaxInputSerializer

    @extend_schema(
        summary="Compute business tax (PIT or CIT)",
        request=BusinessTaxInputSerializer,
        responses={200: PolymorphicProxySerializer(
            component_name='BusinessTaxResult',
            serializers={
                TaxationType.PIT.value: PITBusinessResultSerializer,
                TaxationType.CIT.value: CITResultSerializer,
            },
            resource_type_field_name='taxation_type',
        )},
        tags=["Tax"]
    )
    def post(self, request):
        return super().post(request)

    def compute(self, calculator, data):
        return calculator.compute_business_tax(data)

    def get_output_serializer_class(self, result):
        if result.taxation_type == TaxationType.CIT:
            return CITResultSerializer
        return PITBusinessResultSerializer


class CapitalAllowanceView(TaxComputationView):
    input_serializer_class = CapitalAllowanceInputSerializer
    output_serializer_class = CapitalAllowanceSummarySerializer

    @extend_schema(
        summary="Compute capital allowances",
        description="Per-asset allowances for the year, restricted to 2/3 of assessable profit.",
        request=CapitalAllowanceInputSerializer,
        responses={200: CapitalAllowanceSummarySerializer},
        tags=["Tax"]
    )
    def post(self, request):
        return super().post(request)

    def compute(self, calculator, data):
        return calculator.compute_capital_allowances(
            data['assets'], data['assessable_profit'], data['year']
        )


class VATView(TaxComputationView):
    input_serializer_class = VATComputationInputSerializer
    output_serializer_class = VATComputationResultSerializer

    @extend_schema(
        summary="Compute VAT return",
        description="Net output VAT against input VAT for a month or a full year.",
        request=VATComputationInputSerializer,
        responses={200: VATComputationResultSerializer},
        tags=["VAT"]
    )
    def post(self, request):
        return super().post(request)

    def compute(self, calculator, data):
        return calculator.compute_vat(data)


class WHTView(TaxComputationView):
    input_serializer_class = WHTComputationInputSerializer
    output_serializer_class = WHTComputationResultSerializer

    @extend_schema(
        summary="Compute WHT summary",
        description="Withholding on each payment, grouped by payment and recipient type.",
        request=WHTComputationInputSerializer,
        responses={200: WHTComputationResultSerializer},
        tags=["WHT"]
    )
    def post(self, request):
        return super().post(request)

    def compute(self, calculator, data):
        return calculator.compute_wht(data)


class WHTCalculateView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Calculate WHT on a single payment",
        request=WHTCalculateInputSerializer,
        responses={200: WHTCalculationSerializer},
        tags=["WHT"]
    )
    def post(self, request):
        serializer = WHTCalculateInputSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        calculator = NigeriaTaxCalculator2026()
        result = calculator.calculate_wht(
            data['gross_amount'], data['payment_type'], data['recipient_type']
        )
        return Response(WHTCalculationSerializer(result).data)


class SmartDeductionView(TaxComputationView):
    input_serializer_class = SmartDeductionInputSerializer
    output_serializer_class = SmartDeductionResultSerializer

    @extend_schema(
        summary="Detect potential deductions",
        description=(
            "Scan expense records for payments that may qualify as deductions. "
            "Advisory only; does not change any tax computation."
        ),
        request=SmartDeductionInputSerializer,
        responses={200: SmartDeductionResultSerializer},
        tags=["Tax"]
    )
    def post(self, request):
        return super().post(request)

    def compute(self, calculator, data):
        return calculator.analyze_smart_deductions(
            data['gross_income'], data['expenses'], data['year'], data['current_deductions']
        )


class TaxSummaryView(APIView):
    """
    Quick annual tax estimate for sole proprietors and informal businesses
    from revenue and expense totals (Nigeria Tax Act 2025).
    """
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Get annual tax summary",
        description=(
            "Returns revenue, expenses, profit, taxable income, estimated Personal "
            "Income Tax, and optional VAT. All amounts in Naira (NGN)."
        ),
        request=TaxSummaryInputSerializer,
        responses={200: TaxSummarySerializer},
        tags=["Tax"]
    )
    def post(self, request):
        serializer = TaxSummaryInputSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        calculator = NigeriaTaxCalculator2026.for_year(
            data['year'], vat_enabled=data['vat_enabled']
        )
        tax_summary = calculator.calculate_tax_summary(
            total_revenue=data['total_revenue'],
            total_expenses=data['total_expenses'],
        )

        return Response(TaxSummarySerializer(tax_summary).data)
