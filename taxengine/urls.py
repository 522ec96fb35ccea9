from django.urls import path

from . import apis

urlpatterns = [
    path('tax/rules/', apis.TaxRulesView.as_view(), name='tax-rules'),
    path('tax/personal/', apis.PersonalTaxView.as_view(), name='tax-personal'),
    path('tax/business/', apis.BusinessTaxView.as_view(), name='tax-business'),
    path('tax/capital-allowances/', apis.CapitalAllowanceView.as_view(), name='tax-capital-allowances'),
    path('tax/vat/', apis.VATView.as_view(), name='tax-vat'),
    path('tax/wht/', apis.WHTView.as_view(), name='tax-wht'),
    path('tax/wht/calculate/', apis.WHTCalculateView.as_view(), name='tax-wht-calculate'),
    path('tax/smart-deductions/', apis.SmartDeductionView.as_view(), name='tax-smart-deductions'),
    path('tax/summary/', apis.TaxSummaryView.as_view(), name='tax-summary'),
]
