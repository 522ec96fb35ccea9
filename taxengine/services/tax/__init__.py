from .brackets import calculate_bracket_tax
from .capital_allowance import (
    apply_capital_allowance_restriction,
    calculate_asset_allowance,
    calculate_total_capital_allowances,
    compute_capital_allowances,
    get_allowance_rates,
)
from .cit import compute_cit
from .config import DEFAULT_RULES, TaxRules, get_tax_rules
from .engine import compute_business_tax, get_entity_type_label, get_tax_authority
from .exceptions import InvalidTurnoverError, TaxComputationError
from .nigeria_2026 import NigeriaTaxCalculator2026
from .pit import compute_personal_tax
from .pit_business import compute_pit_business
from .reliefs import (
    calculate_exempt_income,
    calculate_personal_reliefs,
    calculate_rent_relief,
    calculate_statutory_deductions,
)
from .turnover import determine_cit_band
from .vat import compute_vat
from .wht import calculate_wht, compute_wht, get_wht_rate
