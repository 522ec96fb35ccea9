import logging
from decimal import Decimal

from .config import DEFAULT_RULES, CITBand, TaxRules
from .exceptions import InvalidTurnoverError

logger = logging.getLogger(__name__)


def determine_cit_band(
    annual_turnover: Decimal,
    rules: TaxRules = DEFAULT_RULES,
) -> CITBand:
    """
    Map annual turnover to its CIT band.

    Bands are (min, max] intervals checked in ascending order. Zero turnover
    belongs to the smallest band; negative turnover is rejected.
    """
    annual_turnover = Decimal(annual_turnover)
    if annual_turnover < 0:
        raise InvalidTurnoverError(annual_turnover)

    for band in rules.cit_bands:
        if band.min_turnover < annual_turnover <= band.max_turnover:
            return band

    # Zero turnover
    logger.debug(f"Turnover {annual_turnover} below every band, using {rules.cit_bands[0].category}")
    return rules.cit_bands[0]
