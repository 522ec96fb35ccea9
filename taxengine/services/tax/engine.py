import logging

from .cit import compute_cit
from .config import DEFAULT_RULES, TaxRules
from .pit_business import compute_pit_business
from .types import BusinessTaxInput, BusinessTaxResult, EntityType, TaxAuthority

logger = logging.getLogger(__name__)

ENTITY_TYPE_LABELS = {
    EntityType.INDIVIDUAL.value: "Individual",
    EntityType.SOLE_PROPRIETORSHIP.value: "Sole Proprietorship",
    EntityType.PARTNERSHIP.value: "Partnership",
    EntityType.LIMITED_COMPANY.value: "Limited Company (Ltd)",
}


def compute_business_tax(
    tax_input: BusinessTaxInput,
    rules: TaxRules = DEFAULT_RULES,
) -> BusinessTaxResult:
    """
    Route a business to its tax pipeline.

    Limited companies pay CIT; every other entity type is taxed as the
    owner's personal income.
    """
    if tax_input.entity_type == EntityType.LIMITED_COMPANY:
        logger.debug(f"Computing CIT for {tax_input.year}")
        return compute_cit(tax_input, rules)

    logger.debug(f"Computing PIT ({tax_input.entity_type}) for {tax_input.year}")
    return compute_pit_business(tax_input, rules)


def get_tax_authority(entity_type) -> str:
    if entity_type == EntityType.LIMITED_COMPANY:
        return TaxAuthority.NRS.value
    return TaxAuthority.SIRS.value


def get_entity_type_label(entity_type) -> str:
    return ENTITY_TYPE_LABELS.get(getattr(entity_type, "value", entity_type), "Unknown")
