import logging
from typing import List, NamedTuple, Optional

from .interfaces import Item
from .schemas import Settings, Tax

logger = logging.getLogger(__name__)


class TaxAmount(NamedTuple):
    price: int
    percentage: int


def first_matching_tax(taxes: List[Tax], country: str, product_type: str) -> Optional[Tax]:
    # Declaration order decides, not the rate
    for tax in taxes:
        if tax.applies_to(country, product_type):
            return tax
    return None


def resolve_tax_amounts(settings: Optional[Settings], item: Item, country: str) -> List[TaxAmount]:
    """
    Splits an item's price into the amounts that are taxed and their rates.

    A fixed VAT override on the item wins over the site's tax rules. Bundles
    get one amount per sub-item so each part can carry its own rate. Without
    settings, only the fixed VAT override can produce taxes.
    """
    vat = item.fixed_vat()
    if vat:
        return [TaxAmount(item.price_in_lowest_unit(), vat)]
    if settings is None:
        return []

    sub_items = item.taxable_items()
    if sub_items:
        amounts = []
        for sub_item in sub_items:
            tax = first_matching_tax(settings.taxes, country, sub_item.product_type())
            amounts.append(TaxAmount(sub_item.price_in_lowest_unit(), tax.percentage if tax else 0))
        return amounts

    tax = first_matching_tax(settings.taxes, country, item.product_type())
    if tax is None:
        logger.debug(f"No tax applies to {item.product_sku()} ({item.product_type()!r}) in {country!r}")
        return []
    return [TaxAmount(item.price_in_lowest_unit(), tax.percentage)]
