from typing import Any, Iterable, Mapping, Optional
import logging

from .discounts import calculate_discount, coupon_applies, member_discount_applies
from .interfaces import Coupon, Item
from .money import rint
from .schemas import ItemPrice, Price, Settings
from .taxes import resolve_tax_amounts

logger = logging.getLogger(__name__)


def calculate_item_price(
    settings: Optional[Settings],
    claims: Optional[Mapping[str, Any]],
    country: str,
    currency: str,
    coupon: Optional[Coupon],
    item: Item,
) -> ItemPrice:
    """Prices a single unit of a line item."""
    include_taxes = settings is not None and settings.prices_include_taxes
    item_price = ItemPrice(quantity=item.get_quantity(), subtotal=item.price_in_lowest_unit())

    tax_amounts = resolve_tax_amounts(settings, item, country)
    if tax_amounts:
        if include_taxes:
            # The price already contains the taxes, derive the subtotal from the parts
            item_price.subtotal = 0
        for price, percentage in tax_amounts:
            if include_taxes:
                price = rint(price / (100 + percentage) * 100)
                item_price.subtotal += price
            item_price.taxes += rint(price * percentage / 100)

    if coupon_applies(coupon, item):
        item_price.discount = calculate_discount(
            item_price.subtotal,
            item_price.taxes,
            coupon.percentage_discount(),
            coupon.fixed_discount(currency),
            include_taxes,
        )
    if settings is not None:
        for discount in settings.member_discounts:
            if member_discount_applies(discount, claims, item):
                item_price.discount += calculate_discount(
                    item_price.subtotal,
                    item_price.taxes,
                    discount.percentage,
                    discount.fixed_discount(currency),
                    include_taxes,
                )

    item_price.total = max(item_price.subtotal - item_price.discount + item_price.taxes, 0)
    return item_price


def calculate_price(
    settings: Optional[Settings],
    claims: Optional[Mapping[str, Any]],
    country: str,
    currency: str,
    coupon: Optional[Coupon],
    items: Iterable[Item],
) -> Price:
    """
    Calculates the final price of a list of line items.

    Takes into account site-wide taxes (inclusive or exclusive), the coupon
    and any member discounts the claims qualify for. Order totals are the
    per-unit amounts multiplied by quantity, except the total, which is always
    derived as subtotal - discount + taxes.
    """
    price = Price()
    for item in items:
        item_price = calculate_item_price(settings, claims, country, currency, coupon, item)
        logger.debug(
            f"{item.product_sku()} x{item_price.quantity}: subtotal={item_price.subtotal} "
            f"discount={item_price.discount} taxes={item_price.taxes} total={item_price.total}"
        )
        price.items.append(item_price)

        price.subtotal += item_price.subtotal * item_price.quantity
        price.discount += item_price.discount * item_price.quantity
        price.taxes += item_price.taxes * item_price.quantity
        price.total += item_price.total * item_price.quantity

    # Stacked discounts can exceed subtotal + taxes, never go below zero
    price.total = max(price.subtotal - price.discount + price.taxes, 0)

    logger.info(
        f"Price calculated for {len(price.items)} item(s) in {currency} to {country or 'unknown country'}: "
        f"subtotal={price.subtotal} discount={price.discount} taxes={price.taxes} total={price.total}"
    )
    return price
