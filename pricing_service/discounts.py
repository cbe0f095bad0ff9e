import logging
from typing import Any, Mapping, Optional

from .interfaces import Coupon, Item
from .money import rint
from .schemas import MemberDiscount

logger = logging.getLogger(__name__)


def calculate_discount(amount: int, taxes: int, percentage: int, fixed: int, include_taxes: bool) -> int:
    """
    Percentage discount plus fixed discount, never more than the discounted amount.

    With tax-inclusive prices the taxes are part of what gets discounted.
    """
    if include_taxes:
        amount += taxes
    discount = 0
    if percentage > 0:
        discount = rint(amount * percentage / 100)
    discount += fixed
    return min(discount, amount)


def _has_claim(claims: Mapping[str, Any], key: str, value: str) -> bool:
    current: Any = claims
    for part in key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return False
        current = current[part]
    if isinstance(current, str):
        return current == value
    if isinstance(current, (list, tuple)):
        return value in current
    return False


def has_claims(claims: Optional[Mapping[str, Any]], required: Mapping[str, str]) -> bool:
    """
    Whether the user's claims satisfy every required claim.

    Keys may be dotted paths into nested claims ("app_metadata.plan") and a
    list-valued claim matches when it contains the required value. No claims
    at all means an anonymous user, which never matches.
    """
    if claims is None:
        return False
    return all(_has_claim(claims, key, value) for key, value in required.items())


def coupon_applies(coupon: Optional[Coupon], item: Item) -> bool:
    return coupon is not None and coupon.valid_for_type(item.product_type()) and coupon.valid_for_product(item.product_sku())


def member_discount_applies(discount: MemberDiscount, claims: Optional[Mapping[str, Any]], item: Item) -> bool:
    return has_claims(claims, discount.claims) and discount.valid_for_type(item.product_type())
