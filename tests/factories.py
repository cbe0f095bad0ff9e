from pricing_service.schemas import CouponSpec, FixedAmount, LineItem


def make_item(sku="sku-1", price=1000, type="book", vat=0, quantity=1, items=None):
    return LineItem(sku=sku, price=price, type=type, vat=vat, quantity=quantity, items=items)


def make_fixed(amounts):
    return [FixedAmount(amount=amount, currency=currency) for currency, amount in amounts.items()] or None


def make_coupon(percentage=0, fixed=None, minimum=None, **kwargs):
    return CouponSpec(
        code="SAVE",
        percentage=percentage,
        fixed=make_fixed(fixed or {}),
        minimum=make_fixed(minimum or {}),
        **kwargs,
    )
