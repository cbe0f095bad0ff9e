from typing import List, Protocol


class Item(Protocol):
    """A single line item as seen by the price calculation."""

    def product_sku(self) -> str: ...

    def price_in_lowest_unit(self) -> int: ...

    def product_type(self) -> str: ...

    def fixed_vat(self) -> int: ...

    # Non-empty for bundles whose parts are taxed at their own rates
    def taxable_items(self) -> List["Item"]: ...

    def get_quantity(self) -> int: ...


class Coupon(Protocol):
    """A redeemed coupon; how it is stored and looked up is up to the caller."""

    def valid_for_type(self, product_type: str) -> bool: ...

    def valid_for_price(self, currency: str, price: int) -> bool: ...

    def valid_for_product(self, product_sku: str) -> bool: ...

    def percentage_discount(self) -> int: ...

    def fixed_discount(self, currency: str) -> int: ...
