from pydantic import BaseModel, Field, conint
from typing import Any, Dict, List, Optional

from .money import parse_fixed_amount


def _allowed(allow_list: Optional[List[str]], value: str) -> bool:
    # An empty or missing allow-list accepts everything
    if not allow_list:
        return True
    return value in allow_list


def _fixed_for_currency(entries: Optional[List["FixedAmount"]], currency: str) -> int:
    for entry in entries or []:
        if entry.currency == currency:
            return parse_fixed_amount(entry.amount)
    return 0


# --- Site settings (loaded from JSON) ---

class Tax(BaseModel):
    percentage: conint(ge=0) = 0
    product_types: Optional[List[str]] = None
    countries: Optional[List[str]] = None

    def applies_to(self, country: str, product_type: str) -> bool:
        """Whether the tax applies to the country AND the product type."""
        return _allowed(self.product_types, product_type) and _allowed(self.countries, country)


class FixedAmount(BaseModel):
    amount: str  # Decimal string, e.g. "4.99"
    currency: str


class MemberDiscount(BaseModel):
    claims: Dict[str, str] = Field(default_factory=dict)
    percentage: conint(ge=0) = 0
    fixed: Optional[List[FixedAmount]] = None
    product_types: Optional[List[str]] = None
    products: Optional[List[str]] = None

    def valid_for_type(self, product_type: str) -> bool:
        return _allowed(self.product_types, product_type)

    def valid_for_product(self, product_sku: str) -> bool:
        return _allowed(self.products, product_sku)

    def fixed_discount(self, currency: str) -> int:
        """Fixed discount in minor units for the currency, 0 when none is configured."""
        return _fixed_for_currency(self.fixed, currency)


class Settings(BaseModel):
    prices_include_taxes: bool = False
    taxes: List[Tax] = Field(default_factory=list)
    member_discounts: List[MemberDiscount] = Field(default_factory=list)


# --- Calculation results ---

class ItemPrice(BaseModel):
    quantity: conint(ge=0) = 0
    subtotal: conint(ge=0) = 0
    discount: conint(ge=0) = 0
    taxes: conint(ge=0) = 0
    total: conint(ge=0) = 0


class Price(BaseModel):
    items: List[ItemPrice] = Field(default_factory=list)
    subtotal: conint(ge=0) = 0
    discount: conint(ge=0) = 0
    taxes: conint(ge=0) = 0
    total: conint(ge=0) = 0


# --- Request payloads ---
# These implement the Item and Coupon capabilities from interfaces.py

class LineItem(BaseModel):
    sku: str
    price: conint(ge=0)  # Unit price in the smallest currency unit
    type: str = ""
    vat: conint(ge=0) = 0  # Fixed VAT override percentage, 0 = use site taxes
    quantity: conint(gt=0) = 1
    items: Optional[List["LineItem"]] = None  # Bundle contents taxed separately

    def product_sku(self) -> str:
        return self.sku

    def price_in_lowest_unit(self) -> int:
        return self.price

    def product_type(self) -> str:
        return self.type

    def fixed_vat(self) -> int:
        return self.vat

    def taxable_items(self) -> List["LineItem"]:
        return self.items or []

    def get_quantity(self) -> int:
        return self.quantity


class CouponSpec(BaseModel):
    code: str
    percentage: conint(ge=0) = 0
    fixed: Optional[List[FixedAmount]] = None
    minimum: Optional[List[FixedAmount]] = None  # Minimum order amount per currency
    product_types: Optional[List[str]] = None
    products: Optional[List[str]] = None

    def valid_for_type(self, product_type: str) -> bool:
        return _allowed(self.product_types, product_type)

    def valid_for_price(self, currency: str, price: int) -> bool:
        for entry in self.minimum or []:
            if entry.currency == currency:
                return price >= parse_fixed_amount(entry.amount)
        return True

    def valid_for_product(self, product_sku: str) -> bool:
        return _allowed(self.products, product_sku)

    def percentage_discount(self) -> int:
        return self.percentage

    def fixed_discount(self, currency: str) -> int:
        return _fixed_for_currency(self.fixed, currency)


class PriceCalculationRequest(BaseModel):
    order_id: str  # For correlation/logging
    country: str = ""
    currency: str = "USD"
    claims: Optional[Dict[str, Any]] = None  # Authenticated user's claims, absent for guests
    coupon: Optional[CouponSpec] = None
    items: List[LineItem] = Field(..., min_length=1)


class PriceCalculationResponse(BaseModel):
    order_id: str
    currency: str
    price: Price
