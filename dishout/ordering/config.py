from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PhonePlan:
    """UAE numbering: mobiles are 5x + 8 digits, Dubai landlines 4 + 7 digits."""

    calling_code: str = "971"
    mobile_prefixes: tuple[str, ...] = ("5",)
    mobile_digits: int = 9
    landline_prefixes: tuple[str, ...] = ("4",)
    landline_digits: int = 8
    min_usable_length: int = 5


@dataclass(frozen=True)
class OrderConfig:
    app_name: str = "DishOut"
    deep_link_base: str = "https://wa.me"
    unknown_dish: str = "Unknown Dish"
    unknown_restaurant: str = "Unknown Restaurant"
    default_region: str = "UAE"


DEFAULT_PHONE_PLAN = PhonePlan()
DEFAULT_ORDER_CONFIG = OrderConfig()
