"""Meal plan post-processing: grocery split, ASIN extraction, cart links."""

from mealplanner.planner.catalog import APPROVED_PANTRY, STARTER_CART_ITEMS
from mealplanner.planner.grocery import (
    CartItem,
    PlanSections,
    amazon_cart_url,
    build_cart,
    parse_cart_items,
    split_grocery_list,
)

__all__ = [
    "APPROVED_PANTRY",
    "CartItem",
    "PlanSections",
    "STARTER_CART_ITEMS",
    "amazon_cart_url",
    "build_cart",
    "parse_cart_items",
    "split_grocery_list",
]
