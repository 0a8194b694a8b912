"""Turn an assistant meal plan into plan text, grocery text and a cart link."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Any
from urllib.parse import urlencode

AMAZON_CART_URL = "https://www.amazon.com/gp/aws/cart/add.html"

# A heading line such as "Grocery List:", "## Shopping list", "**Ingredients -**"
_GROCERY_HEADING = re.compile(
    r"^[ \t#*_]*(grocery list|shopping list|ingredients)[ \t]*[:\-]?[ \t*_\r]*$",
    re.IGNORECASE | re.MULTILINE,
)

# Uppercase ASIN containing a digit, optionally followed later on the same line
# by "x2", "qty: 3", "quantity 4" as long as no other ASIN comes first
_ASIN_CODE = r"\b(?:B0[0-9A-Z]{8}|B(?=[A-Z]*[0-9])[0-9A-Z]{9})\b"
_ASIN = re.compile(
    rf"({_ASIN_CODE})"
    rf"(?:(?:(?!{_ASIN_CODE})[^\n\r])*?\b(?i:x|qty|quantity)\s*:?\s*(\d+))?"
)


@dataclass(frozen=True)
class CartItem:
    asin: str
    qty: int = 1


@dataclass(frozen=True)
class PlanSections:
    plan: str
    grocery: str


def split_grocery_list(text: str) -> PlanSections:
    """Split at the first grocery heading line.

    Everything before the heading is the plan; the heading and everything
    after it is the grocery list. Without a heading the grocery part is "".
    """
    text = text or ""
    match = _GROCERY_HEADING.search(text)
    if not match:
        return PlanSections(plan=text.strip(), grocery="")
    return PlanSections(plan=text[: match.start()].strip(), grocery=text[match.start() :].strip())


def parse_cart_items(text: str) -> list[CartItem]:
    """ASINs mentioned in ``text`` with summed quantities (default 1)."""
    counts: dict[str, int] = {}
    for match in _ASIN.finditer(text or ""):
        asin = match.group(1)
        qty = int(match.group(2)) if match.group(2) else 1
        counts[asin] = counts.get(asin, 0) + qty
    return [CartItem(asin, qty) for asin, qty in counts.items()]


def amazon_cart_url(items: Iterable[CartItem], tag: str = "") -> str:
    params: list[tuple[str, str]] = []
    for n, item in enumerate((i for i in items if i.asin), start=1):
        params.append((f"ASIN.{n}", item.asin))
        params.append((f"Quantity.{n}", str(item.qty or 1)))
    if tag:
        params.append(("tag", tag))
    return f"{AMAZON_CART_URL}?{urlencode(params)}"


def build_cart(text: str, tag: str = "", fallback: Iterable[CartItem] = ()) -> dict[str, Any]:
    """Everything the UI renders for one plan.

    Items come from the grocery section, else from the plan text, else
    ``fallback``.
    """
    sections = split_grocery_list(text)
    items = parse_cart_items(sections.grocery or sections.plan)
    if not items:
        items = list(fallback)
    return {
        "plan": sections.plan,
        "grocery": sections.grocery,
        "items": [asdict(i) for i in items],
        "cart_url": amazon_cart_url(items, tag),
    }
