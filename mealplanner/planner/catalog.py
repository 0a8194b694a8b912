"""Default shopping catalog.

STARTER_CART_ITEMS fills the cart link when a plan names no ASINs.
APPROVED_PANTRY is the ingredient list shown next to the planner form.
"""

from __future__ import annotations

from mealplanner.planner.grocery import CartItem

STARTER_CART_ITEMS: tuple[CartItem, ...] = (
    CartItem("B07CVZRZTC", 1),
    CartItem("B08QYH3V7T", 1),
    CartItem("B085RXTP7V", 1),
    CartItem("B000VDV1UO", 6),
    CartItem("B01EJABASW", 2),
    CartItem("B0FBZHW4MB", 1),
    CartItem("B001XUPH6I", 1),
    CartItem("B00CMQD3TA", 1),
    CartItem("B004SQRNG6", 2),
    CartItem("B00N7JY5WK", 1),
    CartItem("B074H4SHGV", 2),
    CartItem("B07XW1TNXZ", 1),
    CartItem("B008U5OSTQ", 2),
)

APPROVED_PANTRY: dict[str, list[str]] = {
    "Proteins": [
        "Pre-cooked grilled chicken strips (Amazon Fresh refrigerated)",
        "Egg Beaters (ASIN B004SQRNG6)",
        "Greek yogurt, large tub (e.g., Chobani 32 oz, ASIN B008U5OSTQ)",
        "Whey protein powder (e.g., ON Whey 2 lb, ASIN B085RXTP7V)",
        "Black beans (e.g., Goya, ASIN B000VDV1UO)",
    ],
    "Carbs / Starches": [
        "Microwavable rice cups",
        "Brown rice (Lundberg, ASIN B00N7JY5WK)",
        "Whole grain pasta (Barilla, ASIN B01EJABASW)",
        "Russet potatoes (ASIN B07XW1TNXZ)",
        "Oats (Quaker, ASIN B07CVZRZTC)",
    ],
    "Veggies & Fruits": [
        "Frozen broccoli (365, ASIN B074H4SHGV)",
        "Frozen mixed / stir-fry vegetables",
        "Pre-washed greens",
        "Frozen berries",
        "Bananas / apples / pineapple cups",
    ],
    "Sauces & Misc": [
        "Marinara (Rao's, ASIN B0FBZHW4MB)",
        "Honey (Nature Nate's, ASIN B00CMQD3TA)",
        "Salsa",
        "Olive oil spray",
        "Seasoning blends",
    ],
    "Snacks / Drinks": [
        "Almonds (Blue Diamond, ASIN B001XUPH6I)",
        "Greek yogurt cups",
        "Almond milk (Almond Breeze, ASIN B08QYH3V7T)",
    ],
}
