"""Estimated shelf life of groceries, used to suggest expiration dates.

Lookups go from most to least specific: product name, then Open Food Facts
style categories (``"en:dairy"``), then generic storage words, then a
fixed default.
"""

from datetime import UTC, datetime, timedelta
from typing import NamedTuple

# Days from purchase under typical storage; opened where that applies
PRODUCT_SHELF_LIVES: dict[str, int] = {
    # Dairy
    "milk": 7,
    "whole milk": 7,
    "skim milk": 7,
    "2% milk": 7,
    "almond milk": 10,
    "oat milk": 10,
    "soy milk": 10,
    "yogurt": 14,
    "greek yogurt": 14,
    "butter": 90,
    "cream cheese": 21,
    "sour cream": 21,
    "heavy cream": 10,
    "cottage cheese": 10,
    "cheese": 30,
    "cheddar cheese": 30,
    "mozzarella": 21,
    "parmesan": 180,
    # Eggs
    "eggs": 28,
    "egg whites": 4,
    # Bread & bakery
    "bread": 7,
    "white bread": 7,
    "whole wheat bread": 7,
    "bagels": 5,
    "english muffins": 7,
    "tortillas": 14,
    "pita bread": 5,
    "croissants": 3,
    "muffins": 4,
    # Fruits
    "apples": 28,
    "oranges": 21,
    "bananas": 5,
    "grapes": 7,
    "strawberries": 5,
    "blueberries": 10,
    "raspberries": 3,
    "lemons": 21,
    "limes": 21,
    "avocado": 5,
    "avocados": 5,
    "peaches": 5,
    "pears": 7,
    "watermelon": 14,
    "cantaloupe": 7,
    "pineapple": 5,
    "mango": 5,
    "kiwi": 14,
    # Vegetables
    "lettuce": 7,
    "spinach": 5,
    "kale": 7,
    "arugula": 5,
    "carrots": 21,
    "celery": 14,
    "broccoli": 7,
    "cauliflower": 7,
    "bell peppers": 10,
    "peppers": 10,
    "tomatoes": 7,
    "cucumbers": 7,
    "zucchini": 7,
    "onions": 30,
    "garlic": 60,
    "potatoes": 21,
    "sweet potatoes": 21,
    "mushrooms": 7,
    "asparagus": 5,
    "green beans": 7,
    "corn": 5,
    "cabbage": 14,
    # Meat (raw)
    "chicken": 2,
    "chicken breast": 2,
    "chicken thighs": 2,
    "ground beef": 2,
    "beef": 3,
    "steak": 3,
    "pork": 3,
    "pork chops": 3,
    "bacon": 7,
    "sausage": 3,
    "turkey": 2,
    "ground turkey": 2,
    "lamb": 3,
    "ham": 5,
    "deli meat": 5,
    # Seafood (raw)
    "fish": 2,
    "salmon": 2,
    "tuna": 2,
    "shrimp": 2,
    "cod": 2,
    "tilapia": 2,
    "crab": 2,
    "lobster": 2,
    # Condiments & sauces
    "ketchup": 180,
    "mustard": 365,
    "mayonnaise": 60,
    "salsa": 14,
    "soy sauce": 365,
    "hot sauce": 365,
    "bbq sauce": 120,
    "ranch dressing": 60,
    "salad dressing": 60,
    "olive oil": 365,
    "vegetable oil": 365,
    # Dry goods
    "peanut butter": 90,
    "jelly": 30,
    "jam": 30,
    "honey": 365,
    "maple syrup": 365,
    "cereal": 180,
    "oatmeal": 180,
    "rice": 365,
    "pasta": 365,
    "flour": 180,
    "sugar": 730,
    "salt": 1825,
    "coffee": 30,
    "tea": 365,
    # Canned goods (opened)
    "canned beans": 4,
    "canned tomatoes": 5,
    "canned soup": 4,
    "canned tuna": 3,
    "canned vegetables": 4,
    "canned fruit": 7,
    # Frozen
    "frozen vegetables": 240,
    "frozen fruit": 240,
    "frozen pizza": 120,
    "ice cream": 60,
    "frozen meals": 90,
    # Beverages
    "juice": 7,
    "orange juice": 7,
    "apple juice": 7,
    "soda": 90,
    "sparkling water": 365,
}

CATEGORY_SHELF_LIVES: dict[str, int] = {
    # Dairy
    "dairy": 14,
    "milks": 7,
    "yogurts": 14,
    "cheeses": 30,
    "butters": 90,
    "creams": 10,
    "milk": 7,
    "yogurt": 14,
    "cheese": 30,
    "butter": 90,
    "cream": 10,
    # Eggs
    "eggs": 28,
    "egg-products": 7,
    # Bread & baked goods
    "breads": 7,
    "bread": 7,
    "baked-goods": 5,
    "bakery": 5,
    "pastries": 3,
    "cakes": 5,
    "cookies": 14,
    "biscuits": 14,
    # Fruits
    "fruits": 7,
    "fresh-fruits": 7,
    "berries": 5,
    "citrus-fruits": 21,
    "tropical-fruits": 5,
    "dried-fruits": 180,
    "fruit": 7,
    # Vegetables
    "vegetables": 10,
    "fresh-vegetables": 10,
    "leafy-vegetables": 5,
    "root-vegetables": 21,
    "frozen-vegetables": 240,
    "canned-vegetables": 730,
    "vegetable": 10,
    # Meat
    "meats": 3,
    "meat": 3,
    "poultry": 2,
    "beef": 3,
    "pork": 3,
    "lamb": 3,
    "processed-meats": 7,
    "deli": 5,
    "sausages": 5,
    "bacon": 7,
    "cold-cuts": 5,
    # Seafood
    "seafood": 2,
    "fish": 2,
    "shellfish": 2,
    "fresh-fish": 2,
    "smoked-fish": 14,
    "canned-fish": 730,
    "frozen-seafood": 180,
    # Beverages
    "beverages": 30,
    "juices": 7,
    "sodas": 90,
    "waters": 365,
    "alcoholic-beverages": 365,
    "coffee": 30,
    "tea": 365,
    "juice": 7,
    "soda": 90,
    # Condiments
    "condiments": 90,
    "sauces": 30,
    "dressings": 60,
    "oils": 365,
    "vinegars": 730,
    "spices": 730,
    "herbs": 365,
    "sauce": 30,
    "dressing": 60,
    "oil": 365,
    # Snacks
    "snacks": 60,
    "chips": 60,
    "crackers": 90,
    "nuts": 180,
    "dried-snacks": 180,
    "candy": 365,
    "chocolate": 365,
    # Grains & pasta
    "grains": 365,
    "pasta": 365,
    "rice": 365,
    "cereals": 180,
    "flour": 180,
    "noodles": 365,
    "grain": 365,
    "cereal": 180,
    # Canned & preserved
    "canned-foods": 730,
    "canned": 730,
    "preserved": 365,
    "pickles": 365,
    "jams": 365,
    "spreads": 90,
    # Frozen
    "frozen": 180,
    "frozen-foods": 180,
    "frozen-meals": 90,
    "ice-cream": 60,
    "frozen-desserts": 60,
    # Baby food
    "baby-foods": 3,
    "baby-food": 3,
    "infant-formula": 30,
    # Pet food
    "pet-food": 30,
    "dog-food": 30,
    "cat-food": 30,
}

GENERIC_CATEGORY_FALLBACKS: dict[str, int] = {
    "fresh": 7,
    "refrigerated": 14,
    "frozen": 180,
    "canned": 730,
    "dried": 365,
    "pantry": 180,
    "packaged": 90,
}

DEFAULT_SHELF_LIFE = 14


class ShelfLife(NamedTuple):
    days: int
    source: str  # "product" | "category" | "generic" | "default"


def normalize(value: str) -> str:
    return " ".join(value.lower().split())


def category_name(category: str) -> str:
    """Strip a language prefix: ``"en:dairy"`` -> ``"dairy"``."""
    parts = category.split(":")
    return parts[1] if len(parts) > 1 else parts[0]


def _match(name: str, table: dict[str, int]) -> int | None:
    if name in table:
        return table[name]
    for key, days in table.items():
        if key in name or name in key:
            return days
    return None


def shelf_life_by_name(product_name: str) -> int | None:
    """Days for a product name: exact match first, then partial."""
    name = normalize(product_name)
    if not name:
        return None
    return _match(name, PRODUCT_SHELF_LIVES)


def shelf_life_by_categories(categories: list[str]) -> ShelfLife | None:
    names = [normalize(category_name(c)) for c in categories]
    names = [n for n in names if n]

    for name in names:
        days = _match(name, CATEGORY_SHELF_LIVES)
        if days is not None:
            return ShelfLife(days, "category")

    for name in names:
        for generic, days in GENERIC_CATEGORY_FALLBACKS.items():
            if generic in name:
                return ShelfLife(days, "generic")
    return None


def estimate_shelf_life(
    product_name: str | None = None,
    categories: list[str] | None = None,
) -> ShelfLife:
    """Best shelf-life estimate for a product, never None."""
    if product_name:
        days = shelf_life_by_name(product_name)
        if days is not None:
            return ShelfLife(days, "product")
    if categories:
        match = shelf_life_by_categories(categories)
        if match is not None:
            return match
    return ShelfLife(DEFAULT_SHELF_LIFE, "default")


def suggested_expiration_date(
    product_name: str | None = None,
    categories: list[str] | None = None,
    now: datetime | None = None,
) -> datetime:
    now = now or datetime.now(UTC)
    return now + timedelta(days=estimate_shelf_life(product_name, categories).days)
