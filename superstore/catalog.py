"""Static lookup tables: known menu items, staff roster, category keywords."""

from __future__ import annotations

from dataclasses import dataclass, replace

# Menu sections as they appear on the paper waste/production sheets
DEFAULT_SECTIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("breakfast", (
        "Bacon", "Stuffed Waffles", "Little Pigs in a Blanket",
        "Big Pigs in a Blanket", "Kolache", "Boudin",
    )),
    ("roller", (
        "Egg Rolls", "Tornados", "Chicken Stick", "Corn Dog",
        "Hot Dog", "Sausage", "Crispitos",
    )),
    ("deli", (
        "Hamburger", "Pulled Pork", "Brisket",
        "Country Fried Steak", "Pork Chop", "Steak",
    )),
    ("bakery", (
        "Cinnamon Rolls", "Large Cookies", "Small Cookies",
        "Muffins", "Brownies", "Danishes", "Donuts",
    )),
    ("branded", (
        "Pizza", "Pizza Whole", "Pizza Hunk", "Wings", "Bites",
    )),
)

# Order matters: OCR matching keeps the first of equally scored names.
DEFAULT_KNOWN_ITEMS: tuple[str, ...] = (
    # Breakfast
    "Bacon", "Stuffed Waffles", "Little Pigs in a Blanket",
    "Big Pigs in a Blanket", "Kolache", "Boudin",
    # Roller
    "Egg Rolls", "Tornados", "Chicken Stick", "Corn Dog",
    "Hot Dog", "Sausage", "Crispitos",
    # Deli
    "Hamburger", "Pulled Pork", "Brisket",
    "Country Fried Steak", "Pork Chop", "Steak",
    # Bakery
    "Cinnamon Rolls", "Large Cookies", "Small Cookies",
    "Muffins", "Brownies", "Danishes", "Donuts",
    # Branded
    "Pizza", "Pizza Whole", "Pizza Hunk", "Wings",
    "Chicken Wings", "Bites",
)

DEFAULT_EMPLOYEES: tuple[str, ...] = (
    "Shaun Dubuisson",
    "Sarah Williams",
    "David Chen",
    "Emily Rodriguez",
    "James Thompson",
)

# Keyword -> inventory category, scanned in order
DEFAULT_CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Protein", ("chicken", "wing", "tender", "breast", "nugget")),
    ("Protein", ("pizza", "slice")),
    ("Sides", ("wedge", "potato", "fry", "fries")),
    ("Protein", ("corn", "dog")),
    ("Protein", ("hot dog", "sausage", "frank")),
    ("Protein", ("taquito", "burrito")),
    ("Protein", ("egg", "roll")),
    ("Bread", ("sandwich", "sub")),
    ("Sides", ("salad", "coleslaw")),
    ("Bread", ("wrap",)),
    ("Bread", ("donut", "doughnut", "pastry")),
    ("Bread", ("muffin", "cookie")),
    ("Dairy", ("cheese", "milk", "cream")),
    ("Sauces", ("sauce", "bbq", "ranch", "mayo", "mustard", "ketchup")),
    ("Toppings", ("lettuce", "tomato", "onion", "pickle", "jalapeno", "pepper")),
)

DEFAULT_CATEGORY = "Protein"

INVENTORY_CATEGORIES: tuple[str, ...] = (
    "Protein", "Sides", "Bread", "Dairy", "Toppings", "Sauces",
)


def categorize_item(
    name: str,
    category_keywords: tuple[tuple[str, tuple[str, ...]], ...] = DEFAULT_CATEGORY_KEYWORDS,
) -> str:
    """Guess an inventory category from an item name using keyword matching."""
    lower = name.lower()
    for category, keywords in category_keywords:
        for keyword in keywords:
            if keyword in lower:
                return category
    return DEFAULT_CATEGORY


@dataclass(frozen=True)
class Catalog:
    """Immutable bundle of the lookup tables the OCR and upload code match against."""

    items: tuple[str, ...] = DEFAULT_KNOWN_ITEMS
    employees: tuple[str, ...] = DEFAULT_EMPLOYEES
    category_keywords: tuple[tuple[str, tuple[str, ...]], ...] = DEFAULT_CATEGORY_KEYWORDS
    sections: tuple[tuple[str, tuple[str, ...]], ...] = DEFAULT_SECTIONS

    def with_items(self, names: list[str] | tuple[str, ...]) -> Catalog:
        return replace(self, items=tuple(names))

    def with_employees(self, names: list[str] | tuple[str, ...]) -> Catalog:
        return replace(self, employees=tuple(names))

    def categorize(self, name: str) -> str:
        return categorize_item(name, self.category_keywords)

    def section_for(self, item_name: str) -> str:
        """Return the menu section listing ``item_name``, or "" if none does."""
        for section, names in self.sections:
            if item_name in names:
                return section
        return ""


DEFAULT_CATALOG = Catalog()
