"""
Built-in reference data used when no rules file supplies its own.
"""

from .models import Category

FALLBACK_CATEGORY_NAME = "Discretionary"

# Lowercase brand names recognized inside receipt header lines.
# More specific names come before names they contain (exxon before mobil).
DEFAULT_KNOWN_MERCHANTS = (
    "walmart",
    "target",
    "costco",
    "kroger",
    "safeway",
    "whole foods",
    "trader joe's",
    "aldi",
    "publix",
    "albertsons",
    "walgreens",
    "cvs",
    "rite aid",
    "home depot",
    "lowe's",
    "best buy",
    "ikea",
    "starbucks",
    "mcdonald's",
    "burger king",
    "wendy's",
    "taco bell",
    "chipotle",
    "subway",
    "dunkin",
    "panera",
    "chick-fil-a",
    "shell",
    "chevron",
    "exxon",
    "mobil",
    "speedway",
    "circle k",
)

DEFAULT_CATEGORIES = (
    Category(
        id="groceries",
        name="Groceries",
        keywords=("walmart", "kroger", "safeway", "whole foods", "trader joe's",
                  "aldi", "publix", "albertsons", "costco", "grocery", "market",
                  "supermarket", "produce"),
        icon="🛒",
        color="#22c55e",
    ),
    Category(
        id="dining",
        name="Dining",
        keywords=("starbucks", "mcdonald's", "burger king", "wendy's", "taco bell",
                  "chipotle", "subway", "dunkin", "panera", "chick-fil-a",
                  "restaurant", "cafe", "coffee", "pizza", "grill", "diner"),
        icon="🍽️",
        color="#f97316",
    ),
    Category(
        id="transportation",
        name="Transportation",
        keywords=("shell", "chevron", "exxon", "mobil", "speedway", "circle k",
                  "gas station", "fuel", "uber", "lyft", "parking", "transit"),
        icon="🚗",
        color="#3b82f6",
    ),
    Category(
        id="health",
        name="Health",
        keywords=("walgreens", "cvs", "rite aid", "pharmacy", "clinic",
                  "dental", "medical"),
        icon="💊",
        color="#ef4444",
    ),
    Category(
        id="home",
        name="Home",
        keywords=("home depot", "lowe's", "ikea", "hardware", "furniture"),
        icon="🏠",
        color="#a855f7",
    ),
    Category(
        id="shopping",
        name="Shopping",
        keywords=("target", "best buy", "amazon", "electronics", "clothing",
                  "apparel", "department store"),
        icon="🛍️",
        color="#ec4899",
    ),
    Category(
        id="utilities",
        name="Utilities",
        keywords=("electric", "water bill", "internet", "phone bill", "utility"),
        icon="💡",
        color="#eab308",
    ),
    Category(
        id="discretionary",
        name=FALLBACK_CATEGORY_NAME,
        keywords=(),
        icon="✨",
        color="#6b7280",
    ),
)
