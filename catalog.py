"""
Catalog data model and the pure rules the shop applies to it:
discount math, price formatting, category badges and the catalog filter.

Products and the hero banner are pydantic models so that whatever sits in
the store (or in an exported backup) is validated on the way in.
"""
import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ----------------------------
# ERRORS
# ----------------------------
class StoreError(Exception):
    """Base class for errors raised by the shop's own rules."""


class ProductNotFound(StoreError):
    def __init__(self, product_id):
        super().__init__(f"Produto não encontrado: {product_id}")
        self.product_id = product_id


class InvalidProduct(StoreError):
    pass


class SelectionIncomplete(StoreError):
    pass


# ----------------------------
# CATEGORIES
# ----------------------------
class Category(str, Enum):
    # stored values are the ones the first storefront wrote to local storage
    NEW = "novo"
    LIMITED = "limitada"
    PROMO = "promocao"


ALL_CATEGORIES = "all"

CATEGORY_BADGES = {
    Category.NEW: {"text": "NOVO", "variant": "default"},
    Category.LIMITED: {"text": "LIMITADA", "variant": "destructive"},
    Category.PROMO: {"text": "PROMOÇÃO", "variant": "secondary"},
}

CATEGORY_LABELS = {
    Category.NEW: "Novo",
    Category.LIMITED: "Edição Limitada",
    Category.PROMO: "Promoção",
}

# sizes offered by the admin form, in display order
SIZE_OPTIONS = ["P", "M", "G", "GG", "XG"]


def category_badge(category):
    return CATEGORY_BADGES[Category(category)]


def parse_category(value):
    """Map a query-string value to a Category, or ALL_CATEGORIES when unknown."""
    if not value or value == ALL_CATEGORIES:
        return ALL_CATEGORIES
    try:
        return Category(value)
    except ValueError:
        return ALL_CATEGORIES


# ----------------------------
# MODELS
# ----------------------------
class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    price: float
    original_price: Optional[float] = Field(default=None, alias="originalPrice")
    images: List[str] = []
    category: Category = Category.NEW
    sizes: List[str] = []
    colors: List[str] = []
    description: str = ""
    featured: bool = False

    @property
    def primary_image(self):
        return self.images[0] if self.images else None

    @property
    def discount(self) -> int:
        return calculate_discount(self.price, self.original_price)

    def to_dict(self) -> dict:
        # originalPrice is left out entirely when unset, like the stored JSON
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


DEFAULT_HERO = {
    "title": "AKRON",
    "subtitle": "Camisetas Oversized para Treino e Lifestyle",
    "image": "/placeholder-nji2c.png",
    "logo": "/akron-logo-oficial.png",
}


class HeroContent(BaseModel):
    title: str = DEFAULT_HERO["title"]
    subtitle: str = DEFAULT_HERO["subtitle"]
    image: str = DEFAULT_HERO["image"]
    logo: str = DEFAULT_HERO["logo"]

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")


# ----------------------------
# PRICING
# ----------------------------
def calculate_discount(price: float, original_price: Optional[float] = None) -> int:
    """
    Whole-number discount percentage of `price` against `original_price`.

    No original price, or one that is not above the selling price, means
    no discount (0). Halves round up.
    """
    if not original_price or original_price <= price:
        return 0
    return int(math.floor((1 - price / original_price) * 100 + 0.5))


def format_price(value: float) -> str:
    """89.9 -> 'R$ 89,90'"""
    return "R$ " + f"{value:.2f}".replace(".", ",")


# ----------------------------
# FILTERING
# ----------------------------
def filter_products(products, category=ALL_CATEGORIES, search: str = "") -> List[Product]:
    """
    Visible subset of the catalog for a category selector and a search term.

    Both filters must match when both are active. The search term is matched
    case-insensitively against name and description.
    """
    selected = list(products)

    if category != ALL_CATEGORIES:
        wanted = Category(category)
        selected = [p for p in selected if p.category == wanted]

    if search:
        term = search.lower()
        selected = [
            p for p in selected
            if term in p.name.lower() or term in p.description.lower()
        ]

    return selected


def featured_products(products) -> List[Product]:
    return [p for p in products if p.featured]
