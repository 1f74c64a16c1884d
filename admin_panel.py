"""
Admin panel state: login flag, product CRUD with its edit form, hero editor,
backup export and the wipe of all data.

Every mutating action writes the whole collection back to the store before
returning.
"""
import json
import logging
import math
from datetime import datetime, timezone

from catalog import (
    Category, HeroContent, InvalidProduct, Product, ProductNotFound,
)
from storage import (
    clear_catalog, is_admin_authenticated, load_hero, load_products,
    save_hero, save_products, set_admin_authenticated,
)

logger = logging.getLogger(__name__)

ADMIN_PASSWORD = "akron2024"
EXPORT_FILENAME = "akron-backup.json"


def _parse_number(value):
    """Form value -> float, or None for blanks and garbage."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).replace(",", ".").strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


class ProductForm:
    """
    A product being created or edited.

    Image and colour lists may hold blank slots while editing; they are
    dropped when the form is turned into a Product.
    """

    def __init__(self, id=None, name="", price="", original_price="", images=None,
                 category=Category.NEW, sizes=None, colors=None, description="",
                 featured=False):
        self.id = id
        self.name = name
        self.price = price
        self.original_price = original_price
        self.images = list(images) if images is not None else [""]
        self.category = Category(category)
        self.sizes = list(sizes) if sizes is not None else []
        self.colors = list(colors) if colors is not None else [""]
        self.description = description
        self.featured = featured

    @classmethod
    def blank(cls):
        return cls()

    @classmethod
    def from_product(cls, product):
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            original_price=product.original_price if product.original_price is not None else "",
            images=product.images or [""],
            category=product.category,
            sizes=product.sizes,
            colors=product.colors,
            description=product.description,
            featured=product.featured,
        )

    @property
    def is_new(self) -> bool:
        return self.id is None

    def add_image(self):
        self.images.append("")

    def remove_image(self, index):
        if 0 <= index < len(self.images):
            del self.images[index]

    def add_color(self):
        self.colors.append("")

    def remove_color(self, index):
        if 0 <= index < len(self.colors):
            del self.colors[index]

    def toggle_size(self, size):
        if not size:
            return
        if size in self.sizes:
            self.sizes.remove(size)
        else:
            self.sizes.append(size)

    def to_product(self, product_id) -> Product:
        price = _parse_number(self.price)
        if not (self.name or "").strip() or not price or price < 0:
            raise InvalidProduct("Nome e preço são obrigatórios!")

        return Product(
            id=product_id,
            name=self.name,
            price=price,
            # zero or unreadable original price means no discount
            original_price=_parse_number(self.original_price) or None,
            images=[img for img in self.images if img.strip()],
            category=self.category,
            sizes=list(self.sizes),
            colors=[color for color in self.colors if color.strip()],
            description=self.description or "",
            featured=bool(self.featured),
        )


class AdminPanel:
    def __init__(self, store, auth_store=None, password=ADMIN_PASSWORD, clock=datetime.now):
        self.store = store
        self.auth_store = auth_store if auth_store is not None else store
        self.password = password
        self.clock = clock

        self.products = []
        self.hero = HeroContent()
        self.form = ProductForm.blank()
        self.form_open = False

    def load(self):
        products = load_products(self.store)
        self.products = products if products is not None else []

        hero = load_hero(self.store)
        self.hero = hero if hero is not None else HeroContent()
        return self

    # ----------------------------
    # AUTH
    # ----------------------------
    @property
    def is_authenticated(self) -> bool:
        return is_admin_authenticated(self.auth_store)

    def login(self, password) -> bool:
        if password != self.password:
            logger.info("Admin login rejected")
            return False
        set_admin_authenticated(self.auth_store, True)
        return True

    def logout(self):
        set_admin_authenticated(self.auth_store, False)

    # ----------------------------
    # PRODUCTS
    # ----------------------------
    def get_product(self, product_id):
        for product in self.products:
            if product.id == product_id:
                return product
        raise ProductNotFound(product_id)

    def new_product(self):
        self.form = ProductForm.blank()
        self.form_open = True

    def edit_product(self, product_id):
        self.form = ProductForm.from_product(self.get_product(product_id))
        self.form_open = True

    def close_form(self):
        self.form = ProductForm.blank()
        self.form_open = False

    def save_product(self) -> Product:
        """Create or update from the open form. Raises InvalidProduct."""
        form = self.form
        product_id = form.id if not form.is_new else self._generate_id()
        product = form.to_product(product_id)

        if form.is_new:
            updated = self.products + [product]
        else:
            updated = [product if p.id == product.id else p for p in self.products]

        save_products(self.store, updated)
        self.products = updated
        self.close_form()
        return product

    def delete_product(self, product_id, confirmed=False) -> bool:
        if not confirmed:
            return False
        updated = [p for p in self.products if p.id != product_id]
        save_products(self.store, updated)
        self.products = updated
        return True

    def _generate_id(self) -> str:
        taken = {p.id for p in self.products}
        stamp = int(self.clock().timestamp() * 1000)
        while str(stamp) in taken:
            stamp += 1
        return str(stamp)

    def stats(self) -> dict:
        return {
            "total": len(self.products),
            "featured": sum(1 for p in self.products if p.featured),
            "new": sum(1 for p in self.products if p.category == Category.NEW),
            "promo": sum(1 for p in self.products if p.category == Category.PROMO),
        }

    # ----------------------------
    # HERO
    # ----------------------------
    def save_hero(self, title, subtitle, image, logo):
        hero = HeroContent(title=title, subtitle=subtitle, image=image, logo=logo)
        save_hero(self.store, hero)
        self.hero = hero
        return hero

    # ----------------------------
    # SYSTEM
    # ----------------------------
    def export_data(self) -> dict:
        return {
            "products": [p.to_dict() for p in self.products],
            "heroContent": self.hero.to_dict(),
            "exportDate": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }

    def export_json(self) -> str:
        return json.dumps(self.export_data(), indent=2, ensure_ascii=False)

    def clear_all(self, confirmed=False) -> bool:
        if not confirmed:
            return False
        clear_catalog(self.store)
        self.products = []
        self.hero = HeroContent()
        self.close_form()
        return True
