"""
Public storefront state: catalog view, product selection and the forms that
end in a WhatsApp message.
"""
import math
from datetime import datetime

from catalog import (
    ALL_CATEGORIES, HeroContent, SelectionIncomplete,
    featured_products, filter_products,
)
from product_catalogs import seed_products
from storage import load_hero, load_products
from whatsapp import (
    WHATSAPP_NUMBER, business_hours_status, contact_message, general_message,
    is_business_hours, newsletter_message, product_message, whatsapp_link,
)

CLOSED = "closed"
AWAITING_SELECTION = "awaiting-selection"


class ImageViewer:
    """Gallery position and zoom of the product being looked at."""

    MIN_ZOOM = 0.5
    MAX_ZOOM = 3.0
    ZOOM_STEP = 0.5

    def __init__(self):
        self.index = 0
        self.zoom = 1.0
        self.image_count = 0

    def open(self, product):
        self.image_count = len(product.images)
        self.index = 0
        self.zoom = 1.0

    def select(self, index):
        self.index = max(0, min(index, self.image_count - 1))

    def zoom_in(self):
        self.zoom = min(self.zoom + self.ZOOM_STEP, self.MAX_ZOOM)

    def zoom_out(self):
        self.zoom = max(self.zoom - self.ZOOM_STEP, self.MIN_ZOOM)

    def reset_zoom(self):
        self.zoom = 1.0

    def set_zoom(self, value):
        if not math.isfinite(value):
            value = 1.0
        value = max(self.MIN_ZOOM, min(value, self.MAX_ZOOM))
        self.zoom = round(value / self.ZOOM_STEP) * self.ZOOM_STEP


class SelectionFlow:
    """
    Colour/size choice before a purchase message is composed.

    `compose(product, color, size)` builds the deep link once the choice is
    complete. Products with a single colour and size skip the choice.
    """

    def __init__(self, compose):
        self.compose = compose
        self.state = CLOSED
        self.product = None
        self.color = ""
        self.size = ""

    def open(self, product, seed=True):
        self.state = AWAITING_SELECTION
        self.product = product
        self.color = product.colors[0] if seed and product.colors else ""
        self.size = product.sizes[0] if seed and product.sizes else ""

    def buy(self, product):
        if len(product.colors) > 1 or len(product.sizes) > 1:
            self.open(product)
            return None
        color = product.colors[0] if product.colors else None
        size = product.sizes[0] if product.sizes else None
        return self.compose(product, color, size)

    def choose_color(self, color):
        if color and color not in self.product.colors:
            raise ValueError(f"Cor indisponível: {color}")
        self.color = color

    def choose_size(self, size):
        if size and size not in self.product.sizes:
            raise ValueError(f"Tamanho indisponível: {size}")
        self.size = size

    @property
    def can_finalize(self) -> bool:
        return self.state == AWAITING_SELECTION and bool(self.color) and bool(self.size)

    @property
    def purchase_label(self) -> str:
        if self.can_finalize:
            return "Comprar via WhatsApp"
        return "Selecione Cor e Tamanho"

    def finalize(self):
        if not self.can_finalize:
            raise SelectionIncomplete("Selecione Cor e Tamanho")
        link = self.compose(self.product, self.color, self.size)
        self.dismiss()
        return link

    def dismiss(self):
        self.state = CLOSED
        self.product = None
        self.color = ""
        self.size = ""


class CatalogStore:
    def __init__(self, store, clock=datetime.now, whatsapp_number=WHATSAPP_NUMBER):
        self.store = store
        self.clock = clock
        self.whatsapp_number = whatsapp_number

        self.products = []
        self.hero = HeroContent()
        self.category = ALL_CATEGORIES
        self.search = ""

        self.selection = SelectionFlow(self.product_link)
        self.viewer = ImageViewer()

        self.contact_form = {"name": "", "email": "", "message": ""}
        self.newsletter_email = ""

    def load(self):
        products = load_products(self.store)
        self.products = products if products is not None else seed_products()

        hero = load_hero(self.store)
        self.hero = hero if hero is not None else HeroContent()
        return self

    # ----------------------------
    # CATALOG
    # ----------------------------
    @property
    def visible_products(self):
        return filter_products(self.products, self.category, self.search)

    @property
    def featured_products(self):
        return featured_products(self.products)

    def get_product(self, product_id):
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    @property
    def is_open(self) -> bool:
        return is_business_hours(self.clock())

    @property
    def hours_status(self) -> str:
        return business_hours_status(self.clock())

    # ----------------------------
    # PURCHASE
    # ----------------------------
    def open_product(self, product):
        """Detail view: fresh gallery, nothing chosen yet."""
        self.viewer.open(product)
        self.selection.open(product, seed=False)

    def buy(self, product):
        link = self.selection.buy(product)
        if link is None:
            self.viewer.open(product)
        return link

    def finalize(self):
        return self.selection.finalize()

    def product_link(self, product, color=None, size=None):
        text = product_message(product, color, size, now=self.clock())
        return whatsapp_link(text, self.whatsapp_number)

    def general_link(self):
        return whatsapp_link(general_message(now=self.clock()), self.whatsapp_number)

    # ----------------------------
    # CONTACT / NEWSLETTER
    # ----------------------------
    def submit_contact(self):
        form = self.contact_form
        text = contact_message(form["name"], form["email"], form["message"], now=self.clock())
        self.contact_form = {"name": "", "email": "", "message": ""}
        return whatsapp_link(text, self.whatsapp_number)

    def submit_newsletter(self):
        text = newsletter_message(self.newsletter_email, now=self.clock())
        self.newsletter_email = ""
        return whatsapp_link(text, self.whatsapp_number)
