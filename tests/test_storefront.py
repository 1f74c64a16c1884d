from urllib.parse import unquote

import pytest

from catalog import ALL_CATEGORIES, Category, HeroContent, SelectionIncomplete
from product_catalogs import SEED_PRODUCTS
from storage import HERO_KEY, PRODUCTS_KEY, save_hero, save_products
from storefront import AWAITING_SELECTION, CLOSED, CatalogStore, ImageViewer

from conftest import SUNDAY_NOON, TUESDAY_MORNING, make_product


def open_store(store, now=TUESDAY_MORNING):
    return CatalogStore(store, clock=lambda: now).load()


def message_of(link):
    return unquote(link.split("?text=", 1)[1])


# ----------------------------
# LOADING
# ----------------------------
def test_empty_store_shows_seed_catalog(store):
    shop = open_store(store)
    assert [p.id for p in shop.products] == [item["id"] for item in SEED_PRODUCTS]
    assert shop.hero == HeroContent()


def test_saved_catalog_replaces_seed(store, three_products):
    save_products(store, three_products)
    save_hero(store, HeroContent(title="DROP"))
    shop = open_store(store)
    assert shop.products == three_products
    assert shop.hero.title == "DROP"


def test_malformed_storage_falls_back(store):
    store.set(PRODUCTS_KEY, "nope")
    store.set(HERO_KEY, "nope")
    shop = open_store(store)
    assert len(shop.products) == len(SEED_PRODUCTS)
    assert shop.hero == HeroContent()


def test_saved_empty_catalog_stays_empty(store):
    save_products(store, [])
    assert open_store(store).products == []


# ----------------------------
# CATALOG VIEW
# ----------------------------
def test_visible_products_follow_category_and_search(store, three_products):
    save_products(store, three_products)
    shop = open_store(store)

    assert shop.category == ALL_CATEGORIES
    assert len(shop.visible_products) == 3

    shop.category = Category.PROMO
    assert [p.id for p in shop.visible_products] == ["b"]

    shop.category = Category.NEW
    shop.search = "lavagem"
    assert shop.visible_products == []
    assert [p.id for p in shop.featured_products] == ["c"]


def test_get_product(store, three_products):
    save_products(store, three_products)
    shop = open_store(store)
    assert shop.get_product("b").name == "Vintage Olive"
    assert shop.get_product("zzz") is None


def test_hours_follow_clock(store):
    assert open_store(store, TUESDAY_MORNING).is_open
    assert not open_store(store, SUNDAY_NOON).is_open


# ----------------------------
# SELECTION FLOW
# ----------------------------
def test_product_with_choices_awaits_selection(store):
    shop = open_store(store)
    product = make_product(colors=["Preto", "Branco"], sizes=["M"])

    assert shop.buy(product) is None
    assert shop.selection.state == AWAITING_SELECTION
    assert shop.selection.color == "Preto"
    assert shop.selection.size == "M"


def test_finalize_blocked_until_color_chosen(store):
    shop = open_store(store)
    product = make_product(colors=["Preto", "Branco"], sizes=["M"])
    shop.buy(product)
    shop.selection.choose_color("")

    assert not shop.selection.can_finalize
    assert shop.selection.purchase_label == "Selecione Cor e Tamanho"
    with pytest.raises(SelectionIncomplete):
        shop.finalize()
    assert shop.selection.state == AWAITING_SELECTION

    shop.selection.choose_color("Branco")
    assert shop.selection.purchase_label == "Comprar via WhatsApp"
    link = shop.finalize()

    assert "🎨 Cor: Branco" in message_of(link)
    assert "📏 Tamanho: M" in message_of(link)
    assert shop.selection.state == CLOSED


def test_single_option_product_goes_straight_to_message(store):
    shop = open_store(store)
    link = shop.buy(make_product(colors=["Preto"], sizes=["G"]))

    assert link.startswith("https://wa.me/")
    assert shop.selection.state == CLOSED
    text = message_of(link)
    assert "🎨 Cor: Preto" in text
    assert "📏 Tamanho: G" in text


def test_unknown_choice_is_rejected(store):
    shop = open_store(store)
    shop.buy(make_product(colors=["Preto", "Branco"]))
    with pytest.raises(ValueError):
        shop.selection.choose_color("Roxo")
    with pytest.raises(ValueError):
        shop.selection.choose_size("XXL")


def test_dismiss_closes_without_message(store):
    shop = open_store(store)
    shop.buy(make_product(colors=["Preto", "Branco"]))
    shop.selection.dismiss()
    assert shop.selection.state == CLOSED
    assert not shop.selection.can_finalize


def test_detail_view_starts_with_nothing_chosen(store):
    shop = open_store(store)
    shop.open_product(make_product(colors=["Preto", "Branco"]))
    assert shop.selection.state == AWAITING_SELECTION
    assert shop.selection.color == ""
    assert not shop.selection.can_finalize


# ----------------------------
# IMAGE VIEWER
# ----------------------------
def test_zoom_is_clamped():
    viewer = ImageViewer()
    for _ in range(10):
        viewer.zoom_in()
    assert viewer.zoom == 3.0
    for _ in range(10):
        viewer.zoom_out()
    assert viewer.zoom == 0.5
    viewer.reset_zoom()
    assert viewer.zoom == 1.0


def test_set_zoom_snaps_to_steps():
    viewer = ImageViewer()
    viewer.set_zoom(1.3)
    assert viewer.zoom == 1.5
    viewer.set_zoom(10)
    assert viewer.zoom == 3.0
    viewer.set_zoom(0)
    assert viewer.zoom == 0.5


def test_set_zoom_handles_huge_values():
    viewer = ImageViewer()
    viewer.set_zoom(1e308)
    assert viewer.zoom == 3.0
    viewer.set_zoom(-1e308)
    assert viewer.zoom == 0.5
    viewer.set_zoom(float("nan"))
    assert viewer.zoom == 1.0


def test_opening_a_product_resets_viewer(store):
    shop = open_store(store)
    shop.open_product(make_product(images=["/a.png", "/b.png", "/c.png"]))
    shop.viewer.select(2)
    shop.viewer.zoom_in()

    shop.open_product(make_product(images=["/d.png"]))
    assert shop.viewer.index == 0
    assert shop.viewer.zoom == 1.0


def test_select_clamps_to_gallery():
    viewer = ImageViewer()
    viewer.open(make_product(images=["/a.png", "/b.png"]))
    viewer.select(5)
    assert viewer.index == 1
    viewer.select(-3)
    assert viewer.index == 0


# ----------------------------
# CONTACT / NEWSLETTER
# ----------------------------
def test_contact_form_resets_after_submit(store):
    shop = open_store(store)
    shop.contact_form.update(name="Ana", email="ana@example.com", message="Oi")
    link = shop.submit_contact()

    assert "Contato via site AKRON:\nNome: Ana" in message_of(link)
    assert shop.contact_form == {"name": "", "email": "", "message": ""}


def test_newsletter_resets_after_submit(store):
    shop = open_store(store)
    shop.newsletter_email = "ana@example.com"
    link = shop.submit_newsletter()

    assert "Email: ana@example.com" in message_of(link)
    assert shop.newsletter_email == ""


def test_general_link_uses_configured_number(store):
    shop = CatalogStore(store, clock=lambda: TUESDAY_MORNING, whatsapp_number="5511000000000")
    assert shop.general_link().startswith("https://wa.me/5511000000000?text=")
