# seed_store.py
# Run: python3 seed_store.py
#
# Writes the seed catalog from product_catalogs.py and the default hero
# into the shop database, so the admin panel opens with real products.
# - safe to re-run: skips keys that already hold data

from app import create_app
from catalog import HeroContent
from product_catalogs import seed_products
from storage import HERO_KEY, PRODUCTS_KEY, DatabaseStore, save_hero, save_products

DRY_RUN = False          # True = just print what would be written
SKIP_IF_EXISTS = True    # True = do not overwrite saved data


def seed(store, dry_run=DRY_RUN, skip_if_exists=SKIP_IF_EXISTS):
    """Returns the keys that were (or would be) written."""
    written = []

    if skip_if_exists and store.get(PRODUCTS_KEY) is not None:
        print(f"Skipped: {PRODUCTS_KEY} already saved")
    else:
        products = seed_products()
        for p in products:
            print(f"{'[DRY] ' if dry_run else ''}{p.id} | {p.name} | {p.category.value} | {p.price}")
        if not dry_run:
            save_products(store, products)
        written.append(PRODUCTS_KEY)

    if skip_if_exists and store.get(HERO_KEY) is not None:
        print(f"Skipped: {HERO_KEY} already saved")
    else:
        if not dry_run:
            save_hero(store, HeroContent())
        written.append(HERO_KEY)

    return written


def main():
    app = create_app()
    with app.app_context():
        written = seed(DatabaseStore())
        print("Seeding finished")
        print("Written:", ", ".join(written) or "nothing")


if __name__ == "__main__":
    main()
