"""Shared fixtures: in-memory stores, fixed clocks and a Flask test app."""
from datetime import datetime

import pytest

from app import create_app
from catalog import Category, Product
from storage import DatabaseStore, MappingStore, db, save_products

# 2024-01-01 was a Monday
TUESDAY_MORNING = datetime(2024, 1, 2, 9, 0)
TUESDAY_EVENING = datetime(2024, 1, 2, 18, 0)
SATURDAY_LATE = datetime(2024, 1, 6, 14, 0)
SUNDAY_NOON = datetime(2024, 1, 7, 12, 0)


def make_product(**overrides):
    data = dict(
        id="p1",
        name="Urban Fit White",
        price=79.9,
        images=["/white.png"],
        category=Category.NEW,
        sizes=["M"],
        colors=["Branco"],
        description="Corte oversized para looks streetwear.",
        featured=False,
    )
    data.update(overrides)
    return Product(**data)


@pytest.fixture
def store():
    return MappingStore()


@pytest.fixture
def three_products():
    return [
        make_product(id="a", name="Essential Black", category=Category.NEW,
                     description="Algodão premium"),
        make_product(id="b", name="Vintage Olive", category=Category.PROMO,
                     price=84.9, original_price=109.9, description="Lavagem especial"),
        make_product(id="c", name="Exclusive Red", category=Category.LIMITED,
                     description="Estampa exclusiva", featured=True),
    ]


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret-key",
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
    })
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    client.post("/admin/login", data={"password": "akron2024"})
    return client


@pytest.fixture
def saved_products(app, three_products):
    with app.app_context():
        save_products(DatabaseStore(), three_products)
    return three_products
