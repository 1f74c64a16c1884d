"""
Key-value persistence.

The shop keeps its whole state under three fixed keys, each holding a JSON
(or flag) string. Anything with get/set/remove works as a store:

- DatabaseStore: the shared shop data, one row per key in SQLite.
- MappingStore: any mutable mapping. A dict in tests, the Flask session for
  the per-visitor admin flag.
"""
import json
import logging
from datetime import datetime
from typing import List

from flask_sqlalchemy import SQLAlchemy
from pydantic import TypeAdapter, ValidationError

from catalog import HeroContent, Product

logger = logging.getLogger(__name__)

db = SQLAlchemy()

PRODUCTS_KEY = "akron_products"
HERO_KEY = "akron_hero"
AUTH_KEY = "akron_admin_auth"

_product_list = TypeAdapter(List[Product])


# ----------------------------
# MODELS
# ----------------------------
class StoreEntry(db.Model):
    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# ----------------------------
# STORES
# ----------------------------
class MappingStore:
    def __init__(self, data=None):
        self.data = {} if data is None else data

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def remove(self, key):
        self.data.pop(key, None)


class DatabaseStore:
    """Store backed by the StoreEntry table. Every write commits."""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def get(self, key):
        entry = self.session.get(StoreEntry, key)
        return entry.value if entry else None

    def set(self, key, value):
        entry = self.session.get(StoreEntry, key)
        if entry:
            entry.value = value
        else:
            self.session.add(StoreEntry(key=key, value=value))
        self.session.commit()

    def remove(self, key):
        entry = self.session.get(StoreEntry, key)
        if entry:
            self.session.delete(entry)
            self.session.commit()


# ----------------------------
# LOAD / SAVE
# ----------------------------
def load_products(store):
    """
    Product collection saved under PRODUCTS_KEY.

    Returns None when nothing is stored or the stored value cannot be read;
    callers decide what to fall back to.
    """
    raw = store.get(PRODUCTS_KEY)
    if raw is None:
        return None
    try:
        return _product_list.validate_json(raw)
    except ValidationError as e:
        logger.warning("Could not read saved products, ignoring them: %s", e)
        return None


def save_products(store, products):
    store.set(PRODUCTS_KEY, json.dumps([p.to_dict() for p in products], ensure_ascii=False))


def load_hero(store):
    raw = store.get(HERO_KEY)
    if raw is None:
        return None
    try:
        return HeroContent.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("Could not read saved hero content, ignoring it: %s", e)
        return None


def save_hero(store, hero):
    store.set(HERO_KEY, json.dumps(hero.to_dict(), ensure_ascii=False))


def clear_catalog(store):
    store.remove(PRODUCTS_KEY)
    store.remove(HERO_KEY)


def is_admin_authenticated(store) -> bool:
    return store.get(AUTH_KEY) == "true"


def set_admin_authenticated(store, authenticated: bool):
    if authenticated:
        store.set(AUTH_KEY, "true")
    else:
        store.remove(AUTH_KEY)
