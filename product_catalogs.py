"""
Seed catalog.
Shown by the storefront until the admin saves a catalog of its own.
"""
from catalog import Category, Product

# ======================================================
# 1. SIZE RUNS
# ======================================================

FULL_RUN = ["P", "M", "G", "GG", "XG"]
CORE_RUN = ["P", "M", "G", "GG"]

# ======================================================
# 2. SEED PRODUCTS
# ======================================================

SEED_PRODUCTS = [
    {
        "id": "1",
        "name": "Oversized Essential Black",
        "price": 89.9,
        "originalPrice": 119.9,
        "images": [
            "/black-oversized-t-shirt-gym-fitness.png",
            "/black-oversized-t-shirt-back.png",
        ],
        "category": Category.PROMO,
        "sizes": CORE_RUN,
        "colors": ["Preto"],
        "description": "Camiseta oversized essencial em algodão premium, perfeita para treinos e uso casual.",
        "featured": True,
    },
    {
        "id": "2",
        "name": "Urban Fit White",
        "price": 79.9,
        "images": [
            "/white-oversized-tee-urban.png",
            "/white-oversized-tee-side.png",
        ],
        "category": Category.NEW,
        "sizes": FULL_RUN,
        "colors": ["Branco"],
        "description": "Design urbano com corte oversized, ideal para compor looks streetwear.",
        "featured": True,
    },
    {
        "id": "3",
        "name": "Limited Edition Gray",
        "price": 99.9,
        "images": [
            "/gray-oversized-limited-edition-tee.png",
            "/gray-oversized-t-shirt-detail.png",
        ],
        "category": Category.LIMITED,
        "sizes": ["M", "G", "GG"],
        "colors": ["Cinza"],
        "description": "Edição limitada com estampa exclusiva e tecido premium.",
        "featured": True,
    },
    {
        "id": "4",
        "name": "Performance Navy",
        "price": 94.9,
        "images": [
            "/navy-blue-oversized-performance-tee.png",
            "/navy-blue-oversized-t-shirt-fabric.png",
        ],
        "category": Category.NEW,
        "sizes": CORE_RUN,
        "colors": ["Azul Marinho"],
        "description": "Tecnologia dry-fit para máxima performance nos treinos.",
        "featured": False,
    },
    {
        "id": "5",
        "name": "Vintage Olive",
        "price": 84.9,
        "originalPrice": 109.9,
        "images": [
            "/placeholder.svg?height=600&width=600",
            "/placeholder.svg?height=600&width=600",
        ],
        "category": Category.PROMO,
        "sizes": ["M", "G", "GG", "XG"],
        "colors": ["Verde Oliva"],
        "description": "Estilo vintage com lavagem especial e corte confortável.",
        "featured": False,
    },
    {
        "id": "6",
        "name": "Exclusive Red",
        "price": 109.9,
        "images": [
            "/placeholder.svg?height=600&width=600",
            "/placeholder.svg?height=600&width=600",
        ],
        "category": Category.LIMITED,
        "sizes": ["P", "M", "G"],
        "colors": ["Vermelho"],
        "description": "Peça exclusiva com design diferenciado e acabamento premium.",
        "featured": False,
    },
]

# ======================================================
# 3. REGISTRIES
# ======================================================


def seed_products():
    """Fresh Product objects for the seed catalog (safe to mutate)."""
    return [Product.model_validate(item) for item in SEED_PRODUCTS]
