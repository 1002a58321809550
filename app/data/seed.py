"""Demo catalog loaded on first start."""
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.logging import get_logger
from ..models import Category, Product
from ..repositories.memory import InMemoryStore

logger = get_logger(__name__)


ELECTRONICS_ID = UUID("11111111-1111-1111-1111-111111111111")
GAMES_ID = UUID("22222222-1111-1111-1111-111111111111")
CLOTHING_ID = UUID("22222222-2222-2222-2222-222222222222")
BOOKS_ID = UUID("33333333-3333-3333-3333-333333333333")
HOME_GARDEN_ID = UUID("44444444-4444-4444-4444-444444444444")

CATEGORIES = [
    {"id": ELECTRONICS_ID, "name": "Electronics", "description": "Electronic devices and accessories"},
    {"id": GAMES_ID, "name": "Games", "description": "Video Games"},
    {"id": CLOTHING_ID, "name": "Clothing", "description": "Apparel and fashion items"},
    {"id": BOOKS_ID, "name": "Books", "description": "Books and educational materials"},
    {"id": HOME_GARDEN_ID, "name": "Home & Garden", "description": "Home improvement and garden supplies"},
]

PRODUCTS = [
    {
        "id": UUID("aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa"),
        "name": "Smartphone",
        "description": "Latest model smartphone with advanced features",
        "price": Decimal("699.99"),
        "stock": 50,
        "category_id": ELECTRONICS_ID,
    },
    {
        "id": UUID("bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb"),
        "name": "Jeans",
        "description": "Comfortable and stylish denim jeans",
        "price": Decimal("49.99"),
        "stock": 100,
        "category_id": CLOTHING_ID,
    },
    {
        "id": UUID("cccccccc-cccc-cccc-cccc-cccccccccccc"),
        "name": "Science Fiction Novel",
        "description": "A thrilling science fiction novel set in the future",
        "price": Decimal("19.99"),
        "stock": 200,
        "category_id": BOOKS_ID,
    },
    {
        "id": UUID("dddddddd-dddd-dddd-dddd-dddddddddddd"),
        "name": "Garden Tools Set",
        "description": "Complete set of garden tools for all your gardening needs",
        "price": Decimal("89.99"),
        "stock": 75,
        "category_id": HOME_GARDEN_ID,
    },
]


async def seed_catalog(db: AsyncSession) -> bool:
    """Insert the demo categories and products unless the catalog already has data."""
    existing = await db.scalar(select(func.count()).select_from(Category))
    if existing:
        logger.info("Catalog already seeded, skipping")
        return False

    db.add_all([Category(**data) for data in CATEGORIES])
    db.add_all([Product(**data) for data in PRODUCTS])
    await db.commit()

    logger.info(f"Seeded {len(CATEGORIES)} categories and {len(PRODUCTS)} products")
    return True


def seed_memory_store(store: InMemoryStore) -> bool:
    if store.categories:
        return False

    for data in CATEGORIES:
        store.add_category(Category(**data))
    for data in PRODUCTS:
        store.add_product(Product(**data))

    logger.info(f"Seeded in-memory catalog with {len(PRODUCTS)} products")
    return True
