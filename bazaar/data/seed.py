# bazaar/data/seed.py
from decimal import Decimal

from bazaar.data.database import Base, SessionLocal, engine
from bazaar.data.models import ProductModel
from bazaar.utils.settings import SEED_CATALOG
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {"id": 1, "name": "Keyboard", "description": "Mechanical keyboard", "price": Decimal("199.99"), "type": "peripherals", "stock": 25},
    {"id": 2, "name": "Mouse", "description": "Wireless mouse", "price": Decimal("49.50"), "type": "peripherals", "stock": 40},
    {"id": 3, "name": "Monitor", "description": "27 inch IPS monitor", "price": Decimal("899.00"), "type": "displays", "stock": 10},
]


def seed(db) -> int:
    # not forcing: only seed if empty
    if db.query(ProductModel).first():
        return 0
    for p in PRODUCTS:
        db.add(ProductModel(**p, version=1))
    db.commit()
    return len(PRODUCTS)


def init_db():
    logger.info("=" * 80)
    logger.info("INITIALIZING DATABASE...")
    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")

    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"FAILED TO CREATE TABLES: {e}")
        raise

    logger.info("DATABASE TABLES CREATED SUCCESSFULLY")

    if SEED_CATALOG:
        db = SessionLocal()
        try:
            logger.info(f"Seeded {seed(db)} products")
        finally:
            db.close()
    logger.info("=" * 80)
