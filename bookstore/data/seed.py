# bookstore/data/seed.py
from decimal import Decimal

from bookstore.data.database import Base, SessionLocal, engine
from bookstore.data.models import BookModel
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_BOOKS = [
    {"name": "The Pragmatic Programmer", "author_name": "Andrew Hunt", "price": Decimal("45.00"), "discount_percentage": Decimal("10"), "available_stock": 25},
    {"name": "Designing Data-Intensive Applications", "author_name": "Martin Kleppmann", "price": Decimal("52.90"), "discount_percentage": Decimal("0"), "available_stock": 12},
    {"name": "Fluent Python", "author_name": "Luciano Ramalho", "price": Decimal("59.99"), "discount_percentage": Decimal("15"), "available_stock": 8},
]


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(BookModel).first():
            return
        db.add_all(BookModel(is_active=True, **b) for b in DEMO_BOOKS)
        db.commit()
        logger.info(f"Seeded {len(DEMO_BOOKS)} books")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
