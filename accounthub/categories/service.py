import logging

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from accounthub.categories.models import Category

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Plumbing", "Plumbing and pipe work"),
    ("Electrical", "Electrical repairs and installations"),
    ("Cleaning", "Home and office cleaning"),
    ("Carpentry", "Woodwork and furniture"),
    ("Painting", "Interior and exterior painting"),
    ("AC & HVAC", "Air conditioning and heating"),
    ("Pest Control", "Pest control services"),
    ("Moving", "Moving and relocation"),
    ("Landscaping", "Garden and landscaping"),
    ("Other", "Other home services"),
]


def list_categories(db: Session) -> list[Category]:
    return list(db.scalars(select(Category).order_by(Category.name)))


def seed_default_categories(db: Session) -> int:
    """Insert the default categories when the table is empty. Returns rows added."""
    try:
        if db.scalar(select(func.count()).select_from(Category)):
            return 0
        db.add_all([Category(name=n, description=d) for n, d in DEFAULT_CATEGORIES])
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("could not seed categories: %s", e)
        return 0
    logger.info("loaded %d default service categories", len(DEFAULT_CATEGORIES))
    return len(DEFAULT_CATEGORIES)
