"""
Home page composition: each visible category section with its products.
"""
import logging

from models.category import Category, SlotType
from models.product import Product

HOME_SECTION_LIMIT = 10

logger = logging.getLogger(__name__)


def _newest_active(query, limit):
    return (
        query.filter(Product.is_active.is_(True))
        .order_by(Product.created_at.desc(), Product.id.desc())
        .limit(limit)
        .all()
    )


def _category_products(category, limit):
    return _newest_active(Product.query.filter(Product.category == category.name), limit)


def _bestseller_products(category, limit):
    return _newest_active(Product.query.filter(Product.is_best_seller.is_(True)), limit)


def _palm_oil_free_products(category, limit):
    return _newest_active(Product.query.filter(Product.is_palm_oil_free.is_(True)), limit)


SLOT_RESOLVERS = {
    SlotType.CATEGORY: _category_products,
    SlotType.BESTSELLER: _bestseller_products,
    SlotType.PALM_OIL_FREE: _palm_oil_free_products,
}

_missing = set(SlotType) - set(SLOT_RESOLVERS)
if _missing:
    raise RuntimeError(f"No product resolver for slot types: {sorted(m.value for m in _missing)}")


def resolve_slot_type(category):
    """
    Which resolver a section uses. Plain categories always match by name;
    a special section with an unrecognised slot type resolves to None.
    """
    if not category.is_special_slot:
        return SlotType.CATEGORY
    slot = SlotType.parse(category.slot_type)
    if slot is SlotType.CATEGORY:
        return None
    return slot


def resolve_products(category, limit=HOME_SECTION_LIMIT):
    slot = resolve_slot_type(category)
    if slot is None:
        logger.warning("Category %s has unknown special slot type %r; showing no products",
                       category.id, category.slot_type)
        return []
    return SLOT_RESOLVERS[slot](category, limit)


def home_categories():
    return (
        Category.query.filter(Category.is_active.is_(True), Category.show_on_home.is_(True))
        .order_by(Category.display_order, Category.name)
        .all()
    )


def compose_home(limit=HOME_SECTION_LIMIT):
    """
    Ordered list of section dicts, each with a ``products`` list. Sections
    with no products are kept.
    """
    sections = []
    for category in home_categories():
        section = category.to_dict()
        section['products'] = [p.to_dict() for p in resolve_products(category, limit)]
        sections.append(section)
    return sections
