"""
Category registry: create, edit, reorder and soft-delete home-page sections,
and flip special slots (best sellers, palm-oil free) on and off.
"""
from flask import current_app

from models import db
from models.category import Category, SlotType, DEFAULT_ICON
from utils.validators import sanitize_string, to_bool, to_int


class DuplicateCategoryError(Exception):
    """A category with the same name (any case) already exists."""


class InvalidSlotError(ValueError):
    """isSpecialSlot/slotType combination that breaks the slot invariant."""


def find_by_name(name):
    """Case-insensitive lookup across active and inactive categories."""
    return Category.query.filter(db.func.lower(Category.name) == name.strip().lower()).first()


def next_display_order():
    highest = db.session.query(db.func.max(Category.display_order)).scalar()
    return 0 if highest is None else highest + 1


def list_active_categories():
    return Category.query.filter_by(is_active=True).order_by(Category.display_order, Category.name).all()


def list_all_categories():
    return Category.query.order_by(Category.display_order, Category.name).all()


def create_category(data):
    """Create a category; display order defaults to the current max + 1."""
    name = sanitize_string(data['name'])
    if find_by_name(name):
        raise DuplicateCategoryError(name)

    display_order = to_int(data.get('displayOrder'))
    category = Category(
        name=name,
        description=sanitize_string(data.get('description') or ''),
        icon=data.get('icon') or DEFAULT_ICON,
        display_order=display_order if display_order is not None else next_display_order(),
        show_on_home=to_bool(data.get('showOnHome'), default=True),
        is_special_slot=False,
        slot_type=SlotType.CATEGORY.value,
        is_active=True,
    )
    db.session.add(category)
    db.session.commit()
    current_app.logger.info("Category '%s' created at display order %s", category.name, category.display_order)
    return category


def apply_slot(category, is_special=None, slot_type=None):
    """
    Set special-slot fields explicitly, keeping special <=> non-category slot type.
    """
    if is_special is None and slot_type is None:
        return category
    parsed = SlotType.parse(slot_type) if slot_type is not None else None
    if slot_type is not None and parsed is None:
        raise InvalidSlotError(f"Unknown slot type: {slot_type}")

    if is_special is None:
        is_special = parsed is not SlotType.CATEGORY

    if not is_special:
        if parsed not in (None, SlotType.CATEGORY):
            raise InvalidSlotError("A non-special category must use slot type 'category'")
        category.is_special_slot = False
        category.slot_type = SlotType.CATEGORY.value
        return category

    if parsed is None:
        parsed = SlotType.parse(category.slot_type)
    if parsed in (None, SlotType.CATEGORY):
        raise InvalidSlotError("A special slot needs slot type 'bestseller' or 'palmOilFree'")
    category.is_special_slot = True
    category.slot_type = parsed.value
    return category


def toggle_special_slot(category, slot_type):
    """
    Flip a special slot: if the category already is this exact slot it goes
    back to a plain category, otherwise it becomes this slot.
    """
    wanted = SlotType(slot_type)
    if wanted is SlotType.CATEGORY:
        raise InvalidSlotError("Only special slot types can be toggled")
    if category.is_special_slot and category.slot_type == wanted.value:
        category.is_special_slot = False
        category.slot_type = SlotType.CATEGORY.value
    else:
        category.is_special_slot = True
        category.slot_type = wanted.value
    return category


def update_category(category, data):
    """
    Partial update: only supplied fields change. A rename is not checked for
    collisions with other categories.
    """
    if 'name' in data and data['name'] is not None:
        category.name = sanitize_string(data['name'])
    if 'description' in data and data['description'] is not None:
        category.description = sanitize_string(data['description'])
    if 'icon' in data and data['icon']:
        category.icon = data['icon']
    if 'isActive' in data:
        category.is_active = to_bool(data['isActive'])
    if 'showOnHome' in data:
        category.show_on_home = to_bool(data['showOnHome'])
    if 'displayOrder' in data and to_int(data['displayOrder']) is not None:
        category.display_order = to_int(data['displayOrder'])

    apply_slot(
        category,
        is_special=to_bool(data['isSpecialSlot']) if 'isSpecialSlot' in data else None,
        slot_type=data.get('slotType'),
    )
    if data.get('toggleSlot'):
        toggle_special_slot(category, data['toggleSlot'])

    db.session.commit()
    return category


def reorder_categories(items):
    """
    Apply (id, displayOrder) pairs one by one, each in its own commit.
    Unknown ids are skipped. A store failure part way through leaves the
    earlier entries applied and propagates to the caller.
    """
    updated = 0
    for item in items:
        category = Category.query.get(to_int(item['id']))
        if category is None:
            current_app.logger.warning("Reorder skipped unknown category id %s", item['id'])
            continue
        category.display_order = to_int(item['displayOrder'])
        db.session.commit()
        updated += 1
    return updated


def soft_delete_category(category):
    """Hide the category; products keep their category string."""
    category.is_active = False
    db.session.commit()
    return category
