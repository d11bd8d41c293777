"""
Category model: home-page sections, either a plain category or a special slot
"""
import enum

from models import db, utcnow, isoformat

DEFAULT_ICON = '\U0001F4E6'


class SlotType(str, enum.Enum):
    """What a home-page section is populated from."""
    CATEGORY = 'category'
    BESTSELLER = 'bestseller'
    PALM_OIL_FREE = 'palmOilFree'

    @classmethod
    def parse(cls, value):
        """Return the member for a stored/submitted value, or None if unknown."""
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def special_values(cls):
        return [m.value for m in cls if m is not cls.CATEGORY]


class Category(db.Model):
    """Product category / home-page section"""
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False)
    description = db.Column(db.String(200), default='')
    icon = db.Column(db.String(16), default=DEFAULT_ICON)
    display_order = db.Column(db.Integer, default=0, index=True)
    show_on_home = db.Column(db.Boolean, default=True, index=True)
    is_special_slot = db.Column(db.Boolean, default=False)
    slot_type = db.Column(db.String(20), default=SlotType.CATEGORY.value)
    is_active = db.Column(db.Boolean, default=True, index=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description or '',
            'icon': self.icon or DEFAULT_ICON,
            'displayOrder': self.display_order,
            'showOnHome': self.show_on_home,
            'isSpecialSlot': self.is_special_slot,
            'slotType': self.slot_type,
            'isActive': self.is_active,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<Category {self.name}>'
