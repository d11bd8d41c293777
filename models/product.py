"""
Product model definition
"""
from models import db, utcnow, isoformat

DEFAULT_PRODUCT_IMAGE = '/images/default-product.jpg'
MAX_PRODUCT_IMAGES = 5


class Product(db.Model):
    """Product shown in the catalogue"""
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=False)
    price = db.Column(db.Numeric(10, 2), default=0)
    category = db.Column(db.String(50), nullable=False, index=True)
    image = db.Column(db.String(500), default=DEFAULT_PRODUCT_IMAGE)
    images = db.Column(db.JSON, default=list)
    weight = db.Column(db.String(50), default='200g')
    stock = db.Column(db.Integer, default=100)
    is_active = db.Column(db.Boolean, default=True, index=True)
    is_best_seller = db.Column(db.Boolean, default=False)
    is_palm_oil_free = db.Column(db.Boolean, default=False)
    rating_average = db.Column(db.Float, default=0)
    rating_count = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    @property
    def formatted_price(self):
        return f"₹{float(self.price or 0):.2f}"

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'price': float(self.price or 0),
            'formattedPrice': self.formatted_price,
            'category': self.category,
            'image': self.image or DEFAULT_PRODUCT_IMAGE,
            'images': list(self.images or []),
            'weight': self.weight,
            'stock': self.stock,
            'isActive': self.is_active,
            'isBestSeller': self.is_best_seller,
            'isPalmOilFree': self.is_palm_oil_free,
            'ratings': {
                'average': self.rating_average or 0,
                'count': self.rating_count or 0,
            },
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<Product {self.name}>'
