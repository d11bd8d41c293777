"""
Seed the store with sample categories and products.
Run: python seed_catalogue.py            (adds what is missing)
     python seed_catalogue.py --reset    (clears categories and products first)
"""
import sys

SAMPLE_IMAGE = 'https://images.unsplash.com/photo-1599490659213-e2b9527bd087?w=400'


def _get_categories():
    return [
        {'name': 'Namkeen', 'description': 'Authentic Indian savory snacks', 'icon': '\U0001F336️', 'display_order': 1},
        {'name': 'Sweets', 'description': 'Traditional Indian sweets and desserts', 'icon': '\U0001F36C', 'display_order': 2},
        {'name': 'Chips & Crackers', 'description': 'Crispy and crunchy snack varieties', 'icon': '\U0001F36A', 'display_order': 3},
        {'name': 'Dry Fruits & Nuts', 'description': 'Premium quality dry fruits and nuts', 'icon': '\U0001F95C', 'display_order': 4},
        {'name': 'Combo Packs', 'description': 'Value packs and gift hampers', 'icon': '\U0001F381', 'display_order': 5},
    ]


def _get_products():
    # (name, category, price, weight, stock, best seller, palm oil free)
    rows = [
        ('Classic Bhujia', 'Namkeen', 120, '400g', 100, True, True),
        ('Aloo Bhujia', 'Namkeen', 140, '400g', 100, True, False),
        ('Moong Dal', 'Namkeen', 100, '250g', 100, False, True),
        ('Sev Mamra', 'Namkeen', 90, '300g', 100, False, False),
        ('Besan Ladoo', 'Sweets', 350, '500g', 60, True, True),
        ('Dry Fruit Chikki', 'Sweets', 280, '400g', 60, False, True),
        ('Gajak', 'Sweets', 220, '500g', 60, False, False),
        ('Masala Mathri', 'Chips & Crackers', 110, '300g', 100, False, False),
        ('Khasta Kachori', 'Chips & Crackers', 180, '400g', 80, True, False),
        ('Chakli', 'Chips & Crackers', 130, '350g', 80, False, True),
        ('Masala Cashews', 'Dry Fruits & Nuts', 450, '250g', 50, False, True),
        ('Spiced Almonds', 'Dry Fruits & Nuts', 420, '250g', 50, False, True),
        ('Festival Special Combo', 'Combo Packs', 899, '1.5kg', 30, True, False),
        ('Party Pack', 'Combo Packs', 599, '1kg', 40, False, False),
        ('Family Pack', 'Combo Packs', 449, '800g', 50, False, False),
    ]
    return [
        {
            'name': name,
            'description': f'{name} from the Brij Namkeen kitchen, made fresh in small batches.',
            'category': category,
            'price': price,
            'weight': weight,
            'stock': stock,
            'is_best_seller': best_seller,
            'is_palm_oil_free': palm_oil_free,
        }
        for name, category, price, weight, stock, best_seller, palm_oil_free in rows
    ]


def seed_catalogue(reset=False):
    from app import create_app
    from models import db
    from models.category import Category
    from models.product import Product
    from utils.categories import find_by_name

    app = create_app()
    with app.app_context():
        if reset:
            Product.query.delete()
            Category.query.delete()
            print("Cleared existing products and categories")

        created_categories = 0
        for data in _get_categories():
            if find_by_name(data['name']):
                continue
            db.session.add(Category(show_on_home=True, is_active=True, **data))
            created_categories += 1

        created_products = 0
        for data in _get_products():
            if Product.query.filter_by(name=data['name'], category=data['category']).first():
                continue
            db.session.add(Product(image=SAMPLE_IMAGE, images=[], is_active=True, **data))
            created_products += 1

        try:
            db.session.commit()
            print(f"Done. Categories created: {created_categories}, Products created: {created_products}")
        except Exception as e:
            db.session.rollback()
            print(f"Error: {e}")
            return 1
    return 0


if __name__ == '__main__':
    sys.exit(seed_catalogue(reset='--reset' in sys.argv[1:]))
