"""
Product routes: public catalogue, admin-only writes with image upload
"""
import json

from flask import Blueprint, current_app, g, request

from models import db
from models.product import Product, DEFAULT_PRODUCT_IMAGE, MAX_PRODUCT_IMAGES
from routes.auth import admin_required, optional_auth, is_admin_request
from utils.responses import json_error, json_success, request_data, validation_error
from utils.uploads import UploadError, delete_upload, save_image
from utils.validators import sanitize_string, to_bool, to_int, validate_product

products_bp = Blueprint('products', __name__, url_prefix='/api/products')


def _page_args(default_limit):
    page = max(to_int(request.args.get('page')) or 1, 1)
    limit = min(max(to_int(request.args.get('limit')) or default_limit, 1), 100)
    return page, limit


def _paginate(query, page, limit):
    total = query.count()
    items = (
        query.order_by(Product.created_at.desc(), Product.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    pagination = {
        'page': page,
        'limit': limit,
        'total': total,
        'pages': (total + limit - 1) // limit,
    }
    return items, pagination


def _save_uploaded_images():
    files = [f for f in request.files.getlist('images') + request.files.getlist('image') if f and f.filename]
    return [save_image(f, 'products', 'product') for f in files[:MAX_PRODUCT_IMAGES]]


def _parse_existing_images(raw):
    if raw is None:
        return None
    if isinstance(raw, list):
        return [str(p) for p in raw]
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return [raw] if raw else []
    if isinstance(parsed, list):
        return [str(p) for p in parsed]
    return [str(parsed)]


@products_bp.route('', methods=['GET'])
def list_products():
    """Active products with pagination, category filter and name search"""
    page, limit = _page_args(12)
    query = Product.query.filter(Product.is_active.is_(True))

    category = request.args.get('category', '').strip()
    if category:
        query = query.filter(Product.category == category)

    search = sanitize_string(request.args.get('search', ''))[:100]
    if search:
        query = query.filter(Product.name.ilike(f'%{search}%'))

    products, pagination = _paginate(query, page, limit)
    return json_success([p.to_dict() for p in products], pagination=pagination)


@products_bp.route('/categories', methods=['GET'])
def product_categories():
    """Distinct category names used by active products"""
    rows = (
        db.session.query(Product.category)
        .filter(Product.is_active.is_(True))
        .distinct()
        .order_by(Product.category)
        .all()
    )
    return json_success([row[0] for row in rows])


@products_bp.route('/all', methods=['GET'])
@admin_required
def list_all_products():
    """All products including inactive"""
    page, limit = _page_args(50)
    products, pagination = _paginate(Product.query, page, limit)
    return json_success([p.to_dict() for p in products], pagination=pagination)


@products_bp.route('/<int:product_id>', methods=['GET'])
@optional_auth
def get_product(product_id):
    """Single product; inactive products are only visible to admins"""
    product = Product.query.get(product_id)
    if not product or (not product.is_active and not is_admin_request()):
        return json_error(404, 'Product not found')
    return json_success(product.to_dict())


@products_bp.route('', methods=['POST'])
@admin_required
def create_product():
    data = request_data(request)
    errors = validate_product(data)
    if errors:
        return validation_error(errors)

    try:
        image_paths = _save_uploaded_images()
    except UploadError as e:
        return validation_error([{'field': 'images', 'message': str(e)}])

    if not image_paths and data.get('image'):
        image_paths = [data['image']]

    product = Product(
        name=sanitize_string(data['name']),
        description=sanitize_string(data['description']),
        category=sanitize_string(data['category']),
        price=float(data.get('price') or 0),
        stock=to_int(data.get('stock')) if data.get('stock') not in (None, '') else 100,
        weight=data.get('weight') or '200g',
        image=image_paths[0] if image_paths else DEFAULT_PRODUCT_IMAGE,
        images=image_paths,
        is_active=to_bool(data.get('isActive'), default=True),
        is_best_seller=to_bool(data.get('isBestSeller')),
        is_palm_oil_free=to_bool(data.get('isPalmOilFree')),
    )
    try:
        db.session.add(product)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        for path in image_paths:
            delete_upload(path)
        current_app.logger.error("Create product error: %s", e, exc_info=True)
        return json_error(500, 'Failed to create product')

    current_app.logger.info("Product '%s' created by %s", product.name, g.user.get('email'))
    return json_success(product.to_dict(), message='Product created successfully', status=201)


@products_bp.route('/<int:product_id>', methods=['PUT'])
@admin_required
def update_product(product_id):
    """Partial update; existingImages lists the uploaded images to keep"""
    product = Product.query.get(product_id)
    if not product:
        return json_error(404, 'Product not found')

    data = request_data(request)
    errors = validate_product(data, partial=True)
    if errors:
        return validation_error(errors)

    for field in ('name', 'description', 'category'):
        if data.get(field) is not None:
            setattr(product, field, sanitize_string(data[field]))
    if data.get('price') not in (None, ''):
        product.price = float(data['price'])
    if data.get('stock') not in (None, ''):
        product.stock = to_int(data['stock'])
    if data.get('weight'):
        product.weight = data['weight']
    if 'isActive' in data:
        product.is_active = to_bool(data['isActive'])
    if 'isBestSeller' in data:
        product.is_best_seller = to_bool(data['isBestSeller'])
    if 'isPalmOilFree' in data:
        product.is_palm_oil_free = to_bool(data['isPalmOilFree'])

    try:
        new_paths = _save_uploaded_images()
    except UploadError as e:
        db.session.rollback()
        return validation_error([{'field': 'images', 'message': str(e)}])

    keep = _parse_existing_images(data.get('existingImages'))
    removed = []
    if keep is not None or new_paths:
        current = list(product.images or [])
        kept = keep if keep is not None else current
        removed = [p for p in current if p not in kept]
        images = (kept + new_paths)[:MAX_PRODUCT_IMAGES]
        product.images = images
        product.image = images[0] if images else DEFAULT_PRODUCT_IMAGE

    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        for path in new_paths:
            delete_upload(path)
        current_app.logger.error("Update product error: %s", e, exc_info=True)
        return json_error(500, 'Failed to update product')

    for path in removed:
        delete_upload(path)
    return json_success(product.to_dict(), message='Product updated successfully')


@products_bp.route('/<int:product_id>', methods=['DELETE'])
@admin_required
def delete_product(product_id):
    """Soft delete"""
    product = Product.query.get(product_id)
    if not product:
        return json_error(404, 'Product not found')
    product.is_active = False
    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error("Delete product error: %s", e, exc_info=True)
        return json_error(500, 'Failed to delete product')
    return json_success(message='Product deleted successfully')
