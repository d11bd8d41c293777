"""
Category routes: public listing and home sections, admin-only writes
"""
from flask import Blueprint, current_app, request

from models import db
from models.category import Category
from routes.auth import admin_required
from utils.categories import (
    DuplicateCategoryError,
    InvalidSlotError,
    create_category,
    list_active_categories,
    list_all_categories,
    reorder_categories,
    soft_delete_category,
    update_category,
)
from utils.home import compose_home
from utils.responses import json_error, json_success, request_data, validation_error
from utils.validators import validate_category, validate_reorder

categories_bp = Blueprint('categories', __name__, url_prefix='/api/categories')


@categories_bp.route('', methods=['GET'])
def list_categories():
    """Active categories sorted by display order"""
    return json_success([c.to_dict() for c in list_active_categories()])


@categories_bp.route('/home', methods=['GET'])
def home_sections():
    """Home page sections with their products, special slots included"""
    try:
        sections = compose_home()
    except Exception as e:
        current_app.logger.error("Get home categories error: %s", e, exc_info=True)
        return json_error(500, 'Failed to fetch home categories')
    return json_success(sections)


@categories_bp.route('/all', methods=['GET'])
@admin_required
def list_every_category():
    """All categories including inactive"""
    return json_success([c.to_dict() for c in list_all_categories()])


@categories_bp.route('', methods=['POST'])
@admin_required
def create():
    data = request_data(request)
    errors = validate_category(data)
    if errors:
        return validation_error(errors)

    try:
        category = create_category(data)
    except DuplicateCategoryError:
        db.session.rollback()
        return json_error(400, 'Category with this name already exists')
    except Exception as e:
        db.session.rollback()
        current_app.logger.error("Create category error: %s", e, exc_info=True)
        return json_error(500, 'Failed to create category')
    return json_success(category.to_dict(), message='Category created successfully', status=201)


@categories_bp.route('/reorder', methods=['PUT'])
@admin_required
def reorder():
    """Body: {"categories": [{"id": 1, "displayOrder": 0}, ...]}"""
    data = request.get_json(silent=True)
    errors = validate_reorder(data)
    if errors:
        return json_error(400, 'Categories array is required', details=errors)

    try:
        updated = reorder_categories(data['categories'])
    except Exception as e:
        db.session.rollback()
        current_app.logger.error("Reorder categories error: %s", e, exc_info=True)
        return json_error(500, 'Failed to reorder categories')
    return json_success({'updated': updated}, message='Categories reordered successfully')


@categories_bp.route('/<int:category_id>', methods=['PUT'])
@admin_required
def update(category_id):
    """
    Partial update. Pass {"toggleSlot": "bestseller"} (or "palmOilFree") to
    flip that special slot on or off.
    """
    category = Category.query.get(category_id)
    if not category:
        return json_error(404, 'Category not found')

    data = request_data(request)
    errors = validate_category(data, partial=True)
    if errors:
        return validation_error(errors)

    try:
        update_category(category, data)
    except InvalidSlotError as e:
        db.session.rollback()
        return validation_error([{'field': 'slotType', 'message': str(e)}])
    except Exception as e:
        db.session.rollback()
        current_app.logger.error("Update category error: %s", e, exc_info=True)
        return json_error(500, 'Failed to update category')
    return json_success(category.to_dict(), message='Category updated successfully')


@categories_bp.route('/<int:category_id>', methods=['DELETE'])
@admin_required
def delete(category_id):
    """Soft delete"""
    category = Category.query.get(category_id)
    if not category:
        return json_error(404, 'Category not found')
    try:
        soft_delete_category(category)
    except Exception as e:
        db.session.rollback()
        current_app.logger.error("Delete category error: %s", e, exc_info=True)
        return json_error(500, 'Failed to delete category')
    return json_success(message='Category deleted successfully')
