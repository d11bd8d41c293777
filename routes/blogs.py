"""
Blog routes
"""
from flask import Blueprint, current_app, request

from models import db
from models.blog import Blog
from routes.auth import admin_required, optional_auth, is_admin_request
from utils.responses import json_error, json_success, request_data, validation_error
from utils.uploads import UploadError, delete_upload, save_image
from utils.validators import sanitize_string, to_bool, validate_blog

blogs_bp = Blueprint('blogs', __name__, url_prefix='/api/blogs')

TEXT_FIELDS = ('title', 'excerpt', 'content', 'author')


def _uploaded_image():
    image = request.files.get('image')
    if image and image.filename:
        return save_image(image, 'blogs', 'blog')
    return None


@blogs_bp.route('', methods=['GET'])
def list_blogs():
    blogs = Blog.query.filter_by(is_active=True).order_by(Blog.created_at.desc()).all()
    return json_success([b.to_dict() for b in blogs], count=len(blogs))


@blogs_bp.route('/all', methods=['GET'])
@admin_required
def list_all_blogs():
    blogs = Blog.query.order_by(Blog.created_at.desc()).all()
    return json_success([b.to_dict() for b in blogs], count=len(blogs))


@blogs_bp.route('/<int:blog_id>', methods=['GET'])
@optional_auth
def get_blog(blog_id):
    blog = Blog.query.get(blog_id)
    if not blog or (not blog.is_active and not is_admin_request()):
        return json_error(404, 'Blog not found')
    return json_success(blog.to_dict())


@blogs_bp.route('', methods=['POST'])
@admin_required
def create_blog():
    data = request_data(request)
    errors = validate_blog(data)
    if errors:
        return validation_error(errors)

    try:
        image = _uploaded_image()
    except UploadError as e:
        return validation_error([{'field': 'image', 'message': str(e)}])

    blog = Blog(
        title=sanitize_string(data['title']),
        excerpt=sanitize_string(data['excerpt']),
        content=data['content'],
        author=sanitize_string(data.get('author') or 'Admin'),
        category=data.get('category') or 'Other',
        image=image or data.get('image') or 'no-photo.jpg',
        read_time=data.get('readTime') or '5 min read',
        is_active=to_bool(data.get('isActive'), default=True),
    )
    try:
        db.session.add(blog)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        if image:
            delete_upload(image)
        current_app.logger.error("Create blog error: %s", e, exc_info=True)
        return json_error(500, 'Server Error')
    return json_success(blog.to_dict(), status=201)


@blogs_bp.route('/<int:blog_id>', methods=['PUT'])
@admin_required
def update_blog(blog_id):
    blog = Blog.query.get(blog_id)
    if not blog:
        return json_error(404, 'Blog not found')

    data = request_data(request)
    errors = validate_blog(data, partial=True)
    if errors:
        return validation_error(errors)

    try:
        image = _uploaded_image()
    except UploadError as e:
        return validation_error([{'field': 'image', 'message': str(e)}])

    for field in TEXT_FIELDS:
        if data.get(field) is not None:
            value = data[field] if field == 'content' else sanitize_string(data[field])
            setattr(blog, field, value)
    if data.get('category'):
        blog.category = data['category']
    if data.get('readTime'):
        blog.read_time = data['readTime']
    if 'isActive' in data:
        blog.is_active = to_bool(data['isActive'])
    previous_image = blog.image
    if image:
        blog.image = image

    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        if image:
            delete_upload(image)
        current_app.logger.error("Update blog error: %s", e, exc_info=True)
        return json_error(500, 'Server Error')

    if image and previous_image != image:
        delete_upload(previous_image)
    return json_success(blog.to_dict())


@blogs_bp.route('/<int:blog_id>', methods=['DELETE'])
@admin_required
def delete_blog(blog_id):
    blog = Blog.query.get(blog_id)
    if not blog:
        return json_error(404, 'Blog not found')
    image = blog.image
    try:
        db.session.delete(blog)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error("Delete blog error: %s", e, exc_info=True)
        return json_error(500, 'Server Error')
    delete_upload(image)
    return json_success({})
