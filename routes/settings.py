"""
Site settings routes: downloadable catalogue PDF
"""
import os

from flask import Blueprint, current_app, request, send_file

from models import db, utcnow, isoformat
from routes.auth import admin_required
from utils.responses import json_error, json_success
from utils.settings_helper import clear_catalogue, get_catalogue, set_catalogue
from utils.uploads import UploadError, delete_upload, local_path, save_pdf

settings_bp = Blueprint('settings', __name__, url_prefix='/api/settings')

DEFAULT_CATALOGUE_NAME = 'Brij-Namkeen-Catalogue.pdf'


@settings_bp.route('', methods=['GET'])
def get_settings():
    """Public site settings"""
    catalogue = get_catalogue()
    return json_success({
        'hasCatalogue': bool(catalogue['path']),
        'catalogueFileName': catalogue['file_name'],
        'catalogueUploadedAt': isoformat(catalogue['uploaded_at']),
    })


@settings_bp.route('/catalogue/download', methods=['GET'])
def download_catalogue():
    catalogue = get_catalogue()
    if not catalogue['path']:
        return json_error(404, 'No catalogue available')

    path = local_path(catalogue['path'])
    if not path or not os.path.exists(path):
        current_app.logger.warning("Catalogue file missing on disk: %s", catalogue['path'])
        return json_error(404, 'Catalogue file not found')

    return send_file(
        path,
        mimetype='application/pdf',
        as_attachment=True,
        download_name=catalogue['file_name'] or DEFAULT_CATALOGUE_NAME,
    )


@settings_bp.route('/catalogue', methods=['POST'])
@admin_required
def upload_catalogue():
    """Replace the catalogue PDF (multipart field 'catalogue')"""
    upload = request.files.get('catalogue')
    if not upload or not upload.filename:
        return json_error(400, 'No PDF file uploaded')

    try:
        new_path = save_pdf(upload, 'catalogue', 'catalogue')
    except UploadError:
        return json_error(400, 'Only PDF files are allowed')

    previous = get_catalogue()['path']
    uploaded_at = utcnow()
    try:
        set_catalogue(new_path, upload.filename, uploaded_at)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        delete_upload(new_path)
        current_app.logger.error("Upload catalogue error: %s", e, exc_info=True)
        return json_error(500, 'Failed to upload catalogue')

    if previous and previous != new_path:
        delete_upload(previous)
    current_app.logger.info("Catalogue replaced with %s", upload.filename)
    return json_success(
        {'fileName': upload.filename, 'uploadedAt': isoformat(uploaded_at)},
        message='Catalogue uploaded successfully',
    )


@settings_bp.route('/catalogue', methods=['DELETE'])
@admin_required
def delete_catalogue():
    previous = get_catalogue()['path']
    try:
        clear_catalogue()
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error("Delete catalogue error: %s", e, exc_info=True)
        return json_error(500, 'Failed to delete catalogue')
    if previous:
        delete_upload(previous)
    return json_success(message='Catalogue deleted successfully')
