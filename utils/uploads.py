"""
Storing uploaded files under the configured upload folder.
"""
import os
import secrets
import time

from flask import current_app
from werkzeug.utils import secure_filename

IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.gif', '.webp'}
PDF_EXTENSIONS = {'.pdf'}


class UploadError(ValueError):
    pass


def upload_root():
    return current_app.config['UPLOAD_FOLDER']


def save_upload(file_storage, subdir, prefix, allowed_extensions, allowed_mimetype_prefix):
    """
    Save an uploaded file as <subdir>/<prefix>-<timestamp>-<random><ext> and
    return its public path (/uploads/...).
    """
    original = secure_filename(file_storage.filename or '')
    ext = os.path.splitext(original)[1].lower()
    if ext not in allowed_extensions or not (file_storage.mimetype or '').startswith(allowed_mimetype_prefix):
        raise UploadError(f"Unsupported file type: {file_storage.filename}")

    target_dir = os.path.join(upload_root(), subdir)
    os.makedirs(target_dir, exist_ok=True)
    filename = f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(4)}{ext}"
    file_storage.save(os.path.join(target_dir, filename))
    return f"/uploads/{subdir}/{filename}"


def save_image(file_storage, subdir, prefix):
    return save_upload(file_storage, subdir, prefix, IMAGE_EXTENSIONS, 'image/')


def save_pdf(file_storage, subdir, prefix):
    return save_upload(file_storage, subdir, prefix, PDF_EXTENSIONS, 'application/pdf')


def local_path(public_path):
    """Filesystem path for an /uploads/... path, or None for anything else."""
    if not public_path or not public_path.startswith('/uploads/'):
        return None
    relative = public_path[len('/uploads/'):]
    root = os.path.abspath(upload_root())
    full = os.path.abspath(os.path.join(root, relative))
    if not full.startswith(root + os.sep):
        return None
    return full


def delete_upload(public_path):
    """Remove an uploaded file; missing files are ignored."""
    path = local_path(public_path)
    if not path or not os.path.exists(path):
        return False
    try:
        os.remove(path)
        return True
    except OSError as e:
        current_app.logger.warning("Could not delete upload %s: %s", public_path, e)
        return False
