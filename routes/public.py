"""
Public routes: health checks and uploaded files
"""
import time

from flask import Blueprint, current_app, jsonify, send_from_directory
from sqlalchemy import text

from models import db, utcnow

public_bp = Blueprint('public', __name__)

_started = time.monotonic()


@public_bp.route('/health')
def health():
    return jsonify({
        'status': 'ok',
        'timestamp': utcnow().isoformat(),
        'uptime': round(time.monotonic() - _started, 1),
    })


@public_bp.route('/api/health')
def api_health():
    try:
        db.session.execute(text('SELECT 1'))
        database = 'connected'
    except Exception as e:
        current_app.logger.warning("Health check database error: %s", e)
        database = 'disconnected'
    return jsonify({'status': 'ok', 'database': database, 'timestamp': utcnow().isoformat()})


@public_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
