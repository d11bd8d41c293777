"""
JSON response helpers used by the API routes
"""
from flask import jsonify


def json_error(status, error, message=None, **extra):
    """{success: false, error, message} with the given status code."""
    body = {'success': False, 'error': error}
    if message:
        body['message'] = message
    body.update(extra)
    return jsonify(body), status


def validation_error(details):
    return json_error(400, 'Validation failed', 'Please check the highlighted fields.', details=details)


def json_success(data=None, message=None, status=200, **extra):
    body = {'success': True}
    if message:
        body['message'] = message
    if data is not None:
        body['data'] = data
    body.update(extra)
    return jsonify(body), status


def request_data(request):
    """JSON body, or the form for multipart/urlencoded requests."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()
