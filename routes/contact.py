"""
Contact form route
"""
from flask import Blueprint, current_app, request

from utils.mail import send_contact_notification
from utils.rate_limit import rate_limited
from utils.responses import json_success, request_data, validation_error
from utils.validators import sanitize_string, validate_contact

contact_bp = Blueprint('contact', __name__, url_prefix='/api/contact')


@contact_bp.route('', methods=['POST'])
@rate_limited('contact', 'CONTACT_RATE_LIMIT_MAX', 'CONTACT_RATE_LIMIT_WINDOW_MINUTES',
              message='Please try again after an hour.')
def submit():
    """Validate a contact message and notify the owner by email"""
    data = request_data(request)
    errors = validate_contact(data)
    if errors:
        current_app.logger.info("Contact form validation errors: %s", errors)
        return validation_error(errors)

    contact = {
        'name': sanitize_string(data['name']),
        'email': data['email'].strip().lower(),
        'phone': (data.get('phone') or '').strip() or None,
        'subject': data['subject'],
        'message': sanitize_string(data['message']),
    }
    if not send_contact_notification(contact):
        # The visitor still gets a success response
        current_app.logger.warning("Contact notification not delivered for %s", contact['email'])

    return json_success(message='Your message has been sent successfully. We will get back to you soon!')
