"""
Email utility functions
"""
from markupsafe import escape
from flask_mail import Mail, Message
from flask import current_app

mail = Mail()

SUBJECT_LABELS = {
    'general': 'General Inquiry',
    'order': 'Order Request',
    'bulk': 'Bulk Order Inquiry',
    'feedback': 'Feedback',
    'other': 'Other',
}


def send_email(subject, recipients, body, html=None, reply_to=None):
    """
    Send an email

    Args:
        subject: Email subject
        recipients: List of recipient email addresses
        body: Plain text body
        html: HTML body (optional)
        reply_to: Reply-To address (optional)
    """
    msg = Message(
        subject=subject,
        recipients=recipients,
        body=body,
        html=html,
        reply_to=reply_to,
    )
    mail.send(msg)


def mail_configured():
    return bool(current_app.config.get('MAIL_SERVER')) and bool(current_app.config.get('OWNER_EMAIL'))


def send_contact_notification(contact):
    """
    Notify the store owner about a contact form message.
    Returns True when sent; failures are logged, never raised.
    """
    if not mail_configured():
        current_app.logger.info("Email not configured, skipping contact notification")
        return False

    label = SUBJECT_LABELS.get(contact['subject'], contact['subject'])
    subject = f"New Contact Message - {label}"
    body = f"""
A new message was sent from the website contact form:

Name: {contact['name']}
Email: {contact['email']}
Phone: {contact.get('phone') or 'Not provided'}
Subject: {label}

Message:
{contact['message']}
"""
    try:
        send_email(
            subject,
            [current_app.config['OWNER_EMAIL']],
            body,
            html=_contact_notification_html(contact, label),
            reply_to=contact['email'],
        )
        return True
    except Exception as e:
        current_app.logger.error("Error sending contact notification: %s", e, exc_info=True)
        return False


def _contact_notification_html(contact, label) -> str:
    """HTML template for contact notification"""
    name = escape(contact['name'])
    email = escape(contact['email'])
    phone = escape(contact.get('phone') or 'Not provided')
    message = escape(contact['message'])
    return f"""
    <!DOCTYPE html>
    <html>
    <head><meta charset="utf-8"><title>New Contact Message</title></head>
    <body style="font-family: system-ui, sans-serif; max-width: 600px; margin: 0 auto; padding: 24px;">
        <h2 style="color: #FF6B35;">New Contact Message</h2>
        <p style="color: #666;">{escape(label)}</p>
        <table style="width: 100%; margin-bottom: 20px;">
            <tr><td style="padding: 8px 0; width: 120px;"><strong>Name:</strong></td><td>{name}</td></tr>
            <tr><td style="padding: 8px 0;"><strong>Email:</strong></td><td><a href="mailto:{email}">{email}</a></td></tr>
            <tr><td style="padding: 8px 0;"><strong>Phone:</strong></td><td>{phone}</td></tr>
        </table>
        <div style="background: #f8f8f8; padding: 15px; border-radius: 5px; white-space: pre-wrap;">{message}</div>
        <hr style="border: none; border-top: 1px solid #eee; margin: 24px 0;">
        <p style="font-size: 12px; color: #999;">This message was sent from the Brij Namkeen website contact form.</p>
    </body>
    </html>
    """
