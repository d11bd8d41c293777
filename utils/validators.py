"""
Input validation helpers. Validators return a list of {field, message}
dicts; an empty list means the input is acceptable.
"""
import re

from models.blog import BLOG_CATEGORIES
from models.category import SlotType

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
PHONE_RE = re.compile(r'^[+]?[\d\s-]{10,15}$')
CONTACT_SUBJECTS = ('general', 'order', 'bulk', 'feedback', 'other')

_STRIP_PATTERNS = (
    re.compile(r'[<>]'),
    re.compile(r'javascript:', re.IGNORECASE),
    re.compile(r'on\w+=', re.IGNORECASE),
)


def validate_email(email):
    """Basic email format check"""
    return bool(email) and EMAIL_RE.match(email) is not None


def sanitize_string(value):
    """Trim and drop markup fragments from free text."""
    if not isinstance(value, str):
        return value
    value = value.strip()
    for pattern in _STRIP_PATTERNS:
        value = pattern.sub('', value)
    return value


def to_bool(value, default=False):
    """Coerce JSON booleans and multipart form strings."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip().lower() in ('true', '1', 'on', 'yes')


def to_int(value):
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _error(field, message):
    return {'field': field, 'message': message}


def _check_length(errors, data, field, label, min_len=None, max_len=None, required=False):
    value = data.get(field)
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            errors.append(_error(field, f'{label} is required'))
        return
    if not isinstance(value, str):
        errors.append(_error(field, f'{label} must be a string'))
        return
    length = len(value.strip())
    if min_len is not None and length < min_len:
        errors.append(_error(field, f'{label} must be at least {min_len} characters'))
    elif max_len is not None and length > max_len:
        errors.append(_error(field, f'{label} cannot exceed {max_len} characters'))


def validate_login(data):
    errors = []
    email = (data.get('email') or '').strip() if isinstance(data.get('email'), str) else ''
    if not email:
        errors.append(_error('email', 'Email is required'))
    elif not validate_email(email):
        errors.append(_error('email', 'Invalid email format'))
    password = data.get('password')
    if not password or not isinstance(password, str):
        errors.append(_error('password', 'Password is required'))
    elif not 6 <= len(password) <= 100:
        errors.append(_error('password', 'Password must be 6-100 characters'))
    return errors


def validate_category(data, partial=False):
    errors = []
    _check_length(errors, data, 'name', 'Name', 2, 50, required=not partial)
    _check_length(errors, data, 'description', 'Description', max_len=200)
    _check_length(errors, data, 'icon', 'Icon', max_len=16)
    if 'displayOrder' in data and data['displayOrder'] is not None and to_int(data['displayOrder']) is None:
        errors.append(_error('displayOrder', 'Display order must be an integer'))
    if 'slotType' in data and SlotType.parse(data['slotType']) is None:
        errors.append(_error('slotType', f"Slot type must be one of: {', '.join(m.value for m in SlotType)}"))
    if 'toggleSlot' in data and data['toggleSlot'] not in SlotType.special_values():
        errors.append(_error('toggleSlot', f"Slot type must be one of: {', '.join(SlotType.special_values())}"))
    return errors


def validate_reorder(data):
    """Expect {"categories": [{"id": int, "displayOrder": int}, ...]}."""
    items = data.get('categories') if isinstance(data, dict) else None
    if not isinstance(items, list):
        return [_error('categories', 'Categories array is required')]
    errors = []
    for index, item in enumerate(items):
        if not isinstance(item, dict) or to_int(item.get('id')) is None or to_int(item.get('displayOrder')) is None:
            errors.append(_error(f'categories[{index}]', 'Each entry needs an integer id and displayOrder'))
    return errors


def validate_product(data, partial=False):
    errors = []
    _check_length(errors, data, 'name', 'Product name', 2, 100, required=not partial)
    _check_length(errors, data, 'description', 'Description', 3, 2000, required=not partial)
    _check_length(errors, data, 'category', 'Category', max_len=50, required=not partial)
    if data.get('price') not in (None, ''):
        try:
            price = float(data['price'])
        except (TypeError, ValueError):
            price = None
        if price is None or not 0 <= price <= 100000:
            errors.append(_error('price', 'Price must be between 0 and 100000'))
    if data.get('stock') not in (None, ''):
        stock = to_int(data['stock'])
        if stock is None or not 0 <= stock <= 10000:
            errors.append(_error('stock', 'Stock must be 0-10000'))
    _check_length(errors, data, 'weight', 'Weight', max_len=50)
    image = data.get('image')
    if isinstance(image, str) and image.startswith('data:'):
        errors.append(_error('image', 'Base64 images not allowed. Use file upload instead.'))
    return errors


def validate_blog(data, partial=False):
    errors = []
    _check_length(errors, data, 'title', 'Title', max_len=100, required=not partial)
    _check_length(errors, data, 'excerpt', 'Excerpt', max_len=200, required=not partial)
    _check_length(errors, data, 'content', 'Content', required=not partial)
    _check_length(errors, data, 'author', 'Author', max_len=100)
    if data.get('category') not in (None, '') and data.get('category') not in BLOG_CATEGORIES:
        errors.append(_error('category', f"Category must be one of: {', '.join(BLOG_CATEGORIES)}"))
    return errors


def validate_contact(data):
    errors = []
    _check_length(errors, data, 'name', 'Name', 2, 100, required=True)
    email = data.get('email')
    if not email or not isinstance(email, str) or not email.strip():
        errors.append(_error('email', 'Email is required'))
    elif not validate_email(email.strip()):
        errors.append(_error('email', 'Invalid email address'))
    phone = data.get('phone')
    if phone not in (None, '') and (not isinstance(phone, str) or not PHONE_RE.match(phone.strip())):
        errors.append(_error('phone', 'Invalid phone number'))
    subject = data.get('subject')
    if not subject:
        errors.append(_error('subject', 'Subject is required'))
    elif subject not in CONTACT_SUBJECTS:
        errors.append(_error('subject', 'Invalid subject'))
    _check_length(errors, data, 'message', 'Message', 10, 2000, required=True)
    return errors
