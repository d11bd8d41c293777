"""
Admin model definition
"""
from models import db, utcnow, isoformat
from werkzeug.security import generate_password_hash, check_password_hash


class Admin(db.Model):
    """Admin account with lockout counters"""
    __tablename__ = 'admins'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(100), default='Admin')
    role = db.Column(db.String(20), default='admin')  # admin, super_admin
    is_active = db.Column(db.Boolean, default=True)
    failed_attempts = db.Column(db.Integer, default=0, nullable=False)
    lock_until = db.Column(db.DateTime, nullable=True)
    last_login = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def set_password(self, password):
        """Set password hash"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check if password matches"""
        return check_password_hash(self.password_hash, password)

    @classmethod
    def find_by_email(cls, email):
        """Case-insensitive lookup; emails are stored lower-cased."""
        if not email:
            return None
        return cls.query.filter(db.func.lower(cls.email) == email.strip().lower()).first()

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'role': self.role,
        }

    def to_admin_dict(self):
        data = self.to_dict()
        data.update({
            'isActive': self.is_active,
            'lastLogin': isoformat(self.last_login),
            'createdAt': isoformat(self.created_at),
        })
        return data

    def __repr__(self):
        return f'<Admin {self.email}>'
