"""
Create an admin account, or reset the password of an existing one.
Run: python create_admin.py admin@example.com
     or: python create_admin.py admin@example.com "YourPassword" "Display Name"
"""
import sys
import getpass


def _read_password():
    password = getpass.getpass("Password: ")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        print("Passwords do not match. Aborted.")
        return None
    return password


def create_admin():
    """Create or reset an admin user"""
    from app import create_app
    from models import db
    from models.admin import Admin
    from utils.validators import validate_email

    if len(sys.argv) < 2:
        print(__doc__)
        return 1

    email = sys.argv[1].strip().lower()
    if not validate_email(email):
        print("Invalid email address. Aborted.")
        return 1

    password = sys.argv[2] if len(sys.argv) >= 3 else _read_password()
    if password is None:
        return 1
    if not 6 <= len(password) <= 100:
        print("Password must be 6-100 characters. Aborted.")
        return 1
    name = sys.argv[3] if len(sys.argv) >= 4 else 'Admin'

    app = create_app()
    with app.app_context():
        admin = Admin.find_by_email(email)
        created = admin is None
        if created:
            admin = Admin(email=email, name=name, role='admin', is_active=True)
            db.session.add(admin)
        admin.set_password(password)
        admin.is_active = True
        admin.failed_attempts = 0
        admin.lock_until = None

        try:
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            print("[ERROR]", e)
            return 1

        if created:
            print("[SUCCESS] Admin user created successfully!")
        else:
            print("[SUCCESS] Admin user password reset successfully!")
        print("\n" + "=" * 50)
        print("ADMIN LOGIN:")
        print("=" * 50)
        print("Endpoint: POST /api/auth/login")
        print("Email:   ", admin.email)
        print("=" * 50)
    return 0


if __name__ == '__main__':
    sys.exit(create_admin())
