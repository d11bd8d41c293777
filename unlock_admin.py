"""
Clear a lockout on an admin account without changing its password.
Run: python unlock_admin.py admin@example.com
"""
import sys


def main():
    from app import create_app
    from models import db
    from models.admin import Admin

    if len(sys.argv) < 2:
        print(__doc__)
        return 1

    app = create_app()
    with app.app_context():
        admin = Admin.find_by_email(sys.argv[1])
        if not admin:
            print("No admin found with that email. Check your database.")
            return 1

        print("  Failed attempts:", admin.failed_attempts)
        print("  Locked until:   ", admin.lock_until or "-")
        admin.failed_attempts = 0
        admin.lock_until = None
        try:
            db.session.commit()
            print("[SUCCESS] Lockout cleared for", admin.email)
        except Exception as e:
            db.session.rollback()
            print("[ERROR]", e)
            return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
