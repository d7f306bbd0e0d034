#!/usr/bin/env python3
"""Create (or reset) the admin account from ADMIN_USERNAME / ADMIN_EMAIL / ADMIN_PASSWORD.

Run from the repository root:
    python scripts/create_admin.py            # create if no admin exists
    python scripts/create_admin.py --force    # replace the existing admin
"""

import argparse
import sys
import uuid
from pathlib import Path

# Add backend to path when running as script
backend_dir = Path(__file__).resolve().parent.parent / "backend"
if backend_dir.exists():
    sys.path.insert(0, str(backend_dir))

from tawjih.config import get_settings
from tawjih.models.admin import Admin
from tawjih.models.base import SyncSessionLocal
from tawjih.services.auth_service import hash_password

MIN_PASSWORD_LENGTH = 8


def create_admin(force: bool = False) -> int:
    settings = get_settings()
    password = settings.admin_password
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        print(f"Error: ADMIN_PASSWORD must be set and at least {MIN_PASSWORD_LENGTH} characters")
        return 1

    db = SyncSessionLocal()
    try:
        existing = db.query(Admin).first()
        if existing and not force:
            print(f"Admin already exists: {existing.username} <{existing.email}> (use --force to replace)")
            return 0
        if existing:
            db.delete(existing)
            db.flush()
            print(f"  Removed admin: {existing.username}")

        admin = Admin(
            id=uuid.uuid4(),
            username=settings.admin_username,
            email=settings.admin_email.strip().lower(),
            password=hash_password(password),
        )
        db.add(admin)
        db.commit()
        print(f"Created admin: {admin.username} <{admin.email}>")
        return 0
    except Exception as e:
        db.rollback()
        print(f"Error: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--force", action="store_true", help="Replace an existing admin")
    args = parser.parse_args()
    sys.exit(create_admin(force=args.force))
