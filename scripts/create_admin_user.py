#!/usr/bin/env python3
"""
Production script to create the initial admin user
Usage: python scripts/create_admin_user.py
Credentials come from ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME (see .env).
"""
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bloodconnect.core.config import settings
from bloodconnect.database.database import SessionLocal, init_db
from bloodconnect.models.user import User, UserRole
from bloodconnect.core.security import hash_password

def create_admin_user():
    """Create initial admin user for production setup."""
    init_db()
    db = SessionLocal()

    try:
        existing_admin = db.query(User).filter(User.email == settings.ADMIN_EMAIL).first()
        if existing_admin:
            print("✅ Admin user already exists")
            return

        admin_user = User(
            email=settings.ADMIN_EMAIL,
            hashed_password=hash_password(settings.ADMIN_PASSWORD),
            name=settings.ADMIN_NAME,
            role=UserRole.ADMIN,
            is_active=True
        )

        db.add(admin_user)
        db.commit()
        print("✅ Admin user created successfully!")
        print(f"📧 Email: {settings.ADMIN_EMAIL}")
        print("⚠️  Please change the password after first login!")

    except Exception as e:
        print(f"❌ Error creating admin user: {e}")
        db.rollback()
        sys.exit(1)
    finally:
        db.close()

if __name__ == "__main__":
    create_admin_user()
