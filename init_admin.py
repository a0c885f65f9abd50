#!/usr/bin/env python3
"""
Initialize the default admin account for a fresh install.
Run with: python init_admin.py
(`flask seed-admin` does the same with a password prompt.)
"""
import os

from ayurclinic import create_app
from ayurclinic.extensions import db
from ayurclinic.seeds import create_admin

DEFAULT_ADMIN = {
    'email': os.getenv('ADMIN_EMAIL', 'admin@ayurclinic.com'),
    'password': os.getenv('ADMIN_PASSWORD', 'admin123'),
    'name': 'Clinic Admin',
}


def init_admin():
    app = create_app()
    with app.app_context():
        db.create_all()
        user, created = create_admin(**DEFAULT_ADMIN)
        if created:
            print(f"Created admin: {user.email}")
            print("Change the default password after first login!")
        else:
            print(f"Admin already exists: {user.email}")


if __name__ == '__main__':
    init_admin()
