"""
Create test user (+ empty profile)
"""
from app.infrastructure.db.session import open_session
from app.auth import get_user_by_email, register_user

EMAIL = "test@example.com"
PASSWORD = "password123"

with open_session() as db:
    existing = get_user_by_email(db, EMAIL)
    if existing:
        print(f"User already exists: {EMAIL} (ID: {existing.id})")
    else:
        user = register_user(db, EMAIL, PASSWORD, full_name="Test User")
        print("Created user:")
        print(f"  ID: {user.id}")
        print(f"  Email: {EMAIL}")
        print(f"  Password: {PASSWORD}")
