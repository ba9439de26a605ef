"""
Database initialization script: create tables and seed categories.
"""
from app.db.session import database
from app.services.category_service import seed_categories

if __name__ == "__main__":
    print("Initializing database...")
    database.connect()
    db = database.session()
    try:
        added = seed_categories(db)
    finally:
        db.close()
    print(f"Database initialized successfully! ({added} categories seeded)")
