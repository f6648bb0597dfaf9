#!/usr/bin/env python3
"""
Initialize database tables and indexes
"""
import sys
import os

# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.core.config import settings
from app.core.database import Base, Database


def init_database():
    """Create the waitlist tables, unique constraint and indexes if missing"""
    database = Database(settings)
    try:
        print("Creating database tables...")
        database.create_all()
        print(f"Tables created: {', '.join(sorted(Base.metadata.tables))}")
    finally:
        database.dispose()


if __name__ == "__main__":
    init_database()
    print("Database initialization complete!")
