#!/usr/bin/env python
"""
Initialize the database schema for a fresh deployment.
Run this once after deploying, or use `alembic upgrade head`.
"""
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import validate_config
from database import engine, Base
import models  # noqa: F401  registers every table on Base.metadata


def init_database():
    """Validate configuration and create all tables."""
    print("Starting database initialization...")

    validate_config()

    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created.")

    print("Database initialization complete!")


if __name__ == "__main__":
    init_database()
