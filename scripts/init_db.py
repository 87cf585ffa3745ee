#!/usr/bin/env python3
"""
Initialize the finance dashboard database.

Run this script to create the database schema.
"""
from finance_dashboard.config.settings import DashboardSettings
from finance_dashboard.database.connection import SCHEMA_PATH, DatabaseConfig, DatabaseManager

def main():
    """Initialize the database."""
    settings = DashboardSettings.load()

    config = DatabaseConfig(settings.db_path)
    print(f"Initializing database at: {config.db_path}")

    db = DatabaseManager(config)
    try:
        print(f"Executing schema from: {SCHEMA_PATH}")
        db.initialize()
        row = db.schema_version()
    finally:
        db.close()

    if row:
        print(f"✓ Database initialized successfully!")
        print(f"  Schema version: {row['version']}")
        print(f"  Description: {row['description']}")
    else:
        print("✗ Database initialization may have failed")

if __name__ == "__main__":
    main()
