# scripts/setup/init_db.py
"""
Initialize database: creates all tables.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import inspect, text
from emissions.config import settings
from emissions.database import Database


def main():
    print("Emissions DB Initialization")
    print("=" * 40)
    print(f"Database: {settings.DATABASE_URL}")

    database = Database(settings.DATABASE_URL)

    # Test connection
    try:
        with database.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("Database connection OK")
    except Exception as e:
        print(f"Cannot connect to database: {e}")
        sys.exit(1)

    print("\nCreating tables...")
    database.initialize()

    tables = sorted(inspect(database.engine).get_table_names())
    print(f"\nTables in database ({len(tables)} total):")
    for t in tables:
        print(f"   - {t}")

    database.dispose()
    print("\nDatabase ready! You can now start the backend:")
    print(f"   uvicorn emissions.main:app --host {settings.BACKEND_IP} --port {settings.BACKEND_PORT}")


if __name__ == "__main__":
    main()
