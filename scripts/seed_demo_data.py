"""
Seed a demo manager and employees across departments.
Existing accounts (matched by email) are left unchanged. Run from the project root with .env loaded.

Usage:
  python scripts/seed_demo_data.py
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.core.logging import setup_logging
from app.db.init_db import init_db
from app.db.session import SessionLocal, create_sqlite_schema


def main():
    setup_logging("INFO")
    create_sqlite_schema()

    db = SessionLocal()
    try:
        init_db(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
