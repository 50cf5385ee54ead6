# File: scripts/create_manager.py
# Project: swapify-admin-backend
#
# Usage: python -m scripts.create_manager
# Reads DATABASE_URL / JWT_SECRET / MANAGER_* from the environment or .env.

from app.core.config import settings
from app.db.init_db import create_tables
from app.db.session import SessionLocal
from app.services.bootstrap import ensure_manager


def main() -> None:
    create_tables()
    db = SessionLocal()
    try:
        manager, created = ensure_manager(db)
    finally:
        db.close()
    if created:
        print(f"manager account created -> username={manager.username!r} password={settings.manager_password!r}")
        print("IMPORTANT: change the default password after first login!")
    else:
        print(f"manager already exists -> username={manager.username!r}")


if __name__ == "__main__":
    main()
