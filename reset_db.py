# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

# reset_db.py
import sys

from app.models import database  # Make sure this imports your Base
from app.models import *  # registers all models
from app.models.database import engine
from app.utils.local_store import LocalStore

if __name__ == "__main__":
    print("⚠️ Dropping all existing tables...")
    database.Base.metadata.drop_all(bind=engine)

    print("✅ Recreating tables from models...")
    database.Base.metadata.create_all(bind=engine)

    # Device-local settings survive a DB reset unless asked
    if "--with-local-store" in sys.argv:
        store = LocalStore()
        if store.path.exists():
            store.path.unlink()
        print(f"🧹 Removed local store at {store.path}")

    print("✅ Database reset complete.")
