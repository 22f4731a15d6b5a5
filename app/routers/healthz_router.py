# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.



from fastapi import APIRouter, Request
from sqlalchemy import text
from sqlalchemy.orm import Session
from app.models.database import SessionLocal
import os

router = APIRouter()


@router.get("/healthz")
async def health_check(request: Request):
    db: Session = SessionLocal()
    result = {
        "db_connection": False,
        "reminder_scheduler": False,
        "push_configured": bool(os.getenv("FIREBASE_ADMIN_JSON")),
        "storage_configured": bool(os.getenv("SUPABASE_URL") and os.getenv("SUPABASE_KEY")),
    }

    try:
        # ✅ Check DB read
        db.execute(text("SELECT 1"))
        result["db_connection"] = True

        # ✅ Scheduler thread alive
        scheduler = getattr(request.app.state, "scheduler", None)
        result["reminder_scheduler"] = bool(scheduler and scheduler.running)

        return {
            "status": "ok" if all(result.values()) else "partial",
            "details": result
        }

    except Exception as e:
        return {
            "status": "error",
            "error": str(e),
            "details": result
        }

    finally:
        db.close()
