# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from fastapi import FastAPI, Request
from contextlib import asynccontextmanager
from apscheduler.schedulers.background import BackgroundScheduler

from app.models import database
from app.models import *  # registers all models

from app.routers import auth_router, daily_log_router, stats_router
from app.routers import notifications_router, share_router, goal_router
from app.routers import profile_router, healthz_router

from app.services.notification_platform import NotificationPlatform
from app.services.reminder_scheduler import ReminderScheduler
from app.utils.dates import get_local_timezone
from app.utils.errors import DamitError
from app.utils.local_store import LocalStore

from app.utils.rate_limit_utils import limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from fastapi.responses import JSONResponse

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


# Create DB tables in one go
database.Base.metadata.create_all(bind=database.engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    tz = get_local_timezone()
    store = LocalStore()
    platform = NotificationPlatform(store)

    # ⏰ One scheduler per device process; owns the daily reminder timer
    scheduler = BackgroundScheduler(timezone=tz, job_defaults={"misfire_grace_time": 60})
    reminders = ReminderScheduler(scheduler, store, platform, tz=tz)

    app.state.local_store = store
    app.state.scheduler = scheduler
    app.state.reminder_scheduler = reminders

    scheduler.start()
    reminders.start()
    logger.info(f"🚀 DAMit! backend started (timezone={tz.zone})")
    yield
    reminders.stop()
    scheduler.shutdown(wait=False)

# Create FastAPI app with lifespan
app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="DAMit! Daily Accountability API",
    description="Daily accountability journal backend",
    version="1.0"
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# Include routers
app.include_router(auth_router.router)
app.include_router(daily_log_router.router)
app.include_router(stats_router.router)
app.include_router(notifications_router.router)
app.include_router(share_router.router)
app.include_router(goal_router.router)
app.include_router(profile_router.router)
app.include_router(healthz_router.router)


# ---------------------- ADDING EXCEPTION HANDLER ----------------------
@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request, exc):
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please slow down."}
    )


@app.exception_handler(DamitError)
async def damit_error_handler(request: Request, exc: DamitError):
    if exc.status_code >= 500:
        logger.error(f"🛑 {request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


@app.get("/")
def read_root():
    return {"message": "Welcome to DAMit! - Daily Accountability backend Live"
                       "Copyright (c) 2025 Shiladitya Mallick "
                       "This file is part of the DAMit! - Daily Accountability project. "
                       "Licensed under the MIT License - see the LICENSE file for details."}

@app.get("/health", tags=["Infra"])
def health_check():
    return {"status": "ok"}
