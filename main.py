import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from growth_diary.ai import routes as ai_router
from growth_diary.auth import routes as auth_router
from growth_diary.core import config
from growth_diary.core.database import SessionLocal, import_models, init_database
from growth_diary.core.errors import register_exception_handlers
from growth_diary.goals import routes as goals_router
from growth_diary.journals import routes as journals_router
from growth_diary.notifications import routes as notifications_router
from growth_diary.notifications.scheduler import start_notification_scheduler, stop_notification_scheduler
from growth_diary.pages import routes as pages_router
from growth_diary.stats import routes as stats_router
from growth_diary.todos import routes as todos_router

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

import_models()

app = FastAPI(
    title="Personal Growth Diary API",
    version="1.0.0",
    description="Self-hosted journaling, goals, todos and streak tracking.",
)

# Session cookie
app.add_middleware(
    SessionMiddleware,
    secret_key=config.SESSION_SECRET,
    session_cookie=config.SESSION_COOKIE,
    max_age=config.SESSION_MAX_AGE,
    same_site="lax",
    https_only=False,
)

register_exception_handlers(app)

# Routers
app.include_router(auth_router.router)
app.include_router(journals_router.router)
app.include_router(goals_router.router)
app.include_router(todos_router.router)
app.include_router(stats_router.router)
app.include_router(notifications_router.router)
app.include_router(ai_router.router)
app.include_router(pages_router.router)

# Static files
config.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=config.UPLOAD_DIR), name="uploads")
app.mount("/static", StaticFiles(directory=config.PUBLIC_DIR), name="static")


@app.on_event("startup")
def on_startup():
    init_database()
    if config.NOTIFICATIONS_ENABLED:
        start_notification_scheduler(SessionLocal)
    logger.info(f"{config.APP_NAME} started")


@app.on_event("shutdown")
def on_shutdown():
    stop_notification_scheduler()
