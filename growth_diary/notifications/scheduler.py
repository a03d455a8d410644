"""
APScheduler jobs that poll for reminder-worthy conditions and fire desktop
notifications. Jobs only read from the database.
"""
import logging
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy.orm import Session

from growth_diary.ai.quotes import get_motivational_quote
from growth_diary.notifications.db import (
    any_user_wants_motivation,
    count_overdue,
    count_pending_today,
    users_with_reminders,
)
from growth_diary.notifications.notifier import DesktopNotifier

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]

scheduler: Optional[BackgroundScheduler] = None


def check_and_notify(session_factory: SessionFactory, notifier: DesktopNotifier) -> int:
    """
    Notifies every user with reminders enabled about today's pending todos
    (once the threshold is reached) and about overdue todos.

    Returns:
        int: Number of notifications sent.
    """
    sent = 0
    db = session_factory()
    try:
        for settings in users_with_reminders(db):
            pending = count_pending_today(db, settings.user_id)
            if pending >= settings.pending_threshold:
                notifier.send(
                    "📋 Tasks Reminder",
                    f"You have {pending} tasks left for today. Keep going!",
                    "todo-reminder",
                )
                sent += 1

            overdue = count_overdue(db, settings.user_id)
            if overdue > 0:
                notifier.send(
                    "⚠️ Overdue Tasks",
                    f"You have {overdue} overdue tasks. Consider rescheduling them.",
                    "overdue-reminder",
                )
                sent += 1
    except Exception as e:
        logger.error(f"Notification check error: {e}")
    finally:
        db.close()
    return sent


def send_motivational_notification(session_factory: SessionFactory, notifier: DesktopNotifier) -> bool:
    db = session_factory()
    try:
        if not any_user_wants_motivation(db):
            return False
        quote = get_motivational_quote()
        notifier.send("✨ Daily Inspiration", f'"{quote["text"]}" - {quote["author"]}', "motivation")
        return True
    except Exception as e:
        logger.error(f"Motivation notification error: {e}")
        return False
    finally:
        db.close()


def start_notification_scheduler(
    session_factory: SessionFactory,
    notifier: Optional[DesktopNotifier] = None,
) -> BackgroundScheduler:
    """Starts (or restarts) the background scheduler with both notification jobs."""
    global scheduler
    stop_notification_scheduler()

    notifier = notifier or DesktopNotifier()
    scheduler = BackgroundScheduler()
    # every 30 minutes during waking hours
    scheduler.add_job(
        check_and_notify,
        CronTrigger(minute="*/30", hour="9-21"),
        args=[session_factory, notifier],
        id="pending-check",
        replace_existing=True,
    )
    scheduler.add_job(
        send_motivational_notification,
        CronTrigger(minute=0, hour="10,14,18"),
        args=[session_factory, notifier],
        id="motivation",
        replace_existing=True,
    )
    scheduler.start()
    logger.info("Notification scheduler started")
    return scheduler


def stop_notification_scheduler() -> None:
    global scheduler
    if scheduler is not None and scheduler.running:
        scheduler.shutdown(wait=False)
    scheduler = None
