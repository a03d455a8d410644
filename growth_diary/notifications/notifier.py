"""
Local desktop notifications.
"""

import logging
from typing import Optional

from plyer import notification

from growth_diary.core.config import APP_NAME, PUBLIC_DIR

logger = logging.getLogger(__name__)


class DesktopNotifier:
    """Sends OS notifications through plyer. Delivery failures are logged, never raised."""

    def __init__(self, app_name: str = APP_NAME, icon: Optional[str] = None, timeout: int = 10):
        self.app_name = app_name
        default_icon = PUBLIC_DIR / "icons" / "icon.png"
        self.icon = icon or (str(default_icon) if default_icon.exists() else "")
        self.timeout = timeout

    def send(self, title: str, message: str, kind: str = "general") -> bool:
        logger.info(f"Notification [{kind}] {title}: {message}")
        try:
            notification.notify(
                title=title,
                message=message,
                app_name=self.app_name,
                app_icon=self.icon,
                timeout=self.timeout,
            )
            return True
        except Exception as e:
            # headless hosts have no notification backend
            logger.warning(f"Desktop notification failed: {e}")
            return False
