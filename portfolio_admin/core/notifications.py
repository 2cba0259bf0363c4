"""Admin notifications: transient toasts and the new-message alert"""

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)
toast_logger = logging.getLogger("portfolio_admin.notifications")

ToastBackend = Callable[[str, str], None]
SoundBackend = Callable[[], None]

_LEVELS = {
    "success": logging.INFO,
    "info": logging.INFO,
    "error": logging.ERROR,
}


def log_toast(level: str, message: str) -> None:
    """Default toast backend: write the toast to the notifications logger"""
    toast_logger.log(_LEVELS.get(level, logging.INFO), message)


class NotificationService:
    """
    Surfaces messages to the admin.

    Backends are injected: ``toast(level, message)`` shows a dismissible
    notification and ``sound()`` plays the new-message chime. Nothing here is
    global; each admin session builds its own service.
    """

    def __init__(
        self,
        toast: Optional[ToastBackend] = None,
        sound: Optional[SoundBackend] = None,
        enabled: bool = True
    ):
        self._toast = toast or log_toast
        self._sound = sound
        self.enabled = enabled
        self._previous_unread = 0
        self._first_check = True

    def success(self, message: str) -> None:
        self._toast("success", message)

    def info(self, message: str) -> None:
        self._toast("info", message)

    def error(self, message: str) -> None:
        self._toast("error", message)

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled
        logger.info(f"Message notifications {'enabled' if enabled else 'disabled'}")

    def notify_new_messages(self, unread_count: int) -> bool:
        """
        Alert when the unread contact message count has grown.

        The first call only records the baseline so opening the panel never
        chimes for messages that were already there.

        Returns:
            True if the admin was alerted
        """
        if self._first_check:
            self._first_check = False
            self._previous_unread = unread_count
            return False

        new_messages = unread_count - self._previous_unread
        self._previous_unread = unread_count

        if new_messages <= 0 or not self.enabled:
            return False

        if self._sound is not None:
            try:
                self._sound()
            except Exception as e:
                # a muted or missing audio device must not hide the toast
                logger.warning(f"Notification sound failed: {str(e)}")

        plural = "s" if new_messages > 1 else ""
        self.info(f"You have {new_messages} new message{plural}")
        return True
