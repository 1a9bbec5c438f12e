"""Toast notifications: kept for display and written to the log."""

import logging
from collections import namedtuple

logger = logging.getLogger(__name__)

Toast = namedtuple("Toast", "kind message")


class Toaster:
    def __init__(self):
        self.toasts = []

    def _push(self, kind, message, level):
        self.toasts.append(Toast(kind, message))
        logger.log(level, "[%s] %s", kind, message)

    def success(self, message):
        self._push("success", message, logging.INFO)

    def info(self, message):
        self._push("info", message, logging.INFO)

    def error(self, message):
        self._push("error", message, logging.ERROR)

    @property
    def last(self):
        return self.toasts[-1] if self.toasts else None
