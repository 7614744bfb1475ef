# install-ops - Core Module
"""
Core infrastructure for install-ops.
Errors, notification events, the audit logger and settings that the resource
operations build on.
"""

from .errors import OperationError
from .notifications import Notification, NotificationLevel, NotifyHandler, NullNotifier
from .logger import AuditLogger, AuditEntry
from .config import Settings

__all__ = [
    "OperationError",
    "Notification",
    "NotificationLevel",
    "NotifyHandler",
    "NullNotifier",
    "AuditLogger",
    "AuditEntry",
    "Settings",
]

__version__ = "0.1.0"
