"""Manager modules for NewsPulse integration.

Managers orchestrate workflows and coordinate between engines.
They are stateful, event-aware, and own timers and in-flight requests.
"""

from .badge_manager import BadgeManager
from .base_manager import BaseManager
from .local_notification_manager import LocalNotificationManager
from .read_state_manager import ReadStateManager

__all__ = [
    "BadgeManager",
    "BaseManager",
    "LocalNotificationManager",
    "ReadStateManager",
]
