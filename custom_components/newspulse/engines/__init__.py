"""Engine modules for NewsPulse integration.

Contains pure computation engines:
- filter_engine: Category filtering and filter selection rules
- read_state_engine: Optimistic read-state commands and rollback
- badge_engine: Unread counting and badge display shaping
- permission_engine: Notification permission state machine
"""

# Use relative imports within package to avoid mypy module resolution issues
from .badge_engine import BadgeEngine
from .filter_engine import FilterEngine
from .permission_engine import PermissionEngine, PermissionState
from .read_state_engine import ReadStateAction, ReadStateCommand, ReadStateEngine

__all__ = [
    "BadgeEngine",
    "FilterEngine",
    "PermissionEngine",
    "PermissionState",
    "ReadStateAction",
    "ReadStateCommand",
    "ReadStateEngine",
]
