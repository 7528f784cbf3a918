"""
Client-side state for the uptime dashboard.

Provides:
- ServiceCache: Local record list with loading/error flags
- SelectionTracker: Selected ids, kept a subset of the cached ids
- BulkOperationCoordinator: All-or-nothing multi-record update/delete
- NotificationSettings: Alerting configuration pass-through
"""

from dashboard.store.cancellation import CancellationToken
from dashboard.store.cache import ServiceCache
from dashboard.store.selection import SelectionTracker
from dashboard.store.bulk import BulkOperationCoordinator
from dashboard.store.notifications import NotificationSettings

__all__ = [
    "CancellationToken",
    "ServiceCache",
    "SelectionTracker",
    "BulkOperationCoordinator",
    "NotificationSettings",
]
