"""
SelectionTracker - the set of service ids the user has selected.
"""

from collections.abc import Iterable

from loguru import logger

from dashboard.store.cache import ServiceCache


class SelectionTracker:
    """
    Tracks selected service ids, always a subset of the cached ids.

    The tracker subscribes to the cache, so any change to the record list
    (refresh, delete, eviction) reconciles the selection immediately.

    Usage:
        selection = SelectionTracker(cache)
        selection.toggle("svc-1")
        selection.select_all()
    """

    def __init__(self, cache: ServiceCache):
        self._cache = cache
        self._selected: set[str] = set()
        self._unsubscribe = cache.subscribe(self.reconcile)

    @property
    def selected(self) -> frozenset[str]:
        return frozenset(self._selected)

    @property
    def count(self) -> int:
        return len(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._selected

    def is_selected(self, service_id: str) -> bool:
        return service_id in self._selected

    def toggle(self, service_id: str) -> bool:
        """
        Flip membership of ``service_id``.

        Ids that are not cached cannot be selected and are ignored.

        Returns:
            True if the id is selected afterwards
        """
        if service_id in self._selected:
            self._selected.discard(service_id)
            return False
        return self.select(service_id)

    def select(self, service_id: str) -> bool:
        if service_id not in self._cache:
            logger.warning(f"Ignoring selection of unknown service {service_id}")
            return False
        self._selected.add(service_id)
        return True

    def discard(self, service_id: str) -> None:
        self._selected.discard(service_id)

    def select_all(self) -> int:
        """Select every cached service. Returns the selection size."""
        self._selected = set(self._cache.ids())
        return len(self._selected)

    def clear(self) -> None:
        self._selected.clear()

    def reconcile(self, valid_ids: Iterable[str]) -> frozenset[str]:
        """
        Drop selected ids that are no longer valid.

        Returns:
            The ids that were removed
        """
        stale = self._selected.difference(valid_ids)
        if stale:
            self._selected.difference_update(stale)
            logger.debug(f"Dropped {len(stale)} stale ids from selection")
        return frozenset(stale)

    def detach(self) -> None:
        """Stop following cache changes."""
        self._unsubscribe()
