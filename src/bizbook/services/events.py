"""Change notifications and derived-view caching.

Repositories publish a :class:`ChangeEvent` after every committed write.
:class:`DerivedViewCache` subscribes to those events and drops any cached
per-user view that depends on the changed resource, so the next read
recomputes it.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from ..logging_config import get_logger

logger = get_logger(__name__)

ALL_RESOURCES = "*"

Subscriber = Callable[["ChangeEvent"], None]


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    resource: str
    action: str  # "created" | "updated" | "deleted" | "reset"
    user_id: int
    record_id: Any = None


class ChangeNotifier:
    """In-process publish/subscribe registry keyed by resource name."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)
        self._lock = Lock()

    def subscribe(self, resource: str, callback: Subscriber) -> Callable[[], None]:
        """Register *callback* for *resource* (or ``"*"``); returns an unsubscribe hook."""

        with self._lock:
            self._subscribers[resource].append(callback)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(resource, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return unsubscribe

    def publish(self, event: ChangeEvent) -> None:
        with self._lock:
            callbacks = list(self._subscribers.get(event.resource, ()))
            callbacks += self._subscribers.get(ALL_RESOURCES, ())
        for callback in callbacks:
            try:
                callback(event)
            except Exception:
                # The write already committed; a failing observer must not undo the response.
                logger.exception(
                    "Change subscriber failed",
                    extra={"resource": event.resource, "action": event.action},
                )


class DerivedViewCache:
    """Per-user memo of computed views, invalidated by change events."""

    def __init__(
        self,
        notifier: ChangeNotifier,
        *,
        dependencies: Mapping[str, Iterable[str]],
    ) -> None:
        self._dependencies = {view: frozenset(resources) for view, resources in dependencies.items()}
        self._values: Dict[Tuple[str, int, Any], Any] = {}
        self._generations: Dict[int, int] = defaultdict(int)
        self._lock = Lock()
        notifier.subscribe(ALL_RESOURCES, self._on_change)

    def get_or_compute(
        self, view: str, user_id: int, compute: Callable[[], Any], *, key: Any = None
    ) -> Any:
        """Return the cached view or compute it.

        A value is stored only if no change for *user_id* arrived while it was
        being computed. Storing a new *key* drops the user's other keys for
        the same view.
        """

        cache_key = (view, user_id, key)
        with self._lock:
            if cache_key in self._values:
                return self._values[cache_key]
            generation = self._generations[user_id]
        value = compute()
        with self._lock:
            if self._generations[user_id] == generation:
                for stale in [k for k in self._values if k[:2] == (view, user_id)]:
                    del self._values[stale]
                self._values[cache_key] = value
        return value

    def invalidate(self, user_id: int, view: Optional[str] = None) -> int:
        """Drop cached entries for *user_id* (optionally only *view*); returns count."""

        with self._lock:
            doomed = [
                cache_key
                for cache_key in self._values
                if cache_key[1] == user_id and (view is None or cache_key[0] == view)
            ]
            for cache_key in doomed:
                del self._values[cache_key]
        return len(doomed)

    def is_cached(self, view: str, user_id: int, *, key: Any = None) -> bool:
        with self._lock:
            return (view, user_id, key) in self._values

    def _on_change(self, event: ChangeEvent) -> None:
        affected = [
            view
            for view, resources in self._dependencies.items()
            if event.action == "reset" or event.resource in resources
        ]
        if not affected:
            return
        with self._lock:
            self._generations[event.user_id] += 1
        for view in affected:
            if self.invalidate(event.user_id, view):
                logger.debug(
                    "Derived view invalidated",
                    extra={"view": view, "resource": event.resource, "user_id": event.user_id},
                )


__all__ = ["ALL_RESOURCES", "ChangeEvent", "ChangeNotifier", "DerivedViewCache"]
