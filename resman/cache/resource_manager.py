"""In-memory mirror of one watched resource kind.

ResourceManager keeps the last-known version of every resource reported by a
watch and decides, per notification, whether the reconciliation handler should
run.  While ``wait_for_all`` is in effect the manager stays silent until the
watch has re-sent an already known, unchanged resource: that resend means the
initial listing has wrapped around, so the set is complete.  The handler is
then called once with ``name=None`` and afterwards for every real change.

Classification and cache mutation happen under an asyncio.Lock; the handler
runs after the lock is released and always receives a read-only snapshot of
the whole set.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, Generic

from resman.models.config import ResourceManagerConfig
from resman.models.events import EventOutcome, ResourceEvent
from resman.models.resources import ResourceHandler, T
from resman.observability.logging import get_logger
from resman.observability.metrics import (
    cache_ready,
    cached_resources,
    handler_errors_total,
    resource_events_total,
)


def _resource_name(resource: Any) -> str:
    name = getattr(resource, "name", None)
    if not isinstance(name, str) or not name:
        raise ValueError(f"Resource has no usable name: {resource!r}")
    return name


def _require_name(name: str) -> str:
    if not isinstance(name, str) or not name:
        raise ValueError("Resource name must be a non-empty string")
    return name


class ResourceManager(Generic[T]):
    """Tracks the resources of one kind and gates the reconciliation handler.

    Args:
        wait_for_all:    Hold back every handler call, and ignore deleted and
                         status-modified notifications, until the initial
                         resource set is known to be complete.
        kind:            Label used in logs and metrics.
        resource_filter: Optional predicate; resources it rejects are ignored
                         entirely.

    The three notification methods return whatever the handler returned, or
    None when the notification was absorbed without calling it.
    """

    def __init__(
        self,
        wait_for_all: bool = True,
        *,
        kind: str = "resource",
        resource_filter: Callable[[T], bool] | None = None,
    ) -> None:
        self._kind = kind
        self._filter = resource_filter
        self._lock = asyncio.Lock()
        self._resources: dict[str, T] = {}
        self._ready = not wait_for_all
        self._log = get_logger("cache.resource_manager", kind=kind)

        # Shared by every manager of this kind: adjusted, never reset.
        cache_ready.labels(kind=kind)
        cached_resources.labels(kind=kind)
        if self._ready:
            cache_ready.labels(kind=kind).inc()

    @classmethod
    def from_config(cls, config: ResourceManagerConfig, **kwargs: Any) -> ResourceManager[T]:
        """Build a manager from a ResourceManagerConfig."""
        return cls(wait_for_all=config.wait_for_all, kind=config.kind, **kwargs)

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def is_ready(self) -> bool:
        """True once the initial resource set is known to be complete."""
        return self._ready

    def __len__(self) -> int:
        return len(self._resources)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    async def reconciled(self, resource: T, handler: ResourceHandler[T]) -> Any:
        """Handle an added/modified notification.

        The stored copy is always refreshed.  The handler runs for a new name
        or a changed generation once ready, and once with ``name=None`` for
        the resend that completes discovery.
        """
        name = _resource_name(resource)
        if not self._accepts(resource, ResourceEvent.RECONCILED, name):
            return None

        async with self._lock:
            existing = self._resources.get(name)
            self._resources[name] = resource
            if existing is None:
                cached_resources.labels(kind=self._kind).inc()

            if existing is None:
                if not self._ready:
                    return self._absorb(ResourceEvent.RECONCILED, name, "discovering")
                target: str | None = name
            elif existing.generation == resource.generation:
                if self._ready:
                    return self._absorb(ResourceEvent.RECONCILED, name, "unchanged")
                self._mark_ready()
                target = None
            else:
                if not self._ready:
                    return self._absorb(ResourceEvent.RECONCILED, name, "discovering")
                target = name

            snapshot = self._snapshot()

        return await self._notify(ResourceEvent.RECONCILED, name, target, snapshot, handler)

    async def deleted(self, resource: T, handler: ResourceHandler[T]) -> Any:
        """Handle a deleted notification.

        Deletions seen before the set is complete are ignored and leave the
        cache untouched; deleting an unknown name is a no-op.
        """
        name = _resource_name(resource)
        if not self._accepts(resource, ResourceEvent.DELETED, name):
            return None

        async with self._lock:
            if not self._ready:
                return self._absorb(ResourceEvent.DELETED, name, "discovering")
            if name not in self._resources:
                return self._absorb(ResourceEvent.DELETED, name, "unknown")

            del self._resources[name]
            cached_resources.labels(kind=self._kind).dec()
            snapshot = self._snapshot()

        return await self._notify(ResourceEvent.DELETED, name, name, snapshot, handler)

    async def status_modified(self, resource: T, handler: ResourceHandler[T]) -> Any:
        """Handle a status-only notification.

        The stored entry is not replaced: status changes never bump the
        generation, so they carry nothing the cache tracks.
        """
        name = _resource_name(resource)
        if not self._accepts(resource, ResourceEvent.STATUS_MODIFIED, name):
            return None

        async with self._lock:
            if not self._ready:
                return self._absorb(ResourceEvent.STATUS_MODIFIED, name, "discovering")
            if name not in self._resources:
                return self._absorb(ResourceEvent.STATUS_MODIFIED, name, "unknown")

            snapshot = self._snapshot()

        return await self._notify(ResourceEvent.STATUS_MODIFIED, name, name, snapshot, handler)

    async def dispatch(
        self,
        event: ResourceEvent | str,
        resource: T,
        handler: ResourceHandler[T],
    ) -> Any:
        """Route a notification by event type.

        Accepts ResourceEvent members, their string values and the raw watch
        types ``ADDED``, ``MODIFIED`` and ``DELETED``.
        """
        kind = ResourceEvent.parse(event)
        if kind is ResourceEvent.RECONCILED:
            return await self.reconciled(resource, handler)
        if kind is ResourceEvent.DELETED:
            return await self.deleted(resource, handler)
        return await self.status_modified(resource, handler)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def contains(self, name: str) -> bool:
        return _require_name(name) in self._resources

    def get_resource(self, name: str) -> T | None:
        """Return the stored resource for *name*, or None."""
        return self._resources.get(_require_name(name))

    def clone_resources(self) -> dict[str, T]:
        """Return an independent copy of the current resource set."""
        return dict(self._resources)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _accepts(self, resource: T, event: ResourceEvent, name: str) -> bool:
        if self._filter is None or self._filter(resource):
            return True
        self._absorb(event, name, "filtered")
        return False

    def _snapshot(self) -> Mapping[str, T]:
        return MappingProxyType(dict(self._resources))

    def _mark_ready(self) -> None:
        self._ready = True
        cache_ready.labels(kind=self._kind).inc()
        self._log.info("resources_discovered", count=len(self._resources))

    def _absorb(self, event: ResourceEvent, name: str, reason: str) -> None:
        resource_events_total.labels(
            kind=self._kind, event=event.value, outcome=EventOutcome.ABSORBED.value
        ).inc()
        self._log.debug("event_absorbed", event_type=event.value, resource=name, reason=reason)

    async def _notify(
        self,
        event: ResourceEvent,
        resource_name: str,
        name: str | None,
        snapshot: Mapping[str, T],
        handler: ResourceHandler[T],
    ) -> Any:
        """Invoke *handler* outside the lock; its errors propagate to the caller."""
        resource_events_total.labels(
            kind=self._kind, event=event.value, outcome=EventOutcome.NOTIFIED.value
        ).inc()
        try:
            result = handler(name, snapshot)
            if inspect.isawaitable(result):
                result = await result
        except Exception:
            handler_errors_total.labels(kind=self._kind, event=event.value).inc()
            self._log.exception("handler_failed", event_type=event.value, resource=resource_name)
            raise
        return result
