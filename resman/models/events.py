"""Notification kinds and classification outcomes."""

from __future__ import annotations

from enum import StrEnum


class ResourceEvent(StrEnum):
    """Kind of change notification delivered by a watch."""

    RECONCILED = "reconciled"
    DELETED = "deleted"
    STATUS_MODIFIED = "status_modified"

    @classmethod
    def parse(cls, value: ResourceEvent | str) -> ResourceEvent:
        """Resolve an event name or a raw Kubernetes watch type.

        ``ADDED`` and ``MODIFIED`` both map to RECONCILED since the manager
        decides on its own whether the resource is new or changed.
        """
        if isinstance(value, ResourceEvent):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Unknown resource event: {value!r}")
        normalized = value.strip().lower()
        if normalized in ("added", "modified"):
            return cls.RECONCILED
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown resource event: {value!r}") from None


class EventOutcome(StrEnum):
    """What the manager did with a notification."""

    NOTIFIED = "notified"
    ABSORBED = "absorbed"
