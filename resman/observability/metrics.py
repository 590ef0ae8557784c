"""Prometheus metrics exported by resman.

All series are labelled by the watched resource ``kind``.  Managers sharing
a kind add into the same series, so gauges are adjusted with inc/dec and
never set outright.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge

resource_events_total = Counter(
    "resman_resource_events_total",
    "Notifications received by a resource manager, by outcome.",
    ["kind", "event", "outcome"],
)

handler_errors_total = Counter(
    "resman_handler_errors_total",
    "Reconciliation handler invocations that raised.",
    ["kind", "event"],
)

cached_resources = Gauge(
    "resman_cached_resources",
    "Resources currently held by all managers of this kind.",
    ["kind"],
)

cache_ready = Gauge(
    "resman_cache_ready",
    "Managers of this kind whose initial resource set is known to be complete.",
    ["kind"],
)
