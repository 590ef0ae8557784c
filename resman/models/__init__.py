"""Core data structures for resman."""

from resman.models.config import LogConfig, ResmanConfig, ResourceManagerConfig
from resman.models.events import EventOutcome, ResourceEvent
from resman.models.resources import KubeResource, ResourceHandler, WatchedResource

__all__ = [
    "EventOutcome",
    "KubeResource",
    "LogConfig",
    "ResmanConfig",
    "ResourceEvent",
    "ResourceHandler",
    "ResourceManagerConfig",
    "WatchedResource",
]
