"""Cache layer for resman.

Holds the authoritative in-memory mirror of one watched resource kind and
decides which watch notifications reach the reconciliation handler.

Submodules:
    resource_manager -- ResourceManager: cache, readiness flag and event classification.
"""

from resman.cache.resource_manager import ResourceManager

__all__ = ["ResourceManager"]
