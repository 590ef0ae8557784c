"""Resource data structures shared by the manager and its callers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeAlias, TypeVar, runtime_checkable


@runtime_checkable
class WatchedResource(Protocol):
    """Anything the manager can track.

    Only ``name`` and ``generation`` are ever read; the rest of the object is
    opaque.  Two payloads for the same name with equal generations are treated
    as identical, so status-only updates (which do not bump the generation)
    never count as changes.
    """

    @property
    def name(self) -> str: ...

    @property
    def generation(self) -> int | None: ...


T = TypeVar("T", bound=WatchedResource)

# handler(name, resources) -> directive.  ``name`` is None only for the single
# call made when the initial resource set is known to be complete.  Coroutine
# functions are awaited.
ResourceHandler: TypeAlias = Callable[[str | None, Mapping[str, T]], Any]


@dataclass(frozen=True)
class KubeResource:
    """Immutable view of a Kubernetes object as seen by a watch."""

    name: str
    generation: int | None = None
    namespace: str = ""
    spec: dict[str, Any] = field(default_factory=dict)
    status: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> KubeResource:
        """Build from a raw object dict (``metadata``/``spec``/``status``)."""
        metadata = raw.get("metadata") or {}
        name = metadata.get("name")
        if not name or not isinstance(name, str):
            raise ValueError("Kubernetes object has no metadata.name")
        generation = metadata.get("generation")
        return cls(
            name=name,
            generation=int(generation) if generation is not None else None,
            namespace=metadata.get("namespace") or "",
            spec=dict(raw.get("spec") or {}),
            status=dict(raw.get("status") or {}),
        )
