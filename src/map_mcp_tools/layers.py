"""Registry of named layers and the feature groups they own."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

LOGGER = logging.getLogger(__name__)


class FeatureKind(str, Enum):
    """Kinds of feature group a layer can own."""

    POINT = "point"
    LINE = "line"
    POLYGON = "polygon"


@dataclass
class LayerEntry:
    """A layer name and the surface group handle it holds per feature kind."""

    name: str
    groups: dict[FeatureKind, Any] = field(default_factory=dict)

    @property
    def kinds(self) -> list[FeatureKind]:
        return [kind for kind in FeatureKind if kind in self.groups]


class LayerStore:
    """
    Map layer names to the feature groups drawn under them.

    A single name may own a point group, a line group and a polygon group at
    the same time. Groups are created lazily by `get_or_create` and only ever
    removed whole. The mapping is guarded by a lock so that snapshots can be
    read from any thread, but the dispatcher only mutates it from the render
    context.
    """

    def __init__(self) -> None:
        self._entries: dict[str, LayerEntry] = {}
        self._lock = threading.RLock()

    def get_or_create(
        self,
        name: str,
        kind: FeatureKind,
        factory: Callable[[], Any],
    ) -> tuple[Any, bool]:
        """
        Return the `kind` group for layer `name`, creating it if missing.

        Args:
            name: Layer name.
            kind: Feature kind of the group.
            factory: Called with no arguments to create a new group handle.

        Returns: (group handle, True if the group was created by this call).
        """
        with self._lock:
            entry = self._entries.get(name)
            if entry is not None and kind in entry.groups:
                return entry.groups[kind], False

            group = factory()
            if entry is None:
                entry = LayerEntry(name=name)
                self._entries[name] = entry
            entry.groups[kind] = group
            LOGGER.debug("Created %s group for layer '%s'", kind.value, name)
            return group, True

    def get(self, name: str) -> LayerEntry | None:
        """Return the entry for `name`, or None."""
        with self._lock:
            return self._entries.get(name)

    def group(self, name: str, kind: FeatureKind) -> Any | None:
        """Return the `kind` group owned by `name`, or None."""
        with self._lock:
            entry = self._entries.get(name)
            if entry is None:
                return None
            return entry.groups.get(kind)

    def remove(self, name: str) -> LayerEntry | None:
        """Drop layer `name` and return its entry (None if it did not exist)."""
        with self._lock:
            return self._entries.pop(name, None)

    def remove_group(self, name: str, kind: FeatureKind) -> Any | None:
        """Drop one group of layer `name`; the entry goes too once it is empty."""
        with self._lock:
            entry = self._entries.get(name)
            if entry is None:
                return None
            group = entry.groups.pop(kind, None)
            if not entry.groups:
                del self._entries[name]
            return group

    def clear(self) -> list[LayerEntry]:
        """Empty the store and return the entries that were held."""
        with self._lock:
            entries = list(self._entries.values())
            self._entries.clear()
            return entries

    def names(self) -> list[str]:
        """Layer names in creation order."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries
