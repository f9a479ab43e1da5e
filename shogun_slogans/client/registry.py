"""Page-level bookkeeping of animation instances."""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional, Set

from shogun_slogans.client.dom import Element

if TYPE_CHECKING:
    from shogun_slogans.client.base import BaseAnimation


class InstanceRegistry:
    """Element -> instance (at most one each) plus the set of active instances."""

    def __init__(self) -> None:
        self._instances: Dict[Element, "BaseAnimation"] = {}
        self._active: Set["BaseAnimation"] = set()

    def register(self, element: Element, instance: "BaseAnimation") -> None:
        self._instances[element] = instance

    def unregister(self, element: Element, instance: "BaseAnimation") -> None:
        if self._instances.get(element) is instance:
            del self._instances[element]
        self._active.discard(instance)

    def get(self, element: Element) -> Optional["BaseAnimation"]:
        return self._instances.get(element)

    def instances(self) -> List["BaseAnimation"]:
        return list(self._instances.values())

    def mark_active(self, instance: "BaseAnimation", active: bool) -> None:
        if active:
            self._active.add(instance)
        else:
            self._active.discard(instance)

    @property
    def active(self) -> Set["BaseAnimation"]:
        return set(self._active)

    def __contains__(self, element: object) -> bool:
        return element in self._instances

    def __len__(self) -> int:
        return len(self._instances)
