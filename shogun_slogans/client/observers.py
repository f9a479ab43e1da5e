"""Viewport and DOM-insertion observers, driven by explicit notifications."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Set

from shogun_slogans.client.dom import Element

logger = logging.getLogger(__name__)

ROOT_MARGIN_PX = 50
THRESHOLD = 0.1


@dataclass
class IntersectionEntry:
    target: Element
    is_intersecting: bool
    intersection_ratio: float = 1.0


@dataclass
class MutationRecord:
    added_nodes: List[Element] = field(default_factory=list)
    removed_nodes: List[Element] = field(default_factory=list)


class IntersectionObserver:
    """Reports observed elements entering or leaving the (margin-extended) viewport."""

    def __init__(
        self,
        callback: Callable[[List[IntersectionEntry]], None],
        root_margin: int = ROOT_MARGIN_PX,
        threshold: float = THRESHOLD,
    ) -> None:
        self.callback = callback
        self.root_margin = root_margin
        self.threshold = threshold
        self._targets: List[Element] = []
        self._visible: Set[int] = set()
        self.connected = True

    def observe(self, element: Element) -> None:
        if element not in self._targets:
            self._targets.append(element)

    def unobserve(self, element: Element) -> None:
        if element in self._targets:
            self._targets.remove(element)
        self._visible.discard(id(element))

    def disconnect(self) -> None:
        self._targets = []
        self._visible = set()
        self.connected = False

    def is_observing(self, element: Element) -> bool:
        return element in self._targets

    def is_visible(self, element: Element) -> bool:
        return id(element) in self._visible

    def notify(
        self,
        element: Element,
        is_intersecting: bool,
        ratio: Optional[float] = None,
        distance: Optional[float] = None,
    ) -> None:
        """
        Report a viewport change for ``element``.

        ``distance`` is how far (px) the element sits outside the viewport; within
        ``root_margin`` it counts as intersecting, so animations start just before
        they scroll in.
        """
        if not self.connected or element not in self._targets:
            return
        if not is_intersecting and distance is not None and distance <= self.root_margin:
            is_intersecting = True
        if ratio is None:
            ratio = 1.0 if is_intersecting else 0.0
        intersecting = is_intersecting and ratio >= self.threshold
        if intersecting:
            self._visible.add(id(element))
        else:
            self._visible.discard(id(element))
        self.callback([IntersectionEntry(element, intersecting, ratio)])


class MutationObserver:
    """Forwards subtree insertions reported by the host page."""

    def __init__(self, callback: Callable[[List[MutationRecord]], None]) -> None:
        self.callback = callback
        self.root: Optional[Element] = None

    def observe(self, root: Element) -> None:
        self.root = root

    def disconnect(self) -> None:
        self.root = None

    def notify_added(self, *nodes: Element) -> None:
        if self.root is None or not nodes:
            return
        self.callback([MutationRecord(added_nodes=list(nodes))])
