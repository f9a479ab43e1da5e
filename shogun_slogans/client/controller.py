"""
Page orchestration of client animations.

The controller scans a document for animation elements, creates one
instance per element, starts them when they scroll into view and pauses
them when they leave it or the page is hidden. Host pages forward browser
signals (visibility, focus, viewport, insertions) through the ``on_*``
methods and the observers.
"""
from __future__ import annotations

import logging
import random as _random
from typing import Any, Callable, Dict, List, Optional, Type

from shogun_slogans import __version__
from shogun_slogans.client.base import AnimationState, BaseAnimation
from shogun_slogans.client.dom import Document, Element, Event
from shogun_slogans.client.observers import IntersectionEntry, IntersectionObserver, MutationObserver, MutationRecord
from shogun_slogans.client.registry import InstanceRegistry
from shogun_slogans.client.reveal import AnimatedTextAnimation, SloganAnimation
from shogun_slogans.client.scheduler import Scheduler, TimerHandle
from shogun_slogans.client.settings import ClientOptions
from shogun_slogans.client.typewriter import TypewriterAnimation

logger = logging.getLogger(__name__)

ANIMATION_SELECTOR = ".shogun-typewriter, .shogun-slogan, .shogun-animated-text, [data-text]"
RESCAN_DELAY_MS = 100
INITIALIZED_EVENT = "shogun:initialized"


def animation_class_for(element: Element) -> Type[BaseAnimation]:
    classes = element.class_list
    if classes.contains("shogun-typewriter"):
        return TypewriterAnimation
    if classes.contains("shogun-slogan"):
        if element.data("animation") == "typewriter":
            return TypewriterAnimation
        return SloganAnimation
    if classes.contains("shogun-animated-text"):
        return AnimatedTextAnimation
    return TypewriterAnimation


class AnimationController:
    def __init__(
        self,
        document: Document,
        scheduler: Scheduler,
        options: Optional[ClientOptions] = None,
        reduced_motion: bool = False,
        use_intersection_observer: bool = True,
        random: Callable[[], float] = _random.random,
    ) -> None:
        self.document = document
        self.scheduler = scheduler
        self.options = options or ClientOptions()
        self.reduced_motion = reduced_motion
        self.use_intersection_observer = use_intersection_observer
        self.random = random
        self.registry = InstanceRegistry()
        self.initialized = False
        self.intersection_observer: Optional[IntersectionObserver] = None
        self.mutation_observer: Optional[MutationObserver] = None
        self._rescan_timer: Optional[TimerHandle] = None

    def _debug(self, message: str) -> None:
        if self.options.debug_mode:
            logger.debug(message)

    def init(self) -> bool:
        """Scan the document and start observing. Later calls are no-ops."""
        if self.initialized:
            return False
        if self.use_intersection_observer:
            self.intersection_observer = IntersectionObserver(self._on_intersection)
        self.mutation_observer = MutationObserver(self._on_mutation)
        self.mutation_observer.observe(self.document.body)
        self.initialize_animations(self.document)
        self.initialized = True
        self.document.dispatch_event(
            Event(
                INITIALIZED_EVENT,
                {
                    "version": __version__,
                    "animationsCount": len(self.registry),
                    "prefersReducedMotion": self.reduced_motion,
                },
            )
        )
        logger.info(f"Shogun Slogans client initialized with {len(self.registry)} animations")
        return True

    def initialize_animations(self, root: Element) -> int:
        """Create instances for unclaimed animation elements under ``root``. Returns how many."""
        candidates = root.query_selector_all(ANIMATION_SELECTOR)
        if not isinstance(root, Document) and root.matches(ANIMATION_SELECTOR):
            candidates.insert(0, root)
        created = 0
        for element in candidates:
            if element in self.registry:
                continue
            instance = self.create_animation(element)
            created += 1
            if not instance.ready or not instance.auto_start:
                continue
            if self.intersection_observer is not None:
                self.intersection_observer.observe(element)
            else:
                instance.start()
        self._debug(f"Initialized {created} animations")
        return created

    def create_animation(self, element: Element) -> BaseAnimation:
        existing = self.registry.get(element)
        if existing is not None:
            return existing
        animation_class = animation_class_for(element)
        instance = animation_class(
            element,
            self.scheduler,
            registry=self.registry,
            reduced_motion=self.reduced_motion,
            options=self.options,
            random=self.random,
        )
        if not instance.ready:
            logger.warning(f"Animation {instance.id} not started: {'; '.join(instance.errors)}")
        return instance

    def get_instance(self, element: Element) -> Optional[BaseAnimation]:
        return self.registry.get(element)

    # observers

    def _on_intersection(self, entries: List[IntersectionEntry]) -> None:
        for entry in entries:
            instance = self.registry.get(entry.target)
            if instance is None or instance.is_destroyed:
                continue
            if entry.is_intersecting:
                if instance.is_paused:
                    instance.resume()
                elif instance.state == AnimationState.IDLE:
                    instance.start()
            else:
                instance.pause()

    def _on_mutation(self, records: List[MutationRecord]) -> None:
        if not any(record.added_nodes for record in records):
            return
        if self._rescan_timer is not None:
            self._rescan_timer.cancel()
        self._rescan_timer = self.scheduler.schedule(RESCAN_DELAY_MS, self._rescan)

    def _rescan(self) -> None:
        self._rescan_timer = None
        if self.initialized:
            self.initialize_animations(self.document)

    # bulk control

    def pause_all(self) -> int:
        return sum(1 for instance in self.registry.instances() if instance.pause())

    def resume_all(self) -> int:
        resumed = 0
        for instance in self.registry.instances():
            if not instance.is_paused:
                continue
            observer = self.intersection_observer
            if observer is not None and observer.is_observing(instance.element):
                if not observer.is_visible(instance.element):
                    continue
            if instance.resume():
                resumed += 1
        return resumed

    def stop_all(self) -> None:
        for instance in self.registry.instances():
            instance.stop()

    def destroy_all(self) -> None:
        """Tear everything down; safe to call repeatedly, including during unload."""
        self.stop_all()
        if self._rescan_timer is not None:
            self._rescan_timer.cancel()
            self._rescan_timer = None
        if self.intersection_observer is not None:
            self.intersection_observer.disconnect()
        if self.mutation_observer is not None:
            self.mutation_observer.disconnect()
        self.initialized = False

    # host signals

    def on_visibility_change(self, hidden: bool) -> None:
        self.document.hidden = hidden
        if hidden:
            self.pause_all()
        else:
            self.resume_all()

    def on_blur(self) -> None:
        self.pause_all()

    def on_focus(self) -> None:
        if not self.document.hidden:
            self.resume_all()

    def on_before_unload(self) -> None:
        self.destroy_all()

    def set_reduced_motion(self, reduced: bool) -> None:
        """Applies to instances started from now on."""
        self.reduced_motion = reduced
        for instance in self.registry.instances():
            instance.reduced_motion = reduced
        self._debug(f"Reduced motion preference changed: {reduced}")

    # events

    def on(self, event_type: str, callback: Callable[[Event], None]) -> None:
        self.document.add_event_listener(event_type, callback)

    def off(self, event_type: str, callback: Callable[[Event], None]) -> None:
        self.document.remove_event_listener(event_type, callback)

    def get_state(self) -> Dict[str, Any]:
        return {
            "version": __version__,
            "initialized": self.initialized,
            "animations_count": len(self.registry),
            "active_count": len(self.registry.active),
            "reduced_motion": self.reduced_motion,
            "instances": [instance.describe() for instance in self.registry.instances()],
        }
