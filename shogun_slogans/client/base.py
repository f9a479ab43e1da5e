"""Lifecycle state machine shared by every client animation.

    IDLE -> STARTED (delay pending) -> RUNNING -> COMPLETE
    STARTED/RUNNING <-> PAUSED
    any -> DESTROYED (terminal)

An instance owns at most one pending timer. Every scheduled step carries a
token; cancelling bumps the token, so a timer that fires late (after pause,
reset or destroy) is ignored and never touches the element.
"""
from __future__ import annotations

import logging
import random as _random
import uuid
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from shogun_slogans.client.dom import Element, Event
from shogun_slogans.client.registry import InstanceRegistry
from shogun_slogans.client.scheduler import Scheduler, TimerHandle
from shogun_slogans.client.settings import ClientOptions

logger = logging.getLogger(__name__)

Step = Callable[[], None]


class AnimationState(str, Enum):
    IDLE = "idle"
    STARTED = "started"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"
    DESTROYED = "destroyed"


class BaseAnimation:
    animation_type = "base"
    complete_event = "shogun:animation:complete"

    def __init__(
        self,
        element: Element,
        scheduler: Scheduler,
        registry: Optional[InstanceRegistry] = None,
        reduced_motion: bool = False,
        options: Optional[ClientOptions] = None,
        random: Callable[[], float] = _random.random,
    ) -> None:
        self.element = element
        self.scheduler = scheduler
        self.registry = registry
        self.reduced_motion = reduced_motion
        self.options = options or ClientOptions()
        self.random = random
        self.id = f"shogun-anim-{uuid.uuid4().hex[:9]}"
        self.state = AnimationState.IDLE
        self.errors: List[str] = []
        self._cleanup_handlers: List[Callable[[], None]] = []
        self._timer: Optional[TimerHandle] = None
        self._pending_step: Optional[Step] = None
        self._token = 0
        self._paused_from: Optional[AnimationState] = None
        if registry is not None:
            registry.register(element, self)
        try:
            self.ready = self.setup()
        except Exception as exc:
            self.record_error(f"Setup failed: {exc}")
            self.ready = False
        self.trace("initialized")

    # hooks

    def setup(self) -> bool:
        """Validate the element scaffold; False leaves the instance inert."""
        return True

    @property
    def delay(self) -> int:
        return 0

    @property
    def auto_start(self) -> bool:
        return True

    def run(self) -> None:
        """First step once any start delay has elapsed."""
        self._complete()

    def show_final(self) -> None:
        """Final visual state, used when motion is reduced."""

    def reset(self) -> None:
        """Return the element to its pre-start visual state."""

    def can_restart(self) -> bool:
        return True

    def completion_detail(self) -> Dict[str, Any]:
        return {"id": self.id}

    # state

    @property
    def is_started(self) -> bool:
        return self.state not in (AnimationState.IDLE, AnimationState.DESTROYED)

    @property
    def is_running(self) -> bool:
        return self.state in (AnimationState.STARTED, AnimationState.RUNNING)

    @property
    def is_paused(self) -> bool:
        return self.state == AnimationState.PAUSED

    @property
    def is_complete(self) -> bool:
        return self.state == AnimationState.COMPLETE

    @property
    def is_destroyed(self) -> bool:
        return self.state == AnimationState.DESTROYED

    @property
    def has_pending_step(self) -> bool:
        return self._pending_step is not None

    def trace(self, message: str) -> None:
        if self.options.debug_mode:
            logger.debug(f"[{self.id}] {self.animation_type}: {message} (state={self.state.value})")

    def record_error(self, message: str) -> None:
        self.errors.append(message)
        logger.warning(f"[{self.id}] {message}")

    def add_cleanup(self, handler: Callable[[], None]) -> None:
        self._cleanup_handlers.append(handler)

    def listen(self, event_type: str, listener: Callable[[Event], None]) -> None:
        self.element.add_event_listener(event_type, listener)
        self.add_cleanup(lambda: self.element.remove_event_listener(event_type, listener))

    def _set_active(self, active: bool) -> None:
        if self.registry is not None:
            self.registry.mark_active(self, active)

    # timers

    def _schedule(self, delay_ms: float, step: Step) -> None:
        if self.is_destroyed:
            return
        self._cancel_timer()
        token = self._token
        self._pending_step = step
        self._timer = self.scheduler.schedule(delay_ms, lambda: self._fire(token))

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._token += 1

    def _fire(self, token: int) -> None:
        if token != self._token or self.is_destroyed or self.is_paused:
            return
        step = self._pending_step
        self._timer = None
        self._pending_step = None
        if step is not None:
            step()

    # lifecycle

    def start(self) -> bool:
        """Begin the animation. Repeated calls while started are no-ops."""
        if self.is_destroyed or not self.ready:
            return False
        if self.state in (AnimationState.STARTED, AnimationState.RUNNING, AnimationState.PAUSED):
            return False
        if self.state == AnimationState.COMPLETE:
            if not self.can_restart():
                return False
            self._cancel_timer()
            self._pending_step = None
            self.reset()

        if self.reduced_motion:
            self.state = AnimationState.RUNNING
            self.show_final()
            self._complete()
            return True

        self._set_active(True)
        if self.delay > 0:
            self.state = AnimationState.STARTED
            self.trace(f"start delayed {self.delay}ms")
            self._schedule(self.delay, self._begin)
        else:
            self._begin()
        return True

    def _begin(self) -> None:
        self.state = AnimationState.RUNNING
        self.trace("running")
        self.run()

    def pause(self) -> bool:
        pausable = self.is_running or (self.is_complete and self.has_pending_step)
        if not pausable:
            return False
        step = self._pending_step
        self._cancel_timer()
        self._pending_step = step
        self._paused_from = self.state
        self.state = AnimationState.PAUSED
        self.trace("paused")
        return True

    def resume(self) -> bool:
        """Continue a paused instance; the pending step runs at once rather than mid-delay."""
        if not self.is_paused:
            return False
        self.state = self._paused_from or AnimationState.RUNNING
        self._paused_from = None
        step = self._pending_step
        self._pending_step = None
        self.trace("resumed")
        if step is not None:
            step()
        return True

    def toggle_pause(self) -> bool:
        """Pause or resume; returns whether the instance is now paused."""
        if self.is_paused:
            self.resume()
        else:
            self.pause()
        return self.is_paused

    def _complete(self, keep_active: bool = False) -> None:
        self.state = AnimationState.COMPLETE
        self._set_active(keep_active)
        self.trace("complete")
        self.element.dispatch_event(Event(self.complete_event, self.completion_detail()))

    def destroy(self) -> None:
        if self.is_destroyed:
            return
        self._cancel_timer()
        self._pending_step = None
        self.state = AnimationState.DESTROYED
        handlers, self._cleanup_handlers = self._cleanup_handlers, []
        for handler in reversed(handlers):
            try:
                handler()
            except Exception as exc:
                self.record_error(f"Cleanup failed: {exc}")
        if self.registry is not None:
            self.registry.unregister(self.element, self)
        self.trace("destroyed")

    def stop(self) -> None:
        self.destroy()

    def describe(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.animation_type,
            "state": self.state.value,
            "errors": list(self.errors),
        }
