"""Character-by-character typing with optional delete-and-retype looping."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from shogun_slogans.client.base import AnimationState, BaseAnimation
from shogun_slogans.client.dom import Element, Event
from shogun_slogans.client.settings import TypewriterSettings

CURSOR_HIDE_DELAY_MS = 1000
MIN_DELAY_MS = 10
LONG_PAUSE_CHARS = ".!?"
SHORT_PAUSE_CHARS = ",;:"
TOGGLE_KEYS = (" ", "Space", "Enter")


class TypewriterPhase(str, Enum):
    TYPING = "typing"
    DELETING = "deleting"
    WAITING = "waiting"


class TypewriterAnimation(BaseAnimation):
    animation_type = "typewriter"
    complete_event = "shogun:typewriter:complete"

    text_element: Optional[Element] = None
    cursor_element: Optional[Element] = None

    def setup(self) -> bool:
        self.text_element = self.element.query_selector(".typewriter-text")
        self.cursor_element = self.element.query_selector(".typewriter-cursor")
        if self.text_element is None:
            self.record_error("Missing .typewriter-text element")
            return False
        if self.cursor_element is None:
            self.record_error("Missing .typewriter-cursor element")
            return False

        self.settings = TypewriterSettings.from_element(self.element, self.options)
        self.text = self.settings.text
        self.position = 0
        self.phase = TypewriterPhase.TYPING
        self._hover_paused = False

        self.cursor_element.text_content = self.settings.cursor
        self.cursor_element.set_attribute("aria-hidden", "true")
        if not self.settings.cursor_blink:
            self.cursor_element.style["animation"] = "none"
        self.text_element.set_attribute("role", "text")
        self.text_element.set_attribute("aria-label", self.text)
        if self.options.enable_accessibility and not self.element.has_attribute("tabindex"):
            self.element.set_attribute("tabindex", "0")

        self.listen("mouseenter", self._on_mouse_enter)
        self.listen("mouseleave", self._on_mouse_leave)
        self.listen("keydown", self._on_key_down)
        return True

    @property
    def delay(self) -> int:
        return self.settings.delay

    @property
    def auto_start(self) -> bool:
        return self.settings.auto_start

    @property
    def displayed_text(self) -> str:
        return self.text_element.text_content if self.text_element is not None else ""

    def calculate_delay(self, char: str) -> float:
        delay = float(self.settings.speed)
        if char in LONG_PAUSE_CHARS:
            delay *= 3
        elif char in SHORT_PAUSE_CHARS:
            delay *= 2
        elif char == " ":
            delay *= 0.5
        delay += (self.random() - 0.5) * delay * 0.2
        return max(delay, MIN_DELAY_MS)

    def completion_detail(self) -> Dict[str, Any]:
        return {"id": self.id, "text": self.text}

    def can_restart(self) -> bool:
        # A looping instance is never idle after completion; it is waiting to delete.
        return not (self.settings.loop and self.has_pending_step)

    # steps

    def run(self) -> None:
        self.phase = TypewriterPhase.TYPING
        self.position = 0
        self.text_element.text_content = ""
        self._show_cursor()
        self._type_next()

    def _type_next(self) -> None:
        if self.position >= len(self.text):
            self._finish_typing()
            return
        char = self.text[self.position]
        self.position += 1
        self.text_element.text_content = self.text[: self.position]
        self._schedule(self.calculate_delay(char), self._type_next)

    def _finish_typing(self) -> None:
        if self.settings.loop:
            self._complete(keep_active=True)
            self._schedule(self.settings.pause_end, self._start_deleting)
            return
        self._complete()
        if not self.settings.preserve_cursor:
            self._schedule(CURSOR_HIDE_DELAY_MS, self._hide_cursor)

    def _start_deleting(self) -> None:
        self.state = AnimationState.RUNNING
        self.phase = TypewriterPhase.DELETING
        self._set_active(True)
        self._delete_next()

    def _delete_next(self) -> None:
        if self.position <= 0:
            self.phase = TypewriterPhase.WAITING
            self._schedule(self.settings.pause_start, self._retype)
            return
        self.position -= 1
        self.text_element.text_content = self.text[: self.position]
        self._schedule(self.settings.delete_speed, self._delete_next)

    def _retype(self) -> None:
        self.phase = TypewriterPhase.TYPING
        self._type_next()

    def show_final(self) -> None:
        self.position = len(self.text)
        self.text_element.text_content = self.text
        self._hide_cursor()

    def reset(self) -> None:
        self.position = 0
        self.phase = TypewriterPhase.TYPING
        self.text_element.text_content = ""
        self._show_cursor()

    def _hide_cursor(self) -> None:
        self.cursor_element.style["display"] = "none"

    def _show_cursor(self) -> None:
        self.cursor_element.style.pop("display", None)

    # interaction

    def _on_mouse_enter(self, event: Event) -> None:
        if self.is_running and self.pause():
            self._hover_paused = True

    def _on_mouse_leave(self, event: Event) -> None:
        if self._hover_paused:
            self._hover_paused = False
            self.resume()

    def _on_key_down(self, event: Event) -> None:
        if event.key in TOGGLE_KEYS:
            event.prevent_default()
            self.toggle_pause()

    # live updates

    def update_text(self, text: str) -> None:
        """Replace the target text; a started instance retypes from the beginning."""
        if not self.ready or self.is_destroyed:
            return
        was_started = self.is_started
        self.text = text
        self.settings.text = text
        self.text_element.set_attribute("aria-label", text)
        self._cancel_timer()
        self._pending_step = None
        self._paused_from = None
        self.state = AnimationState.IDLE
        self._set_active(False)
        self.reset()
        if was_started:
            self.start()

    def update_settings(self, **changes: Any) -> None:
        if not self.ready or self.is_destroyed:
            return
        text = changes.pop("text", None)
        self.settings = self.settings.updated(**changes)
        if "cursor" in changes:
            self.cursor_element.text_content = self.settings.cursor
        if "cursor_blink" in changes:
            if self.settings.cursor_blink:
                self.cursor_element.style.pop("animation", None)
            else:
                self.cursor_element.style["animation"] = "none"
        if text is not None:
            self.update_text(str(text))
