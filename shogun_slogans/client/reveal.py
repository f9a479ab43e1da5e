"""Whole-text reveal effects driven by inline styles and CSS classes."""
from __future__ import annotations

from typing import Any, Dict, Optional

from shogun_slogans.client.base import BaseAnimation
from shogun_slogans.client.dom import Element
from shogun_slogans.client.settings import RevealSettings

BOUNCE_EASING = "cubic-bezier(0.68, -0.55, 0.265, 1.55)"

# style: (initial, final)
SLOGAN_STYLES: Dict[str, tuple] = {
    "fade": ({"opacity": "0"}, {"opacity": "1"}),
    "slide": ({"opacity": "0", "transform": "translateY(20px)"}, {"opacity": "1", "transform": "translateY(0)"}),
    "bounce": ({"opacity": "0", "transform": "scale(0.8)"}, {"opacity": "1", "transform": "scale(1)"}),
}


class RevealAnimation(BaseAnimation):
    text_selector = ""
    default_speed = 1000

    text_element: Optional[Element] = None

    def setup(self) -> bool:
        self.text_element = self.element.query_selector(self.text_selector)
        if self.text_element is None:
            self.record_error(f"Missing {self.text_selector} element")
            return False
        self.settings = RevealSettings.from_element(self.element, self.default_speed, self.text_selector)
        self.prepare()
        return True

    @property
    def delay(self) -> int:
        return self.settings.delay

    @property
    def effect(self) -> str:
        return self.settings.animation

    def prepare(self) -> None:
        """Initial hidden state before the reveal."""

    def completion_detail(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.effect, "text": self.settings.text}

    def _finish(self) -> None:
        self._complete()


class SloganAnimation(RevealAnimation):
    animation_type = "slogan"
    complete_event = "shogun:slogan:complete"
    text_selector = ".slogan-text"
    default_speed = 100

    @property
    def effect(self) -> str:
        return self.settings.animation if self.settings.animation in SLOGAN_STYLES else "fade"

    def prepare(self) -> None:
        initial, _ = SLOGAN_STYLES[self.effect]
        self.text_element.style.update(initial)
        easing = BOUNCE_EASING if self.effect == "bounce" else "ease"
        self.text_element.style["transition"] = f"all {self.settings.speed}ms {easing}"

    def run(self) -> None:
        _, final = SLOGAN_STYLES[self.effect]
        self.text_element.style.update(final)
        self.text_element.style["animation-fill-mode"] = "both"
        self._schedule(self.settings.speed, self._finish)

    def show_final(self) -> None:
        self.text_element.style.update({"animation": "none", "opacity": "1", "transform": "none"})

    def reset(self) -> None:
        self.prepare()


class AnimatedTextAnimation(RevealAnimation):
    """CSS-class driven; a looping effect runs until paused or destroyed and never completes."""

    animation_type = "animated"
    complete_event = "shogun:animated:complete"
    text_selector = ".animated-text"

    @property
    def effect_class(self) -> str:
        return f"shogun-animation-{self.effect}"

    def prepare(self) -> None:
        self.text_element.class_list.add(self.effect_class)
        self.text_element.style["animation-duration"] = f"{self.settings.speed}ms"
        self.text_element.style["animation-direction"] = self.settings.direction
        self.text_element.style["animation-play-state"] = "paused"
        if self.settings.loop:
            self.text_element.style["animation-iteration-count"] = "infinite"

    def run(self) -> None:
        self.text_element.style["animation-play-state"] = "running"
        if not self.settings.loop:
            self._schedule(self.settings.speed, self._finish)

    def pause(self) -> bool:
        paused = super().pause()
        if paused:
            self.text_element.style["animation-play-state"] = "paused"
        return paused

    def resume(self) -> bool:
        if self.is_paused:
            self.text_element.style["animation-play-state"] = "running"
        return super().resume()

    def show_final(self) -> None:
        self.text_element.style.update({"animation": "none", "opacity": "1", "transform": "none"})

    def reset(self) -> None:
        self.text_element.style.pop("animation", None)
        self.prepare()
