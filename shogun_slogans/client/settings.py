"""Per-instance settings read from data attributes, clamped to safe ranges."""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from typing import Any, Optional

from shogun_slogans.client.dom import Element
from shogun_slogans.utils.config import Settings

_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)")

TRUE_WORDS = {"true", "1", "yes", "on"}
FALSE_WORDS = {"false", "0", "no", "off"}


def parse_number(value: Any, default: int, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
    """Leading integer of ``value`` (``"120ms"`` -> 120), else ``default``; then clamped."""
    if isinstance(value, bool):
        number = default
    elif isinstance(value, int):
        number = value
    else:
        if isinstance(value, float):
            parsed: Optional[float] = value
        else:
            match = _LEADING_NUMBER_RE.match(str(value)) if value is not None else None
            parsed = float(match.group(1)) if match else None
        number = int(parsed) if parsed is not None and math.isfinite(parsed) else default
    if minimum is not None:
        number = max(minimum, number)
    if maximum is not None:
        number = min(maximum, number)
    return number


def parse_boolean(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    word = str(value).strip().lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    return default


@dataclass
class ClientOptions:
    """Page-wide defaults for instances that omit a data attribute."""
    default_speed: int = 100
    default_cursor: str = "|"
    default_loop: bool = False
    enable_accessibility: bool = True
    debug_mode: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "ClientOptions":
        return cls(
            default_speed=settings.default_speed,
            default_cursor=settings.default_cursor,
            default_loop=settings.default_loop,
            enable_accessibility=settings.enable_accessibility,
            debug_mode=settings.debug_mode,
        )


@dataclass
class TypewriterSettings:
    text: str = ""
    speed: int = 100
    delay: int = 0
    delete_speed: int = 50
    pause_end: int = 2000
    pause_start: int = 1000
    cursor: str = "|"
    loop: bool = False
    preserve_cursor: bool = False
    cursor_blink: bool = True
    auto_start: bool = True

    @classmethod
    def from_element(cls, element: Element, options: Optional[ClientOptions] = None) -> "TypewriterSettings":
        options = options or ClientOptions()
        text_el = element.query_selector(".typewriter-text")
        fallback_text = text_el.text_content if text_el is not None else element.text_content
        return cls(
            text=element.data("text") or fallback_text.strip(),
            speed=parse_number(element.data("speed"), options.default_speed, 10, 1000),
            delay=parse_number(element.data("delay"), 0, 0, 10000),
            delete_speed=parse_number(element.data("delete-speed"), 50, 10, 500),
            pause_end=parse_number(element.data("pause-end"), 2000, 500, 10000),
            pause_start=parse_number(element.data("pause-start"), 1000, 100, 5000),
            cursor=element.data("cursor", options.default_cursor) or "",
            loop=parse_boolean(element.data("loop"), options.default_loop),
            preserve_cursor=parse_boolean(element.data("preserve-cursor"), False),
            cursor_blink=parse_boolean(element.data("cursor-blink"), True),
            auto_start=parse_boolean(element.data("auto-start"), True),
        )

    def updated(self, **changes: Any) -> "TypewriterSettings":
        """Copy with ``changes`` applied and re-clamped."""
        merged = replace(self, **{k: v for k, v in changes.items() if hasattr(self, k)})
        merged.speed = parse_number(merged.speed, self.speed, 10, 1000)
        merged.delay = parse_number(merged.delay, self.delay, 0, 10000)
        merged.delete_speed = parse_number(merged.delete_speed, self.delete_speed, 10, 500)
        merged.pause_end = parse_number(merged.pause_end, self.pause_end, 500, 10000)
        merged.pause_start = parse_number(merged.pause_start, self.pause_start, 100, 5000)
        for name in ("loop", "preserve_cursor", "cursor_blink", "auto_start"):
            setattr(merged, name, parse_boolean(getattr(merged, name), getattr(self, name)))
        return merged


@dataclass
class RevealSettings:
    text: str = ""
    animation: str = "fade"
    speed: int = 1000
    delay: int = 0
    loop: bool = False
    direction: str = "normal"

    @classmethod
    def from_element(cls, element: Element, default_speed: int, selector: str) -> "RevealSettings":
        text_el = element.query_selector(selector)
        fallback_text = text_el.text_content if text_el is not None else element.text_content
        return cls(
            text=element.data("text") or fallback_text.strip(),
            animation=element.data("animation") or "fade",
            speed=parse_number(element.data("speed"), default_speed, 10, 10000),
            delay=parse_number(element.data("delay"), 0, 0, 10000),
            loop=parse_boolean(element.data("loop"), False),
            direction=element.data("direction") or "normal",
        )
