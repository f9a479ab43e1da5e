"""Shortcode parsing and rendering.

Templated effects:
    [shogun_animation type="neon" text="Neon Glow" glow_color="#00ffff"]
    [shogun_typewriter_v2 text="Hello" speed="100" cursor="|"]

Class-driven effects (settings travel as data attributes to the client):
    [typewriter_text text="Hello" loop="true"]
    [shogun_slogan text="Smart Move" style="fade" animation="slide"]
    [animated_text text="Bounce!" animation="bounce" speed="800"]
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from shogun_slogans.animation.definitions import RenderRequest
from shogun_slogans.animation.markup import render_animated_text, render_error, render_slogan, render_typewriter_text
from shogun_slogans.animation.parameters import parse_bool, sanitize_text
from shogun_slogans.services.animation_service import AnimationService
from shogun_slogans.utils.config import Settings

logger = logging.getLogger(__name__)

TEMPLATED_TAGS = ("shogun_animation", "shogun_typewriter_v2")
CLASS_DRIVEN_TAGS = ("typewriter_text", "shogun_slogan", "animated_text")

_ATTR_RE = re.compile(
    r"""([\w-]+)\s*=\s*"([^"]*)"(?:\s|$)|([\w-]+)\s*=\s*'([^']*)'(?:\s|$)|([\w-]+)\s*=\s*([^\s'"]+)(?:\s|$)"""
)
_ABSINT_RE = re.compile(r"^\s*[+-]?(\d{1,12})")


def _shortcode_re(tags: List[str]) -> re.Pattern:
    names = "|".join(re.escape(t) for t in sorted(tags, key=len, reverse=True))
    return re.compile(
        r"\[(?P<tag>" + names + r")(?![\w-])(?P<attrs>[^\]]*?)(?P<selfclose>/)?\]"
        r"(?:(?P<content>.*?)\[/(?P=tag)\])?",
        re.DOTALL,
    )


@dataclass
class Shortcode:
    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)
    content: str = ""
    start: int = 0
    end: int = 0


def parse_attributes(text: str) -> Dict[str, str]:
    attrs: Dict[str, str] = {}
    for match in _ATTR_RE.finditer(text or ""):
        if match.group(1):
            attrs[match.group(1).lower()] = match.group(2)
        elif match.group(3):
            attrs[match.group(3).lower()] = match.group(4)
        elif match.group(5):
            attrs[match.group(5).lower()] = match.group(6)
    return attrs


def parse_shortcodes(content: str, tags: Optional[List[str]] = None) -> List[Shortcode]:
    pattern = _shortcode_re(list(tags or TEMPLATED_TAGS + CLASS_DRIVEN_TAGS))
    found = []
    for match in pattern.finditer(content or ""):
        found.append(
            Shortcode(
                tag=match.group("tag"),
                attrs=parse_attributes(match.group("attrs")),
                content=match.group("content") or "",
                start=match.start(),
                end=match.end(),
            )
        )
    return found


def absint(value: object, default: int = 0) -> int:
    match = _ABSINT_RE.match(str(value)) if value is not None else None
    return int(match.group(1)) if match else default


class ShortcodeRenderer:
    def __init__(self, service: AnimationService, settings: Settings) -> None:
        self.service = service
        self.settings = settings
        self._handlers: Dict[str, Callable[[Dict[str, str], str], str]] = {
            "shogun_animation": self.animation_shortcode,
            "shogun_typewriter_v2": self.typewriter_v2_shortcode,
            "typewriter_text": self.typewriter_shortcode,
            "shogun_slogan": self.slogan_shortcode,
            "animated_text": self.animated_text_shortcode,
        }

    def render(self, content: str) -> str:
        """Replace every known shortcode in ``content`` with its markup."""
        out: List[str] = []
        pos = 0
        for shortcode in parse_shortcodes(content, list(self._handlers)):
            out.append(content[pos:shortcode.start])
            out.append(self._handlers[shortcode.tag](shortcode.attrs, shortcode.content))
            pos = shortcode.end
        out.append(content[pos:])
        return "".join(out)

    def to_render_request(self, attrs: Dict[str, str], content: str = "") -> RenderRequest:
        """Map ``[shogun_animation]`` attributes onto a render request."""
        animation_name = attrs.get("type") or "typewriter"
        definition = self.service.registry.get(animation_name)
        declared = definition.parameters if definition else {}
        return RenderRequest(
            animation_name=animation_name,
            raw_parameters={key: value for key, value in attrs.items() if key in declared},
            text=attrs.get("text") or content or "Your text here",
            css_class=attrs.get("class", ""),
            element_id=attrs.get("id", ""),
            use_cache=parse_bool(attrs.get("cache", "true")),
        )

    def animation_shortcode(self, attrs: Dict[str, str], content: str = "") -> str:
        request = self.to_render_request(attrs, content)
        if request.animation_name not in self.service.registry:
            return render_error(request.animation_name)
        return self.service.render(request).html

    def typewriter_v2_shortcode(self, attrs: Dict[str, str], content: str = "") -> str:
        return self.animation_shortcode({**attrs, "type": "typewriter"}, content)

    def typewriter_shortcode(self, attrs: Dict[str, str], content: str = "") -> str:
        text = sanitize_text(attrs.get("text") or content or "Sample typewriter text")
        html = render_typewriter_text(
            text=text,
            speed=absint(attrs.get("speed"), self.settings.default_speed),
            cursor=sanitize_text(attrs.get("cursor", self.settings.default_cursor)),
            loop=attrs.get("loop", "true" if self.settings.default_loop else "false") == "true",
            delay=absint(attrs.get("delay"), 0),
            css_class=attrs.get("class", ""),
            style=attrs.get("style", "typewriter"),
            element_id=attrs.get("id", ""),
            auto_start=attrs.get("auto_start", "true") == "true",
            cursor_blink=attrs.get("cursor_blink", "true") == "true",
            preserve_cursor=attrs.get("preserve_cursor", "false") == "true",
        )
        logger.debug(f"Typewriter shortcode rendered: {text[:40]!r}")
        return html

    def slogan_shortcode(self, attrs: Dict[str, str], content: str = "") -> str:
        color = sanitize_text(attrs.get("color", ""))
        if color and not re.match(r"^#(?:[0-9a-fA-F]{3}){1,2}$", color):
            color = ""
        return render_slogan(
            text=sanitize_text(attrs.get("text") or content or "Your amazing slogan here"),
            style=attrs.get("style", "typewriter"),
            animation=attrs.get("animation", "fade"),
            speed=absint(attrs.get("speed"), self.settings.default_speed),
            cursor=sanitize_text(attrs.get("cursor", self.settings.default_cursor)),
            loop=attrs.get("loop", "true" if self.settings.default_loop else "false") == "true",
            delay=absint(attrs.get("delay"), 0),
            css_class=attrs.get("class", ""),
            element_id=attrs.get("id", ""),
            color=color,
            size=sanitize_text(attrs.get("size", "")),
        )

    def animated_text_shortcode(self, attrs: Dict[str, str], content: str = "") -> str:
        return render_animated_text(
            text=sanitize_text(attrs.get("text") or content or "Animated text"),
            animation=attrs.get("animation", "fade"),
            speed=absint(attrs.get("speed"), 1000),
            delay=absint(attrs.get("delay"), 0),
            css_class=attrs.get("class", ""),
            element_id=attrs.get("id", ""),
            loop=attrs.get("loop", "false") == "true",
            direction=attrs.get("direction", "normal"),
        )


def dynamic_animation(renderer: ShortcodeRenderer, animation_type: str, text: str, **params: object) -> str:
    """Render a templated animation from code rather than content."""
    attrs = {key: str(value) for key, value in params.items()}
    attrs.update({"type": animation_type, "text": text})
    return renderer.animation_shortcode(attrs)


def dynamic_typewriter(renderer: ShortcodeRenderer, text: str, speed: int = 100, cursor: str = "|") -> str:
    return dynamic_animation(renderer, "typewriter", text, speed=speed, cursor=cursor)


SHORTCODE_EXAMPLES: Dict[str, Dict[str, str]] = {
    "Basic Typewriter": {
        "shortcode": '[shogun_animation type="typewriter" text="Hello World!"]',
        "description": "Basic typewriter effect with default settings",
    },
    "Fast Typewriter": {
        "shortcode": '[shogun_animation type="typewriter" text="Fast typing!" speed="50"]',
        "description": "Fast typewriter effect",
    },
    "Colored Text": {
        "shortcode": '[shogun_animation type="typewriter" text="Colored text" color="#ff6b6b"]',
        "description": "Typewriter with custom text color",
    },
    "Handwritten Effect": {
        "shortcode": '[shogun_animation type="handwritten" text="Handwritten style"]',
        "description": "Handwritten animation effect",
    },
    "Neon Glow": {
        "shortcode": '[shogun_animation type="neon" text="Neon Glow" glow_color="#00ffff"]',
        "description": "Neon glow effect with cyan color",
    },
    "Flickering Neon": {
        "shortcode": '[shogun_animation type="neon" text="Flickering" flicker="true"]',
        "description": "Neon effect with flickering animation",
    },
}


def render_shortcodes(content: str, service: AnimationService, settings: Settings) -> str:
    return ShortcodeRenderer(service, settings).render(content)
