"""HTML markup for rendered animations.

Templated animations (typewriter, handwritten, neon) are scoped by the
``shogun-{name}-{id}`` class their CSS targets. Class-driven effects
(``typewriter_text``, ``shogun_slogan``, ``animated_text``) carry their
settings as ``data-*`` attributes for the client controller. Text is always
present in the markup so the no-JS / reduced-motion path stays readable.
"""
from __future__ import annotations

import re
import uuid
from html import escape
from typing import Dict, List, Optional

from shogun_slogans.animation.parameters import is_css_size

_HTML_CLASS_RE = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_html_class(value: str) -> str:
    return _HTML_CLASS_RE.sub("", value or "")


def _attrs(attributes: Dict[str, Optional[str]]) -> str:
    return " ".join(f'{key}="{escape(str(value))}"' for key, value in attributes.items() if value is not None)


def _element_id(prefix: str, element_id: str) -> str:
    element_id = sanitize_html_class(element_id)
    return element_id or f"{prefix}-{uuid.uuid4()}"


def bool_attr(value: bool) -> str:
    return "true" if value else "false"


def render_error(animation_name: str) -> str:
    return f'<div class="shogun-error">Animation type "{escape(animation_name)}" not found.</div>'


def render_animation_html(
    animation_name: str,
    text: str,
    unique_id: str,
    cursor: str = "|",
    css_class: str = "",
    element_id: str = "",
) -> str:
    """Markup for a templated animation; its CSS targets ``.shogun-{name}-{id}``."""
    classes: List[str] = [f"shogun-{animation_name}-{unique_id}"]
    extra = " ".join(filter(None, (sanitize_html_class(c) for c in (css_class or "").split())))
    if extra:
        classes.append(extra)

    attributes: Dict[str, Optional[str]] = {}
    if element_id:
        attributes["id"] = sanitize_html_class(element_id)
    attributes["class"] = " ".join(classes)
    attributes["data-animation"] = animation_name
    attributes["data-unique-id"] = unique_id
    open_tag = f"<div {_attrs(attributes)}>"

    if animation_name == "typewriter":
        return (
            f'{open_tag}<span class="typewriter-text" role="text" aria-label="{escape(text)}">{escape(text)}</span>'
            f'<span class="typewriter-cursor" aria-hidden="true">{escape(cursor or "|")}</span></div>'
        )
    if animation_name == "handwritten":
        return f'{open_tag}<span class="handwritten-text" role="text">{escape(text)}</span></div>'
    return f"{open_tag}{escape(text)}</div>"


def render_typewriter_text(
    text: str,
    speed: int,
    cursor: str,
    loop: bool = False,
    delay: int = 0,
    css_class: str = "",
    style: str = "typewriter",
    element_id: str = "",
    auto_start: bool = True,
    cursor_blink: bool = True,
    preserve_cursor: bool = False,
) -> str:
    """Client-driven typewriter; the controller clears and retypes the text span."""
    classes = ["shogun-typewriter", f"shogun-{sanitize_html_class(style)}"]
    if sanitize_html_class(css_class):
        classes.append(sanitize_html_class(css_class))
    attributes = {
        "id": _element_id("shogun-typewriter", element_id),
        "class": " ".join(classes),
        "data-text": text,
        "data-speed": str(speed),
        "data-cursor": cursor,
        "data-loop": bool_attr(loop),
        "data-delay": str(delay),
        "data-auto-start": bool_attr(auto_start),
        "data-cursor-blink": bool_attr(cursor_blink),
        "data-preserve-cursor": bool_attr(preserve_cursor),
    }
    return (
        f"<div {_attrs(attributes)}>"
        f'<span class="typewriter-text" role="text" aria-label="{escape(text)}">{escape(text)}</span>'
        f'<span class="typewriter-cursor" aria-hidden="true">{escape(cursor)}</span>'
        "</div>"
    )


def render_slogan(
    text: str,
    style: str = "typewriter",
    animation: str = "fade",
    speed: int = 100,
    cursor: str = "|",
    loop: bool = False,
    delay: int = 0,
    css_class: str = "",
    element_id: str = "",
    color: str = "",
    size: str = "",
) -> str:
    style = sanitize_html_class(style)
    animation = sanitize_html_class(animation)
    classes = ["shogun-slogan", f"shogun-{style}", f"shogun-{animation}"]
    if sanitize_html_class(css_class):
        classes.append(sanitize_html_class(css_class))

    inline_styles = []
    if color:
        inline_styles.append(f"color: {color}")
    if size and is_css_size(size):
        inline_styles.append(f"font-size: {size}")

    attributes = {
        "id": _element_id("shogun-slogan", element_id),
        "class": " ".join(classes),
        "data-text": text,
        "data-speed": str(speed),
        "data-cursor": cursor,
        "data-loop": bool_attr(loop),
        "data-delay": str(delay),
        "data-animation": animation,
        "style": "; ".join(inline_styles) if inline_styles else None,
    }
    html = f"<div {_attrs(attributes)}>"
    if style == "typewriter":
        html += f'<span class="typewriter-text" role="text" aria-label="{escape(text)}">{escape(text)}</span>'
        html += f'<span class="typewriter-cursor" aria-hidden="true">{escape(cursor)}</span>'
    else:
        html += f'<span class="slogan-text" role="text">{escape(text)}</span>'
    return html + "</div>"


def render_animated_text(
    text: str,
    animation: str = "fade",
    speed: int = 1000,
    delay: int = 0,
    css_class: str = "",
    element_id: str = "",
    loop: bool = False,
    direction: str = "normal",
) -> str:
    animation = sanitize_html_class(animation)
    classes = ["shogun-animated-text", f"shogun-{animation}"]
    if sanitize_html_class(css_class):
        classes.append(sanitize_html_class(css_class))
    attributes = {
        "id": _element_id("shogun-animated", element_id),
        "class": " ".join(classes),
        "data-text": text,
        "data-animation": animation,
        "data-speed": str(speed),
        "data-delay": str(delay),
        "data-loop": bool_attr(loop),
        "data-direction": sanitize_html_class(direction),
    }
    return f'<div {_attrs(attributes)}><span class="animated-text" role="text">{escape(text)}</span></div>'
