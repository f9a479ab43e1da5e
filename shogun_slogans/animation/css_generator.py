"""Compile animation templates into scoped, minified CSS."""
from __future__ import annotations

import hashlib
import json
import logging
import re
from typing import Any, Dict, Mapping, Optional

from shogun_slogans.animation.parameters import resolve_parameters, sanitize_text
from shogun_slogans.animation.registry import AnimationRegistry
from shogun_slogans.animation.template_engine import TemplateEngine

logger = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")
_PUNCTUATION_SPACE_RE = re.compile(r"\s*([{};,])\s*")


def canonical_serialize(params: Mapping[str, Any]) -> str:
    """Order-independent serialization used for hashing parameter maps."""
    return json.dumps(dict(params), sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)


def stable_hash(animation_name: str, params: Mapping[str, Any]) -> str:
    payload = animation_name + canonical_serialize(params)
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


def minify_css(css: str) -> str:
    """Strip comments and redundant whitespace. Idempotent."""
    css = css or ""
    # Removing one comment can splice a new "/*" together.
    stripped = _COMMENT_RE.sub("", css)
    while stripped != css:
        css, stripped = stripped, _COMMENT_RE.sub("", stripped)
    css = _WHITESPACE_RE.sub(" ", css)
    css = _PUNCTUATION_SPACE_RE.sub(r"\1", css)
    return css.strip()


class CSSGenerator:
    def __init__(self, registry: AnimationRegistry, template_engine: Optional[TemplateEngine] = None) -> None:
        self.registry = registry
        self.template_engine = template_engine or TemplateEngine()

    def resolve(self, animation_name: str, params: Mapping[str, Any] | None) -> Optional[Dict[str, Any]]:
        """
        Sanitized parameter map for an animation, or None if it is unknown.

        A ``text`` value in ``params`` is carried through (sanitized) so it can
        size content-length dependent templates.
        """
        animation = self.registry.get(animation_name)
        if animation is None:
            return None
        params = params or {}
        resolved: Dict[str, Any] = resolve_parameters(animation, params)
        if "text" in params and params["text"] is not None:
            resolved["text"] = sanitize_text(params["text"])
        return resolved

    def generate_unique_id(self, animation_name: str, params: Mapping[str, Any]) -> str:
        return stable_hash(animation_name, params)[:8]

    def generate_animation_css(
        self,
        animation_name: str,
        params: Mapping[str, Any] | None = None,
        unique_id: Optional[str] = None,
    ) -> str:
        """
        Generate CSS for an animation.

        Args:
            animation_name: Registered animation name
            params: Raw (unsanitized) parameters; may include ``text``
            unique_id: Selector suffix; derived from the sanitized params when omitted

        Returns:
            Minified CSS, or an empty string when the animation is unknown
        """
        animation = self.registry.get(animation_name)
        if animation is None:
            logger.warning(f"CSS requested for unknown animation: {animation_name}")
            return ""

        variables = self.resolve(animation_name, params) or {}
        if not unique_id:
            unique_id = self.generate_unique_id(animation_name, variables)

        if "text" in variables:
            variables["text_length"] = len(variables["text"])
        variables["id"] = unique_id
        variables["animation_name"] = animation_name

        css = self.template_engine.compile(animation.css_template, variables)
        return minify_css(css)
