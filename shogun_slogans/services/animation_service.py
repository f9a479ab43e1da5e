"""Animation rendering service: definition lookup, cache, compilation and markup."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from shogun_slogans.animation.css_generator import CSSGenerator
from shogun_slogans.animation.definitions import AnimationDefinition, CompiledAnimation, RenderRequest
from shogun_slogans.animation.markup import render_animation_html, render_error, sanitize_html_class
from shogun_slogans.animation.registry import AnimationRegistry
from shogun_slogans.errors import AnimationNotFoundError, CSSGenerationError
from shogun_slogans.services.css_cache import CSSCache
from shogun_slogans.services.page_styles import PageStyleCollector

logger = logging.getLogger(__name__)


@dataclass
class CssResult:
    css: str
    cache_key: str
    cached: bool
    unique_id: str
    selector: str
    js_init: str
    parameters: Dict[str, Any]


class AnimationService:
    def __init__(
        self,
        registry: AnimationRegistry,
        generator: CSSGenerator,
        cache: CSSCache,
        page_styles: Optional[PageStyleCollector] = None,
    ) -> None:
        self.registry = registry
        self.generator = generator
        self.cache = cache
        self.page_styles = page_styles if page_styles is not None else PageStyleCollector()

    def list_animations(self) -> List[Dict[str, Any]]:
        return [definition.summary() for definition in self.registry.all()]

    def get_animation(self, name: str) -> AnimationDefinition:
        definition = self.registry.get(name)
        if definition is None:
            raise AnimationNotFoundError(name)
        return definition

    def compile_css(
        self,
        animation_name: str,
        parameters: Mapping[str, Any] | None = None,
        selector: str = "",
        use_cache: bool = True,
        explicit_id: Optional[str] = None,
    ) -> CssResult:
        """
        Resolve, cache-check and compile CSS for one animation.

        The cache key covers the sanitized parameters plus anything that
        changes the emitted CSS (explicit id, custom selector).

        Raises:
            AnimationNotFoundError: unknown animation
            CSSGenerationError: compilation produced no CSS
        """
        definition = self.get_animation(animation_name)
        explicit_id = sanitize_html_class(explicit_id or "") or None
        raw = dict(parameters or {})
        resolved = self.generator.resolve(animation_name, raw) or {}

        key_params: Dict[str, Any] = dict(resolved)
        if explicit_id:
            key_params["id"] = explicit_id
        if selector:
            key_params["selector"] = selector
        cache_key = self.cache.generate_cache_key(animation_name, key_params)
        unique_id = explicit_id or cache_key[:8]
        default_selector = f".shogun-{animation_name}-{unique_id}"

        if use_cache:
            cached_css = self.cache.get(cache_key)
            if cached_css is not None:
                logger.debug(f"CSS cache hit for {animation_name} ({cache_key})")
                return CssResult(
                    css=cached_css,
                    cache_key=cache_key,
                    cached=True,
                    unique_id=unique_id,
                    selector=selector or default_selector,
                    js_init=definition.js_init,
                    parameters=resolved,
                )

        css = self.generator.generate_animation_css(animation_name, raw, unique_id)
        if not css:
            logger.error(f"CSS generation returned empty output for {animation_name}")
            raise CSSGenerationError(animation_name)

        if selector:
            css = css.replace(default_selector, selector)

        if use_cache:
            self.cache.set(cache_key, css)

        return CssResult(
            css=css,
            cache_key=cache_key,
            cached=False,
            unique_id=unique_id,
            selector=selector or default_selector,
            js_init=definition.js_init,
            parameters=resolved,
        )

    def render(self, request: RenderRequest) -> CompiledAnimation:
        """
        Render a shortcode/block request to markup, collecting its CSS for the page.

        Unknown animations render a visible inline error instead of blank output.
        """
        if request.animation_name not in self.registry:
            logger.warning(f"Render requested for unknown animation: {request.animation_name}")
            error = render_error(request.animation_name)
            return CompiledAnimation(
                animation_name=request.animation_name,
                unique_id="",
                css="",
                html=error,
                error=f'Animation type "{request.animation_name}" not found.',
            )

        params = dict(request.raw_parameters)
        if request.text:
            params["text"] = request.text
        try:
            result = self.compile_css(
                request.animation_name,
                params,
                use_cache=request.use_cache,
                explicit_id=request.explicit_id,
            )
        except CSSGenerationError:
            # Static text is the fallback; the page stays readable.
            result = None

        unique_id = result.unique_id if result else (sanitize_html_class(request.explicit_id or "") or "static")
        css = result.css if result else ""
        self.page_styles.add(unique_id, css)

        cursor = str(result.parameters.get("cursor") or "|") if result else "|"
        html = render_animation_html(
            request.animation_name,
            request.text,
            unique_id,
            cursor=cursor,
            css_class=request.css_class,
            element_id=request.element_id,
        )
        return CompiledAnimation(
            animation_name=request.animation_name,
            unique_id=unique_id,
            css=css,
            html=html,
            cache_key=result.cache_key if result else "",
            cached=result.cached if result else False,
        )

    def preview(self, animation_name: str, text: str, parameters: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        """Uncached CSS + markup for live previews."""
        params = dict(parameters or {})
        params["text"] = text
        result = self.compile_css(animation_name, params, use_cache=False)
        html = render_animation_html(
            animation_name,
            str(result.parameters.get("text", text)),
            result.unique_id,
            cursor=str(result.parameters.get("cursor") or "|"),
        )
        return {
            "html": html,
            "css": result.css,
            "js_init": result.js_init,
            "selector": result.selector,
            "parameters": result.parameters,
        }

    def clear_cache(self, cache_key: Optional[str] = None) -> str:
        if cache_key:
            self.cache.clear(cache_key)
            logger.info(f"Cleared CSS cache entry {cache_key}")
            return "Specific cache cleared"
        self.cache.clear()
        logger.info("Cleared all CSS cache entries")
        return "All cache cleared"
