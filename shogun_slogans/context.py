"""Application context: the collaborators built once at startup and passed down."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError

from shogun_slogans.animation.css_generator import CSSGenerator
from shogun_slogans.animation.presets import register_default_animations
from shogun_slogans.animation.registry import AnimationRegistry
from shogun_slogans.animation.template_engine import TemplateEngine
from shogun_slogans.db import Base, make_engine, make_session_factory
from shogun_slogans.services.animation_service import AnimationService
from shogun_slogans.services.css_cache import CacheStore, CSSCache, DatabaseCacheStore, MemoryCacheStore
from shogun_slogans.services.page_styles import PageStyleCollector
from shogun_slogans.utils.config import Settings, settings

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    registry: AnimationRegistry
    template_engine: TemplateEngine
    generator: CSSGenerator
    cache: CSSCache
    page_styles: PageStyleCollector
    service: AnimationService


def build_cache_store(settings: Settings) -> CacheStore:
    if settings.cache_backend == "database":
        engine = make_engine(settings.database_url)
        try:
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError:
            logger.warning("CSS cache database unavailable; using memory store", exc_info=True)
            return MemoryCacheStore()
        logger.info("Using database CSS cache store")
        return DatabaseCacheStore(make_session_factory(engine))
    if settings.cache_backend != "memory":
        logger.warning(f"Unknown cache backend {settings.cache_backend!r}; falling back to memory")
    return MemoryCacheStore()


def build_context(settings: Settings, store: Optional[CacheStore] = None) -> AppContext:
    registry = register_default_animations(AnimationRegistry())
    template_engine = TemplateEngine()
    generator = CSSGenerator(registry, template_engine)
    cache = CSSCache(store if store is not None else build_cache_store(settings), default_ttl=settings.cache_ttl)
    page_styles = PageStyleCollector()
    service = AnimationService(registry, generator, cache, page_styles)
    return AppContext(
        settings=settings,
        registry=registry,
        template_engine=template_engine,
        generator=generator,
        cache=cache,
        page_styles=page_styles,
        service=service,
    )


def get_context(request: Request) -> AppContext:
    """FastAPI dependency; builds the context on first use when startup did not run."""
    ctx = getattr(request.app.state, "context", None)
    if ctx is None:
        ctx = build_context(settings)
        request.app.state.context = ctx
    return ctx
