"""REST API server."""
from __future__ import annotations

import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response

from shogun_slogans import __version__
from shogun_slogans.animation.parameters import sanitize_text
from shogun_slogans.animation.registry import AnimationRegistry
from shogun_slogans.auth import require_admin, require_editor
from shogun_slogans.context import AppContext, build_context, get_context
from shogun_slogans.errors import AnimationNotFoundError, CSSGenerationError
from shogun_slogans.schemas import (
    AnimationDetail,
    AnimationListResponse,
    CacheClearRequest,
    CacheClearResponse,
    GenerateCssRequest,
    GenerateCssResponse,
    HealthResponse,
    PreviewRequest,
    PreviewResponse,
)
from shogun_slogans.utils.config import settings

logger = logging.getLogger(__name__)

API_PREFIX = "/shogun-slogans/v1"
CSS_CACHE_CONTROL = "public, max-age=3600"
_SELECTOR_UNSAFE_RE = re.compile(r"[{};]")

app = FastAPI(title="Shogun Slogans", version=__version__)
router = APIRouter(prefix=API_PREFIX)


@app.on_event("startup")
def on_startup() -> None:
    if getattr(app.state, "context", None) is None:
        app.state.context = build_context(settings)
    logger.info(f"Shogun Slogans API ready with {len(app.state.context.registry)} animations")


def _not_found(exc: AnimationNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "animation_not_found", "message": str(exc)})


def _generation_failed(exc: CSSGenerationError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": "css_generation_failed", "message": str(exc)})


@app.get("/health", response_model=HealthResponse)
def health(ctx: AppContext = Depends(get_context)):
    return HealthResponse(status="ok", version=__version__, animations=len(ctx.registry))


@router.get("/animations", response_model=AnimationListResponse)
def list_animations(ctx: AppContext = Depends(get_context)):
    animations = ctx.service.list_animations()
    return {
        "animations": animations,
        "categories": AnimationRegistry.categories(),
        "total": len(animations),
    }


@router.get("/animations/{name}", response_model=AnimationDetail)
def animation_detail(name: str, ctx: AppContext = Depends(get_context)):
    try:
        definition = ctx.service.get_animation(name)
    except AnimationNotFoundError as exc:
        return _not_found(exc)
    return {**definition.summary(), "js_init": definition.js_init, "dependencies": list(definition.dependencies)}


@router.post("/generate-css", response_model=GenerateCssResponse)
def generate_css(
    payload: GenerateCssRequest,
    ctx: AppContext = Depends(get_context),
    _role: str = Depends(require_editor),
):
    selector = " ".join(_SELECTOR_UNSAFE_RE.sub("", sanitize_text(payload.selector or "")).split())
    try:
        result = ctx.service.compile_css(
            payload.animation,
            payload.parameters,
            selector=selector,
            use_cache=payload.use_cache,
        )
    except AnimationNotFoundError as exc:
        return _not_found(exc)
    except CSSGenerationError as exc:
        return _generation_failed(exc)
    return GenerateCssResponse(
        css=result.css,
        cache_key=result.cache_key,
        cached=result.cached,
        js_init=result.js_init,
        selector=result.selector,
        unique_id=result.unique_id,
    )


@router.get("/css/{animation}")
def animation_css(animation: str, request: Request, ctx: AppContext = Depends(get_context)):
    try:
        result = ctx.service.compile_css(animation, dict(request.query_params))
    except AnimationNotFoundError as exc:
        return _not_found(exc)
    except CSSGenerationError as exc:
        return _generation_failed(exc)
    return Response(content=result.css, media_type="text/css", headers={"Cache-Control": CSS_CACHE_CONTROL})


@router.post("/preview", response_model=PreviewResponse)
def preview(
    payload: PreviewRequest,
    ctx: AppContext = Depends(get_context),
    _role: str = Depends(require_editor),
):
    try:
        return ctx.service.preview(payload.animation, payload.text, payload.parameters)
    except AnimationNotFoundError as exc:
        return _not_found(exc)
    except CSSGenerationError as exc:
        return _generation_failed(exc)


@router.post("/cache/clear", response_model=CacheClearResponse)
def clear_cache(
    payload: Optional[CacheClearRequest] = None,
    ctx: AppContext = Depends(get_context),
    _role: str = Depends(require_admin),
):
    message = ctx.service.clear_cache(payload.cache_key if payload else None)
    return CacheClearResponse(success=True, message=message)


app.include_router(router)
