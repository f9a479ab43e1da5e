"""Pydantic schemas for API."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ParameterSchema(BaseModel):
    type: str
    default: Any
    min: Optional[int] = None
    max: Optional[int] = None
    label: str = ""
    description: str = ""


class AnimationSummary(BaseModel):
    name: str
    category: str
    description: str
    parameters: Dict[str, ParameterSchema]
    version: str


class AnimationDetail(AnimationSummary):
    js_init: str
    dependencies: List[str] = Field(default_factory=list)


class AnimationListResponse(BaseModel):
    animations: List[AnimationSummary]
    categories: Dict[str, str]
    total: int


class GenerateCssRequest(BaseModel):
    animation: str
    parameters: Dict[str, Any] = Field(default_factory=dict)
    selector: Optional[str] = None
    use_cache: bool = True


class GenerateCssResponse(BaseModel):
    css: str
    cache_key: str
    cached: bool
    js_init: str
    selector: str
    unique_id: str


class PreviewRequest(BaseModel):
    animation: str
    text: str = "Preview text"
    parameters: Dict[str, Any] = Field(default_factory=dict)


class PreviewResponse(BaseModel):
    html: str
    css: str
    js_init: str
    selector: str
    parameters: Dict[str, Any]


class CacheClearRequest(BaseModel):
    cache_key: Optional[str] = None


class CacheClearResponse(BaseModel):
    success: bool
    message: str


class HealthResponse(BaseModel):
    status: str
    version: str
    animations: int
