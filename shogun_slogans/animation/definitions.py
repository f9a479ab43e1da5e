"""Animation definition schema - the static catalog entries and render artifacts."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class AnimationCategory(str, Enum):
    """Catalog categories an animation can belong to."""
    TEXT = "text"
    VISUAL = "visual"
    INTERACTIVE = "interactive"
    ADVANCED = "advanced"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    AnimationCategory.TEXT: "Text Effects",
    AnimationCategory.VISUAL: "Visual Effects",
    AnimationCategory.INTERACTIVE: "Interactive Effects",
    AnimationCategory.ADVANCED: "Advanced Effects",
}


class ParameterType(str, Enum):
    """Value kinds a parameter can take; each has its own sanitizer."""
    INT = "int"
    STRING = "string"
    COLOR = "color"
    SIZE = "size"
    BOOLEAN = "boolean"


ParameterValue = Union[int, str, bool]


@dataclass(frozen=True)
class ParameterSpec:
    """A single tunable value of an animation."""
    type: ParameterType
    default: ParameterValue
    min: Optional[int] = None
    max: Optional[int] = None
    label: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type.value, "default": self.default}
        if self.min is not None:
            data["min"] = self.min
        if self.max is not None:
            data["max"] = self.max
        data["label"] = self.label
        data["description"] = self.description
        return data


@dataclass
class AnimationDefinition:
    """
    Registered template + parameter schema for one visual effect.

    ``parameters`` keeps declaration order; it drives sanitization and the
    REST listing. ``css_template`` uses ``{{var}}`` substitutions and
    ``{{#if flag}}...{{/if}}`` blocks.
    """
    name: str
    category: AnimationCategory = AnimationCategory.TEXT
    description: str = ""
    parameters: Dict[str, ParameterSpec] = field(default_factory=dict)
    css_template: str = ""
    js_init: str = ""
    dependencies: List[str] = field(default_factory=list)
    version: str = "1.0.0"

    def summary(self) -> Dict[str, Any]:
        """Listing shape used by the HTTP surface."""
        return {
            "name": self.name,
            "category": self.category.value,
            "description": self.description,
            "parameters": {key: spec.to_dict() for key, spec in self.parameters.items()},
            "version": self.version,
        }


@dataclass
class RenderRequest:
    """One shortcode/block evaluation or REST call. Never persisted."""
    animation_name: str
    raw_parameters: Dict[str, Any] = field(default_factory=dict)
    text: str = ""
    explicit_id: Optional[str] = None
    css_class: str = ""
    element_id: str = ""
    use_cache: bool = True


@dataclass
class CompiledAnimation:
    """CSS + markup produced for a render request."""
    animation_name: str
    unique_id: str
    css: str
    html: str
    cache_key: str = ""
    cached: bool = False
    error: Optional[str] = None

    @property
    def selector(self) -> str:
        return f".shogun-{self.animation_name}-{self.unique_id}"
