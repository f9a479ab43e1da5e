"""Block-editor attribute models.

Blocks store camelCase attributes; only values that differ from the block
defaults become render parameters, so untouched blocks keep the animation
definition's own defaults.
"""
from __future__ import annotations

from typing import Dict, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from shogun_slogans.animation.definitions import RenderRequest

_BLOCK_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class AnimationBlockAttributes(BaseModel):
    model_config = _BLOCK_CONFIG

    text: str = ""
    animation_type: str = "typewriter"
    speed: int = 100
    cursor: str = "|"
    color: str = "#000000"
    font_size: str = "16px"
    font_family: str = "inherit"
    glow_color: str = "#00ffff"
    intensity: int = 20
    flicker: bool = False
    wobble: bool = True
    class_name: str = ""

    def to_parameters(self) -> Dict[str, Union[int, str, bool]]:
        defaults = AnimationBlockAttributes()
        params: Dict[str, Union[int, str, bool]] = {}
        for name in ("speed", "cursor", "color", "font_size", "font_family"):
            if getattr(self, name) != getattr(defaults, name):
                params[name] = getattr(self, name)
        if self.animation_type == "neon":
            for name in ("glow_color", "intensity", "flicker"):
                if getattr(self, name) != getattr(defaults, name):
                    params[name] = getattr(self, name)
        if self.animation_type == "handwritten" and self.wobble != defaults.wobble:
            params["wobble"] = self.wobble
        return params

    def to_render_request(self) -> RenderRequest:
        return RenderRequest(
            animation_name=self.animation_type,
            raw_parameters=self.to_parameters(),
            text=self.text or "Your text here",
            css_class=self.class_name,
        )


class TypewriterBlockAttributes(BaseModel):
    model_config = _BLOCK_CONFIG

    text: str = ""
    speed: int = 100
    cursor: str = "|"
    class_name: str = ""

    def to_render_request(self) -> RenderRequest:
        params: Dict[str, Union[int, str, bool]] = {}
        if self.speed != 100:
            params["speed"] = self.speed
        if self.cursor != "|":
            params["cursor"] = self.cursor
        return RenderRequest(
            animation_name="typewriter",
            raw_parameters=params,
            text=self.text or "Your text here",
            css_class=self.class_name,
        )
