"""Error types raised by the rendering service."""
from __future__ import annotations


class ShogunError(Exception):
    """Base class for shogun_slogans errors."""


class AnimationNotFoundError(ShogunError, LookupError):
    def __init__(self, animation_name: str) -> None:
        super().__init__(f'Animation type "{animation_name}" not found.')
        self.animation_name = animation_name


class CSSGenerationError(ShogunError, RuntimeError):
    """Compilation produced no CSS for a known animation."""

    def __init__(self, animation_name: str) -> None:
        super().__init__(f"Failed to generate CSS for animation: {animation_name}")
        self.animation_name = animation_name
