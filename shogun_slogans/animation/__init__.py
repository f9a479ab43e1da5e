"""Animation Definition & CSS Compiler.

Components:
- definitions: animation/parameter schema and render artifacts
- parameters: total, per-type parameter sanitization
- registry: catalog of definitions
- presets: built-in typewriter, handwritten and neon definitions
- template_engine: ``{{var}}`` / ``{{#if}}`` template parsing and rendering
- css_generator: scoped CSS compilation and minification
- markup: HTML for templated and class-driven effects
"""

from shogun_slogans.animation.definitions import (
    AnimationCategory,
    AnimationDefinition,
    CompiledAnimation,
    ParameterSpec,
    ParameterType,
    RenderRequest,
)

from shogun_slogans.animation.parameters import (
    resolve_parameters,
    sanitize_parameter,
    sanitize_text,
)

from shogun_slogans.animation.registry import AnimationRegistry
from shogun_slogans.animation.presets import register_default_animations

from shogun_slogans.animation.template_engine import (
    ConditionalToken,
    LiteralToken,
    TemplateEngine,
    VariableToken,
)

from shogun_slogans.animation.css_generator import (
    CSSGenerator,
    canonical_serialize,
    minify_css,
    stable_hash,
)

__all__ = [
    # Schema
    "AnimationCategory",
    "AnimationDefinition",
    "CompiledAnimation",
    "ParameterSpec",
    "ParameterType",
    "RenderRequest",
    # Parameters
    "resolve_parameters",
    "sanitize_parameter",
    "sanitize_text",
    # Registry
    "AnimationRegistry",
    "register_default_animations",
    # Templates
    "ConditionalToken",
    "LiteralToken",
    "TemplateEngine",
    "VariableToken",
    # Compiler
    "CSSGenerator",
    "canonical_serialize",
    "minify_css",
    "stable_hash",
]
