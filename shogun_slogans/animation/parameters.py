"""Parameter sanitization - turns attacker-controlled raw values into typed, clamped ones.

Every sanitizer is total: it never raises and always returns a concrete value,
falling back to the declared default when the input cannot be used.
"""
from __future__ import annotations

import math
import re
from typing import Any, Callable, Dict, Mapping

from shogun_slogans.animation.definitions import AnimationDefinition, ParameterSpec, ParameterType, ParameterValue

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d{1,12})")
_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")
_SIZE_RE = re.compile(r"^\d+(?:\.\d+)?(?:px|em|rem|%|vh|vw)$")
_TAG_RE = re.compile(r"<[^>]*>")
_OCTET_RE = re.compile(r"%[0-9a-fA-F]{2}")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
# Characters that would let a value escape its CSS declaration or string.
_CSS_BREAKING_RE = re.compile(r"[\"{};\\]")
_WHITESPACE_RE = re.compile(r"\s+")

TRUTHY_STRINGS = {"1", "true", "on", "yes"}


def sanitize_text(value: Any) -> str:
    """Strip markup, control characters and percent-encoded octets; collapse whitespace."""
    if value is None:
        return ""
    text = value if isinstance(value, str) else str(value)
    text = _TAG_RE.sub("", text)
    text = text.replace("<", "&lt;")
    text = _OCTET_RE.sub("", text)
    text = _CONTROL_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    return False


def is_css_size(value: str) -> bool:
    return bool(_SIZE_RE.match(value or ""))


def _sanitize_int(value: Any, spec: ParameterSpec) -> int:
    if isinstance(value, bool):
        number = int(value)
    elif isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return int(spec.default)
        number = int(value)
    else:
        match = _LEADING_INT_RE.match(str(value))
        if not match:
            return int(spec.default)
        number = int(match.group(1))
    if spec.min is not None and number < spec.min:
        number = spec.min
    if spec.max is not None and number > spec.max:
        number = spec.max
    return number


def _sanitize_string(value: Any, spec: ParameterSpec) -> str:
    return _WHITESPACE_RE.sub(" ", _CSS_BREAKING_RE.sub("", sanitize_text(value))).strip()


def _sanitize_color(value: Any, spec: ParameterSpec) -> ParameterValue:
    candidate = sanitize_text(value)
    if _HEX_COLOR_RE.match(candidate):
        return candidate
    return spec.default


def _sanitize_size(value: Any, spec: ParameterSpec) -> ParameterValue:
    candidate = sanitize_text(value)
    if is_css_size(candidate):
        return candidate
    return spec.default


def _sanitize_boolean(value: Any, spec: ParameterSpec) -> bool:
    return parse_bool(value)


_SANITIZERS: Dict[ParameterType, Callable[[Any, ParameterSpec], ParameterValue]] = {
    ParameterType.INT: _sanitize_int,
    ParameterType.STRING: _sanitize_string,
    ParameterType.COLOR: _sanitize_color,
    ParameterType.SIZE: _sanitize_size,
    ParameterType.BOOLEAN: _sanitize_boolean,
}


def sanitize_parameter(value: Any, spec: ParameterSpec) -> ParameterValue:
    """Sanitize a single raw value against its spec."""
    if value is None:
        return spec.default
    sanitizer = _SANITIZERS.get(spec.type)
    if sanitizer is None:
        return spec.default
    return sanitizer(value, spec)


def resolve_parameters(definition: AnimationDefinition, raw: Mapping[str, Any] | None) -> Dict[str, ParameterValue]:
    """
    Merge raw values with the definition's defaults.

    Keys not declared by the definition are dropped; declared keys missing
    from ``raw`` take their default.
    """
    raw = raw or {}
    resolved: Dict[str, ParameterValue] = {}
    for key, spec in definition.parameters.items():
        if key in raw and raw[key] is not None:
            resolved[key] = sanitize_parameter(raw[key], spec)
        else:
            resolved[key] = spec.default
    return resolved
