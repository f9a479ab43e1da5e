"""Minimal CSS template engine.

Supported syntax:
- ``{{name}}`` - replaced with the value of ``name`` (empty string when unset).
- ``{{#if flag}}...{{/if}}`` - body kept only when ``flag`` is truthy.

Conditionals do not nest. A ``{{#if}}`` opened inside another block, a
``{{/if}}`` without an opener and an unterminated ``{{#if}}`` are all kept as
literal text, so parsing is total and never raises.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, List, Mapping, Tuple, Union

_TAG_RE = re.compile(r"\{\{(?:#if\s+(?P<flag>\w+)|(?P<close>/if)|(?P<var>\w+))\}\}")


@dataclass(frozen=True)
class LiteralToken:
    text: str


@dataclass(frozen=True)
class VariableToken:
    name: str


@dataclass(frozen=True)
class ConditionalToken:
    flag: str
    body: Tuple[Union[LiteralToken, VariableToken], ...] = field(default_factory=tuple)


Token = Union[LiteralToken, VariableToken, ConditionalToken]


def format_value(value: Any) -> str:
    """Render a template value as text. Booleans render as ``1`` / empty."""
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


def _merge_literals(tokens: List[Token]) -> List[Token]:
    merged: List[Token] = []
    for token in tokens:
        if isinstance(token, LiteralToken) and merged and isinstance(merged[-1], LiteralToken):
            merged[-1] = LiteralToken(merged[-1].text + token.text)
        elif isinstance(token, LiteralToken) and not token.text:
            continue
        else:
            merged.append(token)
    return merged


@lru_cache(maxsize=128)
def _parse_cached(template: str) -> Tuple[Token, ...]:
    tokens: List[Token] = []
    open_flag: str | None = None
    open_tag = ""
    body: List[Token] = []
    pos = 0

    for match in _TAG_RE.finditer(template):
        literal = LiteralToken(template[pos:match.start()])
        target = body if open_flag is not None else tokens
        target.append(literal)
        pos = match.end()

        if match.group("flag"):
            if open_flag is not None:
                # Nested opener: not supported, keep verbatim.
                body.append(LiteralToken(match.group(0)))
                continue
            open_flag = match.group("flag")
            open_tag = match.group(0)
            body = []
        elif match.group("close"):
            if open_flag is None:
                tokens.append(LiteralToken(match.group(0)))
                continue
            tokens.append(ConditionalToken(open_flag, tuple(_merge_literals(body))))
            open_flag = None
            body = []
        else:
            target.append(VariableToken(match.group("var")))

    if open_flag is not None:
        # Unterminated block: opener stays literal, body renders unconditionally.
        tokens.append(LiteralToken(open_tag))
        tokens.extend(body)
    tokens.append(LiteralToken(template[pos:]))
    return tuple(_merge_literals(tokens))


class TemplateEngine:
    """Parses templates into tokens and renders them against a variable map."""

    def parse(self, template: str) -> List[Token]:
        return list(_parse_cached(template or ""))

    def render(self, tokens: List[Token] | Tuple[Token, ...], variables: Mapping[str, Any]) -> str:
        out: List[str] = []
        for token in tokens:
            if isinstance(token, LiteralToken):
                out.append(token.text)
            elif isinstance(token, VariableToken):
                out.append(format_value(variables.get(token.name)))
            elif variables.get(token.flag):
                out.append(self.render(token.body, variables))
        return "".join(out)

    def compile(self, template: str, variables: Mapping[str, Any]) -> str:
        return self.render(self.parse(template), variables)
