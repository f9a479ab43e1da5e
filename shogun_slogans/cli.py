"""CLI interface."""
from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional

import typer

from shogun_slogans.context import build_context
from shogun_slogans.errors import AnimationNotFoundError, CSSGenerationError
from shogun_slogans.shortcodes import ShortcodeRenderer
from shogun_slogans.utils.config import settings

app = typer.Typer(add_completion=False)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level.")):
    """Compile and render Shogun Slogans animations."""
    level = "DEBUG" if verbose or settings.debug_mode else settings.log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _parse_params(pairs: List[str]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got {pair!r}", param_hint="--param")
        params[key.strip()] = value
    return params


@app.command("list")
def list_animations(category: Optional[str] = typer.Option(None, "--category", "-c", help="Filter by category.")):
    """Print registered animations as JSON."""
    ctx = build_context(settings)
    if category:
        try:
            definitions = ctx.registry.by_category(category)
        except ValueError:
            raise typer.BadParameter(f"Unknown category {category!r}", param_hint="--category")
        animations = [definition.summary() for definition in definitions]
    else:
        animations = ctx.service.list_animations()
    typer.echo(json.dumps({"animations": animations, "total": len(animations)}, indent=2))


@app.command()
def css(
    animation: str = typer.Argument(..., help="Animation name, e.g. neon."),
    param: List[str] = typer.Option(None, "--param", "-p", help="Parameter as key=value; repeatable.", show_default=False),
    unique_id: Optional[str] = typer.Option(None, "--id", help="Force the animation id."),
    no_cache: bool = typer.Option(False, "--no-cache", help="Bypass the CSS cache."),
):
    """Compile CSS for one animation."""
    ctx = build_context(settings)
    try:
        result = ctx.service.compile_css(
            animation, _parse_params(param), use_cache=not no_cache, explicit_id=unique_id
        )
    except (AnimationNotFoundError, CSSGenerationError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(result.css)


@app.command()
def render(
    content: str = typer.Argument(..., help='Content with shortcodes, e.g. \'[shogun_animation type="neon" text="Hi"]\'.'),
):
    """Render shortcodes to HTML, followed by the page style block."""
    ctx = build_context(settings)
    html = ShortcodeRenderer(ctx.service, settings).render(content)
    typer.echo(ctx.page_styles.render() + html)


@app.command("clear-cache")
def clear_cache(cache_key: Optional[str] = typer.Option(None, "--key", help="Clear one entry only.")):
    """Clear compiled CSS from the cache."""
    ctx = build_context(settings)
    typer.echo(ctx.service.clear_cache(cache_key))


if __name__ == "__main__":
    app()
