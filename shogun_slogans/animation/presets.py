"""Built-in animation definitions: typewriter, handwritten, neon."""
from __future__ import annotations

from shogun_slogans.animation.definitions import (
    AnimationCategory,
    AnimationDefinition,
    ParameterSpec,
    ParameterType,
)
from shogun_slogans.animation.registry import AnimationRegistry

TYPEWRITER_CSS = """
/* Container scoped to one rendered instance */
.shogun-typewriter-{{id}} {
    --typing-speed: {{speed}}ms;
    --cursor-char: "{{cursor}}";
    --cursor-speed: {{cursor_speed}}ms;
    --text-color: {{color}};
    font-size: {{font_size}};
    font-family: {{font_family}};
    color: var(--text-color);
    overflow: hidden;
    white-space: nowrap;
    display: inline-block;
    position: relative;
}

.shogun-typewriter-{{id}} .typewriter-text {
    display: inline-block;
    overflow: hidden;
    white-space: nowrap;
    {{#if text_length}}
    animation: shogun-type-{{id}} calc(var(--typing-speed) * {{text_length}}) steps({{text_length}}, end) forwards;
    {{/if}}
}

.shogun-typewriter-{{id}} .typewriter-cursor {
    display: inline-block;
    animation: shogun-blink-{{id}} var(--cursor-speed) infinite;
    margin-left: 1px;
}

@keyframes shogun-type-{{id}} {
    from { width: 0; }
    to { width: 100%; }
}

@keyframes shogun-blink-{{id}} {
    0%, 50% { opacity: 1; }
    51%, 100% { opacity: 0; }
}

@media (prefers-reduced-motion: reduce) {
    .shogun-typewriter-{{id}} .typewriter-text,
    .shogun-typewriter-{{id}} .typewriter-cursor { animation: none; }
}
"""

HANDWRITTEN_CSS = """
.shogun-handwritten-{{id}} {
    --writing-speed: {{speed}}ms;
    --ink-color: {{color}};
    color: var(--ink-color);
    font-family: {{font_family}};
    position: relative;
    overflow: hidden;
    display: inline-block;
}

.shogun-handwritten-{{id}} .handwritten-text {
    display: inline-block;
    opacity: 0;
    {{#if text_length}}
    animation: shogun-handwrite-{{id}} calc(var(--writing-speed) * {{text_length}}) ease-in-out forwards;
    {{/if}}
    {{#if wobble}}
    transform: rotate(0.5deg);
    {{/if}}
}

@keyframes shogun-handwrite-{{id}} {
    0% {
        opacity: 0;
        transform: translateY(10px) {{#if wobble}}rotate(0.5deg){{/if}};
    }
    20% {
        opacity: 1;
        transform: translateY(0) {{#if wobble}}rotate(-0.2deg){{/if}};
    }
    100% {
        opacity: 1;
        transform: translateY(0) {{#if wobble}}rotate(0.1deg){{/if}};
    }
}

@media (prefers-reduced-motion: reduce) {
    .shogun-handwritten-{{id}} .handwritten-text { animation: none; opacity: 1; }
}
"""

NEON_CSS = """
.shogun-neon-{{id}} {
    --glow-color: {{glow_color}};
    --text-color: {{text_color}};
    --glow-intensity: {{intensity}}px;
    --animation-speed: {{speed}}ms;

    color: var(--text-color);
    text-shadow:
        0 0 5px var(--glow-color),
        0 0 10px var(--glow-color),
        0 0 15px var(--glow-color),
        0 0 var(--glow-intensity) var(--glow-color);

    {{#if flicker}}
    animation: shogun-neon-flicker-{{id}} var(--animation-speed) infinite alternate;
    {{/if}}
}

{{#if flicker}}
@keyframes shogun-neon-flicker-{{id}} {
    0%, 19%, 21%, 23%, 25%, 54%, 56%, 100% {
        text-shadow:
            0 0 5px var(--glow-color),
            0 0 10px var(--glow-color),
            0 0 15px var(--glow-color),
            0 0 var(--glow-intensity) var(--glow-color);
    }
    20%, 24%, 55% {
        text-shadow: none;
    }
}
{{/if}}
"""


TYPEWRITER = AnimationDefinition(
    name="typewriter",
    category=AnimationCategory.TEXT,
    description="Classic typewriter effect with customizable cursor",
    parameters={
        "speed": ParameterSpec(ParameterType.INT, 100, min=10, max=1000, label="Typing Speed (ms)",
                               description="Speed of typing animation in milliseconds"),
        "cursor": ParameterSpec(ParameterType.STRING, "|", label="Cursor Character",
                                description="Character to use as cursor"),
        "cursor_speed": ParameterSpec(ParameterType.INT, 500, min=100, max=2000, label="Cursor Blink Speed (ms)",
                                      description="Speed of cursor blinking"),
        "color": ParameterSpec(ParameterType.COLOR, "inherit", label="Text Color", description="Color of the text"),
        "font_size": ParameterSpec(ParameterType.SIZE, "inherit", label="Font Size", description="Size of the text"),
        "font_family": ParameterSpec(ParameterType.STRING, "inherit", label="Font Family",
                                     description="Font family for the text"),
    },
    css_template=TYPEWRITER_CSS,
    js_init="ShogunAPI.initTypewriter",
)

HANDWRITTEN = AnimationDefinition(
    name="handwritten",
    category=AnimationCategory.TEXT,
    description="Handwritten effect with natural variations",
    parameters={
        "speed": ParameterSpec(ParameterType.INT, 150, min=50, max=500, label="Writing Speed (ms)",
                               description="Speed of handwriting animation"),
        "color": ParameterSpec(ParameterType.COLOR, "#2c3e50", label="Ink Color",
                               description="Color of the handwritten text"),
        "font_family": ParameterSpec(ParameterType.STRING, "cursive", label="Font Family",
                                     description="Handwriting font family"),
        "wobble": ParameterSpec(ParameterType.BOOLEAN, True, label="Natural Wobble",
                                description="Add natural handwriting variations"),
    },
    css_template=HANDWRITTEN_CSS,
    js_init="ShogunAPI.initHandwritten",
)

NEON = AnimationDefinition(
    name="neon",
    category=AnimationCategory.VISUAL,
    description="Neon glow effect with customizable colors",
    parameters={
        "glow_color": ParameterSpec(ParameterType.COLOR, "#00ffff", label="Glow Color",
                                    description="Color of the neon glow"),
        "text_color": ParameterSpec(ParameterType.COLOR, "#ffffff", label="Text Color",
                                    description="Color of the text"),
        "intensity": ParameterSpec(ParameterType.INT, 20, min=5, max=50, label="Glow Intensity",
                                   description="Intensity of the glow effect"),
        "flicker": ParameterSpec(ParameterType.BOOLEAN, False, label="Flicker Effect",
                                 description="Add flickering neon effect"),
        "speed": ParameterSpec(ParameterType.INT, 2000, min=500, max=5000, label="Animation Speed (ms)",
                               description="Speed of the neon animation"),
    },
    css_template=NEON_CSS,
    js_init="ShogunAPI.initNeon",
)

DEFAULT_ANIMATIONS = (TYPEWRITER, HANDWRITTEN, NEON)


def register_default_animations(registry: AnimationRegistry) -> AnimationRegistry:
    for definition in DEFAULT_ANIMATIONS:
        registry.register(definition)
    return registry
