import pytest

from shogun_slogans.animation.css_generator import CSSGenerator, canonical_serialize, minify_css, stable_hash
from shogun_slogans.animation.presets import register_default_animations
from shogun_slogans.animation.registry import AnimationRegistry


@pytest.fixture
def generator() -> CSSGenerator:
    return CSSGenerator(register_default_animations(AnimationRegistry()))


def test_unknown_animation_yields_empty_css(generator):
    assert generator.generate_animation_css("sparkle", {"speed": 5}) == ""
    assert generator.resolve("sparkle", {}) is None


def test_generation_is_deterministic_and_order_independent(generator):
    first = generator.generate_animation_css("neon", {"glow_color": "#ff0000", "intensity": 30})
    second = generator.generate_animation_css("neon", {"intensity": "30", "glow_color": "#ff0000"})
    assert first == second
    assert first


def test_neon_clamps_intensity_and_emits_flicker_keyframes(generator):
    css = generator.generate_animation_css("neon", {"intensity": 999, "flicker": "true"}, unique_id="abc12345")
    assert "--glow-intensity: 50px" in css
    assert "@keyframes shogun-neon-flicker-abc12345" in css
    assert css.startswith(".shogun-neon-abc12345{")
    assert css == generator.generate_animation_css("neon", {"intensity": 999, "flicker": "true"}, unique_id="abc12345")


def test_neon_without_flicker_has_no_flicker_rules(generator):
    css = generator.generate_animation_css("neon", {})
    assert "flicker" not in css
    assert "{{" not in css


def test_typewriter_animation_line_depends_on_text(generator):
    with_text = generator.generate_animation_css("typewriter", {"text": "Hello"}, unique_id="t1")
    without_text = generator.generate_animation_css("typewriter", {}, unique_id="t1")
    assert "steps(5,end)" in with_text
    assert "steps(" not in without_text
    assert "@keyframes shogun-type-t1" in without_text


def test_handwritten_wobble_toggle(generator):
    assert "rotate(" in generator.generate_animation_css("handwritten", {})
    assert "rotate(" not in generator.generate_animation_css("handwritten", {"wobble": "false"})


def test_unique_id_derives_from_sanitized_params(generator):
    resolved = generator.resolve("typewriter", {"speed": "5000"})
    assert resolved["speed"] == 1000
    assert generator.generate_unique_id("typewriter", resolved) == stable_hash("typewriter", resolved)[:8]
    css = generator.generate_animation_css("typewriter", {"speed": "5000"})
    assert f".shogun-typewriter-{stable_hash('typewriter', resolved)[:8]}" in css


def test_injected_css_is_neutralized(generator):
    css = generator.generate_animation_css("typewriter", {"font_family": "x; } body { display: none"})
    assert "body{display" not in css.replace(" ", "")


def test_canonical_serialize_sorts_keys():
    assert canonical_serialize({"b": 1, "a": True}) == '{"a":true,"b":1}'


def test_minify_strips_comments_and_whitespace():
    css = "a { color : red ; }  /* c */ b , c { x: y }"
    assert minify_css(css) == "a{color : red;}b,c{x: y}"


def test_minify_is_idempotent(generator):
    css = generator.generate_animation_css("handwritten", {"text": "Hi there"})
    assert minify_css(css) == css
    assert "/*" not in css
    assert minify_css("") == ""


@pytest.mark.parametrize(
    "css",
    [
        "/* header */\n\n.a  {\n  color : red ;\n}\n\n/* trailing */",
        "a  /* x */ ,  b   {  margin :  0  ;  }  ",
        "/*/* */*/ .b { x : y }",
        "a/**/*b*/ { }",
        ".c { color: red } /* never closed",
        "\t\n  \r\n",
    ],
)
def test_minify_is_idempotent_on_raw_input(css):
    once = minify_css(css)
    assert minify_css(once) == once
