from shogun_slogans.animation.template_engine import (
    ConditionalToken,
    LiteralToken,
    TemplateEngine,
    VariableToken,
    format_value,
)

engine = TemplateEngine()


def test_variables_are_substituted():
    assert engine.compile("a {{x}} b {{y}}", {"x": 1, "y": "two"}) == "a 1 b two"


def test_missing_variable_renders_empty():
    assert engine.compile("[{{missing}}]", {}) == "[]"


def test_conditional_kept_only_when_truthy():
    template = "start{{#if on}} yes {{v}}{{/if}}end"
    assert engine.compile(template, {"on": True, "v": "!"}) == "start yes !end"
    assert engine.compile(template, {"on": False, "v": "!"}) == "startend"
    assert engine.compile(template, {"on": 0}) == "startend"
    assert engine.compile(template, {}) == "startend"


def test_boolean_values_format_as_one_or_empty():
    assert format_value(True) == "1"
    assert format_value(False) == ""
    assert format_value(None) == ""
    assert format_value(0) == "0"


def test_parse_produces_tokens():
    tokens = engine.parse("a{{x}}{{#if f}}b{{/if}}")
    assert tokens == [
        LiteralToken("a"),
        VariableToken("x"),
        ConditionalToken("f", (LiteralToken("b"),)),
    ]


def test_nested_conditional_is_kept_literally():
    template = "{{#if a}}x{{#if b}}y{{/if}}z{{/if}}"
    assert engine.compile(template, {"a": True, "b": False}) == "x{{#if b}}yz{{/if}}"
    assert engine.compile(template, {"a": False, "b": True}) == "z{{/if}}"


def test_unterminated_conditional_renders_body_unconditionally():
    assert engine.compile("a{{#if f}}b{{v}}", {"f": False, "v": "c"}) == "a{{#if f}}bc"


def test_stray_close_is_literal():
    assert engine.compile("a{{/if}}b", {}) == "a{{/if}}b"


def test_substitution_is_single_pass():
    # A value that looks like a tag is emitted as-is, never re-expanded.
    assert engine.compile("{{x}}", {"x": "{{y}}", "y": "boom"}) == "{{y}}"
