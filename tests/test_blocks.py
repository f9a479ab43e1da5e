from shogun_slogans.blocks import AnimationBlockAttributes, TypewriterBlockAttributes


def test_defaults_map_to_no_parameters():
    block = AnimationBlockAttributes.model_validate({"text": "Hi"})
    request = block.to_render_request()
    assert request.animation_name == "typewriter"
    assert request.raw_parameters == {}
    assert request.text == "Hi"


def test_only_changed_attributes_are_passed():
    block = AnimationBlockAttributes.model_validate(
        {"text": "Hi", "animationType": "neon", "glowColor": "#ff00ff", "intensity": 20, "fontSize": "24px"}
    )
    assert block.to_parameters() == {"font_size": "24px", "glow_color": "#ff00ff"}


def test_neon_attributes_ignored_for_other_animations():
    block = AnimationBlockAttributes.model_validate({"animationType": "typewriter", "glowColor": "#ff00ff", "flicker": True})
    assert block.to_parameters() == {}


def test_handwritten_wobble_off():
    block = AnimationBlockAttributes.model_validate({"animationType": "handwritten", "wobble": False})
    assert block.to_parameters() == {"wobble": False}


def test_class_name_and_unknown_attributes():
    block = AnimationBlockAttributes.model_validate({"className": "hero", "align": "wide"})
    request = block.to_render_request()
    assert request.css_class == "hero"
    assert request.text == "Your text here"


def test_typewriter_block():
    request = TypewriterBlockAttributes.model_validate({"text": "Go", "speed": 50, "cursor": "|"}).to_render_request()
    assert request.animation_name == "typewriter"
    assert request.raw_parameters == {"speed": 50}
    assert request.text == "Go"
