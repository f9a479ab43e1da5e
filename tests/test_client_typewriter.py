from __future__ import annotations

from typing import List

from shogun_slogans.animation.markup import render_typewriter_text
from shogun_slogans.client.base import AnimationState
from shogun_slogans.client.dom import Element, Event, parse_markup
from shogun_slogans.client.registry import InstanceRegistry
from shogun_slogans.client.scheduler import VirtualScheduler
from shogun_slogans.client.settings import TypewriterSettings, parse_boolean, parse_number
from shogun_slogans.client.typewriter import TypewriterAnimation, TypewriterPhase


def _no_jitter() -> float:
    return 0.5


def _element(text: str = "Hi!", **data: str) -> Element:
    html = render_typewriter_text(text=text, speed=100, cursor="|", element_id="tw")
    element = parse_markup(html)[0]
    for key, value in data.items():
        element.set_attribute(f"data-{key.replace('_', '-')}", value)
    return element


def _typewriter(element: Element, **kwargs):
    scheduler = VirtualScheduler()
    registry = kwargs.pop("registry", None)
    anim = TypewriterAnimation(element, scheduler, registry=registry, random=_no_jitter, **kwargs)
    events: List[Event] = []
    element.add_event_listener("shogun:typewriter:complete", events.append)
    return anim, scheduler, events


def test_types_with_punctuation_pause_then_completes():
    anim, scheduler, events = _typewriter(_element("Hi!"))
    assert anim.start() is True
    assert anim.displayed_text == "H"

    scheduler.advance(99)
    assert anim.displayed_text == "H"
    scheduler.advance(1)
    assert anim.displayed_text == "Hi"
    scheduler.advance(100)
    assert anim.displayed_text == "Hi!"

    # "!" holds for three times the base speed before completion.
    scheduler.advance(299)
    assert anim.state == AnimationState.RUNNING
    scheduler.advance(1)
    assert anim.state == AnimationState.COMPLETE
    assert len(events) == 1
    assert events[0].detail == {"id": anim.id, "text": "Hi!"}


def test_cursor_hidden_after_completion_unless_preserved():
    anim, scheduler, _ = _typewriter(_element("a"))
    anim.start()
    scheduler.advance(100)
    assert anim.is_complete
    assert anim.cursor_element.style.get("display") is None
    scheduler.advance(1000)
    assert anim.cursor_element.style["display"] == "none"

    kept, scheduler, _ = _typewriter(_element("a", preserve_cursor="true"))
    kept.start()
    scheduler.run_until_idle()
    assert kept.cursor_element.style.get("display") is None


def test_calculate_delay_multipliers_and_jitter():
    anim, _, _ = _typewriter(_element())
    assert anim.calculate_delay("a") == 100
    assert anim.calculate_delay(".") == 300
    assert anim.calculate_delay("?") == 300
    assert anim.calculate_delay(",") == 200
    assert anim.calculate_delay(":") == 200
    assert anim.calculate_delay(" ") == 50

    anim.random = lambda: 1.0
    assert anim.calculate_delay("a") == 110
    anim.random = lambda: 0.0
    assert anim.calculate_delay("a") == 90


def test_delay_never_below_floor():
    anim, _, _ = _typewriter(_element(speed="10"))
    anim.random = lambda: 0.0
    assert anim.calculate_delay(" ") == 10


def test_start_is_idempotent():
    anim, scheduler, _ = _typewriter(_element("Hello"))
    assert anim.start() is True
    assert anim.start() is False
    assert anim.displayed_text == "H"
    assert scheduler.pending_count == 1


def test_pause_and_resume_continue_from_same_position():
    anim, scheduler, _ = _typewriter(_element("Hello"))
    anim.start()
    scheduler.advance(100)
    assert anim.displayed_text == "He"

    assert anim.pause() is True
    assert anim.is_paused
    scheduler.advance(5000)
    assert anim.displayed_text == "He"

    assert anim.resume() is True
    assert anim.state == AnimationState.RUNNING
    assert anim.displayed_text == "Hel"
    assert anim.resume() is False


def test_pause_is_noop_when_idle():
    anim, _, _ = _typewriter(_element())
    assert anim.pause() is False
    assert anim.state == AnimationState.IDLE


def test_start_delay():
    anim, scheduler, _ = _typewriter(_element("Hi", delay="500"))
    anim.start()
    assert anim.state == AnimationState.STARTED
    assert anim.displayed_text == "Hi"
    scheduler.advance(499)
    assert anim.state == AnimationState.STARTED
    scheduler.advance(1)
    assert anim.state == AnimationState.RUNNING
    assert anim.displayed_text == "H"


def test_pause_during_start_delay_resumes_immediately():
    anim, scheduler, _ = _typewriter(_element("Hi", delay="500"))
    anim.start()
    anim.pause()
    scheduler.advance(2000)
    assert anim.is_paused
    anim.resume()
    assert anim.state == AnimationState.RUNNING
    assert anim.displayed_text == "H"


def test_destroy_cancels_timers_and_stale_callbacks_do_nothing():
    registry = InstanceRegistry()
    element = _element("Hello")
    anim, scheduler, events = _typewriter(element, registry=registry)
    anim.start()
    assert anim in registry.active

    anim.destroy()
    assert anim.state == AnimationState.DESTROYED
    assert scheduler.pending_count == 0
    scheduler.advance(10_000)
    assert anim.displayed_text == "H"
    assert events == []
    assert element not in registry
    assert anim not in registry.active
    assert element.listener_count("mouseenter") == 0
    assert anim.start() is False
    anim.destroy()


def test_reduced_motion_completes_synchronously():
    anim, scheduler, events = _typewriter(_element("Hello"), reduced_motion=True)
    anim.start()
    assert anim.state == AnimationState.COMPLETE
    assert anim.displayed_text == "Hello"
    assert anim.cursor_element.style["display"] == "none"
    assert len(events) == 1
    assert scheduler.pending_count == 0


def test_loop_deletes_and_retypes():
    registry = InstanceRegistry()
    element = _element("ab", loop="true", pause_end="500", pause_start="100", delete_speed="10")
    anim, scheduler, events = _typewriter(element, registry=registry)
    anim.start()
    scheduler.advance(200)
    assert anim.state == AnimationState.COMPLETE
    assert len(events) == 1
    assert anim in registry.active

    # A looping instance waiting to delete cannot be restarted.
    assert anim.start() is False

    scheduler.advance(500)
    assert anim.phase == TypewriterPhase.DELETING
    assert anim.state == AnimationState.RUNNING
    assert anim.displayed_text == "a"
    scheduler.advance(10)
    assert anim.displayed_text == ""
    scheduler.advance(10)
    assert anim.phase == TypewriterPhase.WAITING

    scheduler.advance(100)
    assert anim.phase == TypewriterPhase.TYPING
    assert anim.displayed_text == "a"
    scheduler.advance(200)
    assert anim.is_complete
    assert len(events) == 2


def test_pause_while_waiting_to_loop():
    element = _element("ab", loop="true", pause_end="500")
    anim, scheduler, _ = _typewriter(element)
    anim.start()
    scheduler.advance(200)
    assert anim.pause() is True
    scheduler.advance(5000)
    assert anim.displayed_text == "ab"
    anim.resume()
    assert anim.phase == TypewriterPhase.DELETING
    assert anim.displayed_text == "a"


def test_restart_after_completion_retypes():
    anim, scheduler, events = _typewriter(_element("ab"))
    anim.start()
    scheduler.run_until_idle()
    assert anim.is_complete
    assert anim.start() is True
    assert anim.displayed_text == "a"
    assert anim.cursor_element.style.get("display") is None


def test_missing_scaffold_records_error_and_never_starts():
    element = Element("div", {"class": "shogun-typewriter", "data-text": "Hi"})
    anim = TypewriterAnimation(element, VirtualScheduler())
    assert anim.ready is False
    assert anim.errors == ["Missing .typewriter-text element"]
    assert anim.start() is False
    assert anim.state == AnimationState.IDLE


def test_hover_pauses_and_resumes():
    element = _element("Hello")
    anim, scheduler, _ = _typewriter(element)
    anim.start()
    element.dispatch_event(Event("mouseenter"))
    assert anim.is_paused
    element.dispatch_event(Event("mouseleave"))
    assert anim.state == AnimationState.RUNNING


def test_keyboard_toggles_pause():
    element = _element("Hello")
    anim, scheduler, _ = _typewriter(element)
    anim.start()
    event = Event("keydown", key="Enter")
    element.dispatch_event(event)
    assert event.default_prevented
    assert anim.is_paused
    element.dispatch_event(Event("keydown", key=" "))
    assert not anim.is_paused
    element.dispatch_event(Event("keydown", key="a"))
    assert not anim.is_paused
    assert element.get_attribute("tabindex") == "0"


def test_update_text_retypes_from_start():
    anim, scheduler, events = _typewriter(_element("Hello"))
    anim.start()
    scheduler.advance(100)
    anim.update_text("Yo")
    assert anim.text == "Yo"
    assert anim.displayed_text == "Y"
    assert anim.text_element.get_attribute("aria-label") == "Yo"
    scheduler.run_until_idle()
    assert events[-1].detail["text"] == "Yo"


def test_update_text_before_start_does_not_start():
    anim, _, _ = _typewriter(_element("Hello"))
    anim.update_text("Later")
    assert anim.state == AnimationState.IDLE


def test_update_settings_reclamps():
    anim, _, _ = _typewriter(_element("Hello"))
    anim.update_settings(speed=5000, cursor="_", pause_end=1)
    assert anim.settings.speed == 1000
    assert anim.settings.pause_end == 500
    assert anim.cursor_element.text_content == "_"


def test_settings_clamps_from_data_attributes():
    element = _element("x", delete_speed="5", pause_end="100", pause_start="99999", speed="abc")
    settings = TypewriterSettings.from_element(element)
    assert settings.delete_speed == 10
    assert settings.pause_end == 500
    assert settings.pause_start == 5000
    assert settings.speed == 100
    assert settings.cursor == "|"


def test_parse_helpers():
    assert parse_number("abc", 5, 0, 10) == 5
    assert parse_number("20", 5, 0, 10) == 10
    assert parse_number("-5", 5, 0, 10) == 0
    assert parse_number("7.9", 5) == 7
    assert parse_boolean("yes") is True
    assert parse_boolean("off", True) is False
    assert parse_boolean("maybe", True) is True
    assert parse_boolean(None) is False


def test_parse_number_ignores_non_finite_values():
    assert parse_number("9" * 400, 100, 10, 1000) == 100
    assert parse_number(float("inf"), 100, 10, 1000) == 100
    assert parse_number(float("nan"), 100) == 100
    assert parse_number("nan", 100) == 100


def test_oversized_speed_attribute_falls_back_to_default():
    anim, _, _ = _typewriter(_element("Hi", speed="9" * 400))
    assert anim.ready is True
    assert anim.settings.speed == 100


class _ExplodingTypewriter(TypewriterAnimation):
    def setup(self) -> bool:
        raise RuntimeError("boom")


def test_setup_exception_is_recorded_not_raised():
    registry = InstanceRegistry()
    element = _element("Hi")
    anim = _ExplodingTypewriter(element, VirtualScheduler(), registry=registry)
    assert anim.ready is False
    assert anim.errors == ["Setup failed: boom"]
    assert anim.start() is False
    assert registry.get(element) is anim
