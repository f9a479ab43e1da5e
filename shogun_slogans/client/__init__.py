"""
Client-side animation lifecycle.

Components:
- dom: minimal element tree and bubbling events
- scheduler: virtual and asyncio timer sources
- observers: viewport and insertion notifications
- base / typewriter / reveal: per-element animation state machines
- controller: page-level orchestration
"""

from shogun_slogans.client.base import AnimationState, BaseAnimation
from shogun_slogans.client.controller import AnimationController, animation_class_for
from shogun_slogans.client.dom import Document, Element, Event, parse_markup
from shogun_slogans.client.observers import IntersectionObserver, MutationObserver
from shogun_slogans.client.registry import InstanceRegistry
from shogun_slogans.client.reveal import AnimatedTextAnimation, SloganAnimation
from shogun_slogans.client.scheduler import AsyncioScheduler, Scheduler, VirtualScheduler
from shogun_slogans.client.settings import ClientOptions, TypewriterSettings, parse_boolean, parse_number
from shogun_slogans.client.typewriter import TypewriterAnimation, TypewriterPhase

__all__ = [
    "AnimationState",
    "BaseAnimation",
    "AnimationController",
    "animation_class_for",
    "Document",
    "Element",
    "Event",
    "parse_markup",
    "IntersectionObserver",
    "MutationObserver",
    "InstanceRegistry",
    "AnimatedTextAnimation",
    "SloganAnimation",
    "AsyncioScheduler",
    "Scheduler",
    "VirtualScheduler",
    "ClientOptions",
    "TypewriterSettings",
    "parse_boolean",
    "parse_number",
    "TypewriterAnimation",
    "TypewriterPhase",
]
