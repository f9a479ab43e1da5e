"""Minimal document model the client controller drives.

Only what the animations touch is modelled: attributes, classes, inline
style, text, children, and bubbling events. Markup produced by
``shogun_slogans.animation.markup`` is XML-compatible, so ``parse_markup``
reads it with ElementTree.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional
from xml.etree import ElementTree as ET

logger = logging.getLogger(__name__)

Listener = Callable[["Event"], None]

_SIMPLE_SELECTOR_RE = re.compile(
    r"(?P<tag>^[a-zA-Z][\w-]*)|\.(?P<cls>[\w-]+)|#(?P<id>[\w-]+)"
    r"|\[(?P<attr>[\w-]+)(?:=\"?(?P<value>[^\"\]]*)\"?)?\]"
)


@dataclass
class Event:
    type: str
    detail: Any = None
    bubbles: bool = True
    target: Optional["Element"] = None
    current_target: Optional["Element"] = None
    default_prevented: bool = False
    key: str = ""

    def prevent_default(self) -> None:
        self.default_prevented = True


class ClassList:
    def __init__(self, element: "Element") -> None:
        self._element = element

    def _items(self) -> List[str]:
        return (self._element.get_attribute("class") or "").split()

    def contains(self, name: str) -> bool:
        return name in self._items()

    __contains__ = contains

    def add(self, *names: str) -> None:
        items = self._items()
        items.extend(n for n in names if n not in items)
        self._element.set_attribute("class", " ".join(items))

    def remove(self, *names: str) -> None:
        self._element.set_attribute("class", " ".join(n for n in self._items() if n not in names))

    def toggle(self, name: str, force: Optional[bool] = None) -> bool:
        present = name in self._items()
        wanted = (not present) if force is None else force
        if wanted and not present:
            self.add(name)
        elif not wanted and present:
            self.remove(name)
        return wanted

    def __iter__(self) -> Iterator[str]:
        return iter(self._items())


def _matches_compound(element: "Element", selector: str) -> bool:
    pos = 0
    for match in _SIMPLE_SELECTOR_RE.finditer(selector):
        if match.start() != pos:
            return False
        pos = match.end()
        if match.group("tag") and element.tag.lower() != match.group("tag").lower():
            return False
        if match.group("cls") and not element.class_list.contains(match.group("cls")):
            return False
        if match.group("id") and element.get_attribute("id") != match.group("id"):
            return False
        if match.group("attr"):
            actual = element.get_attribute(match.group("attr"))
            if actual is None:
                return False
            if match.group("value") is not None and actual != match.group("value"):
                return False
    return pos == len(selector) and pos > 0


class Element:
    def __init__(self, tag: str, attributes: Optional[Dict[str, str]] = None, text: str = "") -> None:
        self.tag = tag
        self.attributes: Dict[str, str] = dict(attributes or {})
        self.style: Dict[str, str] = {}
        self.text = text
        self.tail = ""
        self.children: List[Element] = []
        self.parent: Optional[Element] = None
        self._listeners: Dict[str, List[Listener]] = {}
        self.class_list = ClassList(self)

    def __repr__(self) -> str:
        return f"<Element {self.tag} class={self.get_attribute('class')!r}>"

    # attributes

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = str(value)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    def data(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Read ``data-{name}``."""
        return self.attributes.get(f"data-{name}", default)

    @property
    def id(self) -> str:
        return self.attributes.get("id", "")

    # text and tree

    @property
    def text_content(self) -> str:
        return self.text + "".join(child.text_content + child.tail for child in self.children)

    @text_content.setter
    def text_content(self, value: str) -> None:
        for child in self.children:
            child.parent = None
        self.children = []
        self.text = value

    def append_child(self, child: "Element") -> "Element":
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove_child(self, child: "Element") -> None:
        self.children.remove(child)
        child.parent = None

    def remove(self) -> None:
        if self.parent is not None:
            self.parent.remove_child(self)

    def iter(self) -> Iterator["Element"]:
        """Descendants in document order, excluding self."""
        for child in self.children:
            yield child
            yield from child.iter()

    def matches(self, selector: str) -> bool:
        return any(_matches_compound(self, part.strip()) for part in selector.split(",") if part.strip())

    def query_selector(self, selector: str) -> Optional["Element"]:
        return next((el for el in self.iter() if el.matches(selector)), None)

    def query_selector_all(self, selector: str) -> List["Element"]:
        return [el for el in self.iter() if el.matches(selector)]

    def closest_root(self) -> "Element":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def is_connected(self) -> bool:
        return isinstance(self.closest_root(), Document)

    # events

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        self._listeners.setdefault(event_type, []).append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def listener_count(self, event_type: str) -> int:
        return len(self._listeners.get(event_type, []))

    def dispatch_event(self, event: Event) -> bool:
        """Run listeners on this element, then on each ancestor while bubbling."""
        event.target = self
        node: Optional[Element] = self
        while node is not None:
            event.current_target = node
            for listener in list(node._listeners.get(event.type, [])):
                try:
                    listener(event)
                except Exception:
                    logger.exception(f"Listener for {event.type} failed")
            if not event.bubbles:
                break
            node = node.parent
        return not event.default_prevented


class Document(Element):
    """Root node; owns ``body`` and page visibility."""

    def __init__(self) -> None:
        super().__init__("#document")
        self.hidden = False
        self.body = self.append_child(Element("body"))


def _from_etree(node: ET.Element) -> Element:
    element = Element(node.tag, dict(node.attrib), node.text or "")
    for child in node:
        converted = _from_etree(child)
        converted.tail = child.tail or ""
        element.append_child(converted)
    return element


def parse_markup(markup: str) -> List[Element]:
    """Parse an HTML fragment into detached top-level elements."""
    root = ET.fromstring(f"<fragment>{markup}</fragment>")
    elements = []
    for child in root:
        element = _from_etree(child)
        elements.append(element)
    return elements
