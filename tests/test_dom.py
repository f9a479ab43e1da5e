from shogun_slogans.client.dom import Document, Element, Event, parse_markup


def test_parse_markup_builds_tree():
    (root,) = parse_markup('<div class="a b" data-text="x &amp; y"><span class="t">Hi</span> tail</div>')
    assert root.tag == "div"
    assert root.data("text") == "x & y"
    assert root.query_selector(".t").text_content == "Hi"
    assert root.text_content == "Hi tail"


def test_selectors():
    root = Element("div", {"class": "wrap"})
    child = root.append_child(Element("span", {"class": "x y", "id": "c", "data-text": "t"}))
    assert root.query_selector("span.x") is child
    assert root.query_selector("#c") is child
    assert root.query_selector("[data-text]") is child
    assert root.query_selector('[data-text="t"]') is child
    assert root.query_selector('[data-text="u"]') is None
    assert root.query_selector(".z, .y") is child
    assert root.query_selector("div") is None
    assert root.matches(".wrap")


def test_class_list_operations():
    element = Element("div", {"class": "a"})
    element.class_list.add("b", "a")
    assert element.get_attribute("class") == "a b"
    element.class_list.remove("a")
    assert list(element.class_list) == ["b"]
    assert element.class_list.toggle("c") is True
    assert element.class_list.toggle("c") is False


def test_events_bubble_to_document():
    document = Document()
    child = document.body.append_child(Element("div"))
    seen = []
    document.add_event_listener("ping", lambda event: seen.append((event.target, event.current_target)))
    child.dispatch_event(Event("ping", {"n": 1}))
    assert seen == [(child, document)]
    assert child.is_connected


def test_non_bubbling_event_stays_on_target():
    document = Document()
    child = document.body.append_child(Element("div"))
    seen = []
    document.add_event_listener("ping", seen.append)
    child.dispatch_event(Event("ping", bubbles=False))
    assert seen == []


def test_text_content_setter_replaces_children():
    element = Element("div")
    element.append_child(Element("span", text="old"))
    element.text_content = "new"
    assert element.children == []
    assert element.text_content == "new"
