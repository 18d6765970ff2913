from __future__ import annotations

import pytest

from remote_ui.objects import Application, Screen
from remote_ui.objects.widgets import (
    Adjustment,
    Box,
    Button,
    Entry,
    Fixed,
    Label,
    ProgressBar,
    RadioButton,
    RadioButtonGroup,
    Spinner,
    ToggleButton,
    Window,
)


def _changes(obj):
    seen = []
    obj.events.property_changed.connect(lambda event: seen.append(event.key))
    return seen


def test_declared_properties_merge_along_hierarchy():
    label = Label()
    assert label.has_property("text")
    assert label.has_property("visible")
    assert not label.has_property("title")
    assert Window().has_property("title")


def test_accessor_actions_generated_for_properties():
    label = Label()
    assert label.has_action("setText")
    assert label.has_action("getText")
    assert label.has_action("setHAlign")
    assert not label.has_action("setParent")
    label.do_action("setText", ["hello"])
    assert label.do_action("getText", []) == "hello"


def test_unknown_action_raises_key_error():
    with pytest.raises(KeyError):
        Label().do_action("doesNotExist", [])


def test_read_only_property():
    label = Label()
    assert label.has_property("parent")
    assert not label.can_write("parent")
    with pytest.raises(AttributeError):
        label.set_property("parent", None)


def test_property_changed_only_on_change():
    label = Label()
    seen = _changes(label)
    label.set_property("text", "a")
    label.set_property("text", "a")
    label.set_property("text", "b")
    assert seen == ["text", "text"]


def test_container_tracks_parent():
    box = Box()
    label = Label()
    box.do_action("add", [label])
    assert label.get_property("parent") is box
    assert box.children == [label]

    with pytest.raises(ValueError):
        Box().add(label)

    box.do_action("remove", [label])
    assert label.get_property("parent") is None


def test_window_accepts_single_child():
    window = Window()
    window.add(Label())
    with pytest.raises(ValueError):
        window.add(Label())


def test_visibility_follows_parents():
    window = Window()
    box = Box()
    label = Label()
    window.add(box)
    box.add(label)
    label.show()
    assert label.get_property("is-visible") is False

    window.do_action("showAll", [])
    assert label.get_property("is-visible") is True
    assert box.get_property("visible") is True

    window.do_action("hide", [])
    assert label.get_property("is-visible") is False


def test_destroy_detaches_from_parent():
    box = Box()
    label = Label()
    box.add(label)
    label.do_action("destroy", [])
    assert label.destroyed
    assert box.children == []


def test_margin_sets_all_sides():
    label = Label()
    seen = _changes(label)
    label.set_property("margin", 4)
    assert [label.get_property(f"margin-{side}") for side in ("top", "right", "bottom", "left")] == [4, 4, 4, 4]
    assert sorted(seen) == ["margin-bottom", "margin-left", "margin-right", "margin-top"]
    label.set_property("margin-top", 9)
    assert label.get_property("margin") == 9


def test_size_request_components():
    label = Label()
    label.set_property("width-request", 120)
    assert label.get_property("size-request") == {"width": 120, "height": -1}
    assert label.get_property("height-request") == -1


def test_entry_truncates_to_max_length():
    entry = Entry()
    entry.set_property("max-length", 3)
    entry.set_property("text", "abcdef")
    assert entry.get_property("text") == "abc"


def test_progress_bar_clamps_fraction():
    bar = ProgressBar()
    bar.do_action("pulse", [])
    assert bar.get_property("pulsing") is True
    bar.set_property("fraction", 1.5)
    assert bar.get_property("fraction") == 1.0
    assert bar.get_property("pulsing") is False


def test_adjustment_clamps_value():
    adj = Adjustment(lower=0.0, upper=100.0, **{"page-size": 10.0})
    adj.set_property("value", 95.0)
    assert adj.get_property("value") == 90.0
    adj.set_property("value", -3)
    assert adj.get_property("value") == 0.0


def test_spinner_start_stop():
    spinner = Spinner()
    spinner.do_action("start", [])
    assert spinner.get_property("active") is True
    spinner.do_action("stop", [])
    assert spinner.get_property("active") is False


def test_button_click_and_toggle():
    button = Button()
    button.do_action("click", [])
    assert button.clicks == 1

    toggle = ToggleButton()
    toggle.do_action("click", [])
    assert toggle.get_property("active") is True
    toggle.do_action("toggle", [])
    assert toggle.get_property("active") is False


def test_radio_group_is_exclusive():
    group = RadioButtonGroup()
    first, second = RadioButton(), RadioButton()
    first.set_property("group", group)
    second.set_property("group", group)
    assert group.buttons == [first, second]

    first.set_property("active", True)
    assert group.get_property("active") is first
    second.do_action("click", [])
    assert second.get_property("active") is True
    assert first.get_property("active") is False
    assert group.get_property("active") is second

    group.remove(second)
    assert second.get_property("group") is None
    assert group.get_property("active") is None


def test_fixed_positions_children():
    fixed = Fixed()
    label = Label()
    fixed.do_action("put", [label, 10, 20])
    assert fixed.positions[id(label)] == (10, 20)
    fixed.do_action("move", [label, 5, 6])
    assert fixed.positions[id(label)] == (5, 6)
    fixed.remove(label)
    assert fixed.positions == {}


def test_application_and_screen():
    app = Application()
    app.do_action("quit", [])
    assert app.get_property("running") is False

    screen = Screen(1920, 1080)
    assert screen.get_property("size") == {"width": 1920, "height": 1080}
    assert not screen.can_write("width")
