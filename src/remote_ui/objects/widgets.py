"""Widget proxies mirrored from the server-side widget tree.

These classes hold widget state only. Layout and drawing belong to the
rendering layer, which observes ``events.property_changed``.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from .base import PropertySpec, RemoteObject, read_only

logger = logging.getLogger(__name__)

_SIDES = ("top", "right", "bottom", "left")


class Widget(RemoteObject):
    """Common properties and actions shared by every widget."""

    properties = {
        "visible": PropertySpec(default=False),
        "is-visible": read_only(getter="_is_visible"),
        "sensitive": PropertySpec(default=True),
        "is-sensitive": read_only(getter="_is_sensitive"),
        "can-focus": PropertySpec(default=False),
        "h-align": PropertySpec(default=0.5),
        "v-align": PropertySpec(default=0.5),
        "h-scale": PropertySpec(default=1.0),
        "v-scale": PropertySpec(default=1.0),
        "size-request": PropertySpec(default={"width": -1, "height": -1}),
        "width-request": PropertySpec(getter="_width_request", setter="_set_width_request"),
        "height-request": PropertySpec(getter="_height_request", setter="_set_height_request"),
        "margin": PropertySpec(getter="_margin", setter="_set_margin"),
        "margin-top": PropertySpec(default=0),
        "margin-right": PropertySpec(default=0),
        "margin-bottom": PropertySpec(default=0),
        "margin-left": PropertySpec(default=0),
        "tooltip-label": PropertySpec(default=None),
        "parent": read_only(default=None),
    }
    actions = {
        "show": "show",
        "hide": "hide",
        "showAll": "show_all",
        "hideAll": "hide_all",
        "destroy": "destroy",
    }

    def __init__(self, **initial: Any) -> None:
        super().__init__(**initial)
        self.destroyed = False

    def show(self) -> None:
        self.set_property("visible", True)

    def hide(self) -> None:
        self.set_property("visible", False)

    def show_all(self) -> None:
        self.show()

    def hide_all(self) -> None:
        self.hide()

    def destroy(self) -> None:
        parent = self._values.get("parent")
        if isinstance(parent, Container):
            parent.remove(self)
        self.destroyed = True

    # -- computed properties -------------------------------------------
    def _is_visible(self) -> bool:
        parent = self._values.get("parent")
        if not self._values.get("visible"):
            return False
        if parent is None:
            return isinstance(self, Window)
        return bool(parent.get_property("is-visible"))

    def _is_sensitive(self) -> bool:
        parent = self._values.get("parent")
        if not (self._values.get("visible") and self._values.get("sensitive")):
            return False
        if parent is None:
            return isinstance(self, Window)
        return bool(parent.get_property("is-sensitive"))

    def _width_request(self) -> int:
        return self._values["size-request"]["width"]

    def _set_width_request(self, width: int) -> None:
        request = dict(self._values["size-request"])
        request["width"] = width
        self._store("size-request", request)

    def _height_request(self) -> int:
        return self._values["size-request"]["height"]

    def _set_height_request(self, height: int) -> None:
        request = dict(self._values["size-request"])
        request["height"] = height
        self._store("size-request", request)

    def _margin(self) -> int:
        return max(self._values[f"margin-{side}"] for side in _SIDES)

    def _set_margin(self, margin: int) -> None:
        for side in _SIDES:
            self._store(f"margin-{side}", margin)

    def _set_parent(self, parent: Optional["Container"]) -> None:
        self._store("parent", parent)


class Container(Widget):
    """Widget holding an ordered list of children."""

    actions = {
        "add": "add",
        "remove": "remove",
    }

    def __init__(self, **initial: Any) -> None:
        self.children: List[Widget] = []
        super().__init__(**initial)

    def add(self, child: Widget) -> None:
        if not isinstance(child, Widget):
            raise TypeError(f"{self.class_name} can only hold widgets, got {type(child).__name__}")
        if child.get_property("parent") is not None:
            raise ValueError(f"{child.class_name} already has a parent")
        self.children.append(child)
        child._set_parent(self)

    def remove(self, child: Widget) -> None:
        if child not in self.children:
            raise ValueError(f"{child.class_name} is not a child of {self.class_name}")
        self.children.remove(child)
        child._set_parent(None)

    def show_all(self) -> None:
        for child in self.children:
            child.show_all()
        self.show()

    def hide_all(self) -> None:
        for child in self.children:
            child.hide_all()
        self.hide()


class Bin(Container):
    """Container with at most one child."""

    def add(self, child: Widget) -> None:
        if self.children:
            raise ValueError(f"{self.class_name} can only contain one child")
        super().add(child)


class Box(Container):
    properties = {
        "orientation": PropertySpec(default="horizontal"),
        "spacing": PropertySpec(default=0),
        "homogeneous": PropertySpec(default=False),
    }


class Fixed(Container):
    """Container placing children at explicit coordinates."""

    actions = {
        "put": "put",
        "move": "move",
    }

    def __init__(self, **initial: Any) -> None:
        self.positions: dict[int, tuple[int, int]] = {}
        super().__init__(**initial)

    def put(self, child: Widget, x: int, y: int) -> None:
        self.add(child)
        self.positions[id(child)] = (int(x), int(y))

    def move(self, child: Widget, x: int, y: int) -> None:
        if child not in self.children:
            raise ValueError(f"{child.class_name} is not a child of {self.class_name}")
        self.positions[id(child)] = (int(x), int(y))

    def remove(self, child: Widget) -> None:
        super().remove(child)
        self.positions.pop(id(child), None)


class Frame(Bin):
    properties = {
        "label": PropertySpec(default=None),
        "shadow-type": PropertySpec(default="in"),
    }


class AspectFrame(Frame):
    properties = {
        "ratio": PropertySpec(default=1.0),
        "obey-child": PropertySpec(default=True),
    }


class Window(Bin):
    properties = {
        "title": PropertySpec(default=""),
        "resizable": PropertySpec(default=True),
        "active": PropertySpec(default=False),
        "position": PropertySpec(default={"x": 0, "y": 0}),
    }
    actions = {
        "present": "present",
    }

    def present(self) -> None:
        self.show()
        self.set_property("active", True)


class MainWindow(Window):
    properties = {
        "menu-bar": PropertySpec(default=None),
        "status-bar": PropertySpec(default=None),
    }


class ScrolledWindow(Bin):
    properties = {
        "h-policy": PropertySpec(default="automatic"),
        "v-policy": PropertySpec(default="automatic"),
        "h-adjustment": PropertySpec(default=None),
        "v-adjustment": PropertySpec(default=None),
    }


class Label(Widget):
    properties = {
        "text": PropertySpec(default=""),
        "justify": PropertySpec(default="left"),
        "selectable": PropertySpec(default=False),
        "wrap": PropertySpec(default=False),
    }


class Image(Widget):
    properties = {
        "uri": PropertySpec(default=None),
    }


class Separator(Widget):
    properties = {
        "orientation": PropertySpec(default="horizontal"),
    }


class Spinner(Widget):
    properties = {
        "active": PropertySpec(default=False),
    }
    actions = {
        "start": "start",
        "stop": "stop",
    }

    def start(self) -> None:
        self.set_property("active", True)

    def stop(self) -> None:
        self.set_property("active", False)


class ProgressBar(Widget):
    properties = {
        "fraction": PropertySpec(setter="_set_fraction", default=0.0),
        "text": PropertySpec(default=None),
        "pulse-step": PropertySpec(default=0.1),
        "pulsing": read_only(default=False),
    }
    actions = {
        "pulse": "pulse",
    }

    def _set_fraction(self, fraction: float) -> None:
        self._store("fraction", min(1.0, max(0.0, float(fraction))))
        self._store("pulsing", False)

    def pulse(self) -> None:
        self._store("pulsing", True)


class Entry(Widget):
    properties = {
        "text": PropertySpec(setter="_set_text", default=""),
        "editable": PropertySpec(default=True),
        "max-length": PropertySpec(default=0),
        "visibility": PropertySpec(default=True),
        "placeholder": PropertySpec(default=""),
    }

    def _set_text(self, text: str) -> None:
        text = "" if text is None else str(text)
        limit = self._values.get("max-length") or 0
        if limit > 0:
            text = text[:limit]
        self._store("text", text)


class Button(Bin):
    properties = {
        "label": PropertySpec(default=None),
        "relief": PropertySpec(default="normal"),
    }
    actions = {
        "click": "click",
    }

    def __init__(self, **initial: Any) -> None:
        self.clicks = 0
        super().__init__(**initial)

    def click(self) -> None:
        self.clicks += 1


class ToggleButton(Button):
    properties = {
        "active": PropertySpec(default=False),
    }
    actions = {
        "toggle": "toggle",
    }

    def toggle(self) -> None:
        self.set_property("active", not self.get_property("active"))

    def click(self) -> None:
        super().click()
        self.toggle()


class CheckButton(ToggleButton):
    properties = {
        "inconsistent": PropertySpec(default=False),
    }


class RadioButton(CheckButton):
    properties = {
        "group": PropertySpec(setter="_set_group", default=None),
    }

    def _set_group(self, group: Any) -> None:
        previous = self._values.get("group")
        if previous is group:
            return
        if previous is not None:
            previous.remove(self)
        self._store("group", group)
        if group is not None:
            group.add(self)

    def toggle(self) -> None:
        # Radio buttons only switch on; the group switches the others off.
        if not self.get_property("active"):
            self.set_property("active", True)

    def set_property(self, name: str, value: Any) -> None:
        super().set_property(name, value)
        group = self._values.get("group")
        if name == "active" and value and group is not None:
            group.set_property("active", self)


class Adjustment(RemoteObject):
    """Bounded numeric value shared by scales and scroll bars."""

    properties = {
        "value": PropertySpec(setter="_set_value", default=0.0),
        "lower": PropertySpec(default=0.0),
        "upper": PropertySpec(default=0.0),
        "step-increment": PropertySpec(default=0.0),
        "page-increment": PropertySpec(default=0.0),
        "page-size": PropertySpec(default=0.0),
    }

    def _set_value(self, value: float) -> None:
        lower = float(self._values.get("lower") or 0.0)
        upper = float(self._values.get("upper") or 0.0) - float(self._values.get("page-size") or 0.0)
        value = float(value)
        if upper >= lower:
            value = min(upper, max(lower, value))
        self._store("value", value)


class Range(Widget):
    properties = {
        "adjustment": PropertySpec(default=None),
        "orientation": PropertySpec(default="horizontal"),
        "inverted": PropertySpec(default=False),
    }


class Scale(Range):
    properties = {
        "digits": PropertySpec(default=1),
        "draw-value": PropertySpec(default=True),
    }


class ScrollBar(Range):
    pass


class RadioButtonGroup(RemoteObject):
    """Mutually exclusive set of radio buttons."""

    properties = {
        "active": PropertySpec(setter="_set_active", default=None),
    }
    actions = {
        "add": "add",
        "remove": "remove",
    }

    def __init__(self, **initial: Any) -> None:
        self.buttons: List[RadioButton] = []
        super().__init__(**initial)

    def add(self, button: RadioButton) -> None:
        if button in self.buttons:
            return
        self.buttons.append(button)
        if button.get_property("group") is not self:
            button.set_property("group", self)

    def remove(self, button: RadioButton) -> None:
        if button not in self.buttons:
            return
        self.buttons.remove(button)
        if self._values.get("active") is button:
            self._store("active", None)
        if button.get_property("group") is self:
            button.set_property("group", None)

    def _set_active(self, button: Optional[RadioButton]) -> None:
        if button is not None and button not in self.buttons:
            raise ValueError("active button must belong to the group")
        self._store("active", button)
        for other in self.buttons:
            if other is not button and other.get_property("active"):
                other.set_property("active", False)


class Menu(Container):
    pass


class MenuBar(Container):
    pass


class MenuItem(Bin):
    properties = {
        "label": PropertySpec(default=""),
        "submenu": PropertySpec(default=None),
    }
    actions = {
        "activate": "activate",
    }

    def __init__(self, **initial: Any) -> None:
        self.activations = 0
        super().__init__(**initial)

    def activate(self) -> None:
        self.activations += 1


class SeparatorMenuItem(MenuItem):
    pass


__all__ = [
    "Adjustment",
    "AspectFrame",
    "Bin",
    "Box",
    "Button",
    "CheckButton",
    "Container",
    "Entry",
    "Fixed",
    "Frame",
    "Image",
    "Label",
    "MainWindow",
    "Menu",
    "MenuBar",
    "MenuItem",
    "ProgressBar",
    "RadioButton",
    "RadioButtonGroup",
    "Range",
    "Scale",
    "ScrollBar",
    "ScrolledWindow",
    "Separator",
    "SeparatorMenuItem",
    "Spinner",
    "ToggleButton",
    "Widget",
    "Window",
]
