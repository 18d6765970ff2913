"""Closed table of proxy classes the peer may instantiate by name."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .base import RemoteObject
from .statusbar import StatusBar
from .widgets import (
    Adjustment,
    AspectFrame,
    Box,
    Button,
    CheckButton,
    Entry,
    Fixed,
    Frame,
    Image,
    Label,
    MainWindow,
    Menu,
    MenuBar,
    MenuItem,
    ProgressBar,
    RadioButton,
    RadioButtonGroup,
    Scale,
    ScrollBar,
    ScrolledWindow,
    Separator,
    SeparatorMenuItem,
    Spinner,
    ToggleButton,
    Window,
)

ObjectFactory = Callable[[], RemoteObject]


@dataclass(frozen=True)
class ClassRegistration:
    name: str
    factory: ObjectFactory


class ClassFactoryTable:
    """Maps class names to factories; frozen once the session starts."""

    def __init__(self, registrations: Mapping[str, ObjectFactory] | None = None) -> None:
        self._classes: dict[str, ClassRegistration] = {}
        self._frozen = False
        for name, factory in (registrations or {}).items():
            self.register(name, factory)

    def register(self, name: str, factory: ObjectFactory) -> None:
        if self._frozen:
            raise RuntimeError("class table is frozen; register classes before the session starts")
        if name in self._classes:
            raise ValueError(f"class '{name}' already registered")
        self._classes[name] = ClassRegistration(name=name, factory=factory)

    def freeze(self) -> "ClassFactoryTable":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, name: object) -> bool:
        return name in self._classes

    def get_factory(self, name: str) -> ObjectFactory | None:
        entry = self._classes.get(name)
        if entry is None:
            return None
        return entry.factory

    def class_names(self) -> tuple[str, ...]:
        return tuple(self._classes.keys())


DEFAULT_CLASSES: Mapping[str, ObjectFactory] = MappingProxyType(
    {
        "AspectFrame": AspectFrame,
        "Box": Box,
        "Button": Button,
        "CheckButton": CheckButton,
        "Entry": Entry,
        "Fixed": Fixed,
        "Frame": Frame,
        "Image": Image,
        "Label": Label,
        "MainWindow": MainWindow,
        "Menu": Menu,
        "MenuBar": MenuBar,
        "MenuItem": MenuItem,
        "ProgressBar": ProgressBar,
        "RadioButton": RadioButton,
        "Scale": Scale,
        "ScrollBar": ScrollBar,
        "ScrolledWindow": ScrolledWindow,
        "Separator": Separator,
        "SeparatorMenuItem": SeparatorMenuItem,
        "Spinner": Spinner,
        "StatusBar": StatusBar,
        "ToggleButton": ToggleButton,
        "Window": Window,
        "Adjustment": Adjustment,
        "RadioButtonGroup": RadioButtonGroup,
    }
)


def default_class_table() -> ClassFactoryTable:
    return ClassFactoryTable(DEFAULT_CLASSES).freeze()


__all__ = [
    "DEFAULT_CLASSES",
    "ClassFactoryTable",
    "ClassRegistration",
    "ObjectFactory",
    "default_class_table",
]
