"""Proxy object runtime used by the protocol engine.

A :class:`RemoteObject` owns its property values and action behaviour. The
engine only relays through the capability surface (``has_action``,
``do_action``, ``has_property``, ``get_property``, ``set_property``) and
listens to ``events.property_changed``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Sequence

from napari.utils.events import EmitterGroup

from remote_ui.config.logging_policy import maybe_enable_debug_logger

logger = logging.getLogger(__name__)

_OBJECT_DEBUG = maybe_enable_debug_logger(logger, "REMOTE_UI_OBJECT_DEBUG")

_UNSET = object()


@dataclass(frozen=True)
class PropertySpec:
    """Declaration of a named property on a proxy class.

    ``getter``/``setter`` name methods on the object for computed
    properties; otherwise the value lives in the object's property store.
    """

    default: Any = None
    readable: bool = True
    writable: bool = True
    getter: Optional[str] = None
    setter: Optional[str] = None


def read_only(default: Any = None, *, getter: Optional[str] = None) -> PropertySpec:
    return PropertySpec(default=default, writable=False, getter=getter)


def _camel(name: str) -> str:
    """Map a wire property name to its accessor suffix (``h-align`` -> ``HAlign``)."""

    return "".join(part[:1].upper() + part[1:] for part in name.replace("_", "-").split("-") if part)


def _copy_default(value: Any) -> Any:
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, list):
        return list(value)
    return value


class RemoteObject:
    """Base class for every object addressable over the protocol."""

    properties: ClassVar[Mapping[str, PropertySpec]] = {}
    actions: ClassVar[Mapping[str, str]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # Merge declarations along the MRO so subclasses only list additions.
        merged_props: Dict[str, PropertySpec] = {}
        merged_actions: Dict[str, str] = {}
        for base in reversed(cls.__mro__):
            merged_props.update(base.__dict__.get("properties", {}))
            merged_actions.update(base.__dict__.get("actions", {}))
        accessors: Dict[str, tuple[str, str]] = {}
        for name, spec in merged_props.items():
            suffix = _camel(name)
            if spec.readable:
                accessors[f"get{suffix}"] = ("get", name)
            if spec.writable:
                accessors[f"set{suffix}"] = ("set", name)
        cls._all_properties = merged_props
        cls._all_actions = merged_actions
        cls._accessor_actions = accessors

    _all_properties: ClassVar[Dict[str, PropertySpec]] = {}
    _all_actions: ClassVar[Dict[str, str]] = {}
    _accessor_actions: ClassVar[Dict[str, tuple[str, str]]] = {}

    def __init__(self, **initial: Any) -> None:
        self.events = EmitterGroup(source=self, property_changed=None)
        self._values: Dict[str, Any] = {
            name: _copy_default(spec.default)
            for name, spec in self._all_properties.items()
            if spec.getter is None
        }
        for name, value in initial.items():
            self.set_property(name, value)

    @property
    def class_name(self) -> str:
        return type(self).__name__

    # ------------------------------------------------------------------
    def has_action(self, name: str) -> bool:
        return name in self._all_actions or name in self._accessor_actions

    def do_action(self, name: str, args: Sequence[Any]) -> Any:
        if _OBJECT_DEBUG:
            logger.debug("%s.%s%s", self.class_name, name, tuple(args))
        method_name = self._all_actions.get(name)
        if method_name is not None:
            method: Callable[..., Any] = getattr(self, method_name)
            return method(*args)
        accessor = self._accessor_actions.get(name)
        if accessor is None:
            raise KeyError(f"{self.class_name} has no action named '{name}'")
        kind, prop = accessor
        if kind == "get":
            return self.get_property(prop, *args)
        return self.set_property(prop, *args)

    def has_property(self, name: str) -> bool:
        return name in self._all_properties

    def can_write(self, name: str) -> bool:
        spec = self._all_properties.get(name)
        return spec is not None and spec.writable

    def get_property(self, name: str) -> Any:
        spec = self._spec(name)
        if not spec.readable:
            raise AttributeError(f"property '{name}' of {self.class_name} is not readable")
        if spec.getter is not None:
            return getattr(self, spec.getter)()
        return self._values.get(name)

    def set_property(self, name: str, value: Any) -> None:
        spec = self._spec(name)
        if not spec.writable:
            raise AttributeError(f"property '{name}' of {self.class_name} is read-only")
        if spec.setter is not None:
            getattr(self, spec.setter)(value)
            return
        self._store(name, value)

    def property_names(self) -> tuple[str, ...]:
        return tuple(self._all_properties)

    def action_names(self) -> tuple[str, ...]:
        return tuple(self._all_actions)

    # ------------------------------------------------------------------
    def _spec(self, name: str) -> PropertySpec:
        spec = self._all_properties.get(name)
        if spec is None:
            raise AttributeError(f"{self.class_name} has no property named '{name}'")
        return spec

    def _store(self, name: str, value: Any) -> None:
        """Store *value* and emit ``property_changed`` only if it differs."""

        previous = self._values.get(name, _UNSET)
        if previous is not _UNSET and previous == value and type(previous) is type(value):
            return
        self._values[name] = value
        self._emit_changed(name)

    def _emit_changed(self, name: str) -> None:
        if _OBJECT_DEBUG:
            logger.debug("%s property changed: %s", self.class_name, name)
        self.events.property_changed(key=name)

    def __repr__(self) -> str:
        return f"<{self.class_name} at {id(self):#x}>"


__all__ = ["PropertySpec", "RemoteObject", "read_only"]
