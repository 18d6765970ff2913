"""Registry of addressable objects: fixed singletons plus protocol-created proxies."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Optional, Tuple

from remote_ui.objects.base import RemoteObject
from remote_ui.objects.catalog import ClassFactoryTable
from remote_ui.protocol.errors import ProtocolError, ProtocolErrorKind
from remote_ui.protocol.messages import DYNAMIC_ID_START

logger = logging.getLogger(__name__)

PropertyListener = Callable[[int, RemoteObject, str], None]


@dataclass(frozen=True)
class RemoteObjectHandle:
    id: int
    class_name: str
    proxy: RemoteObject
    callback: Optional[Callable[[Any], None]] = None


class ObjectRegistry:
    """Resolve object ids across the singleton and dynamic namespaces.

    Ids below ``DYNAMIC_ID_START`` come from the singleton table handed in at
    construction and never change. Higher ids are created once through
    :meth:`create` and are never reused for the lifetime of the registry.
    """

    def __init__(
        self,
        singletons: Mapping[int, RemoteObject],
        classes: ClassFactoryTable,
        on_property_changed: Optional[PropertyListener] = None,
    ) -> None:
        for object_id in singletons:
            if not 0 <= int(object_id) < DYNAMIC_ID_START:
                raise ValueError(f"singleton id {object_id} outside reserved range 0..{DYNAMIC_ID_START - 1}")
        self._singletons: Mapping[int, RemoteObject] = MappingProxyType(dict(singletons))
        self._classes = classes
        self._handles: Dict[int, RemoteObjectHandle] = {}
        self._on_property_changed = on_property_changed

    @property
    def singletons(self) -> Mapping[int, RemoteObject]:
        return self._singletons

    @property
    def classes(self) -> ClassFactoryTable:
        return self._classes

    def create(self, class_name: str, object_id: int) -> RemoteObjectHandle:
        factory = self._classes.get_factory(class_name)
        if factory is None:
            raise ProtocolError(
                ProtocolErrorKind.UNKNOWN_CLASS,
                f"Class '{class_name}' is not allowed to be instantiated.",
            )
        if object_id < DYNAMIC_ID_START:
            raise ProtocolError(
                ProtocolErrorKind.RESERVED_ID_FOR_CREATE,
                f"Cannot instantiate object with reserved singleton id {object_id}.",
            )
        if object_id in self._handles:
            raise ProtocolError(
                ProtocolErrorKind.DUPLICATE_OBJECT_ID,
                f"Object with id {object_id} already exists.",
            )

        try:
            proxy = factory()
        except Exception as exc:
            raise ProtocolError(
                ProtocolErrorKind.OBJECT_RUNTIME_FAILURE,
                f"Failed to instantiate '{class_name}': {exc}",
            ) from exc

        callback = self._subscribe(object_id, proxy)
        handle = RemoteObjectHandle(id=object_id, class_name=class_name, proxy=proxy, callback=callback)
        self._handles[object_id] = handle
        logger.debug("registered object id=%s class=%s", object_id, class_name)
        return handle

    def lookup(self, object_id: int) -> RemoteObject:
        if object_id < DYNAMIC_ID_START:
            proxy = self._singletons.get(object_id)
            if proxy is not None:
                return proxy
        else:
            handle = self._handles.get(object_id)
            if handle is not None:
                return handle.proxy
        raise ProtocolError(
            ProtocolErrorKind.UNKNOWN_OBJECT_ID,
            f"Object with id {object_id} could not be found.",
        )

    def handle(self, object_id: int) -> RemoteObjectHandle | None:
        return self._handles.get(object_id)

    def handles(self) -> Tuple[RemoteObjectHandle, ...]:
        return tuple(self._handles.values())

    def clear(self) -> None:
        """Drop every dynamic object and its property-change subscription."""

        for handle in self._handles.values():
            if handle.callback is None:
                continue
            try:
                handle.proxy.events.property_changed.disconnect(handle.callback)
            except Exception:
                logger.debug("disconnect failed for object id=%s", handle.id, exc_info=True)
        self._handles.clear()

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._handles or object_id in self._singletons

    def __len__(self) -> int:
        return len(self._handles)

    # ------------------------------------------------------------------
    def _subscribe(self, object_id: int, proxy: RemoteObject) -> Optional[Callable[[Any], None]]:
        listener = self._on_property_changed
        if listener is None:
            return None

        def _on_changed(event: Any) -> None:
            listener(object_id, proxy, event.key)

        proxy.events.property_changed.connect(_on_changed)
        return _on_changed


__all__ = ["ObjectRegistry", "PropertyListener", "RemoteObjectHandle"]
