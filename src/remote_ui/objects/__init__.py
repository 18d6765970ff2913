"""Proxy object runtime and the widget catalog."""

from .base import PropertySpec, RemoteObject, read_only
from .catalog import DEFAULT_CLASSES, ClassFactoryTable, default_class_table
from .singletons import APPLICATION_ID, SCREEN_ID, Application, Screen, default_singletons
from .statusbar import StatusBar

__all__ = [
    "APPLICATION_ID",
    "DEFAULT_CLASSES",
    "SCREEN_ID",
    "Application",
    "ClassFactoryTable",
    "PropertySpec",
    "RemoteObject",
    "Screen",
    "StatusBar",
    "default_class_table",
    "default_singletons",
    "read_only",
]
