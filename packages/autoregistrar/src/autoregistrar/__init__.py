"""Declarative registration of content objects held by registrar classes.

    @registrar(Widget)
    class Widgets:
        red_widget = Widget("red")
        blue_one: Annotated[Widget, RegistryObject("blue_widget")] = Widget("blue")

    with registrars(namespace="mymod") as spec:
        spec.registrar(Widgets, widgets)   # mymod:red_widget, mymod:blue_widget
"""

from .detection import DetectionMode
from .engine import ScanEngine, ScanReport
from .exceptions import (
    ImmutableStoreError,
    InvalidLocalNameError,
    MissingRegistrarMarkerError,
    MissingValueError,
    NamespaceUnsetError,
    NotScannableSingletonError,
    ProviderRegistrationError,
    RegistrarError,
    RegistryKeyError,
)
from .hooks import RegistrarHooks
from .keys import RegistryKey
from .markers import RegistrarDecorator, RegistrarMarker, RegistryObject, registrar
from .providers import (
    CallbackRegistryProvider,
    MapRegistryProvider,
    RegistryProvider,
    StandardRegistryProvider,
)
from .registry import ContentRegistry
from .singletons import SingletonRegistry, default_singletons
from .specification import RegistrarSpecification, registrars

__all__ = [
    # Markers
    "registrar", "RegistrarDecorator", "RegistrarMarker", "RegistryObject",
    # Engine
    "DetectionMode", "ScanEngine", "ScanReport", "RegistrarHooks",
    "RegistrarSpecification", "registrars",
    "SingletonRegistry", "default_singletons",
    # Keys / destinations
    "RegistryKey", "ContentRegistry",
    "RegistryProvider", "MapRegistryProvider", "StandardRegistryProvider", "CallbackRegistryProvider",
    # Errors
    "RegistrarError", "NamespaceUnsetError", "MissingRegistrarMarkerError",
    "NotScannableSingletonError", "InvalidLocalNameError", "MissingValueError",
    "ProviderRegistrationError", "ImmutableStoreError", "RegistryKeyError",
]
