# autoregistrar/specification.py
"""
Configuration block for running registrars.

    with registrars(namespace="mymod") as spec:
        spec.registrar(Widgets, widget_registry)
        spec.registrar(Gadgets, gadget_map)

``detection_mode`` and ``namespace`` are plain attributes and may be changed
between ``registrar`` calls; each call scans with the values current at that
moment.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .conf import RegistrarSettings, Settings
from .detection import DetectionMode
from .engine import ScanEngine, ScanReport
from .providers import RegistryProvider

logger = logging.getLogger(__name__)


class RegistrarSpecification:
    """Holds a detection mode and namespace and runs registrars with them."""

    def __init__(
        self,
        *,
        namespace: str | None = None,
        detection_mode: DetectionMode = DetectionMode.DEFAULT,
        engine: ScanEngine | None = None,
    ) -> None:
        self.namespace = namespace
        self.detection_mode = detection_mode
        self.engine = ScanEngine() if engine is None else engine
        self.reports: list[ScanReport] = []

    @classmethod
    def from_settings(
        cls,
        settings: Mapping[str, Any] | None = None,
        *,
        engine: ScanEngine | None = None,
    ) -> RegistrarSpecification:
        """Build a block from layered settings (defaults plus environment when omitted)."""
        if settings is None:
            settings = Settings()
            settings.update_from_envvar()
            settings.update_from_environ()
        conf = RegistrarSettings.from_mapping(settings)
        if engine is None:
            engine = ScanEngine(tracing=conf.TRACING_ENABLED)
        return cls(namespace=conf.NAMESPACE, detection_mode=conf.detection_mode, engine=engine)

    @property
    def hooks(self):
        return self.engine.hooks

    def registrar(self, target: type, destination: Any) -> ScanReport:
        """Run ``target`` against a provider, mutable mapping, registry or callable."""
        provider = RegistryProvider.coerce(destination)
        report = self.engine.run(
            target,
            mode=self.detection_mode,
            namespace=self.namespace,
            provider=provider,
        )
        self.reports.append(report)
        return report

    # Context manager protocol; errors always propagate
    def __enter__(self) -> RegistrarSpecification:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc is None and self.reports:
            logger.debug(
                "registrar block done: %d registrar(s), %d key(s)",
                len(self.reports), sum(len(r) for r in self.reports),
            )
        return None


def registrars(
    *,
    namespace: str | None = None,
    detection_mode: DetectionMode = DetectionMode.DEFAULT,
    engine: ScanEngine | None = None,
) -> RegistrarSpecification:
    """Open a configuration block for defining and running registrars."""
    return RegistrarSpecification(namespace=namespace, detection_mode=detection_mode, engine=engine)


__all__ = ["RegistrarSpecification", "registrars"]
