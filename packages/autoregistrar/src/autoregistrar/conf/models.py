# autoregistrar/conf/models.py

import re
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, field_validator

from autoregistrar.detection import DetectionMode

_NAMESPACE_RE = re.compile(r"^[a-z0-9_.-]+$")


class RegistrarSettings(BaseModel):
    """Validated view over :class:`~autoregistrar.conf.settings.Settings`."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    NAMESPACE: str | None = None

    # Detection
    PUBLIC_ONLY: bool = True
    ANNOTATED_ONLY: bool = False
    NAMED_ONLY: bool = False

    TRACING_ENABLED: bool = True

    @field_validator("NAMESPACE")
    @classmethod
    def _validate_namespace(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        if not _NAMESPACE_RE.match(value):
            raise ValueError(
                f"namespace {value!r} may only contain lowercase letters, digits, '_', '.' and '-'"
            )
        return value

    @property
    def detection_mode(self) -> DetectionMode:
        return DetectionMode(
            public_only=self.PUBLIC_ONLY,
            annotated_only=self.ANNOTATED_ONLY,
            named_only=self.NAMED_ONLY,
        )

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "RegistrarSettings":
        return cls.model_validate(dict(settings))
