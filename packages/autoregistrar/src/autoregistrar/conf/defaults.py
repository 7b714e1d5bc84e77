"""Default configuration values for autoregistrar."""

DEFAULTS: dict[str, object] = {
    # Namespace prefix for every key; unset until configured
    "NAMESPACE": None,
    # Detection mode
    "PUBLIC_ONLY": True,
    "ANNOTATED_ONLY": False,
    "NAMED_ONLY": False,
    # Emit an OpenTelemetry span per scan
    "TRACING_ENABLED": True,
}
