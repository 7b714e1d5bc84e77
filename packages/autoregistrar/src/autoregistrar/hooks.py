# autoregistrar/hooks.py
"""
Observation hooks fired while registrars run.

Each :class:`RegistrarHooks` instance owns its own ``django.dispatch.Signal``
channels, so listeners are scoped to the engine that holds the hooks rather
than to the process. Receivers follow Django's signal convention and must
accept ``**kwargs``:

- ``member_registered``: ``sender`` (registrar class), ``mode``, ``namespace``,
  ``provider``, ``member``
- ``registrar_completed``: ``sender`` (registrar class), ``mode``,
  ``namespace``, ``provider``
- ``provider_used``: ``sender`` (registrar class), ``provider``, ``key``, ``value``

Receivers run synchronously in connection order. Django does not isolate
them: an exception propagates out of ``send`` and skips the remaining
receivers, which aborts the scan.
"""

from typing import Any, Callable, Optional

from django.dispatch import Signal

Receiver = Callable[..., Any]


class RegistrarHooks:
    """Publish/subscribe channels for registrar scans."""

    def __init__(self) -> None:
        self.member_registered = Signal()
        self.registrar_completed = Signal()
        self.provider_used = Signal()

    # ---------------- subscription ----------------
    @staticmethod
    def _connect(signal: Signal, receiver: Optional[Receiver], sender: Any):
        def _apply(fn: Receiver) -> Receiver:
            # strong refs: lambdas and closures must outlive the call site
            signal.connect(fn, sender=sender, weak=False)
            return fn

        if receiver is not None:
            return _apply(receiver)
        return _apply

    def on_member_registered(self, receiver: Optional[Receiver] = None, *, sender: Any = None):
        """Connect a receiver; usable as ``@hooks.on_member_registered`` or with ``sender=``."""
        return self._connect(self.member_registered, receiver, sender)

    def on_registrar_completed(self, receiver: Optional[Receiver] = None, *, sender: Any = None):
        return self._connect(self.registrar_completed, receiver, sender)

    def on_provider_used(self, receiver: Optional[Receiver] = None, *, sender: Any = None):
        return self._connect(self.provider_used, receiver, sender)

    def has_listeners(self, sender: Any = None) -> bool:
        return any(
            s.has_listeners(sender)
            for s in (self.member_registered, self.registrar_completed, self.provider_used)
        )

    # ---------------- emission ----------------
    def fire_provider_used(self, registrar: type, *, provider: Any, key: Any, value: Any) -> None:
        self.provider_used.send(sender=registrar, provider=provider, key=key, value=value)

    def fire_member_registered(
        self, registrar: type, *, mode: Any, namespace: str, provider: Any, member: Any
    ) -> None:
        self.member_registered.send(
            sender=registrar, mode=mode, namespace=namespace, provider=provider, member=member
        )

    def fire_registrar_completed(self, registrar: type, *, mode: Any, namespace: str, provider: Any) -> None:
        self.registrar_completed.send(
            sender=registrar, mode=mode, namespace=namespace, provider=provider
        )


__all__ = ["RegistrarHooks", "Receiver"]
