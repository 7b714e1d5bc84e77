"""Shared test fixtures for autoregistrar."""

import pytest

from autoregistrar.engine import ScanEngine
from autoregistrar.hooks import RegistrarHooks
from autoregistrar.markers import RegistrarDecorator
from autoregistrar.singletons import SingletonRegistry


class Widget:
    def __init__(self, color: str) -> None:
        self.color = color

    def __repr__(self) -> str:
        return f"Widget({self.color})"


class Gadget:
    pass


@pytest.fixture
def singletons():
    """A singleton registry isolated from the process-wide default."""
    return SingletonRegistry()


@pytest.fixture
def mark(singletons):
    """``@registrar``-style decorator binding into the isolated singletons."""
    return RegistrarDecorator(singletons=singletons)


@pytest.fixture
def hooks():
    return RegistrarHooks()


@pytest.fixture
def engine(singletons, hooks):
    return ScanEngine(singletons=singletons, hooks=hooks, tracing=False)
