# autoregistrar/registry/exceptions.py
"""Registry exceptions"""
from autoregistrar.exceptions import RegistrarError


# ----------------------------------------------------------------------------
# Registry errors
# ----------------------------------------------------------------------------
class RegistryError(RegistrarError): ...


class RegistryDuplicateError(RegistryError): ...


class RegistryCollisionError(RegistryError): ...


class RegistryLookupError(RegistryError, LookupError): ...


class RegistryFrozenError(RegistryError): ...
