"""Errors raised by the storeorder core.

Everything the core raises is a subclass of DomainException so the CLI
layer can catch it uniformly.  Draft operations never raise; these are
for checkout validation and backend failures.
"""

from __future__ import annotations


class DomainException(Exception):
    """Root of everything the core raises on purpose."""


class ValidationError(DomainException):
    """Input or persisted data failed a checkout or shape rule."""


class EntityNotFoundError(DomainException):
    """A product (or other backend row) is not in the local snapshot."""


class BackendError(DomainException):
    """A call to the hosted backend failed (transport or non-2xx reply)."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)
