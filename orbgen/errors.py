"""Exception hierarchy shared by the wizard, assembler and CLI."""

from __future__ import annotations


class OrbgenError(RuntimeError):
    """Base class for non-validation failures raised by orbgen."""


class UnsupportedFeatureError(OrbgenError):
    """Raised when a catalog entry without an implementation is selected."""

    def __init__(self, name: str) -> None:
        super().__init__(f"not supported yet: {name}")
        self.name = name


class InternalStateError(OrbgenError):
    """Raised when the wizard is driven outside of its state contract."""


class AssemblyError(OrbgenError):
    """Raised when the finalized actions and forwarding cannot be encoded."""
