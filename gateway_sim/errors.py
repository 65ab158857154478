"""Exceptions raised by gateway-sim."""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for all simulation failures."""


class DefinitionError(SimulationError):
    """API definition could not be read or parsed."""


class RequestError(SimulationError):
    """Inbound request could not be constructed."""


class InvalidTargetError(SimulationError):
    """Definition target URL is malformed or not absolute."""


class TransportFailure(SimulationError):
    """Outbound call failed at the transport level."""


class HookError(SimulationError):
    """A hook raised while the simulation was running."""

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(f"{stage} hook failed: {message}")
        self.stage = stage


class HookConfigError(SimulationError):
    """Hook configuration is invalid."""
