"""
gateway-sim - single-request API gateway pipeline simulator.

Drives one synthetic request through caller-supplied middleware hooks,
sends the outbound call and dumps the response.
"""

from .config import SimSettings, load_settings
from .definition import APIDefinition, load_definition, parse_definition
from .dump import BoundedDumper, dump_body, log_as_json, trim
from .errors import (
    DefinitionError,
    HookConfigError,
    HookError,
    InvalidTargetError,
    RequestError,
    SimulationError,
    TransportFailure,
)
from .hooks import HookSet, HookStage
from .request import ResponseRecorder, SimRequest
from .simulation import BANNER, GatewaySim, SimulationResult
from .target import OutboundTarget, resolve_outbound_target

__all__ = [
    "APIDefinition",
    "BANNER",
    "BoundedDumper",
    "DefinitionError",
    "GatewaySim",
    "HookConfigError",
    "HookError",
    "HookSet",
    "HookStage",
    "InvalidTargetError",
    "OutboundTarget",
    "RequestError",
    "ResponseRecorder",
    "SimRequest",
    "SimSettings",
    "SimulationError",
    "SimulationResult",
    "TransportFailure",
    "dump_body",
    "load_definition",
    "load_settings",
    "log_as_json",
    "parse_definition",
    "resolve_outbound_target",
    "trim",
]
