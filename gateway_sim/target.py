"""Outbound target resolution.

The outbound URL starts from the definition's backend target. Path and
query are each taken from the working request only when a hook changed
them relative to the original snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from .definition import APIDefinition
from .errors import InvalidTargetError
from .request import SimRequest

logger = logging.getLogger("gateway-sim.target")

HTTP_METHODS = {"GET", "HEAD", "POST", "PUT", "DELETE", "CONNECT", "OPTIONS", "TRACE", "PATCH"}


@dataclass(frozen=True)
class OutboundTarget:
    method: str
    url: httpx.URL


def resolve_outbound_target(
    original: SimRequest,
    working: SimRequest,
    definition: APIDefinition,
) -> OutboundTarget:
    """Compute the outbound method and URL.

    The method is the definition's ``protocol`` value, copied verbatim.
    """
    try:
        url = httpx.URL(definition.target_url)
    except httpx.InvalidURL as e:
        raise InvalidTargetError(f"Invalid target URL {definition.target_url!r}: {e}") from e
    if not url.is_absolute_url:
        raise InvalidTargetError(f"Target URL must be absolute: {definition.target_url!r}")

    if original.url.path != working.url.path:
        url = url.copy_with(path=working.url.path)
    if original.url.query != working.url.query:
        url = url.copy_with(query=working.url.query or None)

    method = definition.protocol
    if method.upper() not in HTTP_METHODS:
        logger.warning(
            "Definition protocol %r is not an HTTP method; using it as the outbound method anyway",
            method,
        )

    return OutboundTarget(method=method, url=url)
