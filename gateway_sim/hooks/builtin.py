"""Built-in hooks for logging and header injection."""

from __future__ import annotations

import logging

import httpx

from ..request import ResponseRecorder, SimRequest

logger = logging.getLogger("gateway-sim.hooks")


def log_request(rw: ResponseRecorder, req: SimRequest) -> None:
    """Log the working request as it passes a stage."""
    verbose = req.context.get("hook_config", {}).get("verbose", False)
    logger.info("[REQ] %s %s | api=%s", req.method, req.url, req.definition.api_id or "-")
    if verbose:
        for name, value in req.headers.items():
            logger.info("  %s: %s", name, value)


def set_headers(rw: ResponseRecorder, req: SimRequest) -> None:
    """Set request headers from ``hook_config["headers"]``."""
    headers = req.context.get("hook_config", {}).get("headers", {})
    for name, value in headers.items():
        req.headers[name] = str(value)


def log_response(rw: ResponseRecorder, res: httpx.Response, req: SimRequest) -> None:
    """Log the outbound response status."""
    logger.info("[RESP] %s %s -> %s", req.method, req.url, res.status_code)
