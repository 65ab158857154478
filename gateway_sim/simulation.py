"""
Single-request gateway pipeline simulation.

Drives one synthetic request through the middleware hook stages, sends
the resulting outbound call and dumps the response body to the console.

Example:
    sim = GatewaySim("http://localhost/foo?x=1", "apis/orders.json")
    sim.hooks.pre = lambda rw, req: req.headers.update({"X-Debug": "1"})
    result = sim.start()
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

import httpx

from .config import SimSettings
from .definition import load_definition
from .dump import BoundedDumper
from .errors import HookError, SimulationError, TransportFailure
from .hooks import HookSet, HookStage
from .hooks.loader import load_hooks_from_config
from .request import ResponseRecorder, SimRequest
from .target import resolve_outbound_target

logger = logging.getLogger("gateway-sim.simulation")

BANNER = "---- Response Body ----"

REQUEST_STAGES = tuple(stage for stage in HookStage if not stage.is_response_stage)
RESPONSE_STAGES = tuple(stage for stage in HookStage if stage.is_response_stage)


@dataclass
class SimulationResult:
    """Outcome of one simulated exchange."""
    status_code: int
    headers: dict[str, str]
    body: bytes
    output: str
    outbound_method: str
    outbound_url: str


class GatewaySim:
    """One simulated request/response exchange. Single use.

    Construction failures (unreadable definition, bad inbound URL) raise
    immediately. ``start()`` runs the stages in fixed order:
    pre, post_key_auth, gateway_request, post, outbound call,
    gateway_response, response.
    """

    def __init__(
        self,
        inbound_url: str,
        definition_path: str | Path,
        hooks: HookSet | None = None,
        *,
        settings: SimSettings | None = None,
        log: logging.Logger | None = None,
        transport: httpx.BaseTransport | None = None,
        out: TextIO | None = None,
    ) -> None:
        self.settings = settings or SimSettings()
        self.log = log or logger

        definition = load_definition(definition_path)
        self.request = SimRequest.build("GET", inbound_url, definition)

        if hooks is None and self.settings.hooks_file is not None:
            hooks = load_hooks_from_config(self.settings.hooks_file)
        self.hooks = hooks or HookSet()

        self.recorder = ResponseRecorder()
        self.response: httpx.Response | None = None
        self.dumper = BoundedDumper(
            self.log,
            body_trim=self.settings.body_trim,
            value_trim=self.settings.value_trim,
        )
        self._transport = transport
        self._out = out
        self._started = False

    def start(self) -> SimulationResult:
        """Run the simulated request flow."""
        if self._started:
            raise SimulationError("GatewaySim is single-use; start() already ran")
        self._started = True

        original = self.request.clone()

        for stage in REQUEST_STAGES:
            self._run_hook(stage, self.recorder, self.request)

        # Set up outbound request
        target = resolve_outbound_target(original, self.request, self.request.definition)
        self.request.method = target.method
        self.request.url = target.url
        self.dumper.value("Outbound request:", {
            "method": self.request.method,
            "url": str(self.request.url),
            "headers": dict(self.request.headers),
        })

        with self._client() as client:
            response = self._send(client)
            self.response = response
            try:
                for stage in RESPONSE_STAGES:
                    self._run_hook(stage, self.recorder, response, self.request)
                body = response.read()
            except (httpx.TransportError, httpx.DecodingError) as e:
                raise TransportFailure(f"Reading response body failed: {e}") from e
            finally:
                response.close()

        output = self.dumper.body(body)
        print(BANNER, output, sep="\n", file=self._out or sys.stdout)

        return SimulationResult(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=body,
            output=output,
            outbound_method=target.method,
            outbound_url=str(target.url),
        )

    def _client(self) -> httpx.Client:
        return httpx.Client(
            transport=self._transport,
            timeout=httpx.Timeout(self.settings.timeout),
            follow_redirects=True,
        )

    def _send(self, client: httpx.Client) -> httpx.Response:
        request = client.build_request(
            self.request.method,
            self.request.url,
            headers=self.request.headers,
            content=self.request.body or None,
        )
        self.log.debug("Outbound %s %s", request.method, request.url)
        try:
            return client.send(request, stream=True)
        except httpx.TransportError as e:
            raise TransportFailure(f"Outbound {request.method} {request.url} failed: {e}") from e

    def _run_hook(self, stage: HookStage, *args: Any) -> None:
        fn = self.hooks.get(stage)
        if fn is None:
            return
        self.log.debug("Running %s hook", stage.value)
        try:
            fn(*args)
        except Exception as e:
            self.log.error("%s hook failed", stage.value, exc_info=True)
            raise HookError(stage.value, str(e)) from e
