"""Middleware hook slots for the simulated gateway pipeline.

A :class:`HookSet` holds one optional callable per gateway stage. Stages
run in the fixed order of :class:`HookStage`; the outbound call sits
between ``POST`` and ``GATEWAY_RESPONSE``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

import httpx

if TYPE_CHECKING:
    from ..request import ResponseRecorder, SimRequest


class HookStage(Enum):
    """Gateway middleware stages, in execution order."""

    PRE = "pre"  # Before auth
    POST_KEY_AUTH = "post_key_auth"  # After key authentication
    GATEWAY_REQUEST = "gateway_request"  # Gateway's built-in request transforms
    POST = "post"  # Last stage before the outbound call
    GATEWAY_RESPONSE = "gateway_response"  # Gateway's built-in response transforms
    RESPONSE = "response"  # Custom response middleware

    @property
    def is_response_stage(self) -> bool:
        return self in RESPONSE_STAGES


RESPONSE_STAGES = frozenset({HookStage.GATEWAY_RESPONSE, HookStage.RESPONSE})

RequestHookFn = Callable[["ResponseRecorder", "SimRequest"], Any]
ResponseHookFn = Callable[["ResponseRecorder", httpx.Response, "SimRequest"], Any]


@dataclass
class HookSet:
    """Six optional hook slots. An unset slot is skipped."""

    pre: Optional[RequestHookFn] = None
    post_key_auth: Optional[RequestHookFn] = None
    gateway_request: Optional[RequestHookFn] = None
    post: Optional[RequestHookFn] = None
    gateway_response: Optional[ResponseHookFn] = None
    response: Optional[ResponseHookFn] = None

    def get(self, stage: HookStage) -> RequestHookFn | ResponseHookFn | None:
        return getattr(self, stage.value)

    def set(self, stage: HookStage, fn: RequestHookFn | ResponseHookFn | None) -> None:
        setattr(self, stage.value, fn)

    def active_stages(self) -> list[HookStage]:
        """Return populated stages in execution order."""
        return [stage for stage in HookStage if self.get(stage) is not None]

    @classmethod
    def from_mapping(cls, hooks: Mapping[str | HookStage, Callable[..., Any]]) -> HookSet:
        """Build a set from ``{stage: fn}``; stage keys may be names or enums."""
        hook_set = cls()
        for key, fn in hooks.items():
            stage = key if isinstance(key, HookStage) else HookStage(key)
            hook_set.set(stage, fn)
        return hook_set

