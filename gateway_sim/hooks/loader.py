"""Load a hook set from YAML configuration."""

from __future__ import annotations

import importlib
import inspect
import logging
import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator

from ..errors import HookConfigError
from . import HookSet, HookStage

logger = logging.getLogger("gateway-sim.hooks")

try:
    import yaml
except ImportError:
    yaml = None  # type: ignore[assignment]


def load_hooks_from_config(config_path: Path) -> HookSet:
    """Load hooks from a YAML config file.

    Entries that fail to load are logged and skipped; the returned set
    holds whatever loaded successfully.
    """
    if yaml is None:
        logger.warning("pyyaml not installed; cannot load hooks config")
        return HookSet()

    try:
        config = yaml.safe_load(Path(config_path).read_text()) or {}
    except Exception:
        logger.error("Failed to parse hooks config: %s", config_path, exc_info=True)
        return HookSet()

    if not isinstance(config, dict):
        logger.error("Hooks config %s is not a mapping", config_path)
        return HookSet()

    # Add custom python paths
    python_path = config.get("python_path") or []
    if not isinstance(python_path, list):
        logger.warning("python_path in %s is not a list; ignoring it", config_path)
        python_path = []
    for p in python_path:
        expanded = os.path.expandvars(p)
        if expanded not in sys.path:
            sys.path.insert(0, expanded)

    hook_set = HookSet()

    for stage_name, hook_def in (config.get("hooks") or {}).items():
        try:
            stage = HookStage(stage_name)
        except ValueError:
            logger.warning("Unknown hook stage: %s", stage_name)
            continue

        if not isinstance(hook_def, dict):
            logger.warning("Hook entry for %s is not a mapping", stage_name)
            continue

        if not hook_def.get("enabled", True):
            continue

        try:
            fn = _load_hook_function(hook_def)
        except Exception:
            logger.error("Failed to load %s hook", stage_name, exc_info=True)
            continue

        # Inject config into the request context if provided
        hook_config = hook_def.get("config", {})
        if hook_config:
            fn = _wrap_with_config(fn, hook_config, stage)

        hook_set.set(stage, fn)
        logger.debug("Registered %s hook: %s.%s", stage.value, hook_def["module"], hook_def["function"])

    return hook_set


def _load_hook_function(hook_def: dict) -> Callable[..., Any]:
    """Import and return a hook function from a module path."""
    module = importlib.import_module(hook_def["module"])
    fn = getattr(module, hook_def["function"])

    if not callable(fn):
        raise HookConfigError(f"{hook_def['module']}.{hook_def['function']} is not callable")
    # The simulation runs synchronously
    if inspect.iscoroutinefunction(fn):
        raise HookConfigError(f"{hook_def['module']}.{hook_def['function']} is a coroutine function")

    return fn


def _wrap_with_config(fn: Callable[..., Any], hook_config: dict, stage: HookStage) -> Callable[..., Any]:
    """Wrap a hook function to inject config into ``request.context``."""
    if stage.is_response_stage:
        def configured_response_hook(rw, res, req, _fn=fn, _cfg=hook_config):
            with _hook_config(req, _cfg):
                return _fn(rw, res, req)

        return configured_response_hook

    def configured_request_hook(rw, req, _fn=fn, _cfg=hook_config):
        with _hook_config(req, _cfg):
            return _fn(rw, req)

    return configured_request_hook


@contextmanager
def _hook_config(req, hook_config: dict) -> Iterator[None]:
    """Expose ``hook_config`` for one hook call, then restore the previous value."""
    missing = object()
    previous = req.context.get("hook_config", missing)
    req.context["hook_config"] = hook_config
    try:
        yield
    finally:
        if previous is missing:
            req.context.pop("hook_config", None)
        else:
            req.context["hook_config"] = previous
