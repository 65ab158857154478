"""
Bounded diagnostic output.

Pretty-prints response bodies and structured values, capped so a large
payload cannot flood the console or the log.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

logger = logging.getLogger("gateway-sim.dump")

BODY_TRIM = 1000
VALUE_TRIM = 300

Marshal = Callable[[Any], str]


def trim(data: bytes, cap: int) -> bytes:
    """Cut ``data`` to ``cap`` bytes and append a trailer if it was longer."""
    if len(data) <= cap:
        return data
    return data[:cap] + f"\n...(trimmed at {cap} bytes)".encode()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _indent_json(data: bytes, indent: str) -> bytes:
    """Re-indent JSON text, changing only whitespace between tokens.

    Literals, escapes and duplicate keys are copied as written. Raises
    ValueError if ``data`` is not a single valid JSON document.
    """
    text = data.decode("utf-8")
    # Validate only; parsed values are discarded
    json.loads(
        text,
        parse_float=str,
        parse_int=str,
        parse_constant=_reject_constant,
        object_pairs_hook=list,
    )

    out: list[str] = []
    depth = 0
    pending_newline = False
    i = 0
    while i < len(text):
        c = text[i]
        if c in " \t\r\n":
            i += 1
            continue
        if pending_newline and c not in "]}":
            out.append("\n" + indent * depth)
            pending_newline = False

        if c == '"':
            j = i + 1
            while text[j] != '"':
                j += 2 if text[j] == "\\" else 1
            out.append(text[i:j + 1])
            i = j + 1
            continue

        if c in "{[":
            depth += 1
            out.append(c)
            pending_newline = True
        elif c in "}]":
            depth -= 1
            if pending_newline:
                # empty container stays compact
                pending_newline = False
            else:
                out.append("\n" + indent * depth)
            out.append(c)
        elif c == ",":
            out.append(",\n" + indent * depth)
        elif c == ":":
            out.append(": ")
        else:
            out.append(c)
        i += 1

    return "".join(out).encode()


def dump_body(body: bytes, cap: int = BODY_TRIM) -> bytes:
    """Tab-indent a JSON body, or keep it raw if it is not JSON, then cap it."""
    try:
        output = _indent_json(body, "\t")
    except (ValueError, UnicodeDecodeError):
        output = body
    return trim(output, cap)


def _marshal_indented(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def log_as_json(
    prefix: str,
    value: Any,
    cap: int = VALUE_TRIM,
    log: logging.Logger | None = None,
    marshal: Marshal | None = None,
) -> None:
    """Log ``value`` as indented JSON under ``prefix``.

    Marshal failures are logged and the dump is skipped. There is no raw
    fallback here, unlike :func:`dump_body`.
    """
    log = log or logger
    marshal = marshal or _marshal_indented

    try:
        text = marshal(value)
    except (TypeError, ValueError) as e:
        log.error("%s Error marshalling JSON: %s", prefix, e)
        return

    data = text.encode()
    if not data:
        log.info("%s Empty JSON", prefix)
        return

    log.info("%s\n%s", prefix, trim(data, cap).decode(errors="replace"))


class BoundedDumper:
    """Dumper bound to a logger and a pair of caps."""

    def __init__(
        self,
        log: logging.Logger | None = None,
        body_trim: int = BODY_TRIM,
        value_trim: int = VALUE_TRIM,
        marshal: Marshal | None = None,
    ) -> None:
        self.log = log or logger
        self.body_trim = body_trim
        self.value_trim = value_trim
        self.marshal = marshal

    def body(self, body: bytes) -> str:
        return dump_body(body, self.body_trim).decode(errors="replace")

    def value(self, prefix: str, value: Any) -> None:
        log_as_json(prefix, value, cap=self.value_trim, log=self.log, marshal=self.marshal)
