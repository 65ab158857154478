"""Tests for bounded diagnostic output."""

from __future__ import annotations

import json
import logging

from gateway_sim.dump import BoundedDumper, dump_body, log_as_json, trim


def _trailer(cap: int) -> bytes:
    return f"\n...(trimmed at {cap} bytes)".encode()


# =============================================================================
# trim
# =============================================================================


class TestTrim:
    def test_under_cap_unchanged(self):
        assert trim(b"hello", 10) == b"hello"

    def test_at_cap_unchanged(self):
        data = b"x" * 10
        assert trim(data, 10) == data

    def test_over_cap_truncated_with_trailer(self):
        data = bytes(range(50))
        result = trim(data, 10)
        assert result == data[:10] + _trailer(10)

    def test_empty(self):
        assert trim(b"", 10) == b""


# =============================================================================
# Response body mode
# =============================================================================


class TestDumpBody:
    def test_reindents_json_with_tabs(self):
        assert dump_body(b'{"a":1,"b":[true]}') == b'{\n\t"a": 1,\n\t"b": [\n\t\ttrue\n\t]\n}'

    def test_preserves_key_order(self):
        out = dump_body(b'{"z":1,"a":2}')
        assert out.index(b'"z"') < out.index(b'"a"')

    def test_invalid_json_passes_through_raw(self):
        body = b"<html>" + b"x" * 488 + b"</html>"
        assert len(body) == 500
        assert dump_body(body) == body

    def test_empty_body(self):
        assert dump_body(b"") == b""

    def test_large_json_truncated_to_cap(self):
        body = json.dumps({"data": "x" * 1480}).encode()
        assert len(body) > 1000
        out = dump_body(body)
        assert len(out) == 1000 + len(_trailer(1000))
        assert out.endswith(_trailer(1000))
        assert out.startswith(b'{\n\t"data": "xxx')

    def test_invalid_json_truncated_raw(self):
        body = b"not json " * 200
        out = dump_body(body, cap=100)
        assert out == body[:100] + _trailer(100)

    def test_non_utf8_bytes_fall_back(self):
        body = b"\xff\xfe\x00garbage"
        assert dump_body(body) == body

    def test_number_literals_kept_as_written(self):
        assert dump_body(b'{"a":1e5,"b":1.50,"c":-0.0}') == b'{\n\t"a": 1e5,\n\t"b": 1.50,\n\t"c": -0.0\n}'

    def test_overflowing_literal_kept(self):
        assert dump_body(b'{"a":1e400}') == b'{\n\t"a": 1e400\n}'

    def test_unicode_escapes_kept(self):
        assert dump_body(b'{"a":"\\u00e9\\n\\"q\\""}') == b'{\n\t"a": "\\u00e9\\n\\"q\\""\n}'

    def test_duplicate_keys_kept(self):
        assert dump_body(b'{"a":1,"a":2}') == b'{\n\t"a": 1,\n\t"a": 2\n}'

    def test_structural_characters_inside_strings_untouched(self):
        assert dump_body(b'{"k":"a, b: {c} [d]"}') == b'{\n\t"k": "a, b: {c} [d]"\n}'

    def test_empty_containers_stay_compact(self):
        assert dump_body(b'{"a": [ ], "b": {}}') == b'{\n\t"a": [],\n\t"b": {}\n}'

    def test_existing_whitespace_replaced(self):
        assert dump_body(b'[\n  1,\r\n    2\n]\n') == b'[\n\t1,\n\t2\n]'

    def test_scalar_document(self):
        assert dump_body(b' "text" ') == b'"text"'

    def test_non_json_constants_fall_back(self):
        body = b'{"a": NaN}'
        assert dump_body(body) == body

    def test_trailing_garbage_falls_back(self):
        body = b'{"a": 1} extra'
        assert dump_body(body) == body


# =============================================================================
# Structured value mode
# =============================================================================


class TestLogAsJson:
    def test_logs_indented_json(self, caplog):
        caplog.set_level(logging.INFO, logger="gateway-sim.dump")
        log_as_json("Payload:", {"a": 1})
        assert caplog.records[-1].getMessage() == 'Payload:\n{\n  "a": 1\n}'
        assert caplog.records[-1].levelno == logging.INFO

    def test_truncates_at_300(self, caplog):
        caplog.set_level(logging.INFO, logger="gateway-sim.dump")
        log_as_json("Big:", {"data": "y" * 1000})
        message = caplog.records[-1].getMessage()
        assert message.endswith("\n...(trimmed at 300 bytes)")
        assert len(message) == len("Big:\n") + 300 + len("\n...(trimmed at 300 bytes)")

    def test_marshal_failure_logs_error_and_skips(self, caplog):
        caplog.set_level(logging.INFO, logger="gateway-sim.dump")
        log_as_json("Broken:", {"obj": object()})
        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.ERROR
        assert record.getMessage().startswith("Broken: Error marshalling JSON:")

    def test_empty_marshal_logs_empty_notice(self, caplog):
        caplog.set_level(logging.INFO, logger="gateway-sim.dump")
        log_as_json("Nothing:", {"a": 1}, marshal=lambda v: "")
        assert caplog.records[-1].getMessage() == "Nothing: Empty JSON"

    def test_injected_logger(self, caplog):
        capture = logging.getLogger("test.capture")
        caplog.set_level(logging.INFO, logger="test.capture")
        log_as_json("Injected:", [1, 2], log=capture)
        assert caplog.records[-1].name == "test.capture"


class TestBoundedDumper:
    def test_body_returns_text(self):
        dumper = BoundedDumper(body_trim=5)
        assert dumper.body(b"abcdefgh") == "abcde\n...(trimmed at 5 bytes)"

    def test_value_uses_own_cap_and_logger(self, caplog):
        capture = logging.getLogger("test.dumper")
        caplog.set_level(logging.INFO, logger="test.dumper")
        dumper = BoundedDumper(capture, value_trim=4)
        dumper.value("V:", {"key": "value"})
        record = caplog.records[-1]
        assert record.name == "test.dumper"
        assert record.getMessage() == "V:\n{\n  \n...(trimmed at 4 bytes)"
