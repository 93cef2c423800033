# tests/test_timestamps.py
"""Tests for timestamp resolution."""

from chuk_session_cost.timestamps import parse_timestamp_ms, resolve_timestamp_ms


class TestParseTimestamp:
    def test_iso_with_z_suffix(self):
        assert parse_timestamp_ms("1970-01-01T00:00:01Z") == 1_000

    def test_iso_with_offset(self):
        assert parse_timestamp_ms("1970-01-01T01:00:00+01:00") == 0

    def test_iso_with_milliseconds(self):
        assert parse_timestamp_ms("2024-05-01T12:00:00.250Z") == 1_714_564_800_250

    def test_naive_iso_is_utc(self):
        assert parse_timestamp_ms("1970-01-01T00:00:05") == 5_000

    def test_rfc2822(self):
        assert parse_timestamp_ms("Thu, 01 Jan 1970 00:00:02 +0000") == 2_000

    def test_blank_and_garbage(self):
        assert parse_timestamp_ms("") is None
        assert parse_timestamp_ms("   ") is None
        assert parse_timestamp_ms("not a date") is None

    def test_non_strings(self):
        assert parse_timestamp_ms(None) is None
        assert parse_timestamp_ms(1_000) is None
        assert parse_timestamp_ms({"t": 1}) is None


class TestResolveTimestamp:
    def test_priority_order(self):
        event = {
            "timestamp": "1970-01-01T00:00:01Z",
            "receivedAt": "1970-01-01T00:00:02Z",
            "sentAt": "1970-01-01T00:00:03Z",
            "message": {"timestamp": "1970-01-01T00:00:04Z"},
        }
        assert resolve_timestamp_ms(event) == 1_000

    def test_skips_unparseable_candidates(self):
        event = {
            "timestamp": "soon",
            "receivedAt": "",
            "sentAt": "1970-01-01T00:00:03Z",
        }
        assert resolve_timestamp_ms(event) == 3_000

    def test_nested_message_timestamp(self):
        event = {"message": {"timestamp": "1970-01-01T00:00:04Z"}}
        assert resolve_timestamp_ms(event) == 4_000

    def test_absent(self):
        assert resolve_timestamp_ms({}) is None
        assert resolve_timestamp_ms({"message": "hello"}) is None

    def test_never_raises_on_malformed_events(self):
        assert resolve_timestamp_ms(None) is None
        assert resolve_timestamp_ms("event") is None
        assert resolve_timestamp_ms([1, 2, 3]) is None
        assert resolve_timestamp_ms({"timestamp": 123}) is None
