"""
Contract Tests

These tests verify that Pydantic schemas work correctly for:
1. Summary payload decoding
2. Chart spec structure and serialization
3. Configuration loading
"""

import json

import pytest
from pydantic import ValidationError

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from insights.config import Settings
from insights.errors import SummaryDecodeError
from insights.schemas.chart import (
    VEGA_SCHEMA,
    ChartData,
    FieldEncoding,
    LineChartSpec,
    LineEncoding,
    MarkConfig,
    PieChartSpec,
    PieEncoding,
    SortSpec,
)
from insights.schemas.summary import EMPTY_SUMMARY, Summary, decode_summary, summary_from_row


class TestSummary:
    """Test Summary decoding."""

    def test_full_summary(self):
        """All known fields map from their wire names."""
        s = decode_summary(json.dumps({
            "os": {"linux": 4},
            "musicFS": {"ext4": 2},
            "dataFS": {"zfs": 1},
            "playerTypes": {"Feishin": 3},
            "versions": {"0.52.0": 9},
            "numInstances": 9,
        }).encode("utf-8"))
        assert s.os == {"linux": 4}
        assert s.music_fs == {"ext4": 2}
        assert s.data_fs == {"zfs": 1}
        assert s.player_types == {"Feishin": 3}
        assert s.versions == {"0.52.0": 9}
        assert s.num_instances == 9

    def test_missing_fields_default_empty(self):
        """Absent mappings are empty, absent total is None."""
        s = decode_summary(b"{}")
        assert s.os == {}
        assert s.player_types == {}
        assert s.num_instances is None

    def test_unknown_fields_ignored(self):
        """Other summary fields do not break decoding."""
        s = decode_summary(b'{"libraryTypes": {"music": 1}, "os": {"linux": 1}}')
        assert s.os == {"linux": 1}

    def test_key_order_preserved(self):
        """Mapping order is the stored order."""
        s = decode_summary(b'{"os": {"z": 1, "a": 2, "m": 3}}')
        assert list(s.os) == ["z", "a", "m"]

    def test_invalid_json(self):
        """Malformed JSON raises SummaryDecodeError."""
        with pytest.raises(SummaryDecodeError):
            decode_summary(b"")

    def test_wrong_shape(self):
        """A count that is not a number raises SummaryDecodeError."""
        with pytest.raises(SummaryDecodeError):
            decode_summary(b'{"os": {"linux": "many"}}')

    def test_string_count_rejected(self):
        """Counts are not coerced: a quoted number is a decode error."""
        with pytest.raises(SummaryDecodeError):
            decode_summary(b'{"os": {"linux": "7"}}')
        with pytest.raises(SummaryDecodeError):
            decode_summary(b'{"numInstances": "5"}')

    def test_decode_error_is_value_error(self):
        assert issubclass(SummaryDecodeError, ValueError)

    def test_summary_from_row(self):
        """None or non-bytes rows have no summary."""
        assert summary_from_row(None) is None
        assert summary_from_row({"data": "text"}) is None
        assert summary_from_row({"data": b'{"numInstances": 2}'}).num_instances == 2

    def test_empty_summary(self):
        assert EMPTY_SUMMARY == Summary()


class TestChartSpec:
    """Test chart spec models."""

    def test_schema_alias(self):
        """$schema is emitted under its alias with the fixed URL."""
        spec = PieChartSpec(
            title="t",
            description="d",
            encoding=PieEncoding(
                theta=FieldEncoding(field="c", type="quantitative"),
                color=FieldEncoding(field="x", type="nominal"),
                order=FieldEncoding(field="c", type="quantitative"),
            ),
        )
        doc = json.loads(spec.to_json())
        assert doc["$schema"] == VEGA_SCHEMA
        assert doc["data"] == {"values": []}
        assert doc["mark"] == {"type": "arc", "tooltip": True}

    def test_none_fields_omitted(self):
        """Unset optional encoding fields are not serialized."""
        enc = FieldEncoding(field="d", type="temporal", time_unit="yearmonthdate")
        assert json.loads(enc.model_dump_json(by_alias=True, exclude_none=True)) == {
            "field": "d",
            "type": "temporal",
            "timeUnit": "yearmonthdate",
        }

    def test_sort_accepts_spec_or_order(self):
        assert FieldEncoding(field="c", type="quantitative", sort="descending").sort == "descending"
        sort = SortSpec(field="n", op="sum")
        assert FieldEncoding(field="v", type="nominal", sort=sort).sort == sort

    def test_invalid_mark_type(self):
        with pytest.raises(ValidationError):
            MarkConfig(type="bar")

    def test_specs_are_frozen(self):
        """Chart documents cannot be modified after construction."""
        spec = LineChartSpec(
            title="t",
            description="d",
            data=ChartData(values=[{}]),
            encoding=LineEncoding(
                color=FieldEncoding(field="v", type="nominal"),
                x=FieldEncoding(field="d", type="temporal"),
                y=FieldEncoding(field="n", type="quantitative"),
            ),
        )
        with pytest.raises(ValidationError):
            spec.title = "other"

    def test_line_defaults(self):
        spec = LineChartSpec(
            title="t",
            description="d",
            encoding=LineEncoding(
                color=FieldEncoding(field="v", type="nominal"),
                x=FieldEncoding(field="d", type="temporal"),
                y=FieldEncoding(field="n", type="quantitative"),
            ),
        )
        doc = json.loads(spec.to_json())
        assert doc["height"] == 500
        assert doc["width"] == 1000
        assert doc["mark"] == {"type": "line", "tooltip": True, "point": True}


class TestSettings:
    """Test configuration loading."""

    def test_defaults(self, monkeypatch):
        for var in ("INSIGHTS_DB_PATH", "LOG_LEVEL", "LOG_FORMAT", "DEFAULT_RANGE_DAYS"):
            monkeypatch.delenv(var, raising=False)
        s = Settings(_env_file=None)
        assert s.db_path == "./data/insights.db"
        assert s.default_range_days == 365
        assert s.log_level == "INFO"
        assert s.log_format == "text"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("INSIGHTS_DB_PATH", ":memory:")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "JSON")
        s = Settings(_env_file=None)
        assert s.is_memory_db
        assert s.log_level == "DEBUG"
        assert s.log_format == "json"

    def test_range_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_RANGE_DAYS", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
