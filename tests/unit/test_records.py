"""
Unit tests for Record and ComparisonConfig.
"""

import pytest

from row_validation.compare import (
    ComparisonConfig,
    Record,
    is_metadata_column,
    is_ttl_column,
    is_writetime_column,
)


class TestRecord:
    """Test Record construction and accessors."""

    def test_initialization(self):
        record = Record(["id", "name"], [1, "John"])

        assert record.column_names == ("id", "name")
        assert record.values == (1, "John")
        assert len(record) == 2

    def test_from_mapping_keeps_order(self):
        record = Record.from_mapping({"b": 2, "a": 1})

        assert record.column_names == ("b", "a")
        assert list(record) == ["b", "a"]

    def test_length_mismatch_is_rejected(self):
        with pytest.raises(AssertionError):
            Record(["id", "name"], [1])

    def test_duplicate_columns_are_rejected(self):
        with pytest.raises(AssertionError):
            Record(["id", "id"], [1, 2])

    def test_get(self):
        record = Record(["id", "name"], [1, None])

        assert record.get("id") == 1
        assert record.get("name") is None
        assert record.get("missing") is None

    def test_get_long(self):
        record = Record(["a_ttl", "b_ttl", "c_ttl"], [5, "7", None])

        assert record.get_long("a_ttl") == 5
        assert record.get_long("b_ttl") == 7
        assert record.get_long("c_ttl") is None
        assert record.get_long("missing") is None

    def test_contains(self):
        record = Record(["id"], [None])

        assert "id" in record
        assert "other" not in record

    def test_to_dict(self):
        record = Record(["id", "name"], [1, "John"])

        assert record.to_dict() == {"id": 1, "name": "John"}

    def test_equality(self):
        assert Record(["id"], [1]) == Record(["id"], [1])
        assert Record(["id"], [1]) != Record(["id"], [2])
        assert Record(["id"], [1]) != Record(["key"], [1])

    def test_str(self):
        record = Record(["id", "name"], [1, "John"])

        assert str(record) == "{id: 1, name: 'John'}"


class TestColumnNaming:
    """Metadata column naming convention"""

    def test_ttl_column(self):
        assert is_ttl_column("name_ttl")
        assert not is_ttl_column("ttl_name")

    def test_writetime_column(self):
        assert is_writetime_column("name_writetime")
        assert not is_writetime_column("writetime")

    def test_metadata_column(self):
        assert is_metadata_column("a_ttl")
        assert is_metadata_column("a_writetime")
        assert not is_metadata_column("a")


class TestComparisonConfig:
    """Test ComparisonConfig validation"""

    def test_defaults(self):
        config = ComparisonConfig()

        assert config.compare_timestamps is False
        assert config.writetime_cutoff == 0

    def test_writetime_tolerance_micros(self):
        config = ComparisonConfig(writetime_tolerance_millis=250)

        assert config.writetime_tolerance_micros == 250_000

    @pytest.mark.parametrize("field", [
        "floating_point_tolerance",
        "ttl_tolerance_millis",
        "writetime_tolerance_millis",
    ])
    def test_negative_tolerance_rejected(self, field):
        with pytest.raises(ValueError, match=field):
            ComparisonConfig(**{field: -1})

    def test_is_immutable(self):
        config = ComparisonConfig()

        with pytest.raises(AttributeError):
            config.compare_timestamps = True

    def test_to_dict(self):
        config = ComparisonConfig(ttl_tolerance_millis=5)

        assert config.to_dict()["ttl_tolerance_millis"] == 5
