"""
Unit tests for record loading and pairing.
"""

import logging
from decimal import Decimal

import pytest

from row_validation.compare import Record
from row_validation.sources import (
    RecordFormatError,
    decode_value,
    encode_value,
    load_records,
    pair_records,
    record_key,
)


class TestTaggedValues:
    """Decoding of tagged JSON values"""

    def test_decimal(self):
        assert decode_value({"$decimal": "12.50"}) == Decimal("12.50")

    def test_bytes(self):
        assert decode_value({"$bytes": "3q2+7w=="}) == b"\xde\xad\xbe\xef"

    def test_plain_values_pass_through(self):
        assert decode_value(1.5) == 1.5
        assert decode_value({"a": 1}) == {"a": 1}
        assert decode_value(None) is None

    def test_invalid_decimal(self):
        with pytest.raises(ValueError, match="invalid decimal"):
            decode_value({"$decimal": "abc"})

    def test_invalid_bytes(self):
        with pytest.raises(ValueError, match="invalid base64"):
            decode_value({"$bytes": "***"})

    def test_encode(self):
        assert encode_value(Decimal("1.10")) == {"$decimal": "1.10"}
        assert encode_value(b"\xde\xad\xbe\xef") == {"$bytes": "3q2+7w=="}
        assert encode_value("text") == "text"


class TestLoadRecords:
    """Loading JSON Lines files"""

    def test_load(self, tmp_path):
        path = tmp_path / "source.jsonl"
        path.write_text(
            '{"id": 1, "price": {"$decimal": "9.99"}, "price_ttl": 100}\n'
            '\n'
            '{"id": 2, "price": null, "price_ttl": null}\n'
        )

        records = load_records(path)

        assert len(records) == 2
        assert records[0].column_names == ("id", "price", "price_ttl")
        assert records[0].get("price") == Decimal("9.99")
        assert records[1].get("price") is None

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.jsonl"
        path.write_text('{"id": 1}\n{"id": \n')

        with pytest.raises(RecordFormatError) as exc_info:
            load_records(path)

        assert exc_info.value.line_number == 2
        assert str(path) in str(exc_info.value)

    def test_non_object_line(self, tmp_path):
        path = tmp_path / "bad.jsonl"
        path.write_text('[1, 2]\n')

        with pytest.raises(RecordFormatError, match="expected a JSON object"):
            load_records(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_records(tmp_path / "missing.jsonl")


class TestPairing:
    """Key-based pairing of source and target records"""

    def test_record_key(self):
        record = Record(["org", "id", "name"], [7, 1, "a"])

        assert record_key(record, ["org", "id"]) == (7, 1)

    def test_record_key_missing_column(self):
        with pytest.raises(KeyError, match="id"):
            record_key(Record(["name"], ["a"]), ["id"])

    @pytest.mark.parametrize("value", [[1, 2], {"a": 1}])
    def test_record_key_rejects_non_scalar_values(self, value):
        with pytest.raises(ValueError, match="id"):
            record_key(Record(["id", "v"], [value, 1]), ["id"])

    def test_non_scalar_target_key_fails_pairing(self):
        source = [Record(["id"], [1])]
        target = [Record(["id"], [[1, 2]])]

        with pytest.raises(ValueError, match="list or object"):
            list(pair_records(source, target, ["id"]))

    def test_pairs_in_source_order(self):
        source = [Record(["id"], [2]), Record(["id"], [1]), Record(["id"], [3])]
        target = [Record(["id"], [1]), Record(["id"], [2])]

        pairs = list(pair_records(source, target, ["id"]))

        assert [s.get("id") for s, _ in pairs] == [2, 1, 3]
        assert pairs[0][1] == Record(["id"], [2])
        assert pairs[1][1] == Record(["id"], [1])
        assert pairs[2][1] is None

    def test_target_only_rows_are_ignored(self):
        source = [Record(["id"], [1])]
        target = [Record(["id"], [1]), Record(["id"], [99])]

        pairs = list(pair_records(source, target, ["id"]))

        assert len(pairs) == 1

    def test_duplicate_target_keys_keep_last(self, caplog):
        caplog.set_level(logging.WARNING)
        source = [Record(["id", "v"], [1, "a"])]
        target = [Record(["id", "v"], [1, "old"]), Record(["id", "v"], [1, "new"])]

        pairs = list(pair_records(source, target, ["id"]))

        assert pairs[0][1].get("v") == "new"
        assert "duplicate target key" in caplog.text

    def test_requires_key_columns(self):
        with pytest.raises(ValueError):
            list(pair_records([], [], []))
