"""
Record loading and source/target pairing.

Records are read from JSON Lines files: one JSON object per line, whose key
order is the column order. Types JSON cannot express are written as tagged
objects:

    {"$decimal": "12.50"}    -> decimal.Decimal("12.50")
    {"$bytes": "3q2+7w=="}   -> b"\\xde\\xad\\xbe\\xef"
"""

import base64
import binascii
import json
import logging
from collections.abc import Iterable, Iterator, Sequence
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from utils.tracing import add_span_attributes, trace_function

from .compare import Record

logger = logging.getLogger(__name__)

DECIMAL_TAG = "$decimal"
BYTES_TAG = "$bytes"


class RecordFormatError(ValueError):
    """Raised when a line of a records file cannot be decoded."""

    def __init__(self, path: str | Path, line_number: int, reason: str):
        self.path = str(path)
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"{self.path}:{line_number}: {reason}")


def decode_value(value: Any) -> Any:
    """
    Decode a tagged JSON value into its Python type.

    Raises:
        ValueError: If a tagged value has an invalid payload
    """
    if isinstance(value, dict) and len(value) == 1:
        if DECIMAL_TAG in value:
            try:
                return Decimal(value[DECIMAL_TAG])
            except (InvalidOperation, TypeError) as e:
                raise ValueError(f"invalid decimal {value[DECIMAL_TAG]!r}") from e
        if BYTES_TAG in value:
            try:
                return base64.b64decode(value[BYTES_TAG], validate=True)
            except (binascii.Error, TypeError) as e:
                raise ValueError(f"invalid base64 payload {value[BYTES_TAG]!r}") from e
    return value


def encode_value(value: Any) -> Any:
    """Inverse of decode_value, used when writing rows into JSON reports."""
    if isinstance(value, Decimal):
        return {DECIMAL_TAG: str(value)}
    if isinstance(value, (bytes, bytearray, memoryview)):
        return {BYTES_TAG: base64.b64encode(bytes(value)).decode("ascii")}
    return value


def parse_record(line: str) -> Record:
    """
    Parse one JSON object into a Record.

    Raises:
        ValueError: If the line is not a JSON object or holds a bad tagged value
    """
    data = json.loads(line)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return Record(list(data.keys()), [decode_value(v) for v in data.values()])


@trace_function("load_records", component="sources")
def load_records(path: str | Path) -> list[Record]:
    """
    Load records from a JSON Lines file

    Args:
        path: Path to the file

    Returns:
        Records in file order

    Raises:
        FileNotFoundError: If the file does not exist
        RecordFormatError: If a line cannot be decoded
    """
    records = []

    with open(path, encoding="utf-8") as f:
        for line_number, line in enumerate(f, 1):
            if not line.strip():
                continue
            try:
                records.append(parse_record(line))
            except ValueError as e:
                raise RecordFormatError(path, line_number, str(e)) from e

    logger.info(f"Loaded {len(records)} records from {path}")
    add_span_attributes(path=str(path), record_count=len(records))
    return records


def _is_hashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


def record_key(record: Record, key_columns: Sequence[str]) -> tuple:
    """
    Extract the key of a record.

    Raises:
        KeyError: If a key column is missing from the record
        ValueError: If a key column holds a list or object
    """
    missing = [col for col in key_columns if col not in record]
    if missing:
        raise KeyError(f"Record is missing key column(s): {', '.join(missing)}")
    unhashable = [col for col in key_columns if not _is_hashable(record.get(col))]
    if unhashable:
        raise ValueError(
            f"Key column(s) hold list or object values: {', '.join(unhashable)}"
        )
    return tuple(record.get(col) for col in key_columns)


def index_records(
    records: Iterable[Record], key_columns: Sequence[str]
) -> dict[tuple, Record]:
    """Index records by key. The last record wins for duplicate keys."""
    index: dict[tuple, Record] = {}
    duplicates = 0

    for record in records:
        key = record_key(record, key_columns)
        if key in index:
            duplicates += 1
        index[key] = record

    if duplicates:
        logger.warning(f"{duplicates} duplicate target key(s) found; keeping last occurrence")
    return index


def pair_records(
    source_records: Iterable[Record],
    target_records: Iterable[Record],
    key_columns: Sequence[str],
) -> Iterator[tuple[Record, Record | None]]:
    """
    Join source records to target records by key

    Args:
        source_records: Records read from the source system
        target_records: Records read from the target system
        key_columns: Columns identifying a row on both sides

    Yields:
        (source, target) pairs in source order; target is None when no
        target record shares the source key. Target-only rows are not yielded.
    """
    if not key_columns:
        raise ValueError("At least one key column is required")

    target_index = index_records(target_records, key_columns)

    for source in source_records:
        yield source, target_index.get(record_key(source, key_columns))
