"""
Comparison findings and discrepancy reports.

A finding is one kind of divergence between a source and a target row.
The set of kinds is closed, so findings are modelled as a single tagged
record (``kind`` plus payload) rather than a class per kind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .records import Record


class FindingKind(str, Enum):
    """Closed set of finding kinds, in report order."""

    MISSING_TARGET_ROW = "MISSING_TARGET_ROW"
    COLUMN_COUNT_MISMATCH = "COLUMN_COUNT_MISMATCH"
    COLUMN_NAME_MISMATCH = "COLUMN_NAME_MISMATCH"
    VALUE_MISMATCH = "VALUE_MISMATCH"
    TTL_MISMATCH = "TTL_MISMATCH"
    WRITETIME_MISMATCH = "WRITETIME_MISMATCH"


STRUCTURAL_KINDS = frozenset({
    FindingKind.MISSING_TARGET_ROW,
    FindingKind.COLUMN_COUNT_MISMATCH,
    FindingKind.COLUMN_NAME_MISMATCH,
})


@dataclass(frozen=True)
class Finding:
    """
    A single kind of divergence.

    Only the payload relevant to ``kind`` is populated:
    ``columns`` for value mismatches, ``entries`` (column, absolute difference)
    for TTL and writetime mismatches.
    """

    kind: FindingKind
    columns: tuple[str, ...] = ()
    entries: tuple[tuple[str, int], ...] = ()

    @classmethod
    def missing_target_row(cls) -> "Finding":
        return cls(FindingKind.MISSING_TARGET_ROW)

    @classmethod
    def column_count_mismatch(cls) -> "Finding":
        return cls(FindingKind.COLUMN_COUNT_MISMATCH)

    @classmethod
    def column_name_mismatch(cls) -> "Finding":
        return cls(FindingKind.COLUMN_NAME_MISMATCH)

    @classmethod
    def value_mismatch(cls, columns) -> "Finding":
        return cls(FindingKind.VALUE_MISMATCH, columns=tuple(columns))

    @classmethod
    def ttl_mismatch(cls, entries) -> "Finding":
        return cls(FindingKind.TTL_MISMATCH, entries=tuple(entries))

    @classmethod
    def writetime_mismatch(cls, entries) -> "Finding":
        return cls(FindingKind.WRITETIME_MISMATCH, entries=tuple(entries))

    @property
    def is_structural(self) -> bool:
        return self.kind in STRUCTURAL_KINDS

    @property
    def description(self) -> str:
        """One-line human readable description."""
        match self.kind:
            case FindingKind.MISSING_TARGET_ROW:
                return "Missing target row"
            case FindingKind.COLUMN_COUNT_MISMATCH:
                return "Mismatched column count"
            case FindingKind.COLUMN_NAME_MISMATCH:
                return "Mismatched column names"
            case FindingKind.VALUE_MISMATCH:
                return f"Differing fields: {', '.join(self.columns)}"
            case FindingKind.TTL_MISMATCH:
                details = ", ".join(f"{name} ({diff} millis)" for name, diff in self.entries)
                return f"Differing TTLs: {details}"
            case FindingKind.WRITETIME_MISMATCH:
                details = ", ".join(f"{name} ({diff} micros)" for name, diff in self.entries)
                return f"Differing WRITETIMEs: {details}"
        raise ValueError(f"Unknown finding kind: {self.kind}")

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "kind": self.kind.value,
            "description": self.description,
        }
        if self.kind is FindingKind.VALUE_MISMATCH:
            result["columns"] = list(self.columns)
        elif self.kind in (FindingKind.TTL_MISMATCH, FindingKind.WRITETIME_MISMATCH):
            result["entries"] = [
                {"column": name, "difference": diff} for name, diff in self.entries
            ]
        return result


@dataclass(frozen=True)
class Discrepancy:
    """A source row, its optional target row and every finding between them."""

    source: Record
    target: Record | None
    findings: tuple[Finding, ...]

    def __post_init__(self) -> None:
        if not self.findings:
            raise ValueError("A discrepancy requires at least one finding")

    @property
    def kinds(self) -> list[FindingKind]:
        return [finding.kind for finding in self.findings]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "source_row": self.source.to_dict(),
            "target_row": self.target.to_dict() if self.target is not None else None,
            "findings": [finding.to_dict() for finding in self.findings],
        }

    def __str__(self) -> str:
        target = str(self.target) if self.target is not None else "<MISSING>"
        lines = [
            "Row failure:",
            f"* Source row: {self.source}",
            f"* Target row: {target}",
            "* Failures:",
        ]
        lines.extend(f"  - {finding.description}" for finding in self.findings)
        return "\n".join(lines)
