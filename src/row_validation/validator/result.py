"""
Aggregated outcome of a validation run.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from ..compare import Discrepancy


@dataclass
class ValidationResult:
    """Counts and retained discrepancies for one validation run."""

    rows_compared: int = 0
    discrepancy_count: int = 0
    discrepancies: list[Discrepancy] = field(default_factory=list)
    finding_counts: dict[str, int] = field(default_factory=dict)
    structural_count: int = 0
    truncated: bool = False
    duration_seconds: float = 0.0
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def passed(self) -> bool:
        return self.discrepancy_count == 0

    def add(self, discrepancy: Discrepancy, keep: bool) -> None:
        """Count a discrepancy, retaining it only when ``keep`` is set."""
        self.discrepancy_count += 1
        if any(finding.is_structural for finding in discrepancy.findings):
            self.structural_count += 1
        for kind in discrepancy.kinds:
            self.finding_counts[kind.value] = self.finding_counts.get(kind.value, 0) + 1
        if keep:
            self.discrepancies.append(discrepancy)
        else:
            self.truncated = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "rows_compared": self.rows_compared,
            "discrepancy_count": self.discrepancy_count,
            "finding_counts": dict(self.finding_counts),
            "structural_count": self.structural_count,
            "discrepancies": [d.to_dict() for d in self.discrepancies],
            "truncated": self.truncated,
            "duration_seconds": self.duration_seconds,
            "timestamp": self.timestamp.isoformat(),
        }
