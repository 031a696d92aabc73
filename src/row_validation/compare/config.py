"""
Comparison configuration.

Holds the tolerances and mode switches applied by the row comparator.
"""

from dataclasses import asdict, dataclass
from typing import Any

# WRITETIME is expressed in microseconds
MICROS_PER_MILLI = 1000


@dataclass(frozen=True)
class ComparisonConfig:
    """
    Tolerances and mode flags for a single comparison.

    Attributes:
        writetime_cutoff: Instant in microseconds. Value diffs on columns written
            before it on both sides are suppressed when timestamps are not compared.
        floating_point_tolerance: Absolute tolerance for float and decimal values
        ttl_tolerance_millis: Maximum allowed absolute TTL difference
        writetime_tolerance_millis: Maximum allowed absolute writetime difference
        compare_timestamps: Whether TTL and writetime columns are compared
    """

    writetime_cutoff: int = 0
    floating_point_tolerance: float = 0.001
    ttl_tolerance_millis: int = 0
    writetime_tolerance_millis: int = 0
    compare_timestamps: bool = False

    def __post_init__(self) -> None:
        tolerances = {
            "floating_point_tolerance": self.floating_point_tolerance,
            "ttl_tolerance_millis": self.ttl_tolerance_millis,
            "writetime_tolerance_millis": self.writetime_tolerance_millis,
        }
        for name, value in tolerances.items():
            if value < 0:
                raise ValueError(f"{name} cannot be negative: {value}")

    @property
    def writetime_tolerance_micros(self) -> int:
        """Writetime tolerance converted to the writetime unit."""
        return self.writetime_tolerance_millis * MICROS_PER_MILLI

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
