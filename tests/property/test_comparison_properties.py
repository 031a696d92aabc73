"""
Property-based tests for row comparison using Hypothesis.

Tests invariants that should hold for all inputs:
- A row always matches an identical copy of itself
- Value comparison is symmetric and honours the float tolerance
- Timestamp findings only appear when timestamps are compared
- Findings come out in a fixed order
"""

from decimal import Decimal

import pytest
from hypothesis import assume, given, strategies as st

from row_validation.compare import (
    ComparisonConfig,
    FindingKind,
    Record,
    compare_rows,
    values_differ,
)

pytestmark = pytest.mark.property

column_values = st.one_of(
    st.none(),
    st.integers(),
    st.text(max_size=20),
    st.floats(),
    st.decimals(min_value=-10**9, max_value=10**9, places=4),
    st.binary(max_size=16),
    st.booleans(),
)

timestamps = st.one_of(st.none(), st.integers(min_value=0, max_value=10**15))

configs = st.builds(
    ComparisonConfig,
    writetime_cutoff=st.integers(min_value=0, max_value=10**15),
    floating_point_tolerance=st.floats(min_value=0, max_value=1),
    ttl_tolerance_millis=st.integers(min_value=0, max_value=10**6),
    writetime_tolerance_millis=st.integers(min_value=0, max_value=10**6),
    compare_timestamps=st.booleans(),
)


@st.composite
def rows(draw, values=column_values):
    """A row of regular columns, each with optional _ttl and _writetime columns."""
    names = draw(st.lists(
        st.text(alphabet="abcdefgh", min_size=1, max_size=6),
        min_size=1,
        max_size=5,
        unique=True,
    ))
    columns = {}
    for name in names:
        columns[name] = draw(values)
        if draw(st.booleans()):
            columns[name + "_ttl"] = draw(timestamps)
        if draw(st.booleans()):
            columns[name + "_writetime"] = draw(timestamps)
    return Record.from_mapping(columns)


@st.composite
def row_pairs(draw):
    """Two rows with the same column layout and independently drawn values."""
    source = draw(rows())
    target_values = [
        draw(timestamps) if name.endswith(("_ttl", "_writetime")) else draw(column_values)
        for name in source.column_names
    ]
    return source, Record(source.column_names, target_values)


@given(row=rows(), config=configs)
def test_row_matches_itself(row: Record, config: ComparisonConfig):
    """Comparing a row with an identical copy never yields a discrepancy."""
    copy = Record(row.column_names, row.values)

    assert compare_rows(row, copy, config) is None


@given(left=column_values, right=column_values, tolerance=st.floats(min_value=0, max_value=10))
def test_values_differ_is_symmetric(left, right, tolerance: float):
    assert values_differ(left, right, tolerance) == values_differ(right, left, tolerance)


@given(
    left=st.floats(min_value=-1e6, max_value=1e6),
    right=st.floats(min_value=-1e6, max_value=1e6),
    tolerance=st.floats(min_value=0, max_value=10),
)
def test_float_tolerance_boundary(left: float, right: float, tolerance: float):
    """Finite floats differ exactly when they are further apart than the tolerance."""
    assert values_differ(left, right, tolerance) == (abs(left - right) > tolerance)


@given(value=st.floats(allow_nan=True, allow_infinity=True))
def test_float_equals_itself(value: float):
    assert not values_differ(value, value, 0.0)


@given(
    value=st.decimals(min_value=-10**6, max_value=10**6, places=3),
    offset=st.integers(min_value=-2000, max_value=2000),
)
def test_decimal_tolerance(value: Decimal, offset: int):
    other = value + Decimal(offset) / 1000

    assert values_differ(value, other, 1.0) == (abs(offset) > 1000)


@given(row=rows(), config=configs)
def test_missing_target_without_timestamps(row: Record, config: ComparisonConfig):
    """With timestamp comparison off, an absent target is always reported."""
    config = ComparisonConfig(
        writetime_cutoff=config.writetime_cutoff,
        floating_point_tolerance=config.floating_point_tolerance,
        compare_timestamps=False,
    )

    discrepancy = compare_rows(row, None, config)

    assert discrepancy is not None
    assert discrepancy.kinds == [FindingKind.MISSING_TARGET_ROW]
    assert discrepancy.target is None


@given(pair=row_pairs(), config=configs)
def test_timestamp_findings_require_timestamp_comparison(pair, config: ComparisonConfig):
    source, target = pair

    discrepancy = compare_rows(source, target, config)

    if discrepancy is not None and not config.compare_timestamps:
        assert FindingKind.TTL_MISMATCH not in discrepancy.kinds
        assert FindingKind.WRITETIME_MISMATCH not in discrepancy.kinds


@given(pair=row_pairs(), config=configs)
def test_findings_follow_kind_order(pair, config: ComparisonConfig):
    """Each kind appears at most once, in declaration order."""
    source, target = pair

    discrepancy = compare_rows(source, target, config)
    assume(discrepancy is not None)

    order = list(FindingKind)
    positions = [order.index(kind) for kind in discrepancy.kinds]
    assert positions == sorted(set(positions))


@given(pair=row_pairs(), ttl_tolerance=st.integers(min_value=0, max_value=10**6))
def test_ttl_present_on_one_side_only(pair, ttl_tolerance: int):
    """A TTL on one side only is always a finding, whatever the tolerance."""
    source, target = pair
    ttl_columns = [name for name in source.column_names if name.endswith("_ttl")]
    assume(ttl_columns)
    assume(source.get(ttl_columns[0]) is not None)

    values = [None if name == ttl_columns[0] else target.get(name) for name in source.column_names]
    target = Record(source.column_names, values)
    config = ComparisonConfig(ttl_tolerance_millis=ttl_tolerance, compare_timestamps=True)

    discrepancy = compare_rows(source, target, config)

    assert discrepancy is not None
    ttl_finding = next(f for f in discrepancy.findings if f.kind is FindingKind.TTL_MISMATCH)
    assert (ttl_columns[0], source.get(ttl_columns[0])) in ttl_finding.entries


@given(pair=row_pairs())
def test_zero_cutoff_never_suppresses(pair):
    """Writetimes are never negative, so a zero cutoff keeps every value diff."""
    source, target = pair
    config = ComparisonConfig(writetime_cutoff=0, compare_timestamps=False)

    discrepancy = compare_rows(source, target, config)

    expected = [
        name for name in source.column_names
        if not name.endswith(("_ttl", "_writetime"))
        and values_differ(source.get(name), target.get(name), config.floating_point_tolerance)
    ]
    if expected:
        assert discrepancy is not None
        assert discrepancy.findings[0].columns == tuple(expected)
    else:
        assert discrepancy is None
