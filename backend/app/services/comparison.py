"""
Result Comparator

Turns two timed results for the same logical operation into a relative
performance figure and a winner. The explanation text is static and keyed
by workload kind and winner; it does not depend on the measurement.
"""

from typing import Dict, Tuple
from dataclasses import dataclass, asdict

from app.services.timing import TimedResult
from app.services.workloads import Schema, Workload


EXPLANATIONS: Dict[Tuple[str, Schema], str] = {
    ("oltp", Schema.NORMALIZED): (
        "Normalized schemas suit OLTP: each write touches small, narrow rows "
        "and reference data is stored once, so inserts stay cheap and consistent."
    ),
    ("oltp", Schema.DENORMALIZED): (
        "The denormalized insert is a single wide row with no price lookups, "
        "but every copy of customer, store and employee data must be kept in "
        "sync by the application."
    ),
    ("olap", Schema.NORMALIZED): (
        "The normalized query joins small, well-indexed tables; at this data "
        "volume the join cost is outweighed by scanning narrower rows."
    ),
    ("olap", Schema.DENORMALIZED): (
        "Denormalized schemas suit OLAP: aggregations read one pre-joined "
        "table with precomputed fields, avoiding joins entirely."
    ),
}


@dataclass
class ComparisonOutcome:
    workload: str
    winner: str
    normalized_ms: float
    denormalized_ms: float
    percent_diff: float
    margin: str
    explanation: str

    def to_dict(self) -> Dict:
        return asdict(self)


def percent_difference(first_ms: float, second_ms: float) -> float:
    """|t1 - t2| / max(t1, t2) * 100, or 0 when both are zero."""
    slowest = max(first_ms, second_ms)
    if slowest <= 0:
        return 0.0
    return abs(first_ms - second_ms) / slowest * 100


def pick_winner(normalized_ms: float, denormalized_ms: float) -> Schema:
    """Denormalized wins only when strictly faster, so ties are stable."""
    if denormalized_ms < normalized_ms:
        return Schema.DENORMALIZED
    return Schema.NORMALIZED


def compare(workload: Workload, normalized_ms: float, denormalized_ms: float) -> ComparisonOutcome:
    """Compare the elapsed times of the two schema variants of one workload."""
    workload = Workload(workload)
    winner = pick_winner(normalized_ms, denormalized_ms)
    diff = round(percent_difference(normalized_ms, denormalized_ms), 1)

    if normalized_ms == denormalized_ms:
        margin = "Both schemas took the same time"
    elif diff == 0:
        margin = f"{winner.value} was less than 0.1% faster"
    else:
        margin = f"{winner.value} was {diff:.1f}% faster"

    return ComparisonOutcome(
        workload=workload.value,
        winner=winner.value,
        normalized_ms=normalized_ms,
        denormalized_ms=denormalized_ms,
        percent_diff=diff,
        margin=margin,
        explanation=EXPLANATIONS[(workload.kind, winner)],
    )


def compare_results(
    workload: Workload,
    normalized: TimedResult,
    denormalized: TimedResult,
) -> ComparisonOutcome:
    """Compare two timed results; failed variants are compared on time-to-failure."""
    return compare(workload, normalized.elapsed_ms, denormalized.elapsed_ms)
