import pytest

from core.models import Assignment
from utils.stats import assignment_counts, distribution_stats


def test_counts_include_unassigned_participants(make_participant):
    participants = [make_participant(p) for p in "ABC"]
    assignments = [Assignment("A", "T1", 1.0), Assignment("A", "T2", 1.0), Assignment("B", "T1", 1.0)]

    counts = assignment_counts(assignments, participants)

    assert counts.to_dict() == {"A": 2, "B": 1, "C": 0}


def test_distribution_stats(make_participant):
    participants = [make_participant(p) for p in "ABC"]
    assignments = [Assignment("A", "T1", 1.0), Assignment("A", "T2", 1.0), Assignment("B", "T1", 1.0)]

    stats = distribution_stats(assignments, participants)

    assert stats["mean_assignments"] == pytest.approx(1.0)
    assert stats["variance"] == pytest.approx(2 / 3)
    assert stats["std_deviation"] == pytest.approx((2 / 3) ** 0.5)
    assert stats["total_assignments"] == 3.0


def test_distribution_stats_without_participants():
    assert distribution_stats([], []) == {}
