from typing import Dict, Sequence

import pandas as pd


def assignment_counts(assignments: Sequence, participants: Sequence) -> pd.Series:
    """Number of assignments per participant, zero for unassigned participants."""
    ids = [p.id for p in participants]
    counts = pd.Series([a.participant_id for a in assignments], dtype="object").value_counts()
    return counts.reindex(ids, fill_value=0).astype(int)


def distribution_stats(assignments: Sequence, participants: Sequence) -> Dict[str, float]:
    """
    Workload distribution across participants: mean, population variance,
    standard deviation and total number of assignments.
    """
    if not participants:
        return {}
    counts = assignment_counts(assignments, participants)
    variance = float(counts.var(ddof=0))
    return {
        "mean_assignments": float(counts.mean()),
        "variance": variance,
        "std_deviation": variance ** 0.5,
        "total_assignments": float(counts.sum()),
    }
