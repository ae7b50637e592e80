import logging
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from core.models import Entity
from exceptions.custom_errors import InfeasibleAssignmentError
from utils.entity_utils import get_name, get_required_count

logger = logging.getLogger(__name__)

EligibilityCheck = Callable[[Entity, Entity], bool]


class CandidatePool:
    """
    Per-target lists of eligible, not-yet-assigned participants. Lists keep
    the participant input order so a seeded draw is reproducible; a repeated
    participant id is listed once.
    """

    def __init__(
        self,
        participants: Sequence[Entity],
        targets: Sequence[Entity],
        is_eligible: EligibilityCheck,
    ):
        self.participants = {p.id: p for p in participants}
        self.candidates: Dict[str, List[str]] = {
            t.id: [p.id for p in self.participants.values() if is_eligible(p, t)]
            for t in targets
        }

    def size(self, target_id: str) -> int:
        return len(self.candidates[target_id])

    def candidates_for(self, target_id: str) -> List[str]:
        return list(self.candidates[target_id])

    def remove(self, participant_id: str):
        """Take a participant out of every target's candidate list."""
        for ids in self.candidates.values():
            if participant_id in ids:
                ids.remove(participant_id)


class DistributionSolver:
    """
    Greedy most-constrained-first distribution.

    Each step picks the under-quota target with the fewest eligible
    candidates and fills one slot with a uniformly random candidate. A single
    attempt either fills every quota or raises InfeasibleAssignmentError;
    retrying with a fresh draw is the caller's job (see scheduler.runner).
    """

    def __init__(self, is_eligible: EligibilityCheck, rng: Optional[np.random.Generator] = None):
        self.is_eligible = is_eligible
        self.rng = rng if rng is not None else np.random.default_rng()

    def solve(
        self, participants: Sequence[Entity], targets: Sequence[Entity]
    ) -> Dict[str, List[str]]:
        """Return `{target_id: [participant_id, ...]}` with every quota filled."""
        pool = CandidatePool(participants, targets, self.is_eligible)
        quotas = {t.id: get_required_count(t) for t in targets}
        names = {t.id: get_name(t) for t in targets}
        assignments: Dict[str, List[str]] = {t.id: [] for t in targets}

        total_spots_to_fill = sum(quotas.values())
        for _ in range(total_spots_to_fill):
            open_targets = [
                t.id for t in targets if len(assignments[t.id]) < quotas[t.id]
            ]
            if not open_targets:
                break
            # min() keeps the first target on ties
            target_id = min(open_targets, key=pool.size)
            candidates = pool.candidates_for(target_id)
            if not candidates:
                raise InfeasibleAssignmentError(
                    names[target_id], quotas[target_id] - len(assignments[target_id])
                )

            chosen = candidates[int(self.rng.integers(len(candidates)))]
            assignments[target_id].append(chosen)
            pool.remove(chosen)

        return assignments
