from typing import Sequence

from core.models import (
    Assignment,
    Entity,
    ExecutionContext,
    StrategyConfig,
    StrategyOutcome,
)
from utils.constants import RANDOM_CONFIDENCE
from utils.entity_utils import get_name, get_required_count, shuffle_order
from .base import AssignmentStrategy


class RandomAssignmentStrategy(AssignmentStrategy):
    """
    Shuffles the pool once and hands each target the first available
    candidates. Shortfalls are left for the capacity validator to report.
    """

    name = "random_assignment"
    description = "Randomly assigns participants to targets"

    def execute(
        self,
        participants: Sequence[Entity],
        targets: Sequence[Entity],
        config: StrategyConfig,
        context: ExecutionContext,
    ) -> StrategyOutcome:
        _, available = shuffle_order(participants, context.rng)
        assignments = []

        for target in targets:
            candidates = self.eligible_candidates(available, target, context)
            chosen = candidates[: get_required_count(target)]
            for participant in chosen:
                assignments.append(
                    Assignment(
                        participant_id=participant.id,
                        target_id=target.id,
                        confidence=RANDOM_CONFIDENCE,
                        metadata={"strategy": self.name, "target_name": get_name(target)},
                    )
                )
            taken = {p.id for p in chosen}
            available = [p for p in available if p.id not in taken]

        return StrategyOutcome(assignments)
