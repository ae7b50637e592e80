import logging
from typing import Sequence

from core.models import (
    Assignment,
    Entity,
    ExecutionContext,
    StrategyConfig,
    StrategyOutcome,
)
from scheduler.distribution import DistributionSolver
from scheduler.runner import run_with_retry
from utils.constants import GREEDY_MAX_ATTEMPTS
from utils.entity_utils import get_name
from .base import AssignmentStrategy, check_max_attempts, get_param

logger = logging.getLogger(__name__)


class GreedyDistributionStrategy(AssignmentStrategy):
    """
    Wraps the most-constrained-first DistributionSolver as a strategy. Every
    assignment it returns satisfies the group and cooldown rules, so
    confidence is fixed at 1.0.
    """

    name = "greedy_distribution"
    description = (
        "Fills the most constrained target first with random eligible "
        "candidates, retrying from scratch on dead ends"
    )

    def validate_config(self, config: StrategyConfig):
        check_max_attempts(config)

    def execute(
        self,
        participants: Sequence[Entity],
        targets: Sequence[Entity],
        config: StrategyConfig,
        context: ExecutionContext,
    ) -> StrategyOutcome:
        max_attempts = get_param(config, "max_attempts", GREEDY_MAX_ATTEMPTS)
        solver = DistributionSolver(context.is_eligible, context.rng)
        target_names = {t.id: get_name(t) for t in targets}

        distribution, attempts = run_with_retry(
            lambda _: solver.solve(participants, targets),
            max_attempts,
            label="Greedy distribution",
        )

        assignments = [
            Assignment(
                participant_id=pid,
                target_id=target_id,
                confidence=1.0,
                metadata={
                    "strategy": self.name,
                    "target_name": target_names[target_id],
                },
            )
            for target_id, participant_ids in distribution.items()
            for pid in participant_ids
        ]
        return StrategyOutcome(assignments, attempts)
