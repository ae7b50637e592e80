import logging
from typing import Dict, List, Sequence

from core.models import (
    Assignment,
    Entity,
    ExecutionContext,
    StrategyConfig,
    StrategyOutcome,
)
from exceptions.custom_errors import InfeasibleAssignmentError, InvalidConfigurationError
from scheduler.runner import run_with_retry
from utils.constants import (
    BALANCE_PLACEHOLDER_SCORE,
    BALANCE_WEIGHT,
    DEFAULT_MAX_ATTEMPTS,
    ROTATION_LOOKBACK,
    ROTATION_WEIGHT,
)
from utils.entity_utils import get_name, get_required_count, shuffle_order
from .base import AssignmentStrategy, check_max_attempts, check_weight, get_param

logger = logging.getLogger(__name__)


def rotation_score(history: Sequence[str], target_name: str, lookback: int = ROTATION_LOOKBACK) -> float:
    """
    1.0 for a participant without history, otherwise
    ``1 - (times on target in the last N entries) / N`` with
    ``N = min(len(history), lookback)``.
    """
    recent = list(history)[:lookback]
    if not recent:
        return 1.0
    return 1.0 - recent.count(target_name) / len(recent)


class BalancedRotationStrategy(AssignmentStrategy):
    """Distributes participants across targets while considering assignment history."""

    name = "balanced_rotation"
    description = (
        "Balanced assignment strategy that considers rotation history and workload balance"
    )

    def validate_config(self, config: StrategyConfig):
        check_weight(config, "rotation_weight")
        check_weight(config, "balance_weight")
        check_max_attempts(config)
        lookback = config.parameters.get("rotation_lookback")
        if lookback is not None and (
            isinstance(lookback, bool) or not isinstance(lookback, int) or lookback < 1
        ):
            raise InvalidConfigurationError(
                "rotation_lookback", "rotation_lookback must be a positive integer"
            )

    def score(
        self,
        history: Sequence[str],
        target_name: str,
        rotation_weight: float,
        balance_weight: float,
        lookback: int,
    ) -> float:
        # TODO: replace the balance placeholder with per-participant workload variance
        balance_score = BALANCE_PLACEHOLDER_SCORE
        return rotation_weight * rotation_score(history, target_name, lookback) + (
            balance_weight * balance_score
        )

    def attempt_assignment(
        self,
        participants: Sequence[Entity],
        targets: Sequence[Entity],
        config: StrategyConfig,
        context: ExecutionContext,
    ) -> List[Assignment]:
        rotation_weight = get_param(config, "rotation_weight", ROTATION_WEIGHT)
        balance_weight = get_param(config, "balance_weight", BALANCE_WEIGHT)
        lookback = get_param(config, "rotation_lookback", ROTATION_LOOKBACK)

        # Shuffle participants so equal scores are broken differently per attempt
        _, available = shuffle_order(participants, context.rng)
        assignments = []

        for target in targets:
            target_name = get_name(target)
            required_count = get_required_count(target)

            scored = [
                (
                    p,
                    self.score(
                        context.history_for(p.id),
                        target_name,
                        rotation_weight,
                        balance_weight,
                        lookback,
                    ),
                )
                for p in self.eligible_candidates(available, target, context)
            ]
            # sort is stable, so ties keep the shuffled order
            scored.sort(key=lambda item: item[1], reverse=True)

            if len(scored) < required_count:
                raise InfeasibleAssignmentError(
                    target_name,
                    required_count - len(scored),
                    message=(
                        f"Not enough participants available for target '{target_name}'. "
                        f"Required: {required_count}, Available: {len(scored)}"
                    ),
                )

            chosen: Dict[str, Entity] = {}
            for participant, score in scored[:required_count]:
                assignments.append(
                    Assignment(
                        participant_id=participant.id,
                        target_id=target.id,
                        confidence=min(max(score, 0.0), 1.0),
                        metadata={
                            "strategy": self.name,
                            "score": score,
                            "target_name": target_name,
                        },
                    )
                )
                chosen[participant.id] = participant

            # Remove assigned participants from the available pool
            available = [p for p in available if p.id not in chosen]

        return assignments

    def execute(
        self,
        participants: Sequence[Entity],
        targets: Sequence[Entity],
        config: StrategyConfig,
        context: ExecutionContext,
    ) -> StrategyOutcome:
        max_attempts = get_param(config, "max_attempts", DEFAULT_MAX_ATTEMPTS)
        assignments, attempts = run_with_retry(
            lambda _: self.attempt_assignment(participants, targets, config, context),
            max_attempts,
            label="Balanced rotation assignment",
        )
        return StrategyOutcome(assignments, attempts)
