import logging
from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from core.models import Entity, ExecutionContext, StrategyConfig, StrategyOutcome
from exceptions.custom_errors import InvalidConfigurationError
from utils.constants import MAX_ATTEMPTS_LIMIT
from utils.entity_utils import get_name

logger = logging.getLogger(__name__)


class AssignmentStrategy(ABC):
    """Base class for strategies registered in the rule engine by `name`."""

    name: str = ""
    description: str = ""

    @abstractmethod
    def execute(
        self,
        participants: Sequence[Entity],
        targets: Sequence[Entity],
        config: StrategyConfig,
        context: ExecutionContext,
    ) -> StrategyOutcome:
        ...

    def validate_config(self, config: StrategyConfig):
        """Raise InvalidConfigurationError for a rejected parameter."""
        return None

    def eligible_candidates(
        self, pool: Sequence[Entity], target: Entity, context: ExecutionContext
    ) -> List[Entity]:
        eligible = []
        for participant in pool:
            reason = context.rejection_reason(participant, target)
            if reason is None:
                eligible.append(participant)
            else:
                logger.debug(f"{get_name(participant)} skipped for {get_name(target)}: {reason}")
        return eligible


def check_weight(config: StrategyConfig, key: str):
    if key not in config.parameters:
        return
    value = config.parameters[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfigurationError(key, f"{key} must be a number")
    if not 0.0 <= value <= 1.0:
        raise InvalidConfigurationError(key, f"{key} must be between 0.0 and 1.0")


def check_max_attempts(config: StrategyConfig, key: str = "max_attempts"):
    if key not in config.parameters:
        return
    value = config.parameters[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(key, f"{key} must be a positive integer")
    if value < 1 or value > MAX_ATTEMPTS_LIMIT:
        raise InvalidConfigurationError(
            key, f"{key} must be between 1 and {MAX_ATTEMPTS_LIMIT}"
        )


def get_param(config: StrategyConfig, key: str, default: Any) -> Any:
    value = config.parameters.get(key)
    return default if value is None else value
