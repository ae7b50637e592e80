import logging
import time
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from core.models import (
    Assignment,
    AssignmentMetadata,
    AssignmentResult,
    Entity,
    ExecutionContext,
    RuleEngineConfig,
    StrategyConfig,
    ValidationMode,
    ValidationResult,
    ValidationSeverity,
)
from core.registry import Registry
from exceptions.custom_errors import (
    InvalidConfigurationError,
    StrategyNotFoundError,
    ValidationFailureError,
)
from scheduler.rules import (
    AvailabilityCheckValidator,
    CapacityCheckValidator,
    SkillMatchingValidator,
    ValidationRule,
)
from scheduler.strategies import (
    AssignmentStrategy,
    BalancedRotationStrategy,
    GreedyDistributionStrategy,
    RandomAssignmentStrategy,
    SkillBasedStrategy,
)
from utils.constants import DEFAULT_STRATEGY, MAX_EXECUTION_TIME_MS, VALIDATION_MODE
from utils.entity_utils import get_name
from utils.stats import distribution_stats

logger = logging.getLogger(__name__)


def unique_by_id(entities: Sequence[Entity], kind: str) -> List[Entity]:
    """Drop repeated entities, keeping the first occurrence of each id."""
    seen = set()
    unique = []
    for entity in entities:
        if entity.id in seen:
            continue
        seen.add(entity.id)
        unique.append(entity)
    if len(unique) < len(entities):
        logger.warning(
            f"Ignored {len(entities) - len(unique)} repeated {kind} id(s) in the snapshot"
        )
    return unique


class RuleEngine:
    """
    Runs a named assignment strategy over a participant/target snapshot,
    validates the raw assignments and applies the validation mode.
    """

    def __init__(self, config: Optional[RuleEngineConfig] = None):
        self.config = config or RuleEngineConfig()
        self.strategies: Registry[AssignmentStrategy] = Registry("strategy")
        self.validators: Registry[ValidationRule] = Registry("validator")

    def register_strategy(self, strategy: AssignmentStrategy, condition: bool = True):
        self.strategies.register(strategy, condition)

    def register_validator(self, validator: ValidationRule, condition: bool = True):
        self.validators.register(validator, condition)

    def list_strategies(self) -> List[str]:
        return self.strategies.names()

    def list_validators(self) -> List[str]:
        return self.validators.names()

    def describe_strategies(self) -> List[Dict[str, str]]:
        return [
            {"name": name, "description": self.strategies.get(name).description}
            for name in self.strategies.names()
        ]

    def execute_assignment(
        self,
        strategy_name: Optional[str],
        participants: Sequence[Entity],
        targets: Sequence[Entity],
        config: StrategyConfig,
        context: Optional[ExecutionContext] = None,
        validation_mode: Optional[ValidationMode] = None,
    ) -> AssignmentResult:
        """
        Execute a strategy and gate its output through the configured validators.

        Args:
            strategy_name (str): Registered strategy name; None uses the default strategy.
            participants (Sequence[Entity]): Participant snapshot.
            targets (Sequence[Entity]): Target snapshot.
            config (StrategyConfig): Strategy parameters and validator names.
            context (ExecutionContext): History and random source for this request.
            validation_mode (ValidationMode): Overrides the engine's validation mode.

        Returns:
            AssignmentResult: The accepted assignments with run metadata.

        Raises:
            StrategyNotFoundError: The strategy is not registered.
            InvalidConfigurationError: The strategy rejected a parameter or a
                target has an invalid required_count.
            InfeasibleAssignmentError: The strategy exhausted its attempts.
            ValidationFailureError: Strict mode and a blocking validation failure.
        """
        start_time = time.perf_counter()
        strategy_name = strategy_name or self.config.default_strategy
        context = context or ExecutionContext()

        strategy = self.strategies.get(strategy_name)
        if strategy is None:
            raise StrategyNotFoundError(strategy_name)

        strategy.validate_config(config)
        participants = unique_by_id(participants, "participant")
        targets = unique_by_id(targets, "target")
        self.validate_targets(targets)

        run_context = replace(
            context,
            enforce_eligibility=self.config.enforce_eligibility and context.enforce_eligibility,
        )
        logger.info(
            f"🚀 Running '{strategy_name}' for {len(participants)} participants "
            f"and {len(targets)} targets (request {context.request_id})"
        )
        outcome = strategy.execute(participants, targets, config, run_context)

        validation_results = self.run_validations(
            outcome.assignments, participants, targets, config
        )
        self.check_validation_results(validation_results, validation_mode)

        execution_time = int((time.perf_counter() - start_time) * 1000)
        if execution_time > self.config.max_execution_time_ms:
            logger.warning(
                f"⏱ Assignment took {execution_time} ms, over the "
                f"{self.config.max_execution_time_ms} ms budget"
            )

        return AssignmentResult(
            id=context.request_id,
            strategy_used=strategy_name,
            assignments=outcome.assignments,
            metadata=AssignmentMetadata(
                attempts=outcome.attempts,
                execution_time_ms=execution_time,
                strategy_parameters=dict(config.parameters),
                validation_results=validation_results,
                distribution_stats=distribution_stats(outcome.assignments, participants),
            ),
        )

    def validate_targets(self, targets: Sequence[Entity]):
        for target in targets:
            count = target.get("required_count", 1)
            if isinstance(count, bool) or not isinstance(count, int) or count < 1:
                raise InvalidConfigurationError(
                    "required_count",
                    f"Target '{get_name(target)}' required_count must be a positive integer, got {count!r}",
                )

    def run_validations(
        self,
        assignments: Sequence[Assignment],
        participants: Sequence[Entity],
        targets: Sequence[Entity],
        config: StrategyConfig,
    ) -> List[ValidationResult]:
        results = []
        for rule_name in config.validation_rules:
            validator = self.validators.get(rule_name)
            if validator is None:
                logger.warning(f"Validation rule '{rule_name}' not found")
                continue
            try:
                result = validator.validate(
                    assignments, participants, targets, config.rule_config(rule_name)
                )
            except Exception as e:
                logger.error(f"Validation rule '{rule_name}' failed: {e}")
                result = ValidationResult(
                    rule_name=rule_name,
                    passed=False,
                    message=f"Validation error: {e}",
                    severity=ValidationSeverity.ERROR,
                )
            results.append(result)
        return results

    def check_validation_results(
        self,
        results: Sequence[ValidationResult],
        validation_mode: Optional[ValidationMode] = None,
    ):
        """Raise ValidationFailureError in strict mode; log failures otherwise."""
        mode = validation_mode or self.config.validation_mode

        if mode == ValidationMode.STRICT:
            for result in results:
                if result.is_blocking:
                    raise ValidationFailureError(result.rule_name, result.message, list(results))
            return

        if mode == ValidationMode.BEST_EFFORT:
            # TODO: automatic remediation of failed validations; behaves like permissive for now
            logger.info("Running in best-effort mode; failed validations are reported only")

        for result in results:
            if not result.passed:
                logger.warning(
                    f"Validation warning: {result.rule_name} - {result.message or 'Unknown warning'}"
                )


def build_rule_engine(config: Optional[RuleEngineConfig] = None) -> RuleEngine:
    """Create a rule engine with every built-in strategy and validator registered."""
    if config is None:
        config = RuleEngineConfig(
            default_strategy=DEFAULT_STRATEGY,
            max_execution_time_ms=MAX_EXECUTION_TIME_MS,
            validation_mode=ValidationMode(VALIDATION_MODE),
        )
    engine = RuleEngine(config)

    engine.register_strategy(BalancedRotationStrategy())
    engine.register_strategy(GreedyDistributionStrategy())
    engine.register_strategy(RandomAssignmentStrategy())
    engine.register_strategy(SkillBasedStrategy())

    engine.register_validator(CapacityCheckValidator())
    engine.register_validator(AvailabilityCheckValidator())
    engine.register_validator(SkillMatchingValidator())

    logger.info(
        f"📋 Rule engine ready: strategies={engine.list_strategies()}, "
        f"validators={engine.list_validators()}"
    )
    return engine
