import pytest

from core.models import (
    RuleEngineConfig,
    StrategyConfig,
    ValidationMode,
    ValidationResult,
    ValidationSeverity,
)
from exceptions.custom_errors import (
    InfeasibleAssignmentError,
    InvalidConfigurationError,
    StrategyNotFoundError,
    ValidationFailureError,
)
from scheduler.engine import RuleEngine, build_rule_engine
from scheduler.rules import ValidationRule
from scheduler.strategies import GreedyDistributionStrategy, RandomAssignmentStrategy


class ExplodingValidator(ValidationRule):
    name = "exploding"

    def validate(self, assignments, participants, targets, rule_config):
        raise RuntimeError("boom")


def test_registers_all_builtin_strategies_and_validators(engine):
    assert sorted(engine.list_strategies()) == [
        "balanced_rotation",
        "greedy_distribution",
        "random_assignment",
        "skill_based",
    ]
    assert sorted(engine.list_validators()) == [
        "availability_check",
        "capacity_check",
        "skill_matching",
    ]
    assert all(d["description"] for d in engine.describe_strategies())


def test_unknown_strategy_is_rejected(engine, group_participants, make_target):
    with pytest.raises(StrategyNotFoundError) as excinfo:
        engine.execute_assignment(
            "round_robin", group_participants, [make_target("T1")], StrategyConfig("round_robin")
        )
    assert "round_robin" in str(excinfo.value)


def test_invalid_required_count_is_rejected(engine, group_participants, make_target):
    with pytest.raises(InvalidConfigurationError) as excinfo:
        engine.execute_assignment(
            "greedy_distribution",
            group_participants,
            [make_target("T1", required_count=0)],
            StrategyConfig("greedy_distribution"),
        )
    assert excinfo.value.parameter == "required_count"


def test_invalid_parameters_are_rejected_before_execution(engine, group_participants, make_target):
    with pytest.raises(InvalidConfigurationError):
        engine.execute_assignment(
            "balanced_rotation",
            group_participants,
            [make_target("T1")],
            StrategyConfig("balanced_rotation", parameters={"rotation_weight": 2}),
        )


def test_group_scenario_end_to_end(engine, group_participants, make_target, context):
    config = StrategyConfig("greedy_distribution", validation_rules=["capacity_check"])

    result = engine.execute_assignment(
        "greedy_distribution",
        group_participants,
        [make_target("T1", allowed_groups=["2"])],
        config,
        context(),
    )

    assert [(a.participant_id, a.target_id) for a in result.assignments] == [("C", "T1")]
    assert result.strategy_used == "greedy_distribution"
    assert result.metadata.attempts == 1
    assert [r.rule_name for r in result.metadata.validation_results] == ["capacity_check"]
    assert result.metadata.distribution_stats["total_assignments"] == 1.0


def test_default_strategy_is_used_when_none_given(engine, group_participants, make_target, context):
    result = engine.execute_assignment(
        None, group_participants, [make_target("T1")], StrategyConfig(""), context()
    )
    assert result.strategy_used == "balanced_rotation"


def test_unregistered_validator_is_skipped(engine, group_participants, make_target, context):
    config = StrategyConfig(
        "greedy_distribution", validation_rules=["capacity_check", "no_such_rule"]
    )

    result = engine.execute_assignment(
        "greedy_distribution", group_participants, [make_target("T1")], config, context()
    )

    assert [r.rule_name for r in result.metadata.validation_results] == ["capacity_check"]


def test_strict_and_permissive_produce_identical_results(make_participant, make_target, context):
    engine = build_rule_engine()
    participants = [make_participant("A")]
    targets = [make_target("T1", required_count=2)]
    config = StrategyConfig("random_assignment", validation_rules=["capacity_check"])

    permissive = engine.execute_assignment(
        "random_assignment", participants, targets, config, context(), ValidationMode.PERMISSIVE
    )
    with pytest.raises(ValidationFailureError) as excinfo:
        engine.execute_assignment(
            "random_assignment", participants, targets, config, context(), ValidationMode.STRICT
        )

    assert excinfo.value.results == permissive.metadata.validation_results
    assert excinfo.value.rule_name == "capacity_check"
    assert str(excinfo.value).startswith("Validation failed: capacity_check")
    assert len(permissive.assignments) == 1


def test_best_effort_reports_without_raising(engine, make_participant, make_target, context):
    config = StrategyConfig("random_assignment", validation_rules=["capacity_check"])

    result = engine.execute_assignment(
        "random_assignment",
        [make_participant("A")],
        [make_target("T1", required_count=2)],
        config,
        context(),
        ValidationMode.BEST_EFFORT,
    )

    assert not result.metadata.validation_results[0].passed


def test_warning_results_do_not_block_strict_mode(engine, make_participant, make_target, context):
    config = StrategyConfig(
        "random_assignment",
        parameters={"validation_capacity_check": {"strict": False}},
        validation_rules=["capacity_check"],
    )

    result = engine.execute_assignment(
        "random_assignment",
        [make_participant("A")],
        [make_target("T1", required_count=2)],
        config,
        context(),
        ValidationMode.STRICT,
    )

    validation = result.metadata.validation_results[0]
    assert validation.passed
    assert validation.severity == ValidationSeverity.WARNING


def test_crashing_validator_is_recorded_as_error(make_participant, make_target, context):
    engine = RuleEngine(RuleEngineConfig(validation_mode=ValidationMode.PERMISSIVE))
    engine.register_strategy(RandomAssignmentStrategy())
    engine.register_validator(ExplodingValidator())
    config = StrategyConfig("random_assignment", validation_rules=["exploding"])

    result = engine.execute_assignment(
        "random_assignment", [make_participant("A")], [make_target("T1")], config, context()
    )

    assert result.metadata.validation_results == [
        ValidationResult(
            rule_name="exploding",
            passed=False,
            message="Validation error: boom",
            severity=ValidationSeverity.ERROR,
        )
    ]


def test_eligibility_can_be_disabled_engine_wide(make_participant, make_target, context):
    engine = RuleEngine(RuleEngineConfig(enforce_eligibility=False))
    engine.register_strategy(GreedyDistributionStrategy())

    result = engine.execute_assignment(
        "greedy_distribution",
        [make_participant("A", group="1")],
        [make_target("T1", allowed_groups=["2"])],
        StrategyConfig("greedy_distribution"),
        context(),
    )

    assert [a.participant_id for a in result.assignments] == ["A"]


def test_conditional_registration(make_participant):
    engine = RuleEngine()
    engine.register_strategy(RandomAssignmentStrategy(), condition=False)
    assert engine.list_strategies() == []


def test_result_serializes_to_plain_dict(engine, group_participants, make_target, context):
    result = engine.execute_assignment(
        "greedy_distribution",
        group_participants,
        [make_target("T1", required_count=2)],
        StrategyConfig("greedy_distribution", validation_rules=["capacity_check"]),
        context(),
    )

    data = result.to_dict()
    assert data["strategy_used"] == "greedy_distribution"
    assert len(data["assignments"]) == 2
    assert data["metadata"]["validation_results"][0]["severity"] == "error"
    assert set(data["metadata"]["distribution_stats"]) == {
        "mean_assignments",
        "variance",
        "std_deviation",
        "total_assignments",
    }


def test_repeated_participants_are_assigned_once(engine, make_participant, make_target, context):
    a, b = make_participant("A"), make_participant("B")
    config = StrategyConfig("balanced_rotation", validation_rules=["capacity_check"])

    result = engine.execute_assignment(
        "balanced_rotation", [a, a, b], [make_target("T1", required_count=2)], config, context()
    )

    assert sorted(x.participant_id for x in result.assignments) == ["A", "B"]
    assert result.metadata.distribution_stats["total_assignments"] == 2.0


def test_repeated_participant_cannot_fill_two_slots(engine, make_participant, make_target, context):
    a = make_participant("A")

    with pytest.raises(InfeasibleAssignmentError):
        engine.execute_assignment(
            "greedy_distribution",
            [a, a],
            [make_target("T1", required_count=2)],
            StrategyConfig("greedy_distribution", parameters={"max_attempts": 2}),
            context(),
        )
