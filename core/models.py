import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np

from core.eligibility import is_eligible, rejection_message


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


class EntityStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"
    DRAFT = "draft"


class ValidationSeverity(IntEnum):
    """Ordinal rank of a validation finding; strict mode blocks on ERROR and above."""

    INFO = 0
    WARNING = 1
    ERROR = 2
    CRITICAL = 3

    @property
    def label(self) -> str:
        return self.name.lower()


class ValidationMode(str, Enum):
    STRICT = "strict"
    PERMISSIVE = "permissive"
    BEST_EFFORT = "best_effort"


@dataclass(frozen=True)
class Entity:
    """
    A participant or target as read from the entity store. The core never
    mutates entities; the store replaces them on update.
    """

    id: str
    """Opaque identity of the entity."""
    entity_type: str
    """Either `participant` or `target`."""
    attributes: Dict[str, Any] = field(default_factory=dict)
    """Open attribute bag (name, skills, availability, group, required_count, ...)."""
    status: EntityStatus = EntityStatus.ACTIVE
    """Lifecycle status; only active entities are listed by the store."""
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "entity_type": self.entity_type,
            "attributes": dict(self.attributes),
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclass(frozen=True)
class Assignment:
    participant_id: str
    target_id: str
    confidence: float
    """Strategy-reported quality score in [0, 1]; not a probability."""
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "participant_id": self.participant_id,
            "target_id": self.target_id,
            "confidence": self.confidence,
            "metadata": dict(self.metadata),
        }


@dataclass
class AssignmentConstraint:
    name: str
    constraint_type: str
    parameters: Dict[str, Any] = field(default_factory=dict)


@dataclass
class StrategyConfig:
    name: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    """Free-form strategy parameters (weights, max_attempts, validation_<rule> dicts)."""
    constraints: List[AssignmentConstraint] = field(default_factory=list)
    validation_rules: List[str] = field(default_factory=list)
    """Names of the validators to run against the raw assignment list."""

    def rule_config(self, rule_name: str) -> Dict[str, Any]:
        """Per-validator configuration stored under `validation_<rule_name>`."""
        value = self.parameters.get(f"validation_{rule_name}")
        return dict(value) if isinstance(value, Mapping) else {}


@dataclass(frozen=True)
class ValidationResult:
    rule_name: str
    passed: bool
    message: Optional[str] = None
    severity: ValidationSeverity = ValidationSeverity.INFO

    @property
    def is_blocking(self) -> bool:
        return not self.passed and self.severity >= ValidationSeverity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_name": self.rule_name,
            "passed": self.passed,
            "message": self.message,
            "severity": self.severity.label,
        }


@dataclass
class StrategyOutcome:
    assignments: List[Assignment]
    attempts: int = 1
    """Number of solving attempts the strategy needed (1 for single-pass strategies)."""


@dataclass
class AssignmentMetadata:
    attempts: int
    execution_time_ms: int
    strategy_parameters: Dict[str, Any]
    validation_results: List[ValidationResult]
    distribution_stats: Dict[str, float] = field(default_factory=dict)


@dataclass
class AssignmentResult:
    id: str
    strategy_used: str
    assignments: List[Assignment]
    metadata: AssignmentMetadata
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "strategy_used": self.strategy_used,
            "assignments": [a.to_dict() for a in self.assignments],
            "metadata": {
                "attempts": self.metadata.attempts,
                "execution_time_ms": self.metadata.execution_time_ms,
                "strategy_parameters": dict(self.metadata.strategy_parameters),
                "validation_results": [
                    r.to_dict() for r in self.metadata.validation_results
                ],
                "distribution_stats": dict(self.metadata.distribution_stats),
            },
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class RuleEngineConfig:
    default_strategy: str = "balanced_rotation"
    max_execution_time_ms: int = 30000
    validation_mode: ValidationMode = ValidationMode.STRICT
    enforce_eligibility: bool = True
    """Apply the group/cooldown eligibility rules inside every strategy."""


@dataclass
class ExecutionContext:
    """
    Per-request inputs that are not part of the entity snapshot: the
    assignment history and the random source. Pass a seeded `rng` (or a
    `seed`) to make strategy output reproducible.
    """

    request_id: str = field(default_factory=new_id)
    user_id: Optional[str] = None
    domain: str = "default"
    history: Mapping[str, Sequence[str]] = field(default_factory=dict)
    """participant_id -> most-recent-first list of target names."""
    seed: Optional[int] = None
    rng: Optional[np.random.Generator] = None
    enforce_eligibility: bool = True
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.rng is None:
            self.rng = np.random.default_rng(self.seed)

    def history_for(self, participant_id: str) -> Sequence[str]:
        return self.history.get(participant_id, ())

    def is_eligible(self, participant: Entity, target: Entity) -> bool:
        if not self.enforce_eligibility:
            return True
        return is_eligible(participant, target, self.history_for(participant.id))

    def rejection_reason(self, participant: Entity, target: Entity) -> Optional[str]:
        if not self.enforce_eligibility:
            return None
        return rejection_message(participant, target, self.history_for(participant.id))
