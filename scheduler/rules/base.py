from abc import ABC, abstractmethod
from typing import Any, Dict, Sequence

from core.models import Assignment, Entity, ValidationResult, ValidationSeverity

__all__ = ["ValidationRule", "is_strict"]


class ValidationRule(ABC):
    """
    Observes a completed assignment list and reports a single
    ValidationResult. Validators never modify the assignments.
    """

    name: str = ""
    severity: ValidationSeverity = ValidationSeverity.WARNING
    """Severity of a finding when the rule runs non-strict."""
    strict_severity: ValidationSeverity = ValidationSeverity.ERROR

    def severity_for(self, strict_mode: bool) -> ValidationSeverity:
        return self.strict_severity if strict_mode else self.severity

    @abstractmethod
    def validate(
        self,
        assignments: Sequence[Assignment],
        participants: Sequence[Entity],
        targets: Sequence[Entity],
        rule_config: Dict[str, Any],
    ) -> ValidationResult:
        ...


def is_strict(rule_config: Dict[str, Any], default: bool) -> bool:
    value = rule_config.get("strict", default)
    return value if isinstance(value, bool) else default
