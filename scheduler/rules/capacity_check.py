import logging
from collections import Counter
from typing import Any, Dict, Sequence

from core.models import Assignment, Entity, ValidationResult, ValidationSeverity
from utils.entity_utils import get_name, get_required_count
from .base import ValidationRule, is_strict

logger = logging.getLogger(__name__)

__all__ = ["CapacityCheckValidator"]


class CapacityCheckValidator(ValidationRule):
    """
    Validates that targets don't exceed their capacity. Under-filled targets
    only fail the rule in strict mode (the default); otherwise they are
    logged and reported in the message.
    """

    name = "capacity_check"
    severity = ValidationSeverity.WARNING

    def validate(
        self,
        assignments: Sequence[Assignment],
        participants: Sequence[Entity],
        targets: Sequence[Entity],
        rule_config: Dict[str, Any],
    ) -> ValidationResult:
        strict_mode = is_strict(rule_config, default=True)
        target_counts = Counter(a.target_id for a in assignments)

        violations = []
        warnings = []
        for target in targets:
            required_count = get_required_count(target)
            assigned_count = target_counts.get(target.id, 0)
            target_name = get_name(target)

            if assigned_count > required_count:
                violations.append(
                    f"Target '{target_name}' has {assigned_count} assignments but only needs {required_count}"
                )
            elif assigned_count < required_count:
                message = (
                    f"Target '{target_name}' has {assigned_count} assignments but needs "
                    f"{required_count} (short by {required_count - assigned_count})"
                )
                if strict_mode:
                    violations.append(message)
                else:
                    logger.warning(f"Capacity warning: {message}")
                    warnings.append(message)

        if violations:
            message = "; ".join(violations)
        elif warnings:
            message = "Capacity warnings: " + "; ".join(warnings)
        else:
            message = "All targets have appropriate capacity"

        return ValidationResult(
            rule_name=self.name,
            passed=not violations,
            message=message,
            severity=self.severity_for(strict_mode),
        )
