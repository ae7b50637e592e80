from typing import Any, Dict, Sequence

from core.models import Assignment, Entity, ValidationResult, ValidationSeverity
from utils.entity_utils import get_name, is_available
from .base import ValidationRule, is_strict

__all__ = ["AvailabilityCheckValidator"]


class AvailabilityCheckValidator(ValidationRule):
    """Validates that all assigned participants are available."""

    name = "availability_check"
    severity = ValidationSeverity.WARNING

    def validate(
        self,
        assignments: Sequence[Assignment],
        participants: Sequence[Entity],
        targets: Sequence[Entity],
        rule_config: Dict[str, Any],
    ) -> ValidationResult:
        strict_mode = is_strict(rule_config, default=False)
        day = rule_config.get("day")
        by_id = {p.id: p for p in participants}

        unavailable = []
        for assignment in assignments:
            participant = by_id.get(assignment.participant_id)
            # Participants missing from the snapshot are treated as available
            if participant is not None and not is_available(participant, day):
                unavailable.append(get_name(participant))

        if unavailable:
            message = f"Unavailable participants assigned: {', '.join(unavailable)}"
        else:
            message = "All assigned participants are available"

        return ValidationResult(
            rule_name=self.name,
            passed=not unavailable,
            message=message,
            severity=self.severity_for(strict_mode),
        )
