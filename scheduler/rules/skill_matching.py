from typing import Any, Dict, Sequence

from core.models import Assignment, Entity, ValidationResult, ValidationSeverity
from utils.constants import SKILL_MATCH_THRESHOLD
from utils.entity_utils import get_name, get_required_skills, get_skills
from .base import ValidationRule, is_strict

__all__ = ["SkillMatchingValidator"]


class SkillMatchingValidator(ValidationRule):
    name = "skill_matching"
    severity = ValidationSeverity.WARNING

    def validate(
        self,
        assignments: Sequence[Assignment],
        participants: Sequence[Entity],
        targets: Sequence[Entity],
        rule_config: Dict[str, Any],
    ) -> ValidationResult:
        strict_mode = is_strict(rule_config, default=False)
        threshold = rule_config.get("min_match", SKILL_MATCH_THRESHOLD)
        participants_by_id = {p.id: p for p in participants}
        targets_by_id = {t.id: t for t in targets}

        issues = []
        for assignment in assignments:
            participant = participants_by_id.get(assignment.participant_id)
            target = targets_by_id.get(assignment.target_id)
            if participant is None or target is None:
                continue

            required_skills = get_required_skills(target)
            if not required_skills:
                continue
            participant_skills = get_skills(participant)
            matching = [s for s in required_skills if s in participant_skills]
            match_percentage = len(matching) / len(required_skills)

            if match_percentage < threshold:
                issues.append(
                    f"Participant {get_name(participant)} has low skill match "
                    f"({match_percentage * 100:.1f}%) for target {get_name(target)}. "
                    f"Required: {required_skills}, Has: {participant_skills}"
                )

        severity = self.severity_for(strict_mode) if issues else ValidationSeverity.INFO

        if issues:
            message = f"Found {len(issues)} skill matching issues: {'; '.join(issues)}"
        else:
            message = "All assignments have adequate skill matching"

        return ValidationResult(
            rule_name=self.name,
            passed=not issues or not strict_mode,
            message=message,
            severity=severity,
        )
