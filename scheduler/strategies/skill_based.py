from typing import Sequence

from core.models import (
    Assignment,
    Entity,
    ExecutionContext,
    StrategyConfig,
    StrategyOutcome,
)
from utils.entity_utils import count_skill_matches, get_name, get_required_count
from .base import AssignmentStrategy


class SkillBasedStrategy(AssignmentStrategy):
    name = "skill_based"
    description = "Assigns participants based on skill matching"

    def execute(
        self,
        participants: Sequence[Entity],
        targets: Sequence[Entity],
        config: StrategyConfig,
        context: ExecutionContext,
    ) -> StrategyOutcome:
        available = list(participants)
        assignments = []

        for target in targets:
            ranked = []
            for participant in self.eligible_candidates(available, target, context):
                matched, required = count_skill_matches(participant, target)
                # Targets with required skills only take participants holding one
                if required and not matched:
                    continue
                ranked.append((participant, matched, required))
            ranked.sort(key=lambda item: item[1], reverse=True)

            chosen = ranked[: get_required_count(target)]
            for participant, matched, required in chosen:
                assignments.append(
                    Assignment(
                        participant_id=participant.id,
                        target_id=target.id,
                        confidence=matched / required if required else 0.5,
                        metadata={
                            "strategy": self.name,
                            "skill_match_score": matched,
                            "target_name": get_name(target),
                        },
                    )
                )

            taken = {p.id for p, _, _ in chosen}
            available = [p for p in available if p.id not in taken]

        return StrategyOutcome(assignments)
