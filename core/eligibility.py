from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

from utils.entity_utils import (
    get_allowed_groups,
    get_group,
    get_name,
    is_last_only_cooldown,
)


@dataclass(frozen=True)
class EligibilityRule:
    check: Callable[..., bool]
    """Returns True when the participant passes the rule for the target."""
    message: str


def group_restriction(participant, target, history: Sequence[str]) -> bool:
    """A target that declares allowed groups only admits members of those groups."""
    allowed = get_allowed_groups(target)
    if not allowed:
        return True
    group = get_group(participant)
    return group is not None and str(group) in allowed


def cooldown(participant, target, history: Sequence[str]) -> bool:
    """
    Reject a participant who worked the target recently.

    Targets marked ``cooldown: last`` compare against the most recent history
    entry only; all other targets check the whole lookback window.
    """
    if not history:
        return True
    target_name = get_name(target)
    if is_last_only_cooldown(target):
        return history[0] != target_name
    return target_name not in history


ELIGIBILITY_RULES: Dict[str, EligibilityRule] = {
    "Group restriction": EligibilityRule(
        group_restriction,
        "Participant is not in a group allowed to fill this target.",
    ),
    "Cooldown": EligibilityRule(
        cooldown,
        "Participant was assigned to this target within the cooldown window.",
    ),
}


def failed_rule(participant, target, history: Sequence[str]) -> Optional[str]:
    """Name of the first eligibility rule the participant fails, or None."""
    for name, rule in ELIGIBILITY_RULES.items():
        if not rule.check(participant, target, history):
            return name
    return None


def rejection_message(participant, target, history: Sequence[str]) -> Optional[str]:
    """Message of the first eligibility rule the participant fails, or None."""
    name = failed_rule(participant, target, history)
    return ELIGIBILITY_RULES[name].message if name else None


def is_eligible(participant, target, history: Sequence[str]) -> bool:
    return failed_rule(participant, target, history) is None
