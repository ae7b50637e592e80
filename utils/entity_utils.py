from typing import Any, List, Sequence, Set, Tuple

import numpy as np


def get_name(entity) -> str:
    """Display name of a participant or target, falling back to its id."""
    name = entity.get("name")
    if name is None or str(name).strip() == "":
        return f"{entity.entity_type.capitalize()}-{entity.id}"
    return str(name)


def get_skills(entity, key: str = "skills") -> List[str]:
    """Skill tags as a de-duplicated list, order preserved."""
    raw = entity.get(key) or []
    if isinstance(raw, str):
        raw = [s for s in raw.replace(";", ",").split(",")]
    skills = []
    for s in raw:
        s = str(s).strip()
        if s and s not in skills:
            skills.append(s)
    return skills


def get_required_skills(target) -> List[str]:
    return get_skills(target, "required_skills")


def get_group(participant) -> Any:
    return participant.get("group")


def get_allowed_groups(target) -> Set[str]:
    """Groups allowed to fill a target; empty set means no restriction."""
    raw = target.get("allowed_groups")
    if raw is None:
        return set()
    if isinstance(raw, (str, int)):
        raw = [raw]
    return {str(g) for g in raw}


def get_required_count(target) -> int:
    value = target.get("required_count", 1)
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def is_last_only_cooldown(target) -> bool:
    """True when the target only checks the most recent history entry."""
    return str(target.get("cooldown", "window")).strip().lower() == "last"


def is_available(participant, day: Any = None) -> bool:
    """
    Availability is either a boolean or a per-day map. With a day, the map
    entry decides (missing days count as available); without one, the
    participant is unavailable only if every day is false.
    """
    availability = participant.get("availability", True)
    if isinstance(availability, dict):
        if not availability:
            return True
        if day is not None:
            return bool(availability.get(str(day), availability.get(day, True)))
        return any(bool(v) for v in availability.values())
    if availability is None:
        return True
    return bool(availability)


def count_skill_matches(participant, target) -> Tuple[int, int]:
    """Return (matched, required) skill counts for a participant/target pair."""
    required = get_required_skills(target)
    held = set(get_skills(participant))
    return sum(1 for s in required if s in held), len(required)


def shuffle_order(lst: Sequence, rng: np.random.Generator) -> Tuple[list, list]:
    """Shuffle the order of a list and return both original and shuffled lists."""
    og_lst = list(lst)  # Save original order of list
    order = rng.permutation(len(og_lst))
    return og_lst, [og_lst[i] for i in order]
