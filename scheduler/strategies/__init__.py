"""
scheduler.strategies
--------------------

Assignment strategies, all implementing `AssignmentStrategy`:

- `greedy_distribution`: most-constrained-first greedy distribution with bounded retry.
- `balanced_rotation`: scored ranking by rotation history and workload balance.
- `random_assignment`: shuffled first-available assignment.
- `skill_based`: ranking by overlap with the target's required skills.
"""
from .base import AssignmentStrategy
from .greedy_distribution import GreedyDistributionStrategy
from .balanced_rotation import BalancedRotationStrategy, rotation_score
from .random_assignment import RandomAssignmentStrategy
from .skill_based import SkillBasedStrategy
