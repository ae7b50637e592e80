"""
core
----

Core assignment domain components:

- Entity, Assignment, StrategyConfig, ValidationResult, AssignmentResult & friends:
  Immutable inputs and outputs of a single assignment run (`core.models`).

- EligibilityRule & is_eligible:
  Hard group-restriction and cooldown rules for a participant/target pair.

- Registry:
  Name-keyed registration of strategies and validators at startup.

- EntityStore & HistoryStore:
  Snapshot-read / append-write stores for entities and bounded assignment history.
"""
