assign_generate_description = """
Assign participants to targets with a registered strategy, then run the requested validators over the result.

### Request Body

- `strategy`: Name of a registered strategy (see `GET /api/assign/strategies`). Defaults to `balanced_rotation`.
    - `balanced_rotation`: Prefer participants who have not recently been on the target.
    - `greedy_distribution`: Most-constrained target first, random eligible candidate, retried until every quota is filled.
    - `random_assignment`: Uniformly random eligible candidates.
    - `skill_based`: Candidates ranked by overlap between their skills and the target's required skills.

- `participantIds`: Ids of the participants to assign (Optional, defaults to every active participant)
- `targetIds`: Ids of the targets to fill (Optional, defaults to every active target)

- `parameters`: Strategy parameters (Optional)
    - `max_attempts`: Retry cap, between 1 and 1000
    - `rotation_weight` / `balance_weight`: Weights in [0, 1] for `balanced_rotation`
    - `rotation_lookback`: Number of history entries that count as "recent"
    - `validation_<rule>`: Per-validator settings, e.g. `{"validation_capacity_check": {"strict": false}}`

- `validationRules`: Validators to run, e.g. `["capacity_check", "availability_check", "skill_matching"]`
- `validationMode`: `strict`, `permissive` or `best_effort` (Optional, defaults to the service setting)
- `enforceEligibility`: Apply group restriction and cooldown rules (default `true`)
- `seed`: Random seed for reproducible output (Optional)
- `commit`: Record the accepted assignments in the assignment history (default `false`)

### Example Request

```json
{
    "strategy": "greedy_distribution",
    "parameters": {"max_attempts": 100},
    "validationRules": ["capacity_check"],
    "seed": 42,
    "commit": true
}
```

### Response

- `id`: Request id
- `strategy_used`: Strategy that produced the assignments
- `assignments`: List of `{participant_id, target_id, confidence, metadata}`
- `metadata`: Attempts, execution time, echoed parameters, validation results and distribution statistics

### Errors

- `404`: Unknown strategy or entity id
- `400`: Invalid strategy parameter or target `required_count`
- `422`: No feasible assignment within the attempt cap, or a blocking validation failure in strict mode
"""

assign_strategies_description = """
List the registered assignment strategies with their descriptions.
"""

assign_validators_description = """
List the registered validation rules that can be named in `validationRules`.
"""
