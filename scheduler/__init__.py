"""
scheduler
---------

Main assignment module. Initializes key components:

- `distribution`: Candidate pools and the greedy most-constrained-first solver.
- `runner`: Bounded retry loop around randomized solving attempts.
- `strategies`: Pluggable assignment strategies.
- `rules`: Pluggable post-hoc validators.
- `engine`: Rule engine orchestrating strategies, validators and validation modes.
"""
