"""
scheduler.rules
---------------

Post-hoc validation rules run by the rule engine against a raw assignment list:

- `capacity_check`: targets are neither over- nor (in strict mode) under-filled.
- `availability_check`: assigned participants are available.
- `skill_matching`: assigned participants hold enough of the required skills.

Allows unified access to all validators via wildcard imports.
"""
from .base import *
from .capacity_check import *
from .availability_check import *
from .skill_matching import *
