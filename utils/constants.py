import json
from config.paths import CONSTANTS_PATH

"""
Loads configuration constants from config/constants.json and exposes them as module-level variables.
Edit constants.json to change values; import from utils.constants to use in code.
"""

with open(CONSTANTS_PATH, "r", encoding="utf-8") as f:
    _constants = json.load(f)

# Expose constants as variables
HISTORY_LENGTH = _constants["HISTORY_LENGTH"]
ROTATION_LOOKBACK = _constants["ROTATION_LOOKBACK"]

DEFAULT_STRATEGY = _constants["DEFAULT_STRATEGY"]
DEFAULT_MAX_ATTEMPTS = _constants["DEFAULT_MAX_ATTEMPTS"]
GREEDY_MAX_ATTEMPTS = _constants["GREEDY_MAX_ATTEMPTS"]
MAX_ATTEMPTS_LIMIT = _constants["MAX_ATTEMPTS_LIMIT"]

ROTATION_WEIGHT = _constants["ROTATION_WEIGHT"]
BALANCE_WEIGHT = _constants["BALANCE_WEIGHT"]
BALANCE_PLACEHOLDER_SCORE = _constants["BALANCE_PLACEHOLDER_SCORE"]
RANDOM_CONFIDENCE = _constants["RANDOM_CONFIDENCE"]
SKILL_MATCH_THRESHOLD = _constants["SKILL_MATCH_THRESHOLD"]

MAX_EXECUTION_TIME_MS = _constants["MAX_EXECUTION_TIME_MS"]
VALIDATION_MODE = _constants["VALIDATION_MODE"]
ENTITY_TYPES = _constants["ENTITY_TYPES"]
