import os
from pathlib import Path

# === Base project path ===
PROJECT_ROOT = Path(__file__).resolve().parents[1]

# === Common directories ===
DATA_DIR = PROJECT_ROOT / "data"
CONFIG_DIR = PROJECT_ROOT / "config"
LOG_DIR = PROJECT_ROOT  # or change to PROJECT_ROOT / "logs" in future

# === Default file paths ===
CONSTANTS_PATH = CONFIG_DIR / "constants.json"
LOG_PATH = Path(os.getenv("ASSIGN_LOG_PATH", LOG_DIR / "assign_run.log"))
HISTORY_PATH = Path(os.getenv("ASSIGN_HISTORY_PATH", DATA_DIR / "assignment_history.json"))
