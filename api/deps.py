from config.paths import HISTORY_PATH
from core.store import EntityStore, HistoryStore
from scheduler.engine import build_rule_engine

# Process-wide instances shared by every router; tests swap them through
# app.dependency_overrides.
engine = build_rule_engine()
entity_store = EntityStore()
history_store = HistoryStore(path=HISTORY_PATH)


def get_engine():
    return engine


def get_entity_store():
    return entity_store


def get_history_store():
    return history_store
