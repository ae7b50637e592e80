import os
import tempfile
from pathlib import Path

# Must be set before config.paths and main are imported
_TMP = Path(tempfile.mkdtemp(prefix="assign-tests-"))
os.environ["ASSIGN_LOG_PATH"] = str(_TMP / "assign_test.log")
os.environ["ASSIGN_HISTORY_PATH"] = str(_TMP / "assignment_history.json")
os.environ["API_KEY"] = "test-key"

import pytest

from core.models import Entity, ExecutionContext
from scheduler.engine import build_rule_engine


@pytest.fixture
def make_participant():
    def _make(pid, **attributes):
        attributes.setdefault("name", pid)
        return Entity(id=pid, entity_type="participant", attributes=attributes)

    return _make


@pytest.fixture
def make_target():
    def _make(tid, required_count=1, **attributes):
        attributes.setdefault("name", tid)
        attributes["required_count"] = required_count
        return Entity(id=tid, entity_type="target", attributes=attributes)

    return _make


@pytest.fixture
def group_participants(make_participant):
    return [
        make_participant("A", group="1"),
        make_participant("B", group="1"),
        make_participant("C", group="2"),
    ]


@pytest.fixture
def crew(make_participant):
    return [make_participant(f"P{i}", group="1" if i % 2 else "2") for i in range(1, 7)]


@pytest.fixture
def context():
    def _make(seed=42, history=None, **kwargs):
        return ExecutionContext(seed=seed, history=history or {}, **kwargs)

    return _make


@pytest.fixture
def engine():
    return build_rule_engine()
