import json
import logging
import threading
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from core.models import Assignment, Entity, EntityStatus, new_id, utc_now
from exceptions.custom_errors import (
    EntityNotFoundError,
    HistoryFileError,
    InvalidEntityError,
)
from utils.constants import ENTITY_TYPES, HISTORY_LENGTH
from utils.entity_utils import get_name

logger = logging.getLogger(__name__)

History = Dict[str, Tuple[str, ...]]


class EntityStore:
    """
    In-memory participant/target store. Reads hand back snapshots (lists of
    frozen entities); callers never get a handle on the underlying dicts.
    """

    def __init__(self, entity_types: Iterable[str] = ENTITY_TYPES):
        self.entity_types = tuple(entity_types)
        self._entities: Dict[str, Dict[str, Entity]] = {t: {} for t in self.entity_types}
        self._lock = threading.RLock()

    def _check_type(self, entity_type: str):
        if entity_type not in self.entity_types:
            raise InvalidEntityError(f"Entity type '{entity_type}' not defined")

    def _check_attributes(self, entity_type: str, attributes: Mapping[str, Any]):
        if not isinstance(attributes, Mapping):
            raise InvalidEntityError("Entity attributes must be a mapping")
        if entity_type == "target" and "required_count" in attributes:
            count = attributes["required_count"]
            if isinstance(count, bool) or not isinstance(count, int) or count < 1:
                raise InvalidEntityError(
                    f"required_count must be a positive integer, got {count!r}"
                )

    def create_entity(
        self,
        entity_type: str,
        attributes: Mapping[str, Any],
        entity_id: Optional[str] = None,
    ) -> Entity:
        self._check_type(entity_type)
        self._check_attributes(entity_type, attributes)
        entity = Entity(
            id=entity_id or new_id(),
            entity_type=entity_type,
            attributes=dict(attributes),
        )
        with self._lock:
            self._entities[entity_type][entity.id] = entity
        logger.info(f"Created entity {entity.id} of type {entity_type}")
        return entity

    def get_entity(self, entity_type: str, entity_id: str) -> Entity:
        self._check_type(entity_type)
        with self._lock:
            entity = self._entities[entity_type].get(entity_id)
        if entity is None:
            raise EntityNotFoundError(f"Entity {entity_id} not found")
        return entity

    def list_entities(self, entity_type: str) -> List[Entity]:
        """Active entities of a type, in insertion order."""
        self._check_type(entity_type)
        with self._lock:
            return [
                e
                for e in self._entities[entity_type].values()
                if e.status == EntityStatus.ACTIVE
            ]

    def update_entity(
        self, entity_type: str, entity_id: str, updates: Mapping[str, Any]
    ) -> Entity:
        self._check_attributes(entity_type, updates)
        with self._lock:
            entity = self.get_entity(entity_type, entity_id)
            attributes = {**entity.attributes, **updates}
            updated = replace(entity, attributes=attributes, updated_at=utc_now())
            self._entities[entity_type][entity_id] = updated
        logger.info(f"Updated entity {entity_id} of type {entity_type}")
        return updated

    def delete_entity(self, entity_type: str, entity_id: str) -> Entity:
        """Soft delete: the entity is kept but no longer listed."""
        with self._lock:
            entity = self.get_entity(entity_type, entity_id)
            deleted = replace(entity, status=EntityStatus.INACTIVE, updated_at=utc_now())
            self._entities[entity_type][entity_id] = deleted
        logger.info(f"Deleted entity {entity_id} of type {entity_type}")
        return deleted

    def snapshot(self, entity_type: str, ids: Optional[Iterable[str]] = None) -> List[Entity]:
        """
        Active entities of a type, optionally restricted to `ids` (in the
        order given). Unknown or inactive ids raise EntityNotFoundError;
        repeated ids raise InvalidEntityError.
        """
        if ids is None:
            return self.list_entities(entity_type)
        ids = list(ids)
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise InvalidEntityError(f"Duplicate {entity_type} ids requested: {duplicates}")
        with self._lock:
            out = []
            for entity_id in ids:
                entity = self.get_entity(entity_type, entity_id)
                if entity.status != EntityStatus.ACTIVE:
                    raise EntityNotFoundError(f"Entity {entity_id} is not active")
                out.append(entity)
            return out


class HistoryStore:
    """
    Bounded per-participant assignment history, most recent first.
    Every append truncates each list to `history_length` entries.
    """

    def __init__(self, history_length: int = HISTORY_LENGTH, path: Union[str, Path, None] = None):
        if history_length < 1:
            raise ValueError("history_length must be at least 1")
        self.history_length = history_length
        self.path = Path(path) if path is not None else None
        self._history: Dict[str, List[str]] = {}
        self._lock = threading.RLock()

    def snapshot(self) -> History:
        with self._lock:
            return {pid: tuple(entries) for pid, entries in self._history.items()}

    def get(self, participant_id: str) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._history.get(participant_id, ()))

    def append(self, assignments: Iterable[Assignment], targets: Iterable[Entity]) -> History:
        """Record accepted assignments (target names) at the front of each history."""
        target_names = {t.id: get_name(t) for t in targets}
        with self._lock:
            for assignment in assignments:
                name = target_names.get(assignment.target_id, assignment.target_id)
                entries = self._history.setdefault(assignment.participant_id, [])
                entries.insert(0, name)
                del entries[self.history_length:]
            return self.snapshot()

    def replace_all(self, history: Mapping[str, Iterable[str]]):
        with self._lock:
            self._history = {
                str(pid): list(entries)[: self.history_length]
                for pid, entries in history.items()
            }

    def load(self, path: Union[str, Path, None] = None) -> History:
        """
        Load history from JSON. Accepts `{"assignments": {...}}` and the
        older bare `{participant: [targets]}` format. A missing file is an
        empty history.
        """
        path = Path(path) if path is not None else self.path
        if path is None or not path.exists():
            return self.snapshot()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise HistoryFileError(f"Could not parse {path}: {e}")

        if isinstance(data, dict) and isinstance(data.get("assignments"), dict):
            history = data["assignments"]
        elif isinstance(data, dict) and all(isinstance(v, list) for v in data.values()):
            logger.warning("⚠️ Found old history format. It will be converted on the next save.")
            history = data
        else:
            raise HistoryFileError(f"Could not parse {path}")

        self.replace_all(history)
        logger.info(f"Loaded assignment history for {len(history)} participants from {path}")
        return self.snapshot()

    def save(self, path: Union[str, Path, None] = None):
        path = Path(path) if path is not None else self.path
        if path is None:
            raise HistoryFileError("No history file configured")
        path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            data = {"assignments": {pid: list(v) for pid, v in self._history.items()}}
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4, ensure_ascii=False)
        logger.info(f"💾 Assignment history saved to {path}")
