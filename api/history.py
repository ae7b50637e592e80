from fastapi import APIRouter, Depends

from api.deps import get_history_store
from core.store import HistoryStore
from docs.entities.entity import history_description

router = APIRouter(prefix="/history", tags=["History"])


@router.get("", response_model=dict, description=history_description, summary="Assignment History")
def get_history(history_store: HistoryStore = Depends(get_history_store)):
    return {
        "history_length": history_store.history_length,
        "assignments": {pid: list(v) for pid, v in history_store.snapshot().items()},
    }
