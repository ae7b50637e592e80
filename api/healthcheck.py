from fastapi import APIRouter, Depends

from api.deps import get_engine
from scheduler.engine import RuleEngine

router = APIRouter(prefix="/health", tags=["Health Check"])


@router.get("/check", summary="Health Check")
def healthcheck(engine: RuleEngine = Depends(get_engine)):
    return {
        "status": "ok",
        "strategies": len(engine.strategies),
        "validators": len(engine.validators),
    }
