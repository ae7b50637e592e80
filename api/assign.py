import logging
import traceback

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_engine, get_entity_store, get_history_store
from core.models import AssignmentConstraint, ExecutionContext, StrategyConfig
from core.store import EntityStore, HistoryStore
from docs.assign.generate import (
    assign_generate_description,
    assign_strategies_description,
    assign_validators_description,
)
from exceptions.custom_errors import CUSTOM_ERRORS, ValidationFailureError
from scheduler.engine import RuleEngine
from schemas.assign.generate import AssignmentRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assign", tags=["Assignment"])


# generate assignments
@router.post(
    "/generate",
    response_model=dict,
    description=assign_generate_description,
    summary="Generate Assignments",
)
def generate_assignments(
    request: AssignmentRequest,
    engine: RuleEngine = Depends(get_engine),
    entity_store: EntityStore = Depends(get_entity_store),
    history_store: HistoryStore = Depends(get_history_store),
):
    try:
        participants = entity_store.snapshot("participant", request.participantIds)
        targets = entity_store.snapshot("target", request.targetIds)

        config = StrategyConfig(
            name=request.strategy,
            parameters=dict(request.parameters),
            constraints=[
                AssignmentConstraint(c.name, c.constraintType, dict(c.parameters))
                for c in request.constraints
            ],
            validation_rules=list(request.validationRules),
        )
        context = ExecutionContext(
            user_id=request.userId,
            history=history_store.snapshot(),
            seed=request.seed,
            enforce_eligibility=request.enforceEligibility,
        )

        result = engine.execute_assignment(
            request.strategy,
            participants,
            targets,
            config,
            context,
            request.validationMode,
        )

        if request.commit:
            history_store.append(result.assignments, targets)
            if history_store.path is not None:
                history_store.save()
            logger.info(f"📝 Committed {len(result.assignments)} assignments to history")

        return result.to_dict()

    except ValidationFailureError as e:
        raise HTTPException(
            status_code=CUSTOM_ERRORS[ValidationFailureError],
            detail={
                "message": str(e),
                "rule_name": e.rule_name,
                "validation_results": [r.to_dict() for r in e.results],
            },
        )
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")


@router.get(
    "/strategies",
    response_model=dict,
    description=assign_strategies_description,
    summary="List Strategies",
)
def list_strategies(engine: RuleEngine = Depends(get_engine)):
    return {
        "default": engine.config.default_strategy,
        "strategies": engine.describe_strategies(),
    }


@router.get(
    "/validators",
    response_model=dict,
    description=assign_validators_description,
    summary="List Validators",
)
def list_validators(engine: RuleEngine = Depends(get_engine)):
    return {"validators": engine.list_validators()}
