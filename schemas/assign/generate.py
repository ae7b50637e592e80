from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.models import ValidationMode
from utils.constants import DEFAULT_STRATEGY


class AssignmentConstraintIn(BaseModel):
    name: str
    constraintType: str
    parameters: Dict[str, Any] = Field(default_factory=dict)


class AssignmentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    strategy: str = Field(default=DEFAULT_STRATEGY)
    participantIds: Optional[List[str]] = None  # None = every active participant
    targetIds: Optional[List[str]] = None  # None = every active target
    parameters: Dict[str, Any] = Field(default_factory=dict)
    constraints: List[AssignmentConstraintIn] = Field(default_factory=list)
    validationRules: List[str] = Field(default_factory=lambda: ["capacity_check"])
    validationMode: Optional[ValidationMode] = None
    enforceEligibility: bool = True
    seed: Optional[int] = None
    userId: Optional[str] = None
    commit: bool = False
