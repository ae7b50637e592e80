from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class EntityCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)


class EntityUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    attributes: Dict[str, Any]
