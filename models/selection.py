# models/selection.py

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from models.enums import LevelState, SelectionActionType


# -------------------------------------------------
# Cascade state
# -------------------------------------------------
class SelectionLevel(BaseModel):
    name: str
    state: LevelState = LevelState.locked
    options: List[str] = []
    selected: Optional[str] = None


class SelectionState(BaseModel):
    """Serializable snapshot of a whole cascading selection."""
    levels: List[SelectionLevel] = []


# -------------------------------------------------
# Resolve request / response
# -------------------------------------------------
class SelectionAction(BaseModel):
    action: SelectionActionType
    level: str
    value: Optional[str] = None


class SelectionResolveRequest(BaseModel):
    """
    Replays `state` (if any) against fresh lookup tables,
    then applies `actions` in order.
    """
    state: Optional[SelectionState] = None
    actions: List[SelectionAction] = Field(default_factory=list)


class SelectionResolveResponse(BaseModel):
    cascade: str
    state: SelectionState
    complete: bool
    errors: Dict[str, str] = {}


# -------------------------------------------------
# Lookup data
# -------------------------------------------------
class CascadeLookups(BaseModel):
    cascade: str
    levels: List[str]
    root_options: List[str]
    tables: List[Dict[str, List[str]]]
    labels: Dict[str, Dict[str, str]] = {}
