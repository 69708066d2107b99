# routers/selections.py

from fastapi import APIRouter, HTTPException, Depends

from core.errors import InvalidArgument, PreconditionViolation, programmer_error
from core.logging_config import logger
from core.lookups import CASCADES, build_resolver, cascade_lookups
from dependencies.auth import get_current_user
from models.enums import SelectionActionType
from models.selection import (
    CascadeLookups,
    SelectionResolveRequest,
    SelectionResolveResponse,
)


router = APIRouter(
    prefix="/selections",
    tags=["Selections"],
    dependencies=[Depends(get_current_user)],
)


def require_cascade(cascade: str):
    if cascade not in CASCADES:
        raise HTTPException(404, f"Unknown cascade '{cascade}'")


# ============================================================
# LIST CASCADES
# ============================================================
@router.get("", summary="Available cascades")
def list_cascades():
    return {name: c.levels for name, c in CASCADES.items()}


# ============================================================
# LOOKUP DATA
# ============================================================
@router.get(
    "/{cascade}/lookups",
    response_model=CascadeLookups,
    summary="Root options, lookup tables and labels for a cascade",
)
def get_cascade_lookups(cascade: str):
    require_cascade(cascade)
    return cascade_lookups(cascade)


# ============================================================
# RESOLVE
# ============================================================
@router.post(
    "/{cascade}/resolve",
    response_model=SelectionResolveResponse,
    summary="Apply select / clear actions to a cascading selection",
    description="""
    Replays `state` against the current lookup tables, then applies
    `actions` in order.

    - Selecting on a locked level → **409**
    - Unknown level, missing value, mismatched state → **422**
    - A value with no lookup entry opens the next level with no options
    """,
)
def resolve_selection(cascade: str, payload: SelectionResolveRequest):
    require_cascade(cascade)
    resolver = build_resolver(cascade)

    try:
        if payload.state is not None:
            resolver.restore(payload.state)

        for step in payload.actions:
            if step.action == SelectionActionType.select:
                if step.value is None:
                    raise InvalidArgument(f"Selecting '{step.level}' needs a value")
                resolver.select_at(step.level, step.value)
            else:
                resolver.clear_at(step.level)
    except (InvalidArgument, PreconditionViolation) as e:
        logger.warning(f"Rejected selection on '{cascade}': {e}")
        raise programmer_error(e)

    return SelectionResolveResponse(
        cascade=cascade,
        state=resolver.to_state(),
        complete=resolver.is_complete(),
        errors=resolver.validation_errors(),
    )
