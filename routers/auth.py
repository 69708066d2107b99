# routers/auth.py

from fastapi import APIRouter, Depends

from dependencies.auth import get_current_user, CurrentUser


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# -----------------------------------------------------
# GET /auth/me
# The session's identity, roles and effective permissions.
# The frontend fetches this once per page load.
# -----------------------------------------------------
@router.get("/me", summary="Current user and permission set")
def get_me(current_user: CurrentUser = Depends(get_current_user)):
    return {
        "user": {
            "id": current_user.id,
            "email": current_user.email,
            "name": current_user.name,
        },
        "roles": current_user.roles,
        "permissions": current_user.permissions,
        "is_authenticated": True,
    }
