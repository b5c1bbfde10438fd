from fastapi import APIRouter, Depends

from ..auth import get_current_user
from ..models import User
from ..permissions import get_permissions

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("/permission")
async def get_my_permissions(current_user: User = Depends(get_current_user)):
    """Role and permission map of the caller, used by the console to hide actions"""
    return {
        "user_id": current_user.id,
        "role": current_user.role,
        "permissions": get_permissions(current_user.role),
    }
