from fastapi import APIRouter, Depends

from evalsys.core.security import get_current_user
from evalsys.models.user import User

router = APIRouter(tags=["auth"])


@router.get("/me")
def me(current_user: User = Depends(get_current_user)):
    """Get current user information"""
    return {
        "id": str(current_user.id),
        "email": current_user.email,
        "full_name": current_user.full_name,
        "is_admin": current_user.is_admin,
        "is_active": current_user.is_active,
    }
