# app/routers/users.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import get_current_user_id
from app.database import get_session
from app.repositories.business_repo import BusinessRepository
from app.repositories.user_repo import UserRepository
from app.schemas.user import RoleAssign, RoleAssigned, RoleRead
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

repo = UserRepository()
service = UserService(repo, BusinessRepository())


@router.get("/role", response_model=RoleRead)
def read_role(
    session: Session = Depends(get_session),
    clerk_id: str = Depends(get_current_user_id),
):
    """
    Return the caller's application role.

    Auth:
      - Requires a valid Clerk session or bearer token.
      - A signed-in user without a role yet gets role=null, not 404.
    """
    return service.get_role(session, clerk_id)


@router.post("/role", response_model=RoleAssigned)
def assign_role(
    payload: RoleAssign,
    session: Session = Depends(get_session),
    clerk_id: str = Depends(get_current_user_id),
):
    """
    One-time role choice after sign-up ("business" or "user").

    A second call is refused with 403, whatever the requested role.
    """
    user = service.assign_role(session, clerk_id, payload)
    return {"success": True, "role": user.role, "userId": user.id}
