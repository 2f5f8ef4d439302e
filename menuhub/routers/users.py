from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from menuhub.core.database import get_db
from menuhub.deps import require_admin
from menuhub.schemas.auth import MessageResponse
from menuhub.schemas.user import RoleAssignment, UserRead, UserUpdate
from menuhub.services import accounts
from menuhub.services.authentication import IdentityContext

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=List[UserRead])
def list_users(
    _: IdentityContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return accounts.list_users(db)


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: int,
    _: IdentityContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return accounts.get_user(db, user_id)


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    payload: UserUpdate,
    _: IdentityContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return accounts.update_user(
        db,
        user_id,
        phone_number=payload.phone_number,
        email=payload.email,
        password=payload.password,
    )


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    _: IdentityContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    accounts.delete_user(db, user_id)
    return {"message": "User deleted successfully"}


@router.put("/{user_id}/role", response_model=UserRead)
def assign_role(
    user_id: int,
    payload: RoleAssignment,
    _: IdentityContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return accounts.assign_role(db, user_id, payload.role)
