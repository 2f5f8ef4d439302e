from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from menuhub.core.database import get_db
from menuhub.deps import get_current_identity, require_ownership
from menuhub.schemas.auth import MessageResponse
from menuhub.schemas.restaurant import MenuDetail, MenuItemPayload, MenuItemRead, MenuPayload, MenuRead
from menuhub.services import restaurants as restaurant_service
from menuhub.services.authentication import IdentityContext
from menuhub.services.ownership import ResourceKind

router = APIRouter(prefix="/api/v1/menus", tags=["menus"])

owns_menu = require_ownership(ResourceKind.MENU, "menu_id")


@router.get("/{menu_id}", response_model=MenuDetail)
def get_menu(
    menu_id: int,
    _: IdentityContext = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return restaurant_service.get_menu_with_items(db, menu_id)


@router.put("/{menu_id}", response_model=MenuRead)
def update_menu(
    menu_id: int,
    payload: MenuPayload,
    _: IdentityContext = Depends(owns_menu),
    db: Session = Depends(get_db),
):
    return restaurant_service.update_menu(db, menu_id, name=payload.name)


@router.delete("/{menu_id}", response_model=MessageResponse)
def delete_menu(
    menu_id: int,
    _: IdentityContext = Depends(owns_menu),
    db: Session = Depends(get_db),
):
    restaurant_service.delete_menu(db, menu_id)
    return {"message": "Menu deleted successfully"}


@router.post("/{menu_id}/items", response_model=MenuItemRead, status_code=status.HTTP_201_CREATED)
def add_menu_item(
    menu_id: int,
    payload: MenuItemPayload,
    _: IdentityContext = Depends(owns_menu),
    db: Session = Depends(get_db),
):
    return restaurant_service.add_menu_item(
        db,
        menu_id,
        name=payload.name,
        description=payload.description,
        price=payload.price,
    )
