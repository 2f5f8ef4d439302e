from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from menuhub.core.database import get_db
from menuhub.deps import require_ownership
from menuhub.schemas.auth import MessageResponse
from menuhub.schemas.restaurant import MenuItemPayload, MenuItemRead
from menuhub.services import restaurants as restaurant_service
from menuhub.services.authentication import IdentityContext
from menuhub.services.ownership import ResourceKind

router = APIRouter(prefix="/api/v1/menu-items", tags=["menu-items"])

owns_menu_item = require_ownership(ResourceKind.MENU_ITEM, "item_id")


@router.put("/{item_id}", response_model=MenuItemRead)
def update_menu_item(
    item_id: int,
    payload: MenuItemPayload,
    _: IdentityContext = Depends(owns_menu_item),
    db: Session = Depends(get_db),
):
    return restaurant_service.update_menu_item(
        db,
        item_id,
        name=payload.name,
        description=payload.description,
        price=payload.price,
    )


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_menu_item(
    item_id: int,
    _: IdentityContext = Depends(owns_menu_item),
    db: Session = Depends(get_db),
):
    restaurant_service.delete_menu_item(db, item_id)
    return {"message": "Menu item deleted successfully"}
