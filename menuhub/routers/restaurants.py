from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from menuhub.core.database import get_db
from menuhub.deps import get_current_identity, require_ownership
from menuhub.schemas.auth import MessageResponse
from menuhub.schemas.restaurant import (
    DailyMenuPayload,
    MenuPayload,
    MenuRead,
    RestaurantDetail,
    RestaurantPayload,
    RestaurantRead,
)
from menuhub.services import restaurants as restaurant_service
from menuhub.services.authentication import IdentityContext
from menuhub.services.ownership import ResourceKind

router = APIRouter(prefix="/api/v1/restaurants", tags=["restaurants"])

owns_restaurant = require_ownership(ResourceKind.RESTAURANT, "restaurant_id")


@router.post("", response_model=RestaurantRead, status_code=status.HTTP_201_CREATED)
def create_restaurant(
    payload: RestaurantPayload,
    identity: IdentityContext = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return restaurant_service.create_restaurant(
        db,
        owner_id=identity.user_id,
        name=payload.name,
        address=payload.address,
    )


@router.get("/{restaurant_id}", response_model=RestaurantDetail)
def get_restaurant(
    restaurant_id: int,
    _: IdentityContext = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return restaurant_service.get_restaurant_with_menus(db, restaurant_id)


@router.put("/{restaurant_id}", response_model=RestaurantRead)
def update_restaurant(
    restaurant_id: int,
    payload: RestaurantPayload,
    _: IdentityContext = Depends(owns_restaurant),
    db: Session = Depends(get_db),
):
    return restaurant_service.update_restaurant(
        db,
        restaurant_id,
        name=payload.name,
        address=payload.address,
    )


@router.delete("/{restaurant_id}", response_model=MessageResponse)
def delete_restaurant(
    restaurant_id: int,
    _: IdentityContext = Depends(owns_restaurant),
    db: Session = Depends(get_db),
):
    restaurant_service.delete_restaurant(db, restaurant_id)
    return {"message": "Restaurant deleted successfully"}


@router.put("/{restaurant_id}/daily-menu", response_model=MessageResponse)
def set_daily_menu(
    restaurant_id: int,
    payload: DailyMenuPayload,
    _: IdentityContext = Depends(owns_restaurant),
    db: Session = Depends(get_db),
):
    restaurant_service.set_daily_menu(db, restaurant_id, payload.menu_id)
    return {"message": "Daily menu set successfully"}


@router.post("/{restaurant_id}/menus", response_model=MenuRead, status_code=status.HTTP_201_CREATED)
def create_menu(
    restaurant_id: int,
    payload: MenuPayload,
    _: IdentityContext = Depends(owns_restaurant),
    db: Session = Depends(get_db),
):
    return restaurant_service.create_menu(db, restaurant_id, name=payload.name)
