from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RestaurantPayload(BaseModel):
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)


class MenuPayload(BaseModel):
    name: str = Field(..., min_length=1)


class MenuItemPayload(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = ""
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class DailyMenuPayload(BaseModel):
    menu_id: int = Field(..., ge=1)


class MenuItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    menu_id: int
    name: str
    description: str
    price: float
    created_at: datetime
    updated_at: datetime


class MenuRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    restaurant_id: int
    name: str
    created_at: datetime
    updated_at: datetime


class MenuDetail(MenuRead):
    items: List[MenuItemRead] = []


class RestaurantRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    address: str
    daily_menu_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class RestaurantDetail(RestaurantRead):
    menus: List[MenuDetail] = []
