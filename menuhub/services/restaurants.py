from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session, selectinload

from menuhub.core.errors import MalformedInputError, NotFoundError
from menuhub.models.menu import Menu
from menuhub.models.menu_item import MenuItem
from menuhub.models.restaurant import Restaurant
from menuhub.services import store

RESTAURANT_NOT_FOUND = "Restaurant not found"
MENU_NOT_FOUND = "Menu not found"
MENU_ITEM_NOT_FOUND = "Menu item not found"


# =========================
# RESTAURANTS
# =========================
def create_restaurant(db: Session, *, owner_id: int, name: str, address: str) -> Restaurant:
    restaurant = Restaurant(name=name.strip(), address=address.strip(), user_id=owner_id)
    return store.create(db, restaurant)


def get_restaurant(db: Session, restaurant_id: int) -> Restaurant:
    return store.find(db, Restaurant, restaurant_id, detail=RESTAURANT_NOT_FOUND)


def get_restaurant_with_menus(db: Session, restaurant_id: int) -> Restaurant:
    restaurant = (
        db.query(Restaurant)
        .options(selectinload(Restaurant.menus).selectinload(Menu.items))
        .filter(Restaurant.id == restaurant_id, Restaurant.deleted_at.is_(None))
        .first()
    )
    if restaurant is None:
        raise NotFoundError(RESTAURANT_NOT_FOUND)
    return restaurant


def update_restaurant(db: Session, restaurant_id: int, *, name: str, address: str) -> Restaurant:
    restaurant = get_restaurant(db, restaurant_id)
    restaurant.name = name.strip()
    restaurant.address = address.strip()
    return store.save(db, restaurant)


def delete_restaurant(db: Session, restaurant_id: int) -> None:
    store.delete(db, get_restaurant(db, restaurant_id))


def set_daily_menu(db: Session, restaurant_id: int, menu_id: int) -> Restaurant:
    """Point the restaurant's daily menu at one of its own menus.

    A menu that is missing or belongs to another restaurant is rejected and
    the current daily menu is left untouched.
    """
    restaurant = get_restaurant(db, restaurant_id)
    menu = (
        db.query(Menu)
        .filter(Menu.id == menu_id, Menu.deleted_at.is_(None))
        .first()
    )
    if menu is None or int(menu.restaurant_id) != int(restaurant.id):
        raise MalformedInputError("Menu does not belong to this restaurant")

    restaurant.daily_menu_id = menu.id
    return store.save(db, restaurant)


# =========================
# MENUS
# =========================
def create_menu(db: Session, restaurant_id: int, *, name: str) -> Menu:
    restaurant = get_restaurant(db, restaurant_id)
    return store.create(db, Menu(name=name.strip(), restaurant_id=restaurant.id))


def get_menu(db: Session, menu_id: int) -> Menu:
    return store.find(db, Menu, menu_id, detail=MENU_NOT_FOUND)


def get_menu_with_items(db: Session, menu_id: int) -> Menu:
    menu = (
        db.query(Menu)
        .options(selectinload(Menu.items))
        .filter(Menu.id == menu_id, Menu.deleted_at.is_(None))
        .first()
    )
    if menu is None:
        raise NotFoundError(MENU_NOT_FOUND)
    return menu


def update_menu(db: Session, menu_id: int, *, name: str) -> Menu:
    menu = get_menu(db, menu_id)
    menu.name = name.strip()
    return store.save(db, menu)


def delete_menu(db: Session, menu_id: int) -> None:
    menu = get_menu(db, menu_id)
    # a deleted menu cannot stay the daily menu
    db.query(Restaurant).filter(Restaurant.daily_menu_id == menu.id).update(
        {Restaurant.daily_menu_id: None}, synchronize_session=False
    )
    store.delete(db, menu)


# =========================
# MENU ITEMS
# =========================
def add_menu_item(
    db: Session,
    menu_id: int,
    *,
    name: str,
    price: Decimal,
    description: Optional[str] = None,
) -> MenuItem:
    menu = get_menu(db, menu_id)
    item = MenuItem(
        name=name.strip(),
        description=(description or "").strip(),
        price=price,
        menu_id=menu.id,
    )
    return store.create(db, item)


def get_menu_item(db: Session, item_id: int) -> MenuItem:
    return store.find(db, MenuItem, item_id, detail=MENU_ITEM_NOT_FOUND)


def update_menu_item(
    db: Session,
    item_id: int,
    *,
    name: str,
    price: Decimal,
    description: Optional[str] = None,
) -> MenuItem:
    item = get_menu_item(db, item_id)
    item.name = name.strip()
    item.description = (description or "").strip()
    item.price = price
    return store.save(db, item)


def delete_menu_item(db: Session, item_id: int) -> None:
    store.delete(db, get_menu_item(db, item_id))
