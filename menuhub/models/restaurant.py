from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from menuhub.core.database import Base


class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    # owner is fixed at creation; there is no transfer operation
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    daily_menu_id = Column(Integer, ForeignKey("menus.id", use_alter=True, name="fk_restaurants_daily_menu"), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    deleted_at = Column(DateTime, nullable=True, index=True)

    menus = relationship(
        "Menu",
        primaryjoin="and_(Menu.restaurant_id == Restaurant.id, Menu.deleted_at.is_(None))",
        foreign_keys="Menu.restaurant_id",
        order_by="Menu.id",
        viewonly=True,
    )
