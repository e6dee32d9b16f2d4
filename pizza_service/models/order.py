"""
Diner orders and their line items.
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from pizza_service.db.base import Base


class DinerOrder(Base):
    """
    An order placed by a diner at a store.

    Franchise and store ids are kept as plain columns so order history survives
    the deletion of the store or franchise it was placed at.
    """
    __tablename__ = "diner_order"

    id = Column(Integer, primary_key=True, autoincrement=True)
    diner_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    franchise_id = Column(Integer, nullable=False, index=True)
    store_id = Column(Integer, nullable=False, index=True)
    date = Column(DateTime, server_default=func.now(), nullable=False)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )


class OrderItem(Base):
    __tablename__ = "order_item"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("diner_order.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_id = Column(Integer, ForeignKey("menu.id"), nullable=False)
    description = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)

    order = relationship("DinerOrder", back_populates="items")
