"""
Pizzas offered on the menu.
"""
from sqlalchemy import Column, Integer, String, Float

from pizza_service.db.base import Base


class MenuItem(Base):
    """A pizza that diners can order."""
    __tablename__ = "menu"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(String(1024), nullable=True)
    image = Column(String(1024), nullable=True)
    price = Column(Float, nullable=False)
