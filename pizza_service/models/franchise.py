"""
Franchises and the stores they operate.
"""
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from pizza_service.db.base import Base


class Franchise(Base):
    __tablename__ = "franchise"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)

    stores = relationship(
        "Store",
        back_populates="franchise",
        cascade="all, delete-orphan",
        order_by="Store.id",
    )


class Store(Base):
    __tablename__ = "store"

    id = Column(Integer, primary_key=True, autoincrement=True)
    franchise_id = Column(Integer, ForeignKey("franchise.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)

    franchise = relationship("Franchise", back_populates="stores")
