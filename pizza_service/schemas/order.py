"""
Menu and order Pydantic schemas for API request/response models.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from pizza_service.schemas.base import CamelModel


class MenuItemResponse(CamelModel):
    """Response model for a single menu item."""
    id: int
    title: str
    description: Optional[str] = None
    image: Optional[str] = None
    price: float


class MenuItemCreate(CamelModel):
    """Request model for adding a pizza to the menu."""
    title: str = Field(min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    price: float = Field(ge=0)


class OrderItemCreate(CamelModel):
    menu_id: int
    description: str
    price: float = Field(ge=0)


class OrderItemResponse(CamelModel):
    id: int
    menu_id: int
    description: str
    price: float


class OrderCreate(CamelModel):
    """Request model for placing an order."""
    franchise_id: int
    store_id: int
    items: List[OrderItemCreate] = Field(min_length=1)


class OrderResponse(CamelModel):
    id: int
    franchise_id: int
    store_id: int
    date: datetime
    items: List[OrderItemResponse]


class OrderHistoryResponse(CamelModel):
    """A page of a diner's orders."""
    diner_id: int
    orders: List[OrderResponse]
    page: int


class OrderPlacedResponse(CamelModel):
    """Order as persisted plus the factory's confirmation token."""
    order: OrderResponse
    jwt: str
    follow_link_to_end_chaos: Optional[str] = None
