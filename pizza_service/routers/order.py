"""
Order router: the menu and a diner's orders.
"""
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pizza_service.core.config import get_settings
from pizza_service.core.deps import get_current_user
from pizza_service.core.permissions import Action, require
from pizza_service.db.session import get_db
from pizza_service.models.menu import MenuItem
from pizza_service.models.user import User
from pizza_service.schemas.order import (
    MenuItemCreate,
    MenuItemResponse,
    OrderCreate,
    OrderHistoryResponse,
    OrderPlacedResponse,
)
from pizza_service.services.factory import FactoryClient, get_factory_client
from pizza_service.services.orders import OrderService

router = APIRouter(prefix="/order", tags=["order"])
settings = get_settings()


@router.get("/menu", response_model=List[MenuItemResponse])
def get_menu(db: Session = Depends(get_db)) -> List[MenuItem]:
    """The pizza menu. No authentication required."""
    return OrderService(db).get_menu()


@router.put("/menu", response_model=List[MenuItemResponse])
def add_menu_item(
    item_data: MenuItemCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> List[MenuItem]:
    """
    Add a pizza to the menu and return the updated menu. Admin only.
    """
    require(current_user, Action.ADD_MENU_ITEM)

    service = OrderService(db)
    service.add_menu_item(
        title=item_data.title,
        price=item_data.price,
        description=item_data.description,
        image=item_data.image,
    )
    return service.get_menu()


@router.get("", response_model=OrderHistoryResponse)
def get_orders(
    page: int = Query(1, ge=1, description="1-based page number"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    """The caller's orders."""
    return OrderService(db, page_size=settings.PAGE_SIZE).get_orders(current_user, page)


@router.post("", response_model=OrderPlacedResponse)
def create_order(
    order_data: OrderCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    factory: FactoryClient = Depends(get_factory_client),
) -> dict:
    """
    Place an order and send it to the pizza factory.

    The order is recorded before the factory is called. If the factory
    rejects it the response is a 500 with the factory's message.
    """
    return OrderService(db, factory=factory).place_order(current_user, order_data)
