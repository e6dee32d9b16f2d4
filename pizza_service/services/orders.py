"""
Data access for the menu and diner orders, plus order fulfillment.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from pizza_service.core.exceptions import NotFound, UpstreamFailure
from pizza_service.models.franchise import Store
from pizza_service.models.menu import MenuItem
from pizza_service.models.order import DinerOrder, OrderItem
from pizza_service.models.user import User
from pizza_service.schemas.order import OrderCreate, OrderResponse
from pizza_service.services.factory import FactoryClient, FactoryError
from pizza_service.services.paging import get_offset

logger = logging.getLogger(__name__)


class OrderService:
    """
    Menu management and order placement.
    """

    def __init__(self, db: Session, factory: Optional[FactoryClient] = None, page_size: int = 10):
        self.db = db
        self.factory = factory
        self.page_size = page_size

    def get_menu(self) -> List[MenuItem]:
        return self.db.query(MenuItem).order_by(MenuItem.id.asc()).all()

    def add_menu_item(
        self,
        title: str,
        price: float,
        description: Optional[str] = None,
        image: Optional[str] = None,
    ) -> MenuItem:
        item = MenuItem(title=title, description=description, image=image, price=price)
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item

    def get_orders(self, diner: User, page: int = 1) -> Dict[str, Any]:
        """One page (1-based) of a diner's orders, oldest first, with their items."""
        orders = (
            self.db.query(DinerOrder)
            .filter(DinerOrder.diner_id == diner.id)
            .order_by(DinerOrder.id.asc())
            .offset(get_offset(page, self.page_size))
            .limit(self.page_size)
            .all()
        )
        return {"diner_id": diner.id, "orders": orders, "page": page}

    def add_diner_order(self, diner: User, order_data: OrderCreate) -> DinerOrder:
        """
        Persist an order after checking the store and every menu item exist.
        """
        store = self.db.get(Store, order_data.store_id)
        if store is None or store.franchise_id != order_data.franchise_id:
            raise NotFound("unknown store")

        menu_ids = {item.menu_id for item in order_data.items}
        known = {
            row.id
            for row in self.db.query(MenuItem.id).filter(MenuItem.id.in_(menu_ids))
        }
        missing = sorted(menu_ids - known)
        if missing:
            raise NotFound(f"unknown menu item {missing[0]}")

        order = DinerOrder(
            diner_id=diner.id,
            franchise_id=order_data.franchise_id,
            store_id=order_data.store_id,
        )
        for item in order_data.items:
            order.items.append(
                OrderItem(menu_id=item.menu_id, description=item.description, price=item.price)
            )

        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def place_order(self, diner: User, order_data: OrderCreate) -> Dict[str, Any]:
        """
        Persist an order and hand it to the pizza factory.

        The order stays recorded even when the factory rejects it; the
        failure is surfaced as UpstreamFailure carrying the factory's message.
        """
        order = self.add_diner_order(diner, order_data)
        order_json = OrderResponse.model_validate(order).model_dump(by_alias=True, mode="json")
        diner_json = {"id": diner.id, "name": diner.name, "email": diner.email}

        if self.factory is None:
            raise UpstreamFailure("Failed to fulfill order at factory", {"factoryMessage": "no factory configured"})

        try:
            confirmation = self.factory.create_order(diner_json, order_json)
        except FactoryError as exc:
            logger.warning("Order %s persisted but not fulfilled: %s", order.id, exc.message)
            raise UpstreamFailure(
                "Failed to fulfill order at factory",
                {"factoryMessage": exc.message, "followLinkToEndChaos": exc.report_url},
            ) from exc

        logger.info("Order %s fulfilled for diner %s", order.id, diner.id)
        return {
            "order": order,
            "jwt": confirmation.jwt,
            "follow_link_to_end_chaos": confirmation.report_url,
        }
