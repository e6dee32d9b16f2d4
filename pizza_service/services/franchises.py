"""
Data access for franchises and their stores.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pizza_service.core.exceptions import BadRequest, NotFound
from pizza_service.core.permissions import has_role
from pizza_service.models.franchise import Franchise, Store
from pizza_service.models.order import DinerOrder, OrderItem
from pizza_service.models.user import Role, User, UserRole
from pizza_service.services.paging import LIKE_ESCAPE, fetch_page, like_pattern

logger = logging.getLogger(__name__)


class FranchiseService:
    """
    Franchise and store management.

    Results are returned as plain dicts keyed in snake_case, ready for the
    response schemas.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_franchise(self, franchise_id: int) -> Franchise:
        franchise = self.db.get(Franchise, franchise_id)
        if franchise is None:
            raise NotFound("unknown franchise")
        return franchise

    def list_franchises(
        self,
        caller: Optional[Any] = None,
        page: int = 0,
        limit: int = 10,
        name_filter: str = "*",
    ) -> Tuple[List[Dict[str, Any]], bool]:
        """
        List franchises by name.

        Admins see admins and store revenue for every franchise; everyone
        else sees only the store names.
        """
        query = (
            self.db.query(Franchise)
            .filter(Franchise.name.like(like_pattern(name_filter), escape=LIKE_ESCAPE))
            .order_by(Franchise.id.asc())
        )
        franchises, more = fetch_page(query, page, limit)

        if caller is not None and has_role(caller, Role.ADMIN):
            return [self.get_franchise_detail(f) for f in franchises], more

        return [
            {
                "id": f.id,
                "name": f.name,
                "stores": [{"id": s.id, "name": s.name} for s in f.stores],
            }
            for f in franchises
        ], more

    def get_user_franchises(self, user_id: int) -> List[Dict[str, Any]]:
        """Full detail of every franchise the user is a franchisee of."""
        franchise_ids = [
            row.object_id
            for row in self.db.query(UserRole.object_id).filter(
                UserRole.user_id == user_id,
                UserRole.role == Role.FRANCHISEE.value,
                UserRole.object_id.is_not(None),
            )
        ]
        if not franchise_ids:
            return []

        franchises = (
            self.db.query(Franchise)
            .filter(Franchise.id.in_(franchise_ids))
            .order_by(Franchise.id.asc())
            .all()
        )
        return [self.get_franchise_detail(f) for f in franchises]

    def get_franchise_detail(self, franchise: Franchise) -> Dict[str, Any]:
        """Franchise with its admins and the revenue of each store."""
        admins = (
            self.db.query(User)
            .join(UserRole, UserRole.user_id == User.id)
            .filter(
                UserRole.role == Role.FRANCHISEE.value,
                UserRole.object_id == franchise.id,
            )
            .order_by(User.id.asc())
            .all()
        )

        revenue_rows = (
            self.db.query(DinerOrder.store_id, func.coalesce(func.sum(OrderItem.price), 0))
            .join(OrderItem, OrderItem.order_id == DinerOrder.id)
            .filter(DinerOrder.franchise_id == franchise.id)
            .group_by(DinerOrder.store_id)
            .all()
        )
        revenue = {store_id: float(total) for store_id, total in revenue_rows}

        return {
            "id": franchise.id,
            "name": franchise.name,
            "admins": [{"id": u.id, "name": u.name, "email": u.email} for u in admins],
            "stores": [
                {"id": s.id, "name": s.name, "total_revenue": revenue.get(s.id, 0.0)}
                for s in franchise.stores
            ],
        }

    def create_franchise(self, name: str, admin_emails: List[str]) -> Dict[str, Any]:
        """
        Create a franchise and make each listed user one of its franchisees.

        Every admin email must belong to an existing user.
        """
        admins = []
        for email in admin_emails:
            user = self.db.query(User).filter(User.email == email).order_by(User.id.asc()).first()
            if user is None:
                raise NotFound(f"unknown user for franchise admin {email} provided")
            admins.append(user)

        franchise = Franchise(name=name)
        self.db.add(franchise)
        try:
            self.db.flush()
            for user in admins:
                self.db.add(UserRole(user_id=user.id, role=Role.FRANCHISEE.value, object_id=franchise.id))
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise BadRequest(f"franchise {name} already exists")

        self.db.refresh(franchise)
        logger.info("Created franchise %s with %d admin(s)", franchise.id, len(admins))
        return {
            "id": franchise.id,
            "name": franchise.name,
            "admins": [{"id": u.id, "name": u.name, "email": u.email} for u in admins],
        }

    def delete_franchise(self, franchise_id: int) -> None:
        """
        Delete a franchise, its stores and the franchisee roles pointing at it.

        Runs as a single transaction. Users left without any role become diners.
        """
        franchise = self.get_franchise(franchise_id)
        try:
            roles = (
                self.db.query(UserRole)
                .filter(
                    UserRole.role == Role.FRANCHISEE.value,
                    UserRole.object_id == franchise_id,
                )
                .all()
            )
            affected_users = {role.user_id for role in roles}
            for role in roles:
                self.db.delete(role)
            self.db.flush()

            for user_id in affected_users:
                remaining = self.db.query(UserRole).filter(UserRole.user_id == user_id).count()
                if remaining == 0:
                    self.db.add(UserRole(user_id=user_id, role=Role.DINER.value))

            # stores go with the franchise through the relationship cascade
            self.db.delete(franchise)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Deleted franchise %s", franchise_id)

    def create_store(self, franchise_id: int, name: str) -> Dict[str, Any]:
        self.get_franchise(franchise_id)

        store = Store(franchise_id=franchise_id, name=name)
        self.db.add(store)
        self.db.commit()
        self.db.refresh(store)
        logger.info("Created store %s in franchise %s", store.id, franchise_id)
        return {"id": store.id, "franchise_id": store.franchise_id, "name": store.name}

    def delete_store(self, franchise_id: int, store_id: int) -> None:
        deleted = (
            self.db.query(Store)
            .filter(Store.franchise_id == franchise_id, Store.id == store_id)
            .delete(synchronize_session=False)
        )
        if not deleted:
            self.db.rollback()
            raise NotFound("unknown store")

        self.db.commit()
        logger.info("Deleted store %s from franchise %s", store_id, franchise_id)
