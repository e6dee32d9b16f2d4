"""
Role-based authorization checks.

`authorize()` answers whether a caller may perform an action on a target
(a franchise id for store and franchise actions, a user id for user
actions). `require()` turns a denial into a `Forbidden` error.
"""
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any, Optional

from pizza_service.core.exceptions import Forbidden
from pizza_service.models.user import Role

logger = logging.getLogger(__name__)


class Action(str, Enum):
    ADD_MENU_ITEM = "add_menu_item"
    CREATE_FRANCHISE = "create_franchise"
    DELETE_FRANCHISE = "delete_franchise"
    CREATE_STORE = "create_store"
    DELETE_STORE = "delete_store"
    UPDATE_USER = "update_user"
    LIST_USERS = "list_users"
    DELETE_USER = "delete_user"
    VIEW_USER_FRANCHISES = "view_user_franchises"


DENIAL_MESSAGES = {
    Action.ADD_MENU_ITEM: "unable to add menu item",
    Action.CREATE_FRANCHISE: "unable to create a franchise",
    Action.DELETE_FRANCHISE: "unable to delete a franchise",
    Action.CREATE_STORE: "unable to create a store",
    Action.DELETE_STORE: "unable to delete a store",
    Action.UPDATE_USER: "unauthorized",
    Action.LIST_USERS: "unauthorized",
    Action.DELETE_USER: "unauthorized",
    Action.VIEW_USER_FRANCHISES: "unauthorized",
}

ADMIN_ONLY = {
    Action.ADD_MENU_ITEM,
    Action.CREATE_FRANCHISE,
    Action.DELETE_FRANCHISE,
    Action.LIST_USERS,
    Action.DELETE_USER,
}
FRANCHISE_SCOPED = {Action.CREATE_STORE, Action.DELETE_STORE}
SELF_SERVICE = {Action.UPDATE_USER, Action.VIEW_USER_FRANCHISES}


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.allowed


def has_role(caller: Any, role: Role, object_id: Optional[int] = None) -> bool:
    """True if the caller holds `role`, scoped to `object_id` when one is given."""
    for assignment in getattr(caller, "roles", None) or []:
        if assignment.role != role.value:
            continue
        if object_id is None or assignment.object_id == object_id:
            return True
    return False


def authorize(caller: Any, action: Action, target: Optional[int] = None) -> Decision:
    """
    Decide whether `caller` may perform `action` on `target`.

    Args:
        caller: Authenticated user (anything with `id` and `roles`)
        action: What the caller is attempting
        target: Franchise id for franchise-scoped actions, user id for
            self-service actions, unused otherwise

    Returns:
        Decision, truthy when allowed
    """
    if caller is None:
        return Decision(False, "not authenticated")

    if has_role(caller, Role.ADMIN):
        return Decision(True, "admin")

    if action in ADMIN_ONLY:
        return Decision(False, "admin role required")

    if action in FRANCHISE_SCOPED:
        if target is not None and has_role(caller, Role.FRANCHISEE, object_id=target):
            return Decision(True, "franchisee")
        return Decision(False, "not a franchisee of this franchise")

    if action in SELF_SERVICE:
        if target is not None and caller.id == target:
            return Decision(True, "owner")
        return Decision(False, "not the owner")

    return Decision(False, "unknown action")


def require(caller: Any, action: Action, target: Optional[int] = None) -> None:
    """Raise `Forbidden` unless `caller` may perform `action` on `target`."""
    decision = authorize(caller, action, target)
    if not decision:
        logger.warning(
            "Access denied (%s): user_id=%s action=%s target=%s",
            decision.reason,
            getattr(caller, "id", None),
            action.value,
            target,
        )
        raise Forbidden(DENIAL_MESSAGES[action])
