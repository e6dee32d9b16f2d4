"""
SQLAlchemy models for the pizza service.
"""
# Users & sessions
from pizza_service.models.user import Role, User, UserRole
from pizza_service.models.auth_token import AuthToken

# Franchises
from pizza_service.models.franchise import Franchise, Store

# Menu & orders
from pizza_service.models.menu import MenuItem
from pizza_service.models.order import DinerOrder, OrderItem


__all__ = [
    # Users
    "Role",
    "User",
    "UserRole",
    "AuthToken",
    # Franchises
    "Franchise",
    "Store",
    # Menu & orders
    "MenuItem",
    "DinerOrder",
    "OrderItem",
]
