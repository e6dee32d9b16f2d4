"""
Franchise and store Pydantic schemas.
"""
from typing import List, Optional

from pydantic import Field

from pizza_service.schemas.base import CamelModel


class FranchiseAdmin(CamelModel):
    id: int
    name: str
    email: str


class AdminRef(CamelModel):
    """Identifies a franchise admin by email when creating a franchise."""
    email: str


class StoreSummary(CamelModel):
    """Store as listed under a franchise; revenue is only filled in for admins."""
    id: int
    name: str
    total_revenue: Optional[float] = None


class StoreResponse(CamelModel):
    id: int
    franchise_id: int
    name: str


class StoreCreate(CamelModel):
    name: str = Field(min_length=1)


class FranchiseResponse(CamelModel):
    """
    A franchise. `admins` and store revenue are only present in the
    detailed view given to admins and the franchise's own franchisees.
    """
    id: int
    name: str
    admins: Optional[List[FranchiseAdmin]] = None
    stores: List[StoreSummary] = []


class FranchiseCreate(CamelModel):
    name: str = Field(min_length=1)
    admins: List[AdminRef] = []


class FranchiseCreated(CamelModel):
    id: int
    name: str
    admins: List[FranchiseAdmin] = []


class FranchiseListResponse(CamelModel):
    franchises: List[FranchiseResponse]
    more: bool
