"""
Franchise router: listing, creation and deletion of franchises and stores.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pizza_service.core.deps import get_current_user, get_optional_user
from pizza_service.core.permissions import Action, authorize, require
from pizza_service.db.session import get_db
from pizza_service.models.user import User
from pizza_service.schemas.base import MessageResponse
from pizza_service.schemas.franchise import (
    FranchiseCreate,
    FranchiseCreated,
    FranchiseListResponse,
    FranchiseResponse,
    StoreCreate,
    StoreResponse,
)
from pizza_service.services.franchises import FranchiseService

router = APIRouter(prefix="/franchise", tags=["franchise"])


@router.get("", response_model=FranchiseListResponse, response_model_exclude_none=True)
def list_franchises(
    page: int = Query(0, ge=0, description="0-based page number"),
    limit: int = Query(10, ge=1, le=100),
    name: str = Query("*", description="Name filter, * matches anything"),
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
) -> FranchiseListResponse:
    """
    List franchises.

    Anonymous callers and diners see store names only; admins also get each
    franchise's admins and store revenue.
    """
    franchises, more = FranchiseService(db).list_franchises(
        current_user, page=page, limit=limit, name_filter=name
    )
    return FranchiseListResponse(franchises=franchises, more=more)


@router.get("/{user_id}", response_model=List[FranchiseResponse])
def list_user_franchises(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> List[dict]:
    """
    Franchises the given user administers.

    Callers asking about someone else without being an admin get an empty list.
    """
    if not authorize(current_user, Action.VIEW_USER_FRANCHISES, target=user_id):
        return []
    return FranchiseService(db).get_user_franchises(user_id)


@router.post("", response_model=FranchiseCreated)
def create_franchise(
    franchise_data: FranchiseCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    """
    Create a franchise. Admin only.
    """
    require(current_user, Action.CREATE_FRANCHISE)

    return FranchiseService(db).create_franchise(
        franchise_data.name,
        [admin.email for admin in franchise_data.admins],
    )


@router.delete("/{franchise_id}", response_model=MessageResponse)
def delete_franchise(
    franchise_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """
    Delete a franchise together with its stores. Admin only.
    """
    require(current_user, Action.DELETE_FRANCHISE, target=franchise_id)

    FranchiseService(db).delete_franchise(franchise_id)
    return MessageResponse(message="franchise deleted")


@router.post("/{franchise_id}/store", response_model=StoreResponse)
def create_store(
    franchise_id: int,
    store_data: StoreCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    """
    Open a store. Allowed for admins and the franchise's own franchisees.
    """
    require(current_user, Action.CREATE_STORE, target=franchise_id)

    return FranchiseService(db).create_store(franchise_id, store_data.name)


@router.delete("/{franchise_id}/store/{store_id}", response_model=MessageResponse)
def delete_store(
    franchise_id: int,
    store_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """
    Close a store. Allowed for admins and the franchise's own franchisees.
    """
    require(current_user, Action.DELETE_STORE, target=franchise_id)

    FranchiseService(db).delete_store(franchise_id, store_id)
    return MessageResponse(message="store deleted")
