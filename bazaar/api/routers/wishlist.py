from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bazaar.api.deps import get_current_user_id, http_error
from bazaar.data.database import get_db
from bazaar.domain.errors import ShopError
from bazaar.domain.schemas import MessageOut, ProductOut
from bazaar.services.wishlist_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@router.get("", response_model=List[ProductOut])
def get_wishlist(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return WishlistService(db).list(user_id)


@router.post("/{product_id}", response_model=MessageOut)
def add_to_wishlist(
    product_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        WishlistService(db).add(user_id, product_id)
    except ShopError as e:
        raise http_error(e)
    return {"message": "Product added to wishlist"}


@router.delete("/{product_id}", response_model=MessageOut)
def remove_from_wishlist(
    product_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    WishlistService(db).remove(user_id, product_id)
    return {"message": "Product removed from wishlist"}
