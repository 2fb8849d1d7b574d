#bazaar/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bazaar.api.deps import get_current_user_id, http_error
from bazaar.data.database import get_db
from bazaar.domain.errors import ShopError
from bazaar.domain.schemas import ItemIn, CartOut
from bazaar.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db=db)


@router.get("", response_model=CartOut)
def get_cart(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.get_cart(user_id)
    except ShopError as e:
        raise http_error(e)


@router.post("/{product_id}", response_model=CartOut)
def add_item(
    product_id: int,
    payload: ItemIn,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_product(user_id=user_id, product_id=product_id, quantity=payload.quantity)
    except ShopError as e:
        raise http_error(e)


@router.delete("/{product_id}", response_model=CartOut)
def remove_item(
    product_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.remove_product(user_id, product_id)
    except ShopError as e:
        raise http_error(e)


@router.put("/{product_id}", response_model=CartOut)
def decrement_item(
    product_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.decrement_product(user_id, product_id)
    except ShopError as e:
        raise http_error(e)
