# bazaar/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bazaar.api.deps import get_current_user_id, http_error
from bazaar.data.database import get_db
from bazaar.domain.errors import ShopError
from bazaar.domain.schemas import OrderOut
from bazaar.services.order_service import OrderService

router = APIRouter(tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("/order", response_model=OrderOut, status_code=201)
def create_order(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Sklada zamowienie z koszyka zalogowanego uzytkownika i czysci koszyk.
    Wysyla powiadomienie asynchronicznie.
    """
    svc = get_service(db)
    try:
        return svc.checkout(user_id)
    except ShopError as e:
        raise http_error(e)


@router.get("/orders", response_model=List[OrderOut])
def list_orders(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return get_service(db).list_orders(user_id)


@router.get("/orders/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.get_order(order_id, user_id)
    except ShopError as e:
        raise http_error(e)
