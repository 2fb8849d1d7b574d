# bazaar/services/order_service.py
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bazaar.data.models.order import OrderModel
from bazaar.domain.errors import ConcurrencyConflict, EmptyCart, NotFound, StoreUnavailable
from bazaar.repos.cart_repo import CartRepo
from bazaar.repos.order_repo import OrderRepo
from bazaar.repos.product_repo import ProductRepo
from bazaar.services.notification_service import NotificationService
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Zamowienie to niezmienna kopia koszyka z chwili checkoutu.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.products = ProductRepo(db)
        self.notification_service = notification_service or NotificationService()

    def checkout(self, user_id: int) -> Dict[str, Any]:
        """
        Use Case: zlozenie zamowienia z koszyka.

        1. Koszyk musi istniec i miec co najmniej jedna linie
        2. Total liczony z AKTUALNYCH cen produktow
        3. Zapis zamowienia (kopia linii + ceny jednostkowe) i czyszczenie koszyka
           w jednej transakcji, z warunkiem na wersje koszyka (sam koszyk zostaje)
        4. Powiadomienie dopiero po commicie

        Stan magazynu nie jest tu ruszany, zostal zdjety przy dodawaniu do koszyka.
        """
        cart = self.carts.get_cart_by_user(user_id)
        items = self.carts.get_cart_items(cart.id) if cart else []

        if not items:
            raise EmptyCart("Koszyk jest pusty")

        cart_id, cart_version = cart.id, cart.version
        lines = [(i.product_id, i.quantity) for i in items]

        products = self.products.get_products(pid for pid, _ in lines)
        missing = [pid for pid, _ in lines if pid not in products]
        if missing:
            raise NotFound(f"Produkty {missing} nie istnieja")

        # TODO: cena z chwili checkoutu, nie z chwili dodania do koszyka - do potwierdzenia z biznesem
        snapshot = [(pid, qty, products[pid].price) for pid, qty in lines]
        total = sum((price * qty for _, qty, price in snapshot), Decimal("0.00"))

        try:
            # UPDATE carts SET version = v + 1 WHERE id = :id AND version = :v
            rowcount = self.carts.update_cart_version(cart_id=cart_id, old_version=cart_version)
            if rowcount == 0:
                self.repo.rollback()
                raise ConcurrencyConflict(
                    "Konflikt wspolbieznosci - koszyk zostal zmodyfikowany przez inna operacje"
                )
            order = self.repo.add_order(OrderModel(user_id=user_id, total=total), snapshot)
            self.carts.clear_cart_items(cart_id)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            raise StoreUnavailable("Nie udalo sie zapisac zamowienia") from e

        logger.info(f"Order {order.id} created from cart {cart_id}, total {total}, koszyk wyczyszczony")

        self.notification_service.send_order_notification(user_id, order.id)

        return self._to_dict(order)

    def get_order(self, order_id: int, user_id: int) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)

        #cudze zamowienie = nie istnieje
        if not order or order.user_id != user_id:
            raise NotFound("Zamowienie nie istnieje")

        return self._to_dict(order)

    def list_orders(self, user_id: int) -> List[Dict[str, Any]]:
        return [self._to_dict(o) for o in self.repo.list_orders_by_user(user_id)]

    def _to_dict(self, order: OrderModel) -> Dict[str, Any]:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "items": [
                {
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "unit_price": i.unit_price,
                }
                for i in self.repo.get_order_items(order.id)
            ],
            "total": order.total,
            "created_at": order.created_at,
        }
