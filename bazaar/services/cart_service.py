from decimal import Decimal
from typing import Dict, Any, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bazaar.domain.errors import (
    ConcurrencyConflict,
    InvalidRequest,
    NotFound,
    OutOfStock,
    ShopError,
    StoreUnavailable,
)
from bazaar.repos.cart_repo import CartRepo
from bazaar.repos.product_repo import ProductRepo
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Koszyk + stan magazynowy.

    Kazda komenda (add, remove, decrement) zmienia dwa dokumenty: produkt i koszyk.
    Kolejnosc zapisu zawsze produkt -> koszyk, kazdy w osobnym commicie.
    Padniecie pomiedzy zostawia zaniżony stan magazynu (bezpieczniej niz oversell).

    Wspolbieznosc: optimistic locking na polu version w obu tabelach.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query - odczyt
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self.repo.get_cart_by_user(user_id)

        if not cart:
            raise NotFound("Koszyk nie istnieje")

        items = self.repo.get_cart_items(cart.id)
        #jawny lookup produktow, bez lazy loadingu
        products = self.products.get_products(i.product_id for i in items)

        lines = []
        total = Decimal("0.00")
        for i in items:
            product = products.get(i.product_id)
            if product is None:
                lines.append({"product_id": i.product_id, "quantity": i.quantity, "available": False})
                continue
            line_total = product.price * i.quantity
            total += line_total
            lines.append(
                {
                    "product_id": i.product_id,
                    "name": product.name,
                    "price": product.price,
                    "quantity": i.quantity,
                    "line_total": line_total,
                    "available": True,
                }
            )

        return {
            "cart_id": cart.id,
            "user_id": cart.user_id,
            "items": lines,
            "total": total,
        }

    #commands
    def add_product(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise InvalidRequest("Ilosc musi byc wieksza niz 0")

        product = self.products.get_product(product_id)
        if not product:
            raise NotFound(f"Produkt {product_id} nie istnieje")

        #walidacja przed jakakolwiek zmiana
        if product.stock < quantity:
            raise OutOfStock(
                f"Brak produktu {product_id} na stanie (dostepne {product.stock}, zadane {quantity})"
            )

        cart = self.repo.get_cart_by_user(user_id)
        #wersje czytamy teraz, commit produktu expiruje obiekty w sesji
        cart_ref = (cart.id, cart.version) if cart else None
        existing_item = self.repo.get_cart_item(cart.id, product_id) if cart else None
        new_quantity = (existing_item.quantity if existing_item else 0) + quantity

        if existing_item:
            logger.info(
                f"Produkt {product_id} juz jest w koszyku usera {user_id}, zwiekszam ilosc "
                f"z {existing_item.quantity} do {new_quantity}"
            )
        else:
            logger.info(f"Dodaje nowy produkt {product_id} do koszyka usera {user_id}")

        self._save_stock(product.id, product.version, product.stock - quantity)
        self._save_cart(
            user_id,
            cart_ref,
            lambda cart_id: self.repo.set_item_quantity(cart_id, product_id, new_quantity),
        )

        return self.get_cart(user_id)

    def remove_product(self, user_id: int, product_id: int) -> Dict[str, Any]:
        cart, item = self._get_line(user_id, product_id)
        cart_ref = (cart.id, cart.version)
        quantity = item.quantity

        logger.info(f"Usuwanie produktu {product_id} (ilosc {quantity}) z koszyka {cart.id}")

        product = self.products.get_product(product_id)
        if product:
            self._save_stock(product.id, product.version, product.stock + quantity)
        else:
            logger.warning(f"Produkt {product_id} nie istnieje, pomijam zwrot {quantity} szt. na stan")

        self._save_cart(
            user_id,
            cart_ref,
            lambda cart_id: self.repo.delete_cart_item(cart_id, product_id),
        )

        return self.get_cart(user_id)

    def decrement_product(self, user_id: int, product_id: int) -> Dict[str, Any]:
        cart, item = self._get_line(user_id, product_id)
        cart_ref = (cart.id, cart.version)
        new_quantity = item.quantity - 1

        product = self.products.get_product(product_id)
        if product:
            self._save_stock(product.id, product.version, product.stock + 1)
        else:
            logger.warning(f"Produkt {product_id} nie istnieje, pomijam zwrot 1 szt. na stan")

        #linia z iloscia 0 nie moze zostac w koszyku
        if new_quantity <= 0:
            logger.info(f"Ilosc produktu {product_id} spadla do 0, usuwam linie z koszyka {cart.id}")
            mutate = lambda cart_id: self.repo.delete_cart_item(cart_id, product_id)
        else:
            logger.info(f"Zmniejszam ilosc produktu {product_id} w koszyku {cart.id} do {new_quantity}")
            mutate = lambda cart_id: self.repo.set_item_quantity(cart_id, product_id, new_quantity)

        self._save_cart(user_id, cart_ref, mutate)

        return self.get_cart(user_id)

    def _get_line(self, user_id: int, product_id: int):
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            raise NotFound("Koszyk nie istnieje")

        item = self.repo.get_cart_item(cart.id, product_id)
        if not item:
            raise NotFound(f"Produktu {product_id} nie ma w koszyku")

        return cart, item

    def _save_stock(self, product_id: int, version: int, new_stock: int) -> None:
        try:
            rowcount = self.products.update_product(
                product_id=product_id,
                old_version=version,
                new_data={"stock": new_stock},
            )
        except SQLAlchemyError as e:
            self.products.rollback()
            raise StoreUnavailable("Nie udalo sie zapisac stanu produktu") from e

        # UPDATE products SET stock = .., version = 2 WHERE id = 1 AND version = 1
        if rowcount == 0:
            self.products.rollback()
            raise ConcurrencyConflict(
                f"Konflikt wspolbieznosci - produkt {product_id} zostal zmodyfikowany przez inna operacje"
            )

        self.products.commit()
        logger.info(f"Stan produktu {product_id} = {new_stock}, nowa wersja: {version + 1}")

    def _save_cart(
        self,
        user_id: int,
        cart_ref: tuple[int, int] | None,
        mutate: Callable[[int], None],
    ) -> None:
        """
        Zapis koszyka po zapisie produktu. Blad tutaj = stan magazynu juz zmieniony,
        a koszyk nie; logujemy jako niespojnosc i przepuszczamy blad dalej.
        """
        try:
            if cart_ref is None:
                cart = self.repo.create_cart(user_id)
                if cart is None:
                    raise ConcurrencyConflict("Konflikt wspolbieznosci - koszyk zostal utworzony przez inna operacje")
                cart_id = cart.id
                logger.info(f"Utworzono nowy koszyk {cart_id} dla uzytkownika {user_id}")
            else:
                cart_id, version = cart_ref
                rowcount = self.repo.update_cart_version(cart_id=cart_id, old_version=version)
                if rowcount == 0:
                    self.repo.rollback()
                    raise ConcurrencyConflict(
                        "Konflikt wspolbieznosci - koszyk zostal zmodyfikowany przez inna operacje"
                    )

            mutate(cart_id)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Niespojnosc: stan magazynu zapisany, koszyk usera {user_id} nie ({e})")
            raise StoreUnavailable("Nie udalo sie zapisac koszyka") from e
        except ShopError as e:
            logger.error(f"Niespojnosc: stan magazynu zapisany, koszyk usera {user_id} nie ({e})")
            raise
