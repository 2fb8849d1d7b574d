# bazaar/repos/cart_repo.py
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bazaar.data.database import commit_or_raise
from bazaar.data.models.cart import CartModel
from bazaar.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def create_cart(self, user_id: int) -> CartModel | None:
        """
        Dodaje koszyk w biezacej transakcji (flush, bez commita).
        None jesli rownolegle request zdazyl juz zalozyc koszyk temu userowi.
        """
        cart = CartModel(user_id=user_id, version=1)
        self.db.add(cart)
        try:
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            return None
        return cart

    def get_cart_items(self, cart_id: int) -> List[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.id)
            ).scalars().all()
        )

    def get_cart_item(self, cart_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def set_item_quantity(self, cart_id: int, product_id: int, quantity: int) -> None:
        item = self.get_cart_item(cart_id, product_id)
        if item:
            item.quantity = quantity
        else:
            self.db.add(CartItemModel(cart_id=cart_id, product_id=product_id, quantity=quantity))

    def delete_cart_item(self, cart_id: int, product_id: int) -> None:
        self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        )

    def clear_cart_items(self, cart_id: int) -> None:
        self.db.execute(delete(CartItemModel).where(CartItemModel.cart_id == cart_id))

    def update_cart_version(self, cart_id: int, old_version: int) -> int:
        result = self.db.execute(
            update(CartModel)
            .where(
                CartModel.id == cart_id,
                CartModel.version == old_version,
            )
            .values(version=old_version + 1)
        )
        return result.rowcount

    def commit(self) -> None:
        commit_or_raise(self.db)

    def rollback(self) -> None:
        self.db.rollback()
