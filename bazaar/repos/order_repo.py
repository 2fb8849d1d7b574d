# bazaar/repos/order_repo.py
from typing import List, Tuple
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from bazaar.data.database import commit_or_raise
from bazaar.data.models.order import OrderModel
from bazaar.data.models.order_item import OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(
        self,
        order: OrderModel,
        lines: List[Tuple[int, int, Decimal]],
    ) -> OrderModel:
        #flush bez commita, commit robi serwis razem z czyszczeniem koszyka
        self.db.add(order)
        self.db.flush()
        for product_id, quantity, unit_price in lines:
            self.db.add(
                OrderItemModel(
                    order_id=order.id,
                    product_id=product_id,
                    quantity=quantity,
                    unit_price=unit_price,
                )
            )
        self.db.flush()
        return order

    def commit(self) -> None:
        commit_or_raise(self.db)

    def rollback(self) -> None:
        self.db.rollback()

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_order_items(self, order_id: int) -> List[OrderItemModel]:
        return list(
            self.db.execute(
                select(OrderItemModel)
                .where(OrderItemModel.order_id == order_id)
                .order_by(OrderItemModel.id)
            ).scalars().all()
        )

    def list_orders_by_user(self, user_id: int) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at, OrderModel.id)
            ).scalars().all()
        )
