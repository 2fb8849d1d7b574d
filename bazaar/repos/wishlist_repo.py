from typing import List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from bazaar.data.database import commit_or_raise
from bazaar.data.models.wishlist_item import WishlistItemModel


class WishlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product_ids(self, user_id: int) -> List[int]:
        return list(
            self.db.execute(
                select(WishlistItemModel.product_id)
                .where(WishlistItemModel.user_id == user_id)
                .order_by(WishlistItemModel.id)
            ).scalars().all()
        )

    def add_item(self, user_id: int, product_id: int) -> None:
        self.db.add(WishlistItemModel(user_id=user_id, product_id=product_id))
        commit_or_raise(self.db)

    def delete_item(self, user_id: int, product_id: int) -> None:
        self.db.execute(
            delete(WishlistItemModel).where(
                WishlistItemModel.user_id == user_id,
                WishlistItemModel.product_id == product_id,
            )
        )
        commit_or_raise(self.db)
