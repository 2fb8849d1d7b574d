from typing import List

from sqlalchemy.orm import Session

from bazaar.data.models.product import ProductModel
from bazaar.domain.errors import NotFound
from bazaar.repos.product_repo import ProductRepo
from bazaar.repos.wishlist_repo import WishlistRepo


class WishlistService:
    def __init__(self, db: Session):
        self.repo = WishlistRepo(db)
        self.products = ProductRepo(db)

    def add(self, user_id: int, product_id: int) -> None:
        if not self.products.get_product(product_id):
            raise NotFound(f"Produkt {product_id} nie istnieje")

        if product_id in self.repo.get_product_ids(user_id):
            return
        self.repo.add_item(user_id, product_id)

    def list(self, user_id: int) -> List[ProductModel]:
        ids = self.repo.get_product_ids(user_id)
        products = self.products.get_products(ids)
        return [products[pid] for pid in ids if pid in products]

    def remove(self, user_id: int, product_id: int) -> None:
        self.repo.delete_item(user_id, product_id)
