# bazaar/repos/product_repo.py
from typing import Dict, Iterable, List

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from bazaar.data.database import commit_or_raise
from bazaar.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_products(self, product_ids: Iterable[int]) -> Dict[int, ProductModel]:
        ids = list(set(product_ids))
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductModel).where(ProductModel.id.in_(ids))
        ).scalars().all()
        return {p.id: p for p in rows}

    def list_products(self, product_type: str | None = None) -> List[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.id)
        if product_type:
            stmt = stmt.where(ProductModel.type == product_type)
        return list(self.db.execute(stmt).scalars().all())

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product_id: int, old_version: int, new_data: dict) -> int:
        # UPDATE products SET ..., version = old + 1 WHERE id = :id AND version = :old
        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.version == old_version,
            )
            .values(**new_data, version=old_version + 1)
        )
        return result.rowcount

    def commit(self) -> None:
        commit_or_raise(self.db)

    def rollback(self) -> None:
        self.db.rollback()
