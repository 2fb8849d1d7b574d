# bazaar/services/product_service.py
import base64
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bazaar.data.models.product import ProductModel
from bazaar.domain.errors import AlreadyExists, ConcurrencyConflict, NotFound, StoreUnavailable
from bazaar.domain.schemas import ProductCreate
from bazaar.repos.product_repo import ProductRepo
from bazaar.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def create_product(self, payload: ProductCreate) -> ProductModel:
        if self.repo.get_product(payload.id):
            raise AlreadyExists(f"Produkt {payload.id} juz istnieje")

        product = ProductModel(**payload.model_dump(), version=1)
        created = self.repo.create_product(product)
        logger.info(f"Dodano produkt {created.id} (stan {created.stock})")
        return created

    def list_products(self, product_type: str | None = None) -> List[ProductModel]:
        return self.repo.list_products(product_type)

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound(f"Produkt {product_id} nie istnieje")
        return product

    def set_image(self, product_id: int, data: bytes) -> ProductModel:
        product = self.get_product(product_id)
        encoded = base64.b64encode(data).decode("ascii")

        try:
            rowcount = self.repo.update_product(product.id, product.version, {"image": encoded})
        except SQLAlchemyError as e:
            self.repo.rollback()
            raise StoreUnavailable("Nie udalo sie zapisac zdjecia") from e

        if rowcount == 0:
            self.repo.rollback()
            raise ConcurrencyConflict(f"Konflikt wspolbieznosci - produkt {product_id} zostal zmodyfikowany")

        self.repo.commit()
        logger.info(f"Zapisano zdjecie produktu {product_id} ({len(data)} B)")
        return self.get_product(product_id)
