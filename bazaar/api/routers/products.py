# bazaar/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from bazaar.api.deps import http_error
from bazaar.data.database import get_db
from bazaar.domain.errors import ShopError
from bazaar.domain.schemas import ProductCreate, ProductOut
from bazaar.services.product_service import ProductService

router = APIRouter(tags=["products"])


@router.post("/products", response_model=ProductOut, status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    try:
        return ProductService(db).create_product(payload)
    except ShopError as e:
        raise http_error(e)


@router.get("/products", response_model=List[ProductOut])
def list_products(
    product_type: str | None = Query(None, alias="type"),
    db: Session = Depends(get_db),
):
    return ProductService(db).list_products(product_type)


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    try:
        return ProductService(db).get_product(product_id)
    except ShopError as e:
        raise http_error(e)


@router.post("/upload/{product_id}", response_model=ProductOut)
def upload_image(
    product_id: int,
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    try:
        return ProductService(db).set_image(product_id, image.file.read())
    except ShopError as e:
        raise http_error(e)
