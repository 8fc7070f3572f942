# storefront/services/product_service.py
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.schemas import ProductIn, ProductUpdate
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    """Katalog produktow - CRUD."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(self, category: str | None = None, q: str | None = None):
        return self.repo.list_products(category=category, q=q)

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise ValueError("Product not found")
        return product

    def create_product(self, payload: ProductIn) -> ProductModel:
        created = self.repo.create_product(ProductModel(**payload.model_dump()))
        logger.info(f"Product {created.id} created ({created.name})")
        return created

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductModel:
        product = self.get_product(product_id)

        #tylko podane pola, id zostaje
        for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(product, field, value)
        product.updated_at = datetime.now(timezone.utc)

        return self.repo.save(product)

    def delete_product(self, product_id: int) -> ProductModel:
        product = self.get_product(product_id)
        self.repo.delete_product(product)
        logger.info(f"Product {product_id} deleted")
        return product
