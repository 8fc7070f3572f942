# storefront/repos/product_repo.py
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(self, category: str | None = None, q: str | None = None, limit: int = 100):
        stmt = select(ProductModel)
        if category:
            stmt = stmt.where(ProductModel.category == category)
        if q:
            stmt = stmt.where(func.lower(ProductModel.name).contains(q.lower()))
        return self.db.execute(stmt.order_by(ProductModel.id).limit(limit)).scalars().all()

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def count(self) -> int:
        return self.db.execute(select(func.count(ProductModel.id))).scalar_one()

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def save(self, product: ProductModel) -> ProductModel:
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()
