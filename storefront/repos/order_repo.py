# storefront/repos/order_repo.py
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel, commit: bool = True) -> OrderModel:
        self.db.add(order)
        if commit:
            self.db.commit()
            self.db.refresh(order)
        else:
            self.db.flush()
        return order

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders(self, user_id: int | None = None) -> list[OrderModel]:
        stmt = select(OrderModel).order_by(OrderModel.created_at.desc())
        if user_id is not None:
            stmt = stmt.where(OrderModel.user_id == user_id)
        return self.db.execute(stmt).scalars().all()

    def update_order_status(self, order_id: str, status: str) -> OrderModel | None:
        order = self.get_order(order_id)
        if order:
            order.status = status
            order.updated_at = datetime.now(timezone.utc)
            self.db.commit()
            self.db.refresh(order)
        return order

    def delete_order(self, order: OrderModel) -> None:
        self.db.delete(order)
        self.db.commit()
