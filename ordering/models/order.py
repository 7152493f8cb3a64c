from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, JSON, Numeric, String
from .base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(String(128), nullable=False, index=True)
    customer_name = Column(String(255), nullable=False)
    line_items = Column(JSON, nullable=False)
    total_amount = Column(Numeric(15, 2), nullable=False)
    status = Column(String(32), nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<Order id={self.id} owner_id={self.owner_id!r} status={self.status!r}>"
