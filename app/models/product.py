"""ORM model for farm products and their authenticity verification codes."""

import uuid

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin, new_id


def new_verification_code() -> str:
    """12 upper-case hex characters printed on the product label."""
    return uuid.uuid4().hex[:12].upper()


class Product(TimestampMixin, Base):
    """Product listed by a farmer; verification_code proves its origin to consumers."""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(64), nullable=False, index=True)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    unit = Column(String(32), nullable=False, default="kg")
    location = Column(String(255), nullable=True)
    verification_code = Column(
        String(12),
        nullable=False,
        unique=True,
        index=True,
        default=new_verification_code,
    )
    farmer_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    farmer = relationship("User", back_populates="products")
