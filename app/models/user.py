"""ORM model for application users (auth and role-based access)."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin, new_id

ROLE_FARMER = "farmer"
ROLE_CONSUMER = "consumer"
ROLE_ADMIN = "admin"
ROLES = (ROLE_FARMER, ROLE_CONSUMER, ROLE_ADMIN)


class User(TimestampMixin, Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'farmer', 'consumer' or 'admin'. password_hash is never serialized.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=ROLE_CONSUMER)
    phone = Column(String(64), nullable=True)
    location = Column(String(255), nullable=True)
    farm_name = Column(String(255), nullable=True)

    products = relationship("Product", back_populates="farmer", passive_deletes=True)
