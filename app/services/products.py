"""Product listing, ownership-checked mutations and authenticity verification."""

import logging

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, PermissionDeniedError
from app.models import Product, User
from app.models.user import ROLE_ADMIN, ROLE_FARMER
from app.schemas.auth import CurrentUser
from app.schemas.product import FarmerSummary, ProductCreate, ProductOut, ProductUpdate

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
MSG_PRODUCT_NOT_FOUND = "Product not found"
MSG_NOT_AUTHENTIC = "Product not found or not authentic"


def serialize_product(product: Product) -> dict:
    return ProductOut.model_validate(product).model_dump(mode="json", by_alias=True)


def _get_or_404(db: Session, product_id: str) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise NotFoundError(MSG_PRODUCT_NOT_FOUND)
    return product


def _require_owner_or_admin(product: Product, user: CurrentUser) -> None:
    if user.role != ROLE_ADMIN and product.farmer_id != user.id:
        raise PermissionDeniedError("You can only modify your own products")


def list_products(
    db: Session,
    category: str | None = None,
    farmer_id: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[Product]:
    """Newest first, optionally filtered by category and/or farmer."""
    query = db.query(Product)
    if category:
        query = query.filter(Product.category == category)
    if farmer_id:
        query = query.filter(Product.farmer_id == farmer_id)
    limit = max(1, min(limit, MAX_PAGE_SIZE))
    return (
        query.order_by(Product.created_at.desc(), Product.id)
        .offset(max(0, offset))
        .limit(limit)
        .all()
    )


def get_product(db: Session, product_id: str) -> Product:
    return _get_or_404(db, product_id)


def create_product(db: Session, body: ProductCreate, user: CurrentUser) -> Product:
    """Farmers and admins may list products; the creator becomes the owner."""
    if user.role not in (ROLE_FARMER, ROLE_ADMIN):
        raise PermissionDeniedError("Only farmers can create products")
    product = Product(**body.model_dump(), farmer_id=user.id)
    db.add(product)
    db.commit()
    db.refresh(product)
    logger.info(
        "Product created: id=%s farmer_id=%s code=%s",
        product.id,
        product.farmer_id,
        product.verification_code,
    )
    return product


def update_product(
    db: Session, product_id: str, body: ProductUpdate, user: CurrentUser
) -> Product:
    product = _get_or_404(db, product_id)
    _require_owner_or_admin(product, user)
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field != "location":
            continue
        setattr(product, field, value)
    db.commit()
    db.refresh(product)
    return product


def delete_product(db: Session, product_id: str, user: CurrentUser) -> None:
    product = _get_or_404(db, product_id)
    _require_owner_or_admin(product, user)
    db.delete(product)
    db.commit()
    logger.info("Product deleted: id=%s by user_id=%s", product_id, user.id)


def verify_product(db: Session, code: str) -> dict:
    """
    Look up a product by the code on its label.

    Returns the product and its farmer's public details; raises NotFoundError
    when no product carries the code.
    """
    normalized = code.strip().upper()
    product = (
        db.query(Product).filter(Product.verification_code == normalized).first()
    )
    if product is None:
        raise NotFoundError(MSG_NOT_AUTHENTIC)
    farmer = db.get(User, product.farmer_id)
    return {
        "authentic": True,
        "product": serialize_product(product),
        "farmer": (
            FarmerSummary.model_validate(farmer).model_dump(by_alias=True)
            if farmer is not None
            else None
        ),
    }
