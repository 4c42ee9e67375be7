"""Product endpoints: public browsing and verification, owner/admin mutations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.api.responses import render
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.envelope import Success
from app.schemas.product import ProductCreate, ProductUpdate
from app.services import products as product_service
from app.services.products import MAX_PAGE_SIZE, serialize_product

router = APIRouter()


@router.get("")
def list_products(
    db: Annotated[Session, Depends(get_db)],
    category: str | None = None,
    farmer_id_camel: Annotated[str | None, Query(alias="farmerId")] = None,
    farmer_id: str | None = None,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> JSONResponse:
    """List products, newest first. The farmer filter is read from farmerId or farmer_id."""
    products = product_service.list_products(
        db, category=category, farmer_id=farmer_id_camel or farmer_id, limit=limit, offset=offset
    )
    return render(
        Success(
            payload={
                "count": len(products),
                "products": [serialize_product(p) for p in products],
            }
        )
    )


@router.get("/verify/{code}")
def verify_product(
    code: str,
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    """
    Verify a product's authenticity by the code printed on its label.
    Returns the product and the farmer who listed it; 404 if the code is unknown.
    """
    result = product_service.verify_product(db, code)
    return render(Success(message="Product is authentic", payload=result))


@router.get("/{product_id}")
def get_product(
    product_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> JSONResponse:
    product = product_service.get_product(db, product_id)
    return render(Success(payload={"product": serialize_product(product)}))


@router.post("", status_code=201)
def create_product(
    body: ProductCreate,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> JSONResponse:
    """Create a product owned by the current farmer (or admin)."""
    product = product_service.create_product(db, body, user)
    return render(
        Success(
            status_code=201,
            message="Product created successfully",
            payload={"product": serialize_product(product)},
        )
    )


@router.put("/{product_id}")
def update_product(
    product_id: str,
    body: ProductUpdate,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> JSONResponse:
    product = product_service.update_product(db, product_id, body, user)
    return render(
        Success(
            message="Product updated successfully",
            payload={"product": serialize_product(product)},
        )
    )


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> JSONResponse:
    product_service.delete_product(db, product_id, user)
    return render(Success(message="Product deleted successfully"))
