"""API routes."""

from fastapi import APIRouter

from app.api import admin, auth, health, products

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
