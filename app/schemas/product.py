"""Request/response schemas for product endpoints."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    """Body for POST /products."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=5000)
    category: str = Field(..., min_length=1, max_length=64)
    price: float = Field(..., ge=0)
    quantity: int = Field(default=0, ge=0)
    unit: str = Field(default="kg", min_length=1, max_length=32)
    location: str | None = Field(default=None, max_length=255)


class ProductUpdate(BaseModel):
    """Body for PUT /products/{id}; only provided fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    category: str | None = Field(default=None, min_length=1, max_length=64)
    price: float | None = Field(default=None, ge=0)
    quantity: int | None = Field(default=None, ge=0)
    unit: str | None = Field(default=None, min_length=1, max_length=32)
    location: str | None = Field(default=None, max_length=255)


class ProductOut(BaseModel):
    """Product as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    category: str
    price: float
    quantity: int
    unit: str
    location: str | None = None
    verification_code: str = Field(serialization_alias="verificationCode")
    farmer_id: str = Field(serialization_alias="farmerId")
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")
    updated_at: datetime | None = Field(default=None, serialization_alias="updatedAt")


class FarmerSummary(BaseModel):
    """Public farmer details shown when a product is verified."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    location: str | None = None
    farm_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("farm_name", "farmName"),
        serialization_alias="farmName",
    )
