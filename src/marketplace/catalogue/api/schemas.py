"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "curator_id": "curator-001",
                    "slug": "linen-shirt",
                    "title": "Linen Shirt",
                    "description": "Loose fit, washed linen.",
                    "price": 89.9,
                    "stock_quantity": 10,
                    "sizes": "S,M,L,XL",
                    "colors": "Natural",
                }
            ]
        }
    }

    curator_id: str
    slug: str = Field(..., max_length=200)
    title: str = Field(..., max_length=255)
    description: str | None = None
    price: float = Field(..., gt=0)
    stock_quantity: int = Field(0, ge=0)
    sizes: str | None = Field(None, max_length=500)
    colors: str | None = Field(None, max_length=500)


class UpdateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "curator_id": "curator-001",
                    "price": 79.9,
                    "sizes": "S,M,L",
                    "colors": "Natural,Black",
                    "stock_quantity": 12,
                }
            ]
        }
    }

    curator_id: str
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    price: float | None = Field(None, gt=0)
    stock_quantity: int | None = Field(None, ge=0)
    sizes: str | None = Field(None, max_length=500)
    colors: str | None = Field(None, max_length=500)


class CuratorRequest(BaseModel):
    curator_id: str


class UpsertVariantRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"curator_id": "curator-001", "size": "M", "color": "Black", "stock_quantity": 4, "sku": "LS-M-BLK"}]
        }
    }

    curator_id: str
    size: str = Field(..., max_length=50)
    color: str = Field(..., max_length=50)
    stock_quantity: int = Field(..., ge=0)
    sku: str | None = Field(None, max_length=100)


class InitializeVariantsRequest(BaseModel):
    curator_id: str
    sizes: str = Field(..., max_length=500)
    colors: str = Field(..., max_length=500)
    stock_per_variant: int | None = Field(None, ge=0)
    total_stock: int | None = Field(None, ge=0)


# --- Responses ---


class ProductIdResponse(BaseModel):
    product_id: str


class VariantResponse(BaseModel):
    variant_id: str
    size: str
    color: str
    stock_quantity: int
    sku: str | None = None


class ProductResponse(BaseModel):
    product_id: str
    curator_id: str
    slug: str
    title: str
    description: str | None = None
    price: float
    stock_quantity: int
    is_active: bool
    sizes: list[str] = []
    colors: list[str] = []
    variants: list[VariantResponse] = []


class UpsertVariantResponse(BaseModel):
    variant_id: str
    created: bool


class InitializeVariantsResponse(BaseModel):
    variant_count: int


class AvailabilityResponse(BaseModel):
    available: bool
    stock_quantity: int
    variant_id: str | None = None


class StatusResponse(BaseModel):
    status: str = "ok"
