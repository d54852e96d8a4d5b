"""Pydantic schemas for the Inventory API."""

from __future__ import annotations

from pydantic import BaseModel


class ImportInventoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "curator_id": "curator-001",
                    "csv_data": "productSlug,size,color,stock,sku\nlinen-shirt,M,Black,5,LS-M-BLK\n",
                }
            ]
        }
    }

    curator_id: str
    csv_data: str


class ImportInventoryResponse(BaseModel):
    total_processed: int
    created: int
    updated: int


class InventoryVariant(BaseModel):
    variant_id: str
    size: str
    color: str
    stock_quantity: int
    sku: str | None = None


class InventoryProduct(BaseModel):
    product_id: str
    slug: str
    title: str
    is_active: bool
    stock_quantity: int
    variants: list[InventoryVariant] = []


class InventoryListResponse(BaseModel):
    products: list[InventoryProduct]
