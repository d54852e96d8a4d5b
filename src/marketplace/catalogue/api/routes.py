"""FastAPI endpoints for products, variants and availability."""

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from marketplace.catalogue.api.schemas import (
    AvailabilityResponse,
    CreateProductRequest,
    CuratorRequest,
    InitializeVariantsRequest,
    InitializeVariantsResponse,
    ProductIdResponse,
    ProductResponse,
    StatusResponse,
    UpdateProductRequest,
    UpsertVariantRequest,
    UpsertVariantResponse,
    VariantResponse,
)
from marketplace.catalogue.product.creation import CreateProduct
from marketplace.catalogue.product.details import UpdateProduct
from marketplace.catalogue.product.lifecycle import ActivateProduct, DeactivateProduct
from marketplace.catalogue.product.product import Product
from marketplace.catalogue.product.variants import InitializeProductVariants, RemoveVariant, UpsertVariant
from marketplace.inventory.availability import check_availability

product_router = APIRouter(prefix="/products", tags=["products"])


def _product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        curator_id=str(product.curator_id),
        slug=product.slug,
        title=product.title,
        description=product.description,
        price=product.price,
        stock_quantity=product.stock_quantity,
        is_active=product.is_active,
        sizes=product.size_list,
        colors=product.color_list,
        variants=[
            VariantResponse(
                variant_id=str(v.id),
                size=v.size,
                color=v.color,
                stock_quantity=v.stock_quantity,
                sku=v.sku,
            )
            for v in product.variants
        ],
    )


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        curator_id=body.curator_id,
        slug=body.slug,
        title=body.title,
        description=body.description,
        price=body.price,
        stock_quantity=body.stock_quantity,
        sizes=body.sizes,
        colors=body.colors,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return _product_response(product)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProduct(
        product_id=product_id,
        curator_id=body.curator_id,
        title=body.title,
        description=body.description,
        price=body.price,
        stock_quantity=body.stock_quantity,
        sizes=body.sizes,
        colors=body.colors,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/activate", response_model=StatusResponse)
async def activate_product(product_id: str, body: CuratorRequest) -> StatusResponse:
    current_domain.process(ActivateProduct(product_id=product_id, curator_id=body.curator_id), asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/deactivate", response_model=StatusResponse)
async def deactivate_product(product_id: str, body: CuratorRequest) -> StatusResponse:
    current_domain.process(DeactivateProduct(product_id=product_id, curator_id=body.curator_id), asynchronous=False)
    return StatusResponse()


# --- Variants ---


@product_router.put("/{product_id}/variants", response_model=UpsertVariantResponse)
async def upsert_variant(product_id: str, body: UpsertVariantRequest) -> UpsertVariantResponse:
    command = UpsertVariant(
        product_id=product_id,
        curator_id=body.curator_id,
        size=body.size,
        color=body.color,
        stock_quantity=body.stock_quantity,
        sku=body.sku,
    )
    result = current_domain.process(command, asynchronous=False)
    return UpsertVariantResponse(**result)


@product_router.post("/{product_id}/variants/initialize", status_code=201, response_model=InitializeVariantsResponse)
async def initialize_variants(product_id: str, body: InitializeVariantsRequest) -> InitializeVariantsResponse:
    command = InitializeProductVariants(
        product_id=product_id,
        curator_id=body.curator_id,
        sizes=body.sizes,
        colors=body.colors,
        stock_per_variant=body.stock_per_variant,
        total_stock=body.total_stock,
    )
    result = current_domain.process(command, asynchronous=False)
    return InitializeVariantsResponse(variant_count=result)


@product_router.delete("/{product_id}/variants/{variant_id}", response_model=StatusResponse)
async def remove_variant(product_id: str, variant_id: str, curator_id: str = Query(...)) -> StatusResponse:
    command = RemoveVariant(product_id=product_id, curator_id=curator_id, variant_id=variant_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.get("/{product_id}/availability", response_model=AvailabilityResponse)
async def get_availability(
    product_id: str,
    size: str = Query(...),
    color: str = Query(...),
    quantity: int = Query(1, ge=1),
) -> AvailabilityResponse:
    result = check_availability(product_id, size, color, quantity)
    return AvailabilityResponse(
        available=result.available,
        stock_quantity=result.stock_quantity,
        variant_id=result.variant_id,
    )
