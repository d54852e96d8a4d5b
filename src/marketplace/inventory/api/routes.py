"""FastAPI endpoints for curator inventory: listing, CSV import, export and template."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from protean.utils.globals import current_domain

from marketplace.inventory.api.schemas import (
    ImportInventoryRequest,
    ImportInventoryResponse,
    InventoryListResponse,
)
from marketplace.inventory.export import export_inventory_csv, inventory_template, list_inventory
from marketplace.inventory.importer import ImportInventory

inventory_router = APIRouter(prefix="/inventory", tags=["inventory"])


@inventory_router.get("/template", response_class=PlainTextResponse)
async def get_template() -> PlainTextResponse:
    return PlainTextResponse(
        inventory_template(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="inventory_template.csv"'},
    )


@inventory_router.post("/import", response_model=ImportInventoryResponse)
async def import_inventory(body: ImportInventoryRequest) -> ImportInventoryResponse:
    command = ImportInventory(curator_id=body.curator_id, csv_data=body.csv_data)
    result = current_domain.process(command, asynchronous=False)
    return ImportInventoryResponse(**result)


@inventory_router.get("/{curator_id}", response_model=InventoryListResponse)
async def get_inventory(curator_id: str) -> InventoryListResponse:
    return InventoryListResponse(products=list_inventory(curator_id))


@inventory_router.get("/{curator_id}/export", response_class=PlainTextResponse)
async def export_inventory(curator_id: str) -> PlainTextResponse:
    return PlainTextResponse(
        export_inventory_csv(curator_id),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="inventory.csv"'},
    )
