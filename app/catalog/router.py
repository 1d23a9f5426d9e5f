from typing import Annotated

from fastapi import APIRouter, Depends, Response

from app.bulk.schemas import ImportCsvRequest, ImportJsonRequest, ImportResult
from app.catalog.models import CATALOG_TABLES, CatalogKind
from app.catalog.schemas import CREATE_SCHEMAS, RESPONSE_SCHEMAS, OrderUpdate
from app.catalog.service import CatalogResponse, CatalogService
from app.dependencies import APIKey, catalog_service_provider
from app.responses import attachment


def build_catalog_router(kind: CatalogKind) -> APIRouter:
    """One router per lookup list; mounted under the table's path by the app."""
    table = CATALOG_TABLES[kind]
    create_schema = CREATE_SCHEMAS[kind]
    response_schema = RESPONSE_SCHEMAS[kind]
    ServiceDep = Annotated[CatalogService, Depends(catalog_service_provider(kind))]

    router = APIRouter()

    @router.get("/", response_model=list[response_schema])
    async def list_entries(service: ServiceDep, _api_key: APIKey) -> list[CatalogResponse]:
        return await service.list_entries()

    @router.post("/", status_code=201, response_model=response_schema)
    async def create_entry(
        data: create_schema,
        service: ServiceDep,
        _api_key: APIKey,
    ) -> CatalogResponse:
        return await service.create(data)

    @router.post("/import/csv", status_code=201, response_model=ImportResult)
    async def import_csv(
        data: ImportCsvRequest,
        service: ServiceDep,
        _api_key: APIKey,
    ) -> ImportResult:
        return await service.import_csv(data.csv_data)

    @router.post("/import/json", status_code=201, response_model=ImportResult)
    async def import_json(
        data: ImportJsonRequest,
        service: ServiceDep,
        _api_key: APIKey,
    ) -> ImportResult:
        return await service.import_json(data.json_data)

    @router.get("/export/csv")
    async def export_csv(service: ServiceDep, _api_key: APIKey) -> Response:
        return attachment(await service.export_csv(), "text/csv", f"{table.path}.csv")

    @router.get("/export/json")
    async def export_json(service: ServiceDep, _api_key: APIKey) -> Response:
        return attachment(await service.export_json(), "application/json", f"{table.path}.json")

    @router.delete("/{entry_id}", status_code=204)
    async def delete_entry(entry_id: int, service: ServiceDep, _api_key: APIKey) -> None:
        await service.delete(entry_id)

    if table.sortable:

        @router.patch("/{entry_id}/order", response_model=response_schema)
        async def update_order(
            entry_id: int,
            data: OrderUpdate,
            service: ServiceDep,
            _api_key: APIKey,
        ) -> CatalogResponse:
            return await service.update_order(entry_id, data.new_order)

    return router
