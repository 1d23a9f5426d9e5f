from fastapi import APIRouter, Response

from app.bulk.schemas import (
    BatchDeleteRequest,
    BatchDeleteResponse,
    BatchUpdateResponse,
    ImportCsvRequest,
    ImportJsonRequest,
    ImportResult,
)
from app.dependencies import FilamentServiceDep, OwnerId
from app.filaments.schemas import (
    BatchUpdateRequest,
    FilamentCreate,
    FilamentResponse,
    FilamentUpdate,
)
from app.responses import attachment

router = APIRouter()


@router.get("/", response_model=list[FilamentResponse])
async def list_filaments(
    service: FilamentServiceDep,
    owner_id: OwnerId,
) -> list[FilamentResponse]:
    return await service.list_filaments(owner_id)


@router.post("/", status_code=201, response_model=FilamentResponse)
async def create_filament(
    data: FilamentCreate,
    service: FilamentServiceDep,
    owner_id: OwnerId,
) -> FilamentResponse:
    return await service.create(data, owner_id)


@router.post("/import/csv", status_code=201, response_model=ImportResult)
async def import_csv(
    data: ImportCsvRequest,
    service: FilamentServiceDep,
    owner_id: OwnerId,
) -> ImportResult:
    return await service.import_csv(data.csv_data, owner_id)


@router.post("/import/json", status_code=201, response_model=ImportResult)
async def import_json(
    data: ImportJsonRequest,
    service: FilamentServiceDep,
    owner_id: OwnerId,
) -> ImportResult:
    return await service.import_json(data.json_data, owner_id)


@router.get("/export/csv")
async def export_csv(service: FilamentServiceDep, owner_id: OwnerId) -> Response:
    return attachment(await service.export_csv(owner_id), "text/csv", "filaments.csv")


@router.get("/export/json")
async def export_json(service: FilamentServiceDep, owner_id: OwnerId) -> Response:
    return attachment(await service.export_json(owner_id), "application/json", "filaments.json")


@router.delete("/batch", response_model=BatchDeleteResponse)
async def batch_delete(
    data: BatchDeleteRequest,
    service: FilamentServiceDep,
    owner_id: OwnerId,
) -> BatchDeleteResponse:
    return await service.batch_delete(data.ids, owner_id)


@router.patch("/batch", response_model=BatchUpdateResponse)
async def batch_update(
    data: BatchUpdateRequest,
    service: FilamentServiceDep,
    owner_id: OwnerId,
) -> BatchUpdateResponse:
    return await service.batch_update(data.ids, data.updates, owner_id)


@router.get("/{filament_id}", response_model=FilamentResponse)
async def get_filament(
    filament_id: int,
    service: FilamentServiceDep,
    owner_id: OwnerId,
) -> FilamentResponse:
    return await service.get_by_id(filament_id, owner_id)


@router.patch("/{filament_id}", response_model=FilamentResponse)
async def update_filament(
    filament_id: int,
    data: FilamentUpdate,
    service: FilamentServiceDep,
    owner_id: OwnerId,
) -> FilamentResponse:
    return await service.update(filament_id, data, owner_id)


@router.delete("/{filament_id}", status_code=204)
async def delete_filament(
    filament_id: int,
    service: FilamentServiceDep,
    owner_id: OwnerId,
) -> None:
    await service.delete(filament_id, owner_id)
