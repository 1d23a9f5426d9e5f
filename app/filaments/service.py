from collections.abc import Sequence
from typing import Any

import structlog

from app.bulk.batch import BatchResult, process_batch
from app.bulk.export import to_csv, to_json
from app.bulk.pipeline import ImportPipeline, load_json_array
from app.bulk.schemas import (
    BatchDeleteResponse,
    BatchFailureResponse,
    BatchUpdateResponse,
    ImportResult,
    ItemOutcomeResponse,
)
from app.bulk.validators import partition_ids
from app.exceptions import NotFoundError, ValidationError
from app.filaments.importers import FILAMENT_EXPORT_FIELDS, FILAMENT_IMPORT_SPEC
from app.filaments.repository import FilamentRepository
from app.filaments.schemas import FilamentCreate, FilamentResponse, FilamentUpdate

logger = structlog.get_logger()


def build_patch(data: FilamentUpdate) -> dict:
    """Keep only the fields the caller actually sent; everything else stays untouched."""
    return data.model_dump(exclude_unset=True)


class FilamentService:
    def __init__(self, repo: FilamentRepository) -> None:
        self._repo = repo

    async def create(self, data: FilamentCreate, owner_id: int) -> FilamentResponse:
        row = await self._repo.create(data, owner_id)
        logger.info("filament_created", filament_id=row["id"], owner_id=owner_id)
        return self._to_response(row)

    async def get_by_id(self, filament_id: int, owner_id: int) -> FilamentResponse:
        row = await self._repo.get_by_id(filament_id, owner_id)
        if row is None:
            raise NotFoundError("Filament", filament_id)
        return self._to_response(row)

    async def list_filaments(self, owner_id: int) -> list[FilamentResponse]:
        rows = await self._repo.list_by_user(owner_id)
        return [self._to_response(row) for row in rows]

    async def update(
        self, filament_id: int, data: FilamentUpdate, owner_id: int
    ) -> FilamentResponse:
        patch = build_patch(data)
        if not patch:
            raise ValidationError("No fields to update")

        row = await self._repo.update(filament_id, patch, owner_id)
        if row is None:
            raise NotFoundError("Filament", filament_id)

        logger.info("filament_updated", filament_id=filament_id, fields=sorted(patch))
        return self._to_response(row)

    async def delete(self, filament_id: int, owner_id: int) -> None:
        if not await self._repo.delete(filament_id, owner_id):
            raise NotFoundError("Filament", filament_id)
        logger.info("filament_deleted", filament_id=filament_id)

    async def import_csv(self, content: str, owner_id: int) -> ImportResult:
        return await self._pipeline(owner_id).import_csv(content)

    async def import_json(self, payload: str, owner_id: int) -> ImportResult:
        items = load_json_array(payload)
        return await self._pipeline(owner_id).import_json(items)

    async def export_csv(self, owner_id: int) -> str:
        rows = await self._repo.list_by_user(owner_id)
        return to_csv(rows, FILAMENT_EXPORT_FIELDS)

    async def export_json(self, owner_id: int) -> str:
        filaments = await self.list_filaments(owner_id)
        return to_json(f.model_dump(by_alias=True) for f in filaments)

    async def batch_delete(self, raw_ids: Sequence[Any], owner_id: int) -> BatchDeleteResponse:
        ids, rejected = self._validated_ids(raw_ids)

        async def delete_one(filament_id: int) -> int:
            if not await self._repo.delete(filament_id, owner_id):
                raise NotFoundError("Filament", filament_id)
            return filament_id

        result = await process_batch(ids, delete_one, label="filament_batch_delete")
        result.record_rejected(rejected)

        deleted = len(result.success)
        return BatchDeleteResponse(
            message=f"Successfully deleted {deleted} filaments",
            deleted_count=deleted,
            failed=self._failures(result),
            outcomes=self._outcomes(result),
        )

    async def batch_update(
        self, raw_ids: Sequence[Any], updates: FilamentUpdate, owner_id: int
    ) -> BatchUpdateResponse:
        patch = build_patch(updates)
        if not patch:
            raise ValidationError("No fields to update")
        ids, rejected = self._validated_ids(raw_ids)

        async def update_one(filament_id: int) -> dict:
            if await self._repo.get_by_id(filament_id, owner_id) is None:
                raise NotFoundError("Filament", filament_id)
            updated = await self._repo.update(filament_id, patch, owner_id)
            if not updated:
                raise NotFoundError("Filament", filament_id)
            return updated

        result = await process_batch(ids, update_one, label="filament_batch_update")
        result.record_rejected(rejected)

        updated_count = len(result.success)
        return BatchUpdateResponse(
            message=f"Successfully updated {updated_count} filaments",
            updated_count=updated_count,
            failed=self._failures(result),
            outcomes=self._outcomes(result),
        )

    def _pipeline(self, owner_id: int) -> ImportPipeline:
        async def list_existing() -> list[dict]:
            return await self._repo.list_by_user(owner_id)

        async def create(data: FilamentCreate) -> dict:
            return await self._repo.create(data, owner_id)

        return ImportPipeline(FILAMENT_IMPORT_SPEC, list_existing, create)

    @staticmethod
    def _validated_ids(raw_ids: Sequence[Any]) -> tuple[list[int], list[Any]]:
        ids, rejected = partition_ids(raw_ids)
        if not ids:
            raise ValidationError("No valid filament IDs provided")
        return ids, rejected

    @staticmethod
    def _failures(result: BatchResult) -> list[BatchFailureResponse]:
        return [BatchFailureResponse(id=f.id, error=f.error) for f in result.failed]

    @staticmethod
    def _outcomes(result: BatchResult) -> list[ItemOutcomeResponse]:
        return [
            ItemOutcomeResponse(id=o.id, status=o.status.value, reason=o.reason)
            for o in result.outcomes
        ]

    def _to_response(self, row: dict) -> FilamentResponse:
        return FilamentResponse(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            manufacturer=row["manufacturer"],
            material=row["material"],
            color_name=row["color_name"],
            color_code=row["color_code"],
            diameter=row["diameter"],
            print_temp=row["print_temp"],
            total_weight=row["total_weight"],
            remaining_percentage=row["remaining_percentage"],
            purchase_date=row["purchase_date"],
            purchase_price=row["purchase_price"],
            status=row["status"],
            spool_type=row["spool_type"],
            dryer_count=row["dryer_count"],
            last_drying_date=row["last_drying_date"],
            storage_location=row["storage_location"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
