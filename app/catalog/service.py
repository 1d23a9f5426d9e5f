import structlog
from pydantic import BaseModel

from app.bulk.export import to_csv, to_json
from app.bulk.pipeline import ImportPipeline, load_json_array
from app.bulk.schemas import ImportResult
from app.catalog.importers import CATALOG_EXPORT_FIELDS, CATALOG_IMPORT_SPECS
from app.catalog.models import CatalogKind, CatalogTable
from app.catalog.repository import CatalogRepository
from app.catalog.schemas import ColorResponse, DiameterResponse, NamedEntryResponse
from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.filaments.repository import FilamentRepository

logger = structlog.get_logger()

CatalogResponse = NamedEntryResponse | ColorResponse | DiameterResponse


class CatalogService:
    """Lookup lists shared by every owner (manufacturers, materials, colors and so on)."""

    def __init__(
        self,
        table: CatalogTable,
        repo: CatalogRepository,
        filament_repo: FilamentRepository,
    ) -> None:
        self._table = table
        self._repo = repo
        self._filament_repo = filament_repo
        self._import_spec = CATALOG_IMPORT_SPECS[table.kind]

    async def list_entries(self) -> list[CatalogResponse]:
        rows = await self._repo.list_all()
        return [self._to_response(row) for row in rows]

    async def create(self, data: BaseModel) -> CatalogResponse:
        key = self._import_spec.draft_key(data.model_dump())
        existing = await self._repo.list_all()
        if any(self._import_spec.entity_key(row) == key for row in existing):
            raise ConflictError(f"{self._table.label} already exists")

        row = await self._repo.create(data)
        logger.info("catalog_entry_created", kind=self._table.kind.value, entry_id=row["id"])
        return self._to_response(row)

    async def delete(self, entry_id: int) -> None:
        row = await self._repo.get_by_id(entry_id)
        if row is None:
            raise NotFoundError(self._table.label, entry_id)

        in_use = await self._usage_count(row)
        if in_use:
            raise ConflictError(
                f"Cannot delete {self._table.label.lower()} that is in use by {in_use} filament(s)"
            )

        await self._repo.delete(entry_id)
        logger.info("catalog_entry_deleted", kind=self._table.kind.value, entry_id=entry_id)

    async def update_order(self, entry_id: int, new_order: int) -> CatalogResponse:
        if not self._table.sortable:
            raise ValidationError(f"{self._table.label} entries cannot be reordered")

        row = await self._repo.update_order(entry_id, new_order)
        if row is None:
            raise NotFoundError(self._table.label, entry_id)
        return self._to_response(row)

    async def import_csv(self, content: str) -> ImportResult:
        return await self._pipeline().import_csv(content)

    async def import_json(self, payload: str) -> ImportResult:
        items = load_json_array(payload)
        return await self._pipeline().import_json(items)

    async def export_csv(self) -> str:
        rows = await self._repo.list_all()
        return to_csv(rows, CATALOG_EXPORT_FIELDS[self._table.kind])

    async def export_json(self) -> str:
        entries = await self.list_entries()
        return to_json(entry.model_dump(by_alias=True) for entry in entries)

    def _pipeline(self) -> ImportPipeline:
        return ImportPipeline(self._import_spec, self._repo.list_all, self._repo.create)

    async def _usage_count(self, row: dict) -> int:
        match self._table.kind:
            case CatalogKind.manufacturer:
                return await self._filament_repo.count_referencing("manufacturer", row["name"])
            case CatalogKind.material:
                return await self._filament_repo.count_referencing("material", row["name"])
            case CatalogKind.storage_location:
                return await self._filament_repo.count_referencing(
                    "storage_location", row["name"]
                )
            case CatalogKind.color:
                by_name = await self._filament_repo.count_referencing("color_name", row["name"])
                if by_name:
                    return by_name
                return await self._filament_repo.count_referencing("color_code", row["code"])
            case CatalogKind.diameter:
                try:
                    value = float(row["value"])
                except ValueError:
                    return 0
                return await self._filament_repo.count_referencing("diameter", value)
        return 0

    def _to_response(self, row: dict) -> CatalogResponse:
        match self._table.kind:
            case CatalogKind.color:
                return ColorResponse(
                    id=row["id"], name=row["name"], code=row["code"], created_at=row["created_at"]
                )
            case CatalogKind.diameter:
                return DiameterResponse(
                    id=row["id"], value=row["value"], created_at=row["created_at"]
                )
        return NamedEntryResponse(
            id=row["id"],
            name=row["name"],
            sort_order=row["sort_order"],
            created_at=row["created_at"],
        )
