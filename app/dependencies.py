from collections.abc import Callable
from typing import Annotated

from fastapi import Depends

from app.auth import get_owner_id, verify_token
from app.catalog.models import CATALOG_TABLES, CatalogKind
from app.catalog.repository import CatalogRepository
from app.catalog.service import CatalogService
from app.database import get_db
from app.filaments.repository import FilamentRepository
from app.filaments.service import FilamentService

APIKey = Annotated[dict, Depends(verify_token)]
OwnerId = Annotated[int, Depends(get_owner_id)]


def get_filament_repo() -> FilamentRepository:
    return FilamentRepository(get_db())


def get_filament_service() -> FilamentService:
    return FilamentService(get_filament_repo())


FilamentServiceDep = Annotated[FilamentService, Depends(get_filament_service)]


def get_catalog_service(kind: CatalogKind) -> CatalogService:
    table = CATALOG_TABLES[kind]
    return CatalogService(table, CatalogRepository(get_db(), table), get_filament_repo())


def catalog_service_provider(kind: CatalogKind) -> Callable[[], CatalogService]:
    def provide() -> CatalogService:
        return get_catalog_service(kind)

    return provide
