from dataclasses import dataclass
from enum import StrEnum


class CatalogKind(StrEnum):
    manufacturer = "manufacturer"
    material = "material"
    color = "color"
    diameter = "diameter"
    storage_location = "storage_location"


@dataclass(frozen=True)
class CatalogTable:
    kind: CatalogKind
    table: str
    label: str
    path: str
    fields: tuple[str, ...]
    sortable: bool = False


CATALOG_TABLES: dict[CatalogKind, CatalogTable] = {
    CatalogKind.manufacturer: CatalogTable(
        kind=CatalogKind.manufacturer,
        table="manufacturers",
        label="Manufacturer",
        path="manufacturers",
        fields=("name",),
        sortable=True,
    ),
    CatalogKind.material: CatalogTable(
        kind=CatalogKind.material,
        table="materials",
        label="Material",
        path="materials",
        fields=("name",),
        sortable=True,
    ),
    CatalogKind.color: CatalogTable(
        kind=CatalogKind.color,
        table="colors",
        label="Color",
        path="colors",
        fields=("name", "code"),
    ),
    CatalogKind.diameter: CatalogTable(
        kind=CatalogKind.diameter,
        table="diameters",
        label="Diameter",
        path="diameters",
        fields=("value",),
    ),
    CatalogKind.storage_location: CatalogTable(
        kind=CatalogKind.storage_location,
        table="storage_locations",
        label="Storage location",
        path="storage-locations",
        fields=("name",),
        sortable=True,
    ),
}
