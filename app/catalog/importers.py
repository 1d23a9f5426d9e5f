from collections.abc import Sequence
from typing import Any

from app.bulk.export import ExportField
from app.bulk.format_detector import CsvFormat
from app.bulk.pipeline import Draft, ImportColumn, ImportSpec
from app.bulk.validators import clean_value, dedup_key
from app.catalog.models import CatalogKind
from app.catalog.schemas import ColorCreate, DiameterCreate, NamedEntryCreate


def _cell(values: Sequence[str], index: int | None) -> str:
    if index is None or not 0 <= index < len(values):
        return ""
    return clean_value(values[index])


def _branded_color(brand: str, color_name: str, code: str) -> Draft:
    name = f"{color_name} ({brand})" if brand and color_name else color_name
    return {"name": name, "code": code}


def extract_color_row(values: list[str], fmt: CsvFormat) -> Draft | None:
    """Read either `name,code` or `brand,colorName,hexCode`; None when the row is too short."""
    columns = fmt.column_map if fmt.has_header else {}
    code_index = columns.get("hexcode", columns.get("code"))

    if code_index is not None and "brand" in columns and "colorname" in columns:
        return _branded_color(
            _cell(values, columns["brand"]),
            _cell(values, columns["colorname"]),
            _cell(values, code_index),
        )
    if code_index is not None and "name" in columns:
        return {"name": _cell(values, columns["name"]), "code": _cell(values, code_index)}

    if len(values) >= 3:
        return _branded_color(_cell(values, 0), _cell(values, 1), _cell(values, 2))
    if len(values) == 2:
        return {"name": _cell(values, 0), "code": _cell(values, 1)}
    return None


def extract_color_object(item: dict[str, Any]) -> Draft:
    code = clean_value(item.get("code", item.get("hexCode")))
    if item.get("brand") is not None and item.get("colorName") is not None:
        return _branded_color(clean_value(item["brand"]), clean_value(item["colorName"]), code)
    return {"name": clean_value(item.get("name")), "code": code}


def normalize_color(draft: Draft) -> Draft:
    code = draft["code"]
    if not code.startswith("#"):
        code = f"#{code}"
    return {**draft, "code": code}


def _named_spec(entity: str, aliases: tuple[str, ...] = ()) -> ImportSpec:
    return ImportSpec(
        entity=entity,
        columns=(ImportColumn(field="name", header="name", position=0, aliases=aliases),),
        required=("name",),
        schema=NamedEntryCreate,
        draft_key=lambda draft: dedup_key(draft["name"]),
        entity_key=lambda entity: dedup_key(entity["name"]),
    )


CATALOG_IMPORT_SPECS: dict[CatalogKind, ImportSpec] = {
    CatalogKind.manufacturer: _named_spec("manufacturer", aliases=("hersteller", "vendor")),
    CatalogKind.material: _named_spec("material", aliases=("material", "type")),
    CatalogKind.storage_location: _named_spec("storage_location"),
    CatalogKind.diameter: ImportSpec(
        entity="diameter",
        columns=(ImportColumn(field="value", header="value", position=0),),
        required=("value",),
        schema=DiameterCreate,
        draft_key=lambda draft: dedup_key(draft["value"]),
        entity_key=lambda entity: dedup_key(entity["value"]),
    ),
    CatalogKind.color: ImportSpec(
        entity="color",
        columns=(
            ImportColumn(field="name", header="name", position=0),
            ImportColumn(field="code", header="code", position=1, aliases=("hexcode",)),
            ImportColumn(field="brand", header="brand", position=0),
            ImportColumn(field="color_name", header="colorname", position=1, json_key="colorName"),
        ),
        required=("name", "code"),
        schema=ColorCreate,
        draft_key=lambda draft: dedup_key(draft["name"], draft["code"]),
        entity_key=lambda entity: dedup_key(entity["name"], entity["code"]),
        normalize=normalize_color,
        csv_extractor=extract_color_row,
        json_extractor=extract_color_object,
        header_tokens=("name", "brand"),
    ),
}

CATALOG_EXPORT_FIELDS: dict[CatalogKind, tuple[ExportField, ...]] = {
    CatalogKind.manufacturer: (ExportField(header="name", key="name"),),
    CatalogKind.material: (ExportField(header="name", key="name"),),
    CatalogKind.storage_location: (ExportField(header="name", key="name"),),
    CatalogKind.color: (
        ExportField(header="name", key="name"),
        ExportField(header="code", key="code"),
    ),
    CatalogKind.diameter: (ExportField(header="value", key="value"),),
}
