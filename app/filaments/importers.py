from app.bulk.export import ExportField, date_only
from app.bulk.pipeline import ImportColumn, ImportSpec
from app.bulk.validators import dedup_key
from app.filaments.schemas import FilamentCreate

# (draft field, CSV header / JSON key) in the positional default order
_LAYOUT = (
    ("name", "name"),
    ("manufacturer", "manufacturer"),
    ("material", "material"),
    ("color_name", "colorName"),
    ("color_code", "colorCode"),
    ("diameter", "diameter"),
    ("print_temp", "printTemp"),
    ("total_weight", "totalWeight"),
    ("remaining_percentage", "remainingPercentage"),
    ("purchase_date", "purchaseDate"),
    ("purchase_price", "purchasePrice"),
    ("status", "status"),
    ("spool_type", "spoolType"),
    ("dryer_count", "dryerCount"),
    ("last_drying_date", "lastDryingDate"),
    ("storage_location", "storageLocation"),
)

DATE_FIELDS = frozenset({"purchase_date", "last_drying_date"})

FILAMENT_COLUMNS = tuple(
    ImportColumn(field=field, header=key.lower(), position=position, json_key=key)
    for position, (field, key) in enumerate(_LAYOUT)
)

FILAMENT_EXPORT_FIELDS = tuple(
    ExportField(header=key, key=field, formatter=date_only if field in DATE_FIELDS else None)
    for field, key in _LAYOUT
)

FILAMENT_IMPORT_SPEC = ImportSpec(
    entity="filament",
    columns=FILAMENT_COLUMNS,
    required=("name", "material", "color_name"),
    schema=FilamentCreate,
    draft_key=lambda draft: dedup_key(draft["name"]),
    entity_key=lambda entity: dedup_key(entity["name"]),
)
