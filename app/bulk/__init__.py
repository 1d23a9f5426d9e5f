from app.bulk.batch import BatchResult, ItemOutcome, OutcomeStatus, process_batch
from app.bulk.csv_parser import escape_field, parse_file, parse_line
from app.bulk.export import ExportField, to_csv, to_json
from app.bulk.format_detector import CsvFormat, detect_format
from app.bulk.pipeline import ImportColumn, ImportPipeline, ImportSpec, load_json_array
from app.bulk.validators import partition_ids, validate_id, validate_ids

__all__ = [
    "BatchResult",
    "CsvFormat",
    "ExportField",
    "ImportColumn",
    "ImportPipeline",
    "ImportSpec",
    "ItemOutcome",
    "OutcomeStatus",
    "detect_format",
    "escape_field",
    "load_json_array",
    "parse_file",
    "parse_line",
    "partition_ids",
    "process_batch",
    "to_csv",
    "to_json",
    "validate_id",
    "validate_ids",
]
