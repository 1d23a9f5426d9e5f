import json
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from app.bulk.csv_parser import parse_file, parse_line
from app.bulk.format_detector import CsvFormat, detect_format
from app.bulk.schemas import ImportIssue, ImportResult
from app.bulk.validators import clean_value, is_blank
from app.exceptions import ValidationError

logger = structlog.get_logger()

Draft = dict[str, Any]
CsvExtractor = Callable[[list[str], CsvFormat], Draft | None]
JsonExtractor = Callable[[dict[str, Any]], Draft | None]


@dataclass(frozen=True)
class ImportColumn:
    field: str
    header: str
    position: int
    json_key: str | None = None
    aliases: tuple[str, ...] = ()

    @property
    def header_names(self) -> tuple[str, ...]:
        return (self.header, *self.aliases)


@dataclass(frozen=True)
class ImportSpec:
    """How one entity kind is read, checked, deduplicated and validated."""

    entity: str
    columns: tuple[ImportColumn, ...]
    required: tuple[str, ...]
    schema: type[BaseModel]
    draft_key: Callable[[Draft], str]
    entity_key: Callable[[dict], str]
    normalize: Callable[[Draft], Draft] | None = None
    csv_extractor: CsvExtractor | None = None
    json_extractor: JsonExtractor | None = None
    # substrings that mark the first line as a header; defaults to every column name
    header_tokens: tuple[str, ...] = ()

    @property
    def expected_columns(self) -> list[str]:
        names: list[str] = []
        for column in self.columns:
            names.extend(column.header_names)
        return names


@dataclass
class ImportTally:
    created: int = 0
    duplicates: int = 0
    errors: int = 0
    issues: list[ImportIssue] = field(default_factory=list)

    def add_created(self) -> None:
        self.created += 1

    def add_duplicate(self, row: int, reason: str) -> None:
        self.duplicates += 1
        self.issues.append(ImportIssue(row=row, outcome="duplicate", reason=reason))

    def add_error(self, row: int, reason: str) -> None:
        self.errors += 1
        self.issues.append(ImportIssue(row=row, outcome="error", reason=reason))

    def to_result(self) -> ImportResult:
        return ImportResult(
            created=self.created,
            duplicates=self.duplicates,
            errors=self.errors,
            issues=self.issues,
        )


def load_json_array(payload: str) -> list[Any]:
    """Decode an import payload, rejecting anything that is not a JSON array."""
    try:
        items = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Invalid JSON format: {exc.msg}") from exc
    if not isinstance(items, list):
        raise ValidationError("Invalid JSON format. Expected an array.")
    return items


def column_value(values: Sequence[str], column: ImportColumn, fmt: CsvFormat) -> str:
    """Read a column by header position when the header names it, else by default position."""
    index = column.position
    if fmt.has_header:
        for name in column.header_names:
            if name in fmt.column_map:
                index = fmt.column_map[name]
                break
    return values[index] if 0 <= index < len(values) else ""


def describe_schema_error(exc: SchemaValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "draft"
    return f"{location}: {first.get('msg', 'invalid value')}"


class ImportPipeline:
    def __init__(
        self,
        spec: ImportSpec,
        list_existing: Callable[[], Awaitable[list[dict]]],
        create: Callable[[BaseModel], Awaitable[object]],
    ) -> None:
        self._spec = spec
        self._list_existing = list_existing
        self._create = create

    async def import_csv(self, content: str) -> ImportResult:
        lines = parse_file(content)
        fmt = detect_format(lines, self._spec.expected_columns, self._spec.header_tokens)
        index = await self._build_index()
        tally = ImportTally()

        for line_no in range(fmt.start_index, len(lines)):
            row = line_no + 1
            values = parse_line(lines[line_no].strip())
            draft = self._extract_csv(values, fmt)
            await self._process(draft, row, index, tally)

        return self._finish(tally, source="csv")

    async def import_json(self, items: Sequence[Any]) -> ImportResult:
        index = await self._build_index()
        tally = ImportTally()

        for position, item in enumerate(items, start=1):
            if not isinstance(item, dict):
                tally.add_error(position, "Expected an object")
                continue
            draft = self._extract_json(item)
            await self._process(draft, position, index, tally)

        return self._finish(tally, source="json")

    async def _build_index(self) -> set[str]:
        existing = await self._list_existing()
        return {self._spec.entity_key(entity) for entity in existing}

    def _extract_csv(self, values: list[str], fmt: CsvFormat) -> Draft | None:
        if self._spec.csv_extractor is not None:
            return self._spec.csv_extractor(values, fmt)
        return {
            column.field: clean_value(column_value(values, column, fmt))
            for column in self._spec.columns
        }

    def _extract_json(self, item: dict[str, Any]) -> Draft | None:
        if self._spec.json_extractor is not None:
            return self._spec.json_extractor(item)
        draft: Draft = {}
        for column in self._spec.columns:
            raw = item.get(column.json_key or column.field)
            draft[column.field] = raw.strip() if isinstance(raw, str) else raw
        return draft

    async def _process(
        self,
        draft: Draft | None,
        row: int,
        index: set[str],
        tally: ImportTally,
    ) -> None:
        spec = self._spec
        if draft is None:
            tally.add_error(row, "Malformed row")
            logger.warning("import_row_malformed", entity=spec.entity, row=row)
            return

        missing = [name for name in spec.required if is_blank(draft.get(name))]
        if missing:
            tally.add_error(row, f"Missing required field(s): {', '.join(missing)}")
            logger.warning(
                "import_row_missing_fields", entity=spec.entity, row=row, missing=missing
            )
            return

        draft = {key: value for key, value in draft.items() if not is_blank(value)}
        if spec.normalize is not None:
            draft = spec.normalize(draft)

        key = spec.draft_key(draft)
        if key in index:
            tally.add_duplicate(row, "Already exists")
            logger.debug("import_duplicate_skipped", entity=spec.entity, row=row)
            return

        try:
            validated = spec.schema.model_validate(draft)
        except SchemaValidationError as exc:
            reason = describe_schema_error(exc)
            tally.add_error(row, reason)
            logger.warning("import_row_invalid", entity=spec.entity, row=row, reason=reason)
            return

        try:
            await self._create(validated)
        except Exception as exc:
            tally.add_error(row, str(exc) or exc.__class__.__name__)
            logger.warning("import_row_failed", entity=spec.entity, row=row, error=str(exc))
            return

        index.add(key)
        tally.add_created()
        logger.debug("import_row_created", entity=spec.entity, row=row)

    def _finish(self, tally: ImportTally, source: str) -> ImportResult:
        logger.info(
            "import_completed",
            entity=self._spec.entity,
            source=source,
            created=tally.created,
            duplicates=tally.duplicates,
            errors=tally.errors,
        )
        return tally.to_result()
