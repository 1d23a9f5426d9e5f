import json
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from app.bulk.csv_parser import escape_field


@dataclass(frozen=True)
class ExportField:
    header: str
    key: str
    formatter: Callable[[Any], Any] | None = None

    def read(self, entity: Mapping[str, Any]) -> Any:
        value = entity.get(self.key)
        if self.formatter is not None and value is not None:
            return self.formatter(value)
        return value


def date_only(value: Any) -> str:
    """Render an ISO date or datetime as YYYY-MM-DD."""
    return str(value)[:10]


def to_csv(entities: Iterable[Mapping[str, Any]], fields: Sequence[ExportField]) -> str:
    lines = [",".join(field.header for field in fields)]
    for entity in entities:
        lines.append(",".join(escape_field(field.read(entity)) for field in fields))
    return "\n".join(lines) + "\n"


def to_json(entities: Iterable[Any]) -> str:
    return json.dumps(list(entities), indent=2, ensure_ascii=False)
