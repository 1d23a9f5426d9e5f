from collections.abc import Sequence
from dataclasses import dataclass, field

from app.bulk.csv_parser import parse_line


@dataclass(frozen=True)
class CsvFormat:
    start_index: int = 0
    column_map: dict[str, int] = field(default_factory=dict)

    @property
    def has_header(self) -> bool:
        return self.start_index == 1


def detect_format(
    lines: Sequence[str],
    expected_columns: Sequence[str],
    header_tokens: Sequence[str] | None = None,
) -> CsvFormat:
    """Detect a header row and map expected column names to field indexes.

    The first line counts as a header when any header token (by default the
    expected column names) occurs in it as a case-insensitive substring. Each
    expected column then maps to the first header field equal to it. Without
    a header the map stays empty and callers fall back to positional defaults.
    """
    if not lines:
        return CsvFormat()

    header_row = lines[0].lower()
    tokens = [tok.lower() for tok in (header_tokens or expected_columns)]
    if not any(tok in header_row for tok in tokens):
        return CsvFormat()

    headers = [h.strip().lower() for h in parse_line(header_row)]
    column_map: dict[str, int] = {}
    for col in (c.lower() for c in expected_columns):
        if col in headers and col not in column_map:
            column_map[col] = headers.index(col)

    return CsvFormat(start_index=1, column_map=column_map)
