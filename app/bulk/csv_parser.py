import re

QUOTE = '"'
DELIMITER = ","
_NEEDS_QUOTING = (DELIMITER, QUOTE, "\n", "\r")
_LINE_BREAK = re.compile(r"\r?\n")


def parse_line(line: str) -> list[str]:
    """Split one CSV line into trimmed fields, honouring quoted segments."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]
        if char == QUOTE:
            # "" inside a quoted section is an escaped quote
            if in_quotes and i + 1 < len(line) and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def parse_file(content: str) -> list[str]:
    """Split CSV content on LF or CRLF line breaks, dropping whitespace-only lines."""
    return [line for line in _LINE_BREAK.split(content) if line.strip()]


def escape_field(value: object) -> str:
    if value is None:
        return ""
    text = str(value)
    if any(token in text for token in _NEEDS_QUOTING):
        return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE
    return text
