"""
Cell- and row-level parsing of a realized gain/loss CSV export.

Rows that are not shaped like a transaction (headers, blank separators,
disclaimers and totals) raise `UnparsedLineError`, which callers are
expected to skip. A transaction-shaped row whose amount or date cells
cannot be read raises `AmountParseError` or `DateParseError`; those mean
the export itself is corrupt and are not meant to be skipped.
"""
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional, Sequence

from gainsreport.config import ParsingConfig
from gainsreport.types import UNKNOWN_DATE, Transaction

__all__ = [
    "ParseError",
    "UnparsedLineError",
    "AmountParseError",
    "DateParseError",
    "sanitize_amount",
    "parse_date",
    "parse_record",
]

_DIGITS = frozenset("0123456789")

# Column positions in the export. Column 9 is unused.
_AMOUNT_COLUMNS = {
    2: "quantity",
    5: "proceeds",
    6: "cost_basis",
    7: "short_term_net",
    8: "long_term_net",
}
_DATE_COLUMNS = {3: "date_acquired", 4: "date_sold"}


class ParseError(ValueError):
    """Base class for all parsing failures."""

    def __init__(self, message: str, value: Any, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.value = value
        self.field = field

    def __str__(self) -> str:
        message = super().__str__()
        return f"{self.field}: {message}" if self.field else message


class UnparsedLineError(ParseError):
    """The row is not a transaction and should be skipped."""


class AmountParseError(ParseError):
    """A numeric cell holds no readable number."""


class DateParseError(ParseError):
    """A date cell does not match the expected format."""


def _scan_number(text: str) -> Optional[str]:
    """
    Returns the first run of digits in `text`, extended by a fractional part
    when a '.' is immediately followed by another digit run.

    Sign and currency prefixes are skipped over like any other leading text;
    the caller decides the sign from the first character.
    """
    n = len(text)
    start = 0
    while start < n and text[start] not in _DIGITS:
        start += 1
    if start == n:
        return None

    end = start
    while end < n and text[end] in _DIGITS:
        end += 1
    if end + 1 < n and text[end] == "." and text[end + 1] in _DIGITS:
        end += 1
        while end < n and text[end] in _DIGITS:
            end += 1
    return text[start:end]


def sanitize_amount(raw: str, placeholders: Iterable[str] = ("--",)) -> float:
    """
    Converts a raw numeric cell into a float.

    Handles a leading '$', thousands separators and a leading '-'. Empty
    cells and placeholder tokens read as 0.0.

    Args:
        raw: The cell text as read from the CSV.
        placeholders: Tokens that stand for "no value".

    Returns:
        The parsed value.

    Raises:
        AmountParseError: If the cell contains no number at all.
    """
    text = raw.strip()
    if text == "" or text in placeholders:
        return 0.0

    text = text.replace(",", "")
    digits = _scan_number(text)
    if digits is None:
        raise AmountParseError(f"no number found in {raw!r}", raw)

    value = float(digits)
    if text.startswith("-"):
        value = -value
    return value


def parse_date(raw: str, date_format: str = "%m/%d/%Y", unknown: str = "Unknown") -> date:
    """
    Parses a date cell. The `unknown` token maps to UNKNOWN_DATE.

    Parsing is strict: the parsed date has to format back to the exact input,
    so "1/5/2024" is rejected for the default zero-padded format.
    """
    if raw == unknown:
        return UNKNOWN_DATE

    try:
        parsed = datetime.strptime(raw, date_format).date()
    except ValueError as e:
        raise DateParseError(f"cannot parse {raw!r} as a date ({date_format})", raw) from e

    if parsed.strftime(date_format) != raw:
        raise DateParseError(f"cannot parse {raw!r} as a date ({date_format})", raw)
    return parsed


def parse_record(row: Sequence[str], config: Optional[ParsingConfig] = None) -> Transaction:
    """
    Maps one CSV row to a Transaction.

    Raises:
        UnparsedLineError: If the row has the wrong number of cells or no symbol.
        AmountParseError: If a numeric cell cannot be read.
        DateParseError: If a date cell cannot be read.
    """
    config = config or ParsingConfig()

    if len(row) != config.expected_fields:
        raise UnparsedLineError(
            f"expected {config.expected_fields} fields, got {len(row)}", list(row)
        )
    if row[0] == "":
        raise UnparsedLineError("row has no symbol", list(row))

    values: Dict[str, Any] = {"symbol": row[0], "security": row[1]}
    for column, name in _AMOUNT_COLUMNS.items():
        try:
            values[name] = sanitize_amount(row[column], config.placeholders)
        except ParseError as e:
            e.field = name
            raise
    for column, name in _DATE_COLUMNS.items():
        try:
            values[name] = parse_date(row[column], config.date_format, config.unknown_date)
        except ParseError as e:
            e.field = name
            raise

    return Transaction(**values)
