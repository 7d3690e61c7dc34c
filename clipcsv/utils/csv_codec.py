"""
CSV Codec for pasted multi-table text

This module converts between raw clipboard text and a Document:
- Document: list of tables
- Table: list of rows
- Row: list of string fields

Tables are separated in raw text by the sentinel line ``--,,--``.
Quoted fields may contain commas, newlines and doubled quotes.
"""

import logging
from typing import Any, List, Optional

from .project_constants import TABLE_SEPARATOR

logger = logging.getLogger(__name__)

Row = List[str]
Table = List[Row]
Document = List[Table]


class CsvTableParser:
    """Parses a single CSV segment into rows"""

    def __init__(self):
        self.rows: List[Row] = []
        self.row: Row = []
        self.field = ""
        self.in_quotes = False

    def parse(self, text: str) -> Table:
        """Scan text left to right and return the non-blank rows"""
        self.rows = []
        self.row = []
        self.field = ""
        self.in_quotes = False

        i = 0
        length = len(text)
        while i < length:
            char = text[i]
            if self.in_quotes:
                if char == '"':
                    if i + 1 < length and text[i + 1] == '"':
                        self.field += '"'
                        i += 1
                    else:
                        self.in_quotes = False
                else:
                    self.field += char
            elif char == '"':
                self.in_quotes = True
            elif char == ",":
                self._end_field()
            elif char == "\n":
                self._end_row()
            elif char == "\r":
                pass
            else:
                self.field += char
            i += 1

        # Input without a trailing newline
        if self.field or self.row:
            self._end_row()

        return [row for row in self.rows if not self._is_blank_row(row)]

    def _end_field(self) -> None:
        self.row.append(self.field)
        self.field = ""

    def _end_row(self) -> None:
        self._end_field()
        self.rows.append(self.row)
        self.row = []

    @staticmethod
    def _is_blank_row(row: Row) -> bool:
        """A row holding one whitespace-only field carries no data"""
        return len(row) == 1 and not row[0].strip()


class CsvTableSerializer:
    """Serializes a Document back to text"""

    def __init__(self, separator: str = TABLE_SEPARATOR):
        self.separator = separator

    def serialize(self, document: Document) -> str:
        """Join tables with the separator line"""
        return f"\n{self.separator}\n".join(
            self.serialize_table(table) for table in document
        )

    def serialize_table(self, table: Table) -> str:
        return "\n".join(self.serialize_row(row) for row in table)

    def serialize_row(self, row: List[Any]) -> str:
        return ",".join(self.escape_field(value) for value in row)

    @staticmethod
    def escape_field(value: Optional[Any]) -> str:
        """Quote a field if needed, doubling embedded quotes"""
        if value is None:
            return ""
        text = str(value)
        if '"' in text:
            return '"' + text.replace('"', '""') + '"'
        if "," in text or "\n" in text:
            return f'"{text}"'
        return text


def parse_table(segment: str) -> Table:
    """Parse one CSV segment (no table splitting)"""
    return CsvTableParser().parse(segment)


def split_tables(text: str, separator: str = TABLE_SEPARATOR) -> List[str]:
    """Split raw text into stripped, non-empty table segments"""
    segments = (segment.strip() for segment in text.split(separator))
    return [segment for segment in segments if segment]


def parse(text: str, separator: str = TABLE_SEPARATOR) -> Document:
    """Parse raw text into a Document, omitting tables with no rows"""
    parser = CsvTableParser()
    document: Document = []
    for segment in split_tables(text, separator):
        table = parser.parse(segment)
        if table:
            document.append(table)
    logger.debug(
        "Parsed %d table(s) from %d characters", len(document), len(text)
    )
    return document


def serialize(document: Document, separator: str = TABLE_SEPARATOR) -> str:
    """Serialize a Document to text"""
    return CsvTableSerializer(separator).serialize(document)
