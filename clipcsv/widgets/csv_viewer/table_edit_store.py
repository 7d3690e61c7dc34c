#!/usr/bin/env python3
"""
Table Edit Store - In-memory multi-table document with single-cell editing

Holds the Document parsed from a paste and the Edit Cursor for the cell
currently being edited. Edits are addressed by (table, row, column) index
and written copy-on-write, so tables and rows that were not edited keep
their identity.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ...utils.csv_codec import Document, Row, Table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditCursor:
    """Coordinate of the cell being edited"""
    table_index: int
    row_index: int
    col_index: int


class TableEditStore:
    """Source of truth for the pasted tables and the active edit"""

    def __init__(self, document: Optional[Document] = None):
        self._document: Document = list(document) if document else []
        self._cursor: Optional[EditCursor] = None
        self._edit_value: str = ""
        self.has_changes: bool = False

    @property
    def document(self) -> Document:
        return self._document

    @property
    def edit_cursor(self) -> Optional[EditCursor]:
        return self._cursor

    @property
    def edit_value(self) -> str:
        return self._edit_value

    @property
    def is_editing(self) -> bool:
        return self._cursor is not None

    def is_valid_cell(self, table_idx: int, row_idx: int, col_idx: int) -> bool:
        """Check that the coordinate addresses an existing cell"""
        if not 0 <= table_idx < len(self._document):
            return False
        table = self._document[table_idx]
        if not 0 <= row_idx < len(table):
            return False
        return 0 <= col_idx < len(table[row_idx])

    def start_edit(self, table_idx: int, row_idx: int, col_idx: int, current_value: str) -> bool:
        """Begin editing a cell. Out-of-range coordinates are ignored."""
        if not self.is_valid_cell(table_idx, row_idx, col_idx):
            logger.debug("Ignoring edit outside document: (%d, %d, %d)", table_idx, row_idx, col_idx)
            return False
        self._cursor = EditCursor(table_idx, row_idx, col_idx)
        self._edit_value = current_value if current_value is not None else ""
        return True

    def update_edit_value(self, new_value: str) -> bool:
        """Replace the working value of the active edit"""
        if self._cursor is None:
            return False
        self._edit_value = new_value if new_value is not None else ""
        return True

    def commit_edit(self) -> bool:
        """Write the working value into the document and end the edit.

        Returns True only when the document changed. Any string is accepted,
        so a single-cell row can be emptied; that row is written out as a
        blank line and dropped the next time the text is parsed.
        """
        cursor = self._cursor
        if cursor is None:
            return False

        value = self._edit_value
        self._clear_cursor()

        if not self.is_valid_cell(cursor.table_index, cursor.row_index, cursor.col_index):
            logger.warning("Dropping edit for stale cell (%d, %d, %d)",
                           cursor.table_index, cursor.row_index, cursor.col_index)
            return False

        table = self._document[cursor.table_index]
        row: Row = list(table[cursor.row_index])
        if row[cursor.col_index] == value:
            return False
        row[cursor.col_index] = value

        new_table: Table = list(table)
        new_table[cursor.row_index] = row
        new_document: Document = list(self._document)
        new_document[cursor.table_index] = new_table
        self._document = new_document
        self.has_changes = True

        logger.debug("Committed cell (%d, %d, %d)",
                     cursor.table_index, cursor.row_index, cursor.col_index)
        return True

    def cancel_edit(self) -> None:
        """Discard the active edit without touching the document"""
        self._clear_cursor()

    def replace_document(self, new_document: Document) -> None:
        """Replace all tables. Any active edit is dropped."""
        self._clear_cursor()
        self._document = list(new_document)
        self.has_changes = False

    def clear(self) -> None:
        self.replace_document([])

    def _clear_cursor(self) -> None:
        self._cursor = None
        self._edit_value = ""

    def get_table_count(self) -> int:
        return len(self._document)

    def get_table(self, table_idx: int) -> Optional[Table]:
        if 0 <= table_idx < len(self._document):
            return self._document[table_idx]
        return None

    def get_cell(self, table_idx: int, row_idx: int, col_idx: int) -> Optional[str]:
        """Get a cell value, or None when the coordinate is out of range"""
        if not self.is_valid_cell(table_idx, row_idx, col_idx):
            return None
        return self._document[table_idx][row_idx][col_idx]

    @staticmethod
    def get_column_count(table: Table) -> int:
        """Width of the widest row"""
        return max((len(row) for row in table), default=0)

    def get_structure_info(self) -> Dict[str, Any]:
        """Get summary of the document shape"""
        tables: List[Dict[str, int]] = [
            {'rows': len(table), 'columns': self.get_column_count(table)}
            for table in self._document
        ]
        return {
            'tables': len(tables),
            'table_shapes': tables,
            'total_rows': sum(t['rows'] for t in tables),
            'has_changes': self.has_changes,
            'editing': self.is_editing
        }
