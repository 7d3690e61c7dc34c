#!/usr/bin/env python3
"""
Multi-Table Viewer Widget - Paste, edit and export CSV tables

Shows every table of the pasted document as its own grid. The first row
of a table is rendered as the header. Double-clicking a body cell opens an
inline editor: Enter or leaving the cell commits, Escape cancels.
"""

import logging
from pathlib import Path
from typing import List, Optional

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QTableWidget, QTableWidgetItem,
    QPushButton, QFileDialog, QMessageBox, QLabel, QHeaderView,
    QAbstractItemView, QScrollArea, QStatusBar, QLineEdit, QGroupBox
)
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QKeySequence, QShortcut

from ...utils.config import Config
from ...utils.csv_codec import Table
from ...utils.project_constants import CSV_FILE_FILTER
from .paste_controller import PasteController, PasteResult, PasteStatus
from .table_edit_store import EditCursor

logger = logging.getLogger(__name__)


class CellEditor(QLineEdit):
    """Inline cell editor that reports Escape as a cancel"""

    cancelled = pyqtSignal()

    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Escape:
            event.accept()
            self.cancelled.emit()
            return
        super().keyPressEvent(event)


class CsvGridTable(QTableWidget):
    """Grid for one table of the document"""

    cell_edit_requested = pyqtSignal(int, int, int)  # table, row, column

    def __init__(self, table_index: int, show_header_row: bool = True,
                 alternating_row_colors: bool = True, parent=None):
        super().__init__(parent)
        self.table_index = table_index
        self.show_header_row = show_header_row
        self.setup_table(alternating_row_colors)

    @property
    def row_offset(self) -> int:
        """Document row index of the first grid row"""
        return 1 if self.show_header_row else 0

    def setup_table(self, alternating_row_colors: bool):
        self.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectItems)
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.setAlternatingRowColors(alternating_row_colors)
        self.setWordWrap(True)
        self.setSortingEnabled(False)  # Grid rows map to document rows by position
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Interactive)
        self.horizontalHeader().setStretchLastSection(True)
        self.cellDoubleClicked.connect(self._on_cell_double_clicked)

    def load_table(self, table: Table):
        """Populate the grid from a table; ragged rows are padded for display"""
        column_count = max((len(row) for row in table), default=0)
        body = table[self.row_offset:]

        self.clear()
        self.setColumnCount(column_count)
        self.setRowCount(len(body))

        if self.show_header_row and table:
            header = table[0]
            labels = [header[i] if i < len(header) else "" for i in range(column_count)]
            self.setHorizontalHeaderLabels(labels)

        for grid_row, row in enumerate(body):
            for col in range(column_count):
                if col < len(row):
                    item = QTableWidgetItem(row[col])
                    item.setToolTip(row[col])
                else:
                    # No such cell in the document
                    item = QTableWidgetItem("")
                    item.setFlags(Qt.ItemFlag.NoItemFlags)
                self.setItem(grid_row, col, item)

        self.resizeColumnsToContents()
        self.resizeRowsToContents()
        self.fit_height()

    def fit_height(self):
        """Size the grid to show all rows so the page scrolls instead"""
        height = self.horizontalHeader().height() + 2 * self.frameWidth()
        for row in range(self.rowCount()):
            height += self.rowHeight(row)
        if self.horizontalScrollBar().isVisible():
            height += self.horizontalScrollBar().height()
        self.setFixedHeight(height)

    def set_cell_text(self, row_index: int, col_index: int, value: str):
        item = self.item(row_index - self.row_offset, col_index)
        if item is not None:
            item.setText(value)
            item.setToolTip(value)
            self.resizeRowToContents(row_index - self.row_offset)

    def _on_cell_double_clicked(self, grid_row: int, col: int):
        self.cell_edit_requested.emit(self.table_index, grid_row + self.row_offset, col)


class MultiTableViewerWidget(QWidget):
    """Main widget: paste from clipboard, edit cells, export CSV"""

    document_changed = pyqtSignal()          # Emitted when a paste replaces the tables
    cell_edited = pyqtSignal(int, int, int)  # Emitted after a committed cell change

    def __init__(self, controller: Optional[PasteController] = None,
                 config: Optional[Config] = None, parent=None):
        super().__init__(parent)
        self.config = config
        self.controller = controller or PasteController(config=config)
        self.store = self.controller.store
        self.grids: List[CsvGridTable] = []
        self.editor: Optional[CellEditor] = None

        viewer_config = config.get_viewer_config() if config else {}
        self.show_header_row = viewer_config.get('show_header_row', True)
        self.alternating_row_colors = viewer_config.get('alternating_row_colors', True)

        self.init_ui()
        self.update_ui_state()

    def init_ui(self):
        """Initialize the user interface"""
        layout = QVBoxLayout(self)
        layout.setSpacing(5)

        self.create_toolbar(layout)

        # Informational / error message for the last paste
        self.message_label = QLabel("")
        self.message_label.setStyleSheet("color: #888;")
        self.message_label.setVisible(False)
        layout.addWidget(self.message_label)

        # Tables stacked vertically in one scrolling page
        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.tables_container = QWidget()
        self.tables_layout = QVBoxLayout(self.tables_container)
        self.tables_layout.addStretch()
        self.scroll_area.setWidget(self.tables_container)
        layout.addWidget(self.scroll_area)

        self.status_bar = QStatusBar()
        self.status_label = QLabel("Nothing pasted yet")
        self.status_bar.addWidget(self.status_label)
        layout.addWidget(self.status_bar)

        self.setup_shortcuts()

    def create_toolbar(self, layout):
        toolbar_layout = QHBoxLayout()

        self.paste_btn = QPushButton("Paste from Clipboard")
        self.paste_btn.clicked.connect(self.paste_from_clipboard)
        self.paste_btn.setToolTip("Read CSV text from the clipboard and render it (Ctrl+Shift+V)")
        toolbar_layout.addWidget(self.paste_btn)

        self.export_btn = QPushButton("Export CSV")
        self.export_btn.clicked.connect(self.export_csv)
        self.export_btn.setToolTip("Save all tables as one CSV file (Ctrl+S)")
        self.export_btn.setEnabled(False)
        toolbar_layout.addWidget(self.export_btn)

        toolbar_layout.addStretch()

        self.info_label = QLabel("")
        self.info_label.setStyleSheet("color: #666; font-style: italic;")
        toolbar_layout.addWidget(self.info_label)

        layout.addLayout(toolbar_layout)

    def setup_shortcuts(self):
        QShortcut(QKeySequence("Ctrl+Shift+V"), self, self.paste_from_clipboard)
        QShortcut(QKeySequence("Ctrl+S"), self, self.export_csv)

    # --- Paste ---

    def paste_from_clipboard(self) -> PasteResult:
        """Replace the tables with the clipboard contents"""
        self._discard_editor()
        result = self.controller.paste_from_clipboard()
        self._apply_paste_result(result)
        return result

    def load_text(self, text: str, source: str = "text") -> PasteResult:
        """Replace the tables with parsed text (e.g. a file from the command line)"""
        self._discard_editor()
        result = self.controller.load_text(text, source=source)
        self._apply_paste_result(result)
        return result

    def _apply_paste_result(self, result: PasteResult):
        if result.status == PasteStatus.LOADED:
            self.show_message("")
            self.status_label.setText(result.message)
        else:
            self.show_message(result.message)
            self.status_label.setText("No tables")
        self.refresh_tables()
        self.document_changed.emit()

    def show_message(self, message: str):
        self.message_label.setText(message)
        self.message_label.setVisible(bool(message))

    # --- Rendering ---

    def refresh_tables(self):
        """Rebuild one grid per table from the store"""
        for grid in self.grids:
            self.tables_layout.removeWidget(grid.parentWidget())
            grid.parentWidget().deleteLater()
        self.grids = []

        for table_index, table in enumerate(self.store.document):
            group = QGroupBox(f"Table {table_index + 1}")
            group_layout = QVBoxLayout(group)

            grid = CsvGridTable(table_index, self.show_header_row, self.alternating_row_colors)
            grid.load_table(table)
            grid.cell_edit_requested.connect(self.begin_cell_edit)
            group_layout.addWidget(grid)

            # Keep the trailing stretch last
            self.tables_layout.insertWidget(self.tables_layout.count() - 1, group)
            self.grids.append(grid)

        self.update_ui_state()

    # --- Editing ---

    def begin_cell_edit(self, table_idx: int, row_idx: int, col_idx: int) -> bool:
        """Open an inline editor on a cell"""
        if self.store.is_editing:
            self.commit_cell_edit()

        if not 0 <= table_idx < len(self.grids):
            return False
        grid = self.grids[table_idx]
        if row_idx < grid.row_offset:
            return False  # Header row is shown in the grid header, not as a cell

        value = self.store.get_cell(table_idx, row_idx, col_idx)
        if value is None or not self.store.start_edit(table_idx, row_idx, col_idx, value):
            return False

        editor = CellEditor()
        editor.setText(value)
        editor.textChanged.connect(self.store.update_edit_value)
        editor.returnPressed.connect(self.commit_cell_edit)
        editor.editingFinished.connect(self.commit_cell_edit)
        editor.cancelled.connect(self.cancel_cell_edit)
        grid.setCellWidget(row_idx - grid.row_offset, col_idx, editor)
        editor.setFocus()
        editor.selectAll()
        self.editor = editor
        return True

    def commit_cell_edit(self):
        """Write the editor's value to the store (Enter or focus loss)"""
        cursor = self.store.edit_cursor
        if cursor is None:
            return
        changed = self.store.commit_edit()
        self._close_editor(cursor)

        if changed:
            value = self.store.get_cell(cursor.table_index, cursor.row_index, cursor.col_index)
            self.grids[cursor.table_index].set_cell_text(cursor.row_index, cursor.col_index, value)
            logger.info("Edited table %d row %d column %d",
                        cursor.table_index, cursor.row_index, cursor.col_index)
            self.cell_edited.emit(cursor.table_index, cursor.row_index, cursor.col_index)
        self.update_ui_state()

    def cancel_cell_edit(self):
        """Drop the editor without changing the document (Escape)"""
        cursor = self.store.edit_cursor
        if cursor is None:
            return
        self.store.cancel_edit()
        self._close_editor(cursor)

    def _close_editor(self, cursor: EditCursor):
        editor, self.editor = self.editor, None
        if editor is not None:
            editor.blockSignals(True)
        if 0 <= cursor.table_index < len(self.grids):
            grid = self.grids[cursor.table_index]
            grid.removeCellWidget(cursor.row_index - grid.row_offset, cursor.col_index)

    def _discard_editor(self):
        if self.store.is_editing:
            self.cancel_cell_edit()

    # --- Export ---

    def export_csv(self):
        """Ask for a file name and export all tables"""
        if not self.store.document:
            QMessageBox.warning(self, "No Data", "Paste CSV data first")
            return

        if self.store.is_editing:
            self.commit_cell_edit()

        default_path = self.controller.default_export_path()
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Export CSV", str(default_path), CSV_FILE_FILTER
        )
        if not file_path:
            return

        success, message = self.controller.export_to_file(Path(file_path))
        if success:
            self.status_label.setText(message)
            self.update_ui_state()
        else:
            QMessageBox.critical(self, "Error Exporting File", message)

    # --- State ---

    def update_ui_state(self):
        """Update buttons and summary based on current data"""
        info = self.store.get_structure_info()
        has_data = info['tables'] > 0
        self.export_btn.setEnabled(has_data)

        if has_data:
            changes_text = " (modified)" if info['has_changes'] else ""
            self.info_label.setText(
                f"{info['tables']} table(s), {info['total_rows']} row(s){changes_text}"
            )
        else:
            self.info_label.setText("")

    def has_unsaved_changes(self) -> bool:
        return self.store.has_changes
