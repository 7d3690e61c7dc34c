#!/usr/bin/env python3
"""
CSV Viewer Package - Multi-table clipboard CSV viewing and editing

This package provides the editable table store, the clipboard paste and
export flow, and the Qt widget that renders pasted tables.
"""

from .table_edit_store import (
    TableEditStore,
    EditCursor
)

from .clipboard_io import (
    ClipboardError,
    ClipboardUnavailable,
    ClipboardReadError,
    QtClipboardReader,
    FileSaver,
    FileTextLoader
)

from .paste_controller import (
    PasteController,
    PasteResult,
    PasteStatus
)

from .multi_table_widget import (
    MultiTableViewerWidget,
    CsvGridTable,
    CellEditor
)

__all__ = [
    # Core components
    'TableEditStore',
    'EditCursor',
    'PasteController',
    'PasteResult',
    'PasteStatus',

    # Clipboard and file collaborators
    'ClipboardError',
    'ClipboardUnavailable',
    'ClipboardReadError',
    'QtClipboardReader',
    'FileSaver',
    'FileTextLoader',

    # Widgets
    'MultiTableViewerWidget',
    'CsvGridTable',
    'CellEditor'
]
