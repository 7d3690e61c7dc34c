#!/usr/bin/env python3
"""
Paste Controller - clipboard paste and CSV export flow

Connects the clipboard reader, the CSV codec, the edit store and the file
saver. Kept free of widgets so the flow can run headless.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union

from ...utils.config import Config
from ...utils.csv_codec import parse, serialize
from ...utils.project_constants import (
    DEFAULT_EXPORT_FILENAME, EXPORT_MIME_TYPE, TABLE_SEPARATOR
)
from .clipboard_io import (
    ClipboardReadError, ClipboardUnavailable, FileSaver, QtClipboardReader
)
from .table_edit_store import TableEditStore

logger = logging.getLogger(__name__)


class PasteStatus(Enum):
    """Outcome of a paste attempt"""
    LOADED = "loaded"
    EMPTY_INPUT = "empty_input"
    CLIPBOARD_UNAVAILABLE = "clipboard_unavailable"
    CLIPBOARD_READ_ERROR = "clipboard_read_error"


@dataclass
class PasteResult:
    """Result of a paste, shown to the user by the view"""
    status: PasteStatus
    message: str
    table_count: int = 0

    @property
    def is_error(self) -> bool:
        return self.status in (PasteStatus.CLIPBOARD_UNAVAILABLE,
                               PasteStatus.CLIPBOARD_READ_ERROR)


class PasteController:
    """Runs paste and export against a TableEditStore"""

    def __init__(self, store: Optional[TableEditStore] = None, clipboard_reader=None,
                 file_saver=None, config: Optional[Config] = None,
                 export_filename: Optional[str] = None):
        self.store = store if store is not None else TableEditStore()
        self.clipboard_reader = clipboard_reader if clipboard_reader is not None else QtClipboardReader()
        self.file_saver = file_saver if file_saver is not None else FileSaver()
        self.config = config
        # Session-only override, never written back to the config file
        self.export_filename = export_filename

    def paste_from_clipboard(self) -> PasteResult:
        """Read the clipboard once and replace the document with its tables"""
        try:
            text = self.clipboard_reader.read_text()
        except ClipboardUnavailable as e:
            logger.warning("Clipboard unavailable: %s", e)
            self.store.clear()
            return PasteResult(PasteStatus.CLIPBOARD_UNAVAILABLE,
                               "Clipboard is not supported in this environment")
        except ClipboardReadError as e:
            logger.warning("Clipboard read failed: %s", e)
            self.store.clear()
            return PasteResult(PasteStatus.CLIPBOARD_READ_ERROR,
                               "Failed to read clipboard")

        return self.load_text(text, source="clipboard")

    def load_text(self, text: Optional[str], source: str = "text") -> PasteResult:
        """Parse text and make it the current document"""
        if not text or not text.strip():
            logger.info("Nothing to load from %s", source)
            self.store.clear()
            return PasteResult(PasteStatus.EMPTY_INPUT, "Clipboard is empty"
                               if source == "clipboard" else f"No data in {source}")

        document = parse(text, TABLE_SEPARATOR)
        self.store.replace_document(document)

        rows = sum(len(table) for table in document)
        logger.info("Loaded %d table(s), %d row(s) from %s", len(document), rows, source)
        return PasteResult(PasteStatus.LOADED,
                           f"Loaded {len(document)} table(s) with {rows} row(s)",
                           table_count=len(document))

    def export_text(self) -> str:
        """Serialize the current document"""
        return serialize(self.store.document, TABLE_SEPARATOR)

    def get_export_settings(self) -> Tuple[str, str, str]:
        """Get (filename, mime_type, last_directory) for exports"""
        if self.config is None:
            return self.export_filename or DEFAULT_EXPORT_FILENAME, EXPORT_MIME_TYPE, ""
        export_config = self.config.get_export_config()
        return (self.export_filename or export_config.get('filename') or DEFAULT_EXPORT_FILENAME,
                export_config.get('mime_type') or EXPORT_MIME_TYPE,
                export_config.get('last_directory') or "")

    def default_export_path(self) -> Path:
        filename, _, last_directory = self.get_export_settings()
        if last_directory:
            return Path(last_directory) / filename
        return Path(filename)

    def export_to_file(self, file_path: Optional[Union[str, Path]] = None) -> Tuple[bool, str]:
        """Serialize the document and hand it to the file saver"""
        if not self.store.document:
            return False, "Nothing to export"

        # An open edit is committed first, as leaving the cell would do
        self.store.commit_edit()

        target = Path(file_path) if file_path else self.default_export_path()
        _, mime_type, _ = self.get_export_settings()
        text = self.export_text()
        try:
            self.file_saver.save_text_as_file(text, target, mime_type)
        except (OSError, LookupError, UnicodeError) as e:
            logger.error("Export to %s failed: %s", target, e)
            return False, f"Failed to export CSV: {e}"

        if self.config is not None and target.parent != Path('.'):
            self.config.set_export_config(last_directory=str(target.parent))
        self.store.has_changes = False

        tables = self.store.get_table_count()
        return True, f"Exported {tables} table(s) to {target.name}"
