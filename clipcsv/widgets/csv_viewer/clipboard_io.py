#!/usr/bin/env python3
"""
Clipboard and file collaborators for the table viewer

QtClipboardReader reads plain text from the application clipboard.
FileSaver writes exported text to disk using the charset named by the
export MIME type.
"""

import codecs
import logging
from pathlib import Path
from typing import Optional, Union

from PyQt6.QtGui import QGuiApplication

logger = logging.getLogger(__name__)


class ClipboardError(Exception):
    """Base error for clipboard access"""


class ClipboardUnavailable(ClipboardError):
    """No clipboard exists in this environment"""


class ClipboardReadError(ClipboardError):
    """The clipboard exists but reading it failed"""


class QtClipboardReader:
    """Reads text from the Qt application clipboard"""

    def __init__(self, app=None):
        # Resolved lazily so the reader can be created before QApplication
        self._app = app

    def read_text(self) -> str:
        app = self._app if self._app is not None else QGuiApplication.instance()
        if app is None:
            raise ClipboardUnavailable("No Qt application is running")

        try:
            clipboard = app.clipboard()
        except (AttributeError, RuntimeError) as e:
            raise ClipboardUnavailable(str(e)) from e
        if clipboard is None:
            raise ClipboardUnavailable("Clipboard is not available")

        try:
            text = clipboard.text()
        except RuntimeError as e:
            raise ClipboardReadError(str(e)) from e
        if text is None:
            raise ClipboardReadError("Clipboard returned no text")
        return text


def charset_from_mime_type(mime_type: str, default: str = 'utf-8') -> str:
    """Extract the charset parameter from a MIME type string"""
    for part in mime_type.split(';')[1:]:
        key, _, value = part.partition('=')
        if key.strip().lower() == 'charset' and value.strip():
            return value.strip().strip('"')
    return default


class FileSaver:
    """Writes exported text to a file"""

    def save_text_as_file(self, text: str, filename: Union[str, Path], mime_type: str) -> Path:
        """Encode the text, then write it in one go.

        Raises LookupError for an unknown charset and UnicodeEncodeError when
        the text does not fit it. Both happen before the file is opened, so
        an existing file is left as it was.
        """
        path = Path(filename)
        encoding = codecs.lookup(charset_from_mime_type(mime_type)).name
        # Encoded directly so the '\n' row separators stay untranslated
        data = text.encode(encoding)
        path.write_bytes(data)
        logger.info("Wrote %d bytes to %s (%s)", len(data), path, encoding)
        return path


class FileTextLoader:
    """Reads CSV text from files given on the command line"""

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def read_text(self, filename: Union[str, Path]) -> str:
        # utf-8-sig drops a BOM that spreadsheet exports often add
        encoding = 'utf-8-sig' if self.encoding.lower() in ('utf-8', 'utf8') else self.encoding
        with open(filename, 'r', encoding=encoding, newline='') as f:
            return f.read()

    def read_many(self, filenames, separator: str) -> Optional[str]:
        """Join several files into one text, one table segment per file"""
        texts = [self.read_text(name) for name in filenames]
        if not texts:
            return None
        return f"\n{separator}\n".join(texts)
