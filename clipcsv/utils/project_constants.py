"""Project-specific constants and configurations."""
import re
from pathlib import Path

def get_version_from_pyproject() -> str:
    """Get version from pyproject.toml file."""
    try:
        pyproject_path = Path(__file__).resolve().parent.parent.parent / 'pyproject.toml'
        if not pyproject_path.exists():
            return '0.0.0'  # Installed without the source tree

        content = pyproject_path.read_text(encoding='utf-8')
        match = re.search(r'^version\s*=\s*"([0-9][0-9a-z.-]*)"$', content, re.MULTILINE)
        if match:
            return match.group(1)
        return '0.0.0'
    except OSError:
        return '0.0.0'

# Project-wide constants
PROJECT_NAME = 'ClipCSV'
PROJECT_VERSION = get_version_from_pyproject()

# Line that separates tables in pasted and exported text
TABLE_SEPARATOR = '--,,--'

# Export defaults
EXPORT_MIME_TYPE = 'text/csv;charset=utf-8;'
DEFAULT_EXPORT_FILENAME = 'export.csv'
CSV_FILE_FILTER = 'CSV files (*.csv);;All files (*)'

# Application config
PROJECT_CONFIGS = {
    "name": PROJECT_NAME,
    "version": PROJECT_VERSION,
}
