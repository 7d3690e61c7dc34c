"""ClipCSV - paste CSV tables from the clipboard, edit them and export."""
