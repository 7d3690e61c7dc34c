#!/usr/bin/env python3
import sys
import os
import argparse
import logging

from PyQt6.QtWidgets import QApplication, QMessageBox
from PyQt6.QtGui import QIcon

from .widgets.csv_viewer import MultiTableViewerWidget, PasteController, FileTextLoader
from .utils.config import Config
from .utils.log_utils import setup_logging
from .utils.project_constants import PROJECT_CONFIGS, TABLE_SEPARATOR

logger = logging.getLogger(__name__)


def parse_args(args):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='ClipCSV - Paste, edit and export CSV tables')
    parser.add_argument('files', nargs='*', help='CSV files to load at start (one table segment per file)')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: from config, INFO)')
    parser.add_argument('--log-file', help='Also write logs to this file')
    parser.add_argument('--export-name', help='Default file name for exports in this session')
    return parser.parse_args(args)


def main(args=None):
    """Main entry point for ClipCSV"""
    if args is None:
        args = sys.argv[1:]

    args = parse_args(args)

    config = Config()
    logging_config = config.get_logging_config()
    setup_logging(args.log_level or logging_config.get('level', 'INFO'),
                  args.log_file or logging_config.get('log_file'))

    # Create Qt application if not already created
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
        app.setApplicationName(PROJECT_CONFIGS['name'])
        app.setApplicationVersion(PROJECT_CONFIGS['version'])
        app.setStyle('Fusion')

        icon = QIcon.fromTheme('x-office-spreadsheet', QIcon.fromTheme('text-csv'))
        app.setWindowIcon(icon)

    controller = PasteController(config=config, export_filename=args.export_name)
    widget = MultiTableViewerWidget(controller=controller, config=config)
    widget.setWindowTitle(f"{PROJECT_CONFIGS['name']} {PROJECT_CONFIGS['version']}")
    widget.setWindowIcon(app.windowIcon())
    widget.resize(1000, 700)
    widget.show()

    if args.files:
        valid_files = [path for path in args.files if os.path.isfile(path)]
        for missing in sorted(set(args.files) - set(valid_files)):
            logger.warning("File not found: %s", missing)

        if valid_files:
            try:
                text = FileTextLoader().read_many(valid_files, TABLE_SEPARATOR)
            except (OSError, UnicodeDecodeError) as e:
                logger.error("Could not read input files: %s", e)
                QMessageBox.critical(widget, "Error Loading File", str(e))
            else:
                widget.load_text(text, source=", ".join(os.path.basename(p) for p in valid_files))

    logger.info("%s %s started", PROJECT_CONFIGS['name'], PROJECT_CONFIGS['version'])
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
