#!/usr/bin/env python3
"""
Test suite for the JSON configuration manager and logging setup
"""

import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path

current_dir = Path(__file__).parent
sys.path.insert(0, str(current_dir))

from clipcsv.utils.config import Config, DEFAULT_CONFIG
from clipcsv.utils.log_utils import LOGGER_NAME, setup_logging
from clipcsv.utils.project_constants import get_version_from_pyproject


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_dir = Path(self.temp_dir.name) / "clipcsv"

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_defaults_written_on_first_use(self):
        config = Config(config_dir=self.config_dir)
        self.assertTrue(config.config_file.exists())
        self.assertEqual(config.get_export_config(), DEFAULT_CONFIG['export'])
        self.assertEqual(config.get_viewer_config()['show_header_row'], True)

    def test_missing_keys_are_merged(self):
        self.config_dir.mkdir(parents=True)
        (self.config_dir / "config.json").write_text(
            json.dumps({'export': {'filename': 'tables.csv'}}), encoding="utf-8"
        )
        config = Config(config_dir=self.config_dir)
        export = config.get_export_config()
        self.assertEqual(export['filename'], 'tables.csv')
        self.assertEqual(export['mime_type'], 'text/csv;charset=utf-8;')
        self.assertIn('viewer', config.config)

        on_disk = json.loads(config.config_file.read_text(encoding="utf-8"))
        self.assertEqual(on_disk['export']['filename'], 'tables.csv')
        self.assertIn('logging', on_disk)

    def test_corrupt_file_falls_back_to_defaults(self):
        self.config_dir.mkdir(parents=True)
        (self.config_dir / "config.json").write_text("{not json", encoding="utf-8")
        config = Config(config_dir=self.config_dir)
        self.assertEqual(config.get_logging_config()['level'], 'INFO')

    def test_set_export_config_persists(self):
        config = Config(config_dir=self.config_dir)
        config.set_export_config(filename='out.csv')
        reloaded = Config(config_dir=self.config_dir)
        self.assertEqual(reloaded.get_export_config()['filename'], 'out.csv')

    def test_defaults_are_not_shared_between_instances(self):
        first = Config(config_dir=self.config_dir)
        first.set_viewer_config(alternating_row_colors=False)
        self.assertTrue(DEFAULT_CONFIG['viewer']['alternating_row_colors'])


class TestLoggingSetup(unittest.TestCase):

    def tearDown(self):
        logger = logging.getLogger(LOGGER_NAME)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging("DEBUG")
        logger = setup_logging("DEBUG")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_file_handler(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            log_file = Path(temp_dir) / "clipcsv.log"
            logger = setup_logging(logging.INFO, str(log_file))
            logging.getLogger(f"{LOGGER_NAME}.test").info("hello")
            for handler in logger.handlers:
                handler.flush()
            self.assertIn("hello", log_file.read_text(encoding="utf-8"))
            self.tearDown()

    def test_unknown_level_name_falls_back_to_info(self):
        logger = setup_logging("LOUD")
        self.assertEqual(logger.level, logging.INFO)


class TestProjectConstants(unittest.TestCase):

    def test_version_read_from_pyproject(self):
        self.assertEqual(get_version_from_pyproject(), "0.1.0")


if __name__ == "__main__":
    unittest.main()
