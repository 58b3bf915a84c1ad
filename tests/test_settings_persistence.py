"""Unit tests for settings persistence."""

import json
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from airliner import settings as settings_module
from airliner.settings import DEFAULT_SETTINGS, SettingsPersistence, get_persistence


class TestSettingsPersistence(unittest.TestCase):
    """Test settings persistence functionality."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.persistence = SettingsPersistence(config_dir=Path(self.temp_dir) / "airliner")

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write_raw(self, content):
        self.persistence.settings_file.parent.mkdir(parents=True, exist_ok=True)
        self.persistence.settings_file.write_text(content, encoding='utf-8')
        self.persistence.clear_cache()

    def test_defaults_without_file(self):
        self.assertEqual(self.persistence.load_settings(), DEFAULT_SETTINGS)
        self.assertEqual(self.persistence.get("accrue_window_ms"), 2500)
        self.assertIsNone(self.persistence.get("no_such_setting"))

    def test_save_and_load_settings(self):
        """Test saving creates the config directory and round-trips values."""
        success = self.persistence.save_settings({
            "accrue_window_ms": 1000,
            "use_system_clipboard": False,
        })
        self.assertTrue(success)
        self.assertTrue(self.persistence.settings_file.exists())

        self.persistence.clear_cache()
        loaded = self.persistence.load_settings()
        self.assertEqual(loaded["accrue_window_ms"], 1000)
        self.assertFalse(loaded["use_system_clipboard"])

    def test_save_leaves_no_temp_file(self):
        self.persistence.save_settings({"accrue_window_ms": 3000})
        leftovers = list(self.persistence.settings_file.parent.glob("*.tmp"))
        self.assertEqual(leftovers, [])

    def test_partial_settings_fill_in_defaults(self):
        self.persistence.save_settings({"accrue_window_ms": 4000})
        loaded = self.persistence.load_settings()
        self.assertEqual(loaded["accrue_window_ms"], 4000)
        self.assertTrue(loaded["use_system_clipboard"])

    def test_refuses_invalid_values(self):
        self.assertFalse(self.persistence.save_settings({"accrue_window_ms": 5}))
        self.assertFalse(self.persistence.save_settings({"use_system_clipboard": "yes"}))
        self.assertFalse(self.persistence.settings_file.exists())

    def test_validate_setting(self):
        validate = self.persistence.validate_setting
        self.assertTrue(validate("accrue_window_ms", 2500))
        self.assertTrue(validate("accrue_window_ms", 100))
        self.assertTrue(validate("accrue_window_ms", 60000))
        self.assertFalse(validate("accrue_window_ms", 60001))
        self.assertFalse(validate("accrue_window_ms", 2.5))
        self.assertFalse(validate("accrue_window_ms", True))
        self.assertTrue(validate("use_system_clipboard", False))
        self.assertFalse(validate("use_system_clipboard", 0))
        # Unknown keys are accepted for forward compatibility
        self.assertTrue(validate("future_option", [1, 2]))

    def test_corrupt_file_falls_back_to_defaults(self):
        self._write_raw("{ not json")
        with self.assertLogs('airliner.settings', level='WARNING'):
            loaded = self.persistence.load_settings()
        self.assertEqual(loaded, DEFAULT_SETTINGS)

    def test_non_dict_file_is_ignored(self):
        self._write_raw(json.dumps([1, 2, 3]))
        with self.assertLogs('airliner.settings', level='WARNING'):
            loaded = self.persistence.load_settings()
        self.assertEqual(loaded, DEFAULT_SETTINGS)

    def test_invalid_stored_value_is_ignored(self):
        self._write_raw(json.dumps({"accrue_window_ms": "fast", "use_system_clipboard": False}))
        with self.assertLogs('airliner.settings', level='WARNING'):
            loaded = self.persistence.load_settings()
        self.assertEqual(loaded["accrue_window_ms"], 2500)
        self.assertFalse(loaded["use_system_clipboard"])

    def test_unknown_stored_keys_are_kept(self):
        self._write_raw(json.dumps({"future_option": "on"}))
        self.assertEqual(self.persistence.load_settings()["future_option"], "on")

    def test_cache(self):
        """Test settings are read from disk once until the cache is cleared."""
        self.persistence.save_settings({"accrue_window_ms": 1500})
        self.persistence.settings_file.write_text(
            json.dumps({"accrue_window_ms": 900}), encoding='utf-8')

        self.assertEqual(self.persistence.get("accrue_window_ms"), 1500)
        self.persistence.clear_cache()
        self.assertEqual(self.persistence.get("accrue_window_ms"), 900)

    def test_default_location_uses_platformdirs(self):
        with patch('airliner.settings.platformdirs.user_config_dir',
                   return_value=self.temp_dir) as mock_dir:
            persistence = SettingsPersistence()
        mock_dir.assert_called_once_with("airliner")
        self.assertEqual(persistence.settings_file, Path(self.temp_dir) / "settings.json")

    def test_get_persistence_singleton(self):
        with patch.object(settings_module, '_persistence', None):
            self.assertIs(get_persistence(), get_persistence())


if __name__ == '__main__':
    unittest.main()
