"""
Tests for settings persistence
"""
import os

import settings_manager as sm


class TestSettingsLocation:
    """Tests for where settings live"""

    def test_env_override_is_used(self, settings_home):
        assert sm.get_settings_dir() == str(settings_home)
        assert os.path.isdir(settings_home)
        assert sm.get_settings_file_path() == os.path.join(str(settings_home), "settings.json")

    def test_missing_file_loads_empty(self, settings_home):
        assert sm.load_settings() == {}

    def test_corrupt_file_loads_empty(self, settings_home):
        os.makedirs(settings_home, exist_ok=True)
        with open(os.path.join(settings_home, "settings.json"), "w", encoding="utf-8") as f:
            f.write("{broken")
        assert sm.load_settings() == {}


class TestSettingsValues:
    """Tests for individual settings"""

    def test_default_storage_path_is_in_settings_dir(self, settings_home):
        assert sm.get_storage_path() == os.path.join(str(settings_home), "pocket_notes.db")

    def test_storage_path_round_trip(self, settings_home, tmp_path):
        target = str(tmp_path / "elsewhere" / "notes.db")
        sm.set_storage_path(target)
        assert sm.get_storage_path() == target

    def test_min_group_name_length(self, settings_home):
        assert sm.get_min_group_name_length() == 2
        sm.set_min_group_name_length(0)
        assert sm.get_min_group_name_length() == 0
        sm.set_min_group_name_length(-3)
        assert sm.get_min_group_name_length() == 0

    def test_invalid_min_length_falls_back_to_default(self, settings_home):
        sm.save_settings({"min_group_name_length": "lots"})
        assert sm.get_min_group_name_length() == 2

    def test_last_group_id(self, settings_home):
        assert sm.get_last_group_id() is None
        sm.set_last_group_id("abc")
        assert sm.get_last_group_id() == "abc"
        sm.set_last_group_id(None)
        assert sm.get_last_group_id() is None

    def test_window_geometry(self, settings_home):
        assert sm.get_window_geometry() is None
        sm.set_window_geometry(10, 20, 800.0, 600)
        assert sm.get_window_geometry() == {"x": 10, "y": 20, "w": 800, "h": 600}

    def test_settings_are_merged_not_replaced(self, settings_home):
        sm.set_last_group_id("g1")
        sm.set_min_group_name_length(3)
        assert sm.load_settings() == {"last_group_id": "g1", "min_group_name_length": 3}

    def test_backup_defaults(self, settings_home):
        assert sm.get_backup_dir() == os.path.join(str(settings_home), "backups")
        assert sm.get_backup_keep() == 10
        sm.set_backup_keep(0)
        assert sm.get_backup_keep() == 1
