"""
Tests for application start-up wiring
"""
import settings_manager as sm
from main import build_store


class TestBuildStore:
    """Tests for opening storage from settings"""

    def test_first_start_is_empty(self, settings_home):
        store = build_store()
        assert store.groups == ()
        assert store.selected_group_id is None

    def test_reopen_restores_data_and_last_group(self, settings_home):
        store = build_store()
        group = store.create_group("Work", "#B38BFA")
        store.add_note(group.id, "Buy milk")
        sm.set_last_group_id(group.id)

        reopened = build_store()
        assert reopened.groups == store.groups
        assert reopened.notes == store.notes
        assert reopened.selected_group_id == group.id

    def test_stale_last_group_is_ignored(self, settings_home):
        sm.set_last_group_id("gone")
        assert build_store().selected_group_id is None

    def test_min_length_comes_from_settings(self, settings_home):
        sm.set_min_group_name_length(5)
        assert build_store().min_name_length == 5
