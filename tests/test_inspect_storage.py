"""
Tests for the storage inspection tool
"""
from inspect_storage import describe, main
from local_storage import SqliteLocalStorage
from notes_store import GROUPS_KEY, NOTES_KEY, NotesStore


def test_describe_counts_records(tmp_path, counter_ids, clock):
    storage = SqliteLocalStorage(str(tmp_path / "pocket_notes.db"))
    store = NotesStore(storage, id_factory=counter_ids, clock=clock)
    group = store.create_group("Work", "#B38BFA")
    store.add_note(group.id, "one")
    store.add_note(group.id, "two")
    storage.save("somethingElse", "x")

    rows = {key: (size, count) for key, size, count in describe(storage)}
    assert rows[GROUPS_KEY][1] == 1
    assert rows[NOTES_KEY][1] == 2
    assert rows["somethingElse"] == (1, None)


def test_main_reports_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.db")]) == 1
    assert "No storage file" in capsys.readouterr().err


def test_main_prints_keys(tmp_path, capsys, counter_ids):
    path = str(tmp_path / "pocket_notes.db")
    NotesStore(SqliteLocalStorage(path), id_factory=counter_ids).create_group("Work", "#B38BFA")
    assert main([path]) == 0
    out = capsys.readouterr().out
    assert f"{GROUPS_KEY}: " in out
    assert "1 records" in out


def test_main_reports_unreadable_file(tmp_path, capsys):
    path = tmp_path / "pocket_notes.db"
    path.write_text("this is not a database\n" * 20)
    assert main([str(path)]) == 1
    captured = capsys.readouterr()
    assert "Cannot read" in captured.err
    assert "Traceback" not in captured.err
