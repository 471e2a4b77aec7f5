"""
inspect_storage.py
Print what Pocket Notes keeps in local storage: each key, its blob size, and
how many records decode from it.

Usage: python inspect_storage.py [path/to/pocket_notes.db]
"""
import argparse
import os
import sys

from errors import PersistenceError
from local_storage import SqliteLocalStorage
from models import decode_groups, decode_notes
from notes_store import GROUPS_KEY, NOTES_KEY
from settings_manager import get_storage_path

_DECODERS = {GROUPS_KEY: decode_groups, NOTES_KEY: decode_notes}


def describe(storage) -> list:
    """Return (key, size, record_count) per stored key; record_count is None for unknown keys."""
    rows = []
    for key in storage.keys():
        blob = storage.load(key) or ""
        decoder = _DECODERS.get(key)
        count = len(decoder(blob)) if decoder else None
        rows.append((key, len(blob), count))
    return rows


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Inspect Pocket Notes local storage")
    parser.add_argument("path", nargs="?", default=None, help="storage file (defaults to the configured one)")
    args = parser.parse_args(argv)

    path = args.path or get_storage_path()
    if not os.path.isfile(path):
        print(f"No storage file at {path}", file=sys.stderr)
        return 1
    try:
        storage = SqliteLocalStorage(path)
        version = storage.get_version()
        rows = describe(storage)
    except PersistenceError as exc:
        print(f"Cannot read {path}: {exc.message}", file=sys.stderr)
        return 1
    print(f"Storage: {path} (schema v{version})")
    for key, size, count in rows:
        records = "?" if count is None else str(count)
        print(f"  {key}: {size} bytes, {records} records")
    return 0


if __name__ == "__main__":
    sys.exit(main())
