"""
backup.py
Create timestamped JSON snapshots of all groups and notes and enforce a keep-N
retention policy.

Output format:
- A single .json file named: pocket-notes-YYYYmmdd-HHMMSS.json
  (pocket-notes-YYYYmmdd-HHMMSS-N.json for further snapshots in the same second)
- Contents: {"version": 1, "createdAt": ISO timestamp, "groups": [...], "notes": [...]}
  where groups/notes use the same record layout as local storage.
"""

from __future__ import annotations

import datetime as dt
import json
import os
from typing import List, Optional, Tuple

import structlog

from errors import PersistenceError
from models import Group, Note, decode_groups, decode_notes

logger = structlog.get_logger(__name__)

BACKUP_STEM = "pocket-notes"
BACKUP_VERSION = 1


def _timestamp(when: dt.datetime) -> str:
    return when.strftime("%Y%m%d-%H%M%S")


def _sort_key(path: str) -> Tuple[str, int]:
    # pocket-notes-YYYYmmdd-HHMMSS[-N].json
    stem = os.path.basename(path)[len(BACKUP_STEM) + 1 : -len(".json")]
    parts = stem.split("-")
    if len(parts) == 3 and parts[2].isdigit():
        return f"{parts[0]}-{parts[1]}", int(parts[2])
    return stem, 0


def list_backups(dest_dir: str) -> List[str]:
    """Existing snapshot paths, oldest first.

    Snapshots taken within the same second carry a -1, -2, ... suffix and sort
    after the unsuffixed one.
    """
    try:
        names = os.listdir(dest_dir)
    except OSError:
        return []
    items = [
        os.path.join(dest_dir, name)
        for name in names
        if name.startswith(BACKUP_STEM + "-") and name.endswith(".json")
    ]
    items.sort(key=_sort_key)
    return items


def _free_path(dest_dir: str, when: dt.datetime) -> str:
    base = os.path.join(dest_dir, f"{BACKUP_STEM}-{_timestamp(when)}")
    path = base + ".json"
    counter = 0
    while os.path.exists(path):
        counter += 1
        path = f"{base}-{counter}.json"
    return path


def _retention_prune(dest_dir: str, keep: int):
    if keep is None or keep <= 0:
        return
    backups = list_backups(dest_dir)
    for old in backups[: max(0, len(backups) - keep)]:
        try:
            os.remove(old)
        except OSError:
            logger.warning("backup_prune_failed", path=old)


def create_backup(store, dest_dir: str, keep: int = 10, now: Optional[dt.datetime] = None) -> str:
    """Write a snapshot of the store's collections and return its path.

    The file is written to a .tmp sibling and renamed into place so a partial
    snapshot is never visible. An existing snapshot is never overwritten.
    Raises PersistenceError if it cannot be written.
    """
    when = now or dt.datetime.now()
    path = _free_path(dest_dir, when)
    tmp_path = path + ".tmp"
    payload = {
        "version": BACKUP_VERSION,
        "createdAt": when.isoformat(timespec="seconds"),
        "groups": [g.to_dict() for g in store.groups],
        "notes": [n.to_dict() for n in store.notes],
    }
    try:
        os.makedirs(dest_dir, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, path)
    except OSError as exc:
        try:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        except OSError:
            pass
        raise PersistenceError(f"Could not write backup {path}: {exc}") from exc

    logger.info("backup_created", path=path, groups=len(payload["groups"]), notes=len(payload["notes"]))
    _retention_prune(dest_dir, int(keep))
    return path


def read_backup(path: str) -> Tuple[List[Group], List[Note]]:
    """Load a snapshot. Unreadable sections come back empty, like malformed storage blobs."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except ValueError:
            logger.warning("backup_unreadable", path=path)
            return [], []
    if not isinstance(payload, dict):
        return [], []
    groups = decode_groups(json.dumps(payload.get("groups")))
    notes = decode_notes(json.dumps(payload.get("notes")))
    return groups, notes
