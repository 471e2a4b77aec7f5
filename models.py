"""
models.py
Group and Note records, the colour palette, and the helpers that derive
display values (initials, creation date/time) and encode/decode the JSON
blobs kept in local storage.

Blob field names are camelCase (groupId, createdDate, createdTime) so data
written by earlier versions of the app loads unchanged.
"""

from __future__ import annotations

import datetime as dt
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import structlog

logger = structlog.get_logger(__name__)

PALETTE: Tuple[str, ...] = (
    "#B38BFA",
    "#FF79F2",
    "#43E6FC",
    "#F19576",
    "#0047FF",
    "#6691FF",
)
DEFAULT_COLOR = PALETTE[0]

# Fixed English abbreviations; strftime('%b') follows the process locale.
_MONTH_ABBREV = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class Group:
    id: str
    name: str
    color: str
    initials: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "color": self.color, "initials": self.initials}


@dataclass(frozen=True)
class Note:
    id: str
    group_id: str
    content: str
    created_date: str
    created_time: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "groupId": self.group_id,
            "content": self.content,
            "createdDate": self.created_date,
            "createdTime": self.created_time,
        }


def get_initials(name: Optional[str]) -> str:
    """Return the avatar label for a group name.

    Two or more words: first letter of each of the first two words.
    One word: its first two characters. Always uppercased.
    """
    if not name:
        return ""
    words = name.split()
    if not words:
        return ""
    if len(words) == 1:
        return words[0][:2].upper()
    return (words[0][0] + words[1][0]).upper()


def normalize_color(color: Any) -> Optional[str]:
    """Return the palette spelling of `color`, or None if it is not a palette swatch."""
    if not isinstance(color, str):
        return None
    wanted = color.strip().upper()
    for swatch in PALETTE:
        if swatch.upper() == wanted:
            return swatch
    return None


def format_created_date(when: dt.datetime) -> str:
    """'5 Jun 2024'"""
    return f"{when.day} {_MONTH_ABBREV[when.month - 1]} {when.year}"


def format_created_time(when: dt.datetime) -> str:
    """'05:07 PM' (12-hour clock, zero padded)."""
    hour = when.hour % 12 or 12
    suffix = "AM" if when.hour < 12 else "PM"
    return f"{hour:02d}:{when.minute:02d} {suffix}"


# --- Blob encoding ---
def _record_id(value: Any) -> str:
    # Older blobs stored Date.now() numbers as ids
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError(f"invalid id: {value!r}")
    text = str(value)
    if not text:
        raise ValueError("empty id")
    return text


def group_from_dict(raw: Dict[str, Any]) -> Group:
    name = raw["name"]
    if not isinstance(name, str) or not name.strip():
        raise ValueError("group name must be a non-empty string")
    # The first release stored names untrimmed
    name = name.strip()
    color = raw["color"]
    if not isinstance(color, str):
        raise ValueError("group color must be a string")
    initials = raw.get("initials")
    if not isinstance(initials, str) or not initials:
        initials = get_initials(name)
    return Group(id=_record_id(raw["id"]), name=name, color=color, initials=initials)


def note_from_dict(raw: Dict[str, Any]) -> Note:
    content = raw["content"]
    if not isinstance(content, str):
        raise ValueError("note content must be a string")
    # The first release wrote 'date'/'time' instead of createdDate/createdTime
    created_date = raw.get("createdDate", raw.get("date", ""))
    created_time = raw.get("createdTime", raw.get("time", ""))
    return Note(
        id=_record_id(raw["id"]),
        group_id=_record_id(raw["groupId"]),
        content=content,
        created_date=str(created_date or ""),
        created_time=str(created_time or ""),
    )


def encode_records(records) -> str:
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False)


def _decode(blob: Optional[str], factory, what: str) -> List[Any]:
    if blob is None:
        return []
    try:
        data = json.loads(blob)
        if not isinstance(data, list):
            raise ValueError(f"expected a list, got {type(data).__name__}")
        return [factory(item) for item in data]
    except (ValueError, KeyError, TypeError, AttributeError, IndexError, RecursionError) as exc:
        logger.warning("malformed_blob_ignored", collection=what, error=str(exc))
        return []


def decode_groups(blob: Optional[str]) -> List[Group]:
    """Decode a groups blob. Absent or malformed blobs yield an empty list."""
    return _decode(blob, group_from_dict, "groups")


def decode_notes(blob: Optional[str]) -> List[Note]:
    """Decode a notes blob. Absent or malformed blobs yield an empty list."""
    return _decode(blob, note_from_dict, "notes")
