"""
notes_store.py
NotesStore owns the groups and notes collections for one session.

- Groups and notes are append-only and keep insertion order.
- Every successful create rewrites both blobs in local storage in full.
- Listeners registered with subscribe() are called after every change
  (create or selection) so the UI can re-read state and redraw.

Contract:
- create_group / add_note raise a ValidationError subclass and change nothing
  when the input is rejected.
- If writing to storage fails, the new record stays in memory and
  PersistenceError is raised with the record attached as `entity`.
"""

from __future__ import annotations

import datetime as dt
import uuid
from typing import Callable, Iterator, List, Optional, Tuple

import structlog

from errors import (
    DuplicateName,
    EmptyContent,
    EmptyName,
    InvalidColor,
    NoActiveGroup,
    PersistenceError,
    TooShort,
)
from models import (
    Group,
    Note,
    decode_groups,
    decode_notes,
    encode_records,
    format_created_date,
    format_created_time,
    get_initials,
    normalize_color,
)
from services.selection import Selection

logger = structlog.get_logger(__name__)

GROUPS_KEY = "pocketNotesGroups"
NOTES_KEY = "pocketNotesData"
# Keys used by the first release, read only when the current keys are absent
LEGACY_GROUPS_KEY = "groups"
LEGACY_NOTES_KEY = "notes"
DEFAULT_MIN_NAME_LENGTH = 2

Listener = Callable[["NotesStore"], None]


def uuid_ids() -> str:
    return uuid.uuid4().hex


class NotesView:
    """Notes of one group in creation order.

    Filtering happens on iteration, so the view always reflects the store and
    can be iterated any number of times.
    """

    def __init__(self, notes: Callable[[], Tuple[Note, ...]], group_id: Optional[str]):
        self._notes = notes
        self.group_id = group_id

    def __iter__(self) -> Iterator[Note]:
        for note in self._notes():
            if note.group_id == self.group_id:
                yield note

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def last(self) -> Optional[Note]:
        found = None
        for note in self:
            found = note
        return found

    def __repr__(self) -> str:
        return f"NotesView(group_id={self.group_id!r})"


class NotesStore:
    def __init__(
        self,
        storage,
        id_factory: Callable[[], object] = uuid_ids,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
        min_name_length: int = DEFAULT_MIN_NAME_LENGTH,
        load: bool = True,
    ):
        self._storage = storage
        self._new_id = id_factory
        self._clock = clock
        self.min_name_length = max(0, int(min_name_length))
        self._groups: List[Group] = []
        self._notes: List[Note] = []
        self._selection = Selection()
        self._listeners: List[Listener] = []
        if load:
            self.reload()

    # --- Loading ---
    def reload(self) -> None:
        """Replace in-memory collections with what local storage holds.

        Malformed blobs load as empty collections. A selection that no longer
        points at a known group is cleared.
        """
        self._groups = decode_groups(self._load_blob(GROUPS_KEY, LEGACY_GROUPS_KEY))
        self._notes = decode_notes(self._load_blob(NOTES_KEY, LEGACY_NOTES_KEY))
        if self._selection.group_id is not None and self.get_group(self._selection.group_id) is None:
            self._selection.clear()
        logger.info("store_loaded", groups=len(self._groups), notes=len(self._notes))
        self._notify()

    def _load_blob(self, key: str, legacy_key: str) -> Optional[str]:
        blob = self._storage.load(key)
        if blob is None:
            blob = self._storage.load(legacy_key)
            if blob is not None:
                logger.info("legacy_blob_loaded", key=legacy_key)
        return blob

    # --- Read API ---
    @property
    def groups(self) -> Tuple[Group, ...]:
        return tuple(self._groups)

    @property
    def notes(self) -> Tuple[Note, ...]:
        return tuple(self._notes)

    def get_group(self, group_id: Optional[str]) -> Optional[Group]:
        if group_id is None:
            return None
        key = str(group_id)
        for group in self._groups:
            if group.id == key:
                return group
        return None

    @property
    def selected_group_id(self) -> Optional[str]:
        return self._selection.group_id

    @property
    def selected_group(self) -> Optional[Group]:
        return self.get_group(self._selection.group_id)

    def notes_for_group(self, group_id: Optional[str]) -> NotesView:
        return NotesView(lambda: tuple(self._notes), None if group_id is None else str(group_id))

    @staticmethod
    def initials(name: str) -> str:
        return get_initials(name)

    # --- Change notification ---
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener(store)`; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # --- Mutations ---
    def create_group(self, name: Optional[str], color: Optional[str]) -> Group:
        clean = (name or "").strip()
        if not clean:
            logger.info("group_rejected", reason="empty_name")
            raise EmptyName()
        if len(clean) < self.min_name_length:
            logger.info("group_rejected", reason="too_short", name=clean)
            raise TooShort(self.min_name_length)
        swatch = normalize_color(color)
        if swatch is None:
            logger.info("group_rejected", reason="invalid_color", color=color)
            raise InvalidColor(color)
        lowered = clean.lower()
        if any(g.name.lower() == lowered for g in self._groups):
            logger.info("group_rejected", reason="duplicate_name", name=clean)
            raise DuplicateName(clean)

        group = Group(id=str(self._new_id()), name=clean, color=swatch, initials=get_initials(clean))
        self._groups.append(group)
        logger.info("group_created", group_id=group.id, name=group.name, color=group.color)
        self._commit(group)
        return group

    def add_note(self, group_id: Optional[str], content: Optional[str]) -> Note:
        text = (content or "").strip()
        if not text:
            logger.info("note_rejected", reason="empty_content", group_id=group_id)
            raise EmptyContent()
        group = self.get_group(group_id)
        if group is None:
            logger.info("note_rejected", reason="no_active_group", group_id=group_id)
            raise NoActiveGroup(group_id)

        now = self._clock()
        note = Note(
            id=str(self._new_id()),
            group_id=group.id,
            content=text,
            created_date=format_created_date(now),
            created_time=format_created_time(now),
        )
        self._notes.append(note)
        logger.info("note_created", note_id=note.id, group_id=group.id)
        self._commit(note)
        return note

    def add_note_to_selection(self, content: Optional[str]) -> Note:
        return self.add_note(self._selection.group_id, content)

    def select_group(self, group_id: Optional[str]) -> None:
        """Focus a group, or pass None to go back to no selection.

        Raises KeyError for an id that is not a known group.
        """
        if group_id is not None:
            if self.get_group(group_id) is None:
                raise KeyError(group_id)
            group_id = str(group_id)
        if self._selection.select(group_id):
            self._notify()

    # --- Persistence ---
    def _persist(self) -> None:
        self._storage.save(GROUPS_KEY, encode_records(self._groups))
        self._storage.save(NOTES_KEY, encode_records(self._notes))

    def _commit(self, entity) -> None:
        try:
            self._persist()
        except PersistenceError as exc:
            exc.entity = entity
            raise
        finally:
            self._notify()
