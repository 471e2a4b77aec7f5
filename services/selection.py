"""
services.selection

Which group the user is looking at. There are two states: nothing selected
(the initial, empty-screen state) and GroupSelected(id). Selection is UI
state only and is never written to local storage by the store.
"""

from typing import Optional


class Selection:
    def __init__(self):
        self._group_id: Optional[str] = None

    @property
    def group_id(self) -> Optional[str]:
        return self._group_id

    def select(self, group_id: Optional[str]) -> bool:
        """Move to GroupSelected(group_id), or back to nothing selected for None.

        Returns True if the selection changed.
        """
        if group_id == self._group_id:
            return False
        self._group_id = group_id
        return True

    def clear(self) -> bool:
        return self.select(None)

    def __repr__(self) -> str:
        if self._group_id is None:
            return "Selection(<none>)"
        return f"Selection({self._group_id!r})"
