"""
ui_logic.py
Helpers shared by the main window and the create-group dialog: painting group
avatars, filling the group list, and deciding when a key press sends a note.
"""
from PyQt5 import QtCore, QtGui, QtWidgets
from PyQt5.QtCore import Qt

# Item data roles on the group list
GROUP_ID_ROLE = 1000

_SUBMIT_KEYS = (Qt.Key_Return, Qt.Key_Enter)


def is_submit_key(key: int, modifiers) -> bool:
    """Enter sends the note; Shift+Enter inserts a newline."""
    return key in _SUBMIT_KEYS and not (int(modifiers) & int(Qt.ShiftModifier))


def make_avatar_pixmap(color: str, initials: str, size: int = 40) -> QtGui.QPixmap:
    """Round colored badge with the group's initials in white."""
    pm = QtGui.QPixmap(size, size)
    pm.fill(Qt.transparent)
    painter = QtGui.QPainter(pm)
    try:
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QtGui.QColor(color))
        painter.drawEllipse(0, 0, size, size)
        font = painter.font()
        font.setBold(True)
        font.setPixelSize(max(8, int(size * 0.38)))
        painter.setFont(font)
        painter.setPen(QtGui.QColor("#FFFFFF"))
        painter.drawText(QtCore.QRect(0, 0, size, size), Qt.AlignCenter, initials)
    finally:
        painter.end()
    return pm


def make_avatar_icon(color: str, initials: str, size: int = 40) -> QtGui.QIcon:
    return QtGui.QIcon(make_avatar_pixmap(color, initials, size))


def populate_group_list(list_widget: QtWidgets.QListWidget, store):
    """Rebuild the sidebar list from the store and highlight the selected group."""
    selected = store.selected_group_id
    list_widget.blockSignals(True)
    try:
        list_widget.clear()
        for group in store.groups:
            item = QtWidgets.QListWidgetItem(make_avatar_icon(group.color, group.initials), group.name)
            item.setData(GROUP_ID_ROLE, group.id)
            list_widget.addItem(item)
            if group.id == selected:
                item.setSelected(True)
                list_widget.setCurrentItem(item)
        if selected is None:
            list_widget.clearSelection()
    finally:
        list_widget.blockSignals(False)


def note_meta_text(note) -> str:
    """'5 Jun 2024 • 05:07 PM'"""
    return f"{note.created_date} • {note.created_time}"
