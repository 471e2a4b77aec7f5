"""
ui_main_window.py
Pocket Notes main window.

Left: the group list with a "+" button that opens the create-group dialog.
Right: either the empty-state welcome screen (no group selected) or the
selected group's header, its notes in creation order, and the note input.

The window never keeps its own copy of groups or notes. It subscribes to the
store and redraws from (groups, notes, selection) whenever the store changes.
"""

from typing import Optional

import structlog
from PyQt5 import QtCore, QtWidgets
from PyQt5.QtCore import Qt

from backup import create_backup
from errors import PersistenceError, ValidationError
from settings_manager import get_backup_dir, get_backup_keep, set_last_group_id
from ui_group_dialog import CreateGroupDialog
from ui_logic import (
    GROUP_ID_ROLE,
    is_submit_key,
    make_avatar_pixmap,
    note_meta_text,
    populate_group_list,
)

logger = structlog.get_logger(__name__)

EMPTY_STATE_TEXT = (
    "Send and receive messages without keeping your phone online.\n"
    "Use Pocket Notes on up to 4 linked devices and 1 mobile phone."
)
SEND_ENABLED_COLOR = "#001F8B"
SEND_DISABLED_COLOR = "#ABABAB"


class NoteInput(QtWidgets.QPlainTextEdit):
    """Plain text box that emits `submitted` on Enter and keeps Shift+Enter as a newline."""

    submitted = QtCore.pyqtSignal()

    def keyPressEvent(self, event):
        if is_submit_key(event.key(), event.modifiers()):
            event.accept()
            self.submitted.emit()
            return
        super().keyPressEvent(event)


class PocketNotesWindow(QtWidgets.QMainWindow):
    def __init__(self, store, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self._store = store
        self.setObjectName("pocketNotesWindow")
        self.setWindowTitle("Pocket Notes")
        self._build_ui()
        self._build_menu()
        self._unsubscribe = store.subscribe(self._on_store_changed)
        self.refresh()

    # --- Construction ---
    def _build_ui(self):
        splitter = QtWidgets.QSplitter(Qt.Horizontal, self)
        splitter.setObjectName("mainSplitter")

        sidebar = QtWidgets.QWidget(splitter)
        side_layout = QtWidgets.QVBoxLayout(sidebar)
        title = QtWidgets.QLabel("Pocket Notes", sidebar)
        title.setObjectName("sidebarTitle")
        font = title.font()
        font.setBold(True)
        font.setPointSize(font.pointSize() + 6)
        title.setFont(font)
        side_layout.addWidget(title)

        self.group_list = QtWidgets.QListWidget(sidebar)
        self.group_list.setObjectName("groupList")
        self.group_list.setIconSize(QtCore.QSize(40, 40))
        self.group_list.setSelectionMode(QtWidgets.QAbstractItemView.SingleSelection)
        self.group_list.itemClicked.connect(self._on_group_clicked)
        side_layout.addWidget(self.group_list, 1)

        self.add_group_button = QtWidgets.QPushButton("+", sidebar)
        self.add_group_button.setObjectName("addGroupButton")
        self.add_group_button.setToolTip("Create a new group")
        self.add_group_button.setFixedSize(56, 56)
        self.add_group_button.setStyleSheet(
            "QPushButton { background-color: #16008B; color: white; border-radius: 28px; font-size: 28pt; }"
        )
        self.add_group_button.clicked.connect(self.open_create_group_dialog)
        side_layout.addWidget(self.add_group_button, 0, Qt.AlignRight)

        self.pages = QtWidgets.QStackedWidget(splitter)
        self.pages.setObjectName("mainPages")
        self.pages.addWidget(self._build_empty_state())
        self.pages.addWidget(self._build_group_view())

        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([300, 700])
        self.setCentralWidget(splitter)
        self.resize(1000, 700)

    def _build_empty_state(self) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(page)
        layout.addStretch(1)
        heading = QtWidgets.QLabel("Pocket Notes", page)
        font = heading.font()
        font.setBold(True)
        font.setPointSize(font.pointSize() + 12)
        heading.setFont(font)
        heading.setAlignment(Qt.AlignCenter)
        layout.addWidget(heading)
        blurb = QtWidgets.QLabel(EMPTY_STATE_TEXT, page)
        blurb.setAlignment(Qt.AlignCenter)
        blurb.setWordWrap(True)
        layout.addWidget(blurb)
        layout.addStretch(1)
        lock = QtWidgets.QLabel("\U0001F512 end-to-end encrypted", page)
        lock.setAlignment(Qt.AlignCenter)
        layout.addWidget(lock)
        return page

    def _build_group_view(self) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(page)
        layout.setContentsMargins(0, 0, 0, 0)

        header = QtWidgets.QWidget(page)
        header.setObjectName("groupHeader")
        header.setStyleSheet("#groupHeader { background-color: #001F8B; } QLabel { color: white; }")
        header_layout = QtWidgets.QHBoxLayout(header)
        self.back_button = QtWidgets.QToolButton(header)
        self.back_button.setObjectName("backButton")
        self.back_button.setText("←")
        self.back_button.setToolTip("Back to all groups")
        self.back_button.clicked.connect(lambda: self.select_group(None))
        header_layout.addWidget(self.back_button)
        self.header_avatar = QtWidgets.QLabel(header)
        header_layout.addWidget(self.header_avatar)
        self.header_name = QtWidgets.QLabel(header)
        self.header_name.setObjectName("groupHeaderName")
        font = self.header_name.font()
        font.setBold(True)
        font.setPointSize(font.pointSize() + 3)
        self.header_name.setFont(font)
        header_layout.addWidget(self.header_name, 1)
        layout.addWidget(header)

        self.notes_list = QtWidgets.QListWidget(page)
        self.notes_list.setObjectName("notesList")
        self.notes_list.setWordWrap(True)
        self.notes_list.setSelectionMode(QtWidgets.QAbstractItemView.NoSelection)
        self.notes_list.setSpacing(8)
        layout.addWidget(self.notes_list, 1)

        input_row = QtWidgets.QWidget(page)
        input_row.setObjectName("noteInputArea")
        input_row.setStyleSheet("#noteInputArea { background-color: #001F8B; }")
        input_layout = QtWidgets.QHBoxLayout(input_row)
        self.note_input = NoteInput(input_row)
        self.note_input.setObjectName("noteInput")
        self.note_input.setPlaceholderText("Enter your text here...")
        self.note_input.setFixedHeight(110)
        self.note_input.textChanged.connect(self._update_send_button)
        self.note_input.submitted.connect(self.submit_note)
        input_layout.addWidget(self.note_input, 1)
        self.send_button = QtWidgets.QPushButton("➤", input_row)
        self.send_button.setObjectName("sendButton")
        self.send_button.setFixedSize(40, 40)
        self.send_button.clicked.connect(self.submit_note)
        input_layout.addWidget(self.send_button, 0, Qt.AlignBottom)
        layout.addWidget(input_row)
        self._update_send_button()
        return page

    def _build_menu(self):
        file_menu = self.menuBar().addMenu("&File")
        new_group = file_menu.addAction("New &Group…")
        new_group.setShortcut("Ctrl+N")
        new_group.triggered.connect(self.open_create_group_dialog)
        backup_action = file_menu.addAction("&Back Up Now…")
        backup_action.triggered.connect(self.backup_now)
        file_menu.addSeparator()
        quit_action = file_menu.addAction("&Quit")
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.close)

    # --- Rendering ---
    def _on_store_changed(self, _store):
        self.refresh()

    def refresh(self):
        populate_group_list(self.group_list, self._store)
        group = self._store.selected_group
        if group is None:
            self.pages.setCurrentIndex(0)
            return
        self.pages.setCurrentIndex(1)
        self.header_avatar.setPixmap(make_avatar_pixmap(group.color, group.initials, 40))
        self.header_name.setText(group.name)
        self._render_notes(group.id)

    def _render_notes(self, group_id: str):
        self.notes_list.clear()
        for note in self._store.notes_for_group(group_id):
            item = QtWidgets.QListWidgetItem(f"{note.content}\n\n{note_meta_text(note)}")
            item.setData(Qt.UserRole, note.id)
            item.setTextAlignment(Qt.AlignLeft | Qt.AlignVCenter)
            self.notes_list.addItem(item)
        self.notes_list.scrollToBottom()

    def _update_send_button(self):
        has_text = bool(self.note_input.toPlainText().strip())
        self.send_button.setEnabled(has_text)
        color = SEND_ENABLED_COLOR if has_text else SEND_DISABLED_COLOR
        self.send_button.setStyleSheet(
            f"QPushButton {{ color: {color}; background: white; border-radius: 6px; font-size: 16pt; }}"
        )

    # --- User intents ---
    def _on_group_clicked(self, item: QtWidgets.QListWidgetItem):
        self.select_group(item.data(GROUP_ID_ROLE))

    def select_group(self, group_id):
        try:
            self._store.select_group(group_id)
        except KeyError:
            logger.warning("select_unknown_group", group_id=group_id)
            return
        set_last_group_id(self._store.selected_group_id)
        if group_id is not None:
            self.note_input.setFocus(Qt.OtherFocusReason)

    def open_create_group_dialog(self):
        dlg = CreateGroupDialog(self._store, self)
        if dlg.exec_() == QtWidgets.QDialog.Accepted and dlg.created_group is not None:
            self.select_group(dlg.created_group.id)

    def submit_note(self):
        text = self.note_input.toPlainText()
        if not text.strip():
            return
        try:
            self._store.add_note_to_selection(text)
        except ValidationError as exc:
            QtWidgets.QMessageBox.warning(self, "Pocket Notes", exc.message)
            return
        except PersistenceError as exc:
            QtWidgets.QMessageBox.critical(self, "Could not save", exc.message)
        self.note_input.clear()

    def backup_now(self):
        try:
            path = create_backup(self._store, get_backup_dir(), keep=get_backup_keep())
        except PersistenceError as exc:
            QtWidgets.QMessageBox.critical(self, "Backup failed", exc.message)
            return
        self.statusBar().showMessage(f"Backup written to {path}", 5000)

    def closeEvent(self, event):
        try:
            self._unsubscribe()
        finally:
            super().closeEvent(event)
