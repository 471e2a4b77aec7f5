"""
ui_group_dialog.py
"Create New Group" dialog: a name field, one round button per palette colour,
and a Create button. The dialog stays open and shows a warning when the store
rejects the input.
"""

from typing import Optional

from PyQt5 import QtWidgets
from PyQt5.QtCore import Qt

from errors import PersistenceError, ValidationError
from models import DEFAULT_COLOR, PALETTE


class CreateGroupDialog(QtWidgets.QDialog):
    def __init__(self, store, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self._store = store
        self.created_group = None
        self._color = DEFAULT_COLOR
        self._swatches = {}

        self.setObjectName("createGroupDialog")
        self.setWindowTitle("Create New Group")
        self.setWindowModality(Qt.ApplicationModal)

        layout = QtWidgets.QVBoxLayout(self)
        title = QtWidgets.QLabel("Create New Group", self)
        font = title.font()
        font.setBold(True)
        font.setPointSize(font.pointSize() + 2)
        title.setFont(font)
        layout.addWidget(title)

        form = QtWidgets.QFormLayout()
        self.name_edit = QtWidgets.QLineEdit(self)
        self.name_edit.setObjectName("groupNameEdit")
        self.name_edit.setPlaceholderText("Enter group name")
        form.addRow("Group Name", self.name_edit)

        colors = QtWidgets.QHBoxLayout()
        for color in PALETTE:
            btn = QtWidgets.QPushButton(self)
            btn.setCheckable(True)
            btn.setFixedSize(28, 28)
            btn.setToolTip(color)
            btn.clicked.connect(lambda _checked=False, c=color: self.set_color(c))
            colors.addWidget(btn)
            self._swatches[color] = btn
        colors.addStretch(1)
        form.addRow("Choose colour", colors)
        layout.addLayout(form)

        buttons = QtWidgets.QHBoxLayout()
        buttons.addStretch(1)
        self.create_button = QtWidgets.QPushButton("Create", self)
        self.create_button.setObjectName("createGroupButton")
        self.create_button.setDefault(True)
        self.create_button.clicked.connect(self.try_create)
        buttons.addWidget(self.create_button)
        layout.addLayout(buttons)

        self.set_color(DEFAULT_COLOR)

    @property
    def color(self) -> str:
        return self._color

    def set_color(self, color: str):
        self._color = color
        for c, btn in self._swatches.items():
            selected = c == color
            btn.setChecked(selected)
            border = "3px solid #000000" if selected else "1px solid #cccccc"
            btn.setStyleSheet(
                f"QPushButton {{ background-color: {c}; border-radius: 14px; border: {border}; }}"
            )

    def try_create(self):
        try:
            self.created_group = self._store.create_group(self.name_edit.text(), self._color)
        except ValidationError as exc:
            QtWidgets.QMessageBox.warning(self, "Create New Group", exc.message)
            self.name_edit.setFocus(Qt.OtherFocusReason)
            return
        except PersistenceError as exc:
            # The group exists in memory; tell the user and close as usual
            self.created_group = exc.entity
            QtWidgets.QMessageBox.critical(self, "Could not save", exc.message)
        self.accept()

