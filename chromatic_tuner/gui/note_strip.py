"""
Note strip widget - scrollable row of note keys.
"""

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QButtonGroup, QHBoxLayout, QPushButton, QScrollArea, QWidget

from ..reference_pitch import NoteKey
from .styles import NOTE_KEY_STYLE, SHARP_KEY_STYLE


class NoteStripWidget(QScrollArea):
    """
    Horizontal strip of note keys, one per note of octaves 1-8.

    Emits note_clicked with the note index of a clicked key. Highlighting is
    controlled by the owner through set_active().
    """

    note_clicked = Signal(int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWidgetResizable(True)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAsNeeded)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setFixedHeight(70)

        self._buttons: dict[int, QPushButton] = {}
        self._group = QButtonGroup(self)
        self._group.setExclusive(False)

    def set_keys(self, keys: list[NoteKey]):
        """Recreate the key buttons."""
        for button in self._buttons.values():
            self._group.removeButton(button)
        self._buttons = {}

        content = QWidget()
        layout = QHBoxLayout(content)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        for key in keys:
            button = QPushButton(key.label)
            button.setCheckable(True)
            button.setStyleSheet(SHARP_KEY_STYLE if key.accidental else NOTE_KEY_STYLE)
            button.setToolTip(f"{key.frequency:.1f} Hz")
            button.clicked.connect(lambda _checked=False, n=key.note_index: self.note_clicked.emit(n))
            self._group.addButton(button)
            self._buttons[key.note_index] = button
            layout.addWidget(button)

        self.setWidget(content)

    def set_active(self, note_index: int | None):
        """Highlight one key (or none) and scroll it into view."""
        for index, button in self._buttons.items():
            button.setChecked(index == note_index)

        if note_index in self._buttons:
            self.ensureWidgetVisible(self._buttons[note_index], self.width() // 2, 0)
