"""
Main application window for the chromatic tuner.
"""

import logging
import sys
from collections import deque

import numpy as np
from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSlider,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from ..audio_input import MicrophoneInput
from ..display import TuningMode
from ..errors import UnavailableInput
from ..pitch_estimator import PitchEstimator
from ..settings import DEFAULTS, SettingsStore
from ..tone import ToneGenerator
from ..tuner import TunerSession
from .note_strip import NoteStripWidget
from .styles import MAIN_WINDOW_STYLE
from .tuning_meter import TuningMeter

logger = logging.getLogger(__name__)


class TunerWindow(QMainWindow):
    """
    Main window for the tuner.

    Features:
    - Tuning meter and large note display
    - Note strip for highlighting detections and picking reference tones
    - A4 reference setting and auto/manual mode switch
    """

    def __init__(self, store: SettingsStore | None = None):
        super().__init__()
        self.setWindowTitle("Chromatic Tuner")
        self.setMinimumSize(480, 420)

        self._store = store or SettingsStore()
        self._tone = ToneGenerator()
        self._estimator = PitchEstimator(min_rms=self._store.load_sensitivity() / 1000.0)

        mode = TuningMode.AUTO if self._store.load_auto_mode() else TuningMode.MANUAL
        self._session = TunerSession(
            estimator=self._estimator,
            tone=self._tone,
            store=self._store,
            mode=mode,
        )

        # Frequencies estimated on the audio thread, consumed on the UI thread
        self._pending: deque[float | None] = deque(maxlen=32)
        self._microphone = MicrophoneInput(on_frame=self._on_audio_frame)
        self._displayed = None

        self._setup_ui()
        self.setStyleSheet(MAIN_WINDOW_STYLE)
        self._refresh_display()

        # Update timer
        self._timer = QTimer()
        self._timer.timeout.connect(self._on_timer)
        self._timer.start(50)  # 20 Hz update rate

        self._start_audio()

    def _setup_ui(self):
        """Set up the UI components."""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(15, 15, 15, 15)
        layout.setSpacing(12)

        self._meter = TuningMeter()
        layout.addWidget(self._meter)

        self._note_label = QLabel("A4")
        self._note_label.setObjectName("noteLabel")
        self._note_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self._note_label)

        self._frequency_label = QLabel("440.0 Hz")
        self._frequency_label.setObjectName("frequencyLabel")
        self._frequency_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self._frequency_label)

        self._note_strip = NoteStripWidget()
        self._note_strip.set_keys(self._session.display.strip.keys)
        self._note_strip.note_clicked.connect(self._on_note_clicked)
        layout.addWidget(self._note_strip)

        controls = QHBoxLayout()

        controls.addWidget(QLabel("A4 ="))
        self._reference_spin = QSpinBox()
        self._reference_spin.setRange(1, 2000)
        self._reference_spin.setSuffix(" Hz")
        self._reference_spin.setValue(self._session.reference.frequency)
        self._reference_spin.editingFinished.connect(self._on_reference_edited)
        controls.addWidget(self._reference_spin)

        controls.addStretch()

        self._auto_mode_cb = QCheckBox("Auto")
        self._auto_mode_cb.setChecked(self._session.mode is TuningMode.AUTO)
        self._auto_mode_cb.toggled.connect(self._on_auto_mode_toggled)
        controls.addWidget(self._auto_mode_cb)

        layout.addLayout(controls)

        sensitivity_row = QHBoxLayout()
        sensitivity_row.addWidget(QLabel("Gate:"))
        self._sensitivity_slider = QSlider(Qt.Orientation.Horizontal)
        self._sensitivity_slider.setRange(1, 50)
        self._sensitivity_slider.setValue(self._store.load_sensitivity())
        self._sensitivity_slider.setToolTip(
            "Minimum signal level to estimate a pitch.\n"
            "Lower = detect quieter sounds (but more background noise)"
        )
        self._sensitivity_slider.valueChanged.connect(self._on_sensitivity_changed)
        sensitivity_row.addWidget(self._sensitivity_slider)
        self._sensitivity_value = QLabel(f"{self._estimator.min_rms:.3f}")
        sensitivity_row.addWidget(self._sensitivity_value)

        reset_btn = QPushButton("Reset All")
        reset_btn.setToolTip("Reset all settings to their default values")
        reset_btn.clicked.connect(self._reset_to_defaults)
        sensitivity_row.addWidget(reset_btn)

        layout.addLayout(sensitivity_row)

        self._status_label = QLabel("")
        self._status_label.setObjectName("statusLabel")
        layout.addWidget(self._status_label)

    def _start_audio(self):
        """Start microphone capture."""
        try:
            self._microphone.start()
            self._status_label.setText("Listening...")
        except UnavailableInput as e:
            logger.error("%s", e)
            self._status_label.setText(f"Audio error: {e}")

    def _on_audio_frame(self, samples: np.ndarray, sample_rate: int):
        """Audio thread: estimate pitch and queue it for the UI thread."""
        self._pending.append(self._estimator.estimate(samples))

    def _on_timer(self):
        """Feed queued frames to the session in arrival order, then redraw."""
        while self._pending:
            self._session.process_frequency(self._pending.popleft())
        self._refresh_display()

    def _refresh_display(self):
        """Show the session's latest projection if it changed."""
        projection = self._session.last_projection
        if projection is None or projection is self._displayed:
            return
        self._displayed = projection

        note = projection.note
        self._meter.set_angle(projection.meter_angle)
        if projection.active_key is not None:
            self._note_label.setText(f"{note.name}{note.octave}")
            self._frequency_label.setText(f"{note.frequency:.1f} Hz")
        self._note_strip.set_active(self._session.display.strip.active)

    def _on_note_clicked(self, note_index: int):
        """Handle a click on the note strip."""
        try:
            self._session.select_note(note_index)
        except UnavailableInput as e:
            logger.error("%s", e)
            self._status_label.setText(f"Audio error: {e}")
        self._note_strip.set_active(self._session.display.strip.active)
        self._refresh_display()

    def _on_reference_edited(self):
        """Handle A4 reference change."""
        if self._session.set_reference(self._reference_spin.value()):
            self._note_strip.set_keys(self._session.display.strip.keys)
            self._refresh_display()
        else:
            self._reference_spin.setValue(self._session.reference.frequency)

    def _on_auto_mode_toggled(self, checked: bool):
        """Handle auto/manual mode switch."""
        if (self._session.mode is TuningMode.AUTO) != checked:
            self._session.toggle_mode()
            self._store.save_auto_mode(checked)
        self._note_strip.set_active(self._session.display.strip.active)

    def _on_sensitivity_changed(self, value: int):
        """Handle level gate slider change."""
        self._estimator.set_min_rms(value / 1000.0)
        self._sensitivity_value.setText(f"{self._estimator.min_rms:.3f}")
        self._store.save_sensitivity(value)

    def _reset_to_defaults(self):
        """Reset all settings to their default values."""
        reply = QMessageBox.question(
            self,
            "Reset to Defaults",
            "Are you sure you want to reset all settings to their default values?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        if reply != QMessageBox.Yes:
            return

        self._store.clear()

        # Checkbox and slider handlers fire on change; the spin box does not
        self._reference_spin.setValue(DEFAULTS["a4"])
        self._on_reference_edited()
        self._auto_mode_cb.setChecked(DEFAULTS["auto_mode"])
        self._sensitivity_slider.setValue(DEFAULTS["sensitivity"])

    def closeEvent(self, event):
        """Handle window close."""
        self._timer.stop()
        self._microphone.stop()
        self._tone.stop()
        event.accept()


def main():
    """Main entry point for the tuner GUI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    window = TunerWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
