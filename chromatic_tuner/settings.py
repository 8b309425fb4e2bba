"""
Persistent user settings backed by QSettings.
"""

from PySide6.QtCore import QSettings

from .constants import A4_REFERENCE

DEFAULTS = {
    "a4": A4_REFERENCE,
    "auto_mode": True,
    "sensitivity": 10,  # Level gate in thousandths of full scale RMS
}


class SettingsStore:
    """
    Key-value persistence for the tuner.

    Implements the reference-pitch load/save hooks used by ReferencePitch
    and TunerSession.
    """

    def __init__(self, settings: QSettings | None = None):
        """
        Initialize settings store.

        Args:
            settings: QSettings to use; defaults to the per-user application
                settings
        """
        if settings is None:
            settings = QSettings("chromatic-tuner", "ChromaticTuner")
        self._settings = settings

    def load_reference_hz(self) -> int | None:
        """Stored A4 reference, or None if none was saved."""
        if not self._settings.contains("a4"):
            return None
        return self._settings.value("a4", DEFAULTS["a4"], type=int)

    def save_reference_hz(self, hz: int):
        self._settings.setValue("a4", int(hz))
        self._settings.sync()

    def load_auto_mode(self) -> bool:
        return self._settings.value("auto_mode", DEFAULTS["auto_mode"], type=bool)

    def save_auto_mode(self, enabled: bool):
        self._settings.setValue("auto_mode", bool(enabled))
        self._settings.sync()

    def load_sensitivity(self) -> int:
        return self._settings.value("sensitivity", DEFAULTS["sensitivity"], type=int)

    def save_sensitivity(self, value: int):
        self._settings.setValue("sensitivity", int(value))
        self._settings.sync()

    def clear(self):
        """Remove all stored settings."""
        self._settings.clear()
        self._settings.sync()
