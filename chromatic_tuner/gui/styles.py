"""
Colors and style sheets shared by the tuner widgets.
"""

WINDOW_BACKGROUND = "#1e1e1e"
PANEL_BACKGROUND = "#2b2b2b"
BORDER_COLOR = "#3c3c3c"
TEXT_PRIMARY = "#e0e0e0"
TEXT_SECONDARY = "#8a8a8a"
ACCENT_GREEN = "#4caf50"
WARNING_ORANGE = "#ff9800"
ERROR_RED = "#f44336"

MAIN_WINDOW_STYLE = f"""
QMainWindow, QWidget {{
    background-color: {WINDOW_BACKGROUND};
    color: {TEXT_PRIMARY};
}}
QLabel#noteLabel {{
    font-size: 64px;
    font-weight: bold;
}}
QLabel#frequencyLabel {{
    font-size: 18px;
    color: {TEXT_SECONDARY};
}}
QLabel#statusLabel {{
    color: {TEXT_SECONDARY};
}}
"""

NOTE_KEY_STYLE = f"""
QPushButton {{
    background-color: {PANEL_BACKGROUND};
    border: 1px solid {BORDER_COLOR};
    border-radius: 4px;
    min-width: 44px;
    padding: 6px 4px;
    color: {TEXT_PRIMARY};
}}
QPushButton:checked {{
    background-color: {ACCENT_GREEN};
    color: {WINDOW_BACKGROUND};
}}
"""

SHARP_KEY_STYLE = NOTE_KEY_STYLE.replace(PANEL_BACKGROUND, WINDOW_BACKGROUND, 1)
