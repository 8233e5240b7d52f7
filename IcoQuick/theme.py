"""
IcoQuick Dark Theme
Slate palette plus the stylesheet for the converter window.
"""

from PyQt5.QtWidgets import QApplication
from PyQt5.QtGui import QPalette, QColor

BACKGROUND = "#1e1e2e"
SURFACE = "#313244"
BORDER = "#45475a"
TEXT = "#cdd6f4"
SUBTEXT = "#a6adc8"
MUTED = "#6c7086"
ACCENT = "#89b4fa"
ACCENT_DARK = "#74a0f0"
ERROR = "#f38ba8"


DARK_STYLESHEET = f"""
QWidget {{
    background-color: {BACKGROUND};
    color: {TEXT};
    font-family: "Segoe UI", sans-serif;
    font-size: 10pt;
}}

QLabel {{
    background-color: transparent;
}}

QLabel#title {{
    font-size: 22pt;
    font-weight: bold;
}}

QLabel#subtitle, QLabel#footer {{
    color: {SUBTEXT};
}}

QFrame#dropZone {{
    border: 2px dashed {BORDER};
    border-radius: 10px;
}}

QFrame#dropZone[dragActive="true"] {{
    border-color: {ACCENT};
    background-color: #24273a;
}}

QFrame#preview {{
    background-color: #11111b;
    border: 1px solid {BORDER};
    border-radius: 8px;
}}

QFrame#errorBox {{
    background-color: #3a1f2b;
    border: 1px solid {ERROR};
    border-radius: 8px;
}}

QLabel#errorText {{
    color: {ERROR};
    font-weight: bold;
}}

QPushButton {{
    background-color: {SURFACE};
    color: {TEXT};
    border: 1px solid {BORDER};
    border-radius: 6px;
    padding: 8px 18px;
}}

QPushButton:hover {{
    background-color: {BORDER};
    border-color: {ACCENT};
}}

QPushButton#primary {{
    background-color: {ACCENT};
    color: {BACKGROUND};
    font-weight: bold;
    border-color: {ACCENT};
}}

QPushButton#primary:hover {{
    background-color: {ACCENT_DARK};
}}

QPushButton#preset {{
    padding: 3px 8px;
    font-size: 8pt;
}}

QPushButton#link {{
    background-color: transparent;
    border: none;
    color: {ACCENT};
    font-weight: bold;
}}

QSpinBox {{
    background-color: {SURFACE};
    border: 1px solid {BORDER};
    border-radius: 4px;
    padding: 4px;
    min-width: 60px;
}}

QSpinBox:focus {{
    border-color: {ACCENT};
}}

QToolTip {{
    background-color: {SURFACE};
    color: {TEXT};
    border: 1px solid {BORDER};
}}
"""


def apply_dark_theme(app: QApplication):
    """Apply the dark palette and stylesheet to the application."""
    palette = QPalette()
    palette.setColor(QPalette.Window, QColor(BACKGROUND))
    palette.setColor(QPalette.WindowText, QColor(TEXT))
    palette.setColor(QPalette.Base, QColor(SURFACE))
    palette.setColor(QPalette.Text, QColor(TEXT))
    palette.setColor(QPalette.Button, QColor(SURFACE))
    palette.setColor(QPalette.ButtonText, QColor(TEXT))
    palette.setColor(QPalette.Highlight, QColor(ACCENT))
    palette.setColor(QPalette.HighlightedText, QColor(BACKGROUND))
    palette.setColor(QPalette.Disabled, QPalette.Text, QColor(MUTED))
    palette.setColor(QPalette.Disabled, QPalette.ButtonText, QColor(MUTED))

    app.setPalette(palette)
    app.setStyleSheet(DARK_STYLESHEET)
