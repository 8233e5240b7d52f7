"""
IcoQuick Converter Window
Single window with one page per session state:

Idle       -> drop zone / browse
Processing -> simulated background removal (timer)
Ready      -> preview, size controls, presets, Start Over / Download .ico
Error      -> message with Try again
"""

import os
from PyQt5.QtWidgets import (
    QWidget, QFrame, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QStackedWidget, QSpinBox, QProgressBar, QFileDialog
)
from PyQt5.QtGui import QPixmap, QFont
from PyQt5.QtCore import Qt, QTimer, QByteArray, pyqtSignal

from config import config
from errors import IcoQuickError
from ico_encoder import ICO_MIME_TYPE
from logger import log
from session import ConverterSession, ProcessState

PREVIEW_MAX_W = 320
PREVIEW_MAX_H = 256


class DropZone(QFrame):
    """Dashed drop target that also offers a browse button."""

    file_dropped = pyqtSignal(str)
    browse_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("dropZone")
        self.setAcceptDrops(True)
        self.setMinimumHeight(240)
        self.setCursor(Qt.PointingHandCursor)

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignCenter)
        layout.setSpacing(6)

        icon = QLabel("⬆")
        icon.setFont(QFont("Segoe UI", 28))
        icon.setAlignment(Qt.AlignCenter)
        layout.addWidget(icon)

        title = QLabel("Drag & drop an image here")
        title.setFont(QFont("Segoe UI", 11, QFont.Bold))
        title.setAlignment(Qt.AlignCenter)
        layout.addWidget(title)

        or_lbl = QLabel("or")
        or_lbl.setObjectName("subtitle")
        or_lbl.setAlignment(Qt.AlignCenter)
        layout.addWidget(or_lbl)

        browse_btn = QPushButton("Click to browse")
        browse_btn.setObjectName("link")
        browse_btn.setCursor(Qt.PointingHandCursor)
        browse_btn.clicked.connect(self.browse_requested.emit)
        layout.addWidget(browse_btn, 0, Qt.AlignCenter)

    def _set_drag_active(self, active):
        self.setProperty("dragActive", active)
        self.style().unpolish(self)
        self.style().polish(self)

    def _local_path(self, event):
        mime = event.mimeData()
        if not mime.hasUrls():
            return None
        urls = mime.urls()
        if not urls or not urls[0].isLocalFile():
            return None
        return urls[0].toLocalFile()

    def dragEnterEvent(self, event):
        if self._local_path(event):
            event.acceptProposedAction()
            self._set_drag_active(True)
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if self._local_path(event):
            event.acceptProposedAction()

    def dragLeaveEvent(self, event):
        self._set_drag_active(False)

    def dropEvent(self, event):
        self._set_drag_active(False)
        path = self._local_path(event)
        if path:
            event.acceptProposedAction()
            self.file_dropped.emit(path)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.browse_requested.emit()
        super().mousePressEvent(event)


class ConverterWindow(QWidget):
    """Main window: pick an image, choose a size, save an .ico."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.session = ConverterSession()

        self.setWindowTitle(f"{config.APP_NAME} - ICO Quick-Converter")
        self.setMinimumSize(560, 520)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(28, 24, 28, 16)
        layout.setSpacing(16)

        title = QLabel("ICO Quick-Converter")
        title.setObjectName("title")
        title.setAlignment(Qt.AlignCenter)
        layout.addWidget(title)

        subtitle = QLabel("Upload an image, resize, and download your .ico file in seconds.")
        subtitle.setObjectName("subtitle")
        subtitle.setAlignment(Qt.AlignCenter)
        subtitle.setWordWrap(True)
        layout.addWidget(subtitle)

        self.stack = QStackedWidget()
        self._pages = {
            ProcessState.IDLE: self._build_idle_page(),
            ProcessState.PROCESSING: self._build_processing_page(),
            ProcessState.READY: self._build_ready_page(),
            ProcessState.ERROR: self._build_error_page(),
        }
        for page in self._pages.values():
            self.stack.addWidget(page)
        layout.addWidget(self.stack, 1)

        footer = QLabel("Powered by PyQt5 & Pillow")
        footer.setObjectName("footer")
        footer.setAlignment(Qt.AlignCenter)
        layout.addWidget(footer)

        self._restore_geometry()
        self._refresh()

    # -------------------------------------------------------------------
    # Pages
    # -------------------------------------------------------------------

    def _build_idle_page(self):
        self.drop_zone = DropZone()
        self.drop_zone.file_dropped.connect(self._on_file_chosen)
        self.drop_zone.browse_requested.connect(self._browse)
        return self.drop_zone

    def _build_processing_page(self):
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setAlignment(Qt.AlignCenter)

        bar = QProgressBar()
        bar.setRange(0, 0)
        bar.setTextVisible(False)
        bar.setFixedWidth(220)
        layout.addWidget(bar, 0, Qt.AlignCenter)

        lbl = QLabel("Removing background...")
        lbl.setObjectName("subtitle")
        lbl.setAlignment(Qt.AlignCenter)
        layout.addWidget(lbl)
        return page

    def _build_ready_page(self):
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setSpacing(14)

        heading = QLabel("Image Ready for Conversion")
        heading.setFont(QFont("Segoe UI", 12, QFont.Bold))
        heading.setAlignment(Qt.AlignCenter)
        layout.addWidget(heading)

        preview_frame = QFrame()
        preview_frame.setObjectName("preview")
        pf_layout = QVBoxLayout(preview_frame)
        self.preview = QLabel()
        self.preview.setAlignment(Qt.AlignCenter)
        self.preview.setMinimumSize(160, 120)
        pf_layout.addWidget(self.preview)
        layout.addWidget(preview_frame, 0, Qt.AlignCenter)

        size_row = QHBoxLayout()
        size_row.addStretch()
        self.width_spin = self._make_size_spin(self.session.set_width)
        self.height_spin = self._make_size_spin(self.session.set_height)
        size_row.addWidget(self.width_spin)
        size_row.addWidget(QLabel("x"))
        size_row.addWidget(self.height_spin)
        size_row.addWidget(QLabel("px"))
        size_row.addStretch()
        layout.addLayout(size_row)

        preset_row = QHBoxLayout()
        preset_row.addStretch()
        for size in config.PRESET_SIZES:
            btn = QPushButton(f"{size}x{size}")
            btn.setObjectName("preset")
            btn.clicked.connect(lambda checked, s=size: self._apply_preset(s))
            preset_row.addWidget(btn)
        preset_row.addStretch()
        layout.addLayout(preset_row)

        btn_row = QHBoxLayout()
        btn_row.addStretch()
        reset_btn = QPushButton("Start Over")
        reset_btn.clicked.connect(self._reset)
        btn_row.addWidget(reset_btn)
        download_btn = QPushButton("Download .ico")
        download_btn.setObjectName("primary")
        download_btn.setDefault(True)
        download_btn.clicked.connect(self._download)
        btn_row.addWidget(download_btn)
        btn_row.addStretch()
        layout.addLayout(btn_row)
        return page

    def _build_error_page(self):
        page = QWidget()
        outer = QVBoxLayout(page)
        outer.setAlignment(Qt.AlignCenter)

        box = QFrame()
        box.setObjectName("errorBox")
        layout = QVBoxLayout(box)
        layout.setContentsMargins(24, 24, 24, 24)
        self.error_label = QLabel()
        self.error_label.setObjectName("errorText")
        self.error_label.setAlignment(Qt.AlignCenter)
        self.error_label.setWordWrap(True)
        layout.addWidget(self.error_label)

        retry_btn = QPushButton("Try again")
        retry_btn.clicked.connect(self._reset)
        layout.addWidget(retry_btn, 0, Qt.AlignCenter)
        outer.addWidget(box)
        return page

    def _make_size_spin(self, setter):
        spin = QSpinBox()
        spin.setRange(self.session.min_dimension, self.session.max_dimension)
        spin.setAlignment(Qt.AlignCenter)
        spin.valueChanged.connect(setter)
        return spin

    # -------------------------------------------------------------------
    # State sync
    # -------------------------------------------------------------------

    def _refresh(self):
        state = self.session.state
        self.stack.setCurrentWidget(self._pages[state])
        if state is ProcessState.ERROR:
            self.error_label.setText(self.session.error or "")
        self._sync_size_controls()

    def _sync_size_controls(self):
        for spin, value in ((self.width_spin, self.session.width),
                            (self.height_spin, self.session.height)):
            spin.blockSignals(True)
            spin.setValue(value)
            spin.blockSignals(False)

    def _show_preview(self):
        pixmap = QPixmap(self.session.source_path)
        if pixmap.isNull():
            log.warning(f"Qt could not preview {self.session.source_path}")
            self.preview.setText("(no preview)")
            return
        if pixmap.width() > PREVIEW_MAX_W or pixmap.height() > PREVIEW_MAX_H:
            pixmap = pixmap.scaled(PREVIEW_MAX_W, PREVIEW_MAX_H,
                                   Qt.KeepAspectRatio, Qt.SmoothTransformation)
        self.preview.setPixmap(pixmap)

    # -------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------

    def _browse(self):
        filepath, _ = QFileDialog.getOpenFileName(
            self, "Open Image", config.LAST_OPEN_DIR, config.OPEN_FILE_FILTER
        )
        if filepath:
            config.LAST_OPEN_DIR = os.path.dirname(filepath)
            self._on_file_chosen(filepath)

    def _on_file_chosen(self, filepath):
        if self.session.state is ProcessState.PROCESSING:
            log.info(f"Busy, ignoring {filepath}")
            return
        token = self.session.load_file(filepath)
        self._refresh()
        if token is None:
            return
        QTimer.singleShot(max(0, config.BACKGROUND_REMOVAL_DELAY_MS),
                          lambda: self._on_processing_done(token))

    def _on_processing_done(self, token):
        if not self.session.finish_processing(token):
            return
        self._show_preview()
        self._refresh()

    def _apply_preset(self, size):
        self.session.apply_preset(size)
        self._sync_size_controls()

    def _reset(self):
        self.session.reset()
        self.preview.clear()
        self._refresh()

    def _make_save_dialog(self):
        dialog = QFileDialog(self, "Save Icon")
        dialog.setAcceptMode(QFileDialog.AcceptSave)
        dialog.setFileMode(QFileDialog.AnyFile)
        # Suffix is applied before the dialog's own overwrite check
        dialog.setDefaultSuffix("ico")
        dialog.setMimeTypeFilters([ICO_MIME_TYPE, "application/octet-stream"])
        dialog.setDirectory(config.get_output_directory())
        dialog.selectFile(self.session.download_name())
        return dialog

    def _download(self):
        dialog = self._make_save_dialog()
        if dialog.exec_() != QFileDialog.Accepted:
            return
        files = dialog.selectedFiles()
        if not files:
            return
        filepath = files[0]

        try:
            self.session.save_icon(filepath)
        except IcoQuickError as e:
            log.error(f"Download failed: {e}")
            self._refresh()
            return

        config.LAST_SAVE_DIR = os.path.dirname(filepath)
        config.save()

    # -------------------------------------------------------------------
    # Geometry persistence
    # -------------------------------------------------------------------

    def _restore_geometry(self):
        if not config.WINDOW_GEOMETRY:
            self.resize(640, 600)
            return
        try:
            geometry = QByteArray.fromHex(config.WINDOW_GEOMETRY.encode('ascii'))
            self.restoreGeometry(geometry)
        except (AttributeError, UnicodeEncodeError) as e:
            log.warning(f"Could not restore window geometry: {e}")
            self.resize(640, 600)

    def closeEvent(self, event):
        config.WINDOW_GEOMETRY = bytes(self.saveGeometry().toHex()).decode('ascii')
        config.save()
        log.info("Window closed, settings saved")
        super().closeEvent(event)
