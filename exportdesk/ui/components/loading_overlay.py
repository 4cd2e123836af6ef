"""
Loading Overlay Component
Covers its parent while catalogs load or an export runs.
"""
from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout, QProgressBar
from PySide6.QtCore import Qt, QEvent


class LoadingOverlay(QFrame):
    """Semi-transparent overlay with a stage message and an optional debug line."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("loading_overlay")
        self.setAttribute(Qt.WA_StyledBackground, True)

        outer = QVBoxLayout(self)
        outer.setAlignment(Qt.AlignCenter)

        box = QFrame(self)
        box.setObjectName("loading_box")
        box.setMinimumWidth(320)
        inner = QVBoxLayout(box)
        inner.setContentsMargins(24, 20, 24, 20)
        inner.setSpacing(10)

        self.lbl_message = QLabel("")
        self.lbl_message.setAlignment(Qt.AlignCenter)
        self.lbl_message.setWordWrap(True)
        self.lbl_message.setStyleSheet("font-weight: 600;")
        inner.addWidget(self.lbl_message)

        self.progress = QProgressBar()
        self.progress.setRange(0, 0)
        self.progress.setTextVisible(False)
        self.progress.setFixedHeight(6)
        inner.addWidget(self.progress)

        self.lbl_debug = QLabel("")
        self.lbl_debug.setObjectName("muted")
        self.lbl_debug.setAlignment(Qt.AlignCenter)
        self.lbl_debug.setWordWrap(True)
        self.lbl_debug.hide()
        inner.addWidget(self.lbl_debug)

        outer.addWidget(box)
        self.hide()

        if parent is not None:
            parent.installEventFilter(self)

    def show_stage(self, message: str, debug: str = ""):
        self.lbl_message.setText(message)
        self.lbl_debug.setText(debug or "")
        self.lbl_debug.setVisible(bool(debug))
        self._fit_parent()
        self.show()
        self.raise_()

    def hide_overlay(self):
        self.lbl_debug.clear()
        self.lbl_debug.hide()
        self.hide()

    def _fit_parent(self):
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())

    def eventFilter(self, obj, event):
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self._fit_parent()
        return super().eventFilter(obj, event)
