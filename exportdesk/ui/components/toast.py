"""
Toast Notification Component
Floating notifications that expire on their own and close on click
"""
import logging

from PySide6.QtWidgets import QWidget, QLabel, QHBoxLayout, QFrame
from PySide6.QtCore import Qt, QTimer, QPoint
from PySide6.QtGui import QFont

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 5000


class ToastNotification(QFrame):
    """
    Rounded toast bound to one message; clicking it dismisses it early.
    """

    TOAST_STYLES = {
        "info": {
            "icon": "ℹ️",
            "bg": "#dbeafe",
            "fg": "#1e40af",
            "border": "#93c5fd",
        },
        "success": {
            "icon": "✓",
            "bg": "#dcfce7",
            "fg": "#166534",
            "border": "#86efac",
        },
        "warning": {
            "icon": "⚠",
            "bg": "#fef3c7",
            "fg": "#92400e",
            "border": "#fcd34d",
        },
        "error": {
            "icon": "✕",
            "bg": "#fee2e2",
            "fg": "#991b1b",
            "border": "#fca5a5",
        },
    }

    def __init__(self, message: str, toast_type: str = "info",
                 duration: int = DEFAULT_DURATION_MS, parent=None):
        super().__init__(parent)

        self.duration = duration
        self.toast_type = toast_type if toast_type in self.TOAST_STYLES else "info"
        self.message = message
        self.style_config = self.TOAST_STYLES[self.toast_type]

        self.setWindowFlags(Qt.FramelessWindowHint | Qt.Tool | Qt.WindowStaysOnTopHint)
        self.setAttribute(Qt.WA_DeleteOnClose)
        self.setCursor(Qt.PointingHandCursor)
        self.setToolTip("Click to dismiss")

        self._setup_ui(message)
        self._setup_timer()

    def _setup_ui(self, message: str):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(10)

        icon_label = QLabel(self.style_config["icon"])
        icon_label.setFont(QFont("Segoe UI Symbol", 12))
        icon_label.setStyleSheet(f"color: {self.style_config['fg']}; background: transparent;")
        layout.addWidget(icon_label)

        msg_label = QLabel(message)
        msg_label.setWordWrap(True)
        msg_label.setMaximumWidth(460)
        msg_label.setStyleSheet(f"color: {self.style_config['fg']}; background: transparent;")
        layout.addWidget(msg_label)

        self.setStyleSheet(f"""
            ToastNotification {{
                background-color: {self.style_config['bg']};
                border: 1px solid {self.style_config['border']};
                border-radius: 10px;
            }}
        """)

        self.setMinimumWidth(220)
        self.adjustSize()

    def _setup_timer(self):
        self.dismiss_timer = QTimer(self)
        self.dismiss_timer.setSingleShot(True)
        self.dismiss_timer.timeout.connect(self._auto_close)

    def _auto_close(self):
        self.close()
        self.deleteLater()

    def show_toast(self):
        self.show()
        self.raise_()
        self.dismiss_timer.start(self.duration)

    def dismiss(self):
        self.dismiss_timer.stop()
        self._auto_close()

    def mousePressEvent(self, event):
        self.dismiss()


class ToastManager:
    """
    Stacks toasts upwards from the bottom-right corner of the parent window.
    """

    SPACING = 8

    def __init__(self, parent: QWidget):
        self.parent = parent
        self.toasts = []
        self.margin_bottom = 32
        self.margin_right = 24

    def show_toast(self, message: str, toast_type: str = "info",
                   duration: int = DEFAULT_DURATION_MS):
        if not self.parent:
            return None

        toast = ToastNotification(message, toast_type, duration)
        self.toasts.append(toast)
        toast.destroyed.connect(lambda *_a, t=toast: self._on_toast_destroyed(t))
        toast.show_toast()
        self._reposition()
        return toast

    def _reposition(self):
        if not self.parent:
            return
        try:
            parent_rect = self.parent.geometry()
            global_pos = self.parent.mapToGlobal(QPoint(0, 0))
            y = global_pos.y() + parent_rect.height() - self.margin_bottom
            for toast in reversed(self.toasts):
                y -= toast.height()
                x = global_pos.x() + parent_rect.width() - toast.width() - self.margin_right
                toast.move(max(0, x), max(0, y))
                y -= self.SPACING
        except RuntimeError:
            # A toast was deleted between destroy and cleanup.
            logger.debug("Toast reposition skipped", exc_info=True)

    def _on_toast_destroyed(self, toast):
        try:
            self.toasts.remove(toast)
        except ValueError:
            return
        self._reposition()

    def dismiss_all(self):
        for toast in list(self.toasts):
            try:
                toast.dismiss()
            except RuntimeError:
                logger.debug("Toast already deleted", exc_info=True)
        self.toasts = []

    def info(self, message: str, duration: int = DEFAULT_DURATION_MS):
        return self.show_toast(message, "info", duration)

    def success(self, message: str, duration: int = DEFAULT_DURATION_MS):
        return self.show_toast(message, "success", duration)

    def warning(self, message: str, duration: int = DEFAULT_DURATION_MS):
        return self.show_toast(message, "warning", duration)

    def error(self, message: str, duration: int = DEFAULT_DURATION_MS):
        return self.show_toast(message, "error", duration)

    def notify(self, level: str, message: str, duration: int = DEFAULT_DURATION_MS):
        handler = {
            "info": self.info,
            "success": self.success,
            "warning": self.warning,
            "error": self.error,
        }.get(str(level or "info"), self.info)
        return handler(message, duration)
