class ModernTheme:
    """
    Centralized palette and stylesheet for the export desk.
    """

    LIGHT_PALETTE = {
        "bg": "#f8f9fa",
        "fg": "#1a1a2e",
        "border": "#e1e4e8",
        "card_bg": "#ffffff",
        "card_border": "#e8eaed",
        "primary": "#6366f1",
        "primary_hover": "#4f46e5",
        "primary_light": "#eef2ff",
        "success": "#10b981",
        "success_hover": "#059669",
        "warning_light": "#fef3c7",
        "text_primary": "#1a1a2e",
        "text_secondary": "#6b7280",
        "text_tertiary": "#9ca3af",
        "hover": "#f3f4f6",
        "active": "#e5e7eb",
        "input_border": "#d1d5db",
        "badge_level": "#6366f1",
        "badge_count": "#6b7280",
        "overlay_bg": "rgba(15, 23, 42, 0.55)",
    }

    @staticmethod
    def get_palette(mode="light"):
        return ModernTheme.LIGHT_PALETTE

    @staticmethod
    def get_stylesheet(mode="light"):
        c = ModernTheme.get_palette(mode)

        return f"""
            QMainWindow, QDialog {{
                background-color: {c['bg']};
                color: {c['fg']};
            }}

            QWidget {{
                font-family: 'Segoe UI', -apple-system, sans-serif;
                font-size: 14px;
                color: {c['text_primary']};
            }}

            QLabel {{
                background: transparent;
            }}
            QLabel#muted {{
                color: {c['text_secondary']};
                font-size: 12px;
            }}

            QWidget#card {{
                background-color: {c['card_bg']};
                border: 1px solid {c['card_border']};
                border-radius: 12px;
            }}

            QPushButton {{
                background-color: {c['card_bg']};
                border: 1px solid {c['border']};
                border-radius: 8px;
                padding: 8px 16px;
                min-height: 20px;
            }}
            QPushButton:hover {{
                background-color: {c['hover']};
                border-color: {c['primary']};
            }}
            QPushButton:pressed {{
                background-color: {c['active']};
            }}
            QPushButton:disabled {{
                color: {c['text_tertiary']};
                background-color: {c['bg']};
            }}

            QFrame#sidebar {{
                background-color: {c['primary']};
                border: none;
            }}
            QLabel#sidebar_title {{
                color: #ffffff;
                font-size: 16px;
                font-weight: 600;
            }}
            QPushButton#sidebar_btn {{
                background: transparent;
                border: none;
                border-radius: 8px;
                color: {c['primary_light']};
                padding: 8px 12px;
                text-align: left;
            }}
            QPushButton#sidebar_btn:hover {{
                background-color: {c['primary_hover']};
                color: #ffffff;
            }}
            QPushButton#sidebar_btn:checked {{
                background-color: {c['primary_hover']};
                color: #ffffff;
                font-weight: 600;
            }}

            QPushButton#btn_primary {{
                background: qlineargradient(x1:0, y1:0, x2:0, y2:1,
                    stop:0 {c['success']}, stop:1 {c['success_hover']});
                color: #ffffff;
                border: none;
                border-radius: 10px;
                font-weight: 600;
                padding: 12px 24px;
            }}
            QPushButton#btn_primary:disabled {{
                background: {c['border']};
                color: {c['text_tertiary']};
            }}

            QLineEdit {{
                background-color: {c['card_bg']};
                border: 1px solid {c['input_border']};
                border-radius: 8px;
                padding: 8px 12px;
            }}
            QLineEdit:focus {{
                border-color: {c['primary']};
            }}

            QListWidget {{
                background-color: {c['card_bg']};
                border: 1px solid {c['card_border']};
                border-radius: 8px;
                outline: none;
            }}
            QListWidget::item {{
                padding: 6px 8px;
            }}
            QListWidget::item:selected {{
                background-color: {c['primary_light']};
                color: {c['text_primary']};
            }}

            QFrame#loading_overlay {{
                background-color: {c['overlay_bg']};
            }}
            QFrame#loading_box {{
                background-color: {c['card_bg']};
                border-radius: 12px;
            }}
        """
