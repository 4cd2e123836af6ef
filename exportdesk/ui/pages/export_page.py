from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QCheckBox,
    QLineEdit,
    QTextEdit,
)
from PySide6.QtCore import Qt

from exportdesk.utils.i18n import strings


def build_export_page(window) -> QWidget:
    page = QWidget()
    export_layout = QVBoxLayout(page)
    export_layout.setSpacing(16)
    export_layout.setContentsMargins(16, 12, 16, 12)

    window.lbl_export_title = QLabel(strings.tr("nav_export"))
    window.lbl_export_title.setStyleSheet("font-size: 18px; font-weight: 600;")
    export_layout.addWidget(window.lbl_export_title)

    # Selection + options card
    options_card = QWidget()
    options_card.setObjectName("card")
    options_layout = QVBoxLayout(options_card)
    options_layout.setContentsMargins(20, 16, 20, 16)
    options_layout.setSpacing(12)

    window.lbl_export_selection = QLabel(
        strings.tr("msg_export_selection").format(dashboards=0, alerts=0, total=0)
    )
    options_layout.addWidget(window.lbl_export_selection)

    window.chk_include_alerts = QCheckBox(strings.tr("chk_include_alerts"))
    window.chk_include_alerts.setChecked(True)
    options_layout.addWidget(window.chk_include_alerts)

    window.chk_export_zip = QCheckBox(strings.tr("chk_export_zip"))
    options_layout.addWidget(window.chk_export_zip)

    dir_row = QHBoxLayout()
    dir_row.setSpacing(8)
    dir_row.addWidget(QLabel(strings.tr("lbl_download_dir")))
    window.txt_download_dir = QLineEdit()
    window.txt_download_dir.setReadOnly(True)
    dir_row.addWidget(window.txt_download_dir, 1)
    window.btn_browse_download_dir = QPushButton(strings.tr("btn_browse"))
    window.btn_browse_download_dir.setCursor(Qt.PointingHandCursor)
    window.btn_browse_download_dir.clicked.connect(window.choose_download_dir)
    dir_row.addWidget(window.btn_browse_download_dir)
    options_layout.addLayout(dir_row)

    window.btn_export = QPushButton(strings.tr("btn_export_selected"))
    window.btn_export.setObjectName("btn_primary")
    window.btn_export.setMinimumHeight(44)
    window.btn_export.setCursor(Qt.PointingHandCursor)
    window.btn_export.setEnabled(False)
    window.btn_export.clicked.connect(window.start_export)
    options_layout.addWidget(window.btn_export)
    export_layout.addWidget(options_card)

    # Result card
    window.export_result_card = QWidget()
    window.export_result_card.setObjectName("card")
    result_layout = QVBoxLayout(window.export_result_card)
    result_layout.setContentsMargins(20, 16, 20, 16)
    result_layout.setSpacing(8)

    window.lbl_export_result_title = QLabel(strings.tr("export_result_title"))
    window.lbl_export_result_title.setStyleSheet("font-weight: 600;")
    result_layout.addWidget(window.lbl_export_result_title)

    window.lbl_export_result = QLabel("")
    window.lbl_export_result.setWordWrap(True)
    window.lbl_export_result.setTextInteractionFlags(Qt.TextSelectableByMouse)
    result_layout.addWidget(window.lbl_export_result)

    window.lbl_export_warnings = QLabel(strings.tr("export_result_warnings"))
    window.lbl_export_warnings.setObjectName("muted")
    result_layout.addWidget(window.lbl_export_warnings)

    window.txt_export_warnings = QTextEdit()
    window.txt_export_warnings.setReadOnly(True)
    window.txt_export_warnings.setMaximumHeight(160)
    result_layout.addWidget(window.txt_export_warnings)

    window.lbl_export_warnings.hide()
    window.txt_export_warnings.hide()
    window.export_result_card.hide()
    export_layout.addWidget(window.export_result_card)

    export_layout.addStretch()
    return page
