import logging
import sys

from PySide6.QtWidgets import QApplication

from exportdesk.core.config import ClientSettings
from exportdesk.utils.i18n import strings

logger = logging.getLogger("exportdesk")


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def exception_hook(exctype, value, traceback):
    from PySide6.QtWidgets import QMessageBox

    logger.critical("Unhandled exception", exc_info=(exctype, value, traceback))
    title = strings.tr("err_critical_title")
    msg = strings.tr("err_unexpected")
    if QApplication.instance() is not None:
        QMessageBox.critical(None, title, f"{msg}:\n{value}\n\n{strings.tr('status_ready')}")


def main() -> int:
    client_settings = ClientSettings.from_env()
    _configure_logging(client_settings.debug)
    logger.info("Backend: %s (timeout %.0fs)", client_settings.base_url, client_settings.timeout_s)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(strings.tr("app_title"))
    sys.excepthook = exception_hook

    from exportdesk.ui.main_window import ExportDeskWindow

    window = ExportDeskWindow(client_settings)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
