# Controllers keep fetch/export orchestration out of the main window.

from .export_controller import ExportController
from .load_controller import LoadController
from .navigation_controller import NavigationController

__all__ = [
    "ExportController",
    "LoadController",
    "NavigationController",
]
