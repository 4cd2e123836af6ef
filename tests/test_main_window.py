from concurrent.futures import Future

import pytest
from PySide6.QtCore import QSettings, Qt
from requests.structures import CaseInsensitiveDict

from exportdesk.core.config import AppConfig, ClientSettings
from exportdesk.core.models import KIND_ALERTS, KIND_DASHBOARDS, Alert, Dashboard, Folder, FolderListing


class _InlineExecutor:
    def submit(self, fn, *args, **kwargs):
        fut = Future()
        try:
            fut.set_result(fn(*args, **kwargs))
        except Exception as e:
            fut.set_exception(e)
        return fut

    def shutdown(self, wait=True, cancel_futures=False):
        pass


class _Response:
    def __init__(self, payload):
        self.headers = CaseInsensitiveDict({"Content-Type": "application/json"})
        self._payload = payload
        self.content = b""

    def json(self):
        return self._payload


class _FakeClient:
    def __init__(self, config=None):
        self.config = config or AppConfig()
        self.payloads = []
        self.closed = False

    def get_config_status(self):
        return self.config

    def get_folders(self):
        return FolderListing(folders=[Folder(id=1, uid="a", title="Ops", dashboard_count=1)])

    def get_dashboards(self):
        return [
            Dashboard(uid="d1", title="Sales", folder_id=0, folder_title="General"),
            Dashboard(uid="d2", title="Latency", folder_id=1, folder_title="Ops"),
        ]

    def get_alerts(self):
        return [Alert(uid="a1", title="CPU", folder_id=1, folder_title="Ops")]

    def post_export(self, payload):
        self.payloads.append(payload)
        return _Response(
            {
                "exportedDashboards": len(payload["dashboardUIDs"]),
                "exportedAlerts": len(payload["alertUIDs"]),
                "exportedLibraries": 0,
                "exportPath": "/srv/exports",
                "errors": ["library panel lp1 missing"],
            }
        )

    def close(self):
        self.closed = True


@pytest.fixture
def make_window(qapp, tmp_path):
    created = []

    def _make(config=None):
        from exportdesk.ui.main_window import ExportDeskWindow

        client = _FakeClient(config)
        window = ExportDeskWindow(
            ClientSettings(download_dir=str(tmp_path)),
            client=client,
            settings=QSettings(str(tmp_path / "settings.ini"), QSettings.IniFormat),
            load_executor=_InlineExecutor(),
            export_executor=_InlineExecutor(),
        )
        created.append(window)
        return window, client

    yield _make
    for w in created:
        w.toast_manager.dismiss_all()
        w.close()


def test_catalog_is_rendered_after_startup(make_window):
    window, _client = make_window()

    dash_view = window.catalog_views[KIND_DASHBOARDS]
    assert dash_view.item_list.rendered_uids() == ["d1", "d2"]
    assert [n.node_id for n in dash_view.folder_tree.nodes] == ["all", "0", "1"]
    assert window.catalog_views[KIND_ALERTS].item_list.rendered_uids() == ["a1"]
    assert window.overlay.isHidden()


def test_checking_a_row_updates_session_and_export_button(make_window):
    window, _client = make_window()
    view = window.catalog_views[KIND_DASHBOARDS]

    view.item_list.item(0).setCheckState(Qt.CheckState.Checked)

    assert window.session.selected(KIND_DASHBOARDS) == frozenset({"d1"})
    assert window.btn_export.text() == "Export 1 Dashboards"
    assert window.btn_export.isEnabled()


def test_select_all_checks_only_visible_rows(make_window):
    window, _client = make_window()
    view = window.catalog_views[KIND_DASHBOARDS]
    view.txt_search.setText("lat")

    view.btn_select_all.click()

    assert window.session.selected(KIND_DASHBOARDS) == frozenset({"d2"})
    assert view.item_list.checked_uids() == {"d2"}


def test_forced_zip_locks_checkbox(make_window):
    window, _client = make_window(AppConfig(force_enable_zip_export=True))

    assert window.chk_export_zip.isChecked()
    assert not window.chk_export_zip.isEnabled()
    assert window.btn_export.isEnabled()


def test_export_shows_summary_and_warnings(make_window):
    window, client = make_window()
    window.session.toggle(KIND_ALERTS, "a1", True)

    window.start_export()

    assert client.payloads[0]["alertUIDs"] == ["a1"]
    assert not window.export_result_card.isHidden()
    assert "Export path: /srv/exports" in window.lbl_export_result.text()
    assert "library panel lp1 missing" in window.txt_export_warnings.toPlainText()


def test_sidebar_shows_selection_counts(make_window):
    window, _client = make_window()

    assert window.sidebar.label_for("dashboards") == "Dashboards"

    window.session.toggle(KIND_DASHBOARDS, "d1", True)
    window.session.toggle(KIND_DASHBOARDS, "d2", True)
    window.session.toggle(KIND_ALERTS, "a1", True)

    assert window.sidebar.label_for("dashboards") == "Dashboards  (2)"
    assert window.sidebar.label_for("alerts") == "Alerts  (1)"
    assert window.sidebar.label_for("export") == "Export  (3)"


def test_sidebar_click_switches_page(make_window):
    window, _client = make_window()

    window.sidebar.buttons["export"].click()

    assert window.page_stack.currentIndex() == 2
    assert window.sidebar.current_page == "export"
