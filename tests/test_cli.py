import json

import pytest
from requests.structures import CaseInsensitiveDict

import cli
from cli import _parse_args
from exportdesk.core.api_client import ApiError
from exportdesk.core.config import AppConfig
from exportdesk.core.models import Alert, Dashboard, Folder, FolderListing


class _Response:
    def __init__(self, content_type, payload=None, content=b"", disposition=None):
        self.headers = CaseInsensitiveDict({"Content-Type": content_type})
        if disposition:
            self.headers["Content-Disposition"] = disposition
        self._payload = payload
        self.content = content

    def json(self):
        return self._payload


class _FakeClient:
    instances = []
    config = AppConfig()
    response = None
    fail_on = None

    def __init__(self, base_url, *, timeout_s):
        self.base_url = base_url
        self.timeout_s = timeout_s
        self.payloads = []
        self.closed = False
        _FakeClient.instances.append(self)

    def get_config_status(self):
        return self.config

    def get_folders(self):
        return FolderListing(
            folders=[
                Folder(id=1, uid="a", title="Ops", dashboard_count=1),
                Folder(id=2, uid="b", title="Team", parent_uid="a"),
            ]
        )

    def get_dashboards(self):
        if self.fail_on == "dashboards":
            raise ApiError("Failed to load dashboards: Bad Gateway", 502)
        return [
            Dashboard(uid="d1", title="Sales", folder_id=0, folder_title="General", tags=["prod"]),
            Dashboard(uid="d2", title="Latency", folder_id=1, folder_title="Ops"),
        ]

    def get_alerts(self):
        return [Alert(uid="a1", title="CPU", folder_id=1, folder_title="Ops")]

    def post_export(self, payload):
        self.payloads.append(payload)
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture
def fake_client(monkeypatch):
    _FakeClient.instances = []
    _FakeClient.config = AppConfig()
    _FakeClient.fail_on = None
    _FakeClient.response = _Response(
        "application/json",
        payload={"exportedDashboards": 1, "exportedAlerts": 0, "exportedLibraries": 0, "exportPath": "/srv/x"},
    )
    monkeypatch.setattr(cli, "ApiClient", _FakeClient)
    return _FakeClient


def test_parse_args_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("EXPORTDESK_BASE_URL", "http://grafana-exporter:9000/")
    monkeypatch.setenv("EXPORTDESK_TIMEOUT", "12")

    args = _parse_args([])

    assert args.base_url == "http://grafana-exporter:9000"
    assert args.timeout == 12.0
    assert args.folder == "all"
    assert args.dashboard == []


def test_parse_args_rejects_bad_timeout():
    with pytest.raises(SystemExit) as ex:
        _parse_args(["--timeout", "soon"])
    assert int(ex.value.code or 0) == 2


@pytest.mark.parametrize("folder", ["5.7", "3abc", "ops"])
def test_parse_args_rejects_non_integer_folder(folder):
    with pytest.raises(SystemExit) as ex:
        _parse_args(["--folder", folder])
    assert int(ex.value.code or 0) == 2


def test_parse_args_accepts_integer_folder():
    assert _parse_args(["--folder", " 7 "]).folder == "7"


def test_nothing_to_do_is_usage_error(fake_client):
    assert cli.main([]) == 2
    assert fake_client.instances[0].closed is True


def test_tree_only_prints_and_exits_ok(fake_client, capsys):
    assert cli.main(["--tree"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("*") and "All Folders" in out[0]
    assert "General" in out[1]
    assert "Ops (1) [id=1]" in out[2]
    assert "Team [id=2]" in out[3]
    assert fake_client.instances[0].payloads == []


def test_all_dashboards_respects_filters(fake_client, capsys):
    assert cli.main(["--all-dashboards", "--search", "prod", "--no-alerts"]) == 0

    [payload] = fake_client.instances[0].payloads
    assert payload == {
        "dashboardUIDs": ["d1"],
        "alertUIDs": [],
        "includeAlerts": False,
        "exportAsZip": False,
    }
    assert "Export path: /srv/x" in capsys.readouterr().out


def test_empty_filtered_selection_never_posts(fake_client):
    assert cli.main(["--all-dashboards", "--folder", "2"]) == 2
    assert fake_client.instances[0].payloads == []


def test_forced_zip_downloads_archive(fake_client, tmp_path):
    fake_client.config = AppConfig(force_enable_zip_export=True)
    fake_client.response = _Response(
        "application/zip", content=b"PK", disposition='attachment; filename="grafana-export-1.zip"'
    )
    out_json = tmp_path / "out.json"

    rc = cli.main(["--alert", "a1", "--output-dir", str(tmp_path), "--output-json", str(out_json)])

    assert rc == 0
    assert fake_client.instances[0].payloads[0]["exportAsZip"] is True
    assert (tmp_path / "grafana-export-1.zip").read_bytes() == b"PK"
    data = json.loads(out_json.read_text(encoding="utf-8"))
    assert data["kind"] == "archive"
    assert data["filename"] == "grafana-export-1.zip"


def test_catalog_failure_exits_with_error(fake_client, capsys):
    fake_client.fail_on = "dashboards"

    assert cli.main(["--tree"]) == 1
    assert "Bad Gateway" in capsys.readouterr().err
