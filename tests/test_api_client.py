import pytest
import requests

from exportdesk.core.api_client import ApiClient, ApiError


class _FakeResponse:
    def __init__(self, status_code=200, payload=None, text="", reason="OK", json_error=False):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self._payload = payload
        self.text = text
        self.reason = reason
        self._json_error = json_error
        self.headers = {}
        self.content = b""

    def json(self):
        if self._json_error:
            raise ValueError("Expecting value")
        return self._payload


class _FakeSession:
    def __init__(self, routes=None, raise_on=None):
        self.headers = {}
        self.routes = dict(routes or {})
        self.raise_on = raise_on
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append(("GET", url, None))
        if self.raise_on:
            raise self.raise_on
        return self.routes[url]

    def post(self, url, json=None, timeout=None):
        self.calls.append(("POST", url, json))
        if self.raise_on:
            raise self.raise_on
        return self.routes[url]

    def close(self):
        self.closed = True


BASE = "http://backend:8080"


def _client(routes=None, raise_on=None):
    session = _FakeSession({BASE + path: r for path, r in (routes or {}).items()}, raise_on=raise_on)
    return ApiClient(BASE + "/", timeout_s=5, session=session), session


def test_folders_enhanced_shape_carries_debug():
    client, _ = _client(
        {
            "/api/folders": _FakeResponse(
                payload={
                    "folders": [
                        {"id": 1, "uid": "a", "title": "T1"},
                        {"id": 2, "uid": "b", "title": "T2", "parentUid": "a"},
                    ],
                    "hasNestedStructure": True,
                    "debug": "2 folders, 1 nested",
                }
            )
        }
    )

    listing = client.get_folders()

    assert [f.uid for f in listing.folders] == ["a", "b"]
    assert listing.folders[1].parent_uid == "a"
    assert listing.has_nested_structure is True
    assert listing.debug == "2 folders, 1 nested"
    assert listing.nested_count == 1


def test_folders_bare_array_shape():
    client, _ = _client({"/api/folders": _FakeResponse(payload=[{"id": 3, "uid": "c", "title": "Ops"}])})

    listing = client.get_folders()

    assert [f.title for f in listing.folders] == ["Ops"]
    assert listing.debug is None


def test_dashboards_default_general_folder_title():
    client, _ = _client(
        {
            "/api/dashboards": _FakeResponse(
                payload={"dashboards": [{"uid": "d1", "title": "Sales", "folderId": 0, "tags": ["prod"]}]}
            )
        }
    )

    [d] = client.get_dashboards()

    assert d.folder_title == "General"
    assert d.tags == ["prod"]


def test_alerts_missing_key_is_empty_list():
    client, _ = _client({"/api/alerts": _FakeResponse(payload={})})

    assert client.get_alerts() == []


def test_get_failure_uses_status_text():
    client, _ = _client({"/api/dashboards": _FakeResponse(status_code=502, reason="Bad Gateway")})

    with pytest.raises(ApiError) as ex:
        client.get_dashboards()

    assert ex.value.status_code == 502
    assert "Failed to load dashboards: Bad Gateway" in str(ex.value)


def test_get_transport_error_is_wrapped():
    client, _ = _client(raise_on=requests.ConnectionError("refused"))

    with pytest.raises(ApiError) as ex:
        client.get_folders()

    assert "Failed to load folders" in str(ex.value)


def test_config_status_reads_canonical_flag():
    client, _ = _client(
        {
            "/api/config-status": _FakeResponse(
                payload={"forceEnableZipExport": True, "hasEnvFile": False, "errorMessage": "no .env"}
            )
        }
    )

    config = client.get_config_status()

    assert config.force_enable_zip_export is True
    assert config.backend_misconfigured is True
    assert config.error_message == "no .env"


def test_post_export_sends_payload_and_surfaces_body_on_error():
    client, session = _client({"/api/export": _FakeResponse(status_code=500, text="boom", reason="Server Error")})

    with pytest.raises(ApiError) as ex:
        client.post_export({"dashboardUIDs": ["d1"]})

    assert ex.value.detail == "boom"
    assert session.calls == [("POST", BASE + "/api/export", {"dashboardUIDs": ["d1"]})]


def test_close_closes_session():
    client, session = _client()

    client.close()

    assert session.closed is True
