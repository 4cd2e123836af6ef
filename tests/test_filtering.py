from exportdesk.core.filtering import FilterState, filter_items, parse_folder_selector
from exportdesk.core.models import Alert, Dashboard


def _dashboards():
    return [
        Dashboard.from_api({"uid": "d1", "title": "Sales", "folderId": 0, "tags": ["prod"]}),
        Dashboard.from_api({"uid": "d2", "title": "Latency", "folderId": 3, "folderTitle": "SRE", "tags": ["ops"]}),
        Dashboard.from_api({"uid": "d3", "title": "Production overview", "folderId": 3, "folderTitle": "SRE"}),
    ]


def test_tag_match_without_title_match():
    out = filter_items(_dashboards()[:1], FilterState(search_query="prod"))

    assert [d.uid for d in out] == ["d1"]


def test_search_is_case_insensitive_substring():
    out = filter_items(_dashboards(), FilterState(search_query="PROD"))

    assert [d.uid for d in out] == ["d1", "d3"]


def test_folder_then_search_stages_combine():
    out = filter_items(_dashboards(), FilterState(selected_folder="3", search_query="prod"))

    assert [d.uid for d in out] == ["d3"]


def test_all_is_identity_on_folder_stage():
    items = _dashboards()

    assert filter_items(items, FilterState()) == items


def test_general_folder_selector_matches_folder_zero():
    out = filter_items(_dashboards(), FilterState(selected_folder="0"))

    assert [d.uid for d in out] == ["d1"]
    assert out[0].folder_title == "General"


def test_filter_is_idempotent():
    state = FilterState(selected_folder="3", search_query="lat")
    once = filter_items(_dashboards(), state)

    assert filter_items(once, state) == once


def test_non_numeric_selector_matches_nothing():
    assert parse_folder_selector("abc") is None
    assert filter_items(_dashboards(), FilterState(selected_folder="abc")) == []


def test_alert_search_matches_folder_title():
    alerts = [
        Alert.from_api({"uid": "a1", "title": "CPU high", "folderId": 4, "folderTitle": "Infra"}),
        Alert.from_api({"uid": "a2", "title": "Disk full", "folderId": 5, "folderTitle": "Storage"}),
    ]

    out = filter_items(alerts, FilterState(search_query="infra"))

    assert [a.uid for a in out] == ["a1"]


def test_alert_without_folder_id_lands_in_general():
    alert = Alert.from_api({"uid": "a9", "title": "Orphaned rule"})

    assert alert.folder_id == 0
    assert filter_items([alert], FilterState(selected_folder="0")) == [alert]


def test_whitespace_only_query_is_ignored():
    items = _dashboards()

    assert filter_items(items, FilterState(search_query="   ")) == items
