from exportdesk.core.config import AppConfig
from exportdesk.core.models import KIND_ALERTS, KIND_DASHBOARDS, Alert, Dashboard, Folder
from exportdesk.ui.app_state import CatalogSession


def _session(qapp):
    s = CatalogSession()
    s.replace_folders(
        [
            Folder(id=1, uid="a", title="Ops"),
            Folder(id=2, uid="b", title="Team", parent_uid="a"),
        ]
    )
    s.replace_items(
        KIND_DASHBOARDS,
        [
            Dashboard(uid="d1", title="Sales", folder_id=0, folder_title="General", tags=["prod"]),
            Dashboard(uid="d2", title="Latency", folder_id=1, folder_title="Ops"),
            Dashboard(uid="d3", title="Errors", folder_id=2, folder_title="Team"),
        ],
    )
    s.replace_items(
        KIND_ALERTS,
        [
            Alert(uid="a1", title="CPU", folder_id=1, folder_title="Ops"),
            Alert(uid="a2", title="Disk", folder_id=1, folder_title="Ops"),
        ],
    )
    return s


def test_select_all_adds_exactly_the_filtered_uids(qapp):
    s = _session(qapp)
    s.set_selected_folder(KIND_DASHBOARDS, "1")

    added = s.select_all(KIND_DASHBOARDS)

    assert added == 1
    assert s.selected(KIND_DASHBOARDS) == frozenset({"d2"})


def test_selection_survives_filter_changes(qapp):
    s = _session(qapp)
    s.toggle(KIND_DASHBOARDS, "d1", True)

    s.set_search_query(KIND_DASHBOARDS, "latency")

    assert [d.uid for d in s.filtered(KIND_DASHBOARDS)] == ["d2"]
    assert s.is_selected(KIND_DASHBOARDS, "d1") is True


def test_filter_states_are_per_collection(qapp):
    s = _session(qapp)

    s.set_selected_folder(KIND_ALERTS, "2")

    assert s.filter_state(KIND_DASHBOARDS).selected_folder == "all"
    assert s.filtered(KIND_ALERTS) == []
    assert len(s.filtered(KIND_DASHBOARDS)) == 3


def test_search_query_is_trimmed(qapp):
    s = _session(qapp)

    s.set_search_query(KIND_DASHBOARDS, "  prod  ")

    assert s.filter_state(KIND_DASHBOARDS).search_query == "prod"
    assert [d.uid for d in s.filtered(KIND_DASHBOARDS)] == ["d1"]


def test_signals_emitted_on_mutation(qapp):
    s = _session(qapp)
    seen = {"items": [], "selection": [], "affordance": [], "folders": 0}
    s.items_changed.connect(lambda kind: seen["items"].append(kind))
    s.selection_changed.connect(lambda kind: seen["selection"].append(kind))
    s.affordance_changed.connect(lambda a: seen["affordance"].append(a))
    s.folders_changed.connect(lambda: seen.__setitem__("folders", seen["folders"] + 1))

    s.toggle(KIND_ALERTS, "a1", True)
    s.toggle(KIND_ALERTS, "a1", True)
    s.set_selected_folder(KIND_DASHBOARDS, "0")

    assert seen["selection"] == [KIND_ALERTS]
    assert seen["affordance"][-1].alerts == 1
    assert seen["items"] == [KIND_DASHBOARDS]
    assert seen["folders"] == 1


def test_clear_one_collection_keeps_the_other(qapp):
    s = _session(qapp)
    s.select_all(KIND_DASHBOARDS)
    s.select_all(KIND_ALERTS)

    s.clear(KIND_ALERTS)

    assert s.selected_count(KIND_ALERTS) == 0
    assert s.selected_count(KIND_DASHBOARDS) == 3
    assert s.total_selected == 3


def test_force_flag_enables_affordance_with_nothing_selected(qapp):
    s = _session(qapp)
    assert s.affordance().enabled is False

    s.set_config(AppConfig(force_enable_zip_export=True))

    assert s.affordance().enabled is True


def test_alert_tree_counts_follow_alert_collection(qapp):
    s = _session(qapp)

    counts = {n.node_id: n.count for n in s.folder_tree(KIND_ALERTS) if not n.synthetic}

    assert counts == {"1": 2, "2": 0}


def test_folder_tree_marks_selected_folder_per_kind(qapp):
    s = _session(qapp)
    s.set_selected_folder(KIND_DASHBOARDS, "2")

    dash_selected = [n.node_id for n in s.folder_tree(KIND_DASHBOARDS) if n.selected]
    alert_selected = [n.node_id for n in s.folder_tree(KIND_ALERTS) if n.selected]

    assert dash_selected == ["2"]
    assert alert_selected == ["all"]
