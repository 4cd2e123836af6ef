from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable

from exportdesk.core.models import COLLECTION_KINDS, KIND_ALERTS, KIND_DASHBOARDS
from exportdesk.utils.i18n import strings


@dataclass(frozen=True)
class ExportAffordance:
    dashboards: int = 0
    alerts: int = 0
    enabled: bool = False
    label: str = ""

    @property
    def total(self) -> int:
        return self.dashboards + self.alerts


def export_label(dashboards: int, alerts: int) -> str:
    if dashboards and alerts:
        return strings.tr("btn_export_both").format(dashboards=dashboards, alerts=alerts)
    if dashboards:
        return strings.tr("btn_export_dashboards").format(dashboards=dashboards)
    if alerts:
        return strings.tr("btn_export_alerts").format(alerts=alerts)
    return strings.tr("btn_export_selected")


class SelectionState:
    """Two independent uid sets, one per collection kind."""

    def __init__(self):
        self._sets: Dict[str, set[str]] = {kind: set() for kind in COLLECTION_KINDS}

    def _set_for(self, kind: str) -> set[str]:
        try:
            return self._sets[kind]
        except KeyError:
            raise ValueError(f"Unknown collection kind: {kind!r}") from None

    def toggle(self, kind: str, uid: str, selected: bool) -> bool:
        """Returns True when membership actually changed."""
        target = self._set_for(kind)
        uid = str(uid or "")
        if not uid:
            return False
        if selected:
            if uid in target:
                return False
            target.add(uid)
            return True
        if uid not in target:
            return False
        target.discard(uid)
        return True

    def select_all(self, kind: str, uids: Iterable[str]) -> int:
        target = self._set_for(kind)
        before = len(target)
        target.update(str(u) for u in uids if u)
        return len(target) - before

    def clear(self, kind: str) -> int:
        target = self._set_for(kind)
        removed = len(target)
        target.clear()
        return removed

    def is_selected(self, kind: str, uid: str) -> bool:
        return str(uid) in self._set_for(kind)

    def selected(self, kind: str) -> FrozenSet[str]:
        return frozenset(self._set_for(kind))

    def count(self, kind: str) -> int:
        return len(self._set_for(kind))

    @property
    def total(self) -> int:
        return sum(len(s) for s in self._sets.values())

    def affordance(self, *, force_enabled: bool = False) -> ExportAffordance:
        dashboards = self.count(KIND_DASHBOARDS)
        alerts = self.count(KIND_ALERTS)
        return ExportAffordance(
            dashboards=dashboards,
            alerts=alerts,
            enabled=bool(dashboards + alerts > 0 or force_enabled),
            label=export_label(dashboards, alerts),
        )
