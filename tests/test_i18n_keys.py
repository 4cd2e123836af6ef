import re
from pathlib import Path

from exportdesk.ui.controllers.load_controller import _ERROR_KEYS, _STAGE_KEYS
from exportdesk.utils.i18n import strings

ROOT = Path(__file__).resolve().parents[1]
_TR_CALL = re.compile(r'strings\.tr\(\s*"([a-z_]+)"')


def _sources():
    yield ROOT / "cli.py"
    yield ROOT / "main.py"
    yield from sorted((ROOT / "exportdesk").rglob("*.py"))


def test_every_literal_key_is_defined():
    missing = []
    for path in _sources():
        for key in _TR_CALL.findall(path.read_text(encoding="utf-8")):
            if not strings.has(key):
                missing.append(f"{path.relative_to(ROOT)}: {key}")
    assert missing == []


def test_stage_and_error_keys_are_defined():
    for key in list(_STAGE_KEYS.values()) + list(_ERROR_KEYS.values()):
        assert strings.has(key), key


def test_unknown_key_falls_back_to_key():
    assert strings.tr("no_such_key") == "no_such_key"


def test_unsupported_language_falls_back_to_english():
    try:
        strings.set_language("xx")
        assert strings.language == "en"
        assert strings.tr("nav_export") == "Export"
    finally:
        strings.set_language("en")
