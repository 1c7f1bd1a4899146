from __future__ import annotations

import struct
from pathlib import Path

import pytest

from widgetforge_core import i18n
from widgetforge_core.config import I18nConfig
from widgetforge_core.widgets import Flydown


@pytest.fixture(autouse=True)
def _fresh_translations():
    i18n.reset()
    yield
    i18n.reset()


def _write_catalogue(locale_dir: Path, domain: str, messages: dict[str, str]) -> None:
    # smallest little-endian GNU catalogue gettext will parse
    keys = sorted(messages)
    ids = b""
    strs = b""
    entries = []
    for key in keys:
        msgid = key.encode("ascii")
        msgstr = messages[key].encode("ascii")
        entries.append((len(msgid), len(ids), len(msgstr), len(strs)))
        ids += msgid + b"\0"
        strs += msgstr + b"\0"

    header_size = 7 * 4
    ids_start = header_size + 16 * len(keys)
    strs_start = ids_start + len(ids)
    key_table = b"".join(
        struct.pack("<2I", length, ids_start + offset) for length, offset, _, _ in entries
    )
    value_table = b"".join(
        struct.pack("<2I", length, strs_start + offset) for _, _, length, offset in entries
    )
    header = struct.pack(
        "<7I", 0x950412DE, 0, len(keys), header_size, header_size + 8 * len(keys), 0, 0
    )

    path = locale_dir / "de" / "LC_MESSAGES" / f"{domain}.mo"
    path.parent.mkdir(parents=True)
    path.write_bytes(header + key_table + value_table + ids + strs)


def test_lookups_before_init_do_not_bind_the_catalogue() -> None:
    assert not i18n.is_initialized()
    assert i18n.gettext("Submit") == "Submit"
    assert not i18n.is_initialized()


def test_missing_catalogue_falls_back_to_the_message(tmp_path: Path) -> None:
    i18n.init(I18nConfig(locale_dir=str(tmp_path)))
    assert i18n.is_initialized()
    assert i18n._("This field is required.") == "This field is required."
    assert i18n.ngettext("%d row", "%d rows", 1) == "%d row"
    assert i18n.ngettext("%d row", "%d rows", 3) == "%d rows"


def test_configured_catalogue_is_used(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("LANGUAGE", "de")
    _write_catalogue(tmp_path, "widgetforge", {"Submit": "Absenden"})

    i18n.init(I18nConfig(locale_dir=str(tmp_path)))
    assert i18n.gettext("Submit") == "Absenden"


def test_configured_init_wins_over_earlier_lookups(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("LANGUAGE", "de")
    _write_catalogue(tmp_path, "forms", {"choose one ...": "bitte waehlen"})

    assert Flydown("colour").blank_title == "choose one ..."

    i18n.init(I18nConfig(domain="forms", locale_dir=str(tmp_path)))
    assert i18n.gettext("choose one ...") == "bitte waehlen"
    assert Flydown("size").blank_title == "bitte waehlen"


def test_init_is_idempotent(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("LANGUAGE", "de")
    _write_catalogue(tmp_path / "other", "widgetforge", {"Submit": "Absenden"})

    i18n.init(I18nConfig(locale_dir=str(tmp_path)))
    i18n.init(I18nConfig(locale_dir=str(tmp_path / "other")))

    assert i18n.is_initialized()
    assert i18n.gettext("Submit") == "Submit"
