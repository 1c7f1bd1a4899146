from __future__ import annotations

import json
import re
from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from widgetforge_core import __main__ as entrypoint
from widgetforge_core.app import create_app
from widgetforge_core.exceptions import WidgetForgeError
from widgetforge_core.table import (
    CellRendererMapping,
    TableStore,
    TableView,
    TableViewColumn,
    TextCellRenderer,
)
from widgetforge_core.ui.router import register_page, unregister_page
from widgetforge_core.widgets import Button, Entry, Form
from widgetforge_core.widgets.button import BUTTON_JAVASCRIPT
from widgetforge_core.widgets.form import PROCESS_FIELD
from widgetforge_core.widgets.widget import BASE_STYLESHEET, set_base_stylesheet


def _contact_form() -> Form:
    form = Form("contact")
    name = Entry("name")
    name.required = True
    form.add(name)
    form.add(Button("send"))
    return form


def _price_list() -> Form:
    form = Form("prices")
    view = TableView("fruit", TableStore([{"name": "Apple"}, {"name": "Pear"}]))
    column = TableViewColumn("name", "Name")
    renderer = TextCellRenderer()
    column.add_renderer(renderer)
    column.add_mapping_to_renderer(renderer, CellRendererMapping("text", "name"))
    view.append_column(column)
    form.add(view)
    return form


@pytest.fixture
def client(monkeypatch) -> Iterator[TestClient]:
    monkeypatch.delenv("WIDGETFORGE_CONFIG", raising=False)
    register_page("contact", _contact_form, title="Contact us")
    register_page("prices", _price_list)
    try:
        with TestClient(create_app()) as test_client:
            yield test_client
    finally:
        unregister_page("contact")
        unregister_page("prices")


def test_healthz_ok(client: TestClient) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_get_page_renders_the_form_and_head_entries(client: TestClient) -> None:
    response = client.get("/ui/contact")
    assert response.status_code == 200
    assert "<title>Contact us</title>" in response.text
    assert (
        '<form id="contact" method="post" action="/ui/contact" class="widgetforge-form">'
    ) in response.text
    assert (
        '<link rel="stylesheet" type="text/css" '
        'href="packages/widgetforge/styles/widgetforge.css" />'
    ) in response.text
    assert f'<script type="text/javascript" src="{BUTTON_JAVASCRIPT}"></script>' in response.text
    assert response.text.count("widgetforge.css") == 1
    assert "widgetforge-message" not in response.text


def test_get_page_renders_tables(client: TestClient) -> None:
    response = client.get("/ui/prices")
    assert response.status_code == 200
    assert "<title>prices</title>" in response.text
    assert '<td class="name widgetforge-text-cell-renderer">Pear</td>' in response.text


def test_post_page_processes_and_shows_messages(client: TestClient) -> None:
    response = client.post(
        "/ui/contact", data={PROCESS_FIELD: "contact", "name": "", "send": "Submit"}
    )
    assert response.status_code == 200
    assert "widgetforge-message-error" in response.text
    assert "This field is required." in response.text


def test_post_page_keeps_submitted_values(client: TestClient) -> None:
    response = client.post("/ui/contact", data={PROCESS_FIELD: "contact", "name": "Ada & Co"})
    assert response.status_code == 200
    assert 'value="Ada &amp; Co"' in response.text
    assert "widgetforge-message" not in response.text


def test_unknown_page_is_not_found(client: TestClient) -> None:
    assert client.get("/ui/nope").status_code == 404


def test_root_redirects_to_the_first_page(client: TestClient) -> None:
    response = client.get("/", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "/ui/contact"


def test_widget_errors_become_server_errors(client: TestClient) -> None:
    def _broken() -> Form:
        raise WidgetForgeError("No renderer has been provided for this column.")

    register_page("broken", _broken)
    try:
        response = client.get("/ui/broken")
    finally:
        unregister_page("broken")

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "widget_error"


def test_uri_prefix_comes_from_config(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "widgetforge.json"
    path.write_text(json.dumps({"resources": {"uri_prefix": "/static/"}}), encoding="utf-8")
    monkeypatch.setenv("WIDGETFORGE_CONFIG", str(path))
    register_page("prefixed", _contact_form)

    try:
        with TestClient(create_app()) as client:
            response = client.get("/ui/prefixed")
    finally:
        unregister_page("prefixed")

    assert 'href="/static/packages/widgetforge/styles/widgetforge.css"' in response.text


def test_main_reads_bind_and_port_overrides(monkeypatch) -> None:
    monkeypatch.delenv("WIDGETFORGE_CONFIG", raising=False)
    monkeypatch.setenv("WIDGETFORGE_BIND", "0.0.0.0")
    monkeypatch.setenv("WIDGETFORGE_PORT", "9123")

    calls: list[tuple[str, int]] = []
    monkeypatch.setattr(
        entrypoint.uvicorn, "run", lambda app, host, port: calls.append((host, port))
    )

    entrypoint.main()
    assert calls == [("0.0.0.0", 9123)]


def _anonymous_form() -> Form:
    form = Form()
    entry = Entry()
    entry.required = True
    form.add(entry)
    return form


def test_generated_ids_survive_the_round_trip(client: TestClient) -> None:
    register_page("anonymous", _anonymous_form)
    try:
        page = client.get("/ui/anonymous").text
        form_id = re.search(r'<form id="([^"]+)"', page).group(1)
        entry_id = re.search(r'<input type="text" name="([^"]+)"', page).group(1)

        client.get("/ui/anonymous")
        response = client.post("/ui/anonymous", data={PROCESS_FIELD: form_id, entry_id: ""})
    finally:
        unregister_page("anonymous")

    assert response.status_code == 200
    assert f'<form id="{form_id}"' in response.text
    assert "This field is required." in response.text


def test_base_stylesheet_comes_from_config(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "widgetforge.json"
    path.write_text(
        json.dumps({"resources": {"base_stylesheet": "styles/site.css"}}), encoding="utf-8"
    )
    monkeypatch.setenv("WIDGETFORGE_CONFIG", str(path))
    register_page("styled", _contact_form)

    try:
        with TestClient(create_app()) as client:
            response = client.get("/ui/styled")
    finally:
        unregister_page("styled")
        set_base_stylesheet(BASE_STYLESHEET)

    assert 'href="styles/site.css"' in response.text
    assert "widgetforge.css" not in response.text
