from __future__ import annotations

import io
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from widgetforge_core.head_entries import HtmlHeadEntrySet
from widgetforge_core.ui_object import unique_id_scope
from widgetforge_core.widgets.form import Form
from widgetforge_core.widgets.message_display import MessageDisplay

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(prefix="/ui", tags=["ui"])


@dataclass(frozen=True)
class Page:
    name: str
    factory: Callable[[], Form]
    title: str | None = None


_pages: dict[str, Page] = {}


def register_page(name: str, factory: Callable[[], Form], title: str | None = None) -> Page:
    page = Page(name=name, factory=factory, title=title)
    if name in _pages:
        logger.warning("Replacing registered page %s", name)
    _pages[name] = page
    return page


def unregister_page(name: str) -> None:
    _pages.pop(name, None)


def get_page_names() -> list[str]:
    return sorted(_pages)


def _get_page(name: str) -> Page:
    page = _pages.get(name)
    if page is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return page


def _get_uri_prefix(request: Request) -> str:
    config = getattr(request.app.state, "toolkit_config", None)
    resources = getattr(config, "resources", None)
    return getattr(resources, "uri_prefix", "") or ""


def _build_form(page: Page, request: Request) -> Form:
    form = page.factory()
    if not isinstance(form, Form):
        raise HTTPException(status_code=500, detail="Page factory did not return a form")
    if not form.action:
        form.action = request.url.path
    return form


def _render_page(request: Request, page: Page, form: Form) -> HTMLResponse:
    message_display = MessageDisplay()
    message_display.extend(form.get_messages())

    body = form.render()
    messages = message_display.render()

    entry_set = HtmlHeadEntrySet()
    entry_set.add_entry_set(message_display.get_html_head_entry_set())
    entry_set.add_entry_set(form.get_html_head_entry_set())
    head = io.StringIO()
    entry_set.display(head, _get_uri_prefix(request))

    context: dict[str, Any] = {
        "title": page.title or page.name,
        "head_entries": Markup(head.getvalue()),
        "messages": Markup(messages),
        "body": Markup(body),
    }
    return templates.TemplateResponse(request, "page.html", context)


@router.get("/{name}", response_class=HTMLResponse)
async def ui_page(request: Request, name: str) -> HTMLResponse:
    page = _get_page(name)
    # generated ids must come out the same when the page is rebuilt on POST
    with unique_id_scope():
        form = _build_form(page, request)
        form.init()
        return _render_page(request, page, form)


@router.post("/{name}", response_class=HTMLResponse)
async def ui_page_post(request: Request, name: str) -> HTMLResponse:
    page = _get_page(name)
    data = await request.form()

    with unique_id_scope():
        form = _build_form(page, request)
        form.set_form_data(data)
        form.init()
        form.process()

        if form.has_message():
            logger.info("Page %s submitted with %d message(s)", name, len(form.get_messages()))
        return _render_page(request, page, form)
