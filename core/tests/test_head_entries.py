from __future__ import annotations

import io

from widgetforge_core.head_entries import (
    CommentHtmlHeadEntry,
    ExternalJavaScriptHtmlHeadEntry,
    HtmlHeadEntrySet,
    JavaScriptHtmlHeadEntry,
    StyleSheetHtmlHeadEntry,
)
from widgetforge_core.widgets import Container, Widget
from widgetforge_core.widgets.widget import BASE_STYLESHEET


def _stylesheets(entry_set: HtmlHeadEntrySet) -> list[str]:
    return [entry.uri for entry in entry_set.get_by_kind(StyleSheetHtmlHeadEntry)]


def test_entry_set_keeps_first_seen_order_without_duplicates() -> None:
    entry_set = HtmlHeadEntrySet()
    entry_set.add_entry(StyleSheetHtmlHeadEntry("a.css"))
    entry_set.add_entry(StyleSheetHtmlHeadEntry("b.css"))
    entry_set.add_entry(StyleSheetHtmlHeadEntry("a.css"))

    assert _stylesheets(entry_set) == ["a.css", "b.css"]
    assert len(entry_set) == 2
    assert StyleSheetHtmlHeadEntry("b.css") in entry_set


def test_same_uri_of_different_kinds_are_distinct() -> None:
    entry_set = HtmlHeadEntrySet()
    entry_set.add_entry(StyleSheetHtmlHeadEntry("shared"))
    entry_set.add_entry(JavaScriptHtmlHeadEntry("shared"))
    assert len(entry_set) == 2


def test_display_groups_entries_by_kind_and_applies_prefix() -> None:
    entry_set = HtmlHeadEntrySet()
    entry_set.add_entry(CommentHtmlHeadEntry("built by widgetforge"))
    entry_set.add_entry(JavaScriptHtmlHeadEntry("js/app.js"))
    entry_set.add_entry(ExternalJavaScriptHtmlHeadEntry("https://cdn.example.com/lib.js"))
    entry_set.add_entry(StyleSheetHtmlHeadEntry("styles/app.css"))

    out = io.StringIO()
    entry_set.display(out, uri_prefix="/static/")

    assert out.getvalue().splitlines() == [
        '<link rel="stylesheet" type="text/css" href="/static/styles/app.css" />',
        '<script type="text/javascript" src="https://cdn.example.com/lib.js"></script>',
        '<script type="text/javascript" src="/static/js/app.js"></script>',
        "<!-- built by widgetforge -->",
    ]


def _build_tree() -> tuple[Container, Container]:
    root = Container("root")

    first = Widget("first")
    first.add_style_sheet("shared.css")

    second = Widget("second")
    second.add_style_sheet("shared.css")
    second.add_java_script("second.js")

    hidden = Container("hidden")
    hidden.visible = False
    inner = Widget("inner")
    inner.add_style_sheet("inner.css")
    hidden.add(inner)

    root.add(first)
    root.add(second)
    root.add(hidden)
    return root, hidden


def test_hidden_subtrees_are_left_out_of_the_head_entry_set() -> None:
    root, _hidden = _build_tree()
    entry_set = root.get_html_head_entry_set()

    assert _stylesheets(entry_set) == [BASE_STYLESHEET, "shared.css"]
    assert [e.uri for e in entry_set.get_by_kind(JavaScriptHtmlHeadEntry)] == ["second.js"]


def test_available_head_entry_set_includes_hidden_subtrees() -> None:
    root, _hidden = _build_tree()
    entry_set = root.get_available_html_head_entry_set()

    assert _stylesheets(entry_set) == [BASE_STYLESHEET, "shared.css", "inner.css"]


def test_showing_a_subtree_adds_its_entries() -> None:
    root, hidden = _build_tree()
    hidden.visible = True
    assert "inner.css" in _stylesheets(root.get_html_head_entry_set())


def test_returned_sets_are_copies() -> None:
    widget = Widget("w")
    entry_set = widget.get_html_head_entry_set()
    entry_set.add_entry(StyleSheetHtmlHeadEntry("extra.css"))
    assert "extra.css" not in _stylesheets(widget.get_html_head_entry_set())
