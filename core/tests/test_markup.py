from __future__ import annotations

import io

from widgetforge_core.markup import (
    HtmlTag,
    display_inline_javascript,
    minimize_entities,
    quote_javascript_string,
)


def test_void_elements_self_close_and_skip_none_attributes() -> None:
    tag = HtmlTag("input", {"type": "text", "name": "q", "maxlength": None})
    assert str(tag) == '<input type="text" name="q" />'


def test_attribute_values_and_text_are_escaped() -> None:
    tag = HtmlTag("a", {"title": 'say "hi"'})
    tag.set_content("Fish & Chips")
    assert str(tag) == '<a title="say &#34;hi&#34;">Fish &amp; Chips</a>'


def test_xml_content_is_written_as_is() -> None:
    tag = HtmlTag("p")
    tag.set_content("<b>bold</b>", "text/xml")
    assert str(tag) == "<p><b>bold</b></p>"


def test_attributes_can_be_changed() -> None:
    tag = HtmlTag("div", {"id": "box"})
    tag.set_attribute("class", "wide")
    tag.remove_attribute("id")
    assert tag.get_attribute("class") == "wide"
    assert tag.get_attribute("id") is None
    assert str(tag) == '<div class="wide"></div>'


def test_minimize_entities() -> None:
    assert minimize_entities("<a & b>") == "&lt;a &amp; b&gt;"


def test_inline_javascript_is_wrapped_in_cdata() -> None:
    out = io.StringIO()
    display_inline_javascript("var a = 1;\n", out)
    assert out.getvalue() == (
        '<script type="text/javascript">\n//<![CDATA[\nvar a = 1;\n//]]>\n</script>'
    )

    empty = io.StringIO()
    display_inline_javascript("", empty)
    assert empty.getvalue() == ""


def test_quote_javascript_string() -> None:
    assert quote_javascript_string("it's") == "'it\\'s'"
    assert quote_javascript_string("a\nb") == "'a\\nb'"
    assert quote_javascript_string("</script>") == "'<\\/script>'"
