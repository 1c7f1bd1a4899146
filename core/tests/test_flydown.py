from __future__ import annotations

import pytest

from widgetforge_core.exceptions import InvalidSerializedDataError
from widgetforge_core.widgets import Flydown, Form, TreeFlydown, TreeFlydownNode
from widgetforge_core.widgets.form import PROCESS_FIELD


def _fruit_flydown() -> Flydown:
    flydown = Flydown("fruit")
    flydown.add_option(1, "Apple")
    flydown.add_option(2, "Pear")
    return flydown


def _process(flydown: Flydown, raw: str | None) -> Form:
    form = Form("order")
    form.add(flydown)
    data = {PROCESS_FIELD: "order"}
    if raw is not None:
        data[flydown.id] = raw
    form.set_form_data(data)
    form.process()
    return form


def test_flydown_renders_a_select_with_a_blank_option() -> None:
    flydown = _fruit_flydown()
    flydown.value = 2

    assert flydown.render() == (
        '<select name="fruit" id="fruit" class="widgetforge-flydown">'
        '<option value="null">choose one ...</option>'
        '<option value="1">Apple</option>'
        '<option value="2" selected="selected">Pear</option>'
        "</select>"
    )


def test_blank_option_is_selected_without_a_value() -> None:
    flydown = _fruit_flydown()
    assert '<option value="null" selected="selected">' in flydown.render()


def test_string_values_are_json_encoded() -> None:
    flydown = Flydown("size")
    flydown.show_blank = False
    flydown.add_options_by_dict({"s": "Small", "l": "Large"})

    html = flydown.render()
    assert '<option value="&#34;s&#34;">Small</option>' in html
    assert '<option value="&#34;l&#34;">Large</option>' in html


def test_dividers_are_disabled() -> None:
    flydown = _fruit_flydown()
    flydown.add_divider()
    flydown.add_option(3, "Plum")

    assert (
        '<option value="null" disabled="disabled" class="widgetforge-flydown-option-divider">'
        in flydown.render()
    )


def test_single_option_is_shown_as_text() -> None:
    flydown = Flydown("only")
    flydown.show_blank = False
    flydown.add_option(7, "Seven")

    assert flydown.render() == (
        '<span class="widgetforge-flydown-single">Seven</span>'
        '<input type="hidden" name="only" value="7" />'
    )


def test_no_options_displays_nothing() -> None:
    flydown = Flydown("empty")
    flydown.show_blank = False
    assert flydown.render() == ""


def test_insensitive_flydown_is_disabled() -> None:
    flydown = _fruit_flydown()
    flydown.sensitive = False
    assert 'class="widgetforge-flydown widgetforge-insensitive" disabled="disabled"' in flydown.render()


def test_process_decodes_the_submitted_value() -> None:
    flydown = _fruit_flydown()
    _process(flydown, "2")
    assert flydown.value == 2


def test_process_accepts_the_blank_option() -> None:
    flydown = _fruit_flydown()
    flydown.value = 1
    _process(flydown, "null")
    assert flydown.value is None


def test_required_flydown_reports_blank() -> None:
    flydown = _fruit_flydown()
    flydown.required = True
    form = _process(flydown, "null")
    assert [m.primary_content for m in form.get_messages()] == ["This field is required."]


@pytest.mark.parametrize("raw", ["not json", '{"a": 1}', "[1, 2]", "5"])
def test_process_rejects_unexpected_data(raw: str) -> None:
    with pytest.raises(InvalidSerializedDataError) as exc:
        _process(_fruit_flydown(), raw)
    assert exc.value.data == raw


def test_tree_flydown_flattens_the_tree_into_paths() -> None:
    tree = TreeFlydownNode(None, "root")
    fruit = tree.add_child(TreeFlydownNode("fruit", "Fruit"))
    fruit.add_child(TreeFlydownNode("apple", "Apple"))
    tree.add_child(TreeFlydownNode("nuts", "Nuts"))

    flydown = TreeFlydown("food")
    flydown.set_tree(tree)

    assert [(o.value, o.title) for o in flydown.get_options()] == [
        (["fruit"], "Fruit"),
        (["fruit", "apple"], "  Apple"),
        (["nuts"], "Nuts"),
    ]
    assert len(tree) == 4


def test_tree_flydown_value_is_a_path() -> None:
    tree = TreeFlydownNode(None, "root")
    fruit = tree.add_child(TreeFlydownNode("fruit", "Fruit"))
    fruit.add_child(TreeFlydownNode("apple", "Apple"))

    flydown = TreeFlydown("food")
    flydown.set_tree(tree)
    _process(flydown, '["fruit","apple"]')

    assert flydown.value == ["fruit", "apple"]
    assert '<option value="[&#34;fruit&#34;,&#34;apple&#34;]" selected="selected">' in flydown.render()
