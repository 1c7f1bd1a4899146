from __future__ import annotations

import io

import pytest

from widgetforge_core.exceptions import UndefinedMessageTypeError
from widgetforge_core.message import ERROR, NOTIFICATION, SYSTEM_ERROR, WARNING, Message
from widgetforge_core.widgets import MessageDisplay


def test_message_types() -> None:
    assert Message("Saved").type == NOTIFICATION
    assert not Message("Careful", WARNING).is_error()
    assert Message("Broken", ERROR).is_error()
    assert Message("Down", SYSTEM_ERROR).is_error()


def test_undefined_message_type() -> None:
    with pytest.raises(UndefinedMessageTypeError) as exc:
        Message("Hm", "shout")
    assert exc.value.message_type == "shout"


def test_message_markup() -> None:
    message = Message("Saved <draft>", ERROR, secondary_content="Try again")
    out = io.StringIO()
    message.display(out)

    assert out.getvalue() == (
        '<div class="widgetforge-message widgetforge-message-error">'
        '<h3 class="widgetforge-message-primary-content">Saved &lt;draft&gt;</h3>'
        '<div class="widgetforge-message-secondary-content">Try again</div>'
        "</div>"
    )


def test_xml_message_content_is_not_escaped() -> None:
    message = Message("<em>Saved</em>", content_type="text/xml")
    out = io.StringIO()
    message.display(out)
    assert "<em>Saved</em>" in out.getvalue()


def test_message_display() -> None:
    display = MessageDisplay("messages")
    assert display.render() == ""

    display.extend([Message("One"), Message("Two", WARNING)])
    html = display.render()

    assert display.get_message_count() == 2
    assert html.startswith('<div id="messages" class="widgetforge-message-display">')
    assert html.index("One") < html.index("Two")
