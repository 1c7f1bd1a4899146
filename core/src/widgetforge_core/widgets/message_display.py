from __future__ import annotations

from typing import TextIO

from widgetforge_core.markup import HtmlTag
from widgetforge_core.message import Message
from widgetforge_core.widgets.widget import Widget


class MessageDisplay(Widget):
    """Displays a list of messages, for example those gathered from a form."""

    def __init__(self, id: str | None = None) -> None:
        super().__init__(id)
        self._display_messages: list[Message] = []

    def add(self, message: Message) -> None:
        self._display_messages.append(message)

    def extend(self, messages: list[Message]) -> None:
        self._display_messages.extend(messages)

    def get_message_count(self) -> int:
        return len(self._display_messages)

    def display(self, out: TextIO) -> None:
        if not self.visible or not self._display_messages:
            return

        super().display(out)

        div = HtmlTag("div", {"id": self.id, "class": self.get_css_class_string()})
        div.open(out)
        for message in self._display_messages:
            message.display(out)
        div.close(out)

    def get_css_class_names(self) -> list[str]:
        return ["widgetforge-message-display"] + super().get_css_class_names()
