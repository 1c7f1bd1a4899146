from __future__ import annotations

from typing import TextIO

from widgetforge_core.exceptions import UndefinedMessageTypeError
from widgetforge_core.markup import HtmlTag

NOTIFICATION = "notice"
WARNING = "warning"
ERROR = "error"
SYSTEM_ERROR = "system-error"

MESSAGE_TYPES = (NOTIFICATION, WARNING, ERROR, SYSTEM_ERROR)


class Message:
    """Feedback shown to the user, usually attached to a widget."""

    def __init__(
        self,
        primary_content: str,
        message_type: str = NOTIFICATION,
        *,
        secondary_content: str | None = None,
        content_type: str = "text/plain",
    ) -> None:
        if message_type not in MESSAGE_TYPES:
            raise UndefinedMessageTypeError(
                f"Message type '{message_type}' is not defined.", message_type=message_type
            )
        self.primary_content = primary_content
        self.type = message_type
        self.secondary_content = secondary_content
        self.content_type = content_type

    def is_error(self) -> bool:
        return self.type in (ERROR, SYSTEM_ERROR)

    def get_css_class(self) -> str:
        return f"widgetforge-message widgetforge-message-{self.type}"

    def display(self, out: TextIO) -> None:
        div = HtmlTag("div", {"class": self.get_css_class()})
        div.open(out)

        primary = HtmlTag("h3", {"class": "widgetforge-message-primary-content"})
        primary.set_content(self.primary_content, self.content_type)
        primary.display(out)

        if self.secondary_content:
            secondary = HtmlTag("div", {"class": "widgetforge-message-secondary-content"})
            secondary.set_content(self.secondary_content, self.content_type)
            secondary.display(out)

        div.close(out)

    def __repr__(self) -> str:
        return f"Message({self.primary_content!r}, {self.type!r})"
