from __future__ import annotations

from typing import TextIO

from widgetforge_core.i18n import _
from widgetforge_core.markup import HtmlTag, display_inline_javascript, quote_javascript_string
from widgetforge_core.widgets.form import FormControl

BUTTON_JAVASCRIPT = "packages/widgetforge/javascript/widgetforge-button.js"


class Button(FormControl):
    """A submit button.

    When the processing throbber is shown, the client script disables the
    button on click and appends a hidden field with the button's name and
    value, so a click is still detected on the server.
    """

    def __init__(self, id: str | None = None) -> None:
        super().__init__(id)
        self.title: str | None = None
        self.clicked = False
        self.confirmation_message: str | None = None
        self.show_processing_throbber = False
        self.processing_message: str | None = None
        self.add_java_script(BUTTON_JAVASCRIPT)

    def process(self) -> None:
        super().process()
        self.clicked = self.is_submitted() and self.get_submitted_value() is not None

    def has_been_clicked(self) -> bool:
        return self.clicked

    def display(self, out: TextIO) -> None:
        if not self.visible:
            return

        super().display(out)

        tag = HtmlTag(
            "input",
            {
                "type": "submit",
                "name": self.id,
                "id": self.id,
                "value": self.get_title(),
                "class": self.get_css_class_string(),
            },
        )
        if not self.is_sensitive():
            tag.set_attribute("disabled", "disabled")
        for name, value in self.get_data_attributes().items():
            tag.set_attribute(name, value)
        tag.display(out)

        display_inline_javascript(self.get_inline_javascript(), out)

    def get_title(self) -> str:
        return self.title if self.title is not None else _("Submit")

    def get_inline_javascript(self) -> str:
        throbber = "true" if self.show_processing_throbber else "false"
        lines = [
            f"var {self.id}_obj = new WidgetForgeButton("
            f"{quote_javascript_string(self.id or '')}, {throbber});"
        ]
        if self.processing_message:
            lines.append(
                f"{self.id}_obj.setProcessingMessage("
                f"{quote_javascript_string(self.processing_message)});"
            )
        if self.confirmation_message:
            lines.append(
                f"{self.id}_obj.setConfirmationMessage("
                f"{quote_javascript_string(self.confirmation_message)});"
            )
        return "\n".join(lines)

    def get_css_class_names(self) -> list[str]:
        return ["widgetforge-button"] + super().get_css_class_names()
