from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TextIO

from widgetforge_core.exceptions import InvalidCharacterEncodingError
from widgetforge_core.markup import HtmlTag
from widgetforge_core.widgets.container import Container, DisplayableContainer
from widgetforge_core.widgets.widget import Widget

PROCESS_FIELD = "_widgetforge_form_process"


class Form(DisplayableContainer):
    """A ``<form>`` element and the source of submitted data for its widgets.

    Submitted data is any mapping of field name to value, for example a
    Starlette ``FormData``. The form counts as submitted when the hidden
    process field carries this form's id.
    """

    requires_id = True

    def __init__(self, id: str | None = None) -> None:
        super().__init__(id)
        self.action = ""
        self.method = "post"
        self._form_data: Mapping[str, Any] = {}
        self._hidden_fields: dict[str, str] = {}

    def set_form_data(self, data: Mapping[str, Any]) -> None:
        self._form_data = data

    def get_form_data(self) -> Mapping[str, Any]:
        return self._form_data

    def is_submitted(self) -> bool:
        if self.id is None:
            return False
        return self._form_data.get(PROCESS_FIELD) == self.id

    def get_submitted_value(self, name: str) -> str | None:
        """Get a submitted value decoded as text, or None when absent."""

        value = self._form_data.get(name)
        if value is None:
            return None
        if isinstance(value, bytes):
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidCharacterEncodingError(
                    f"Submitted value for '{name}' is not valid UTF-8."
                ) from e
        return str(value)

    def add_hidden_field(self, name: str, value: Any) -> None:
        self._hidden_fields[name] = str(value)

    def get_hidden_field(self, name: str) -> str | None:
        if not self.is_submitted():
            return None
        return self.get_submitted_value(name)

    def display(self, out: TextIO) -> None:
        if not self.visible:
            return

        Widget.display(self, out)

        form_tag = HtmlTag(
            "form",
            {
                "id": self.id,
                "method": self.method,
                "action": self.action,
                "class": self.get_css_class_string(),
            },
        )
        form_tag.open(out)
        self.display_children(out)
        self._display_hidden_fields(out)
        form_tag.close(out)

    def _display_hidden_fields(self, out: TextIO) -> None:
        div = HtmlTag("div", {"class": "widgetforge-hidden"})
        div.open(out)
        fields = {PROCESS_FIELD: self.id or "", **self._hidden_fields}
        for name, value in fields.items():
            HtmlTag("input", {"type": "hidden", "name": name, "value": value}).display(out)
        div.close(out)

    def get_css_class_names(self) -> list[str]:
        return ["widgetforge-form"] + Container.get_css_class_names(self)


class FormControl(Widget):
    """A widget that reads its state from the enclosing form."""

    requires_id = True

    def get_form(self) -> Form | None:
        form = self.get_first_ancestor(Form)
        return form if isinstance(form, Form) else None

    def is_submitted(self) -> bool:
        form = self.get_form()
        return form is not None and form.is_submitted()

    def get_submitted_value(self, name: str | None = None) -> str | None:
        form = self.get_form()
        if form is None:
            return None
        return form.get_submitted_value(name or self.id or "")

    def get_focusable_html_id(self) -> str | None:
        return self.id
