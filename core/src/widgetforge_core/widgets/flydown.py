"""Select controls.

Option values travel through the page as JSON in the ``value`` attribute of
each ``<option>``. Submitted values are decoded, checked against a JSON schema
and matched against the offered options before they reach widget state.
"""

from __future__ import annotations

import json
from typing import Any, TextIO

from jsonschema import Draft202012Validator

from widgetforge_core.exceptions import InvalidSerializedDataError
from widgetforge_core.i18n import _
from widgetforge_core.markup import HtmlTag
from widgetforge_core.message import ERROR, Message
from widgetforge_core.widgets.form import FormControl

SCALAR_VALUE_SCHEMA: dict[str, Any] = {
    "type": ["string", "number", "boolean", "null"],
}

OPTION_PATH_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": SCALAR_VALUE_SCHEMA,
}

DIVIDER_CLASS = "widgetforge-flydown-option-divider"


def serialize_value(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def deserialize_value(raw: str, validator: Draft202012Validator) -> Any:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidSerializedDataError("Submitted option value is not valid JSON.", data=raw) from e

    error = next(iter(validator.iter_errors(value)), None)
    if error is not None:
        raise InvalidSerializedDataError(
            f"Submitted option value has an unexpected shape: {error.message}", data=raw
        )
    return value


class FlydownOption:
    def __init__(self, value: Any, title: str, content_type: str = "text/plain") -> None:
        self.value = value
        self.title = title
        self.content_type = content_type

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r}, {self.title!r})"


class FlydownDivider(FlydownOption):
    """A disabled, unselectable option used to separate groups of options."""

    def __init__(self, value: Any = None, title: str = "─" * 10) -> None:
        super().__init__(value, title)


class Flydown(FormControl):
    """A single-select control rendered as a ``<select>``."""

    value_validator = Draft202012Validator(SCALAR_VALUE_SCHEMA)

    def __init__(self, id: str | None = None) -> None:
        super().__init__(id)
        self.options: list[FlydownOption] = []
        self.value: Any = None
        self.show_blank = True
        self.blank_title = _("choose one ...")
        self.required = False

    def add_option(self, value: Any, title: str, content_type: str = "text/plain") -> FlydownOption:
        option = FlydownOption(value, title, content_type)
        self.options.append(option)
        return option

    def add_options_by_dict(self, options: dict[Any, str]) -> None:
        for value, title in options.items():
            self.add_option(value, title)

    def add_divider(self, title: str = "─" * 10) -> None:
        self.options.append(FlydownDivider(title=title))

    def get_options(self) -> list[FlydownOption]:
        return list(self.options)

    def get_blank_option(self) -> FlydownOption:
        return FlydownOption(None, self.blank_title)

    def get_display_options(self) -> list[FlydownOption]:
        options = self.get_options()
        if self.show_blank:
            options.insert(0, self.get_blank_option())
        return options

    def process(self) -> None:
        super().process()

        if not self.is_submitted():
            return

        raw = self.get_submitted_value()
        if raw is None:
            return

        value = self.normalize_value(deserialize_value(raw, self.value_validator))
        if value is not None and not self._is_offered(value):
            raise InvalidSerializedDataError(
                "Submitted option value does not match any option.", data=raw
            )

        self.value = value
        if self.required and self.value is None:
            self.add_message(Message(_("This field is required."), ERROR))

    def normalize_value(self, value: Any) -> Any:
        return value

    def _is_offered(self, value: Any) -> bool:
        return any(
            not isinstance(option, FlydownDivider) and option.value == value
            for option in self.get_options()
        )

    def display(self, out: TextIO) -> None:
        if not self.visible:
            return

        super().display(out)

        options = self.get_display_options()

        # only show a select if there is more than one option
        if len(options) > 1:
            select_tag = HtmlTag(
                "select",
                {"name": self.id, "id": self.id, "class": self.get_css_class_string()},
            )
            if not self.is_sensitive():
                select_tag.set_attribute("disabled", "disabled")
            select_tag.open(out)
            selected = False
            for option in options:
                selected = self.display_option(option, out, selected)
            select_tag.close(out)
        elif len(options) == 1:
            self.display_single(options[0], out)

    def display_option(self, option: FlydownOption, out: TextIO, selected: bool) -> bool:
        """Write one ``<option>``; returns whether an option is now selected."""

        option_tag = HtmlTag("option", {"value": serialize_value(option.value)})

        if isinstance(option, FlydownDivider):
            option_tag.set_attribute("disabled", "disabled")
            option_tag.set_attribute("class", DIVIDER_CLASS)
        elif not selected and self.is_selected_value(option.value):
            option_tag.set_attribute("selected", "selected")
            selected = True

        option_tag.set_content(option.title, option.content_type)
        option_tag.display(out)
        return selected

    def is_selected_value(self, value: Any) -> bool:
        return self.value == value

    def display_single(self, option: FlydownOption, out: TextIO) -> None:
        title = HtmlTag("span", {"class": "widgetforge-flydown-single"})
        title.set_content(option.title, option.content_type)
        title.display(out)

        hidden = HtmlTag(
            "input",
            {"type": "hidden", "name": self.id, "value": serialize_value(option.value)},
        )
        hidden.display(out)

    def get_css_class_names(self) -> list[str]:
        return ["widgetforge-flydown"] + super().get_css_class_names()
