from __future__ import annotations

from typing import TextIO

from widgetforge_core.exceptions import IntegerOverflowError
from widgetforge_core.i18n import _, ngettext
from widgetforge_core.markup import HtmlTag
from widgetforge_core.message import ERROR, Message
from widgetforge_core.widgets.form import FormControl

INTEGER_MAX = 2**63 - 1
INTEGER_MIN = -(2**63)


def parse_integer(text: str) -> int:
    """Parse a user-entered integer.

    Raises ValueError for non-numbers and IntegerOverflowError when the value
    does not fit in a signed 64-bit integer.
    """

    value = int(text.strip().replace(",", ""))
    if value > INTEGER_MAX:
        raise IntegerOverflowError(f"{text!r} is too large", sign=1)
    if value < INTEGER_MIN:
        raise IntegerOverflowError(f"{text!r} is too small", sign=-1)
    return value


class Entry(FormControl):
    """A single-line text input."""

    input_type = "text"

    def __init__(self, id: str | None = None) -> None:
        super().__init__(id)
        self.value: str | None = None
        self.maxlength: int | None = None
        self.size = 50
        self.required = False

    def process(self) -> None:
        super().process()

        if not self.is_submitted():
            return

        raw = self.get_submitted_value()
        self.value = raw if raw is not None else ""

        if self.required and self.value.strip() == "":
            self.add_message(Message(_("This field is required."), ERROR))
        elif self.maxlength is not None and len(self.value) > self.maxlength:
            text = ngettext(
                "This field must not be more than %d character.",
                "This field must not be more than %d characters.",
                self.maxlength,
            )
            self.add_message(Message(text % self.maxlength, ERROR))

    def display(self, out: TextIO) -> None:
        if not self.visible:
            return

        super().display(out)

        tag = HtmlTag(
            "input",
            {
                "type": self.input_type,
                "name": self.id,
                "id": self.id,
                "class": self.get_css_class_string(),
                "value": self.get_display_value(),
                "size": self.size,
                "maxlength": self.maxlength,
            },
        )
        if not self.is_sensitive():
            tag.set_attribute("disabled", "disabled")
        for name, value in self.get_data_attributes().items():
            tag.set_attribute(name, value)
        tag.display(out)

    def get_display_value(self) -> str:
        return "" if self.value is None else str(self.value)

    def get_css_class_names(self) -> list[str]:
        return ["widgetforge-entry"] + super().get_css_class_names()


class IntegerEntry(Entry):
    """A text input that holds a whole number."""

    def __init__(self, id: str | None = None) -> None:
        super().__init__(id)
        self.size = 10
        self.integer_value: int | None = None

    def process(self) -> None:
        super().process()

        if not self.is_submitted() or self.has_message():
            return

        if self.value is None or self.value.strip() == "":
            self.integer_value = None
            return

        try:
            self.integer_value = parse_integer(self.value)
        except IntegerOverflowError as e:
            if e.sign > 0:
                self.add_message(Message(_("This number is too large."), ERROR))
            else:
                self.add_message(Message(_("This number is too small."), ERROR))
        except ValueError:
            self.add_message(Message(_("This field must be a whole number."), ERROR))

    def get_css_class_names(self) -> list[str]:
        return ["widgetforge-integer-entry"] + super().get_css_class_names()
