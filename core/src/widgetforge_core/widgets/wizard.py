from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TextIO, cast

from widgetforge_core.exceptions import InvalidClassError, WidgetForgeError
from widgetforge_core.head_entries import HtmlHeadEntrySet
from widgetforge_core.markup import HtmlTag
from widgetforge_core.message import Message
from widgetforge_core.ui_object import UIObject
from widgetforge_core.widgets.button import Button
from widgetforge_core.widgets.container import Container
from widgetforge_core.widgets.form import Form
from widgetforge_core.widgets.widget import Widget

logger = logging.getLogger(__name__)


class WizardStep(Container):
    def __init__(self, id: str | None = None, title: str = "") -> None:
        super().__init__(id)
        self.title = title


class WizardNavigation(Widget):
    """Decides which step a wizard form moves to after processing."""

    def get_wizard_form(self) -> WizardForm:
        if not isinstance(self.parent, WizardForm):
            raise WidgetForgeError(f"{type(self).__name__}: Must be a child of a WizardForm")
        return self.parent

    def get_next_step(self) -> int | None:
        return None


class WizardForm(Form):
    """A form split into steps; only the current step is displayed.

    Every child is a :class:`WizardStep`. The current step index travels in a
    hidden field so it survives the round trip.
    """

    def __init__(self, id: str | None = None) -> None:
        super().__init__(id)
        self.step = 0
        self.navigation: WizardNavigation | None = None

    @property
    def step_field(self) -> str:
        return f"{self.id}_step"

    def _adopt(self, widget: Widget) -> None:
        if not isinstance(widget, WizardStep):
            raise InvalidClassError("Only WizardStep objects may be added to a WizardForm.", value=widget)
        super()._adopt(widget)

    def set_navigation(self, navigation: WizardNavigation) -> None:
        if navigation.parent is not None:
            raise WidgetForgeError("Attempting to add a widget that already has a parent.")
        navigation.parent = self
        self.navigation = navigation

    def get_step_count(self) -> int:
        return len(self.children)

    def get_step_title(self, index: int) -> str:
        return cast(WizardStep, self.children[index]).title

    def get_current_step(self) -> WizardStep | None:
        if 0 <= self.step < len(self.children):
            return cast(WizardStep, self.children[self.step])
        return None

    def _iter_children(self) -> Iterator[UIObject]:
        children: list[UIObject] = list(self.children)
        if self.navigation is not None:
            children.append(self.navigation)
        return iter(children)

    def init(self) -> None:
        super().init()
        if self.navigation is not None:
            self.navigation.init()

    def process(self) -> None:
        # Form processing covers composites only; steps are processed selectively.
        Widget.process(self)

        if not self.is_submitted():
            return

        raw_step = self.get_submitted_value(self.step_field)
        if raw_step is not None and raw_step.isdigit():
            self.step = min(int(raw_step), max(self.get_step_count() - 1, 0))

        current = self.get_current_step()
        if current is not None:
            current.process()

        next_step = None
        if self.navigation is not None:
            self.navigation.process()
            next_step = self.navigation.get_next_step()

        if next_step is not None and not (current is not None and current.has_message()):
            logger.debug("Wizard %s moving from step %d to %d", self.id, self.step, next_step)
            self.step = next_step

    def display_children(self, out: TextIO) -> None:
        self.add_hidden_field(self.step_field, self.step)

        current = self.get_current_step()
        if current is not None:
            current.display(out)

        if self.navigation is not None:
            self.navigation.display(out)

    def get_messages(self) -> list[Message]:
        messages = super().get_messages()
        if self.navigation is not None:
            messages.extend(self.navigation.get_messages())
        return messages

    def get_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_html_head_entry_set()
        if self.navigation is not None:
            entry_set.add_entry_set(self.navigation.get_html_head_entry_set())
        return entry_set

    def get_available_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_available_html_head_entry_set()
        if self.navigation is not None:
            entry_set.add_entry_set(self.navigation.get_available_html_head_entry_set())
        return entry_set


class WizardNavigationSteps(WizardNavigation):
    """Navigation with one button per step.

    Earlier steps and the step right after the current one are clickable;
    the current step is shown as plain text.
    """

    def create_composite_widgets(self) -> None:
        form = self.get_wizard_form()
        for i in range(form.get_step_count()):
            button = Button(f"nav_step{i}")
            button.title = form.get_step_title(i)
            self.add_composite_widget(button, f"step{i}")

    def get_step_button(self, index: int) -> Button:
        return cast(Button, self.get_composite_widget(f"step{index}"))

    def get_next_step(self) -> int | None:
        next_step = None
        for i in range(self.get_wizard_form().get_step_count()):
            if self.get_step_button(i).has_been_clicked():
                next_step = i
        return next_step

    def display(self, out: TextIO) -> None:
        form = self.get_wizard_form()

        if not self.visible:
            return

        super().display(out)

        div = HtmlTag("div", {"class": "widgetforge-wizard-navigation-steps", "style": "float:right;"})
        div.open(out)

        for i in range(form.get_step_count()):
            button = self.get_step_button(i)
            if i == form.step:
                title = HtmlTag("span", {"class": "widgetforge-wizard-current-step"})
                title.set_content(button.get_title())
                title.display(out)
                out.write("<br />")
            elif i < form.step or i == form.step + 1:
                button.display(out)
                out.write("<br />")

        div.close(out)
