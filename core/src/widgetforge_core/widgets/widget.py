"""Base class for all widgets.

Widget composition
------------------
Widgets built from several smaller widgets implement
:meth:`Widget.create_composite_widgets` and register each part with
:meth:`Widget.add_composite_widget`. As long as ``super().init()`` and
``super().process()`` are called, composite widgets are initialized and
processed automatically. They are never displayed by the default
:meth:`Widget.display`; subclasses fetch them with
:meth:`Widget.get_composite_widget` and display them where they belong.

Composite widgets are private to the owning widget. If parts need to be
public, extend :class:`~widgetforge_core.widgets.container.Container` instead.
"""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING, TextIO, cast

from widgetforge_core.config import ResourceConfig
from widgetforge_core.exceptions import DuplicateIdError, WidgetForgeError, WidgetNotFoundError
from widgetforge_core.head_entries import HtmlHeadEntrySet
from widgetforge_core.message import Message
from widgetforge_core.ui_object import UIObject, require_class

if TYPE_CHECKING:
    from widgetforge_core.widgets.container import Container

logger = logging.getLogger(__name__)

BASE_STYLESHEET = ResourceConfig().base_stylesheet

_base_stylesheet = BASE_STYLESHEET


def set_base_stylesheet(uri: str) -> None:
    """Set the style sheet every widget created from now on requests."""

    global _base_stylesheet
    _base_stylesheet = uri


class Widget(UIObject):
    requires_id = False

    def __init__(self, id: str | None = None) -> None:
        super().__init__()
        self.id = id
        self.sensitive = True
        self.stylesheet: str | None = None
        self.messages: list[Message] = []

        self._initialized = False
        self._processed = False
        self._displayed = False

        self._composite_widgets: dict[str, Widget] = {}
        self._composite_widgets_created = False

        self.add_style_sheet(_base_stylesheet)

    # lifecycle

    def init(self) -> None:
        """Initialize this widget.

        Called automatically by :meth:`process` and :meth:`display` when it
        has not run yet, so properties may be set freely between construction
        and initialization. Composite widgets are initialized as well.
        """

        if self.requires_id and self.id is None:
            self.id = self.get_unique_id()

        if self.stylesheet is not None:
            self.add_style_sheet(self.stylesheet)

        for widget in self.get_composite_widgets().values():
            widget.init()

        self._initialized = True

    def process(self) -> None:
        """Consume submitted form data into this widget's state."""

        if not self.is_initialized():
            logger.debug("Auto-initializing %r before process()", self)
            self.init()

        for widget in self.get_composite_widgets().values():
            widget.process()

        self._processed = True

    def display(self, out: TextIO) -> None:
        if not self.is_initialized():
            self.init()

        self._displayed = True

    def render(self) -> str:
        buf = io.StringIO()
        self.display(buf)
        return buf.getvalue()

    def is_initialized(self) -> bool:
        return self._initialized

    def is_processed(self) -> bool:
        return self._processed

    def is_displayed(self) -> bool:
        return self._displayed

    # head entries

    def display_html_head_entries(self, out: TextIO, uri_prefix: str = "") -> None:
        self.get_html_head_entry_set().display(out, uri_prefix)

    def get_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_html_head_entry_set()
        for widget in self.get_composite_widgets().values():
            entry_set.add_entry_set(widget.get_html_head_entry_set())
        return entry_set

    def get_available_html_head_entry_set(self) -> HtmlHeadEntrySet:
        entry_set = super().get_available_html_head_entry_set()
        for widget in self.get_composite_widgets().values():
            entry_set.add_entry_set(widget.get_available_html_head_entry_set())
        return entry_set

    # messages

    def add_message(self, message: Message) -> None:
        self.messages.append(message)

    def get_messages(self) -> list[Message]:
        messages = list(self.messages)
        for widget in self.get_composite_widgets().values():
            messages.extend(widget.get_messages())
        return messages

    def has_message(self) -> bool:
        if self.messages:
            return True
        return any(w.has_message() for w in self.get_composite_widgets().values())

    # state

    def is_sensitive(self) -> bool:
        # table columns and input cells sit between widgets without being widgets
        ancestor = self.get_first_ancestor(Widget)
        if isinstance(ancestor, Widget):
            return ancestor.is_sensitive() and self.sensitive
        return self.sensitive

    def get_focusable_html_id(self) -> str | None:
        """Id of the element that should receive focus, if there is one."""

        return None

    def replace_with_container(self, container: Container | None = None) -> Container:
        from widgetforge_core.widgets.container import Container

        parent = self.parent
        if parent is None:
            raise WidgetForgeError(
                "Widget does not have a parent, unable to replace this widget with a container."
            )
        if not isinstance(parent, Container):
            raise WidgetForgeError(
                "Only widgets inside a container can be replaced with a container."
            )

        if container is None:
            container = Container()

        parent.replace(self, container)
        container.add(self)
        return container

    def copy(self, id_suffix: str = "") -> Widget:
        clone = cast(Widget, super().copy(id_suffix))

        if id_suffix != "" and clone.id is not None:
            clone.id = clone.id + id_suffix

        clone.messages = list(self.messages)

        # Composite ids are usually derived from the owner's id, so they are
        # rebuilt on demand rather than copied.
        clone._composite_widgets = {}
        clone._composite_widgets_created = False
        return clone

    def print_widget_tree(self, out: TextIO, level: int = 0) -> None:
        ident = f"({self.id})" if self.id is not None else ""
        out.write(f"{'  ' * level}{type(self).__name__}{ident}\n")

    def get_css_class_names(self) -> list[str]:
        classes: list[str] = []
        if not self.is_sensitive():
            classes.append("widgetforge-insensitive")
        return classes + super().get_css_class_names()

    # composite widgets

    @property
    def composite_widgets_created(self) -> bool:
        return self._composite_widgets_created

    def create_composite_widgets(self) -> None:
        """Create composite widgets and register them with add_composite_widget()."""

    def add_composite_widget(self, widget: Widget, key: str) -> None:
        if key in self._composite_widgets:
            raise DuplicateIdError(
                f"A composite widget with the key '{key}' already exists in this widget.",
                id=key,
            )

        if widget.parent is not None:
            raise WidgetForgeError("Cannot add a composite widget that already has a parent.")

        self._composite_widgets[key] = widget
        widget.parent = self

    def get_composite_widget(self, key: str) -> Widget:
        self.confirm_composite_widgets()

        if key not in self._composite_widgets:
            raise WidgetNotFoundError(
                f"Composite widget with key of '{key}' not found in {type(self).__name__}. "
                "Make sure the composite widget was created and added to this widget.",
                id=key,
            )

        return self._composite_widgets[key]

    def get_composite_widgets(self, kind: type | tuple[type, ...] | None = None) -> dict[str, Widget]:
        """Get composite widgets keyed by composite key, in insertion order."""

        self.confirm_composite_widgets()

        if kind is None:
            return dict(self._composite_widgets)

        kind = require_class(kind)
        return {
            key: widget
            for key, widget in self._composite_widgets.items()
            if isinstance(widget, kind)
        }

    def confirm_composite_widgets(self) -> None:
        if not self._composite_widgets_created:
            # the hook may look up composites it has already added
            self._composite_widgets_created = True
            logger.debug("Creating composite widgets for %r", self)
            self.create_composite_widgets()
