"""Base node of the user-interface tree.

CSS classes and ids
-------------------
Every UI object may carry user-specified CSS classes. Subclasses prepend their
own hard-coded classes in :meth:`UIObject.get_css_class_names`; the rendered
``class`` attribute is the space-joined result of that method.
"""

from __future__ import annotations

import copy as _copy
import itertools
import weakref
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from widgetforge_core.exceptions import InvalidClassError, WidgetForgeError
from widgetforge_core.head_entries import (
    CommentHtmlHeadEntry,
    ExternalJavaScriptHtmlHeadEntry,
    HtmlHeadEntry,
    HtmlHeadEntrySet,
    InlineScriptHtmlHeadEntry,
    JavaScriptHtmlHeadEntry,
    StyleSheetHtmlHeadEntry,
)

# Counters are per concrete class, so ids are only unique within one class.
_process_unique_id_counters: dict[type, Iterator[int]] = {}
_scoped_unique_id_counters: ContextVar[dict[type, Iterator[int]] | None] = ContextVar(
    "widgetforge_unique_id_counters", default=None
)


@contextmanager
def unique_id_scope() -> Iterator[None]:
    """Count generated ids from 1 again inside the block.

    A tree built twice inside two separate scopes gets the same generated ids
    both times, which lets a page rebuilt for a POST match the page that was
    served on GET.
    """

    token = _scoped_unique_id_counters.set({})
    try:
        yield
    finally:
        _scoped_unique_id_counters.reset(token)


def require_class(kind: Any) -> type | tuple[type, ...]:
    if isinstance(kind, type):
        return kind
    if isinstance(kind, tuple) and kind and all(isinstance(k, type) for k in kind):
        return kind
    raise InvalidClassError("Expected a class to filter by", value=kind)


class UIObject:
    def __init__(self) -> None:
        self._parent_ref: weakref.ReferenceType[UIObject] | None = None
        self.visible = True
        self.classes: list[str] = []
        self.data_attributes: dict[str, str] = {}
        self._html_head_entry_set: HtmlHeadEntrySet | None = HtmlHeadEntrySet()

    @property
    def parent(self) -> UIObject | None:
        ref = getattr(self, "_parent_ref", None)
        return ref() if ref is not None else None

    @parent.setter
    def parent(self, value: UIObject | None) -> None:
        self._parent_ref = weakref.ref(value) if value is not None else None

    def _add_html_head_entry(self, entry: HtmlHeadEntry) -> None:
        entry_set = getattr(self, "_html_head_entry_set", None)
        if entry_set is None:
            raise WidgetForgeError(
                f"Child class '{type(self).__name__}' did not instantiate a HTML head "
                "entry set. This should be done in the constructor either by calling "
                "super().__init__() or by creating a new HTML head entry set."
            )
        entry_set.add_entry(entry)

    def add_style_sheet(self, stylesheet: str) -> None:
        self._add_html_head_entry(StyleSheetHtmlHeadEntry(stylesheet))

    def add_java_script(self, java_script: str) -> None:
        self._add_html_head_entry(JavaScriptHtmlHeadEntry(java_script))

    def add_external_java_script(self, url: str) -> None:
        self._add_html_head_entry(ExternalJavaScriptHtmlHeadEntry(url))

    def add_comment(self, comment: str) -> None:
        self._add_html_head_entry(CommentHtmlHeadEntry(comment))

    def add_inline_script(self, script: str) -> None:
        self._add_html_head_entry(InlineScriptHtmlHeadEntry(script))

    def get_first_ancestor(self, kind: type | tuple[type, ...]) -> UIObject | None:
        """Get the first object up the parent chain that is an instance of ``kind``."""

        kind = require_class(kind)
        ancestor = self.parent
        while ancestor is not None:
            if isinstance(ancestor, kind):
                return ancestor
            ancestor = ancestor.parent
        return None

    def _own_html_head_entry_set(self) -> HtmlHeadEntrySet:
        return HtmlHeadEntrySet(getattr(self, "_html_head_entry_set", None))

    def get_html_head_entry_set(self) -> HtmlHeadEntrySet:
        """Get the head entries needed by this object.

        Hidden objects need nothing, which keeps resources for hidden subtrees
        out of the page.
        """

        if self.is_visible():
            return self._own_html_head_entry_set()
        return HtmlHeadEntrySet()

    def get_available_html_head_entry_set(self) -> HtmlHeadEntrySet:
        """Get the head entries that MAY be needed by this object, even if hidden."""

        return self._own_html_head_entry_set()

    def is_visible(self) -> bool:
        parent = self.parent
        if isinstance(parent, UIObject):
            return self.visible and parent.is_visible()
        return self.visible

    def copy(self, id_suffix: str = "") -> UIObject:
        """Copy this object for use in another tree.

        The copy has no parent. Subclasses extend this to copy their subtrees
        and reset derived state.
        """

        clone = _copy.copy(self)
        clone._parent_ref = None
        clone.classes = list(self.classes)
        clone.data_attributes = dict(self.data_attributes)
        entry_set = getattr(self, "_html_head_entry_set", None)
        if entry_set is not None:
            clone._html_head_entry_set = HtmlHeadEntrySet(entry_set)
        return clone

    def get_css_class_names(self) -> list[str]:
        return list(self.classes)

    def get_css_class_string(self) -> str | None:
        class_names = self.get_css_class_names()
        if not class_names:
            return None
        return " ".join(class_names)

    def get_data_attributes(self) -> dict[str, str]:
        return {f"data-{key}": value for key, value in self.data_attributes.items()}

    def get_inline_javascript(self) -> str:
        return ""

    def get_unique_id(self) -> str:
        """Generate a new id; call once and store the result."""

        cls = type(self)
        counters = _scoped_unique_id_counters.get()
        if counters is None:
            counters = _process_unique_id_counters
        counter = counters.setdefault(cls, itertools.count(1))
        return f"{cls.__name__}{next(counter)}"

    def __repr__(self) -> str:
        # never walk up to the parent here
        ident = getattr(self, "id", None)
        if ident:
            return f"<{type(self).__name__} id={ident!r}>"
        return f"<{type(self).__name__}>"


class UIParent:
    """Mixin for UI objects that hold children."""

    def add_child(self, child: Any) -> None:
        raise NotImplementedError

    def _iter_children(self) -> Iterator[UIObject]:
        return iter(())

    def get_descendants(self, kind: type | tuple[type, ...] | None = None) -> list[UIObject]:
        if kind is not None:
            kind = require_class(kind)

        out: list[UIObject] = []
        for child in self._iter_children():
            if kind is None or isinstance(child, kind):
                out.append(child)
            if isinstance(child, UIParent):
                out.extend(child.get_descendants(kind))
        return out

    def get_first_descendant(self, kind: type | tuple[type, ...]) -> UIObject | None:
        kind = require_class(kind)
        for child in self._iter_children():
            if isinstance(child, kind):
                return child
            if isinstance(child, UIParent):
                found = child.get_first_descendant(kind)
                if found is not None:
                    return found
        return None
