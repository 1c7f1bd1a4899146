from __future__ import annotations

from collections.abc import Iterator
from typing import Any, TextIO

from jsonschema import Draft202012Validator

from widgetforge_core.exceptions import WidgetForgeError
from widgetforge_core.markup import HtmlTag
from widgetforge_core.widgets.flydown import (
    OPTION_PATH_SCHEMA,
    SCALAR_VALUE_SCHEMA,
    Flydown,
    FlydownDivider,
    FlydownOption,
)

INDENT = "  "


class TreeFlydownNode:
    """A node of a hierarchical option tree."""

    def __init__(self, value: Any = None, title: str = "", *, option: FlydownOption | None = None) -> None:
        self._option = option if option is not None else FlydownOption(value, title)
        self._children: list[TreeFlydownNode] = []
        self.parent: TreeFlydownNode | None = None

    @classmethod
    def divider(cls, title: str = "─" * 10) -> TreeFlydownNode:
        return cls(option=FlydownDivider(title=title))

    def add_child(self, child: TreeFlydownNode) -> TreeFlydownNode:
        child.parent = self
        self._children.append(child)
        return child

    def get_children(self) -> list[TreeFlydownNode]:
        return list(self._children)

    def get_option(self) -> FlydownOption:
        return self._option

    def __iter__(self) -> Iterator[TreeFlydownNode]:
        return iter(self._children)

    def __len__(self) -> int:
        """Number of nodes in this subtree, including this node."""

        return 1 + sum(len(child) for child in self._children)

    def __repr__(self) -> str:
        return f"TreeFlydownNode({self._option.value!r}, {self._option.title!r})"


class TreeFlydown(Flydown):
    """A flydown whose options come from a tree.

    The value of a tree flydown is the path of option values from the first
    level of the tree down to the selected node.
    """

    value_validator = Draft202012Validator(
        {"anyOf": [OPTION_PATH_SCHEMA, SCALAR_VALUE_SCHEMA]}
    )

    def __init__(self, id: str | None = None) -> None:
        super().__init__(id)
        self.tree = TreeFlydownNode(None, "root")

    def set_tree(self, tree: TreeFlydownNode) -> None:
        self.tree = tree

    def get_tree(self) -> TreeFlydownNode:
        return self.tree

    def get_options(self) -> list[FlydownOption]:
        options: list[FlydownOption] = []
        for child in self.tree.get_children():
            self._flatten(child, 0, [], options)
        return options

    def _flatten(
        self, node: TreeFlydownNode, level: int, path: list[Any], out: list[FlydownOption]
    ) -> None:
        option = node.get_option()
        node_path = [*path, option.value]
        title = INDENT * level + option.title
        if isinstance(option, FlydownDivider):
            out.append(FlydownDivider(node_path, title))
        else:
            out.append(FlydownOption(node_path, title, option.content_type))
        for child in node.get_children():
            self._flatten(child, level + 1, node_path, out)

    def get_blank_option(self) -> FlydownOption:
        return FlydownOption([None], self.blank_title)

    def is_selected_value(self, value: Any) -> bool:
        return self.normalize_value(value) == self.value

    def normalize_value(self, value: Any) -> Any:
        # the blank option carries the path [None]
        if value is None or value == [None]:
            return None
        if not isinstance(value, list):
            return [value]
        return value


class GroupedFlydown(TreeFlydown):
    """A tree flydown that displays first-level branches as ``<optgroup>``.

    The tree may be at most three levels deep including the root node.
    """

    max_depth = 3

    def set_tree(self, tree: TreeFlydownNode) -> None:
        self.check_tree(tree)
        super().set_tree(tree)

    def check_tree(self, tree: TreeFlydownNode, level: int = 0) -> None:
        if level > self.max_depth - 1:
            raise WidgetForgeError(
                "GroupedFlydown tree must not be more than 3 levels including the root node."
            )
        for child in tree.get_children():
            self.check_tree(child, level + 1)

    def get_display_tree(self) -> TreeFlydownNode:
        """Copy the tree for display, with a blank node first if show_blank is set."""

        display_tree = TreeFlydownNode(None, "root")
        if self.show_blank:
            display_tree.add_child(TreeFlydownNode(None, self.blank_title))

        for child in self.tree.get_children():
            self._build_display_tree(child, display_tree)

        return display_tree

    def _build_display_tree(self, tree: TreeFlydownNode, parent: TreeFlydownNode) -> None:
        option = tree.get_option()
        if isinstance(option, FlydownDivider):
            new_node = TreeFlydownNode(option=FlydownDivider(option.value, option.title))
        else:
            new_node = TreeFlydownNode(option=FlydownOption(option.value, option.title, option.content_type))
        parent.add_child(new_node)
        for child in tree.get_children():
            self._build_display_tree(child, new_node)

    def display(self, out: TextIO) -> None:
        if not self.visible:
            return

        # Widget bookkeeping only; option markup differs from Flydown's.
        super(Flydown, self).display(out)

        display_tree = self.get_display_tree()
        count = len(display_tree) - 1

        if count > 1:
            select_tag = HtmlTag(
                "select",
                {"name": self.id, "id": self.id, "class": self.get_css_class_string()},
            )
            if not self.is_sensitive():
                select_tag.set_attribute("disabled", "disabled")
            select_tag.open(out)
            selected = False
            for child in display_tree.get_children():
                selected = self.display_node(child, out, selected, level=1)
            select_tag.close(out)
        elif count == 1:
            only = display_tree.get_children()[0]
            option = only.get_option()
            self.display_single(FlydownOption([option.value], option.title, option.content_type), out)

    def display_node(
        self,
        node: TreeFlydownNode,
        out: TextIO,
        selected: bool,
        level: int = 0,
        path: list[Any] | None = None,
    ) -> bool:
        """Display a node and its children; returns whether an option is selected.

        Level 1 nodes are shown as optgroups if their value is None, they have
        children and they are not dividers.
        """

        children = node.get_children()
        option = node.get_option()
        node_path = [*(path or []), option.value]

        if (
            level == 1
            and children
            and option.value is None
            and not isinstance(option, FlydownDivider)
        ):
            optgroup_tag = HtmlTag("optgroup", {"label": option.title})
            optgroup_tag.open(out)
            for child in children:
                selected = self.display_node(child, out, selected, level + 1, node_path)
            optgroup_tag.close(out)
        else:
            if isinstance(option, FlydownDivider):
                path_option: FlydownOption = FlydownDivider(node_path, option.title)
            else:
                path_option = FlydownOption(node_path, option.title, option.content_type)
            selected = self.display_option(path_option, out, selected)

            for child in children:
                selected = self.display_node(child, out, selected, level + 1, node_path)

        return selected

    def get_css_class_names(self) -> list[str]:
        return ["widgetforge-grouped-flydown"] + super().get_css_class_names()
