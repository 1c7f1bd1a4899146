"""Page-level resources collected from a widget tree.

A resource referenced by several nodes is emitted once. Entries are keyed by
``(kind, identity)`` and keep the order in which they were first seen.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import ClassVar, TextIO

from markupsafe import escape


@dataclass(frozen=True)
class HtmlHeadEntry:
    kind: ClassVar[str] = "entry"

    @property
    def identity(self) -> str:
        raise NotImplementedError

    @property
    def key(self) -> tuple[str, str]:
        return (self.kind, self.identity)

    def display(self, out: TextIO, uri_prefix: str = "") -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class StyleSheetHtmlHeadEntry(HtmlHeadEntry):
    kind: ClassVar[str] = "stylesheet"
    uri: str

    @property
    def identity(self) -> str:
        return self.uri

    def display(self, out: TextIO, uri_prefix: str = "") -> None:
        href = escape(uri_prefix + self.uri)
        out.write(f'<link rel="stylesheet" type="text/css" href="{href}" />')


@dataclass(frozen=True)
class JavaScriptHtmlHeadEntry(HtmlHeadEntry):
    kind: ClassVar[str] = "javascript"
    uri: str

    @property
    def identity(self) -> str:
        return self.uri

    def display(self, out: TextIO, uri_prefix: str = "") -> None:
        src = escape(uri_prefix + self.uri)
        out.write(f'<script type="text/javascript" src="{src}"></script>')


@dataclass(frozen=True)
class ExternalJavaScriptHtmlHeadEntry(HtmlHeadEntry):
    kind: ClassVar[str] = "external-javascript"
    url: str

    @property
    def identity(self) -> str:
        return self.url

    def display(self, out: TextIO, uri_prefix: str = "") -> None:
        # External scripts are absolute; the local prefix does not apply.
        out.write(f'<script type="text/javascript" src="{escape(self.url)}"></script>')


@dataclass(frozen=True)
class InlineScriptHtmlHeadEntry(HtmlHeadEntry):
    kind: ClassVar[str] = "inline-script"
    script: str

    @property
    def identity(self) -> str:
        return self.script

    def display(self, out: TextIO, uri_prefix: str = "") -> None:
        out.write('<script type="text/javascript">')
        out.write(self.script)
        out.write("</script>")


@dataclass(frozen=True)
class CommentHtmlHeadEntry(HtmlHeadEntry):
    kind: ClassVar[str] = "comment"
    comment: str

    @property
    def identity(self) -> str:
        return self.comment

    def display(self, out: TextIO, uri_prefix: str = "") -> None:
        out.write(f"<!-- {self.comment.replace('--', '- -')} -->")


# Order in which kinds are written into <head>.
DISPLAY_ORDER: tuple[type[HtmlHeadEntry], ...] = (
    StyleSheetHtmlHeadEntry,
    ExternalJavaScriptHtmlHeadEntry,
    JavaScriptHtmlHeadEntry,
    InlineScriptHtmlHeadEntry,
    CommentHtmlHeadEntry,
)


class HtmlHeadEntrySet:
    def __init__(self, source: HtmlHeadEntrySet | Iterable[HtmlHeadEntry] | None = None) -> None:
        self._entries: dict[tuple[str, str], HtmlHeadEntry] = {}
        if source is not None:
            for entry in source:
                self.add_entry(entry)

    def add_entry(self, entry: HtmlHeadEntry) -> None:
        # first one wins; later duplicates keep the original position
        self._entries.setdefault(entry.key, entry)

    def add_entry_set(self, other: HtmlHeadEntrySet) -> None:
        for entry in other:
            self.add_entry(entry)

    def get_by_kind(self, kind: type[HtmlHeadEntry]) -> list[HtmlHeadEntry]:
        return [e for e in self._entries.values() if isinstance(e, kind)]

    def display(self, out: TextIO, uri_prefix: str = "") -> None:
        for kind in DISPLAY_ORDER:
            for entry in self.get_by_kind(kind):
                entry.display(out, uri_prefix)
                out.write("\n")

    def __iter__(self) -> Iterator[HtmlHeadEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry: object) -> bool:
        return isinstance(entry, HtmlHeadEntry) and entry.key in self._entries

    def __repr__(self) -> str:
        return f"HtmlHeadEntrySet({list(self._entries.values())!r})"
