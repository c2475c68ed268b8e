"""Document: the structured result of decoding compiled CSS."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Union

from .values import Body, to_data


@dataclass
class Rule:
    """One TSS entry: a selector and its (possibly nested) body."""

    selector: str
    body: Body = field(default_factory=dict)
    unquote: list[str] = field(default_factory=list)

    def copy(self, selector: str | None = None) -> Rule:
        """Return an independent deep copy, optionally under another selector."""
        return Rule(
            selector=self.selector if selector is None else selector,
            body=copy.deepcopy(self.body),
            unquote=list(self.unquote),
        )


@dataclass
class Comment:
    text: str


Entry = Union[Rule, Comment]


@dataclass
class Document:
    """Ordered entries; order is output order."""

    entries: list[Entry] = field(default_factory=list)

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def rules(self) -> list[Rule]:
        return [e for e in self.entries if isinstance(e, Rule)]

    def to_data(self) -> list[dict]:
        """JSON-compatible view, used for the ``json`` stage notification."""
        data: list[dict] = []
        for entry in self.entries:
            if isinstance(entry, Comment):
                data.append({"comment": entry.text})
                continue
            item = {"selector": entry.selector, "body": to_data(entry.body)}
            if entry.unquote:
                item["unquote"] = list(entry.unquote)
            data.append(item)
        return data
